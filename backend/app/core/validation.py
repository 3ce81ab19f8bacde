"""
Validación de payloads JSON.

Request bodies are checked by pydantic models. Validators never raise for bad
input: ``validate_model`` returns a ``Result`` holding either the cleaned data
or a mapping of field name to error messages, with every failing field
reported at once.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError, model_validator


T = TypeVar("T")

# Largest value a BIGINT primary key can hold
MAX_ID = 2**63 - 1

# Mirrors the usual trim-strings middleware: passwords are kept verbatim
UNTRIMMED_FIELDS = {"password", "password_confirmation"}

REQUIRED = "The {attribute} field is required."

MESSAGES = {
    "missing": REQUIRED,
    "string_type": "The {attribute} field must be a string.",
    "string_too_short": "The {attribute} field must be at least {min_length} characters.",
    "string_too_long": "The {attribute} field must not be greater than {max_length} characters.",
    # EmailStr reports syntax problems as value_error
    "value_error": "The {attribute} field must be a valid email address.",
    "int_type": "The {attribute} field must be an integer.",
    "int_parsing": "The {attribute} field must be an integer.",
    "int_from_float": "The {attribute} field must be an integer.",
    "date_type": "The {attribute} field must be a valid date.",
    "date_parsing": "The {attribute} field must be a valid date.",
    "date_from_datetime_parsing": "The {attribute} field must be a valid date.",
    "date_from_datetime_inexact": "The {attribute} field must be a valid date.",
    "decimal_type": "The {attribute} field must be a number.",
    "decimal_parsing": "The {attribute} field must be a number.",
    "finite_number": "The {attribute} field must be a number.",
    "decimal_max_digits": "The {attribute} field must not have more than {max_digits} digits.",
    "unique": "The {attribute} has already been taken.",
    "exists": "The selected {attribute} is invalid.",
}


@dataclass
class Result(Generic[T]):
    value: Optional[T] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, errors: Dict[str, List[str]]) -> "Result[T]":
        return cls(errors=errors)


def label(name: str) -> str:
    return name.replace("_", " ")


def _normalize(name: str, value: Any) -> Any:
    if not isinstance(value, str):
        return value
    if name not in UNTRIMMED_FIELDS:
        value = value.strip()
    return value or None


class RequestModel(BaseModel):
    """Base for request bodies: strings are trimmed and blanks become null."""

    @model_validator(mode="before")
    @classmethod
    def _trim_strings(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return {key: _normalize(key, value) for key, value in data.items()}


def error_message(error: Mapping[str, Any]) -> str:
    attribute = label(str(error["loc"][0])) if error["loc"] else "body"
    kind = error["type"]
    # null in a non-nullable field reads as "missing", like an absent key
    if kind != "missing" and error.get("input", ...) is None:
        kind = "missing"
    template = MESSAGES.get(kind)
    if template is None:
        return f"The {attribute} field is invalid."
    return template.format(attribute=attribute, **(error.get("ctx") or {}))


def fold_errors(exc: ValidationError) -> Dict[str, List[str]]:
    """Group pydantic errors by top-level field, first message per field."""
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        name = str(error["loc"][0]) if error["loc"] else "body"
        if name not in errors:
            errors[name] = [error_message(error)]
    return errors


def validate_model(
    model: Type[BaseModel],
    payload: Mapping[str, Any],
    *,
    context: Optional[Dict[str, Any]] = None,
    partial: bool = False,
) -> Result[dict]:
    """Validate ``payload`` with ``model``.

    ``context`` carries database lookups to the model's field validators.
    With ``partial`` only the submitted fields end up in the cleaned data.
    Keys the model does not declare are dropped.
    """
    try:
        instance = model.model_validate(payload, context=context)
    except ValidationError as exc:
        return Result.failure(fold_errors(exc))
    return Result.success(instance.model_dump(exclude_unset=partial))
