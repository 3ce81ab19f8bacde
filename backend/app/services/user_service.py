import logging
from typing import Any, Mapping, Optional

from pydantic import EmailStr, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.security import hash_password, verify_password
from app.core.validation import RequestModel, Result, validate_model
from app.models.user import User


logger = logging.getLogger(__name__)

EMAIL_TAKEN = "The email has already been taken."


class RegisterRequest(RequestModel):
    name: str = Field(max_length=255)
    email: EmailStr
    password: str = Field(min_length=8)

    @field_validator("email")
    @classmethod
    def _email_available(cls, value: str, info: ValidationInfo) -> str:
        email_taken = (info.context or {}).get("email_taken")
        if email_taken is not None and email_taken(value):
            raise PydanticCustomError("unique", EMAIL_TAKEN)
        return value


class LoginRequest(RequestModel):
    email: EmailStr
    password: str


def email_in_use(db: Session, value: str) -> bool:
    return db.query(User.id).filter(User.email == value).first() is not None


def register_user(db: Session, payload: Mapping[str, Any]) -> Result[User]:
    validated = validate_model(
        RegisterRequest,
        payload,
        context={"email_taken": lambda value: email_in_use(db, value)},
    )
    if not validated.ok:
        return Result.failure(validated.errors)

    data = validated.value
    user = User(
        name=data["name"],
        email=data["email"],
        hashed_password=hash_password(data["password"]),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration with the same email
        db.rollback()
        return Result.failure({"email": [EMAIL_TAKEN]})
    db.refresh(user)
    logger.info("Registered user_id=%s", user.id)
    return Result.success(user)


def validate_login(payload: Mapping[str, Any]) -> Result[dict]:
    return validate_model(LoginRequest, payload)


def authenticate(db: Session, email_address: str, password: str) -> Optional[User]:
    """Return the user only when both email and password match."""
    user = db.query(User).filter(User.email == email_address).first()
    if not user or not verify_password(password, user.hashed_password):
        logger.info("Failed login attempt for %s", email_address)
        return None
    return user
