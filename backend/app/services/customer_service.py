from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from pydantic import EmailStr, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.validation import MAX_ID, RequestModel, Result, validate_model
from app.models.customer import Customer
from app.models.order import Order
from app.services import order_service


logger = logging.getLogger(__name__)

EMAIL_TAKEN = "The email has already been taken."


class CustomerCreate(RequestModel):
    name: str = Field(max_length=255)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = Field(None, max_length=255)

    @field_validator("email")
    @classmethod
    def _email_available(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        email_taken = (info.context or {}).get("email_taken")
        if value is not None and email_taken is not None and email_taken(value):
            raise PydanticCustomError("unique", EMAIL_TAKEN)
        return value


class CustomerUpdate(CustomerCreate):
    """Every field is optional, but name and email cannot be cleared."""

    name: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None

    @field_validator("name", "email")
    @classmethod
    def _not_null(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            raise PydanticCustomError("missing", "Field required")
        return value


def _email_taken(db: Session, value: str, ignore_id: Optional[int]) -> bool:
    query = db.query(Customer.id).filter(Customer.email == value)
    if ignore_id is not None:
        query = query.filter(Customer.id != ignore_id)
    return query.first() is not None


def validate_customer(
    db: Session, payload: Mapping[str, Any], ignore_id: Optional[int] = None, partial: bool = False
) -> Result[dict]:
    """With ``partial`` absent fields are skipped and present ones follow the create rules."""
    return validate_model(
        CustomerUpdate if partial else CustomerCreate,
        payload,
        context={"email_taken": lambda value: _email_taken(db, value, ignore_id)},
        partial=partial,
    )


def list_customers(db: Session) -> List[Customer]:
    return db.query(Customer).order_by(Customer.id).all()


def get_customer(db: Session, customer_id: int) -> Optional[Customer]:
    if not 0 < customer_id <= MAX_ID:
        return None
    return db.query(Customer).filter(Customer.id == customer_id).first()


def _commit_or_email_conflict(db: Session, customer: Customer) -> Result[Customer]:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return Result.failure({"email": [EMAIL_TAKEN]})
    db.refresh(customer)
    return Result.success(customer)


def create_customer(db: Session, payload: Mapping[str, Any]) -> Result[Customer]:
    validated = validate_customer(db, payload)
    if not validated.ok:
        return Result.failure(validated.errors)

    customer = Customer(**validated.value)
    db.add(customer)
    result = _commit_or_email_conflict(db, customer)
    if result.ok:
        logger.info("Created customer_id=%s", customer.id)
    return result


def update_customer(db: Session, customer: Customer, payload: Mapping[str, Any]) -> Result[Customer]:
    """Apply only the submitted fields; absent fields keep their current values."""
    validated = validate_customer(db, payload, ignore_id=customer.id, partial=True)
    if not validated.ok:
        return Result.failure(validated.errors)

    for field, value in validated.value.items():
        setattr(customer, field, value)
    result = _commit_or_email_conflict(db, customer)
    if result.ok:
        logger.info("Updated customer_id=%s fields=%s", customer.id, sorted(validated.value))
    return result


def delete_customer(db: Session, customer: Customer) -> None:
    """Delete the customer together with its orders in one transaction."""
    customer_id = customer.id
    removed = order_service.delete_orders_for_customer(db, customer_id)
    db.delete(customer)
    db.commit()
    logger.info("Deleted customer_id=%s with %s order(s)", customer_id, removed)


def get_customer_orders(db: Session, customer: Customer) -> List[Order]:
    return order_service.list_orders_for_customer(db, customer.id)
