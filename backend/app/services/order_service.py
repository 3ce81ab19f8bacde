from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, List, Mapping, Optional

from pydantic import Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.validation import MAX_ID, RequestModel, Result, validate_model
from app.models.customer import Customer
from app.models.order import Order


logger = logging.getLogger(__name__)

INVALID_CUSTOMER = "The selected customer id is invalid."

# Upper bound on significant digits of a total, keeps it inside NUMERIC range
TOTAL_MAX_DIGITS = 38


class OrderRequest(RequestModel):
    customer_id: int
    order_date: date
    status: str = Field(max_length=255)
    total: Decimal = Field(max_digits=TOTAL_MAX_DIGITS)

    @field_validator("customer_id", mode="before")
    @classmethod
    def _customer_id_not_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise PydanticCustomError("int_type", "Input should be a valid integer")
        return value

    @field_validator("total", mode="before")
    @classmethod
    def _total_not_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise PydanticCustomError("decimal_type", "Decimal input should be an integer, float, string or Decimal object")
        return value

    @field_validator("customer_id")
    @classmethod
    def _customer_exists(cls, value: int, info: ValidationInfo) -> int:
        exists = (info.context or {}).get("customer_exists")
        if not 0 < value <= MAX_ID or (exists is not None and not exists(value)):
            raise PydanticCustomError("exists", INVALID_CUSTOMER)
        return value


def customer_exists(db: Session, customer_id: int) -> bool:
    return db.query(Customer.id).filter(Customer.id == customer_id).first() is not None


def validate_order(db: Session, payload: Mapping[str, Any]) -> Result[dict]:
    """Create and update share the same rules: all four fields are required."""
    return validate_model(
        OrderRequest,
        payload,
        context={"customer_exists": lambda customer_id: customer_exists(db, customer_id)},
    )


def list_orders(db: Session) -> List[Order]:
    return db.query(Order).order_by(Order.id).all()


def get_order(db: Session, order_id: int) -> Optional[Order]:
    if not 0 < order_id <= MAX_ID:
        return None
    return db.query(Order).filter(Order.id == order_id).first()


def list_orders_for_customer(db: Session, customer_id: int) -> List[Order]:
    return db.query(Order).filter(Order.customer_id == customer_id).order_by(Order.id).all()


def delete_orders_for_customer(db: Session, customer_id: int) -> int:
    """Stage deletion of every order of ``customer_id``; the caller commits."""
    return (
        db.query(Order)
        .filter(Order.customer_id == customer_id)
        .delete(synchronize_session=False)
    )


def _commit(db: Session, order: Order) -> Result[Order]:
    try:
        db.commit()
    except IntegrityError:
        # The customer was deleted between validation and commit
        db.rollback()
        return Result.failure({"customer_id": [INVALID_CUSTOMER]})
    db.refresh(order)
    return Result.success(order)


def create_order(db: Session, payload: Mapping[str, Any]) -> Result[Order]:
    validated = validate_order(db, payload)
    if not validated.ok:
        return Result.failure(validated.errors)

    order = Order(**validated.value)
    db.add(order)
    result = _commit(db, order)
    if result.ok:
        logger.info("Created order_id=%s for customer_id=%s", order.id, order.customer_id)
    return result


def update_order(db: Session, order: Order, payload: Mapping[str, Any]) -> Result[Order]:
    validated = validate_order(db, payload)
    if not validated.ok:
        return Result.failure(validated.errors)

    for field, value in validated.value.items():
        setattr(order, field, value)
    result = _commit(db, order)
    if result.ok:
        logger.info("Updated order_id=%s", order.id)
    return result


def delete_order(db: Session, order: Order) -> None:
    order_id = order.id
    db.delete(order)
    db.commit()
    logger.info("Deleted order_id=%s", order_id)
