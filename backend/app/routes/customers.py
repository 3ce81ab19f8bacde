from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_current_user
from app.core.errors import NotFoundError, RequestValidationFailed
from app.core.serialization import RecordOut
from app.models.customer import Customer
from app.models.user import User
from app.routes.orders import OrderOut
from app.services import customer_service


router = APIRouter()


class CustomerOut(RecordOut):
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None


def _get_customer_or_404(db: Session, customer_id: int) -> Customer:
    customer = customer_service.get_customer(db, customer_id)
    if not customer:
        raise NotFoundError("Customer not found")
    return customer


@router.get("")
def list_customers(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    customers = customer_service.list_customers(db)
    return {
        "message": "Record found",
        "data": [CustomerOut.model_validate(c) for c in customers],
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def create_customer(payload: Optional[Dict[str, Any]] = Body(None), db: Session = Depends(get_db)):
    """Open route: creating a customer needs no token."""
    result = customer_service.create_customer(db, payload or {})
    if not result.ok:
        raise RequestValidationFailed(result.errors)
    return {
        "status": True,
        "message": "Customer created Successfully",
        "data": CustomerOut.model_validate(result.value),
    }


@router.get("/{customer_id}")
def show_customer(customer_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    customer = _get_customer_or_404(db, customer_id)
    return {
        "message": "Customer's Record found",
        "data": CustomerOut.model_validate(customer),
    }


@router.put("/{customer_id}")
def update_customer(
    customer_id: int,
    payload: Optional[Dict[str, Any]] = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Partial update: only the fields present in the body are validated and changed.
    """
    customer = _get_customer_or_404(db, customer_id)
    result = customer_service.update_customer(db, customer, payload or {})
    if not result.ok:
        raise RequestValidationFailed(result.errors)
    return {
        "status": True,
        "message": "Customer updated Successfully",
        "data": CustomerOut.model_validate(result.value),
    }


@router.delete("/{customer_id}")
def delete_customer(customer_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    customer = _get_customer_or_404(db, customer_id)
    customer_service.delete_customer(db, customer)
    return {"message": "Customer deleted successfully"}


@router.get("/{customer_id}/orders")
def show_customer_with_orders(
    customer_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    customer = _get_customer_or_404(db, customer_id)
    orders = customer_service.get_customer_orders(db, customer)
    return {
        "status": True,
        "message": "Customer and Orders retrieved successfully",
        "data": {
            "customer": CustomerOut.model_validate(customer),
            "orders": [OrderOut.model_validate(o) for o in orders],
        },
    }
