from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_current_user
from app.core.errors import NotFoundError, RequestValidationFailed
from app.core.serialization import RecordOut
from app.models.order import Order
from app.models.user import User
from app.services import order_service


router = APIRouter()


class OrderOut(RecordOut):
    customer_id: int
    order_date: date
    status: str
    # Serialized as a decimal string so no digit is lost
    total: Decimal


def _get_order_or_404(db: Session, order_id: int) -> Order:
    order = order_service.get_order(db, order_id)
    if not order:
        raise NotFoundError("Order not found")
    return order


@router.get("", response_model=List[OrderOut])
def list_orders(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return order_service.list_orders(db)


@router.post("", response_model=OrderOut, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: Optional[Dict[str, Any]] = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    result = order_service.create_order(db, payload or {})
    if not result.ok:
        raise RequestValidationFailed(result.errors)
    return result.value


@router.get("/{order_id}", response_model=OrderOut)
def show_order(order_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_order_or_404(db, order_id)


@router.put("/{order_id}", response_model=OrderOut)
def update_order(
    order_id: int,
    payload: Optional[Dict[str, Any]] = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    order = _get_order_or_404(db, order_id)
    result = order_service.update_order(db, order, payload or {})
    if not result.ok:
        raise RequestValidationFailed(result.errors)
    return result.value


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(order_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    order = _get_order_or_404(db, order_id)
    order_service.delete_order(db, order)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
