from datetime import datetime
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey

from app.models.types import ExactDecimal
from app.models.user import Base


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    # Orders go away with their customer (ON DELETE CASCADE)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    order_date = Column(Date, nullable=False)
    status = Column(String(255), nullable=False)
    # Any sign; digits are stored exactly
    total = Column(ExactDecimal, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
