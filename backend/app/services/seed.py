import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from app.core.security import hash_password
from app.models.customer import Customer
from app.models.order import Order
from app.models.user import User


logger = logging.getLogger(__name__)

DEMO_EMAIL = "owner@demo.com"
DEMO_PASSWORD = "secret123"


def seed_demo(db: Session) -> None:
    """Demo user plus one customer with two orders. No-op once the demo user exists."""
    if db.query(User).filter(User.email == DEMO_EMAIL).first():
        return

    db.add(User(name="Demo Owner", email=DEMO_EMAIL, hashed_password=hash_password(DEMO_PASSWORD)))

    customer = db.query(Customer).filter(Customer.email == "john@example.com").first()
    if not customer:
        customer = Customer(name="John Doe", email="john@example.com", phone="123-456-7890", address="123 Main St")
        db.add(customer)
        db.flush()
        db.add_all([
            Order(customer_id=customer.id, order_date=date(2024, 5, 30), status="completed", total=Decimal("100.00")),
            Order(customer_id=customer.id, order_date=date(2024, 6, 2), status="pending", total=Decimal("42.50")),
        ])
    db.commit()
    logger.info("Seeded demo data (%s)", DEMO_EMAIL)
