from .user import Base, User
from .access_token import AccessToken
from .customer import Customer
from .order import Order

__all__ = ["Base", "User", "AccessToken", "Customer", "Order"]
