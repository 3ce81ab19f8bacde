from decimal import Decimal

from sqlalchemy import Numeric, String
from sqlalchemy.types import TypeDecorator


class ExactDecimal(TypeDecorator):
    """NUMERIC that round-trips every digit.

    SQLite has no decimal storage and would squeeze values through a float,
    so there the value is kept as text.
    """

    impl = Numeric
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(String(80))
        return dialect.type_descriptor(Numeric())

    def process_bind_param(self, value, dialect):
        if value is not None and dialect.name == "sqlite":
            return str(Decimal(value))
        return value

    def process_result_value(self, value, dialect):
        if value is not None and dialect.name == "sqlite":
            return Decimal(value)
        return value
