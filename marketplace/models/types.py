from decimal import Decimal

from sqlalchemy import DateTime, String
from sqlalchemy.types import TypeDecorator


class ExactDecimal(TypeDecorator):
    """
    Decimal stored as its string form.

    Numeric columns quantize to a fixed scale (and SQLite keeps them as
    floats), which would round settlement figures on the way back out.
    """

    impl = String(64)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(str(value)))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


UTCDateTime = DateTime(timezone=True)
