from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field

from marketplace.models.types import ExactDecimal, UTCDateTime
from marketplace.utils.timestamps import utcnow


class Transaction(SQLModel, table=True):
    """Settlement record for one cart line. Rows are never updated or deleted."""

    __tablename__ = "settlement_transaction"

    id: str = Field(primary_key=True)
    checkout_id: str = Field(index=True)

    product_id: str = Field(index=True)
    product_name: str
    selected_size: Optional[str] = None
    position: int = 0
    quantity: int
    unit_price: Decimal = Field(sa_type=ExactDecimal)

    seller_id: str = Field(index=True)
    store_name: str
    buyer_id: Optional[str] = Field(default=None, index=True)

    amount: Decimal = Field(sa_type=ExactDecimal)
    commission: Decimal = Field(sa_type=ExactDecimal)
    tax: Decimal = Field(sa_type=ExactDecimal)

    currency_symbol: str
    payment_method: str
    delivery_type: str
    billing_details: dict = Field(default_factory=dict, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
