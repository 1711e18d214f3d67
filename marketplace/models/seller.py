from datetime import datetime
from typing import List, Optional

from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field

from marketplace.models.types import UTCDateTime
from marketplace.utils.timestamps import utcnow


class Seller(SQLModel, table=True):
    id: str = Field(primary_key=True)
    name: str
    email: str = Field(index=True)
    store_name: str

    # store-wide default, individual products may carry their own
    payment_method: Optional[str] = None
    enabled_payment_methods: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    account_name: Optional[str] = None

    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
