from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from marketplace.constants.dispute_status import DisputeStatus
from marketplace.models.types import UTCDateTime
from marketplace.utils.timestamps import utcnow


class Dispute(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    transaction_id: str = Field(foreign_key="settlement_transaction.id", index=True)
    buyer_id: Optional[str] = Field(default=None, index=True)
    seller_id: str = Field(index=True)

    reason: str
    description: str
    status: str = Field(default=DisputeStatus.OPEN.value)
    admin_note: Optional[str] = None

    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
