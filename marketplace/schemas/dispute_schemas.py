from typing import Optional

from pydantic import BaseModel

from marketplace.constants.dispute_status import DisputeReason, DisputeStatus


class DisputeCreate(BaseModel):
    transaction_id: str
    buyer_id: Optional[str] = None
    reason: DisputeReason = DisputeReason.OTHER
    description: str


class DisputeStatusUpdate(BaseModel):
    status: DisputeStatus
    admin_note: Optional[str] = None
