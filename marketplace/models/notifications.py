from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import SQLModel, Field

from marketplace.models.types import UTCDateTime
from marketplace.utils.timestamps import utcnow


# ---------- ENUMS ----------

class RecipientRole(str, Enum):
    admin = "admin"
    seller = "seller"
    buyer = "buyer"


# ---------- MODEL ----------

class Notification(SQLModel, table=True):
    """In-app notice. There is no delivery channel besides the dashboard."""

    id: Optional[int] = Field(default=None, primary_key=True)

    recipient_role: RecipientRole
    recipient_id: Optional[str] = Field(default=None, index=True)

    trigger_source: str  # checkout / dispute
    related_id: str      # checkout id or dispute id

    title: str
    content: str
    is_read: bool = False

    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
