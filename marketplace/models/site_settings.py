from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlmodel import SQLModel, Field

from marketplace.models.types import UTCDateTime
from marketplace.utils.timestamps import utcnow


class SiteSettings(SQLModel, table=True):
    id: Optional[int] = Field(default=1, primary_key=True)

    commission_rate: Decimal = Field(max_digits=6, decimal_places=4)
    tax_enabled: bool = False
    tax_rate: Decimal = Field(max_digits=6, decimal_places=4)
    admin_bank_details: str = ""

    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
