from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class SiteConfig(BaseModel):
    commission_rate: Decimal = Field(ge=0, le=1)
    tax_enabled: bool = False
    tax_rate: Decimal = Field(default=Decimal("0"), ge=0, le=1)
    admin_bank_details: str = ""


class SiteConfigUpdate(BaseModel):
    # the settings row keeps rates to 4 places
    commission_rate: Optional[Decimal] = Field(default=None, ge=0, le=1, decimal_places=4)
    tax_enabled: Optional[bool] = None
    tax_rate: Optional[Decimal] = Field(default=None, ge=0, le=1, decimal_places=4)
    admin_bank_details: Optional[str] = None
