from decimal import Decimal
from typing import Dict

from pydantic import BaseModel


class MethodTotals(BaseModel):
    count: int = 0
    gross: Decimal = Decimal("0")


class SellerFinanceSummary(BaseModel):
    seller_id: str
    transaction_count: int
    gross: Decimal
    commission: Decimal
    tax: Decimal
    net: Decimal
    by_payment_method: Dict[str, MethodTotals]
