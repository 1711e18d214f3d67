from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from marketplace.constants.payment_methods import PaymentMethod


class CartLineItem(BaseModel):
    # product snapshot taken when the buyer added it
    id: str
    name: str
    price: Decimal = Field(ge=0)
    stock: int = Field(ge=0)
    currency_symbol: Optional[str] = None
    seller_id: str
    store_name: str
    payment_method: Optional[PaymentMethod] = None

    selected_size: Optional[str] = None
    selected_image_url: Optional[str] = None
    quantity: int = Field(default=1, ge=1)

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity

    def same_line(self, product_id: str, size: Optional[str]) -> bool:
        return self.id == product_id and self.selected_size == size


class CartQuantityUpdate(BaseModel):
    delta: int
    selected_size: Optional[str] = None


class VendorGroup(BaseModel):
    seller_id: str
    store_name: str
    items: List[CartLineItem] = []
    total: Decimal = Decimal("0")

    allowed_methods: List[PaymentMethod] = []
    payment_method: Optional[PaymentMethod] = None
