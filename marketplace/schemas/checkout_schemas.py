from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel

from marketplace.constants.checkout_status import CheckoutStep
from marketplace.constants.delivery import DeliveryType
from marketplace.constants.payment_methods import PaymentChannel, PaymentMethod
from marketplace.schemas.cart_schemas import CartLineItem, VendorGroup


REQUIRED_BILLING_FIELDS = ("full_name", "address", "phone")


class BillingDetails(BaseModel):
    full_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""

    def missing_fields(self) -> List[str]:
        return [
            name for name in REQUIRED_BILLING_FIELDS
            if not getattr(self, name).strip()
        ]

    @property
    def collection_point(self) -> str:
        parts = [self.address, self.city, self.state]
        return ", ".join(p.strip() for p in parts if p and p.strip())


class CheckoutStart(BaseModel):
    items: List[CartLineItem] = []
    buyer_id: Optional[str] = None


class BillingSubmit(BaseModel):
    billing: BillingDetails
    delivery_type: DeliveryType = DeliveryType.HOME_DELIVERY


class PaymentMethodSelect(BaseModel):
    method: PaymentMethod


class Settlement(BaseModel):
    amount: Decimal
    commission: Decimal
    tax: Decimal

    @property
    def net_amount(self) -> Decimal:
        return self.amount - self.commission - self.tax


class PaymentInstruction(BaseModel):
    seller_id: str
    store_name: str
    method: PaymentMethod
    channel: PaymentChannel
    amount_due: Decimal

    bank_details: Optional[str] = None
    collection_point: Optional[str] = None
    message: str


class CheckoutView(BaseModel):
    checkout_id: str
    step: CheckoutStep
    buyer_id: Optional[str] = None
    items: List[CartLineItem]
    groups: List[VendorGroup]
    total: Decimal
    billing: BillingDetails
    delivery_type: DeliveryType
    instructions: List[PaymentInstruction] = []


class ReceiptLine(BaseModel):
    transaction_id: str
    product_name: str
    store_name: str
    quantity: int
    amount: Decimal
    currency_symbol: str
    payment_method: str


class Receipt(BaseModel):
    checkout_id: str
    order_reference: str
    created_at: datetime
    delivery_type: DeliveryType
    delivery_message: str
    billing: BillingDetails
    lines: List[ReceiptLine]
    total: Decimal
