from typing import List, Optional

from pydantic import BaseModel, EmailStr

from marketplace.constants.payment_methods import PaymentMethod


class SellerCreate(BaseModel):
    id: str
    name: str
    email: EmailStr
    store_name: str
    payment_method: Optional[PaymentMethod] = None
    enabled_payment_methods: List[PaymentMethod] = []

    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    account_name: Optional[str] = None


class SellerPaymentMethodsUpdate(BaseModel):
    enabled_payment_methods: List[PaymentMethod]
    payment_method: Optional[PaymentMethod] = None
