from enum import Enum


class PaymentMethod(str, Enum):
    BANK_TRANSFER = "bank_transfer"
    POD = "pod"
    STRIPE = "stripe"
    PAYSTACK = "paystack"
    FLUTTERWAVE = "flutterwave"


class PaymentChannel(str, Enum):
    BANK_TRANSFER = "bank_transfer"
    PAY_ON_DELIVERY = "pay_on_delivery"
    EXTERNAL_GATEWAY = "external_gateway"


DEFAULT_PAYMENT_METHOD = PaymentMethod.BANK_TRANSFER

PAYMENT_METHODS = [
    {"id": PaymentMethod.BANK_TRANSFER, "name": "Bank Transfer"},
    {"id": PaymentMethod.POD, "name": "Pay on Delivery"},
    {"id": PaymentMethod.STRIPE, "name": "Stripe"},
    {"id": PaymentMethod.PAYSTACK, "name": "Paystack"},
    {"id": PaymentMethod.FLUTTERWAVE, "name": "Flutterwave"},
]


def channel_for(method: PaymentMethod) -> PaymentChannel:
    if method == PaymentMethod.BANK_TRANSFER:
        return PaymentChannel.BANK_TRANSFER
    if method == PaymentMethod.POD:
        return PaymentChannel.PAY_ON_DELIVERY
    return PaymentChannel.EXTERNAL_GATEWAY
