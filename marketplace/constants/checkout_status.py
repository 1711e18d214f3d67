from enum import Enum


class CheckoutStep(str, Enum):
    EMPTY = "empty"
    REVIEW = "review"
    BILLING = "billing"
    PAYMENT = "payment"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"
    ABANDONED = "abandoned"


ALLOWED_TRANSITIONS = {
    CheckoutStep.REVIEW: [CheckoutStep.BILLING, CheckoutStep.ABANDONED],
    CheckoutStep.BILLING: [CheckoutStep.PAYMENT, CheckoutStep.ABANDONED],
    CheckoutStep.PAYMENT: [CheckoutStep.PROCESSING, CheckoutStep.ABANDONED],
    CheckoutStep.PROCESSING: [CheckoutStep.SUCCESS, CheckoutStep.FAILED, CheckoutStep.ABANDONED],
    CheckoutStep.SUCCESS: [],
    CheckoutStep.FAILED: [],
    CheckoutStep.ABANDONED: [],
}

TERMINAL_STEPS = {CheckoutStep.SUCCESS, CheckoutStep.FAILED, CheckoutStep.ABANDONED}
