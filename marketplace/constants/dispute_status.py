from enum import Enum


class DisputeStatus(str, Enum):
    OPEN = "OPEN"
    UNDER_REVIEW = "UNDER_REVIEW"
    RESOLVED = "RESOLVED"
    REFUNDED = "REFUNDED"


class DisputeReason(str, Enum):
    FAKE_PRODUCT = "fake_product"
    NOT_DELIVERED = "not_delivered"
    DAMAGED = "damaged"
    SCAM = "scam"
    OTHER = "other"


ALLOWED_TRANSITIONS = {
    DisputeStatus.OPEN: [DisputeStatus.UNDER_REVIEW, DisputeStatus.RESOLVED, DisputeStatus.REFUNDED],
    DisputeStatus.UNDER_REVIEW: [DisputeStatus.RESOLVED, DisputeStatus.REFUNDED],
    DisputeStatus.RESOLVED: [],
    DisputeStatus.REFUNDED: [],
}
