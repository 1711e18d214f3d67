from enum import Enum


class MarketplaceEvent(str, Enum):
    CHECKOUT_COMPLETED = "checkout_completed"
    DISPUTE_RAISED = "dispute_raised"
    DISPUTE_UPDATED = "dispute_updated"
