from .events import MarketplaceEvent
from .dispatcher import dispatch_event

__all__ = [
    "MarketplaceEvent",
    "dispatch_event",
]
