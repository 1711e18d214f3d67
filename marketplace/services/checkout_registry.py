import logging
import time
from typing import Dict, List, Optional

from marketplace.config import settings
from marketplace.constants.checkout_status import CheckoutStep
from marketplace.schemas.cart_schemas import CartLineItem
from marketplace.services.checkout_flow import CheckoutFlow

logger = logging.getLogger(__name__)


class CheckoutNotFound(KeyError):
    pass


class CheckoutRegistry:
    """
    In-process store of live checkout flows, keyed by checkout id.

    Finished flows are discarded by the routes once their outcome has been
    returned. Flows left idle longer than `ttl_seconds` are pruned whenever
    a new checkout starts; a flow waiting on payment confirmation is kept.
    """

    def __init__(self, ttl_seconds: Optional[float] = None):
        self.ttl_seconds = ttl_seconds
        self._flows: Dict[str, CheckoutFlow] = {}

    def start(self, cart: List[CartLineItem], buyer_id: Optional[str] = None) -> CheckoutFlow:
        self.prune()

        flow = CheckoutFlow(cart, buyer_id=buyer_id)
        self._flows[flow.checkout_id] = flow
        return flow

    def get(self, checkout_id: str) -> CheckoutFlow:
        try:
            return self._flows[checkout_id]
        except KeyError:
            raise CheckoutNotFound(checkout_id)

    def discard(self, checkout_id: str):
        self._flows.pop(checkout_id, None)

    def prune(self) -> int:
        if self.ttl_seconds is None:
            return 0

        now = time.monotonic()
        expired = [
            checkout_id for checkout_id, flow in self._flows.items()
            if flow.step != CheckoutStep.PROCESSING and now - flow.started_at >= self.ttl_seconds
        ]
        for checkout_id in expired:
            del self._flows[checkout_id]

        if expired:
            logger.info(f"Pruned {len(expired)} stale checkouts")
        return len(expired)

    def __len__(self):
        return len(self._flows)


checkout_registry = CheckoutRegistry(ttl_seconds=settings.checkout_ttl_seconds)


def get_checkout_registry() -> CheckoutRegistry:
    return checkout_registry
