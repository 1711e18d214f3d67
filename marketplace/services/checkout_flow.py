import asyncio
import logging
import time
from decimal import Decimal
from typing import Callable, Dict, List, Mapping, Optional
from uuid import uuid4

from marketplace.constants.checkout_status import (
    ALLOWED_TRANSITIONS,
    TERMINAL_STEPS,
    CheckoutStep,
)
from marketplace.constants.delivery import DeliveryType
from marketplace.constants.payment_methods import PaymentMethod
from marketplace.models.transaction import Transaction
from marketplace.schemas.cart_schemas import CartLineItem, VendorGroup
from marketplace.schemas.checkout_schemas import BillingDetails, CheckoutView
from marketplace.schemas.site_config import SiteConfig
from marketplace.services import cart_aggregator
from marketplace.services.errors import (
    EmptyCartError,
    IncompleteBillingError,
    InvalidTransitionError,
)
from marketplace.services.payment_processor import (
    PaymentConfirmation,
    ProcessingResult,
    await_confirmation,
)
from marketplace.services.payment_resolver import (
    methods_by_seller,
    payment_instruction,
    resolve_group_methods,
)
from marketplace.services.settlement_service import materialize_transactions

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[List[Transaction]], None]


class CheckoutFlow:
    """
    One buyer's checkout: review -> billing -> payment -> processing -> success.

    Steps only move forward. Cart edits are accepted during review only; the
    buyer's payment-method choice can change until processing starts.
    """

    def __init__(
        self,
        cart: List[CartLineItem],
        *,
        buyer_id: Optional[str] = None,
        checkout_id: Optional[str] = None,
    ):
        self.checkout_id = checkout_id or f"co-{uuid4().hex[:12]}"
        self.buyer_id = buyer_id
        self.cart: List[CartLineItem] = list(cart)
        self.step = CheckoutStep.REVIEW
        self.billing = BillingDetails()
        self.delivery_type = DeliveryType.HOME_DELIVERY
        self.selected_methods: Dict[str, PaymentMethod] = {}
        self.transactions: List[Transaction] = []
        self.last_result: Optional[ProcessingResult] = None
        self._confirmation: Optional[asyncio.Task] = None
        self.started_at = time.monotonic()

    # -------------------------
    # STATE
    # -------------------------

    @property
    def is_empty(self) -> bool:
        return not self.cart

    @property
    def view_step(self) -> CheckoutStep:
        if self.is_empty and self.step not in TERMINAL_STEPS:
            return CheckoutStep.EMPTY
        return self.step

    @property
    def is_finished(self) -> bool:
        return self.step in TERMINAL_STEPS

    def _transition(self, target: CheckoutStep):
        if target not in ALLOWED_TRANSITIONS[self.step]:
            raise InvalidTransitionError(self.step, target)

        logger.info(f"Checkout {self.checkout_id}: {self.step.value} -> {target.value}")
        self.step = target

    def _require_step(self, *steps: CheckoutStep, target: CheckoutStep):
        if self.step not in steps:
            raise InvalidTransitionError(self.step, target)

    # -------------------------
    # DERIVED DATA
    # -------------------------

    def vendor_groups(self, sellers: Mapping[str, object]) -> List[VendorGroup]:
        groups = cart_aggregator.group_by_vendor(self.cart)
        return resolve_group_methods(groups, sellers, self.selected_methods)

    def total(self) -> Decimal:
        return cart_aggregator.cart_total(self.cart)

    def view(self, sellers: Mapping[str, object], config: SiteConfig) -> CheckoutView:
        groups = self.vendor_groups(sellers)
        instructions = []

        if self.step in (CheckoutStep.PAYMENT, CheckoutStep.PROCESSING):
            instructions = [payment_instruction(g, config, self.billing) for g in groups]

        return CheckoutView(
            checkout_id=self.checkout_id,
            step=self.view_step,
            buyer_id=self.buyer_id,
            items=self.cart,
            groups=groups,
            total=self.total(),
            billing=self.billing,
            delivery_type=self.delivery_type,
            instructions=instructions,
        )

    # -------------------------
    # CART EDITS (review only)
    # -------------------------

    def add_item(self, item: CartLineItem):
        self._require_step(CheckoutStep.REVIEW, target=CheckoutStep.REVIEW)
        self.cart = cart_aggregator.add_item(self.cart, item)

    def update_quantity(self, product_id: str, size: Optional[str], delta: int):
        self._require_step(CheckoutStep.REVIEW, target=CheckoutStep.REVIEW)
        self.cart = cart_aggregator.update_quantity(self.cart, product_id, size, delta)

    def remove_item(self, product_id: str, size: Optional[str]):
        self._require_step(CheckoutStep.REVIEW, target=CheckoutStep.REVIEW)
        self.cart = cart_aggregator.remove_item(self.cart, product_id, size)

    def select_payment_method(self, seller_id: str, method: PaymentMethod):
        self._require_step(
            CheckoutStep.REVIEW, CheckoutStep.BILLING, CheckoutStep.PAYMENT,
            target=self.step,
        )
        self.selected_methods[seller_id] = PaymentMethod(method)

    # -------------------------
    # TRANSITIONS
    # -------------------------

    def proceed_to_billing(self):
        if self.is_empty:
            raise EmptyCartError("Your cart is empty.")
        self._transition(CheckoutStep.BILLING)

    def confirm_billing(
        self,
        billing: BillingDetails,
        delivery_type: DeliveryType = DeliveryType.HOME_DELIVERY,
    ):
        self._require_step(CheckoutStep.BILLING, target=CheckoutStep.PAYMENT)

        # keep whatever was typed, even when the gate refuses it
        self.billing = billing
        self.delivery_type = DeliveryType(delivery_type)

        missing = billing.missing_fields()
        if missing:
            logger.info(f"Checkout {self.checkout_id}: billing incomplete ({', '.join(missing)})")
            raise IncompleteBillingError(missing)

        self._transition(CheckoutStep.PAYMENT)

    async def authorize(
        self,
        *,
        sellers: Mapping[str, object],
        config: SiteConfig,
        confirmation: PaymentConfirmation,
        on_complete: CompletionCallback,
        timeout_seconds: Optional[float] = None,
        default_currency_symbol: str = "₦",
    ) -> ProcessingResult:
        """
        Run payment -> processing -> success/failed.

        Transactions are built from the methods and rates in effect when the
        confirmation resolves, handed to `on_complete`, then the cart is
        cleared. Any other outcome leaves the cart untouched.
        """
        self._transition(CheckoutStep.PROCESSING)

        self._confirmation = asyncio.ensure_future(confirmation.confirm(self.checkout_id))
        try:
            result = await await_confirmation(self._confirmation, timeout_seconds)
        finally:
            self._confirmation = None

        self.last_result = result

        if self.step != CheckoutStep.PROCESSING:
            # abandoned while waiting
            return result

        if not result.succeeded:
            logger.warning(f"Checkout {self.checkout_id}: processing ended with {result.outcome.value}")
            self._transition(CheckoutStep.FAILED)
            return result

        groups = self.vendor_groups(sellers)
        transactions = materialize_transactions(
            checkout_id=self.checkout_id,
            cart=self.cart,
            config=config,
            methods=methods_by_seller(groups),
            billing=self.billing,
            delivery_type=self.delivery_type,
            buyer_id=self.buyer_id,
            default_currency_symbol=default_currency_symbol,
        )

        try:
            on_complete(transactions)
        except Exception as e:
            logger.error(f"Checkout {self.checkout_id}: recording transactions failed: {e}")
            self._transition(CheckoutStep.FAILED)
            raise

        self.transactions = transactions
        self.cart = []
        self._transition(CheckoutStep.SUCCESS)
        return result

    def abandon(self):
        if self.is_finished:
            raise InvalidTransitionError(self.step, CheckoutStep.ABANDONED)

        if self._confirmation is not None and not self._confirmation.done():
            self._confirmation.cancel()

        self._transition(CheckoutStep.ABANDONED)
