import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional

from marketplace.constants.payment_methods import (
    DEFAULT_PAYMENT_METHOD,
    PaymentChannel,
    PaymentMethod,
    channel_for,
)
from marketplace.schemas.cart_schemas import VendorGroup
from marketplace.schemas.checkout_schemas import BillingDetails, PaymentInstruction
from marketplace.schemas.site_config import SiteConfig

logger = logging.getLogger(__name__)

BANK_DETAILS_MISSING = "Admin bank details not configured."


def _as_method(value) -> Optional[PaymentMethod]:
    if value is None:
        return None
    try:
        return PaymentMethod(value)
    except ValueError:
        return None


def allowed_methods(enabled: Optional[Iterable[str]]) -> List[PaymentMethod]:
    """Seller's enabled methods in configured order, or bank transfer alone."""
    methods: List[PaymentMethod] = []

    for value in enabled or []:
        method = _as_method(value)
        if method is None:
            logger.warning(f"Ignoring unknown payment method '{value}'")
            continue
        if method not in methods:
            methods.append(method)

    return methods or [DEFAULT_PAYMENT_METHOD]


def resolve_payment_method(
    allowed: List[PaymentMethod],
    selected: Optional[str] = None,
    item_default: Optional[str] = None,
) -> PaymentMethod:
    """
    Buyer selection > item default > first allowed.

    A candidate that is not in the allowed set is skipped, never an error.
    """
    for candidate in (_as_method(selected), _as_method(item_default)):
        if candidate is not None and candidate in allowed:
            return candidate

    return allowed[0]


def resolve_group_methods(
    groups: List[VendorGroup],
    sellers: Mapping[str, object],
    selections: Optional[Mapping[str, str]] = None,
) -> List[VendorGroup]:
    selections = selections or {}
    resolved = []

    for group in groups:
        seller = sellers.get(group.seller_id)
        allowed = allowed_methods(getattr(seller, "enabled_payment_methods", None))

        # every line of a group shares a store; the first line carries its default
        item_default = group.items[0].payment_method if group.items else None

        method = resolve_payment_method(
            allowed,
            selected=selections.get(group.seller_id),
            item_default=item_default,
        )
        resolved.append(
            group.model_copy(update={"allowed_methods": allowed, "payment_method": method})
        )

    return resolved


def methods_by_seller(groups: List[VendorGroup]) -> Dict[str, PaymentMethod]:
    return {group.seller_id: group.payment_method for group in groups}


def payment_instruction(
    group: VendorGroup,
    config: SiteConfig,
    billing: Optional[BillingDetails] = None,
) -> PaymentInstruction:
    method = group.payment_method or DEFAULT_PAYMENT_METHOD
    channel = channel_for(method)

    if channel == PaymentChannel.BANK_TRANSFER:
        return PaymentInstruction(
            seller_id=group.seller_id,
            store_name=group.store_name,
            method=method,
            channel=channel,
            amount_due=group.total,
            bank_details=config.admin_bank_details or BANK_DETAILS_MISSING,
            message=(
                "Please initiate transfer to the company bank above. Vendors will ship "
                "items once the central hub verifies the payment."
            ),
        )

    if channel == PaymentChannel.PAY_ON_DELIVERY:
        collection_point = billing.collection_point if billing else ""
        return PaymentInstruction(
            seller_id=group.seller_id,
            store_name=group.store_name,
            method=method,
            channel=channel,
            amount_due=group.total,
            collection_point=collection_point,
            message=(
                "Our logistics agent will collect payment upon delivery. Please have "
                f"{group.total} available at the delivery location."
            ),
        )

    return PaymentInstruction(
        seller_id=group.seller_id,
        store_name=group.store_name,
        method=method,
        channel=channel,
        amount_due=group.total,
        message=f"Please proceed with the external {method.value.upper()} gateway for this vendor group.",
    )
