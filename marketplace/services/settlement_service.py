import logging
import time
from decimal import Decimal
from typing import List, Mapping, Optional
from uuid import uuid4

from marketplace.constants.delivery import DeliveryType
from marketplace.constants.payment_methods import DEFAULT_PAYMENT_METHOD, PaymentMethod
from marketplace.models.transaction import Transaction
from marketplace.schemas.cart_schemas import CartLineItem
from marketplace.schemas.checkout_schemas import BillingDetails, Settlement
from marketplace.schemas.site_config import SiteConfig
from marketplace.utils.timestamps import utcnow

logger = logging.getLogger(__name__)


def compute_settlement(item: CartLineItem, config: SiteConfig) -> Settlement:
    amount = item.price * item.quantity
    commission = amount * config.commission_rate
    tax = amount * config.tax_rate if config.tax_enabled else Decimal("0")

    return Settlement(amount=amount, commission=commission, tax=tax)


def new_transaction_id() -> str:
    return f"tr-{int(time.time() * 1000)}-{uuid4().hex[:9]}"


def materialize_transactions(
    *,
    checkout_id: str,
    cart: List[CartLineItem],
    config: SiteConfig,
    methods: Mapping[str, PaymentMethod],
    billing: BillingDetails,
    delivery_type: DeliveryType,
    buyer_id: Optional[str] = None,
    default_currency_symbol: str = "₦",
) -> List[Transaction]:
    """
    One Transaction per cart line.

    `methods` maps seller id to the payment method in effect right now;
    rates are read from `config` once and frozen into each record.
    """
    created_at = utcnow()
    billing_snapshot = billing.model_dump()
    transactions = []

    for position, item in enumerate(cart):
        settlement = compute_settlement(item, config)
        method = methods.get(item.seller_id, DEFAULT_PAYMENT_METHOD)

        transactions.append(
            Transaction(
                id=new_transaction_id(),
                checkout_id=checkout_id,
                product_id=item.id,
                product_name=item.name,
                selected_size=item.selected_size,
                position=position,
                quantity=item.quantity,
                unit_price=item.price,
                seller_id=item.seller_id,
                store_name=item.store_name,
                buyer_id=buyer_id,
                amount=settlement.amount,
                commission=settlement.commission,
                tax=settlement.tax,
                currency_symbol=item.currency_symbol or default_currency_symbol,
                payment_method=PaymentMethod(method).value,
                delivery_type=DeliveryType(delivery_type).value,
                billing_details=dict(billing_snapshot),
                created_at=created_at,
            )
        )

    logger.info(f"Materialized {len(transactions)} transactions for checkout {checkout_id}")
    return transactions
