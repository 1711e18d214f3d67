import logging
from decimal import Decimal
from typing import List, Optional

from sqlmodel import Session, select

from marketplace.constants.delivery import DeliveryType
from marketplace.models.transaction import Transaction
from marketplace.notifications import MarketplaceEvent, dispatch_event
from marketplace.schemas.checkout_schemas import BillingDetails, Receipt, ReceiptLine
from marketplace.schemas.transaction_schemas import MethodTotals, SellerFinanceSummary

logger = logging.getLogger(__name__)

DELIVERY_MESSAGES = {
    DeliveryType.HOME_DELIVERY: (
        "Our logistics team has been notified. Your items will be dispatched to your "
        "fulfillment address within 24-48 hours."
    ),
    DeliveryType.INSTANT_PICKUP: (
        "An authorization code has been sent to your dashboard. Visit the vendor's "
        "pickup point with your ID to collect your items."
    ),
}


def record_transactions(session: Session, transactions: List[Transaction]) -> List[Transaction]:
    """
    Append a completed checkout's transactions to history.

    Ids already present are skipped; a replay that adds nothing writes no
    notifications either.
    """
    if not transactions:
        return []

    ids = [t.id for t in transactions]
    existing = set(session.exec(select(Transaction.id).where(Transaction.id.in_(ids))).all())

    added = [t for t in transactions if t.id not in existing]
    if not added:
        logger.info(f"Checkout {transactions[0].checkout_id} already recorded")
        return []

    for t in added:
        session.add(t)

    checkout_id = transactions[0].checkout_id
    total = sum((t.amount for t in transactions), Decimal("0"))

    dispatch_event(
        event=MarketplaceEvent.CHECKOUT_COMPLETED,
        session=session,
        related_id=checkout_id,
        title="New order",
        content=f"Checkout {checkout_id} settled {len(transactions)} item(s), total {total}",
        seller_ids=[t.seller_id for t in transactions],
        buyer_id=transactions[0].buyer_id,
    )

    session.commit()
    logger.info(f"Recorded {len(added)} transactions for checkout {checkout_id}")
    return added


def transactions_query(
    *,
    buyer_id: Optional[str] = None,
    seller_id: Optional[str] = None,
    checkout_id: Optional[str] = None,
):
    query = select(Transaction)

    if buyer_id:
        query = query.where(Transaction.buyer_id == buyer_id)
    if seller_id:
        query = query.where(Transaction.seller_id == seller_id)
    if checkout_id:
        query = query.where(Transaction.checkout_id == checkout_id)

    return query.order_by(Transaction.created_at.desc(), Transaction.position)


def seller_finance_summary(session: Session, seller_id: str) -> SellerFinanceSummary:
    transactions = session.exec(transactions_query(seller_id=seller_id)).all()

    gross = sum((Decimal(t.amount) for t in transactions), Decimal("0"))
    commission = sum((Decimal(t.commission) for t in transactions), Decimal("0"))
    tax = sum((Decimal(t.tax) for t in transactions), Decimal("0"))

    by_method = {}
    for t in transactions:
        totals = by_method.setdefault(t.payment_method, MethodTotals())
        totals.count += 1
        totals.gross += Decimal(t.amount)

    return SellerFinanceSummary(
        seller_id=seller_id,
        transaction_count=len(transactions),
        gross=gross,
        commission=commission,
        tax=tax,
        net=gross - commission - tax,
        by_payment_method=by_method,
    )


def order_reference(transaction_id: str) -> str:
    # tr-<epoch ms>-<suffix>
    parts = transaction_id.split("-")
    return parts[1].upper() if len(parts) > 1 else transaction_id.upper()


def build_receipt(transactions: List[Transaction]) -> Optional[Receipt]:
    if not transactions:
        return None

    ordered = sorted(transactions, key=lambda t: (t.created_at, t.position))
    first = ordered[0]
    delivery_type = DeliveryType(first.delivery_type)

    return Receipt(
        checkout_id=first.checkout_id,
        order_reference=order_reference(first.id),
        created_at=first.created_at,
        delivery_type=delivery_type,
        delivery_message=DELIVERY_MESSAGES[delivery_type],
        billing=BillingDetails(**(first.billing_details or {})),
        lines=[
            ReceiptLine(
                transaction_id=t.id,
                product_name=t.product_name,
                store_name=t.store_name,
                quantity=t.quantity,
                amount=t.amount,
                currency_symbol=t.currency_symbol,
                payment_method=t.payment_method,
            )
            for t in ordered
        ],
        total=sum((Decimal(t.amount) for t in ordered), Decimal("0")),
    )


def get_receipt(session: Session, checkout_id: str) -> Optional[Receipt]:
    transactions = session.exec(transactions_query(checkout_id=checkout_id)).all()
    return build_receipt(list(transactions))
