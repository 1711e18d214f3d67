import logging

from sqlmodel import Session, select

from marketplace.constants.dispute_status import ALLOWED_TRANSITIONS, DisputeStatus
from marketplace.models.dispute import Dispute
from marketplace.models.transaction import Transaction
from marketplace.notifications import MarketplaceEvent, dispatch_event
from marketplace.schemas.dispute_schemas import DisputeCreate, DisputeStatusUpdate
from marketplace.services.errors import DisputeError
from marketplace.utils.timestamps import utcnow

logger = logging.getLogger(__name__)

OPEN_STATUSES = (DisputeStatus.OPEN.value, DisputeStatus.UNDER_REVIEW.value)


def get_active_dispute(session: Session, transaction_id: str):
    return session.exec(
        select(Dispute)
        .where(Dispute.transaction_id == transaction_id)
        .where(Dispute.status.in_(OPEN_STATUSES))
    ).first()


def raise_dispute(session: Session, transaction: Transaction, data: DisputeCreate) -> Dispute:
    if get_active_dispute(session, transaction.id):
        raise DisputeError("A dispute is already open for this transaction")

    dispute = Dispute(
        transaction_id=transaction.id,
        buyer_id=data.buyer_id or transaction.buyer_id,
        seller_id=transaction.seller_id,
        reason=data.reason.value,
        description=data.description,
        status=DisputeStatus.OPEN.value,
    )
    session.add(dispute)
    session.flush()

    dispatch_event(
        event=MarketplaceEvent.DISPUTE_RAISED,
        session=session,
        related_id=str(dispute.id),
        title="Dispute filed",
        content=f"{data.reason.value}: {transaction.product_name} ({transaction.id})",
        seller_ids=[transaction.seller_id],
    )

    session.commit()
    session.refresh(dispute)

    logger.info(f"Dispute {dispute.id} opened on transaction {transaction.id}")
    return dispute


def update_dispute_status(session: Session, dispute: Dispute, data: DisputeStatusUpdate) -> Dispute:
    current = DisputeStatus(dispute.status)

    if data.status not in ALLOWED_TRANSITIONS[current]:
        raise DisputeError(f"Cannot change dispute from {current.value} to {data.status.value}")

    dispute.status = data.status.value
    if data.admin_note is not None:
        dispute.admin_note = data.admin_note
    dispute.updated_at = utcnow()
    session.add(dispute)

    dispatch_event(
        event=MarketplaceEvent.DISPUTE_UPDATED,
        session=session,
        related_id=str(dispute.id),
        title=f"Dispute {data.status.value.lower().replace('_', ' ')}",
        content=data.admin_note or f"Dispute on {dispute.transaction_id} is now {data.status.value}",
        seller_ids=[dispute.seller_id],
        buyer_id=dispute.buyer_id,
    )

    session.commit()
    session.refresh(dispute)

    logger.info(f"Dispute {dispute.id}: {current.value} -> {dispute.status}")
    return dispute
