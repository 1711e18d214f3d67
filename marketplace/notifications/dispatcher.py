import logging
from typing import Iterable, Optional

from sqlmodel import Session

from marketplace.models.notifications import RecipientRole
from marketplace.notifications.channels import Channel
from marketplace.notifications.events import MarketplaceEvent
from marketplace.notifications.rules import NOTIFICATION_RULES
from marketplace.services.notification_service import create_notification

logger = logging.getLogger(__name__)


def dispatch_event(
    *,
    event: MarketplaceEvent,
    session: Session,
    related_id: str,
    title: str,
    content: str,
    seller_ids: Iterable[str] = (),
    buyer_id: Optional[str] = None,
) -> int:
    """
    Central in-app notification dispatcher.

    Returns the number of notifications written; the caller commits.
    """
    rules = NOTIFICATION_RULES.get(event, {})
    sent = 0

    # -------------------------
    # ADMIN
    # -------------------------
    if rules.get(Channel.INAPP_ADMIN):
        create_notification(
            session=session,
            recipient_role=RecipientRole.admin,
            recipient_id=None,
            trigger_source=event.value,
            related_id=related_id,
            title=title,
            content=content,
        )
        sent += 1

    # -------------------------
    # SELLERS
    # -------------------------
    if rules.get(Channel.INAPP_SELLER):
        for seller_id in dict.fromkeys(seller_ids):
            create_notification(
                session=session,
                recipient_role=RecipientRole.seller,
                recipient_id=seller_id,
                trigger_source=event.value,
                related_id=related_id,
                title=title,
                content=content,
            )
            sent += 1

    # -------------------------
    # BUYER
    # -------------------------
    if rules.get(Channel.INAPP_BUYER) and buyer_id:
        create_notification(
            session=session,
            recipient_role=RecipientRole.buyer,
            recipient_id=buyer_id,
            trigger_source=event.value,
            related_id=related_id,
            title=title,
            content=content,
        )
        sent += 1

    logger.info(f"Dispatched {event.value} for {related_id} to {sent} recipients")
    return sent
