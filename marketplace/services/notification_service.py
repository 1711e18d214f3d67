from typing import Optional

from sqlmodel import Session

from marketplace.models.notifications import Notification, RecipientRole


def create_notification(
    *,
    session: Session,
    recipient_role: RecipientRole,
    recipient_id: Optional[str],
    trigger_source: str,
    related_id: str,
    title: str,
    content: str,
) -> Notification:
    notification = Notification(
        recipient_role=recipient_role,
        recipient_id=recipient_id,
        trigger_source=trigger_source,
        related_id=str(related_id),
        title=title,
        content=content,
    )
    session.add(notification)
    session.flush()
    return notification
