from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session, select

from marketplace.database import get_session
from marketplace.models.notifications import Notification, RecipientRole
from marketplace.utils.pagination import paginate

router = APIRouter()


@router.get("")
def list_notifications(
    recipient_role: Optional[RecipientRole] = None,
    recipient_id: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    session: Session = Depends(get_session),
):
    query = select(Notification)

    if recipient_role:
        query = query.where(Notification.recipient_role == recipient_role)
    if recipient_id:
        query = query.where(Notification.recipient_id == recipient_id)

    query = query.order_by(Notification.created_at.desc(), Notification.id.desc())
    return paginate(session=session, query=query, page=page, limit=limit)
