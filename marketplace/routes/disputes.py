from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select

from marketplace.constants.dispute_status import DisputeStatus
from marketplace.database import get_session
from marketplace.models.dispute import Dispute
from marketplace.models.transaction import Transaction
from marketplace.schemas.dispute_schemas import DisputeCreate, DisputeStatusUpdate
from marketplace.services.dispute_service import raise_dispute, update_dispute_status
from marketplace.services.errors import DisputeError
from marketplace.utils.pagination import paginate

router = APIRouter()


@router.post("")
def create_dispute(
    data: DisputeCreate,
    session: Session = Depends(get_session),
):
    transaction = session.get(Transaction, data.transaction_id)
    if not transaction:
        raise HTTPException(404, "Transaction not found")

    try:
        dispute = raise_dispute(session, transaction, data)
    except DisputeError as e:
        raise HTTPException(400, str(e))

    return {"message": "Dispute filed", "dispute": dispute}


@router.get("")
def list_disputes(
    status: Optional[DisputeStatus] = None,
    seller_id: Optional[str] = None,
    buyer_id: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    session: Session = Depends(get_session),
):
    query = select(Dispute)

    if status:
        query = query.where(Dispute.status == status.value)
    if seller_id:
        query = query.where(Dispute.seller_id == seller_id)
    if buyer_id:
        query = query.where(Dispute.buyer_id == buyer_id)

    query = query.order_by(Dispute.created_at.desc())
    return paginate(session=session, query=query, page=page, limit=limit)


@router.put("/{dispute_id}/status")
def change_dispute_status(
    dispute_id: int,
    data: DisputeStatusUpdate,
    session: Session = Depends(get_session),
):
    dispute = session.get(Dispute, dispute_id)
    if not dispute:
        raise HTTPException(404, "Dispute not found")

    try:
        dispute = update_dispute_status(session, dispute, data)
    except DisputeError as e:
        raise HTTPException(400, str(e))

    return {"message": "Dispute updated", "dispute": dispute}
