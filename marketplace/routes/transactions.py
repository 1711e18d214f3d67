import os
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import FileResponse
from sqlmodel import Session

from marketplace.config import settings
from marketplace.database import get_session
from marketplace.models.transaction import Transaction
from marketplace.services.receipt_service import generate_receipt_pdf, receipt_path
from marketplace.services.transaction_service import (
    get_receipt,
    seller_finance_summary,
    transactions_query,
)
from marketplace.utils.pagination import paginate

router = APIRouter()


@router.get("")
def list_transactions(
    buyer_id: Optional[str] = None,
    seller_id: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    session: Session = Depends(get_session),
):
    query = transactions_query(buyer_id=buyer_id, seller_id=seller_id)
    return paginate(session=session, query=query, page=page, limit=limit)


@router.get("/receipt/{checkout_id}")
def get_checkout_receipt(
    checkout_id: str,
    session: Session = Depends(get_session),
):
    receipt = get_receipt(session, checkout_id)
    if not receipt:
        raise HTTPException(404, "Receipt not found")
    return receipt


@router.get("/receipt/{checkout_id}/download")
def download_receipt_pdf(
    checkout_id: str,
    session: Session = Depends(get_session),
):
    receipt = get_receipt(session, checkout_id)
    if not receipt:
        raise HTTPException(404, "Receipt not found")

    file_path = receipt_path(settings.receipt_dir, checkout_id)

    # history is append-only, so a rendered receipt never goes stale
    if not os.path.exists(file_path):
        generate_receipt_pdf(receipt, file_path)

    return FileResponse(
        file_path,
        media_type="application/pdf",
        filename=f"receipt_{receipt.order_reference}.pdf",
    )


@router.get("/sellers/{seller_id}/summary")
def get_seller_summary(
    seller_id: str,
    session: Session = Depends(get_session),
):
    return seller_finance_summary(session, seller_id)


@router.get("/{transaction_id}")
def get_transaction(
    transaction_id: str,
    session: Session = Depends(get_session),
):
    transaction = session.get(Transaction, transaction_id)
    if not transaction:
        raise HTTPException(404, "Transaction not found")
    return transaction
