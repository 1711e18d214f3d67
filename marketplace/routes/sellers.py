from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from marketplace.database import get_session
from marketplace.models.seller import Seller
from marketplace.schemas.seller_schemas import SellerCreate, SellerPaymentMethodsUpdate
from marketplace.services.payment_resolver import allowed_methods
from marketplace.utils.timestamps import utcnow

router = APIRouter()


def _seller_payload(seller: Seller):
    return {
        "id": seller.id,
        "name": seller.name,
        "store_name": seller.store_name,
        "payment_method": seller.payment_method,
        "enabled_payment_methods": seller.enabled_payment_methods,
        "allowed_methods": allowed_methods(seller.enabled_payment_methods),
    }


@router.post("")
def register_seller(
    data: SellerCreate,
    session: Session = Depends(get_session),
):
    if session.get(Seller, data.id):
        raise HTTPException(400, "Seller already exists")

    seller = Seller(
        **data.model_dump(exclude={"payment_method", "enabled_payment_methods"}),
        payment_method=data.payment_method.value if data.payment_method else None,
        enabled_payment_methods=[m.value for m in data.enabled_payment_methods],
    )
    session.add(seller)
    session.commit()
    session.refresh(seller)

    return {"message": "Seller registered", "seller": _seller_payload(seller)}


@router.get("/{seller_id}")
def get_seller(
    seller_id: str,
    session: Session = Depends(get_session),
):
    seller = session.get(Seller, seller_id)
    if not seller:
        raise HTTPException(404, "Seller not found")
    return _seller_payload(seller)


@router.put("/{seller_id}/payment-methods")
def update_payment_methods(
    seller_id: str,
    data: SellerPaymentMethodsUpdate,
    session: Session = Depends(get_session),
):
    seller = session.get(Seller, seller_id)
    if not seller:
        raise HTTPException(404, "Seller not found")

    # assign a new list so the JSON column is flagged dirty
    seller.enabled_payment_methods = [m.value for m in data.enabled_payment_methods]
    if data.payment_method is not None:
        seller.payment_method = data.payment_method.value
    seller.updated_at = utcnow()

    session.add(seller)
    session.commit()
    session.refresh(seller)

    return {"message": "Payment methods updated", "seller": _seller_payload(seller)}
