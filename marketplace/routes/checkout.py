import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from marketplace.config import settings
from marketplace.database import get_session
from marketplace.dependencies.checkout import get_payment_confirmation
from marketplace.schemas.cart_schemas import CartLineItem, CartQuantityUpdate
from marketplace.schemas.checkout_schemas import (
    BillingSubmit,
    CheckoutStart,
    PaymentMethodSelect,
)
from marketplace.services.checkout_flow import CheckoutFlow
from marketplace.services.checkout_registry import (
    CheckoutNotFound,
    CheckoutRegistry,
    get_checkout_registry,
)
from marketplace.services.errors import (
    CartLineNotFound,
    CheckoutError,
    IncompleteBillingError,
)
from marketplace.services.payment_processor import PaymentConfirmation
from marketplace.services.seller_service import sellers_by_id
from marketplace.services.site_settings_service import get_site_config
from marketplace.services.transaction_service import build_receipt, record_transactions

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_flow(registry: CheckoutRegistry, checkout_id: str) -> CheckoutFlow:
    try:
        return registry.get(checkout_id)
    except CheckoutNotFound:
        raise HTTPException(404, "Checkout not found")


def _view(flow: CheckoutFlow, session: Session):
    sellers = sellers_by_id(session, (item.seller_id for item in flow.cart))
    return flow.view(sellers, get_site_config(session))


def _rejected(e: CheckoutError):
    if isinstance(e, IncompleteBillingError):
        return HTTPException(
            status_code=422,
            detail={"message": str(e), "missing_fields": e.missing_fields},
        )
    if isinstance(e, CartLineNotFound):
        return HTTPException(404, str(e))
    return HTTPException(400, str(e))


@router.post("")
def start_checkout(
    data: CheckoutStart,
    session: Session = Depends(get_session),
    registry: CheckoutRegistry = Depends(get_checkout_registry),
):
    flow = registry.start(data.items, buyer_id=data.buyer_id)
    logger.info(f"Checkout {flow.checkout_id} started with {len(flow.cart)} lines")
    return _view(flow, session)


@router.get("/{checkout_id}")
def get_checkout(
    checkout_id: str,
    session: Session = Depends(get_session),
    registry: CheckoutRegistry = Depends(get_checkout_registry),
):
    flow = _get_flow(registry, checkout_id)
    return _view(flow, session)


# Cart edits (review step only)

@router.post("/{checkout_id}/items")
def add_item(
    checkout_id: str,
    item: CartLineItem,
    session: Session = Depends(get_session),
    registry: CheckoutRegistry = Depends(get_checkout_registry),
):
    flow = _get_flow(registry, checkout_id)
    try:
        flow.add_item(item)
    except CheckoutError as e:
        raise _rejected(e)
    return _view(flow, session)


@router.patch("/{checkout_id}/items/{product_id}")
def update_item_quantity(
    checkout_id: str,
    product_id: str,
    data: CartQuantityUpdate,
    session: Session = Depends(get_session),
    registry: CheckoutRegistry = Depends(get_checkout_registry),
):
    flow = _get_flow(registry, checkout_id)
    try:
        flow.update_quantity(product_id, data.selected_size, data.delta)
    except CheckoutError as e:
        raise _rejected(e)
    return _view(flow, session)


@router.delete("/{checkout_id}/items/{product_id}")
def remove_item(
    checkout_id: str,
    product_id: str,
    selected_size: Optional[str] = None,
    session: Session = Depends(get_session),
    registry: CheckoutRegistry = Depends(get_checkout_registry),
):
    flow = _get_flow(registry, checkout_id)
    try:
        flow.remove_item(product_id, selected_size)
    except CheckoutError as e:
        raise _rejected(e)
    return _view(flow, session)


@router.put("/{checkout_id}/payment-methods/{seller_id}")
def select_payment_method(
    checkout_id: str,
    seller_id: str,
    data: PaymentMethodSelect,
    session: Session = Depends(get_session),
    registry: CheckoutRegistry = Depends(get_checkout_registry),
):
    flow = _get_flow(registry, checkout_id)
    try:
        flow.select_payment_method(seller_id, data.method)
    except CheckoutError as e:
        raise _rejected(e)
    return _view(flow, session)


# Step transitions

@router.post("/{checkout_id}/billing")
def proceed_to_billing(
    checkout_id: str,
    session: Session = Depends(get_session),
    registry: CheckoutRegistry = Depends(get_checkout_registry),
):
    flow = _get_flow(registry, checkout_id)
    try:
        flow.proceed_to_billing()
    except CheckoutError as e:
        raise _rejected(e)
    return _view(flow, session)


@router.put("/{checkout_id}/billing")
def confirm_billing(
    checkout_id: str,
    data: BillingSubmit,
    session: Session = Depends(get_session),
    registry: CheckoutRegistry = Depends(get_checkout_registry),
):
    flow = _get_flow(registry, checkout_id)
    try:
        flow.confirm_billing(data.billing, data.delivery_type)
    except CheckoutError as e:
        raise _rejected(e)
    return _view(flow, session)


@router.post("/{checkout_id}/authorize")
async def authorize_settlement(
    checkout_id: str,
    session: Session = Depends(get_session),
    registry: CheckoutRegistry = Depends(get_checkout_registry),
    confirmation: PaymentConfirmation = Depends(get_payment_confirmation),
):
    flow = _get_flow(registry, checkout_id)

    sellers = sellers_by_id(session, (item.seller_id for item in flow.cart))
    config = get_site_config(session)

    try:
        result = await flow.authorize(
            sellers=sellers,
            config=config,
            confirmation=confirmation,
            on_complete=lambda transactions: record_transactions(session, transactions),
            timeout_seconds=settings.processing_timeout_seconds,
            default_currency_symbol=settings.default_currency_symbol,
        )
    except CheckoutError as e:
        raise _rejected(e)
    finally:
        if flow.is_finished:
            registry.discard(checkout_id)

    if not result.succeeded:
        raise HTTPException(
            status_code=402,
            detail={
                "message": "Payment was not confirmed",
                "outcome": result.outcome.value,
                "items": [item.model_dump(mode="json") for item in flow.cart],
            },
        )

    return {
        "message": "Payment successful",
        "step": flow.step,
        "reference": result.reference,
        "receipt": build_receipt(flow.transactions),
    }


@router.post("/{checkout_id}/abandon")
async def abandon_checkout(
    checkout_id: str,
    registry: CheckoutRegistry = Depends(get_checkout_registry),
):
    flow = _get_flow(registry, checkout_id)
    try:
        flow.abandon()
    except CheckoutError as e:
        raise _rejected(e)

    registry.discard(checkout_id)

    return {"message": "Checkout abandoned", "checkout_id": checkout_id, "items": flow.cart}
