from fastapi import APIRouter, Depends
from sqlmodel import Session

from marketplace.constants.payment_methods import PAYMENT_METHODS
from marketplace.database import get_session
from marketplace.schemas.site_config import SiteConfigUpdate
from marketplace.services.site_settings_service import get_site_config, update_site_config

router = APIRouter()


@router.get("/commerce")
def get_commerce_settings(session: Session = Depends(get_session)):
    return {
        "config": get_site_config(session),
        "payment_methods": PAYMENT_METHODS,
    }


@router.put("/commerce")
def update_commerce_settings(
    data: SiteConfigUpdate,
    session: Session = Depends(get_session),
):
    config = update_site_config(session, data)
    return {"message": "Commerce settings updated", "config": config}
