import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, text

from marketplace.config import settings
from marketplace.database import get_session
from marketplace.services.checkout_registry import CheckoutRegistry, get_checkout_registry
from marketplace.utils.timestamps import utcnow

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/check")
def health_check(
    session: Session = Depends(get_session),
    registry: CheckoutRegistry = Depends(get_checkout_registry),
):
    try:
        session.exec(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        logger.error(f"Health check could not reach the database: {e}")
        database = "failed"

    return {
        "status": "ok" if database == "ok" else "degraded",
        "environment": settings.ENV,
        "database": database,
        "live_checkouts": len(registry),
        "timestamp": utcnow().isoformat(),
    }
