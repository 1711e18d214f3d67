import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marketplace.config import settings
from marketplace.database import create_db_and_tables
from marketplace.routes import (
    admin_notifications,
    admin_settings,
    checkout,
    disputes,
    health,
    sellers,
    transactions,
)

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Run DB creation ONLY in local
    if settings.ENV == "local":
        create_db_and_tables()
    yield

app = FastAPI(title="Omni Marketplace Checkout API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(checkout.router, prefix="/checkout", tags=["Checkout"])
app.include_router(transactions.router, prefix="/transactions", tags=["Transactions"])
app.include_router(disputes.router, prefix="/disputes", tags=["Disputes"])
app.include_router(sellers.router, prefix="/sellers", tags=["Sellers"])
app.include_router(admin_settings.router, prefix="/admin/settings", tags=["Admin Settings"])
app.include_router(admin_notifications.router, prefix="/admin/notifications", tags=["Admin Notifications"])
app.include_router(health.router, prefix="/health", tags=["Health"])


@app.get("/")
def root():
    return {
        "checkout_endpoints": [
            "/checkout", "/checkout/{checkout_id}",
            "/checkout/{checkout_id}/items", "/checkout/{checkout_id}/items/{product_id}",
            "/checkout/{checkout_id}/payment-methods/{seller_id}",
            "/checkout/{checkout_id}/billing", "/checkout/{checkout_id}/authorize",
            "/checkout/{checkout_id}/abandon",
        ],
        "transaction_endpoints": [
            "/transactions", "/transactions/{transaction_id}",
            "/transactions/receipt/{checkout_id}",
            "/transactions/receipt/{checkout_id}/download",
            "/transactions/sellers/{seller_id}/summary",
        ],
        "dispute_endpoints": [
            "/disputes", "/disputes/{dispute_id}/status"
        ],
        "seller_endpoints": [
            "/sellers", "/sellers/{seller_id}", "/sellers/{seller_id}/payment-methods"
        ],
        "admin_endpoints": [
            "/admin/settings/commerce", "/admin/notifications"
        ],
    }
