import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

import marketplace.models  # noqa: F401  registers tables on the metadata
from marketplace.database import get_session
from marketplace.dependencies.checkout import get_payment_confirmation
from marketplace.main import app
from marketplace.services.checkout_registry import CheckoutRegistry, get_checkout_registry
from marketplace.services.payment_processor import SimulatedSettlement


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def registry():
    return CheckoutRegistry()


@pytest.fixture
def client(session, registry):
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_checkout_registry] = lambda: registry
    app.dependency_overrides[get_payment_confirmation] = lambda: SimulatedSettlement(delay_seconds=0)

    yield TestClient(app)

    app.dependency_overrides.clear()
