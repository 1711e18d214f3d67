from decimal import Decimal

import pytest
from pydantic import ValidationError

from factories import item_payload
from marketplace.config import Settings, settings


def test_defaults_come_from_environment(client):
    body = client.get("/admin/settings/commerce").json()

    assert Decimal(str(body["config"]["commission_rate"])) == settings.commission_rate
    assert body["config"]["tax_enabled"] == settings.tax_enabled
    assert "bank_transfer" in [m["id"] for m in body["payment_methods"]]


def test_update_is_partial(client):
    response = client.put("/admin/settings/commerce", json={"tax_enabled": True, "tax_rate": "0.05"})

    assert response.status_code == 200
    config = client.get("/admin/settings/commerce").json()["config"]
    assert config["tax_enabled"] is True
    assert Decimal(str(config["tax_rate"])) == Decimal("0.05")
    assert Decimal(str(config["commission_rate"])) == settings.commission_rate


def test_rates_outside_unit_interval_are_rejected(client):
    assert client.put("/admin/settings/commerce", json={"commission_rate": "1.5"}).status_code == 422


def test_rates_finer_than_stored_precision_are_rejected(client):
    response = client.put("/admin/settings/commerce", json={"commission_rate": "0.12345"})

    assert response.status_code == 422
    config = client.get("/admin/settings/commerce").json()["config"]
    assert Decimal(str(config["commission_rate"])) == settings.commission_rate


@pytest.mark.parametrize("field,value", [
    ("commission_rate", "1.5"),
    ("tax_rate", "-0.01"),
    ("tax_rate", "0.12345"),
])
def test_environment_rates_are_bounded(field, value):
    with pytest.raises(ValidationError):
        Settings(**{field: value})


def test_saved_rates_apply_to_new_checkouts(client, session):
    client.put("/admin/settings/commerce", json={
        "commission_rate": "0.05",
        "tax_enabled": True,
        "tax_rate": "0.075",
        "admin_bank_details": "",
    })

    checkout_id = client.post("/checkout", json={
        "items": [item_payload(price="1000", quantity=2)],
    }).json()["checkout_id"]
    client.post(f"/checkout/{checkout_id}/billing")
    view = client.put(f"/checkout/{checkout_id}/billing", json={"billing": {
        "full_name": "Ada Obi", "phone": "+2348000000000", "address": "12 Marina Road",
    }}).json()

    assert view["instructions"][0]["bank_details"] == "Admin bank details not configured."

    receipt = client.post(f"/checkout/{checkout_id}/authorize").json()["receipt"]
    transaction = client.get(f"/transactions/{receipt['lines'][0]['transaction_id']}").json()
    assert Decimal(str(transaction["commission"])) == Decimal("100")
    assert Decimal(str(transaction["tax"])) == Decimal("150")


def test_seller_payment_setup(client):
    response = client.post("/sellers", json={
        "id": "s9",
        "name": "Bola",
        "email": "bola@example.com",
        "store_name": "Bola Crafts",
        "enabled_payment_methods": ["paystack", "pod"],
    })
    assert response.status_code == 200
    assert response.json()["seller"]["allowed_methods"] == ["paystack", "pod"]

    assert client.post("/sellers", json={
        "id": "s9", "name": "Bola", "email": "bola@example.com", "store_name": "Bola Crafts",
    }).status_code == 400

    response = client.put("/sellers/s9/payment-methods", json={"enabled_payment_methods": []})
    assert response.json()["seller"]["allowed_methods"] == ["bank_transfer"]

    assert client.get("/sellers/nobody").status_code == 404


def test_health_check(client):
    body = client.get("/health/check").json()

    assert body["status"] == "ok"
    assert body["database"] == "ok"
    assert body["live_checkouts"] == 0
    assert body["environment"] == settings.ENV
