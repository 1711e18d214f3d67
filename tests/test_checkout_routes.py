from decimal import Decimal

import asyncio

import httpx
import pytest
from sqlmodel import select

from factories import item_payload
from marketplace.config import settings
from marketplace.constants.checkout_status import CheckoutStep
from marketplace.dependencies.checkout import get_payment_confirmation
from marketplace.main import app
from marketplace.models.notifications import Notification
from marketplace.models.seller import Seller
from marketplace.models.transaction import Transaction
from marketplace.services.payment_processor import (
    PaymentConfirmation,
    ProcessingOutcome,
    ProcessingResult,
    SimulatedSettlement,
)


BILLING = {
    "full_name": "Ada Obi",
    "email": "ada@example.com",
    "phone": "+2348000000000",
    "address": "12 Marina Road",
    "city": "Lagos",
    "state": "Lagos",
}


@pytest.fixture
def sellers(session):
    session.add(Seller(id="s1", name="Kemi", email="kemi@example.com", store_name="Kemi Styles",
                       enabled_payment_methods=["bank_transfer", "stripe"]))
    session.add(Seller(id="s2", name="Tunde", email="tunde@example.com", store_name="Tunde Gadgets",
                       enabled_payment_methods=["pod"]))
    session.commit()


def _start(client, items, buyer_id="b1"):
    response = client.post("/checkout", json={"items": items, "buyer_id": buyer_id})
    assert response.status_code == 200
    return response.json()


def _to_payment(client, checkout_id, billing=None, delivery_type="home_delivery"):
    assert client.post(f"/checkout/{checkout_id}/billing").status_code == 200
    response = client.put(
        f"/checkout/{checkout_id}/billing",
        json={"billing": billing or BILLING, "delivery_type": delivery_type},
    )
    assert response.status_code == 200
    return response.json()


def test_start_groups_cart_by_seller(client, sellers):
    view = _start(client, [
        item_payload(product_id="p1", seller_id="s1", price="1000", quantity=2, store_name="Kemi Styles"),
        item_payload(product_id="p2", seller_id="s2", price="500", store_name="Tunde Gadgets"),
        item_payload(product_id="p3", seller_id="s1", price="250", store_name="Kemi Styles"),
    ])

    assert view["step"] == "review"
    assert [g["seller_id"] for g in view["groups"]] == ["s1", "s2"]
    assert Decimal(str(view["groups"][0]["total"])) == Decimal("2250")
    assert view["groups"][0]["payment_method"] == "bank_transfer"
    assert view["groups"][1]["payment_method"] == "pod"
    assert Decimal(str(view["total"])) == Decimal("2750")
    assert view["instructions"] == []


def test_unknown_seller_defaults_to_bank_transfer(client):
    view = _start(client, [item_payload(seller_id="ghost", payment_method="stripe")])

    assert view["groups"][0]["allowed_methods"] == ["bank_transfer"]
    assert view["groups"][0]["payment_method"] == "bank_transfer"


def test_cart_edits_during_review(client):
    view = _start(client, [item_payload(product_id="p1", quantity=2, stock=3)])
    checkout_id = view["checkout_id"]

    view = client.patch(f"/checkout/{checkout_id}/items/p1", json={"delta": 5}).json()
    assert view["items"][0]["quantity"] == 3

    view = client.patch(f"/checkout/{checkout_id}/items/p1", json={"delta": -10}).json()
    assert view["items"][0]["quantity"] == 1

    view = client.post(f"/checkout/{checkout_id}/items", json=item_payload(product_id="p2")).json()
    assert [i["id"] for i in view["items"]] == ["p1", "p2"]

    view = client.delete(f"/checkout/{checkout_id}/items/p1").json()
    assert [i["id"] for i in view["items"]] == ["p2"]


def test_editing_missing_line_is_404(client):
    checkout_id = _start(client, [item_payload(product_id="p1")])["checkout_id"]

    response = client.patch(f"/checkout/{checkout_id}/items/nope", json={"delta": 1})

    assert response.status_code == 404


def test_empty_cart_cannot_proceed(client):
    view = _start(client, [])

    assert view["step"] == "empty"
    response = client.post(f"/checkout/{view['checkout_id']}/billing")
    assert response.status_code == 400


def test_incomplete_billing_returns_missing_fields(client):
    checkout_id = _start(client, [item_payload()])["checkout_id"]
    client.post(f"/checkout/{checkout_id}/billing")

    response = client.put(
        f"/checkout/{checkout_id}/billing",
        json={"billing": {**BILLING, "phone": "  "}},
    )

    assert response.status_code == 422
    assert response.json()["detail"]["missing_fields"] == ["phone"]

    view = client.get(f"/checkout/{checkout_id}").json()
    assert view["step"] == "billing"
    assert view["billing"]["full_name"] == "Ada Obi"


def test_payment_instructions_per_group(client, sellers):
    checkout_id = _start(client, [
        item_payload(product_id="p1", seller_id="s1", price="1000"),
        item_payload(product_id="p2", seller_id="s2", price="500", quantity=2),
    ])["checkout_id"]

    view = _to_payment(client, checkout_id)

    assert view["step"] == "payment"
    bank, pod = view["instructions"]
    assert bank["channel"] == "bank_transfer"
    assert bank["bank_details"] == settings.admin_bank_details
    assert pod["channel"] == "pay_on_delivery"
    assert pod["collection_point"] == "12 Marina Road, Lagos, Lagos"
    assert Decimal(str(pod["amount_due"])) == Decimal("1000")


def test_gateway_selection_changes_instruction(client, sellers):
    checkout_id = _start(client, [item_payload(seller_id="s1")])["checkout_id"]
    client.put(f"/checkout/{checkout_id}/payment-methods/s1", json={"method": "stripe"})

    view = _to_payment(client, checkout_id)

    assert view["instructions"][0]["channel"] == "external_gateway"
    assert "STRIPE" in view["instructions"][0]["message"]


def test_authorize_records_transactions_and_receipt(client, session, sellers):
    checkout_id = _start(client, [
        item_payload(product_id="p1", seller_id="s1", price="1000", quantity=2, store_name="Kemi Styles"),
        item_payload(product_id="p2", seller_id="s2", price="500", store_name="Tunde Gadgets"),
    ])["checkout_id"]
    _to_payment(client, checkout_id, delivery_type="instant_pickup")

    response = client.post(f"/checkout/{checkout_id}/authorize")

    assert response.status_code == 200
    body = response.json()
    assert body["step"] == "success"
    receipt = body["receipt"]
    assert [line["product_name"] for line in receipt["lines"]] == ["Product p1", "Product p2"]
    assert Decimal(str(receipt["total"])) == Decimal("2500")
    assert receipt["delivery_type"] == "instant_pickup"

    transactions = session.exec(
        select(Transaction).where(Transaction.checkout_id == checkout_id)
    ).all()
    assert len(transactions) == 2
    by_product = {t.product_id: t for t in transactions}
    assert Decimal(by_product["p1"].commission) == Decimal("200")
    assert Decimal(by_product["p1"].tax) == Decimal("0")
    assert by_product["p2"].payment_method == "pod"
    assert by_product["p1"].billing_details["phone"] == BILLING["phone"]

    # a finished checkout is released; its history lives on under /transactions
    assert client.get(f"/checkout/{checkout_id}").status_code == 404


def test_checkout_notifies_admin_and_sellers(client, session, sellers):
    checkout_id = _start(client, [
        item_payload(product_id="p1", seller_id="s1"),
        item_payload(product_id="p2", seller_id="s1"),
        item_payload(product_id="p3", seller_id="s2"),
    ])["checkout_id"]
    _to_payment(client, checkout_id)
    client.post(f"/checkout/{checkout_id}/authorize")

    notifications = session.exec(select(Notification)).all()
    recipients = sorted((n.recipient_role.value, n.recipient_id or "") for n in notifications)
    assert recipients == [("admin", ""), ("seller", "s1"), ("seller", "s2")]

    response = client.get("/admin/notifications", params={"recipient_role": "seller"})
    assert response.json()["total_items"] == 2


def test_authorize_before_payment_is_rejected(client):
    checkout_id = _start(client, [item_payload()])["checkout_id"]

    response = client.post(f"/checkout/{checkout_id}/authorize")

    assert response.status_code == 400


def test_abandon_keeps_cart(client):
    checkout_id = _start(client, [item_payload(product_id="p1")])["checkout_id"]

    response = client.post(f"/checkout/{checkout_id}/abandon")

    assert response.status_code == 200
    assert [i["id"] for i in response.json()["items"]] == ["p1"]
    assert client.post(f"/checkout/{checkout_id}/abandon").status_code == 404


def test_unknown_checkout_is_404(client):
    assert client.get("/checkout/co-missing").status_code == 404
    assert client.post("/checkout/co-missing/authorize").status_code == 404


def test_transaction_history_and_summary(client, sellers):
    checkout_id = _start(client, [
        item_payload(product_id="p1", seller_id="s1", price="1000", quantity=2),
        item_payload(product_id="p2", seller_id="s1", price="300"),
    ], buyer_id="b7")["checkout_id"]
    _to_payment(client, checkout_id)
    client.post(f"/checkout/{checkout_id}/authorize")

    page = client.get("/transactions", params={"buyer_id": "b7"}).json()
    assert page["total_items"] == 2
    assert page["has_next"] is False
    assert client.get("/transactions", params={"buyer_id": "b7", "limit": 1}).json()["has_next"] is True

    transaction_id = page["results"][0]["id"]
    assert client.get(f"/transactions/{transaction_id}").status_code == 200
    assert client.get("/transactions/tr-0-missing").status_code == 404

    summary = client.get("/transactions/sellers/s1/summary").json()
    assert summary["transaction_count"] == 2
    assert Decimal(str(summary["gross"])) == Decimal("2300")
    assert Decimal(str(summary["commission"])) == Decimal("230")
    assert Decimal(str(summary["net"])) == Decimal("2070")
    assert summary["by_payment_method"]["bank_transfer"]["count"] == 2


def test_receipt_download(client, sellers, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "receipt_dir", str(tmp_path))
    checkout_id = _start(client, [item_payload(seller_id="s1")])["checkout_id"]
    _to_payment(client, checkout_id)
    client.post(f"/checkout/{checkout_id}/authorize")

    receipt = client.get(f"/transactions/receipt/{checkout_id}")
    assert receipt.status_code == 200
    assert receipt.json()["billing"]["full_name"] == "Ada Obi"

    pdf = client.get(f"/transactions/receipt/{checkout_id}/download")
    assert pdf.status_code == 200
    assert pdf.headers["content-type"] == "application/pdf"
    assert pdf.content.startswith(b"%PDF")

    assert client.get("/transactions/receipt/co-missing").status_code == 404


class DecliningConfirmation(PaymentConfirmation):
    async def confirm(self, checkout_id):
        return ProcessingResult(outcome=ProcessingOutcome.FAILED, detail="declined")


def test_completed_checkouts_are_released(client, registry, sellers):
    for n in range(3):
        checkout_id = _start(client, [item_payload(product_id=f"p{n}", seller_id="s1")])["checkout_id"]
        _to_payment(client, checkout_id)

        response = client.post(f"/checkout/{checkout_id}/authorize")
        assert response.status_code == 200
        assert response.json()["step"] == "success"

    assert len(registry) == 0


def test_stored_settlement_is_not_rounded(client, session):
    client.put("/admin/settings/commerce", json={
        "commission_rate": "0.1", "tax_enabled": True, "tax_rate": "0.075",
    })
    checkout_id = _start(client, [item_payload(price="10.01")])["checkout_id"]
    _to_payment(client, checkout_id)

    receipt = client.post(f"/checkout/{checkout_id}/authorize").json()["receipt"]

    stored = session.exec(select(Transaction).where(Transaction.checkout_id == checkout_id)).one()
    assert stored.amount == Decimal("10.01")
    assert stored.commission == Decimal("1.001")
    assert stored.tax == Decimal("0.75075")

    transaction = client.get(f"/transactions/{stored.id}").json()
    assert Decimal(str(transaction["tax"])) == Decimal("0.75075")
    assert Decimal(str(receipt["total"])) == Decimal("10.01")


def test_declined_payment_returns_cart(client, registry, session):
    app.dependency_overrides[get_payment_confirmation] = lambda: DecliningConfirmation()
    checkout_id = _start(client, [item_payload(product_id="p1")])["checkout_id"]
    _to_payment(client, checkout_id)

    response = client.post(f"/checkout/{checkout_id}/authorize")

    assert response.status_code == 402
    detail = response.json()["detail"]
    assert detail["outcome"] == "failed"
    assert [i["id"] for i in detail["items"]] == ["p1"]
    assert len(registry) == 0
    assert session.exec(select(Transaction)).all() == []


def test_abandon_while_processing_cancels_confirmation(client, registry, session, sellers):
    app.dependency_overrides[get_payment_confirmation] = lambda: SimulatedSettlement(delay_seconds=30)
    checkout_id = _start(client, [item_payload(product_id="p1", seller_id="s1")])["checkout_id"]
    _to_payment(client, checkout_id)
    flow = registry.get(checkout_id)

    async def scenario():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
            authorize = asyncio.ensure_future(http.post(f"/checkout/{checkout_id}/authorize"))
            for _ in range(500):
                if flow.step == CheckoutStep.PROCESSING:
                    break
                await asyncio.sleep(0.01)

            abandon = await http.post(f"/checkout/{checkout_id}/abandon")
            return abandon, await asyncio.wait_for(authorize, timeout=5)

    abandon, authorize = asyncio.run(scenario())

    assert abandon.status_code == 200
    assert authorize.status_code == 402
    assert authorize.json()["detail"]["outcome"] == "cancelled"
    assert flow.step == CheckoutStep.ABANDONED
    assert len(registry) == 0
    assert session.exec(select(Transaction)).all() == []
