from sqlmodel import select

from factories import full_billing, make_config, make_item
from marketplace.constants.delivery import DeliveryType
from marketplace.constants.payment_methods import PaymentMethod
from marketplace.models.notifications import Notification
from marketplace.models.transaction import Transaction
from marketplace.services.settlement_service import materialize_transactions
from marketplace.services.transaction_service import get_receipt, record_transactions


def _checkout(checkout_id="co-replay"):
    return materialize_transactions(
        checkout_id=checkout_id,
        cart=[make_item("p1", "s1"), make_item("p2", "s2")],
        config=make_config(),
        methods={"s1": PaymentMethod.BANK_TRANSFER, "s2": PaymentMethod.POD},
        billing=full_billing(),
        delivery_type=DeliveryType.HOME_DELIVERY,
        buyer_id="b1",
    )


def test_record_notifies_admin_and_each_seller(session):
    added = record_transactions(session, _checkout())

    assert len(added) == 2
    assert len(session.exec(select(Notification)).all()) == 3


def test_replayed_completion_adds_nothing(session):
    transactions = _checkout()
    replay = [Transaction(**t.model_dump()) for t in transactions]
    record_transactions(session, transactions)

    assert record_transactions(session, replay) == []

    assert len(session.exec(select(Transaction)).all()) == 2
    assert len(session.exec(select(Notification)).all()) == 3


def test_receipt_keeps_cart_order(session):
    record_transactions(session, _checkout())

    receipt = get_receipt(session, "co-replay")

    assert [line.product_name for line in receipt.lines] == ["Product p1", "Product p2"]
    assert receipt.billing.full_name == "Ada Obi"
    assert get_receipt(session, "co-unknown") is None
