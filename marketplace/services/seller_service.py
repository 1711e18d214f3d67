from typing import Dict, Iterable

from sqlmodel import Session, select

from marketplace.models.seller import Seller


def sellers_by_id(session: Session, seller_ids: Iterable[str]) -> Dict[str, Seller]:
    ids = set(seller_ids)
    if not ids:
        return {}

    sellers = session.exec(select(Seller).where(Seller.id.in_(ids))).all()
    return {s.id: s for s in sellers}
