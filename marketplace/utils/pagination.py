import math
from typing import Any, Dict

from sqlalchemy import func
from sqlmodel import Session, select


def paginate(*, session: Session, query, page: int = 1, limit: int = 10) -> Dict[str, Any]:
    """
    One page of `query` plus the counts a list screen needs.

    `page` is 1-based. Routes bound `page` and `limit` through `Query(...)`.
    """
    total = session.exec(select(func.count()).select_from(query.subquery())).one()
    total_pages = math.ceil(total / limit)

    results = session.exec(query.offset((page - 1) * limit).limit(limit)).all()

    return {
        "total_items": total,
        "total_pages": total_pages,
        "current_page": page,
        "limit": limit,
        "has_next": page < total_pages,
        "results": results,
    }
