"""Offset pagination over SQLAlchemy queries."""

from typing import Any

from sqlalchemy.orm import Query

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def paginate(query: Query, page: int, size: int) -> tuple[list[Any], int]:
    """Return (items on page, total count). page is zero-based."""
    total = query.order_by(None).count()
    items = query.offset(page * size).limit(size).all()
    return items, total
