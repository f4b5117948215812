"""Pagination helper for SQLAlchemy queries."""

from __future__ import annotations

import math
from typing import Any, Dict

from sqlalchemy.orm import Query


def page_count(total: int, per_page: int) -> int:
    return math.ceil(total / per_page) if per_page > 0 else 0


def paginate(query: Query, page: int = 1, per_page: int = 20) -> Dict[str, Any]:
    """Slice an ordered query. Pages past the end come back empty."""
    page = max(page, 1)
    per_page = max(min(per_page, 100), 1)
    total = query.order_by(None).count()
    items = query.limit(per_page).offset((page - 1) * per_page).all()
    return {
        "items": items,
        "page": page,
        "per_page": per_page,
        "total": total,
        "pages": page_count(total, per_page),
    }
