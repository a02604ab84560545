"""Helper utilities (response envelopes, pagination, clocks)."""
import math
from datetime import datetime, timezone
from typing import Tuple

from sqlalchemy.orm import Query

from library_api.schemas.common import Pagination


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how DateTime columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def format_response(message: str, data=None, success=True):
    return {"success": success, "message": message, "data": data if data is not None else {}}


def paginate(query: Query, page: int, limit: int) -> Tuple[list, Pagination]:
    """Return one page of ``query`` and its pagination metadata."""
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return items, Pagination(
        page=page,
        limit=limit,
        total=total,
        total_pages=math.ceil(total / limit) if limit else 0,
    )
