"""Page arithmetic shared by list endpoints and the demo dataset."""
import math
from typing import Sequence, TypeVar

from bet_tracker.database.schemas import Pagination

T = TypeVar("T")


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    """
    Describe one page of a result set.

    Examples:
        >>> build_pagination(1, 20, 45).pages
        3
    """
    return Pagination(
        page=page,
        limit=limit,
        total=total,
        pages=math.ceil(total / limit) if limit > 0 else 0,
    )


def slice_page(items: Sequence[T], page: int, limit: int) -> list[T]:
    """Cut an in-memory sequence down to one page."""
    start = (page - 1) * limit
    return list(items[start:start + limit])
