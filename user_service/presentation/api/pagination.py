"""Page-based pagination helpers.

HTTP clients speak page/pageSize, repositories speak limit/offset.
"""

import math
from typing import Sequence, TypeVar

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def page_to_limit_offset(page: int, page_size: int) -> tuple[int, int]:
    """Convert 1-based page → (limit, offset).

    Example:
        >>> page_to_limit_offset(3, 10)
        (10, 20)
    """
    return page_size, (page - 1) * page_size


def total_pages(total: int, page_size: int) -> int:
    """ceil(total / page_size), 0 for an empty collection."""
    if total <= 0:
        return 0
    return math.ceil(total / page_size)


def create_paginated_response(
    items: Sequence[T], page: int, page_size: int, total: int
) -> dict:
    """Build the paginated envelope.

    Example:
        >>> create_paginated_response([], page=1, page_size=20, total=0)
        {'items': [], 'page': 1, 'pageSize': 20, 'total': 0, 'totalPages': 0}
    """
    return {
        "items": list(items),
        "page": page,
        "pageSize": page_size,
        "total": total,
        "totalPages": total_pages(total, page_size),
    }
