"""
Page/limit helpers shared by the listing endpoints
"""

import math
from typing import Tuple

MAX_PAGE_SIZE = 100


def page_bounds(page: int, limit: int) -> Tuple[int, int]:
    """Clamp page/limit and return (limit, offset)"""
    page = max(page, 1)
    limit = min(max(limit, 1), MAX_PAGE_SIZE)
    return limit, (page - 1) * limit


def page_info(total: int, page: int, limit: int) -> dict:
    limit, _ = page_bounds(page, limit)
    return {
        "total": total,
        "total_pages": math.ceil(total / limit) if total else 0,
        "current_page": max(page, 1),
    }
