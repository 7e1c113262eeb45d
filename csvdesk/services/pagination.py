from __future__ import annotations

import math
from collections.abc import Sequence

from ..models.page import PageSlice
from ..models.results import Row

"""Pagination Engine: view + page size + requested page -> PageSlice.

Out-of-range pages (0, negative, past the end) are clamped, never rejected.
"""

__all__ = [
    "total_pages_for",
    "clamp_page",
    "paginate",
]


def total_pages_for(total_rows: int, page_size: int) -> int:
    """max(1, ceil(total_rows / page_size))."""
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    return max(1, math.ceil(total_rows / page_size))


def clamp_page(requested_page: int, total_pages: int) -> int:
    return min(max(requested_page, 1), total_pages)


def paginate(view: Sequence[Row], page_size: int, requested_page: int) -> PageSlice:
    total_rows = len(view)
    total_pages = total_pages_for(total_rows, page_size)
    page = clamp_page(requested_page, total_pages)
    start = (page - 1) * page_size
    return PageSlice(
        rows=list(view[start:start + page_size]),
        page=page,
        total_pages=total_pages,
        page_size=page_size,
        total_rows=total_rows,
        start_index=start,
    )
