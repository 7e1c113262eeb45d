from __future__ import annotations

from dataclasses import dataclass

from .results import Row

"""Page state and page slice models.

PageState is what the session stores between actions; PageSlice is what the
pagination engine hands to the presentation layer.
"""

__all__ = [
    "PageState",
    "PageSlice",
]


@dataclass(frozen=True)
class PageState:
    """Requested page position. Clamped against the view on every read."""
    page_size: int
    page: int = 1

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")


@dataclass(frozen=True)
class PageSlice:
    """Bounded visible portion of a view.

    Attributes:
        rows: Rows on this page, in view order
        page: Effective (clamped) 1-based page number
        total_pages: max(1, ceil(total_rows / page_size))
        page_size: Rows per page used for this slice
        total_rows: Number of rows in the whole view
        start_index: 0-based view index of the first row on this page
    """
    rows: list[Row]
    page: int
    total_pages: int
    page_size: int
    total_rows: int
    start_index: int

    @property
    def first_row_number(self) -> int:
        """1-based position of the first visible row (0 when the view is empty)."""
        return self.start_index + 1 if self.rows else 0

    @property
    def last_row_number(self) -> int:
        return self.start_index + len(self.rows)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages
