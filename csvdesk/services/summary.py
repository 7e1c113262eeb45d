from __future__ import annotations

from ..models.page import PageSlice
from ..models.results import MergeResult

"""SUMMARY line rendering.

Formats (one line each, fields separated by single spaces):

    SUMMARY file={name} rows={master} view={view} page={p}/{t} page_size={s} showing={a}-{b}
    SUMMARY file={name} appended={n} duplicates={d} blank={k} rows={master}
    SUMMARY file={name} edited={n} rows={master}
"""

__all__ = [
    "render_view_summary",
    "render_merge_summary",
    "render_edit_summary",
]


def _file_label(file_name: str) -> str:
    # Keep the line splittable on spaces
    return file_name.replace(" ", "_") if file_name else "-"


def render_view_summary(file_name: str, master_rows: int, page_slice: PageSlice) -> str:
    """Render the SUMMARY line for a displayed page.

    Examples:
        >>> from csvdesk.models.page import PageSlice
        >>> s = PageSlice(rows=[{"id": "5"}], page=3, total_pages=3, page_size=2, total_rows=5, start_index=4)
        >>> render_view_summary("people.csv", 7, s)
        'SUMMARY file=people.csv rows=7 view=5 page=3/3 page_size=2 showing=5-5'
    """
    return (
        f"SUMMARY file={_file_label(file_name)} "
        f"rows={master_rows} "
        f"view={page_slice.total_rows} "
        f"page={page_slice.page}/{page_slice.total_pages} "
        f"page_size={page_slice.page_size} "
        f"showing={page_slice.first_row_number}-{page_slice.last_row_number}"
    )


def render_merge_summary(file_name: str, result: MergeResult) -> str:
    return (
        f"SUMMARY file={_file_label(file_name)} "
        f"appended={result.appended_count} "
        f"duplicates={len(result.duplicate_keys)} "
        f"blank={result.skipped_blank} "
        f"rows={len(result.rows)}"
    )


def render_edit_summary(file_name: str, changed: int, master_rows: int) -> str:
    return f"SUMMARY file={_file_label(file_name)} edited={changed} rows={master_rows}"
