from __future__ import annotations

from collections.abc import Sequence

from ..models.errors import ReadOnlyColumnError, UnknownColumnError
from ..models.results import EditResult, Row

"""Edit Propagator: apply one cell edit to the master and the cached view.

Matched rows (same key column text) are replaced by a copy with only the
edited column changed. Every other row keeps its identity, so ``old is new``
tells a consumer that a row did not change. The view is patched with the
same rule rather than re-filtered: a row being edited stays visible even if
its new content would no longer match the active filter.
"""

__all__ = [
    "edit_cell",
]


def edit_cell(
    master: Sequence[Row],
    view: Sequence[Row],
    key_column: str,
    row_key: str,
    column: str,
    value: str,
    columns: Sequence[str],
) -> EditResult:
    """Set ``column`` to ``value`` on every row whose key is ``row_key``.

    Raises:
        ReadOnlyColumnError: ``column`` is the key column
        UnknownColumnError: ``column`` is not in ``columns``
    """
    if column == key_column:
        raise ReadOnlyColumnError(column)
    if column not in columns:
        raise UnknownColumnError(column)

    # id(old row) -> replacement, so the view reuses the master's new objects
    replaced: dict[int, Row] = {}
    new_master: list[Row] = []
    for row in master:
        if row.get(key_column) == row_key:
            new_row = {**row, column: value}
            replaced[id(row)] = new_row
            new_master.append(new_row)
        else:
            new_master.append(row)

    new_view: list[Row] = []
    for row in view:
        if id(row) in replaced:
            new_view.append(replaced[id(row)])
        elif row.get(key_column) == row_key:
            new_view.append({**row, column: value})
        else:
            new_view.append(row)

    return EditResult(master=new_master, view=new_view, changed=len(replaced))
