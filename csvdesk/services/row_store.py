from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from ..models.errors import EmptyDataset
from ..models.results import LoadResult, Row

"""Row Store: the master ordered row collection and its column list.

The column list is set once per load and never changes afterwards; the first
column is the key column. Rows are plain dicts rebuilt in column order with
every value coerced to text.
"""

__all__ = [
    "RowStore",
    "is_blank_row",
    "normalize_row",
]

logger = logging.getLogger(__name__)


def _as_text(value: object) -> str:
    return "" if value is None else str(value)


def normalize_row(raw: Mapping[str, object], columns: Sequence[str]) -> Row:
    """Rebuild a raw mapping as a Row in column order (missing values -> "")."""
    return {col: _as_text(raw.get(col)) for col in columns}


def is_blank_row(row: Mapping[str, str], columns: Sequence[str]) -> bool:
    """True when every field is empty or whitespace."""
    return all(not row.get(col, "").strip() for col in columns)


class RowStore:
    """Holds the master rows and the immutable column list of the session."""

    def __init__(self) -> None:
        self._rows: list[Row] = []
        self._columns: tuple[str, ...] = ()
        self._file_name: str = ""

    @property
    def rows(self) -> list[Row]:
        return self._rows

    @property
    def columns(self) -> tuple[str, ...]:
        return self._columns

    @property
    def file_name(self) -> str:
        return self._file_name

    @property
    def key_column(self) -> str | None:
        return self._columns[0] if self._columns else None

    @property
    def is_loaded(self) -> bool:
        return bool(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def load(
        self,
        rows: Iterable[Mapping[str, object]],
        columns: Sequence[str],
        file_name: str = "",
    ) -> LoadResult:
        """Replace the whole store with ``rows``.

        Drops, in order: blank rows, rows with a blank key value, and later
        occurrences of an already seen key. Relative order of the survivors
        is preserved.

        Raises:
            EmptyDataset: when no row survives; the store is left untouched.
        """
        cols = tuple(str(c) for c in columns)
        if not cols:
            raise EmptyDataset()
        key = cols[0]

        kept: list[Row] = []
        seen: set[str] = set()
        blank = keyless = 0
        duplicates: list[str] = []
        for raw in rows:
            row = normalize_row(raw, cols)
            if is_blank_row(row, cols):
                blank += 1
                continue
            ident = row[key]
            if not ident.strip():
                keyless += 1
                continue
            if ident in seen:
                duplicates.append(ident)
                continue
            seen.add(ident)
            kept.append(row)

        if not kept:
            raise EmptyDataset()

        if keyless:
            logger.warning(f"dropped {keyless} row(s) with a blank '{key}' value")
        if duplicates:
            logger.warning(f"dropped {len(duplicates)} row(s) with a duplicate '{key}': {duplicates[:5]}")

        self._rows = kept
        self._columns = cols
        self._file_name = file_name
        logger.debug(f"row store loaded: rows={len(kept)} blank={blank} columns={list(cols)}")
        return LoadResult(
            file_name=file_name,
            columns=cols,
            kept_rows=len(kept),
            blank_rows=blank,
            keyless_rows=keyless,
            duplicate_keys=tuple(duplicates),
        )

    def replace_rows(self, rows: list[Row]) -> None:
        """Install a new master list produced by the edit or merge engines."""
        self._rows = rows

    def reset(self) -> None:
        self._rows = []
        self._columns = ()
        self._file_name = ""
