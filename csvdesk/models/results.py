from __future__ import annotations

from dataclasses import dataclass

"""Result models for Row Store, Merge Engine and Edit Propagator operations."""

__all__ = [
    "Row",
    "LoadResult",
    "MergeResult",
    "EditResult",
]

# Column name -> cell text. Insertion order follows the column list.
Row = dict[str, str]


@dataclass(frozen=True)
class LoadResult:
    """Outcome of a successful load.

    Counts of dropped rows are reported per reason so the caller can warn
    about them; the kept rows are available from the row store itself.
    """
    file_name: str
    columns: tuple[str, ...]
    kept_rows: int
    blank_rows: int = 0  # Every field empty or whitespace
    keyless_rows: int = 0  # Blank key column value
    duplicate_keys: tuple[str, ...] = ()  # Later occurrences dropped

    @property
    def dropped_rows(self) -> int:
        return self.blank_rows + self.keyless_rows + len(self.duplicate_keys)


@dataclass(frozen=True)
class MergeResult:
    """Outcome of appending candidate rows to a master collection."""
    rows: list[Row]  # New master: old rows (same objects) + appended rows
    appended_count: int
    duplicate_keys: tuple[str, ...] = ()  # Candidate keys already in the master
    skipped_blank: int = 0  # Candidates without a key value


@dataclass(frozen=True)
class EditResult:
    """Outcome of a single-cell edit applied to master and view."""
    master: list[Row]
    view: list[Row]
    changed: int = 0  # Master rows whose value was replaced
