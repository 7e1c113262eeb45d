from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from ..csvio.reader import ParsedCsv
from ..models.errors import InsufficientColumns
from ..models.results import MergeResult, Row

"""Merge/Dedup Engine: append candidate rows whose key is not in the master.

Candidates only populate the first two columns (key + first value column);
every later column of an appended row is the empty string. Deduplication is
against the master as it was before the call, existing duplicates are not
resolved.
"""

__all__ = [
    "merge_append",
    "candidates_from_parsed",
    "candidates_from_pairs",
]

logger = logging.getLogger(__name__)


def merge_append(
    master: Sequence[Row],
    candidates: Iterable[Mapping[str, object]],
    columns: Sequence[str],
) -> MergeResult:
    """Append candidates with a new key after all master rows.

    Raises:
        InsufficientColumns: fewer than 2 columns (nothing to populate)
    """
    if len(columns) < 2:
        raise InsufficientColumns(len(columns))

    key_col, value_col = columns[0], columns[1]
    existing = {row.get(key_col) for row in master}

    appended: list[Row] = []
    duplicates: list[str] = []
    skipped_blank = 0
    for cand in candidates:
        raw_key = cand.get(key_col)
        key = "" if raw_key is None else str(raw_key)
        if not key.strip():
            skipped_blank += 1
            continue
        if key in existing:
            duplicates.append(key)
            continue
        raw_value = cand.get(value_col)
        row: Row = {col: "" for col in columns}
        row[key_col] = key
        row[value_col] = "" if raw_value is None else str(raw_value)
        appended.append(row)

    logger.debug(
        f"merge: appended={len(appended)} duplicates={len(duplicates)} blank={skipped_blank}"
    )
    return MergeResult(
        rows=[*master, *appended],
        appended_count=len(appended),
        duplicate_keys=tuple(duplicates),
        skipped_blank=skipped_blank,
    )


def candidates_from_pairs(pairs: Iterable[tuple[str, str]], columns: Sequence[str]) -> list[dict[str, str]]:
    """Turn (key, value) pairs into candidate mappings for ``merge_append``."""
    if len(columns) < 2:
        raise InsufficientColumns(len(columns))
    return [{columns[0]: key, columns[1]: value} for key, value in pairs]


def candidates_from_parsed(parsed: ParsedCsv, columns: Sequence[str]) -> list[dict[str, str]]:
    """Map a decoded candidate CSV positionally onto the master's first two columns.

    The candidate file's own header names do not matter: its first field is
    the key, its second field (if any) the value.
    """
    if not parsed.fields:
        return []
    first = parsed.fields[0]
    second = parsed.fields[1] if len(parsed.fields) > 1 else None
    pairs = [
        (row.get(first, ""), row.get(second, "") if second is not None else "")
        for row in parsed.rows
    ]
    return candidates_from_pairs(pairs, columns)
