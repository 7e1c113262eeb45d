from __future__ import annotations

from collections.abc import Mapping, Sequence

from ..models.config_models import Team
from ..models.filter_spec import FilterSpec
from ..models.results import Row

"""Filter Engine: master rows + FilterSpec -> view.

Two AND-composed stages, always in this order:
1. team membership on the key column value (exact text, set membership)
2. case-folded substring search over every column value

The result is a new list holding the master's own row objects in their
original relative order. The input list is never mutated.
"""

__all__ = [
    "apply_filter",
    "row_matches_search",
]


def row_matches_search(row: Row, term: str, columns: Sequence[str] | None = None) -> bool:
    """True when at least one column value contains ``term`` (already case-folded)."""
    values = row.values() if columns is None else (row.get(c, "") for c in columns)
    return any(term in value.casefold() for value in values)


def apply_filter(
    master: Sequence[Row],
    spec: FilterSpec,
    key_column: str | None,
    teams: Mapping[str, Team] | None = None,
    columns: Sequence[str] | None = None,
) -> list[Row]:
    """Return ``filter(master, spec)``.

    An unknown team key (or no key column) skips the team stage instead of
    raising; rejecting unknown keys is the caller's job.
    """
    view = list(master)

    team = (teams or {}).get(spec.team) if spec.team else None
    if team is not None and key_column:
        ids = team.id_set
        view = [row for row in view if row.get(key_column) in ids]

    if spec.search:
        term = spec.search
        view = [row for row in view if row_matches_search(row, term, columns)]

    return view
