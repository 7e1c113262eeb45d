from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the csvdesk dataset editor.

These are the typed results of YAML loading in
csvdesk/config/loader.py. They are immutable for the whole session.
"""

__all__ = [
    "AppConfig",
    "Team",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_PAGE_SIZE_OPTIONS",
]

DEFAULT_PAGE_SIZE = 50
DEFAULT_PAGE_SIZE_OPTIONS = (10, 25, 50, 100)


@dataclass(frozen=True)
class Team:
    """A named, fixed set of row identities used as a coarse row filter.

    Membership is tested against the key column value as opaque text, so
    ``"007"`` and ``"7"`` are different identities.
    """
    key: str  # Unique configuration key (e.g. "alpha")
    name: str  # Display name shown next to an active filter
    ids: tuple[str, ...] = ()  # Member identities, configuration order

    @property
    def id_set(self) -> frozenset[str]:
        return frozenset(self.ids)


@dataclass(frozen=True)
class AppConfig:
    """Root configuration object loaded once at start-up."""
    teams: tuple[Team, ...] = ()
    page_size: int = DEFAULT_PAGE_SIZE  # Default rows per page
    page_size_options: tuple[int, ...] = field(default=DEFAULT_PAGE_SIZE_OPTIONS)
