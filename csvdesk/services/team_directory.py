from __future__ import annotations

from collections.abc import Iterable, Iterator

from ..models.config_models import Team

"""Team Directory: read-only lookup over the configured teams."""

__all__ = [
    "TeamDirectory",
]


class TeamDirectory:
    """Configured teams keyed by ``Team.key``, in configuration order."""

    def __init__(self, teams: Iterable[Team] = ()) -> None:
        self._teams: dict[str, Team] = {t.key: t for t in teams}

    def __contains__(self, key: object) -> bool:
        return key in self._teams

    def __iter__(self) -> Iterator[Team]:
        return iter(self._teams.values())

    def __len__(self) -> int:
        return len(self._teams)

    @property
    def by_key(self) -> dict[str, Team]:
        return dict(self._teams)

    def get(self, key: str | None) -> Team | None:
        if key is None:
            return None
        return self._teams.get(key)

    def names(self) -> dict[str, str]:
        """Team key -> display name."""
        return {key: team.name for key, team in self._teams.items()}

    def ids_for(self, key: str) -> frozenset[str]:
        team = self._teams.get(key)
        return team.id_set if team is not None else frozenset()

    def search(self, term: str | None) -> list[Team]:
        """Teams whose name contains ``term`` (case-insensitive); all when empty."""
        needle = (term or "").strip().casefold()
        if not needle:
            return list(self._teams.values())
        return [t for t in self._teams.values() if needle in t.name.casefold()]
