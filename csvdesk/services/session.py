from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from ..csvio.reader import ParsedCsv, export_file_name, write_csv
from ..models.config_models import AppConfig
from ..models.errors import (
    CsvParseError,
    ReadOnlyColumnError,
    UnknownColumnError,
    UnknownTeamError,
    UnsupportedPageSize,
)
from ..models.filter_spec import FilterSpec
from ..models.page import PageSlice, PageState
from ..models.results import EditResult, LoadResult, MergeResult, Row
from .edit_propagator import edit_cell
from .filter_engine import apply_filter
from .merge import candidates_from_parsed, merge_append
from .pagination import paginate, total_pages_for
from .row_store import RowStore
from .team_directory import TeamDirectory

"""Session: the single owner of master rows, filter spec, page state and view.

State is (master, filter spec, page state). The view is derived from the
master and filter spec on read and cached; the cache is dropped whenever the
master is replaced or appended to, and on every search or team action (also
when the same search is submitted again). The only path that
touches the cached view directly is a cell edit, which patches it so the
edited row stays on screen.

Ordering rule: the view is always brought up to date before the page is
clamped against it.
"""

__all__ = [
    "Session",
    "NO_DATA_MESSAGE",
    "NO_MATCH_MESSAGE",
]

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data to display."
NO_MATCH_MESSAGE = "No results match your filters."


class Session:
    """In-memory editing session over one loaded CSV dataset."""

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or AppConfig()
        self.teams = TeamDirectory(self.config.teams)
        self.store = RowStore()
        self.filter_spec = FilterSpec()
        self.page_state = PageState(page_size=self.config.page_size)
        # Bumped on every mutation; master_version only when the row set changes
        self.version = 0
        self._master_version = 0
        self._view: list[Row] | None = None
        self._view_key: tuple[int, FilterSpec] | None = None

    # ------------------------------------------------------------------ #
    # read side
    # ------------------------------------------------------------------ #
    @property
    def columns(self) -> tuple[str, ...]:
        return self.store.columns

    @property
    def key_column(self) -> str | None:
        return self.store.key_column

    @property
    def rows(self) -> list[Row]:
        return self.store.rows

    @property
    def file_name(self) -> str:
        return self.store.file_name

    @property
    def view(self) -> list[Row]:
        key = (self._master_version, self.filter_spec)
        if self._view is None or self._view_key != key:
            self._view = apply_filter(
                self.store.rows,
                self.filter_spec,
                self.store.key_column,
                self.teams.by_key,
                self.store.columns,
            )
            self._view_key = key
        return self._view

    def current_slice(self) -> PageSlice:
        page_slice = paginate(self.view, self.page_state.page_size, self.page_state.page)
        if page_slice.page != self.page_state.page:
            self.page_state = PageState(self.page_state.page_size, page_slice.page)
        return page_slice

    @property
    def active_team_name(self) -> str | None:
        team = self.teams.get(self.filter_spec.team)
        return team.name if team is not None else None

    @property
    def has_active_filters(self) -> bool:
        return self.filter_spec.is_active

    def empty_message(self) -> str:
        return NO_MATCH_MESSAGE if self.has_active_filters else NO_DATA_MESSAGE

    # ------------------------------------------------------------------ #
    # mutations
    # ------------------------------------------------------------------ #
    def _touch(self, *, master_changed: bool = False, rederive: bool = False) -> None:
        self.version += 1
        if master_changed:
            self._master_version += 1
        if master_changed or rederive:
            self._view = None
            self._view_key = None

    def _clamp_page(self) -> None:
        total = total_pages_for(len(self.view), self.page_state.page_size)
        if self.page_state.page > total:
            self.page_state = PageState(self.page_state.page_size, total)

    def _go_to(self, page: int) -> None:
        self.page_state = PageState(self.page_state.page_size, page)
        self._clamp_page()

    def load(self, parsed: ParsedCsv, file_name: str = "") -> LoadResult:
        """Replace the dataset with a decoded CSV.

        Raises:
            CsvParseError: the decoder reported errors (first message is kept)
            EmptyDataset: no non-blank row
        Prior state survives either failure.
        """
        if parsed.errors:
            first = parsed.errors[0]
            logger.debug(f"parse errors in {file_name}: {[e.message for e in parsed.errors]}")
            raise CsvParseError(first.message)

        result = self.store.load(parsed.rows, parsed.fields, file_name)
        self.filter_spec = FilterSpec()
        self.page_state = PageState(self.page_state.page_size, 1)
        self._touch(master_changed=True)
        logger.info(f"loaded {file_name or '<unnamed>'}: {result.kept_rows} rows, {len(result.columns)} columns")
        if result.blank_rows:
            logger.debug(f"skipped {result.blank_rows} blank row(s)")
        return result

    def reset(self) -> None:
        self.store.reset()
        self.filter_spec = FilterSpec()
        self.page_state = PageState(page_size=self.config.page_size)
        self._touch(master_changed=True)
        logger.debug("session reset")

    def submit_search(self, term: str | None) -> None:
        self.filter_spec = self.filter_spec.with_search(term)
        self._touch(rederive=True)
        self._go_to(1)
        logger.debug(f"search={self.filter_spec.search!r} view={len(self.view)}")

    def clear_search(self) -> None:
        self.filter_spec = self.filter_spec.with_search(None)
        self._touch(rederive=True)
        self._clamp_page()

    def select_team(self, team_key: str) -> None:
        """Restrict the view to one configured team.

        Raises:
            UnknownTeamError: ``team_key`` is not configured; the filter is unchanged
        """
        if team_key not in self.teams:
            raise UnknownTeamError(team_key)
        self.filter_spec = self.filter_spec.with_team(team_key)
        self._touch(rederive=True)
        self._go_to(1)
        logger.debug(f"team={team_key} view={len(self.view)}")

    def clear_team(self) -> None:
        self.filter_spec = self.filter_spec.with_team(None)
        self._touch(rederive=True)
        self._go_to(1)

    def set_page(self, page: int) -> int:
        """Request a page; returns the effective (clamped) page."""
        self._go_to(max(page, 1))
        self._touch()
        return self.page_state.page

    def next_page(self) -> int:
        return self.set_page(self.page_state.page + 1)

    def previous_page(self) -> int:
        return self.set_page(self.page_state.page - 1)

    def set_page_size(self, page_size: int) -> None:
        """Switch rows per page (one of the configured options) and go to page 1."""
        state = PageState(page_size=page_size, page=1)
        if page_size not in self.config.page_size_options:
            raise UnsupportedPageSize(page_size, self.config.page_size_options)
        self.page_state = state
        self._touch()

    def edit_cell(self, row_key: str, column: str, value: str) -> EditResult:
        """Set one cell on the row(s) with key ``row_key``.

        Raises:
            ReadOnlyColumnError: ``column`` is the key column
            UnknownColumnError: ``column`` is not a dataset column
        """
        key_column = self.store.key_column
        if key_column is None:
            raise UnknownColumnError(column)
        if column == key_column:
            raise ReadOnlyColumnError(column)

        result = edit_cell(
            self.store.rows, self.view, key_column, row_key, column, value, self.store.columns
        )
        self.store.replace_rows(result.master)
        self._view = result.view
        self._touch()
        if result.changed:
            logger.debug(f"edit {key_column}={row_key} {column}={value!r}")
        else:
            logger.warning(f"edit: no row with {key_column}={row_key}")
        return result

    def append_rows(self, candidates: Iterable[Mapping[str, object]]) -> MergeResult:
        """Append candidate rows whose key is new.

        Raises:
            InsufficientColumns: the dataset has fewer than 2 columns
        """
        result = merge_append(self.store.rows, candidates, self.store.columns)
        if result.appended_count:
            self.store.replace_rows(result.rows)
            self._touch(master_changed=True)
            self._clamp_page()
        logger.info(
            f"appended {result.appended_count} row(s), skipped {len(result.duplicate_keys)} duplicate(s)"
        )
        return result

    def export_csv(self) -> str:
        return write_csv(self.store.rows, self.store.columns)

    def export_file_name(self) -> str:
        return export_file_name(self.store.file_name)

    def append_parsed(self, parsed: ParsedCsv) -> MergeResult:
        """Append rows from a decoded candidate CSV (first field = key, second = value).

        Raises:
            CsvParseError: the candidate file had decoding errors
            InsufficientColumns: the dataset has fewer than 2 columns
        """
        if parsed.errors:
            raise CsvParseError(parsed.errors[0].message)
        return self.append_rows(candidates_from_parsed(parsed, self.store.columns))
