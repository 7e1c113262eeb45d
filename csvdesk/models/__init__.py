"""Domain models for the csvdesk dataset editor.

This package contains the value objects shared by the services layer: team
configuration, filter and page state, operation results, error records and
the exception taxonomy.
"""

from .config_models import AppConfig, Team
from .errors import (
    CsvParseError,
    DatasetError,
    EmptyDataset,
    InsufficientColumns,
    ReadOnlyColumnError,
    UnknownColumnError,
    UnknownTeamError,
    UnsupportedPageSize,
)
from .filter_spec import FilterSpec
from .page import PageSlice, PageState
from .results import EditResult, LoadResult, MergeResult, Row

__all__ = [
    # Configuration models
    "AppConfig",
    "Team",
    # View state models
    "FilterSpec",
    "PageSlice",
    "PageState",
    # Operation results
    "EditResult",
    "LoadResult",
    "MergeResult",
    "Row",
    # Errors
    "CsvParseError",
    "DatasetError",
    "EmptyDataset",
    "InsufficientColumns",
    "ReadOnlyColumnError",
    "UnknownColumnError",
    "UnknownTeamError",
    "UnsupportedPageSize",
]
