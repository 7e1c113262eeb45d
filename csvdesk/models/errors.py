from __future__ import annotations

"""Exception taxonomy for dataset operations.

Every DatasetError is a local, recoverable condition: the operation that
raised it has not mutated any session state, and the message is meant to be
shown to the user as-is. ``error_type`` is the UPPER_SNAKE label written to
the JSON Lines error log.
"""

__all__ = [
    "DatasetError",
    "CsvParseError",
    "EmptyDataset",
    "InsufficientColumns",
    "ReadOnlyColumnError",
    "UnknownColumnError",
    "UnknownTeamError",
    "UnsupportedPageSize",
]


class DatasetError(Exception):
    """Base class for user-facing dataset errors."""
    error_type = "DATASET_ERROR"


class CsvParseError(DatasetError):
    """Raised when the CSV decoder reported at least one error."""
    error_type = "CSV_PARSE_ERROR"


class EmptyDataset(DatasetError):
    """Raised when no row survives the blank-row check at load time."""
    error_type = "EMPTY_DATASET"

    def __init__(self, message: str = "the CSV file is empty or could not be parsed") -> None:
        super().__init__(message)


class InsufficientColumns(DatasetError):
    """Raised when rows are appended to a dataset with fewer than 2 columns."""
    error_type = "INSUFFICIENT_COLUMNS"

    def __init__(self, column_count: int) -> None:
        super().__init__(
            f"cannot append rows: dataset has {column_count} column(s), at least 2 are required"
        )
        self.column_count = column_count


class ReadOnlyColumnError(DatasetError):
    """Raised on an attempt to edit the key column."""
    error_type = "READ_ONLY_COLUMN"

    def __init__(self, column: str) -> None:
        super().__init__(f"column '{column}' is the key column and cannot be edited")
        self.column = column


class UnknownColumnError(DatasetError):
    """Raised on an attempt to edit a column that is not in the dataset."""
    error_type = "UNKNOWN_COLUMN"

    def __init__(self, column: str) -> None:
        super().__init__(f"unknown column: '{column}'")
        self.column = column


class UnknownTeamError(DatasetError):
    """Raised when selecting a team key that is not configured."""
    error_type = "UNKNOWN_TEAM"

    def __init__(self, team_key: str) -> None:
        super().__init__(f"unknown team: '{team_key}'")
        self.team_key = team_key


class UnsupportedPageSize(DatasetError):
    """Raised when a page size outside the configured options is requested."""
    error_type = "UNSUPPORTED_PAGE_SIZE"

    def __init__(self, page_size: int, options: tuple[int, ...]) -> None:
        choices = ", ".join(str(o) for o in options)
        super().__init__(f"page size {page_size} is not available (choose from {choices})")
        self.page_size = page_size
        self.options = options
