from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the JSON Lines error log.

One record is written for every user-facing dataset error the CLI reports.
The key set is fixed; consumers may rely on it.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: CSV file name the action was working on ("" when none)
        action: CLI action that failed (load, edit, append, filter, ...)
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: User-facing error message
    """
    timestamp: str  # ISO8601 UTC
    file: str
    action: str
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, action: str, error_type: str, message: str) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            action=action,
            error_type=error_type,
            message=message,
        )

    @staticmethod
    def from_exception(file: str, action: str, exc: Exception) -> ErrorRecord:
        error_type = getattr(exc, "error_type", type(exc).__name__.upper())
        return ErrorRecord.create(file, action, error_type, str(exc))

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
