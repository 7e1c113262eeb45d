from __future__ import annotations

import io
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

"""CSV reader/writer on top of pandas.

The core never sees pandas objects: decoding produces a ParsedCsv (field
list, row dicts of strings, parse issues) and encoding takes plain row
mappings plus the column order.

- Every value is read as text (dtype=str, no NA conversion), so "007",
  "NA" and "" round-trip unchanged.
- Rows with more fields than the header are not silently truncated: they are
  reported as ParseIssue entries and the caller decides (the session refuses
  the whole file).
"""

__all__ = [
    "ParseIssue",
    "ParsedCsv",
    "parse_csv_text",
    "read_csv_file",
    "write_csv",
    "export_file_name",
    "EXPORT_SUFFIX",
]

EXPORT_SUFFIX = ".csv"


@dataclass(frozen=True)
class ParseIssue:
    """One decoding problem, as reported by the decoder."""
    message: str


@dataclass
class ParsedCsv:
    fields: list[str]
    rows: list[dict[str, str]]  # column name -> text
    errors: list[ParseIssue] = field(default_factory=list)


def _unique_fields(header: list[str]) -> list[str]:
    """Make header names unique the way pandas does ("a", "a.1", "a.2")."""
    counts: dict[str, int] = {}
    fields: list[str] = []
    for name in header:
        if name in counts:
            counts[name] += 1
            candidate = f"{name}.{counts[name]}"
            while candidate in counts:
                counts[name] += 1
                candidate = f"{name}.{counts[name]}"
            counts[candidate] = 0
            fields.append(candidate)
        else:
            counts[name] = 0
            fields.append(name)
    return fields


def parse_csv_text(text: str) -> ParsedCsv:
    """Decode CSV text. First non-blank line is the header.

    Never raises for malformed content; problems are returned in ``errors``.
    Completely empty input yields an empty ParsedCsv without errors.
    """
    issues: list[ParseIssue] = []

    def _bad_line(bad: list[str]) -> None:
        issues.append(ParseIssue(f"Too many fields: parsed {len(bad)} fields"))
        return None

    # header=None: the header row is taken by hand so the first line fixes the
    # field count and longer data rows reach _bad_line instead of being
    # folded into an implicit index.
    try:
        df = pd.read_csv(
            io.StringIO(text),
            header=None,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            skip_blank_lines=True,
            engine="python",
            on_bad_lines=_bad_line,
        )
    except pd.errors.EmptyDataError:
        return ParsedCsv(fields=[], rows=[])
    except pd.errors.ParserError as e:
        return ParsedCsv(fields=[], rows=[], errors=[ParseIssue(str(e).strip())])

    # Short rows are padded with NaN even with na_filter=False
    records = df.fillna("").values.tolist()
    if not records:
        return ParsedCsv(fields=[], rows=[])
    fields = _unique_fields([str(v) for v in records[0]])
    rows = [
        {col: str(val) for col, val in zip(fields, record, strict=False)}
        for record in records[1:]
    ]
    expected = len(fields)
    issues = [ParseIssue(f"{i.message}, expected {expected}") for i in issues]
    return ParsedCsv(fields=fields, rows=rows, errors=issues)


def read_csv_file(path: Path) -> ParsedCsv:
    """Read a UTF-8 CSV file (a leading BOM is ignored) and decode it."""
    return parse_csv_text(path.read_text(encoding="utf-8-sig"))


def write_csv(rows: Iterable[Mapping[str, str]], columns: Sequence[str]) -> str:
    """Encode rows as CSV text: header first, one row per line, columns in order."""
    df = pd.DataFrame(list(rows), columns=list(columns))
    return df.to_csv(index=False, lineterminator="\n")


def export_file_name(file_name: str) -> str:
    """Download name for an exported dataset: keep a .csv name, else add .csv."""
    if file_name.endswith(EXPORT_SUFFIX):
        return file_name
    return f"{file_name}{EXPORT_SUFFIX}"
