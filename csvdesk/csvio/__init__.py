"""CSV decoding/encoding collaborators built on pandas."""

from .reader import ParseIssue, ParsedCsv, export_file_name, parse_csv_text, read_csv_file, write_csv

__all__ = [
    "ParseIssue",
    "ParsedCsv",
    "export_file_name",
    "parse_csv_text",
    "read_csv_file",
    "write_csv",
]
