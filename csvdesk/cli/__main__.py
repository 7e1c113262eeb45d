from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from csvdesk.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from csvdesk.csvio.reader import read_csv_file, write_csv
from csvdesk.logging.error_log import ErrorLogBuffer
from csvdesk.logging.init import get_logger, log_summary, set_debug, setup_logging
from csvdesk.models.error_record import ErrorRecord
from csvdesk.models.errors import CsvParseError, DatasetError
from csvdesk.models.results import MergeResult
from csvdesk.services.progress import ProgressTracker
from csvdesk.services.session import Session
from csvdesk.services.summary import render_edit_summary, render_merge_summary, render_view_summary

"""CLI entrypoint.

    csvdesk [--debug] [--config PATH] show FILE [--search TERM] [--team KEY] [--page N] [--page-size N]
    csvdesk [--debug] [--config PATH] edit FILE --key K --column C --value V -o OUT
    csvdesk [--debug] [--config PATH] append FILE CANDIDATE... -o OUT
    csvdesk [--debug] [--config PATH] teams [--search TERM]

Config path resolution: --config, then CSVDESK_CONFIG (a .env file in the
working directory is loaded first), then config/teams.yml.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_DATASET_ERROR = 2

CONFIG_ENV_VAR = "CSVDESK_CONFIG"


def _load_env_file(path: Path) -> None:
    """Load .env using python-dotenv without overriding the real environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not an integer: {text}") from e
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1: {text}")
    return value


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="csvdesk", description="Browse, filter, edit and merge CSV datasets")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--config", type=Path, default=None, help="Team configuration YAML")
    sub = p.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Print one page of a (filtered) dataset")
    show.add_argument("file", type=Path)
    show.add_argument("--search", default=None, help="Case-insensitive text searched in every column")
    show.add_argument("--team", default=None, help="Only rows whose key belongs to this team")
    show.add_argument("--page", type=int, default=1, help="Page number (clamped to the valid range)")
    show.add_argument("--page-size", type=_positive_int, default=None, help="Rows per page (one of page_size_options)")

    edit = sub.add_parser("edit", help="Edit one cell and export the dataset")
    edit.add_argument("file", type=Path)
    edit.add_argument("--key", required=True, help="Key column value of the row to edit")
    edit.add_argument("--column", required=True, help="Column to edit (not the key column)")
    edit.add_argument("--value", required=True, help="New cell text")
    edit.add_argument("-o", "--output", type=Path, required=True, help="Export file or directory")

    append = sub.add_parser("append", help="Append rows with new keys from candidate CSVs and export")
    append.add_argument("file", type=Path)
    append.add_argument("candidates", type=Path, nargs="+", help="CSV files: first field key, second value")
    append.add_argument("-o", "--output", type=Path, required=True, help="Export file or directory")

    teams = sub.add_parser("teams", help="List configured teams")
    teams.add_argument("--search", default=None, help="Case-insensitive team name filter")
    return p.parse_args(argv)


def _resolve_config_path(args: argparse.Namespace) -> Path:
    if args.config is not None:
        return args.config
    env_path = os.getenv(CONFIG_ENV_VAR)
    return Path(env_path) if env_path else DEFAULT_CONFIG_PATH


def _load_dataset(session: Session, path: Path) -> None:
    parsed = read_csv_file(path)
    session.load(parsed, path.name)


def _export(session: Session, output: Path) -> Path:
    target = output / session.export_file_name() if output.is_dir() else output
    target.write_text(session.export_csv(), encoding="utf-8")
    return target


def _cmd_show(session: Session, args: argparse.Namespace) -> int:
    _load_dataset(session, args.file)
    if args.page_size is not None:
        session.set_page_size(args.page_size)
    if args.team:
        session.select_team(args.team)
    if args.search:
        session.submit_search(args.search)
    session.set_page(args.page)

    page = session.current_slice()
    if session.active_team_name:
        print(f"Active filter: {session.active_team_name}")
    if page.rows:
        print(write_csv(page.rows, session.columns), end="")
    else:
        print(session.empty_message())
    log_summary(render_view_summary(session.file_name, len(session.rows), page).removeprefix("SUMMARY "))
    return EXIT_SUCCESS


def _cmd_edit(session: Session, args: argparse.Namespace) -> int:
    logger = get_logger()
    _load_dataset(session, args.file)
    result = session.edit_cell(args.key, args.column, args.value)
    target = _export(session, args.output)
    logger.info(f"exported to {target}")
    log_summary(render_edit_summary(session.file_name, result.changed, len(session.rows)).removeprefix("SUMMARY "))
    return EXIT_SUCCESS


def _cmd_append(session: Session, args: argparse.Namespace) -> int:
    logger = get_logger()
    _load_dataset(session, args.file)
    appended = 0
    duplicates: list[str] = []
    blank = 0
    with ProgressTracker(len(args.candidates)) as progress:
        for path in args.candidates:
            progress.start_file(path)
            result = session.append_parsed(read_csv_file(path))
            appended += result.appended_count
            duplicates.extend(result.duplicate_keys)
            blank += result.skipped_blank
            progress.finish_file(appended=appended)
    target = _export(session, args.output)
    logger.info(f"exported to {target}")
    total = MergeResult(
        rows=session.rows,
        appended_count=appended,
        duplicate_keys=tuple(duplicates),
        skipped_blank=blank,
    )
    log_summary(render_merge_summary(session.file_name, total).removeprefix("SUMMARY "))
    return EXIT_SUCCESS


def _cmd_teams(session: Session, args: argparse.Namespace) -> int:
    found = session.teams.search(args.search)
    for team in found:
        print(f"{team.key}\t{team.name}\t{len(team.ids)}")
    log_summary(f"teams={len(found)}/{len(session.teams)}")
    return EXIT_SUCCESS


COMMANDS = {
    "show": _cmd_show,
    "edit": _cmd_edit,
    "append": _cmd_append,
    "teams": _cmd_teams,
}


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read the process arguments when none are given ([] is a valid argv in tests)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        set_debug()
        logger.debug("debug mode enabled")

    config_path = _resolve_config_path(args)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    session = Session(cfg)
    errors = ErrorLogBuffer()
    file_name = args.file.name if getattr(args, "file", None) else ""
    try:
        return COMMANDS[args.command](session, args)
    except DatasetError as e:
        prefix = "error parsing CSV: " if isinstance(e, CsvParseError) else ""
        logger.error(f"{args.command}: {prefix}{e}")
        errors.append(ErrorRecord.from_exception(file_name, args.command, e))
        log_path = errors.flush()
        logger.debug(f"error log written: {log_path}")
        return EXIT_DATASET_ERROR
    except (OSError, UnicodeDecodeError) as e:
        # missing, unreadable or not UTF-8: nothing was loaded
        logger.error(f"{args.command}: {e}")
        return EXIT_FATAL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
