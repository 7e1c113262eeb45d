from __future__ import annotations

import json
from pathlib import Path

import pytest

from csvdesk.cli import EXIT_DATASET_ERROR, EXIT_FATAL, EXIT_SUCCESS
from csvdesk.cli import main as cli_main

"""Exit code contract: 0 success, 1 fatal start-up/file error, 2 dataset error."""


def _error_log_lines(workdir: Path) -> list[dict]:
    logs = sorted((workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    return [json.loads(line) for line in logs[0].read_text(encoding="utf-8").splitlines()]


def test_exit_code_values():
    assert (EXIT_SUCCESS, EXIT_FATAL, EXIT_DATASET_ERROR) == (0, 1, 2)


def test_exit_code_missing_config(temp_workdir: Path, write_csv_file: Path, capsys):
    code = cli_main(["show", str(write_csv_file)])
    assert code == EXIT_FATAL
    assert "ERROR config: config file not found" in capsys.readouterr().out


def test_exit_code_missing_data_file(temp_workdir: Path, write_config: Path, capsys):
    code = cli_main(["show", "data/nope.csv"])
    assert code == EXIT_FATAL
    assert "ERROR show:" in capsys.readouterr().out
    assert not (temp_workdir / "logs").exists()


def test_exit_code_success(temp_workdir: Path, write_config: Path, write_csv_file: Path):
    assert cli_main(["show", str(write_csv_file)]) == EXIT_SUCCESS


def test_exit_code_parse_error(temp_workdir: Path, write_config: Path, capsys):
    bad = temp_workdir / "data" / "bad.csv"
    bad.write_text("id,name\n1,a,extra\n", encoding="utf-8")

    code = cli_main(["show", str(bad)])

    assert code == EXIT_DATASET_ERROR
    assert "ERROR show: error parsing CSV: Too many fields" in capsys.readouterr().out
    records = _error_log_lines(temp_workdir)
    assert records[0]["error_type"] == "CSV_PARSE_ERROR"
    assert records[0]["file"] == "bad.csv"
    assert records[0]["action"] == "show"
    assert records[0]["message"] == "Too many fields: parsed 3 fields, expected 2"


def test_exit_code_empty_dataset(temp_workdir: Path, write_config: Path, capsys):
    empty = temp_workdir / "data" / "empty.csv"
    empty.write_text("id,name\n , \n", encoding="utf-8")

    assert cli_main(["show", str(empty)]) == EXIT_DATASET_ERROR
    assert _error_log_lines(temp_workdir)[0]["error_type"] == "EMPTY_DATASET"


def test_exit_code_unknown_team(temp_workdir: Path, write_config: Path, write_csv_file: Path, capsys):
    code = cli_main(["show", str(write_csv_file), "--team", "zulu"])
    assert code == EXIT_DATASET_ERROR
    assert "ERROR show: unknown team: 'zulu'" in capsys.readouterr().out


def test_exit_code_key_column_edit(temp_workdir: Path, write_config: Path, write_csv_file: Path):
    code = cli_main([
        "edit", str(write_csv_file), "--key", "1", "--column", "id", "--value", "9", "-o", "out",
    ])
    assert code == EXIT_DATASET_ERROR
    assert _error_log_lines(temp_workdir)[0]["error_type"] == "READ_ONLY_COLUMN"
    assert not (temp_workdir / "out" / "people.csv").exists()


def test_exit_code_insufficient_columns(temp_workdir: Path, write_config: Path):
    ids = temp_workdir / "data" / "ids.csv"
    ids.write_text("id\n1\n", encoding="utf-8")
    cand = temp_workdir / "data" / "cand.csv"
    cand.write_text("id,name\n2,b\n", encoding="utf-8")

    code = cli_main(["append", str(ids), str(cand), "-o", "out"])
    assert code == EXIT_DATASET_ERROR
    assert _error_log_lines(temp_workdir)[0]["error_type"] == "INSUFFICIENT_COLUMNS"


def test_usage_error_exits_through_argparse(temp_workdir: Path, write_config: Path):
    with pytest.raises(SystemExit) as e:
        cli_main(["show"])
    assert e.value.code == 2


def test_exit_code_undecodable_data_file(temp_workdir: Path, write_config: Path, capsys):
    latin = temp_workdir / "data" / "latin.csv"
    latin.write_bytes(b"id,name\n1,\xff\xfe\n")

    code = cli_main(["show", str(latin)])

    assert code == EXIT_FATAL
    assert "ERROR show:" in capsys.readouterr().out
    assert not (temp_workdir / "logs").exists()


def test_exit_code_unsupported_page_size(temp_workdir: Path, write_config: Path, write_csv_file: Path, capsys):
    code = cli_main(["show", str(write_csv_file), "--page-size", "7"])

    assert code == EXIT_DATASET_ERROR
    out = capsys.readouterr().out
    assert "ERROR show: page size 7 is not available (choose from 2, 10, 50)" in out
    assert "SUMMARY" not in out
    assert _error_log_lines(temp_workdir)[0]["error_type"] == "UNSUPPORTED_PAGE_SIZE"
