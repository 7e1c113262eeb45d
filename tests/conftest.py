# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pytest

from csvdesk.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "out").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("CSVDESK_CONFIG", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _fresh_logging():
    # The app logger binds sys.stdout at setup; capsys swaps it per test
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """page_size: 2
page_size_options: [2, 10, 50]
teams:
  - key: alpha
    name: Team Alpha
    ids: ["1", "3", "007"]
  - key: bravo
    name: Team Bravo
    ids: ["2"]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "teams.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sample_csv_text() -> str:
    return (
        "id,name,city\n"
        "1,Alice,Lisbon\n"
        "2,Bob,Porto\n"
        "3,Carla,Braga\n"
        "007,Bond,London\n"
        "5,Eve,Porto\n"
    )


@pytest.fixture()
def write_csv_file(temp_workdir: Path, sample_csv_text: str) -> Path:
    f = temp_workdir / "data" / "people.csv"
    f.write_text(sample_csv_text, encoding="utf-8")
    return f


@pytest.fixture()
def people() -> list[dict[str, str]]:
    return [
        {"id": "1", "name": "Alice", "city": "Lisbon"},
        {"id": "2", "name": "Bob", "city": "Porto"},
        {"id": "3", "name": "Carla", "city": "Braga"},
        {"id": "007", "name": "Bond", "city": "London"},
        {"id": "5", "name": "Eve", "city": "Porto"},
    ]
