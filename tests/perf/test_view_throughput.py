from __future__ import annotations

import time

from csvdesk.csvio.reader import parse_csv_text
from csvdesk.models.config_models import AppConfig, Team
from csvdesk.services.session import Session

"""Performance smoke test: filter + paginate + edit over a 50k row dataset.

Time limits are loose. They catch accidental
quadratic behavior, not small regressions.
"""

ROWS = 50_000


def _dataset_text(rows: int) -> str:
    lines = ["id,name,city"]
    cities = ["Lisbon", "Porto", "Braga", "Faro"]
    for i in range(rows):
        lines.append(f"{i:06d},Person {i},{cities[i % len(cities)]}")
    return "\n".join(lines) + "\n"


def test_filter_and_page_budget():
    team = Team(key="even", name="Even", ids=tuple(f"{i:06d}" for i in range(0, ROWS, 2)))
    session = Session(AppConfig(teams=(team,), page_size=50))
    session.load(parse_csv_text(_dataset_text(ROWS)), "big.csv")

    start = time.perf_counter()
    session.select_team("even")
    session.submit_search("braga")
    page = session.current_slice()
    for _ in range(100):
        session.edit_cell(page.rows[0]["id"], "name", "Edited")
    session.set_page(10_000)
    elapsed = time.perf_counter() - start

    # Braga rows are i % 4 == 2, all of them even
    assert page.total_rows == ROWS // 4
    assert session.page_state.page == page.total_pages
    assert elapsed < 5.0, f"filter/page/edit too slow: {elapsed:.3f}s"
