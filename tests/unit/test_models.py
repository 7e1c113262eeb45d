from __future__ import annotations

import pytest

from csvdesk.models import FilterSpec, LoadResult, PageState, Team


def test_filter_spec_create_normalizes():
    spec = FilterSpec.create(team="  alpha ", search="  HeLLo ")
    assert spec.team == "alpha"
    assert spec.search == "hello"
    assert spec.is_active


def test_filter_spec_empty_values_mean_no_restriction():
    spec = FilterSpec.create(team="", search="   ")
    assert spec.team is None
    assert spec.search == ""
    assert not spec.is_active
    assert spec == FilterSpec()


def test_filter_spec_axes_are_independent():
    spec = FilterSpec.create(team="alpha", search="x")
    assert spec.with_search(None) == FilterSpec(team="alpha")
    assert spec.with_team(None) == FilterSpec(search="x")
    assert spec.with_team("bravo").search == "x"


def test_filter_spec_is_frozen():
    spec = FilterSpec()
    with pytest.raises(AttributeError):
        spec.search = "x"


def test_page_state_validates_page_size():
    assert PageState(page_size=1).page == 1
    with pytest.raises(ValueError):
        PageState(page_size=0)


def test_team_id_set():
    team = Team(key="a", name="A", ids=("1", "01", "1"))
    assert team.id_set == frozenset({"1", "01"})


def test_load_result_dropped_rows():
    result = LoadResult(file_name="f.csv", columns=("id",), kept_rows=3, blank_rows=1, keyless_rows=2, duplicate_keys=("x",))
    assert result.dropped_rows == 4
