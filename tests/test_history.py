"""Tests for building history seeds from presence records."""
from datetime import timedelta

import pandas as pd

from conftest import START

from roster.engine.generate import generate_roster
from roster.engine.history import build_history, normalize_status
from roster.models.person import Person
from roster.models.rotation import PersonHistory, RotationConfig
from roster.models.status import DayStatus


def rows_for(person_id, statuses):
    """Records ending the day before START, oldest first."""
    n = len(statuses)
    return [
        {"person_id": person_id, "date": (START - timedelta(days=n - i)).isoformat(), "status": s}
        for i, s in enumerate(statuses)
    ]


class TestNormalize:
    def test_labels(self):
        assert normalize_status("arrival") is DayStatus.BASE
        assert normalize_status("Full") is DayStatus.BASE
        assert normalize_status("departure") is DayStatus.HOME
        assert normalize_status("leave") is DayStatus.HOME
        assert normalize_status("sick") is None


class TestBuildHistory:
    def test_trailing_streak(self):
        rows = rows_for("a", ["home", "home", "base", "base", "arrival"])
        history = build_history(rows, START)
        assert history == {"a": PersonHistory(DayStatus.BASE, 3)}

    def test_departure_counts_as_home(self):
        rows = rows_for("a", ["base", "departure", "home"])
        assert build_history(rows, START)["a"] == PersonHistory(DayStatus.HOME, 2)

    def test_camel_case_and_dataframe(self):
        rows = [{"personId": r["person_id"], "date": r["date"], "status": r["status"]}
                for r in rows_for("b", ["base", "base"])]
        assert build_history(pd.DataFrame(rows), START)["b"].consecutive_days == 2

    def test_gap_too_long(self):
        rows = [{"person_id": "a", "date": (START - timedelta(days=4)).isoformat(), "status": "base"}]
        assert build_history(rows, START) == {}
        assert "a" in build_history(rows, START, max_gap_days=4)

    def test_lookback_and_horizon_ignored(self):
        rows = [
            {"person_id": "a", "date": (START - timedelta(days=60)).isoformat(), "status": "base"},
            {"person_id": "a", "date": START.isoformat(), "status": "base"},
        ]
        assert build_history(rows, START) == {}

    def test_unknown_last_status_skipped(self):
        rows = rows_for("a", ["base", "sick"])
        assert build_history(rows, START) == {}

    def test_feeds_generator(self):
        history = build_history(rows_for("solo", ["base"] * 3), START)
        result = generate_roster(START, START + timedelta(days=3), [Person(id="solo")],
                                 custom_rotation=RotationConfig(3, 1), history=history)
        first = sorted(result.person_statuses)[0]
        assert result.person_statuses[first]["solo"] is DayStatus.HOME
