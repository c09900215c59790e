"""Tests for the weekend transition rules."""
from datetime import timedelta

from conftest import START, make_people

from roster.engine.context import build_context
from roster.engine.generate import generate_roster
from roster.engine.transitions import apply_weekend_transitions
from roster.models.config import RosterConfig
from roster.models.constraints import SchedulingConstraint
from roster.models.rotation import DEFAULT_ROTATION

# START is a Monday, so day 5 is the rest day
SAT = 5


def solo_ctx(hard=None, min_staff=0, days=10):
    people = make_people(1)
    return build_context(START, days, people, hard or {}, {"p0": DEFAULT_ROTATION}, min_staff)


def pattern(base_ranges, days=10):
    flags = [False] * days
    for lo, hi in base_ranges:
        for d in range(lo, hi + 1):
            flags[d] = True
    return flags


class TestExit:
    def test_leave_a_day_early(self):
        grid = {"p0": pattern([(0, 4), (8, 9)])}
        new, warnings = apply_weekend_transitions(solo_ctx(), grid)
        # Home block 5-7 becomes 4-6
        assert new["p0"] == pattern([(0, 3), (7, 9)])
        assert warnings == []

    def test_stay_over_the_rest_day_when_floor_binds(self):
        grid = {"p0": pattern([(0, 4), (8, 9)])}
        new, warnings = apply_weekend_transitions(solo_ctx(min_staff=1), grid)
        assert new["p0"][SAT] is True
        assert new["p0"][SAT + 1] is False
        assert new["p0"][8] is True
        assert warnings == []

    def test_warns_when_nothing_can_move(self):
        grid = {"p0": pattern([(0, 4), (8, 9)])}
        ctx = solo_ctx(hard={"p0": {SAT}}, min_staff=1)
        new, warnings = apply_weekend_transitions(ctx, grid)
        assert new == grid
        assert len(warnings) == 1
        assert "leaves on the rest day" in warnings[0]

    def test_input_not_modified(self):
        grid = {"p0": pattern([(0, 4), (8, 9)])}
        snapshot = list(grid["p0"])
        apply_weekend_transitions(solo_ctx(), grid)
        assert grid["p0"] == snapshot


class TestEntry:
    def test_arrive_a_day_early(self):
        grid = {"p0": pattern([(5, 9)])}
        new, _ = apply_weekend_transitions(solo_ctx(), grid)
        assert new["p0"][SAT - 1] is True

    def test_arrive_a_day_late_when_day_before_is_constrained(self):
        grid = {"p0": pattern([(5, 9)])}
        new, warnings = apply_weekend_transitions(solo_ctx(hard={"p0": {SAT - 1}}), grid)
        assert new["p0"][SAT - 1] is False
        assert new["p0"][SAT] is False
        assert new["p0"][SAT + 1] is True
        assert warnings == []

    def test_warns_when_rest_day_cannot_spare(self):
        grid = {"p0": pattern([(5, 9)])}
        ctx = solo_ctx(hard={"p0": {SAT - 1}}, min_staff=1)
        new, warnings = apply_weekend_transitions(ctx, grid)
        assert new["p0"][SAT] is True
        assert "arrives on the rest day" in warnings[0]


class TestWithGenerator:
    def test_floor_and_constraints_survive(self, ten_people):
        constraints = [
            SchedulingConstraint(person_id="p2", start=START + timedelta(days=4), end=START + timedelta(days=6)),
            SchedulingConstraint(person_id="p7", start=START + timedelta(days=11), end=START + timedelta(days=13)),
        ]
        result = generate_roster(
            START, START + timedelta(days=27), ten_people,
            mode="min_staff", custom_min_staff=5, constraints=constraints,
            config=RosterConfig(weekend_transitions=True),
        )
        assert all(result.headcount(k) >= 5 for k in result.person_statuses)
        assert result.unfulfilled_constraints == []

    def test_off_by_default(self):
        people = make_people(1)
        result = generate_roster(START, START + timedelta(days=13), people, custom_rotation={"daysBase": 5, "daysHome": 2})
        # Offset 0 exits on day 5, the rest day
        assert result.headcount((START + timedelta(days=4)).isoformat()) == 1
        assert result.headcount((START + timedelta(days=5)).isoformat()) == 0
