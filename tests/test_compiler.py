"""Tests for the constraint compiler."""
from datetime import timedelta

from conftest import START, make_people

from roster.engine.compiler import compile_hard_constraints, most_constrained_first
from roster.models.constraints import Absence, HourlyBlockage, SchedulingConstraint
from roster.models.person import DayOverride, Person
from roster.models.status import ConstraintKind


def day(i):
    return START + timedelta(days=i)


def compile_one(person, days=14, **kwargs):
    return compile_hard_constraints([person], START, days, **kwargs)[person.id]


class TestSchedulingConstraints:
    """Never-assign constraints feed the hard set; always-assign ones do not."""

    def test_never_assign_range(self):
        p = Person(id="p1")
        c = SchedulingConstraint(person_id="p1", start=day(2), end=day(4))
        assert compile_one(p, constraints=[c]) == {2, 3, 4}

    def test_always_assign_ignored(self):
        p = Person(id="p1")
        c = SchedulingConstraint(person_id="p1", kind=ConstraintKind.ALWAYS_ASSIGN, start=day(2), end=day(4))
        assert compile_one(p, constraints=[c]) == set()

    def test_open_constraint_ignored(self):
        p = Person(id="p1")
        c = SchedulingConstraint(person_id="p1", start=day(2))
        assert compile_one(p, constraints=[c]) == set()

    def test_other_person_untouched(self):
        p = Person(id="p1")
        c = SchedulingConstraint(person_id="p2", start=day(2), end=day(4))
        assert compile_one(p, constraints=[c]) == set()

    def test_team_constraint_does_not_forbid_base(self):
        people = make_people(4, team_id="t1")
        c = SchedulingConstraint.from_dict({
            "teamId": "t1", "type": "never_assign", "taskId": "kitchen",
            "startTime": day(0).isoformat(), "endTime": day(6).isoformat(),
        })
        hard = compile_hard_constraints(people, START, 7, constraints=[c])
        assert all(days == set() for days in hard.values())

    def test_team_constraint_without_task_ignored(self):
        people = make_people(2, team_id="t1")
        c = SchedulingConstraint(team_id="t1", start=day(1), end=day(1))
        hard = compile_hard_constraints(people, START, 7, constraints=[c])
        assert hard == {"p0": set(), "p1": set()}

    def test_person_task_constraint_ignored(self):
        p = Person(id="p1")
        c = SchedulingConstraint(person_id="p1", task_id="kitchen", start=day(1), end=day(2))
        assert compile_one(p, constraints=[c]) == set()

    def test_ranges_clamped_to_horizon(self):
        p = Person(id="p1")
        c = SchedulingConstraint(person_id="p1", start=day(-5), end=day(1))
        late = SchedulingConstraint(person_id="p1", start=day(12), end=day(30))
        assert compile_one(p, constraints=[c, late]) == {0, 1, 12, 13}

    def test_range_outside_horizon_dropped(self):
        p = Person(id="p1")
        c = SchedulingConstraint(person_id="p1", start=day(20), end=day(25))
        assert compile_one(p, constraints=[c]) == set()


class TestAbsences:
    def test_approved_and_pending_block(self):
        p = Person(id="p1")
        absences = [
            Absence("p1", day(0), day(1), status="approved"),
            Absence("p1", day(5), day(5), status="pending"),
            Absence("p1", day(8), day(9), status="rejected"),
        ]
        assert compile_one(p, absences=absences) == {0, 1, 5}


class TestManualOverrides:
    def test_manual_unavailable_blocks(self):
        p = Person(id="p1", daily_availability={
            day(3).isoformat(): DayOverride(is_available=False, source="manual"),
            day(4).isoformat(): DayOverride(is_available=False, source="algorithm"),
            day(6).isoformat(): DayOverride(is_available=True, status="base"),
        })
        assert compile_one(p) == {3}

    def test_override_outside_horizon(self):
        p = Person(id="p1", daily_availability={
            day(-1).isoformat(): DayOverride(is_available=False),
        })
        assert compile_one(p) == set()

    def test_home_intent_propagates_until_arrival(self):
        p = Person(id="p1", daily_availability={
            day(2).isoformat(): DayOverride(status="departure", end_hour="10:00"),
            day(5).isoformat(): DayOverride(status="arrival", start_hour="16:00"),
        })
        assert compile_one(p) == set()
        assert compile_one(p, propagate_home_intent=True) == {3, 4}

    def test_home_intent_without_arrival_runs_to_end(self):
        p = Person(id="p1", daily_availability={
            day(10).isoformat(): DayOverride(is_available=False),
        })
        assert compile_one(p, propagate_home_intent=True) == {10, 11, 12, 13}


class TestHourlyBlockages:
    def test_only_full_day_blocks(self):
        p = Person(id="p1")
        blockages = [
            HourlyBlockage("p1", day(2)),
            HourlyBlockage("p1", day(3), "08:00", "12:00"),
            HourlyBlockage("p1", day(40)),
        ]
        assert compile_one(p, hourly_blockages=blockages) == {2}


class TestOrdering:
    def test_most_constrained_first_is_stable(self):
        people = make_people(4)
        hard = {"p0": {1}, "p1": {1, 2, 3}, "p2": set(), "p3": {4}}
        ordered = [p.id for p in most_constrained_first(people, hard)]
        assert ordered == ["p1", "p0", "p3", "p2"]

    def test_every_person_gets_an_entry(self):
        hard = compile_hard_constraints(make_people(3), START, 7)
        assert hard == {"p0": set(), "p1": set(), "p2": set()}
