"""
Constraint Compiler
===================
Turns absences, never-assign constraints, manual overrides and full-day
blockages into, per person, the set of day indices where base is forbidden.
"""
from datetime import date
from typing import Dict, Iterable, List, Set

from roster.models.constraints import Absence, HourlyBlockage, SchedulingConstraint
from roster.models.person import Person
from roster.utils.dates import day_index
from roster.utils.logging_setup import get_logger, log_function_call

logger = get_logger("roster.engine.compiler")


def _add_range(target: Set[int], start: date, end: date, horizon_start: date, total_days: int) -> None:
    """Add [start, end] clamped to the horizon; out-of-range parts are dropped."""
    first = max(0, day_index(start, horizon_start))
    last = min(total_days - 1, day_index(end, horizon_start))
    target.update(range(first, last + 1))


def _manual_days(
    person: Person,
    horizon_start: date,
    total_days: int,
    propagate_home_intent: bool,
) -> Set[int]:
    """Days a human marked the person unavailable (never algorithm-written ones)."""
    days: Set[int] = set()
    entries = list(person.manual_overrides().items())

    for pos, (date_str, override) in enumerate(entries):
        idx = day_index(date_str, horizon_start)
        if idx < 0 or idx >= total_days:
            continue

        if not override.is_available:
            days.add(idx)

        if not propagate_home_intent:
            continue

        # A departure or home day keeps the person home until the next manual arrival/base
        if override.is_departure or override.is_home_intent:
            stop = total_days
            for later_str, later in entries[pos + 1:]:
                if later.is_arrival or later.is_base_intent:
                    stop = day_index(later_str, horizon_start)
                    break
            days.update(i for i in range(idx + 1, min(stop, total_days)) if i >= 0)

    return days


@log_function_call
def compile_hard_constraints(
    people: List[Person],
    horizon_start: date,
    total_days: int,
    constraints: Iterable[SchedulingConstraint] = (),
    absences: Iterable[Absence] = (),
    hourly_blockages: Iterable[HourlyBlockage] = (),
    propagate_home_intent: bool = False,
) -> Dict[str, Set[int]]:
    """
    Build the hard-constraint map for a run.

    A day index is forbidden for a person when a never-assign constraint
    on that person (with no task attached),
    an approved or pending absence, a non-algorithm manual "unavailable"
    override, or a full-day hourly blockage covers it.

    Args:
        people: Active people of the run
        horizon_start: First day of the horizon
        total_days: Horizon length
        constraints: Scheduling constraints (always_assign ones are ignored)
        absences: Absence records
        hourly_blockages: Hourly blockages (only full-day ones count)
        propagate_home_intent: Extend manual departures until the next arrival

    Returns:
        {person_id: set of forbidden day indices}
    """
    constraints = list(constraints)
    absences = list(absences)
    blockages = list(hourly_blockages)

    skipped_open = sum(1 for c in constraints if c.kind.forbids_base and not c.has_range)
    if skipped_open:
        logger.debug(f"Ignoring {skipped_open} constraint(s) without a time range")
    task_scoped = sum(1 for c in constraints if c.has_range and c.kind.forbids_base and not c.forbids_base)
    if task_scoped:
        logger.debug(f"Ignoring {task_scoped} team or task constraint(s); they do not forbid base")

    result: Dict[str, Set[int]] = {}
    for person in people:
        days = _manual_days(person, horizon_start, total_days, propagate_home_intent)

        for c in constraints:
            if c.applies_to(person.id):
                _add_range(days, c.start, c.end, horizon_start, total_days)

        for a in absences:
            if a.person_id == person.id and a.is_blocking:
                _add_range(days, a.start, a.end, horizon_start, total_days)

        for b in blockages:
            if b.person_id == person.id and b.is_full_day:
                idx = day_index(b.date, horizon_start)
                if 0 <= idx < total_days:
                    days.add(idx)

        result[person.id] = days

    total = sum(len(s) for s in result.values())
    logger.info(f"Compiled {total} hard constraint day(s) for {len(people)} people over {total_days} days")
    return result


def constraint_count(hard: Dict[str, Set[int]], person_id: str) -> int:
    return len(hard.get(person_id, ()))


def most_constrained_first(people: List[Person], hard: Dict[str, Set[int]]) -> List[Person]:
    """Stable order: more constrained days first, input order otherwise."""
    return sorted(people, key=lambda p: -constraint_count(hard, p.id))
