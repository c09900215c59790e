"""
Result Formatter
================
Turns a strategy grid into the RosterResult: per-day statuses, statistics
and the list of hard constraints the roster does not honor.

Labels:
    grid True (or person missing from the grid) -> base
    grid False on a constrained day             -> unavailable
    grid False otherwise                        -> home

A base day is never relabeled, so a broken constraint stays visible as base.
"""
import math
from typing import Dict, Iterable, List, Optional

from roster.engine.base import Grid
from roster.engine.context import SchedulingContext
from roster.models.result import (
    ConstraintStats,
    PresenceEntry,
    RosterResult,
    RosterStats,
    UnfulfilledConstraint,
)
from roster.models.status import DayStatus
from roster.utils.logging_setup import get_logger, log_check

logger = get_logger("roster.engine.formatter")

UNFULFILLED_REASON = "Leave request not granted due to minimum headcount constraints"


def label_day(on_base: bool, constrained: bool) -> DayStatus:
    if on_base:
        return DayStatus.BASE
    return DayStatus.UNAVAILABLE if constrained else DayStatus.HOME


def constraint_percentage(met: int, total: int) -> int:
    """Share of honored constraints, rounded half up; 100 when nothing to check."""
    if total == 0:
        return 100
    return int(math.floor(met * 100 / total + 0.5))


def format_result(
    ctx: SchedulingContext,
    grid: Grid,
    warnings: Iterable[str] = (),
    min_staff: Optional[int] = None,
) -> RosterResult:
    """
    Build the result of a run. Pure: neither the grid nor the context is
    modified, and formatting the same input twice gives equal results.
    """
    roster: List[PresenceEntry] = []
    person_statuses: Dict[str, Dict[str, DayStatus]] = {}
    total_presence = 0

    for d in range(ctx.total_days):
        key = ctx.date_key(d)
        statuses: Dict[str, DayStatus] = {}
        for person in ctx.people:
            days = grid.get(person.id)
            on_base = True if days is None else bool(days[d])
            status = label_day(on_base, ctx.is_constrained(person.id, d))
            statuses[person.id] = status
            roster.append(PresenceEntry(date=key, person_id=person.id, status=status))
            if status is DayStatus.BASE:
                total_presence += 1
        person_statuses[key] = statuses

    checked = 0
    met = 0
    unfulfilled: List[UnfulfilledConstraint] = []
    for person in ctx.people:
        for d in sorted(ctx.constraints_of(person.id)):
            if not 0 <= d < ctx.total_days:
                continue
            checked += 1
            key = ctx.date_key(d)
            if person_statuses[key][person.id] is DayStatus.BASE:
                unfulfilled.append(UnfulfilledConstraint(
                    person_id=person.id,
                    person_name=person.name,
                    date=key,
                    reason=UNFULFILLED_REASON,
                ))
            else:
                met += 1

    stats = RosterStats(
        total_days=ctx.total_days,
        avg_staff_per_day=total_presence / ctx.total_days if ctx.total_days else 0.0,
        constraint_stats=ConstraintStats(
            total=checked,
            met=met,
            percentage=constraint_percentage(met, checked),
        ),
    )
    log_check(logger, "hard constraints", met == checked, f"{met}/{checked} honored")

    return RosterResult(
        roster=roster,
        person_statuses=person_statuses,
        stats=stats,
        warnings=list(warnings),
        unfulfilled_constraints=unfulfilled,
        min_staff=ctx.min_staff if min_staff is None else min_staff,
    )
