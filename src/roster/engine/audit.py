"""
Roster audit: the issues a reviewer should see before a roster is saved.

Two checks per day, each listed for at most ``max_listed`` days with a
summary line for the rest:
    - headcount below the minimum
    - headcount below that day's task demand
"""
from typing import Iterable, List, Optional

import pandas as pd

from roster.models.result import RosterResult
from roster.models.task import TaskTemplate
from roster.utils.dates import to_date
from roster.utils.logging_setup import get_logger

logger = get_logger("roster.engine.audit")

MAX_LISTED = 5


def task_demand_on(tasks: Iterable[TaskTemplate], date_key: str) -> int:
    """People the tasks need on one date: required people of every active segment."""
    d = to_date(date_key)
    demand = 0
    for task in tasks:
        if not task.is_valid_on(d):
            continue
        for seg in task.segments:
            if seg.is_continuous or seg.is_active_on(d):
                demand += seg.required_people
    return demand


def _listed(lines: List[str], overflow: int, what: str) -> List[str]:
    if overflow > 0:
        lines.append(f"...and {overflow} more day(s) {what}")
    return lines


def audit_roster(
    result: RosterResult,
    min_staff: Optional[int] = None,
    tasks: Optional[Iterable[TaskTemplate]] = None,
    max_listed: int = MAX_LISTED,
) -> List[str]:
    """
    List headcount shortfalls of a generated roster.

    Args:
        result: Roster to check
        min_staff: Floor to check against (default: the floor the run used)
        tasks: Task templates for the coverage check
        max_listed: Days listed per check before summarizing

    Returns:
        Human-readable issue lines; empty when the roster is clean
    """
    floor = result.min_staff if min_staff is None else min_staff
    tasks = list(tasks or [])
    headcount = pd.Series(
        {d: result.headcount(d) for d in sorted(result.person_statuses)},
        dtype=int,
    )

    staff_lines: List[str] = []
    if floor > 0:
        short = headcount[headcount < floor]
        for date_key, count in short.head(max_listed).items():
            staff_lines.append(f"{date_key}: {count} on base (minimum required: {floor})")
        _listed(staff_lines, len(short) - max_listed, "below the minimum headcount")

    task_lines: List[str] = []
    if tasks:
        demand = pd.Series({d: task_demand_on(tasks, d) for d in headcount.index}, dtype=int)
        short = headcount[headcount < demand]
        for date_key, count in short.head(max_listed).items():
            task_lines.append(f"{date_key}: {count} on base (needed for tasks: {demand[date_key]})")
        _listed(task_lines, len(short) - max_listed, "without enough people for tasks")

    issues = staff_lines + task_lines
    logger.info(f"Audit found {len(issues)} issue line(s)")
    return issues
