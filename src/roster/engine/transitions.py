"""
Weekend transition rules: nobody leaves or arrives on the rest day.

Applied after the strategy when ``RosterConfig.weekend_transitions`` is on.
A move is only made when it keeps every constrained day off base and every
day at or above the floor; otherwise the transition stays and a warning
says so.
"""
from typing import List, Optional, Tuple

from roster.engine.base import Grid, daily_headcount
from roster.engine.context import SchedulingContext
from roster.utils.dates import date_at
from roster.utils.logging_setup import get_logger

logger = get_logger("roster.engine.transitions")


def _is_rest_day(ctx: SchedulingContext, day: int) -> bool:
    return date_at(ctx.start_date, day).weekday() == ctx.config.rest_weekday


def _next_base(days: List[bool], after: int) -> Optional[int]:
    for r in range(after + 1, len(days)):
        if days[r]:
            return r
    return None


def apply_weekend_transitions(
    ctx: SchedulingContext,
    grid: Grid,
    floor: Optional[int] = None,
) -> Tuple[Grid, List[str]]:
    """
    Move exits and entries off the rest day.

    Exit on the rest day (base the day before, home on it):
        leave a day earlier if the day before can spare the person, and
        return a day earlier to keep the home block length; otherwise stay
        on base over the rest day and return a day later if that day can
        spare the person.
    Entry on the rest day (home the day before, base on it):
        arrive a day earlier unless that day is constrained; otherwise
        arrive the day after.

    Returns:
        (new grid, warnings); the input grid is not modified
    """
    floor = ctx.min_staff if floor is None else floor
    result: Grid = {pid: list(days) for pid, days in grid.items()}
    counts = daily_headcount(result, ctx.total_days)
    warnings: List[str] = []
    moved = 0

    def set_day(days: List[bool], day: int, on_base: bool):
        if days[day] != on_base:
            days[day] = on_base
            counts[day] += 1 if on_base else -1

    def can_spare(day: int) -> bool:
        return counts[day] - 1 >= floor

    for d in range(1, ctx.total_days):
        if not _is_rest_day(ctx, d):
            continue
        prev, nxt = d - 1, d + 1
        date_key = ctx.date_key(d)

        for person in ctx.people:
            days = result.get(person.id)
            if days is None:
                continue

            if days[prev] and not days[d]:
                if can_spare(prev):
                    set_day(days, prev, False)
                    ret = _next_base(days, d)
                    if ret is not None and ret - 1 > d and not ctx.is_constrained(person.id, ret - 1):
                        set_day(days, ret - 1, True)
                    moved += 1
                elif not ctx.is_constrained(person.id, d):
                    set_day(days, d, True)
                    ret = _next_base(days, d)
                    if ret is not None and can_spare(ret) and not _is_rest_day(ctx, ret):
                        set_day(days, ret, False)
                    moved += 1
                else:
                    warnings.append(
                        f"{date_key}: {person.name} leaves on the rest day; "
                        f"moving the exit would break the minimum headcount or a constraint"
                    )

            elif not days[prev] and days[d]:
                if not ctx.is_constrained(person.id, prev):
                    set_day(days, prev, True)
                    moved += 1
                elif can_spare(d):
                    set_day(days, d, False)
                    if nxt < ctx.total_days and not ctx.is_constrained(person.id, nxt):
                        set_day(days, nxt, True)
                    moved += 1
                else:
                    warnings.append(
                        f"{date_key}: {person.name} arrives on the rest day; "
                        f"the day before is constrained and the rest day cannot spare them"
                    )

    logger.info(f"Weekend transitions: {moved} move(s), {len(warnings)} left in place")
    return result, warnings
