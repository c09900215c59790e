"""
Task-Demand Strategy
====================
Derives a headcount floor from continuous task coverage and hands it to the
Min-Headcount Strategy.

Each daily or repeating segment needs, around the clock, its required people
plus enough relief to cover the mandatory rest after every shift:

    ceil((duration + rest) / duration * required)
"""
import math
from datetime import date
from typing import Iterable, List, Optional, Tuple

from roster.engine.base import Strategy, StrategyOutcome
from roster.engine.context import SchedulingContext
from roster.engine.min_staff import MinHeadcountStrategy
from roster.exceptions import ConfigurationError
from roster.models.task import TaskSegment, TaskTemplate
from roster.utils.logging_setup import get_logger, log_function_call

logger = get_logger("roster.engine.tasks")


def segment_demand(segment: TaskSegment) -> int:
    """People a continuous segment ties up once rest is accounted for."""
    ratio = (segment.duration_hours + segment.min_rest_hours_after) / segment.duration_hours
    # Rounded first so 16/8*2 style products stay exact
    return math.ceil(round(ratio * segment.required_people, 9))


@log_function_call
def compute_task_floor(
    tasks: Iterable[TaskTemplate],
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> Tuple[int, List[str]]:
    """
    Sum the demand of every continuous segment.

    Tasks whose validity window misses [start, end] are skipped. Segments
    with a non-positive duration are skipped with a warning.

    Returns:
        (floor, warnings)
    """
    floor = 0
    warnings: List[str] = []

    for task in tasks:
        if start is not None and end is not None and not task.overlaps(start, end):
            logger.debug(f"Task '{task.name}' is not valid within the horizon, skipped")
            continue

        for seg in task.segments:
            if not seg.is_continuous:
                continue
            if seg.duration_hours <= 0:
                warnings.append(
                    f"Task '{task.name}' segment '{seg.name}' has a non-positive duration "
                    f"({seg.duration_hours}h) and was ignored"
                )
                continue
            demand = segment_demand(seg)
            logger.debug(
                f"{task.name}/{seg.name}: {seg.duration_hours}h + {seg.min_rest_hours_after}h rest "
                f"x {seg.required_people} -> {demand}"
            )
            floor += demand

    return floor, warnings


class TaskDemandStrategy(Strategy):
    """Min-Headcount run with a floor derived from tasks."""

    name = "tasks"

    def __init__(self, tasks: Optional[Iterable[TaskTemplate]]):
        self.tasks = list(tasks or [])
        if not self.tasks:
            raise ConfigurationError("Task-based optimization requires at least one task")
        self.derived_floor: Optional[int] = None
        self.delegate = MinHeadcountStrategy()

    def generate(self, ctx: SchedulingContext) -> StrategyOutcome:
        computed, warnings = compute_task_floor(self.tasks, ctx.start_date, ctx.end_date)

        self.derived_floor = max(computed, ctx.min_staff)
        logger.info(
            f"Task demand floor {computed} (caller floor {ctx.min_staff}) -> using {self.derived_floor}"
        )

        outcome = self.delegate.generate(ctx.with_min_staff(self.derived_floor))
        return StrategyOutcome(
            grid=outcome.grid,
            warnings=warnings + outcome.warnings,
            min_staff=self.derived_floor,
        )
