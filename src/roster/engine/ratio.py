"""
Ratio Strategy
==============
Keeps everyone on their own rotation and picks, per person, the phase
offset that best fits their constraints and flattens daily headcount.

People are committed most-constrained first. The running daily headcount
is an explicit accumulator: `score_offset` reads it, `commit_offset`
returns a new one.
"""
from typing import AbstractSet, List, Optional, Sequence, Tuple

from roster.engine.base import Grid, Strategy, StrategyOutcome
from roster.engine.compiler import most_constrained_first
from roster.engine.context import SchedulingContext
from roster.engine.rotation import history_offset
from roster.models.rotation import RotationConfig
from roster.utils.logging_setup import get_logger

logger = get_logger("roster.engine.ratio")

HISTORY_BONUS = 500
CONSTRAINT_HOME_BONUS = 1000
CONSTRAINT_BASE_PENALTY = 5000

Load = Tuple[int, ...]


def effective_rotation(rotation: RotationConfig, transition_day: bool) -> RotationConfig:
    """Rotation used for the search; optionally counts the exit day as home."""
    return rotation.with_transition_day() if transition_day else rotation


def score_offset(
    rotation: RotationConfig,
    offset: int,
    total_days: int,
    constrained: AbstractSet[int],
    load: Sequence[int],
    target_offset: Optional[int] = None,
) -> int:
    """
    Score one phase offset. Higher is better.

    +HISTORY_BONUS when the offset continues the person's history; per
    constrained day +CONSTRAINT_HOME_BONUS at home, -CONSTRAINT_BASE_PENALTY
    on base; per base day minus the square of the headcount already there.
    """
    score = HISTORY_BONUS if offset == target_offset else 0
    for d in range(total_days):
        on_base = rotation.is_base(d, offset)
        if d in constrained:
            score += -CONSTRAINT_BASE_PENALTY if on_base else CONSTRAINT_HOME_BONUS
        if on_base:
            score -= load[d] * load[d]
    return score


def best_offset(
    rotation: RotationConfig,
    total_days: int,
    constrained: AbstractSet[int],
    load: Sequence[int],
    target_offset: Optional[int] = None,
) -> Tuple[int, int]:
    """Exhaustive search over [0, cycle); ties keep the smallest offset."""
    best, best_score = 0, None
    for offset in range(rotation.cycle_length):
        score = score_offset(rotation, offset, total_days, constrained, load, target_offset)
        if best_score is None or score > best_score:
            best, best_score = offset, score
    return best, best_score


def commit_offset(
    rotation: RotationConfig,
    offset: int,
    total_days: int,
    constrained: AbstractSet[int],
    load: Sequence[int],
) -> Tuple[List[bool], Load, int]:
    """
    Lay the cycle down at `offset` and add it to the headcount.

    Base days that still land on a constraint are flipped to home.

    Returns:
        (days, new_load, flipped_count)
    """
    days = [rotation.is_base(d, offset) for d in range(total_days)]
    new_load = list(load)
    for d, on_base in enumerate(days):
        if on_base:
            new_load[d] += 1

    flipped = 0
    for d in sorted(constrained):
        if 0 <= d < total_days and days[d]:
            days[d] = False
            new_load[d] -= 1
            flipped += 1
    return days, tuple(new_load), flipped


class RatioStrategy(Strategy):
    """Phase-offset search over each person's rotation."""

    name = "ratio"

    def generate(self, ctx: SchedulingContext) -> StrategyOutcome:
        total_days = ctx.total_days
        transition = ctx.config.transition_day
        grid: Grid = {}
        load: Load = (0,) * total_days
        flips = 0

        for person in most_constrained_first(list(ctx.people), ctx.hard_constraints):
            rotation = effective_rotation(ctx.rotation_of(person.id), transition)
            constrained = ctx.constraints_of(person.id)
            target = history_offset(rotation, ctx.history_of(person.id))

            offset, score = best_offset(rotation, total_days, constrained, load, target)
            days, load, flipped = commit_offset(rotation, offset, total_days, constrained, load)
            grid[person.id] = days
            flips += flipped

            logger.debug(
                f"{person.name}: cycle {rotation.days_base}/{rotation.days_home}, "
                f"offset={offset} (history={target}), score={score}, flipped={flipped}"
            )

        if total_days:
            logger.info(
                f"Ratio roster built for {len(grid)} people; peak headcount {max(load, default=0)}, "
                f"low {min(load, default=0)}, {flips} constraint flip(s)"
            )
        return StrategyOutcome(grid=grid, min_staff=ctx.min_staff)
