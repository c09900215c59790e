"""
Annealing Ratio Strategy
========================
Alternate implementation of ratio mode: start from each person's rotation
at a random phase, then shift and resize home blocks by simulated annealing.

Cost (lower is better):
    constraint      base on a constrained day (never produced by a valid move)
    fatigue         base streak longer than days_base
    fragmentation   home block shorter than days_home
    capacity        squared distance of daily headcount from the expected one
    equity          squared distance of home days from the rotation share

Outputs differ from the offset search. Runs are reproducible when
``AnnealingParams.random_seed`` is set.
"""
import math
import random
from typing import AbstractSet, Dict, List, Sequence, Tuple

from roster.engine.base import Grid, Strategy, StrategyOutcome, daily_headcount
from roster.engine.context import SchedulingContext
from roster.engine.rotation import history_offset, theoretical_capacity
from roster.models.config import AnnealingParams
from roster.models.rotation import RotationConfig
from roster.utils.logging_setup import RunLogger, get_logger

logger = get_logger("roster.engine.annealing")
rlog = RunLogger("roster.engine.annealing")


def person_cost(
    days: Sequence[bool],
    rotation: RotationConfig,
    constrained: AbstractSet[int],
    params: AnnealingParams,
) -> float:
    """Constraint, fatigue, fragmentation and equity cost of one person."""
    cost = 0.0
    fatigue = 0
    home_run = 0
    home_days = 0

    for d, on_base in enumerate(days):
        if on_base:
            if d in constrained:
                cost += params.constraint_weight
            fatigue += 1
            if 0 < home_run < rotation.days_home:
                cost += params.fragmentation_weight
            home_run = 0
            if fatigue > rotation.days_base:
                cost += params.fatigue_weight
        else:
            home_days += 1
            fatigue = max(0, fatigue - 1)
            home_run += 1
            if home_run >= rotation.days_home:
                fatigue = 0

    if 0 < home_run < rotation.days_home:
        cost += params.fragmentation_weight

    expected_home = len(days) * rotation.days_home / rotation.cycle_length
    cost += (home_days - expected_home) ** 2 * params.equity_weight
    return cost


def capacity_cost(count: int, target: int, params: AnnealingParams) -> float:
    return (count - target) ** 2 * params.capacity_weight


def home_blocks(days: Sequence[bool]) -> List[Tuple[int, int]]:
    """Inclusive (start, end) of every run of home days."""
    blocks = []
    start = -1
    for d, on_base in enumerate(days):
        if not on_base and start < 0:
            start = d
        elif on_base and start >= 0:
            blocks.append((start, d - 1))
            start = -1
    if start >= 0:
        blocks.append((start, len(days) - 1))
    return blocks


def propose_move(block: Tuple[int, int], rng: random.Random) -> Tuple[int, int]:
    """SHIFT the block by one day, or RESIZE one of its edges."""
    start, end = block
    if rng.random() < 0.5:
        step = 1 if rng.random() < 0.5 else -1
        return start + step, end + step
    if rng.random() < 0.5:
        if rng.random() < 0.5:
            return start, end + 1
        return start - 1, end
    if end > start:
        if rng.random() < 0.5:
            return start, end - 1
        return start + 1, end
    return start, end


class AnnealingStrategy(Strategy):
    """Simulated annealing over home blocks."""

    name = "annealing"

    def generate(self, ctx: SchedulingContext) -> StrategyOutcome:
        params = ctx.config.annealing
        rng = random.Random(params.random_seed)
        total_days = ctx.total_days
        people = list(ctx.people)

        grid = self._seed(ctx, rng)
        if not people or total_days == 0:
            return StrategyOutcome(grid=grid, min_staff=ctx.min_staff)

        target = round(theoretical_capacity({p.id: ctx.rotation_of(p.id) for p in people}))
        counts = daily_headcount(grid, total_days)
        costs: Dict[str, float] = {
            p.id: person_cost(grid[p.id], ctx.rotation_of(p.id), ctx.constraints_of(p.id), params)
            for p in people
        }
        current = sum(costs.values()) + sum(capacity_cost(c, target, params) for c in counts)
        best = current
        start_cost = current

        rlog.phase(f"Annealing ({params.iterations} iterations, target headcount {target})")
        temp = params.initial_temp
        accepted = 0

        for _ in range(params.iterations):
            person = people[rng.randrange(len(people))]
            days = grid[person.id]
            constrained = ctx.constraints_of(person.id)

            blocks = home_blocks(days)
            if not blocks:
                temp *= params.cooling_rate
                continue
            block = blocks[rng.randrange(len(blocks))]
            new_start, new_end = propose_move(block, rng)

            if new_start < 0 or new_end >= total_days or (new_start, new_end) == block:
                temp *= params.cooling_rate
                continue

            # Days leaving the block become base; they must not be constrained
            if any(d in constrained for d in range(block[0], block[1] + 1) if not new_start <= d <= new_end):
                temp *= params.cooling_rate
                continue

            lo, hi = min(block[0], new_start), max(block[1], new_end)
            changed = []
            cap_delta = 0.0
            for d in range(lo, hi + 1):
                on_base = not (new_start <= d <= new_end)
                if days[d] != on_base:
                    new_count = counts[d] + (1 if on_base else -1)
                    cap_delta += capacity_cost(new_count, target, params) - capacity_cost(counts[d], target, params)
                    changed.append((d, on_base))

            trial = list(days)
            for d, on_base in changed:
                trial[d] = on_base
            trial_cost = person_cost(trial, ctx.rotation_of(person.id), constrained, params)
            delta = trial_cost - costs[person.id] + cap_delta

            if delta < 0 or (temp > 0 and rng.random() < math.exp(-delta / temp)):
                grid[person.id] = trial
                for d, on_base in changed:
                    counts[d] += 1 if on_base else -1
                costs[person.id] = trial_cost
                current += delta
                best = min(best, current)
                accepted += 1

            temp *= params.cooling_rate

        logger.info(
            f"Annealing finished: cost {start_cost:.0f} -> {current:.0f} (best {best:.0f}), "
            f"{accepted} move(s) accepted"
        )
        return StrategyOutcome(grid=grid, min_staff=ctx.min_staff)

    def _seed(self, ctx: SchedulingContext, rng: random.Random) -> Grid:
        """Rotation at a history-aligned or random phase, constraints as home."""
        grid: Grid = {}
        for person in ctx.people:
            rotation = ctx.rotation_of(person.id)
            offset = history_offset(rotation, ctx.history_of(person.id))
            if offset is None:
                offset = rng.randrange(rotation.cycle_length)
            days = [rotation.is_base(d, offset) for d in range(ctx.total_days)]
            for d in ctx.constraints_of(person.id):
                if 0 <= d < ctx.total_days:
                    days[d] = False
            grid[person.id] = days
        return grid
