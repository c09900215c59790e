"""
Min-Headcount Strategy
======================
Guarantees a minimum number of people on base every day.

Phases:
    1. Seed: staggered 8-on/6-off cycle, constraints overlaid as home
    2. Repair: pull in unconstrained people below the floor, shed
       constrained people well above it, until a pass changes nothing
    3. Iron floor: force people onto base wherever the floor is still
       missed, breaking constraints if needed and saying so in a warning
"""
from typing import Dict, List

from roster.engine.base import Grid, Strategy, StrategyOutcome, daily_headcount
from roster.engine.context import SchedulingContext
from roster.engine.rotation import history_offset
from roster.models.person import Person
from roster.models.rotation import RotationConfig
from roster.utils.logging_setup import RunLogger, get_logger

logger = get_logger("roster.engine.min_staff")
rlog = RunLogger("roster.engine.min_staff")


def seed_grid(ctx: SchedulingContext, seed: RotationConfig) -> Grid:
    """Staggered seed cycle with phases spread evenly over the roster."""
    people = ctx.people
    cycle = seed.cycle_length
    grid: Grid = {}

    for i, person in enumerate(people):
        offset = history_offset(seed, ctx.history_of(person.id))
        if offset is None:
            offset = (i * cycle) // len(people) % cycle
        days = [seed.is_base(d, offset) for d in range(ctx.total_days)]
        for d in ctx.constraints_of(person.id):
            if 0 <= d < ctx.total_days:
                days[d] = False
        grid[person.id] = days
    return grid


class MinHeadcountStrategy(Strategy):
    """Seed, repair, then enforce the floor unconditionally."""

    name = "min_staff"

    def generate(self, ctx: SchedulingContext) -> StrategyOutcome:
        cfg = ctx.config
        floor = ctx.min_staff
        people = list(ctx.people)
        warnings: List[str] = []

        if not people:
            if floor > 0:
                warnings.append(f"No people to roster; minimum headcount {floor} cannot be met")
            return StrategyOutcome(grid={}, warnings=warnings, min_staff=floor)

        rlog.phase(f"Min headcount (floor={floor})")
        seed = RotationConfig(cfg.seed_days_base, cfg.seed_days_home)
        grid = seed_grid(ctx, seed)
        counts = daily_headcount(grid, ctx.total_days)
        rlog.detail("seed headcount", counts)

        passes = self._repair(ctx, people, grid, counts)
        rlog.step(f"Repair converged after {passes} pass(es)")

        warnings.extend(self._iron_floor(ctx, people, grid, counts))
        short = sum(1 for c in counts if c < floor)
        rlog.check("minimum headcount", short == 0, f"{short} day(s) below {floor}")
        return StrategyOutcome(grid=grid, warnings=warnings, min_staff=floor)

    def _repair(self, ctx: SchedulingContext, people: List[Person], grid: Grid, counts: List[int]) -> int:
        """Local repair; returns the number of passes run."""
        floor = ctx.min_staff
        ceiling = floor + ctx.config.surplus_margin
        position = {p.id: i for i, p in enumerate(people)}
        burden = {p.id: len(ctx.constraints_of(p.id)) for p in people}
        base_days = {p.id: sum(grid[p.id]) for p in people}

        passes = 0
        for passes in range(1, ctx.config.max_repair_passes + 1):
            changes = 0
            for d in range(ctx.total_days):
                if counts[d] < floor:
                    candidates = [
                        p for p in people
                        if not grid[p.id][d] and not ctx.is_constrained(p.id, d)
                    ]
                    candidates.sort(key=lambda p: (burden[p.id], base_days[p.id], position[p.id]))
                    for p in candidates[:floor - counts[d]]:
                        grid[p.id][d] = True
                        counts[d] += 1
                        base_days[p.id] += 1
                        changes += 1

                elif counts[d] > ceiling:
                    releasable = [
                        p for p in people
                        if grid[p.id][d] and ctx.is_constrained(p.id, d)
                    ]
                    releasable.sort(key=lambda p: (-burden[p.id], -base_days[p.id], position[p.id]))
                    for p in releasable[:counts[d] - ceiling]:
                        grid[p.id][d] = False
                        counts[d] -= 1
                        base_days[p.id] -= 1
                        changes += 1

            logger.debug(f"Repair pass {passes}: {changes} change(s)")
            if changes == 0:
                break
        return passes

    def _iron_floor(self, ctx: SchedulingContext, people: List[Person], grid: Grid, counts: List[int]) -> List[str]:
        """Force the floor on every day, recording each broken constraint."""
        floor = ctx.min_staff
        warnings: List[str] = []
        position = {p.id: i for i, p in enumerate(people)}
        base_days: Dict[str, int] = {p.id: sum(grid[p.id]) for p in people}

        for d in range(ctx.total_days):
            if counts[d] >= floor:
                continue
            date_key = ctx.date_key(d)
            candidates = [p for p in people if not grid[p.id][d]]
            candidates.sort(key=lambda p: (ctx.is_constrained(p.id, d), base_days[p.id], position[p.id]))

            for p in candidates:
                if counts[d] >= floor:
                    break
                grid[p.id][d] = True
                counts[d] += 1
                base_days[p.id] += 1
                if ctx.is_constrained(p.id, d):
                    msg = (
                        f"{date_key}: {p.name} ({p.id}) assigned to base despite a hard constraint, "
                        f"to keep the minimum headcount of {floor}"
                    )
                    warnings.append(msg)
                    logger.warning(msg)

            if counts[d] < floor:
                msg = f"{date_key}: only {counts[d]} people available, below the minimum headcount of {floor}"
                warnings.append(msg)
                logger.warning(msg)

        return warnings
