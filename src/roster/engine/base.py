"""
Strategy Interface
==================
Every optimization strategy turns a SchedulingContext into a boolean grid
(True = base) and returns its warnings instead of writing them anywhere.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from roster.engine.context import SchedulingContext

# person_id -> one flag per horizon day, True = base
Grid = Dict[str, List[bool]]


@dataclass
class StrategyOutcome:
    """Result of a strategy run."""
    grid: Grid
    warnings: List[str] = field(default_factory=list)
    min_staff: Optional[int] = None  # Floor the strategy actually enforced

    def headcount(self, day: int) -> int:
        return sum(1 for days in self.grid.values() if days[day])


class Strategy(ABC):
    """Abstract base class for roster strategies."""

    name: str = "strategy"

    @abstractmethod
    def generate(self, ctx: SchedulingContext) -> StrategyOutcome:
        """
        Build the base/home grid for every person in the context.

        Returns:
            StrategyOutcome with the grid and any warnings raised on the way.
        """
        pass


def daily_headcount(grid: Grid, total_days: int) -> List[int]:
    """People on base per day."""
    counts = [0] * total_days
    for days in grid.values():
        for d in range(total_days):
            if days[d]:
                counts[d] += 1
    return counts
