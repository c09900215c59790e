"""Strategy Selector: maps the optimization mode to a strategy instance."""
from typing import Iterable, Optional, Union

from roster.engine.annealing import AnnealingStrategy
from roster.engine.base import Strategy
from roster.engine.min_staff import MinHeadcountStrategy
from roster.engine.ratio import RatioStrategy
from roster.engine.tasks import TaskDemandStrategy
from roster.exceptions import ConfigurationError
from roster.models.config import RatioStrategyKind, RosterConfig
from roster.models.status import OptimizationMode
from roster.models.task import TaskTemplate


def parse_mode(mode: Union[str, OptimizationMode]) -> OptimizationMode:
    """Coerce a mode name, raising ConfigurationError for unknown ones."""
    if isinstance(mode, OptimizationMode):
        return mode
    try:
        return OptimizationMode(str(mode).strip().lower())
    except ValueError:
        valid = ", ".join(m.value for m in OptimizationMode)
        raise ConfigurationError(f"Unknown optimization mode '{mode}' (expected one of: {valid})") from None


def select_strategy(
    mode: Union[str, OptimizationMode],
    config: Optional[RosterConfig] = None,
    tasks: Optional[Iterable[TaskTemplate]] = None,
) -> Strategy:
    """
    Pick the strategy for a run.

    Raises:
        ConfigurationError: Unknown mode, or tasks mode without tasks.
    """
    mode = parse_mode(mode)
    config = config or RosterConfig()

    if mode == OptimizationMode.TASKS:
        return TaskDemandStrategy(tasks)
    if mode == OptimizationMode.MIN_STAFF:
        return MinHeadcountStrategy()
    if config.ratio_strategy == RatioStrategyKind.ANNEALING:
        return AnnealingStrategy()
    return RatioStrategy()
