# roster/engine - Roster generation strategies and orchestration
from .annealing import AnnealingStrategy
from .audit import audit_roster
from .base import Strategy, StrategyOutcome
from .compiler import compile_hard_constraints
from .context import SchedulingContext, build_context
from .formatter import format_result
from .generate import generate_roster
from .history import build_history
from .min_staff import MinHeadcountStrategy
from .ratio import RatioStrategy
from .rotation import capacity_warnings, resolve_rotations
from .selector import select_strategy
from .tasks import TaskDemandStrategy, compute_task_floor
from .transitions import apply_weekend_transitions

__all__ = [
    "generate_roster",
    "compile_hard_constraints",
    "resolve_rotations",
    "capacity_warnings",
    "build_context",
    "SchedulingContext",
    "select_strategy",
    "Strategy",
    "StrategyOutcome",
    "RatioStrategy",
    "AnnealingStrategy",
    "MinHeadcountStrategy",
    "TaskDemandStrategy",
    "compute_task_floor",
    "apply_weekend_transitions",
    "format_result",
    "build_history",
    "audit_roster",
]
