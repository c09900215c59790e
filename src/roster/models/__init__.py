# roster/models - Data models for the roster engine
from .config import AnnealingParams, RatioStrategyKind, RosterConfig
from .constraints import Absence, HourlyBlockage, SchedulingConstraint
from .person import DayOverride, Person
from .result import (
    ConstraintStats,
    PresenceEntry,
    RosterResult,
    RosterStats,
    UnfulfilledConstraint,
)
from .rotation import DEFAULT_ROTATION, PersonHistory, RotationConfig, TeamRotation
from .status import ConstraintKind, DayStatus, OptimizationMode
from .task import Frequency, TaskSegment, TaskTemplate

__all__ = [
    "Person", "DayOverride",
    "DayStatus", "OptimizationMode", "ConstraintKind",
    "SchedulingConstraint", "Absence", "HourlyBlockage",
    "RotationConfig", "TeamRotation", "PersonHistory", "DEFAULT_ROTATION",
    "TaskTemplate", "TaskSegment", "Frequency",
    "RosterConfig", "RatioStrategyKind", "AnnealingParams",
    "RosterResult", "RosterStats", "ConstraintStats", "PresenceEntry", "UnfulfilledConstraint",
]
