"""Run configuration for the roster engine."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from .rotation import DEFAULT_ROTATION, RotationConfig
from .status import OptimizationMode


class RatioStrategyKind(str, Enum):
    """Implementations available for ratio mode."""
    OFFSET = "offset"        # Exhaustive phase-offset search (canonical)
    ANNEALING = "annealing"  # Simulated annealing over home blocks


@dataclass
class AnnealingParams:
    """Parameters of the annealing alternate."""
    iterations: int = 20000
    initial_temp: float = 100.0
    cooling_rate: float = 0.9995
    random_seed: Optional[int] = None

    # Cost weights
    constraint_weight: int = 1_000_000
    fatigue_weight: int = 10_000
    fragmentation_weight: int = 5_000
    capacity_weight: int = 100
    equity_weight: int = 200


@dataclass
class RosterConfig:
    """Configuration for a roster run."""

    mode: OptimizationMode = OptimizationMode.RATIO

    # Organization-wide floor; a per-run custom floor takes precedence
    min_daily_staff: int = 0

    # Fallback rotation; None means a rotation must come from the run or a team
    default_rotation: Optional[RotationConfig] = DEFAULT_ROTATION

    # Min-headcount repair
    max_repair_passes: int = 200
    seed_days_base: int = 8
    seed_days_home: int = 6
    surplus_margin: int = 2

    # Ratio mode
    ratio_strategy: RatioStrategyKind = RatioStrategyKind.OFFSET
    transition_day: bool = False  # Count the exit day as home
    annealing: AnnealingParams = field(default_factory=AnnealingParams)

    # Constraint compilation
    propagate_home_intent: bool = False

    # Weekend transitions (no exit or entry on the rest day)
    weekend_transitions: bool = False
    rest_weekday: int = 5  # date.weekday(): Saturday

    def __post_init__(self):
        if isinstance(self.mode, str):
            self.mode = OptimizationMode(self.mode)
        if isinstance(self.ratio_strategy, str):
            self.ratio_strategy = RatioStrategyKind(self.ratio_strategy)
        if isinstance(self.default_rotation, dict):
            self.default_rotation = RotationConfig.from_dict(self.default_rotation)
        if isinstance(self.annealing, dict):
            self.annealing = AnnealingParams(**self.annealing)

    def to_dict(self) -> Dict:
        """Serialize to dictionary."""
        return {
            "mode": self.mode.value,
            "min_daily_staff": self.min_daily_staff,
            "default_rotation": self.default_rotation.to_dict() if self.default_rotation else None,
            "max_repair_passes": self.max_repair_passes,
            "seed_days_base": self.seed_days_base,
            "seed_days_home": self.seed_days_home,
            "surplus_margin": self.surplus_margin,
            "ratio_strategy": self.ratio_strategy.value,
            "transition_day": self.transition_day,
            "annealing": dict(vars(self.annealing)),
            "propagate_home_intent": self.propagate_home_intent,
            "weekend_transitions": self.weekend_transitions,
            "rest_weekday": self.rest_weekday,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "RosterConfig":
        """Create from dictionary, ignoring unknown keys."""
        cfg = cls()
        for key, value in d.items():
            if not hasattr(cfg, key):
                continue
            if key == "mode":
                value = OptimizationMode(value) if value else OptimizationMode.RATIO
            elif key == "ratio_strategy":
                value = RatioStrategyKind(value) if value else RatioStrategyKind.OFFSET
            elif key == "default_rotation":
                value = RotationConfig.from_dict(value) if value else None
            elif key == "annealing":
                value = AnnealingParams(**value) if value else AnnealingParams()
            setattr(cfg, key, value)
        return cfg
