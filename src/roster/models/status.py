"""Presence status and mode definitions."""
from enum import Enum


class DayStatus(str, Enum):
    """Presence status of one person on one day."""
    BASE = "base"
    HOME = "home"
    UNAVAILABLE = "unavailable"

    @property
    def is_present(self) -> bool:
        """True if the person counts toward the day's headcount."""
        return self is DayStatus.BASE

    @classmethod
    def from_string(cls, s: str) -> "DayStatus":
        """Parse a status, folding the transition labels used in presence records."""
        mapping = {
            "base": cls.BASE, "full": cls.BASE, "arrival": cls.BASE,
            "home": cls.HOME, "departure": cls.HOME,
            "unavailable": cls.UNAVAILABLE, "leave": cls.UNAVAILABLE,
        }
        key = str(s).strip().lower()
        if key in mapping:
            return mapping[key]
        raise ValueError(f"Unknown day status: {s!r}")


class OptimizationMode(str, Enum):
    """Objective used to build the roster."""
    RATIO = "ratio"          # Stable rotation per person
    MIN_STAFF = "min_staff"  # Minimum daily headcount
    TASKS = "tasks"          # Floor derived from task coverage


class ConstraintKind(str, Enum):
    """Kinds of scheduling constraints."""
    NEVER_ASSIGN = "never_assign"
    ALWAYS_ASSIGN = "always_assign"
    TIME_BLOCK = "time_block"

    @property
    def forbids_base(self) -> bool:
        """Every kind except always_assign is a hard forbid."""
        return self is not ConstraintKind.ALWAYS_ASSIGN


# Source tag written on statuses produced by the engine itself
ALGORITHM_SOURCE = "algorithm"
