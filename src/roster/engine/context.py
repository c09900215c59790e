"""Scheduling context: the derived, read-only inputs of one run."""
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

from roster.models.config import RosterConfig
from roster.models.person import Person
from roster.models.rotation import PersonHistory, RotationConfig
from roster.utils.dates import date_at


@dataclass(frozen=True)
class SchedulingContext:
    """Everything a strategy needs; strategies never mutate it."""
    start_date: date
    total_days: int
    people: Tuple[Person, ...]
    hard_constraints: Mapping[str, FrozenSet[int]]
    rotations: Mapping[str, RotationConfig]
    min_staff: int = 0
    history: Mapping[str, PersonHistory] = field(default_factory=dict)
    config: RosterConfig = field(default_factory=RosterConfig)

    def constraints_of(self, person_id: str) -> FrozenSet[int]:
        return self.hard_constraints.get(person_id, frozenset())

    def is_constrained(self, person_id: str, day: int) -> bool:
        return day in self.hard_constraints.get(person_id, ())

    def rotation_of(self, person_id: str) -> RotationConfig:
        return self.rotations[person_id]

    def history_of(self, person_id: str) -> Optional[PersonHistory]:
        return self.history.get(person_id)

    @property
    def end_date(self) -> date:
        """Last day of the horizon (the start day for an empty horizon)."""
        return date_at(self.start_date, max(0, self.total_days - 1))

    def date_key(self, day: int) -> str:
        return date_at(self.start_date, day).isoformat()

    def with_min_staff(self, min_staff: int) -> "SchedulingContext":
        """Copy of this context with a different floor."""
        return SchedulingContext(
            start_date=self.start_date,
            total_days=self.total_days,
            people=self.people,
            hard_constraints=self.hard_constraints,
            rotations=self.rotations,
            min_staff=min_staff,
            history=self.history,
            config=self.config,
        )


def build_context(
    start_date: date,
    total_days: int,
    people,
    hard_constraints: Dict[str, set],
    rotations: Dict[str, RotationConfig],
    min_staff: int = 0,
    history: Optional[Dict[str, PersonHistory]] = None,
    config: Optional[RosterConfig] = None,
) -> SchedulingContext:
    """Freeze the compiled inputs into a context."""
    return SchedulingContext(
        start_date=start_date,
        total_days=total_days,
        people=tuple(people),
        hard_constraints={pid: frozenset(days) for pid, days in hard_constraints.items()},
        rotations=dict(rotations),
        min_staff=max(0, int(min_staff or 0)),
        history=dict(history or {}),
        config=config or RosterConfig(),
    )
