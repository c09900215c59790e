"""Person model and per-day manual overrides."""
from dataclasses import dataclass, field
from typing import Dict, Optional

from .status import ALGORITHM_SOURCE


@dataclass
class DayOverride:
    """Manual availability entry for a single date."""
    is_available: bool = True
    status: Optional[str] = None  # base, home, arrival, departure, ...
    source: Optional[str] = None  # manual, override, algorithm
    start_hour: Optional[str] = None  # "HH:MM"
    end_hour: Optional[str] = None

    @property
    def is_algorithm_generated(self) -> bool:
        return self.source == ALGORITHM_SOURCE

    @property
    def is_departure(self) -> bool:
        """Leaving base on this day (explicit or by a partial end hour)."""
        if self.status == "departure":
            return True
        return bool(self.is_available and self.end_hour and self.end_hour != "23:59")

    @property
    def is_arrival(self) -> bool:
        """Arriving at base on this day (explicit or by a partial start hour)."""
        if self.status == "arrival":
            return True
        return bool(self.is_available and self.start_hour and self.start_hour != "00:00")

    @property
    def is_home_intent(self) -> bool:
        return not self.is_available or self.status == "home"

    @property
    def is_base_intent(self) -> bool:
        if self.status in ("base", "full"):
            return True
        return bool(self.is_available and not self.start_hour and not self.end_hour)

    @classmethod
    def from_dict(cls, d: dict) -> "DayOverride":
        return cls(
            is_available=bool(d.get("is_available", d.get("isAvailable", True))),
            status=d.get("status"),
            source=d.get("source"),
            start_hour=d.get("start_hour", d.get("startHour")),
            end_hour=d.get("end_hour", d.get("endHour")),
        )

    def to_dict(self) -> dict:
        return {
            "is_available": self.is_available,
            "status": self.status,
            "source": self.source,
            "start_hour": self.start_hour,
            "end_hour": self.end_hour,
        }


@dataclass
class Person:
    """A member of the organization to be rostered."""

    id: str
    name: str = ""
    team_id: Optional[str] = None
    # Keyed by "YYYY-MM-DD"
    daily_availability: Dict[str, DayOverride] = field(default_factory=dict)
    is_active: bool = True

    def __post_init__(self):
        """Normalize fields."""
        self.id = str(self.id).strip()
        self.name = str(self.name).strip() or self.id
        if self.team_id is not None:
            self.team_id = str(self.team_id).strip() or None
        self.daily_availability = {
            str(k): v if isinstance(v, DayOverride) else DayOverride.from_dict(v)
            for k, v in self.daily_availability.items()
        }

    def manual_overrides(self) -> Dict[str, DayOverride]:
        """Overrides entered by a human, sorted by date."""
        return {
            k: v for k, v in sorted(self.daily_availability.items())
            if not v.is_algorithm_generated
        }

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "team_id": self.team_id,
            "daily_availability": {k: v.to_dict() for k, v in self.daily_availability.items()},
            "is_active": self.is_active,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Person":
        """Create from dictionary."""
        return cls(
            id=d.get("id", ""),
            name=d.get("name", ""),
            team_id=d.get("team_id", d.get("teamId")),
            daily_availability=dict(d.get("daily_availability", d.get("dailyAvailability")) or {}),
            is_active=d.get("is_active", d.get("isActive", True)) is not False,
        )
