"""Task templates and their recurring segments."""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional

from roster.utils.dates import to_date, weekday_name


class Frequency(str, Enum):
    """How often a segment recurs."""
    DAILY = "daily"
    WEEKLY = "weekly"
    SPECIFIC_DATE = "specific_date"


@dataclass
class TaskSegment:
    """One staffed block of a task (e.g. a morning shift)."""
    id: str = ""
    name: str = ""
    duration_hours: float = 8.0
    frequency: Frequency = Frequency.DAILY
    required_people: int = 1
    min_rest_hours_after: float = 0.0
    is_repeat: bool = False  # Continuous cycle
    days_of_week: List[str] = field(default_factory=list)
    specific_date: Optional[date] = None

    def __post_init__(self):
        if isinstance(self.frequency, str):
            self.frequency = Frequency(self.frequency)
        self.days_of_week = [str(d).strip().lower() for d in self.days_of_week]
        if self.specific_date is not None:
            self.specific_date = to_date(self.specific_date)

    @property
    def is_continuous(self) -> bool:
        """Daily or repeating segments impose a rotation-wide floor."""
        return self.frequency == Frequency.DAILY or self.is_repeat

    def is_active_on(self, d: date) -> bool:
        if self.frequency == Frequency.DAILY:
            return True
        if self.frequency == Frequency.SPECIFIC_DATE:
            return self.specific_date == d
        return weekday_name(d) in self.days_of_week

    @classmethod
    def from_dict(cls, d: dict) -> "TaskSegment":
        return cls(
            id=str(d.get("id", "")),
            name=d.get("name", ""),
            duration_hours=float(d.get("duration_hours", d.get("durationHours", 8))),
            frequency=d.get("frequency", Frequency.DAILY.value),
            required_people=int(d.get("required_people", d.get("requiredPeople", 1))),
            min_rest_hours_after=float(d.get("min_rest_hours_after", d.get("minRestHoursAfter", 0))),
            is_repeat=bool(d.get("is_repeat", d.get("isRepeat", False))),
            days_of_week=list(d.get("days_of_week", d.get("daysOfWeek")) or []),
            specific_date=d.get("specific_date", d.get("specificDate")),
        )


@dataclass
class TaskTemplate:
    """A task made of segments, optionally valid only within a date window."""
    id: str = ""
    name: str = ""
    segments: List[TaskSegment] = field(default_factory=list)
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    def __post_init__(self):
        self.segments = [s if isinstance(s, TaskSegment) else TaskSegment.from_dict(s) for s in self.segments]
        if self.start_date is not None:
            self.start_date = to_date(self.start_date)
        if self.end_date is not None:
            self.end_date = to_date(self.end_date)

    def is_valid_on(self, d: date) -> bool:
        if self.start_date and d < self.start_date:
            return False
        if self.end_date and d > self.end_date:
            return False
        return True

    def overlaps(self, start: date, end: date) -> bool:
        """True if the validity window intersects [start, end]."""
        if self.start_date and self.start_date > end:
            return False
        if self.end_date and self.end_date < start:
            return False
        return True

    @classmethod
    def from_dict(cls, d: dict) -> "TaskTemplate":
        return cls(
            id=str(d.get("id", "")),
            name=d.get("name", ""),
            segments=list(d.get("segments") or []),
            start_date=d.get("start_date", d.get("startDate")),
            end_date=d.get("end_date", d.get("endDate")),
        )
