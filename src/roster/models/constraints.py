"""Hard-constraint inputs: scheduling constraints, absences, hourly blockages."""
from dataclasses import dataclass
from datetime import date
from typing import Optional

from roster.utils.dates import DateLike, to_date

from .status import ConstraintKind

# Absence statuses that forbid base assignment
BLOCKING_ABSENCE_STATUSES = ("approved", "pending")

FULL_DAY_START = "00:00"
FULL_DAY_END = "23:59"


@dataclass
class SchedulingConstraint:
    """
    A time-ranged rule tied to a person.

    Team-level records (``team_id`` without ``person_id``) and records naming
    a ``task_id`` restrict task assignment, not presence, so they never
    forbid base.
    """
    id: str = ""
    person_id: Optional[str] = None
    team_id: Optional[str] = None
    task_id: Optional[str] = None
    kind: ConstraintKind = ConstraintKind.NEVER_ASSIGN
    start: Optional[DateLike] = None
    end: Optional[DateLike] = None
    description: str = ""

    def __post_init__(self):
        if isinstance(self.kind, str):
            self.kind = ConstraintKind(self.kind)
        if self.start is not None:
            self.start = to_date(self.start)
        if self.end is not None:
            self.end = to_date(self.end)

    @property
    def has_range(self) -> bool:
        return self.start is not None and self.end is not None

    @property
    def forbids_base(self) -> bool:
        return (self.kind.forbids_base and self.has_range
                and bool(self.person_id) and not self.task_id)

    def applies_to(self, person_id: str) -> bool:
        return self.forbids_base and self.person_id == person_id

    @classmethod
    def from_dict(cls, d: dict) -> "SchedulingConstraint":
        return cls(
            id=str(d.get("id", "")),
            person_id=d.get("person_id", d.get("personId")),
            team_id=d.get("team_id", d.get("teamId")),
            task_id=d.get("task_id", d.get("taskId")),
            kind=d.get("kind", d.get("type", ConstraintKind.NEVER_ASSIGN.value)),
            start=d.get("start", d.get("startTime")),
            end=d.get("end", d.get("endTime")),
            description=d.get("description") or "",
        )


@dataclass
class Absence:
    """A leave period; always a hard forbid while approved or pending."""
    person_id: str
    start: DateLike
    end: DateLike
    id: str = ""
    status: str = "approved"
    reason: str = ""

    def __post_init__(self):
        self.start = to_date(self.start)
        self.end = to_date(self.end)
        self.status = (self.status or "approved").strip().lower()

    @property
    def is_blocking(self) -> bool:
        return self.status in BLOCKING_ABSENCE_STATUSES

    @classmethod
    def from_dict(cls, d: dict) -> "Absence":
        return cls(
            id=str(d.get("id", "")),
            person_id=d.get("person_id", d.get("personId")),
            start=d.get("start", d.get("start_date", d.get("startDate"))),
            end=d.get("end", d.get("end_date", d.get("endDate"))),
            status=d.get("status") or "approved",
            reason=d.get("reason") or "",
        )


@dataclass
class HourlyBlockage:
    """A blocked time window on one date; only a full-day block forbids base."""
    person_id: str
    date: date
    start_time: str = FULL_DAY_START
    end_time: str = FULL_DAY_END

    def __post_init__(self):
        self.date = to_date(self.date)

    @property
    def is_full_day(self) -> bool:
        return self.start_time == FULL_DAY_START and self.end_time == FULL_DAY_END

    @classmethod
    def from_dict(cls, d: dict) -> "HourlyBlockage":
        return cls(
            person_id=str(d.get("person_id", d.get("personId", ""))),
            date=d["date"],
            start_time=str(d.get("start_time", d.get("startTime", FULL_DAY_START)))[:5],
            end_time=str(d.get("end_time", d.get("endTime", FULL_DAY_END)))[:5],
        )
