"""Roster result models."""
from dataclasses import dataclass, field
from typing import Any, Dict, List

import pandas as pd

from .status import ALGORITHM_SOURCE, DayStatus


@dataclass
class PresenceEntry:
    """Status of one person on one date."""
    date: str  # YYYY-MM-DD
    person_id: str
    status: DayStatus
    source: str = ALGORITHM_SOURCE

    def __post_init__(self):
        if not isinstance(self.status, DayStatus):
            self.status = DayStatus.from_string(self.status)

    def to_dict(self) -> Dict[str, str]:
        return {
            "date": self.date,
            "personId": self.person_id,
            "status": self.status.value,
            "source": self.source,
        }


@dataclass
class UnfulfilledConstraint:
    """A hard constraint the final roster does not honor."""
    person_id: str
    person_name: str
    date: str
    reason: str
    type: str = "constraint"

    def to_dict(self) -> Dict[str, str]:
        return {
            "personId": self.person_id,
            "personName": self.person_name,
            "date": self.date,
            "type": self.type,
            "reason": self.reason,
        }


@dataclass
class ConstraintStats:
    total: int = 0
    met: int = 0
    percentage: int = 100

    def to_dict(self) -> Dict[str, int]:
        return {"total": self.total, "met": self.met, "percentage": self.percentage}


@dataclass
class RosterStats:
    total_days: int = 0
    avg_staff_per_day: float = 0.0
    constraint_stats: ConstraintStats = field(default_factory=ConstraintStats)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalDays": self.total_days,
            "avgStaffPerDay": self.avg_staff_per_day,
            "constraintStats": self.constraint_stats.to_dict(),
        }


@dataclass
class RosterResult:
    """Complete output of a roster run."""

    roster: List[PresenceEntry] = field(default_factory=list)
    # date -> person_id -> status
    person_statuses: Dict[str, Dict[str, DayStatus]] = field(default_factory=dict)
    stats: RosterStats = field(default_factory=RosterStats)
    warnings: List[str] = field(default_factory=list)
    unfulfilled_constraints: List[UnfulfilledConstraint] = field(default_factory=list)
    min_staff: int = 0

    @property
    def has_caveats(self) -> bool:
        """Succeeded, but with warnings or broken constraints."""
        return bool(self.warnings or self.unfulfilled_constraints)

    def status_of(self, person_id: str, date_key: str) -> DayStatus:
        return self.person_statuses[date_key][person_id]

    def headcount(self, date_key: str) -> int:
        return sum(1 for s in self.person_statuses.get(date_key, {}).values() if s is DayStatus.BASE)

    def to_dict(self) -> Dict[str, Any]:
        """Wire format with camelCase keys."""
        return {
            "roster": [e.to_dict() for e in self.roster],
            "personStatuses": {
                d: {pid: s.value for pid, s in statuses.items()}
                for d, statuses in self.person_statuses.items()
            },
            "stats": self.stats.to_dict(),
            "warnings": list(self.warnings),
            "unfulfilledConstraints": [u.to_dict() for u in self.unfulfilled_constraints],
            "minStaff": self.min_staff,
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Flat roster as a DataFrame."""
        if not self.roster:
            return pd.DataFrame(columns=["date", "person_id", "status"])
        rows = [
            {"date": e.date, "person_id": e.person_id, "status": e.status.value}
            for e in self.roster
        ]
        return pd.DataFrame(rows)

    def to_matrix(self) -> pd.DataFrame:
        """Person × date matrix of status values."""
        df = self.to_dataframe()
        if df.empty:
            return pd.DataFrame()
        return df.pivot(index="person_id", columns="date", values="status")

    def daily_headcount(self) -> pd.Series:
        """Number of people on base per date."""
        df = self.to_dataframe()
        if df.empty:
            return pd.Series(dtype=int)
        return (df["status"] == DayStatus.BASE.value).groupby(df["date"]).sum().astype(int)

    def summary(self) -> Dict[str, Any]:
        """Summary dictionary for display."""
        return {
            "days": self.stats.total_days,
            "people": len({e.person_id for e in self.roster}),
            "avg_staff_per_day": round(self.stats.avg_staff_per_day, 2),
            "min_staff": self.min_staff,
            "constraints": self.stats.constraint_stats.to_dict(),
            "warnings": len(self.warnings),
            "unfulfilled": len(self.unfulfilled_constraints),
        }
