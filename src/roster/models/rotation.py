"""Rotation cycles and history seeds."""
from dataclasses import dataclass

from .status import DayStatus


@dataclass(frozen=True)
class RotationConfig:
    """A repeating cycle: days_base on base followed by days_home at home."""
    days_base: int = 11
    days_home: int = 3

    @property
    def cycle_length(self) -> int:
        return self.days_base + self.days_home

    @property
    def base_ratio(self) -> float:
        """Share of the cycle spent on base."""
        if self.cycle_length <= 0:
            return 0.0
        return self.days_base / self.cycle_length

    def with_transition_day(self) -> "RotationConfig":
        """Turn one base day into a home day to model the exit day."""
        if self.days_home > 0 and self.days_base > 1:
            return RotationConfig(self.days_base - 1, self.days_home + 1)
        return self

    def is_base(self, day: int, offset: int) -> bool:
        """Status of horizon day `day` when the cycle starts at `offset`."""
        if self.cycle_length <= 0:
            return True
        return (day + offset) % self.cycle_length < self.days_base

    def to_dict(self) -> dict:
        return {"days_base": self.days_base, "days_home": self.days_home}

    @classmethod
    def from_dict(cls, d: dict) -> "RotationConfig":
        return cls(
            days_base=int(d.get("days_base", d.get("daysBase", 11))),
            days_home=int(d.get("days_home", d.get("daysHome", 3))),
        )


# System default when neither an explicit nor a team rotation exists
DEFAULT_ROTATION = RotationConfig(11, 3)


@dataclass(frozen=True)
class TeamRotation:
    """Rotation policy attached to a team."""
    team_id: str
    days_on_base: int
    days_at_home: int

    def to_config(self) -> RotationConfig:
        return RotationConfig(self.days_on_base, self.days_at_home)

    @classmethod
    def from_dict(cls, d: dict) -> "TeamRotation":
        return cls(
            team_id=str(d.get("team_id", d.get("teamId", ""))),
            days_on_base=int(d.get("days_on_base", d.get("daysOnBase", 11))),
            days_at_home=int(d.get("days_at_home", d.get("daysAtHome", 3))),
        )


@dataclass(frozen=True)
class PersonHistory:
    """The run a person is in right before the horizon starts."""
    last_status: DayStatus
    consecutive_days: int

    def __post_init__(self):
        status = self.last_status
        if isinstance(status, str) and not isinstance(status, DayStatus):
            status = DayStatus.from_string(status)
        if status is DayStatus.UNAVAILABLE:
            status = DayStatus.HOME
        object.__setattr__(self, "last_status", status)
        object.__setattr__(self, "consecutive_days", max(1, int(self.consecutive_days)))

    @classmethod
    def from_dict(cls, d: dict) -> "PersonHistory":
        return cls(
            last_status=d.get("last_status", d.get("lastStatus", "base")),
            consecutive_days=int(d.get("consecutive_days", d.get("consecutiveDays", 1))),
        )
