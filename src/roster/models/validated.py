"""
Pydantic Validated Models
=========================
Validation layer for roster requests arriving as JSON.

Field names are snake_case; the camelCase spelling used by the web client
is accepted too. Every model converts to the engine dataclasses.

Usage:
    from roster.models.validated import RosterRequest

    request = RosterRequest.model_validate(payload)
    result = generate_roster(**request.to_kwargs())
"""
from datetime import date
from typing import Annotated, Any, Dict, List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from roster.models.config import AnnealingParams, RatioStrategyKind, RosterConfig
from roster.models.constraints import Absence, HourlyBlockage, SchedulingConstraint
from roster.models.person import DayOverride, Person
from roster.models.rotation import PersonHistory, RotationConfig, TeamRotation
from roster.models.status import ConstraintKind, OptimizationMode
from roster.models.task import Frequency, TaskSegment, TaskTemplate
from roster.utils.dates import to_date


def _calendar_date(value: Any) -> Any:
    """Accept datetimes and timestamped ISO strings as whole days."""
    if value is None or isinstance(value, date):
        return value
    if isinstance(value, str):
        return to_date(value)
    return value


CalendarDate = Annotated[date, BeforeValidator(_calendar_date)]


class _Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class RotationModel(_Model):
    """A base/home cycle."""
    days_base: int = Field(default=11, ge=0)
    days_home: int = Field(default=3, ge=0)

    @model_validator(mode="after")
    def validate_cycle(self):
        if self.days_base + self.days_home < 1:
            raise ValueError("rotation cycle must contain at least one day")
        return self

    def to_dataclass(self) -> RotationConfig:
        return RotationConfig(self.days_base, self.days_home)


class TeamRotationModel(_Model):
    team_id: str = Field(min_length=1)
    days_on_base: int = Field(ge=0)
    days_at_home: int = Field(ge=0)

    def to_dataclass(self) -> TeamRotation:
        return TeamRotation(self.team_id, self.days_on_base, self.days_at_home)


class DayOverrideModel(_Model):
    is_available: bool = True
    status: Optional[str] = None
    source: Optional[str] = None
    start_hour: Optional[str] = None
    end_hour: Optional[str] = None

    def to_dataclass(self) -> DayOverride:
        return DayOverride(
            is_available=self.is_available,
            status=self.status,
            source=self.source,
            start_hour=self.start_hour,
            end_hour=self.end_hour,
        )


class PersonModel(_Model):
    id: str = Field(min_length=1)
    name: str = ""
    team_id: Optional[str] = None
    daily_availability: Dict[str, DayOverrideModel] = Field(default_factory=dict)
    is_active: bool = True

    @field_validator("daily_availability")
    @classmethod
    def validate_keys(cls, v: Dict[str, DayOverrideModel]) -> Dict[str, DayOverrideModel]:
        """Keys must be calendar dates."""
        for key in v:
            try:
                to_date(key)
            except ValueError:
                raise ValueError(f"invalid availability date '{key}'") from None
        return v

    def to_dataclass(self) -> Person:
        return Person(
            id=self.id,
            name=self.name,
            team_id=self.team_id,
            daily_availability={k: o.to_dataclass() for k, o in self.daily_availability.items()},
            is_active=self.is_active,
        )


class ConstraintModel(_Model):
    id: str = ""
    person_id: Optional[str] = None
    team_id: Optional[str] = None
    task_id: Optional[str] = None
    kind: ConstraintKind = Field(
        default=ConstraintKind.NEVER_ASSIGN,
        validation_alias=AliasChoices("kind", "type"),
    )
    start: Optional[CalendarDate] = Field(default=None, validation_alias=AliasChoices("start", "startTime", "start_time"))
    end: Optional[CalendarDate] = Field(default=None, validation_alias=AliasChoices("end", "endTime", "end_time"))
    description: str = ""

    @model_validator(mode="after")
    def validate_target(self):
        if not self.person_id and not self.team_id:
            raise ValueError("constraint needs a person_id or a team_id")
        if self.start and self.end and self.end < self.start:
            raise ValueError("constraint ends before it starts")
        return self

    def to_dataclass(self) -> SchedulingConstraint:
        return SchedulingConstraint(
            id=self.id,
            person_id=self.person_id,
            team_id=self.team_id,
            task_id=self.task_id,
            kind=self.kind,
            start=self.start,
            end=self.end,
            description=self.description,
        )


class AbsenceModel(_Model):
    id: str = ""
    person_id: str = Field(min_length=1)
    start: CalendarDate = Field(validation_alias=AliasChoices("start", "startDate", "start_date"))
    end: CalendarDate = Field(validation_alias=AliasChoices("end", "endDate", "end_date"))
    status: str = "approved"
    reason: str = ""

    @model_validator(mode="after")
    def validate_range(self):
        if self.end < self.start:
            raise ValueError("absence ends before it starts")
        return self

    def to_dataclass(self) -> Absence:
        return Absence(
            person_id=self.person_id,
            start=self.start,
            end=self.end,
            id=self.id,
            status=self.status,
            reason=self.reason,
        )


class HourlyBlockageModel(_Model):
    person_id: str = Field(min_length=1)
    date: CalendarDate
    start_time: str = "00:00"
    end_time: str = "23:59"

    def to_dataclass(self) -> HourlyBlockage:
        return HourlyBlockage(self.person_id, self.date, self.start_time[:5], self.end_time[:5])


class HistoryModel(_Model):
    last_status: str = "base"
    consecutive_days: int = Field(default=1, ge=1)

    @field_validator("last_status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("base", "home", "arrival", "departure", "unavailable"):
            raise ValueError(f"unknown history status '{v}'")
        return v

    def to_dataclass(self) -> PersonHistory:
        return PersonHistory(self.last_status, self.consecutive_days)


class TaskSegmentModel(_Model):
    id: str = ""
    name: str = ""
    duration_hours: float = Field(default=8.0)
    frequency: Frequency = Frequency.DAILY
    required_people: int = Field(default=1, ge=0)
    min_rest_hours_after: float = Field(default=0.0, ge=0)
    is_repeat: bool = False
    days_of_week: List[str] = Field(default_factory=list)
    specific_date: Optional[CalendarDate] = None

    def to_dataclass(self) -> TaskSegment:
        return TaskSegment(
            id=self.id,
            name=self.name,
            duration_hours=self.duration_hours,
            frequency=self.frequency,
            required_people=self.required_people,
            min_rest_hours_after=self.min_rest_hours_after,
            is_repeat=self.is_repeat,
            days_of_week=list(self.days_of_week),
            specific_date=self.specific_date,
        )


class TaskTemplateModel(_Model):
    id: str = ""
    name: str = ""
    segments: List[TaskSegmentModel] = Field(default_factory=list)
    start_date: Optional[CalendarDate] = None
    end_date: Optional[CalendarDate] = None

    def to_dataclass(self) -> TaskTemplate:
        return TaskTemplate(
            id=self.id,
            name=self.name,
            segments=[s.to_dataclass() for s in self.segments],
            start_date=self.start_date,
            end_date=self.end_date,
        )


class AnnealingModel(_Model):
    iterations: int = Field(default=20000, ge=0, le=1_000_000)
    initial_temp: float = Field(default=100.0, gt=0)
    cooling_rate: float = Field(default=0.9995, gt=0, le=1)
    random_seed: Optional[int] = None

    def to_dataclass(self) -> AnnealingParams:
        return AnnealingParams(
            iterations=self.iterations,
            initial_temp=self.initial_temp,
            cooling_rate=self.cooling_rate,
            random_seed=self.random_seed,
        )


class RosterConfigModel(_Model):
    """Validated run configuration; converts to RosterConfig."""
    min_daily_staff: int = Field(default=0, ge=0)
    default_rotation: Optional[RotationModel] = Field(default_factory=RotationModel)
    max_repair_passes: int = Field(default=200, ge=1, le=10_000)
    seed_days_base: int = Field(default=8, ge=1)
    seed_days_home: int = Field(default=6, ge=0)
    surplus_margin: int = Field(default=2, ge=0)
    ratio_strategy: RatioStrategyKind = RatioStrategyKind.OFFSET
    transition_day: bool = False
    annealing: AnnealingModel = Field(default_factory=AnnealingModel)
    propagate_home_intent: bool = False
    weekend_transitions: bool = False
    rest_weekday: int = Field(default=5, ge=0, le=6)

    def to_dataclass(self, mode: OptimizationMode = OptimizationMode.RATIO) -> RosterConfig:
        return RosterConfig(
            mode=mode,
            min_daily_staff=self.min_daily_staff,
            default_rotation=self.default_rotation.to_dataclass() if self.default_rotation else None,
            max_repair_passes=self.max_repair_passes,
            seed_days_base=self.seed_days_base,
            seed_days_home=self.seed_days_home,
            surplus_margin=self.surplus_margin,
            ratio_strategy=self.ratio_strategy,
            transition_day=self.transition_day,
            annealing=self.annealing.to_dataclass(),
            propagate_home_intent=self.propagate_home_intent,
            weekend_transitions=self.weekend_transitions,
            rest_weekday=self.rest_weekday,
        )


class RosterRequest(_Model):
    """
    A complete roster generation request.

    Cross-field rules: the horizon must not end before it starts, and tasks
    mode needs at least one task.
    """
    start_date: CalendarDate
    end_date: CalendarDate
    people: List[PersonModel] = Field(default_factory=list)
    rotation_policies: List[TeamRotationModel] = Field(
        default_factory=list,
        validation_alias=AliasChoices("rotation_policies", "rotationPolicies", "teamRotations"),
    )
    constraints: List[ConstraintModel] = Field(default_factory=list)
    absences: List[AbsenceModel] = Field(default_factory=list)
    mode: OptimizationMode = OptimizationMode.RATIO
    custom_min_staff: Optional[int] = Field(default=None, ge=0)
    custom_rotation: Optional[RotationModel] = None
    history: Dict[str, HistoryModel] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("history", "historySeed"),
    )
    tasks: List[TaskTemplateModel] = Field(default_factory=list)
    hourly_blockages: List[HourlyBlockageModel] = Field(default_factory=list)
    config: RosterConfigModel = Field(default_factory=RosterConfigModel)

    @model_validator(mode="after")
    def validate_model(self):
        """Cross-field validation."""
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        if self.mode == OptimizationMode.TASKS and not self.tasks:
            raise ValueError("tasks mode requires at least one task")
        ids = [p.id for p in self.people]
        if len(ids) != len(set(ids)):
            raise ValueError("person ids must be unique")
        return self

    def to_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for generate_roster."""
        return {
            "start_date": self.start_date,
            "end_date": self.end_date,
            "people": [p.to_dataclass() for p in self.people],
            "rotation_policies": [r.to_dataclass() for r in self.rotation_policies],
            "constraints": [c.to_dataclass() for c in self.constraints],
            "absences": [a.to_dataclass() for a in self.absences],
            "mode": self.mode,
            "custom_min_staff": self.custom_min_staff,
            "custom_rotation": self.custom_rotation.to_dataclass() if self.custom_rotation else None,
            "history": {pid: h.to_dataclass() for pid, h in self.history.items()},
            "tasks": [t.to_dataclass() for t in self.tasks],
            "hourly_blockages": [b.to_dataclass() for b in self.hourly_blockages],
            "config": self.config.to_dataclass(self.mode),
        }

    def task_templates(self) -> List[TaskTemplate]:
        return [t.to_dataclass() for t in self.tasks]
