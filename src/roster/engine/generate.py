"""
Roster generation entry point.

    inputs -> Constraint Compiler + Rotation Resolver -> SchedulingContext
           -> strategy -> (weekend transitions) -> Result Formatter
"""
from typing import Iterable, List, Mapping, Optional, Union

from roster.engine.compiler import compile_hard_constraints
from roster.engine.context import build_context
from roster.engine.formatter import format_result
from roster.engine.rotation import capacity_warnings, resolve_rotations
from roster.engine.selector import parse_mode, select_strategy
from roster.engine.transitions import apply_weekend_transitions
from roster.exceptions import ConfigurationError
from roster.models.config import RosterConfig
from roster.models.constraints import Absence, HourlyBlockage, SchedulingConstraint
from roster.models.person import Person
from roster.models.result import RosterResult
from roster.models.rotation import PersonHistory, RotationConfig, TeamRotation
from roster.models.status import OptimizationMode
from roster.models.task import TaskTemplate
from roster.utils.dates import DateLike, horizon_length, to_date
from roster.utils.logging_setup import RunLogger, get_logger, log_function_call

logger = get_logger("roster.engine.generate")
rlog = RunLogger("roster.engine.generate")


def _coerce(cls, items) -> list:
    """Accept model instances or their dict form."""
    return [item if isinstance(item, cls) else cls.from_dict(item) for item in (items or ())]


@log_function_call
def generate_roster(
    start_date: DateLike,
    end_date: DateLike,
    people: Iterable[Union[Person, dict]],
    rotation_policies: Iterable[Union[TeamRotation, dict]] = (),
    constraints: Iterable[Union[SchedulingConstraint, dict]] = (),
    absences: Iterable[Union[Absence, dict]] = (),
    mode: Optional[Union[str, OptimizationMode]] = None,
    custom_min_staff: Optional[int] = None,
    custom_rotation: Optional[Union[RotationConfig, dict]] = None,
    history: Optional[Mapping[str, Union[PersonHistory, dict]]] = None,
    tasks: Optional[Iterable[Union[TaskTemplate, dict]]] = None,
    hourly_blockages: Iterable[Union[HourlyBlockage, dict]] = (),
    config: Optional[RosterConfig] = None,
) -> RosterResult:
    """
    Generate a roster for every active person over [start_date, end_date].

    Args:
        start_date: First day of the horizon
        end_date: Last day of the horizon (inclusive)
        people: People to roster; inactive ones are skipped
        rotation_policies: Team rotation policies
        constraints: Scheduling constraints
        absences: Absence records
        mode: "ratio", "min_staff" or "tasks" (default: config.mode, which is ratio)
        custom_min_staff: Floor for this run (overrides config.min_daily_staff)
        custom_rotation: Rotation for everyone in this run (ratio mode only)
        history: Per-person streak right before start_date
        tasks: Task templates, required in tasks mode
        hourly_blockages: Hourly blockages
        config: Run configuration

    Returns:
        RosterResult. Non-empty warnings or unfulfilled constraints mean the
        run succeeded with caveats.

    Raises:
        ConfigurationError: Before any work, for bad dates, an unknown mode,
            tasks mode without tasks, or an unresolvable rotation.
    """
    config = config or RosterConfig()
    mode = parse_mode(mode if mode is not None else config.mode)

    start = to_date(start_date)
    end = to_date(end_date)
    if end < start:
        raise ConfigurationError(f"End date {end} is before start date {start}")
    total_days = horizon_length(start, end)

    if custom_min_staff is not None and custom_min_staff < 0:
        raise ConfigurationError(f"Minimum headcount must not be negative, got {custom_min_staff}")
    floor = custom_min_staff if custom_min_staff is not None else config.min_daily_staff

    task_list = _coerce(TaskTemplate, tasks)
    strategy = select_strategy(mode, config, task_list)

    everyone = _coerce(Person, people)
    active = [p for p in everyone if p.is_active]
    if len(active) < len(everyone):
        logger.info(f"Skipping {len(everyone) - len(active)} inactive people")

    if isinstance(custom_rotation, dict):
        custom_rotation = RotationConfig.from_dict(custom_rotation)
    if custom_rotation is not None and mode is not OptimizationMode.RATIO:
        # min_staff and tasks seed their own cycle; the override only steers ratio runs
        logger.info(f"Run rotation ignored in {mode.value} mode")
        custom_rotation = None
    rotations = resolve_rotations(
        active,
        _coerce(TeamRotation, rotation_policies),
        custom_rotation=custom_rotation,
        default_rotation=config.default_rotation,
    )

    rlog.phase(f"Roster {start} .. {end} ({total_days} days, {len(active)} people, mode={mode.value})")

    hard = compile_hard_constraints(
        active,
        start,
        total_days,
        constraints=_coerce(SchedulingConstraint, constraints),
        absences=_coerce(Absence, absences),
        hourly_blockages=_coerce(HourlyBlockage, hourly_blockages),
        propagate_home_intent=config.propagate_home_intent,
    )

    seeds = {
        pid: h if isinstance(h, PersonHistory) else PersonHistory.from_dict(h)
        for pid, h in (history or {}).items()
    }
    ctx = build_context(start, total_days, active, hard, rotations, floor, seeds, config)

    warnings: List[str] = capacity_warnings(len(active), rotations, ctx.min_staff)
    for w in warnings:
        logger.warning(w)

    rlog.step(f"Running {strategy.name} strategy")
    with rlog.section(f"{strategy.name} strategy"):
        outcome = strategy.generate(ctx)
    enforced = outcome.min_staff if outcome.min_staff is not None else ctx.min_staff
    if enforced != ctx.min_staff:
        derived = capacity_warnings(len(active), rotations, enforced)
        for w in derived:
            logger.warning(w)
        warnings.extend(derived)
    warnings.extend(outcome.warnings)

    grid = outcome.grid
    if config.weekend_transitions:
        rlog.step("Applying weekend transition rules")
        grid, transition_warnings = apply_weekend_transitions(ctx, grid, floor=enforced)
        warnings.extend(transition_warnings)

    result = format_result(ctx, grid, warnings, min_staff=enforced)
    cs = result.stats.constraint_stats
    rlog.step(
        f"Done: {cs.met}/{cs.total} constraints honored, {len(result.warnings)} warning(s), "
        f"avg {result.stats.avg_staff_per_day:.1f} on base"
    )
    return result
