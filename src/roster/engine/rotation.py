"""
Rotation Resolver
=================
Picks each person's base/home cycle and aligns it with their history.

Precedence: explicit run override > team rotation policy > system default.
"""
from typing import Dict, Iterable, List, Optional

from roster.exceptions import ConfigurationError
from roster.models.person import Person
from roster.models.rotation import PersonHistory, RotationConfig, TeamRotation
from roster.models.status import DayStatus
from roster.utils.logging_setup import get_logger

logger = get_logger("roster.engine.rotation")


def validate_rotation(rotation: RotationConfig, origin: str) -> RotationConfig:
    """Reject negative segments and empty cycles."""
    if rotation.days_base < 0 or rotation.days_home < 0:
        raise ConfigurationError(
            f"Rotation from {origin} has negative segments: {rotation.days_base}/{rotation.days_home}"
        )
    if rotation.cycle_length < 1:
        raise ConfigurationError(f"Rotation from {origin} has an empty cycle")
    return rotation


def resolve_rotations(
    people: List[Person],
    team_rotations: Iterable[TeamRotation] = (),
    custom_rotation: Optional[RotationConfig] = None,
    default_rotation: Optional[RotationConfig] = None,
) -> Dict[str, RotationConfig]:
    """
    Determine the rotation of every person.

    Raises:
        ConfigurationError: If a person has no resolvable rotation or a
            rotation is malformed.
    """
    if custom_rotation is not None:
        validate_rotation(custom_rotation, "run override")
        logger.info(f"Using run rotation {custom_rotation.days_base}/{custom_rotation.days_home} for everyone")
        return {p.id: custom_rotation for p in people}

    by_team: Dict[str, RotationConfig] = {}
    for tr in team_rotations:
        by_team.setdefault(tr.team_id, validate_rotation(tr.to_config(), f"team {tr.team_id}"))

    if default_rotation is not None:
        validate_rotation(default_rotation, "default")

    configs: Dict[str, RotationConfig] = {}
    fallback = 0
    for p in people:
        rotation = by_team.get(p.team_id) if p.team_id else None
        if rotation is None:
            if default_rotation is None:
                raise ConfigurationError(
                    f"Missing rotation settings for {p.name} ({p.id}): no team rotation and no default"
                )
            rotation = default_rotation
            fallback += 1
        configs[p.id] = rotation

    logger.debug(f"Resolved rotations: {len(people) - fallback} from teams, {fallback} from default")
    return configs


def history_offset(rotation: RotationConfig, history: Optional[PersonHistory]) -> Optional[int]:
    """
    Phase offset that makes day 0 continue the person's current streak.

    With the cycle laid out as [0, days_base) on base then home, a streak of
    K base days means yesterday sat at position (K-1) mod days_base, so
    today is the next position.
    """
    if history is None:
        return None
    cycle = rotation.cycle_length
    k = history.consecutive_days

    if history.last_status is DayStatus.BASE:
        if rotation.days_base == 0:
            return None
        yesterday = (k - 1) % rotation.days_base
    else:
        if rotation.days_home == 0:
            return None
        yesterday = rotation.days_base + (k - 1) % rotation.days_home
    return (yesterday + 1) % cycle


def theoretical_capacity(rotations: Dict[str, RotationConfig]) -> float:
    """Expected people on base per day if everyone follows their ratio."""
    return sum(r.base_ratio for r in rotations.values())


def capacity_warnings(people_count: int, rotations: Dict[str, RotationConfig], min_staff: int) -> List[str]:
    """Advisory infeasibility checks made before optimization."""
    warnings: List[str] = []
    if min_staff <= 0:
        return warnings

    if min_staff > people_count:
        warnings.append(
            f"Minimum headcount {min_staff} exceeds the {people_count} people available; "
            f"the floor cannot be met on any day"
        )
        return warnings

    capacity = theoretical_capacity(rotations)
    if capacity < min_staff:
        warnings.append(
            f"Given the rotation ratios and the available people, the expected daily "
            f"headcount ({capacity:.1f}) is below the required minimum ({min_staff})"
        )
    return warnings
