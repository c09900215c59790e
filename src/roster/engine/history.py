"""
History seed builder.

Derives, from presence records before the horizon, the streak each person
is in so rotations can continue it instead of restarting.
"""
from collections import defaultdict
from datetime import timedelta
from typing import Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd

from roster.models.rotation import PersonHistory
from roster.models.status import DayStatus
from roster.utils.dates import DateLike, to_date
from roster.utils.logging_setup import get_logger

logger = get_logger("roster.engine.history")

LOOKBACK_DAYS = 45
MAX_GAP_DAYS = 3

_NORMALIZED = {
    "base": DayStatus.BASE,
    "full": DayStatus.BASE,
    "arrival": DayStatus.BASE,
    "home": DayStatus.HOME,
    "departure": DayStatus.HOME,
    "unavailable": DayStatus.HOME,
    "leave": DayStatus.HOME,
}


def normalize_status(status: str) -> Optional[DayStatus]:
    """Fold presence labels into base/home; None for anything else."""
    return _NORMALIZED.get(str(status).strip().lower())


def _field(row: Mapping, *names):
    for name in names:
        if name in row:
            return row[name]
    return None


def build_history(
    rows: Union[pd.DataFrame, Iterable[Mapping]],
    start_date: DateLike,
    lookback_days: int = LOOKBACK_DAYS,
    max_gap_days: int = MAX_GAP_DAYS,
) -> Dict[str, PersonHistory]:
    """
    Build history seeds from presence records.

    Args:
        rows: Records with person_id (or personId), date and status; a
            DataFrame with those columns works too
        start_date: First day of the horizon
        lookback_days: Records older than this many days are ignored
        max_gap_days: A person whose last record is further back gets no seed

    Returns:
        {person_id: PersonHistory}
    """
    if isinstance(rows, pd.DataFrame):
        rows = rows.to_dict("records")

    start = to_date(start_date)
    earliest = start - timedelta(days=lookback_days)

    by_person: Dict[str, List[tuple]] = defaultdict(list)
    for row in rows:
        pid = _field(row, "person_id", "personId")
        raw_date = _field(row, "date")
        if pid is None or raw_date is None:
            continue
        d = to_date(raw_date)
        if earliest <= d < start:
            by_person[str(pid)].append((d, normalize_status(_field(row, "status") or "")))

    history: Dict[str, PersonHistory] = {}
    for pid, records in by_person.items():
        records.sort(key=lambda r: r[0])
        last_date, last_status = records[-1]
        if (start - last_date).days > max_gap_days or last_status is None:
            continue

        count = 0
        for _, status in reversed(records):
            if status is not last_status:
                break
            count += 1
        history[pid] = PersonHistory(last_status=last_status, consecutive_days=count)

    logger.debug(f"History seeds for {len(history)} of {len(by_person)} people")
    return history
