"""Loading roster requests and team data."""
import json
from pathlib import Path
from typing import List, Union

import pandas as pd
from pydantic import ValidationError

from roster.exceptions import InputValidationError
from roster.models.person import Person
from roster.models.validated import RosterRequest
from roster.utils.logging_setup import get_logger

logger = get_logger("roster.io.loader")


def _safe_bool(value, default: bool = True) -> bool:
    """Safely convert a CSV cell to bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if not text:
            return default
        return text in ("1", "true", "yes", "y")
    return default


def parse_request(payload: dict) -> RosterRequest:
    """
    Validate a request payload.

    Raises:
        InputValidationError: If the payload does not validate.
    """
    try:
        return RosterRequest.model_validate(payload)
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        ]
        raise InputValidationError(
            f"Invalid roster request ({len(problems)} problem(s)): " + "; ".join(problems[:5]),
            errors=problems,
        ) from e


def load_request(path: Union[str, Path]) -> RosterRequest:
    """
    Load and validate a JSON roster request.

    Raises:
        InputValidationError: If the file is not valid JSON or fails validation.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise InputValidationError(f"{path} is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise InputValidationError(f"{path} must contain a JSON object")

    request = parse_request(payload)
    logger.info(
        f"Loaded request from {path}: {len(request.people)} people, "
        f"{request.start_date} .. {request.end_date}, mode={request.mode.value}"
    )
    return request


def load_people_csv(source: Union[str, Path, pd.DataFrame]) -> List[Person]:
    """
    Load people from a CSV file or DataFrame.

    Columns: id (required), name, team_id, is_active.
    """
    if isinstance(source, pd.DataFrame):
        df = source.copy()
    else:
        df = pd.read_csv(source, dtype=str)

    df = df.fillna("")
    if "id" not in df.columns:
        raise InputValidationError("People CSV must have an 'id' column")

    people = []
    for _, row in df.iterrows():
        pid = str(row["id"]).strip()
        if not pid:
            continue
        people.append(Person(
            id=pid,
            name=str(row.get("name", "")).strip(),
            team_id=str(row.get("team_id", "")).strip() or None,
            is_active=_safe_bool(row.get("is_active", "")),
        ))

    logger.debug(f"Loaded {len(people)} people from CSV")
    return people
