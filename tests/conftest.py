"""Pytest configuration and fixtures."""
import sys
from datetime import date
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from roster.models.person import Person
from roster.models.rotation import RotationConfig

# A Monday; the Saturday of that week is day index 5
START = date(2026, 1, 5)


def make_people(n, team_id=None):
    """People p0..p{n-1}, optionally all in one team."""
    return [Person(id=f"p{i}", name=f"Person {i}", team_id=team_id) for i in range(n)]


@pytest.fixture
def start():
    return START


@pytest.fixture
def ten_people():
    """A ten-person roster without teams."""
    return make_people(10)


@pytest.fixture
def short_rotation():
    """3 days on base, 1 at home."""
    return RotationConfig(3, 1)


@pytest.fixture
def request_payload():
    """A small valid JSON request in the web client's camelCase form."""
    return {
        "startDate": "2026-01-05",
        "endDate": "2026-01-18",
        "mode": "min_staff",
        "customMinStaff": 2,
        "people": [
            {"id": "a", "name": "Avi", "teamId": "t1"},
            {"id": "b", "name": "Bella", "teamId": "t1"},
            {"id": "c", "name": "Chen", "teamId": "t2"},
            {"id": "d", "name": "Dana", "teamId": "t2", "isActive": False},
        ],
        "teamRotations": [
            {"teamId": "t1", "daysOnBase": 11, "daysAtHome": 3},
            {"teamId": "t2", "daysOnBase": 10, "daysAtHome": 4},
        ],
        "constraints": [
            {"personId": "a", "type": "never_assign",
             "startTime": "2026-01-07T08:00:00Z", "endTime": "2026-01-08T20:00:00Z"},
        ],
        "absences": [
            {"personId": "c", "startDate": "2026-01-12", "endDate": "2026-01-12", "status": "pending"},
        ],
    }
