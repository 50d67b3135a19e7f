"""
Test Configuration
==================

Pytest fixtures and test configuration for CrowdFlow.
"""

from datetime import datetime
from itertools import cycle

import pytest


# Wednesday, 18:00 - evening peak on a weekday
WEEKDAY_EVENING = datetime(2026, 10, 14, 18, 0, 0)


class FakeClock:
    """Settable clock returning a fixed datetime."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class ScriptedRandom:
    """
    Random source replaying fixed values.

    uniform() cycles through ``uniform_values`` regardless of the requested
    range; random() cycles through ``random_values``.
    """

    def __init__(self, uniform_values=(1.0,), random_values=(0.5,)) -> None:
        self._uniform = cycle(uniform_values)
        self._random = cycle(random_values)

    def uniform(self, low: float, high: float) -> float:
        return next(self._uniform)

    def random(self) -> float:
        return next(self._random)


@pytest.fixture
def clock():
    """Clock fixed at a weekday evening peak."""
    return FakeClock(WEEKDAY_EVENING)


@pytest.fixture
def scripted_random():
    """Jitter of exactly 1.0, sunny weather, normal weekday."""
    return ScriptedRandom()


@pytest.fixture
def food_stall():
    """Provide a single food stall with capacity 1000."""
    from crowdflow.models.location import Location, LocationCategory

    return Location(
        id="food-1",
        name="Central Food Court",
        category=LocationCategory.FOOD_STALL,
        capacity=1000,
        x=60,
        y=45,
    )


@pytest.fixture
def sample_locations(food_stall):
    """Provide a small catalog covering every category."""
    from crowdflow.models.location import Location, LocationCategory

    return [
        Location(id="ghat-1", name="Ram Ghat", category=LocationCategory.GHAT, capacity=1000),
        Location(id="gate-1", name="Main Entry Gate", category=LocationCategory.ENTRY_GATE, capacity=1000),
        food_stall,
        Location(id="health-1", name="First Aid Post", category=LocationCategory.HEALTH_CENTER, capacity=200),
    ]


@pytest.fixture
def sample_catalog_data():
    """Provide raw catalog records as they appear in a catalog file."""
    return {
        "locations": [
            {"id": "ghat-1", "name": "Ram Ghat", "category": "ghat", "x": 45, "y": 60, "capacity": 5000},
            {"id": "gate-1", "name": "Main Entry Gate", "category": "entry_gate", "x": 20, "y": 30, "capacity": 10000},
        ]
    }
