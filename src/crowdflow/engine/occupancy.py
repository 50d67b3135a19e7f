"""
Base Occupancy
==============

Shared recipe for synthetic base occupancy and context draws.

Base count:
    multiplier = 0.3, raised to the profile's peak value in peak hours
                 {6, 7, 8, 17, 18, 19}, then scaled by the category bonus
    count = floor(capacity * multiplier * jitter),  jitter ~ U[0.8, 1.2]

Live initialization and historical backfill use DIFFERENT profiles:

    profile   peak   ghat   entry_gate
    live      0.8    1.2    1.1
    history   0.7    1.1    1.0

All randomness comes from a numpy Generator (or any object offering
``uniform(low, high)`` and ``random()``), so callers control seeding.
"""

import math
from dataclasses import dataclass
from datetime import date
from typing import Any

from crowdflow.models.location import Location, LocationCategory
from crowdflow.models.reading import DayType, Weather


PEAK_HOURS = frozenset({6, 7, 8, 17, 18, 19})
OFF_PEAK_MULTIPLIER = 0.3

BASE_JITTER_RANGE = (0.8, 1.2)

SUNNY_PROBABILITY = 0.6
CLOUDY_PROBABILITY = 0.25
FESTIVAL_PROBABILITY = 0.1


@dataclass(frozen=True, slots=True)
class OccupancyProfile:
    """
    Constants of one base-occupancy recipe.

    Attributes:
        peak_multiplier: Base multiplier during peak hours
        ghat_bonus: Extra factor for ghats
        entry_gate_bonus: Extra factor for entry gates
    """

    peak_multiplier: float
    ghat_bonus: float
    entry_gate_bonus: float

    def base_multiplier(self, category: LocationCategory, hour: int) -> float:
        """Multiplier before jitter for a category at an hour."""
        multiplier = self.peak_multiplier if hour in PEAK_HOURS else OFF_PEAK_MULTIPLIER
        if category == LocationCategory.GHAT:
            multiplier *= self.ghat_bonus
        elif category == LocationCategory.ENTRY_GATE:
            multiplier *= self.entry_gate_bonus
        return multiplier


LIVE_PROFILE = OccupancyProfile(peak_multiplier=0.8, ghat_bonus=1.2, entry_gate_bonus=1.1)
HISTORY_PROFILE = OccupancyProfile(peak_multiplier=0.7, ghat_bonus=1.1, entry_gate_bonus=1.0)


def floor_count(value: float) -> int:
    """Floor a computed count, clamped at zero."""
    # Round first so products like 1000 * 0.96 do not floor to 959
    return max(0, math.floor(round(value, 6)))


def base_count(location: Location, hour: int, rng: Any, profile: OccupancyProfile) -> int:
    """Jittered base occupancy for a location at an hour."""
    jitter = rng.uniform(*BASE_JITTER_RANGE)
    return floor_count(location.capacity * profile.base_multiplier(location.category, hour) * jitter)


def draw_weather(rng: Any) -> Weather:
    """Draw weather: 60% sunny, 25% cloudy, 15% rainy."""
    roll = rng.random()
    if roll < SUNNY_PROBABILITY:
        return Weather.SUNNY
    if roll < SUNNY_PROBABILITY + CLOUDY_PROBABILITY:
        return Weather.CLOUDY
    return Weather.RAINY


def draw_day_type(rng: Any, day: date) -> DayType:
    """Weekend on Saturday/Sunday, otherwise festival with 10% probability."""
    if day.weekday() >= 5:
        return DayType.WEEKEND
    return DayType.FESTIVAL if rng.random() < FESTIVAL_PROBABILITY else DayType.NORMAL
