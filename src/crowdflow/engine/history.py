"""
Historical Generator
====================

Batch generation of synthetic past readings for trend analysis.

For each of the ``days`` calendar days before today (oldest first), each
hour 0..23, and each location in catalog order, one reading is produced,
timestamped at that hour with minutes and seconds zeroed.

Counts use the history occupancy profile (peak 0.7, ghat x1.1, no entry
gate bonus), which differs from live initialization. Weather is drawn per
reading and the day type follows the reading's own calendar date.

The generator is independent of any simulator: it neither reads the live
snapshot nor touches an alert store.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, List, Optional, Sequence

import numpy as np

from crowdflow.engine.classifier import classify_density, classify_risk
from crowdflow.engine.occupancy import (
    HISTORY_PROFILE,
    base_count,
    draw_day_type,
    draw_weather,
)
from crowdflow.models.location import Location
from crowdflow.models.reading import CrowdReading


logger = logging.getLogger(__name__)


HOURS_PER_DAY = 24


class HistoricalGenerator:
    """
    Generator of synthetic hourly readings.

    Example:
        generator = HistoricalGenerator(rng=np.random.default_rng(7))
        readings = generator.generate(locations, days=7)
    """

    def __init__(
        self,
        rng: Optional[Any] = None,
        clock: Optional[Callable[[], datetime]] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the generator.

        Args:
            rng: Random source with uniform() and random()
            clock: Returns the current time (defaults to datetime.now)
            seed: Seed for numpy.random.default_rng when rng is not given
        """
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self._clock = clock or datetime.now

    def generate(self, locations: Sequence[Location], days: int) -> List[CrowdReading]:
        """
        Generate hourly readings for the given number of past days.

        Day type follows each reading's own calendar date (Saturday and
        Sunday readings are "weekend"), not the date of generation.

        Args:
            locations: Locations to generate for
            days: Number of prior calendar days (>= 0)

        Returns:
            Readings in chronological order, locations in catalog order
            within each hour
        """
        if days < 0:
            raise ValueError("days must be non-negative")

        midnight = self._clock().replace(hour=0, minute=0, second=0, microsecond=0)
        readings: List[CrowdReading] = []

        for days_ago in range(days, 0, -1):
            day_start = midnight - timedelta(days=days_ago)
            for hour in range(HOURS_PER_DAY):
                timestamp = day_start.replace(hour=hour)
                for location in locations:
                    count = base_count(location, hour, self._rng, HISTORY_PROFILE)
                    readings.append(CrowdReading(
                        location_id=location.id,
                        timestamp=timestamp,
                        current_count=count,
                        predicted_count=count,
                        density=classify_density(count, location.capacity),
                        risk_level=classify_risk(count, location.capacity),
                        weather=draw_weather(self._rng),
                        day_type=draw_day_type(self._rng, timestamp.date()),
                    ))

        logger.info(
            f"Generated history: {len(readings)} readings, "
            f"{len(locations)} locations, {days} days"
        )
        return readings


def generate_history(
    locations: Sequence[Location],
    days: int,
    rng: Optional[Any] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> List[CrowdReading]:
    """Generate synthetic history with a one-off HistoricalGenerator."""
    return HistoricalGenerator(rng=rng, clock=clock).generate(locations, days)
