"""
Crowd Simulator
===============

Owner of the live per-location readings and the alert store.

Update Protocol:
    initialize(locations)
        One reading per location from the live base-occupancy recipe,
        with weather and day type drawn per location.

    tick()
        For every location, in catalog order:
            1. predicted = predictor(hour, weather, day_type, current_count)
            2. current = max(0, floor(predicted * jitter)), jitter ~ U[0.9, 1.1]
            3. density / risk reclassified against capacity
            4. reading replaced wholesale (timestamp = now)
            5. congestion alert raised if risk is critical and none is open

        The predicted count is stored unjittered. Locations do not interact.

Atomicity:
    A tick builds a new mapping and publishes it only after every location
    has been processed, under a single update lock. Readers see either the
    pre-tick or the post-tick snapshot, never a mix.

Alerts are never resolved automatically, even when a location drops back
to safe. An operator must call resolve_alert().
"""

import logging
import threading
from datetime import datetime
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import numpy as np

from crowdflow.catalog.loader import validate_catalog
from crowdflow.engine.alerts import AlertStore
from crowdflow.engine.classifier import classify_density, classify_risk
from crowdflow.engine.occupancy import (
    LIVE_PROFILE,
    base_count,
    draw_day_type,
    draw_weather,
    floor_count,
)
from crowdflow.engine.predictor import RulePredictor
from crowdflow.errors import SimulatorStateError
from crowdflow.models.alert import Alert
from crowdflow.models.location import Location, LocationCategory
from crowdflow.models.reading import CrowdReading, RiskLevel


logger = logging.getLogger(__name__)


TICK_JITTER_RANGE = (0.9, 1.1)


class CrowdSimulator:
    """
    Stateful crowd simulation with alerting.

    Attributes:
        predictor: Rule predictor used on every tick
        alerts: Alert store owned by this simulator

    Example:
        simulator = CrowdSimulator(seed=42)
        simulator.initialize(load_catalog())

        simulator.tick()
        for location_id, reading in simulator.get_snapshot().items():
            print(location_id, reading.current_count, reading.risk_level.value)
    """

    def __init__(
        self,
        predictor: Optional[RulePredictor] = None,
        rng: Optional[Any] = None,
        clock: Optional[Callable[[], datetime]] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the simulator.

        Args:
            predictor: Predictor to use (defaults to RulePredictor)
            rng: Random source with uniform() and random(); takes
                precedence over seed
            clock: Returns the current time (defaults to datetime.now)
            seed: Seed for numpy.random.default_rng when rng is not given
        """
        self.predictor = predictor or RulePredictor()
        self.alerts = AlertStore()
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self._clock = clock or datetime.now

        self._lock = threading.Lock()
        self._locations: List[Location] = []
        self._snapshot: Optional[Dict[str, CrowdReading]] = None
        self._tick_count: int = 0

        logger.info(
            f"CrowdSimulator created: predictor={type(self.predictor).__name__}, "
            f"seed={seed}"
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def initialize(self, locations: Sequence[Location]) -> None:
        """
        Build the initial reading for every location.

        Args:
            locations: Location catalog in display order

        Raises:
            ConfigurationError: If the catalog has a bad capacity or duplicate id
        """
        validate_catalog(locations)

        now = self._clock()
        snapshot: Dict[str, CrowdReading] = {}

        for location in locations:
            count = base_count(location, now.hour, self._rng, LIVE_PROFILE)
            snapshot[location.id] = CrowdReading(
                location_id=location.id,
                timestamp=now,
                current_count=count,
                predicted_count=count,
                density=classify_density(count, location.capacity),
                risk_level=classify_risk(count, location.capacity),
                weather=draw_weather(self._rng),
                day_type=draw_day_type(self._rng, now.date()),
            )

        with self._lock:
            self._locations = list(locations)
            self._snapshot = snapshot
            self._tick_count = 0

        logger.info(f"CrowdSimulator initialized: {len(snapshot)} locations")

    def tick(self) -> None:
        """
        Advance every location by one simulation step.

        Raises:
            SimulatorStateError: If called before initialize()
        """
        with self._lock:
            previous = self._require_snapshot()
            now = self._clock()
            snapshot: Dict[str, CrowdReading] = {}
            raised = 0

            for location in self._locations:
                reading = self._advance(location, previous[location.id], now)
                snapshot[location.id] = reading
                if self._evaluate_alert(location, reading, now) is not None:
                    raised += 1

            self._snapshot = snapshot
            self._tick_count += 1

        logger.debug(
            f"Tick {self._tick_count}: {len(snapshot)} locations, "
            f"{raised} alerts raised"
        )

    def _advance(self, location: Location, current: CrowdReading, now: datetime) -> CrowdReading:
        """Compute the next reading for one location."""
        predicted = self.predictor.predict(
            hour=now.hour,
            weather=current.weather,
            day_type=current.day_type,
            historical_average=current.current_count,
        )
        jitter = self._rng.uniform(*TICK_JITTER_RANGE)
        count = floor_count(predicted * jitter)

        return current.model_copy(update={
            "timestamp": now,
            "current_count": count,
            "predicted_count": predicted,
            "density": classify_density(count, location.capacity),
            "risk_level": classify_risk(count, location.capacity),
        })

    def _evaluate_alert(self, location: Location, reading: CrowdReading, now: datetime) -> Optional[Alert]:
        """Raise a congestion alert if the location is critical."""
        if reading.risk_level != RiskLevel.CRITICAL:
            return None
        return self.alerts.raise_congestion(location, now)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_snapshot(
        self,
        category: Optional[LocationCategory] = None,
    ) -> Mapping[str, CrowdReading]:
        """
        Current readings keyed by location id, in catalog order.

        Args:
            category: Restrict to locations of this category

        Returns:
            Read-only mapping of immutable readings

        Raises:
            SimulatorStateError: If called before initialize()
        """
        with self._lock:
            snapshot = self._require_snapshot()
            locations = self._locations

        if category is None:
            return MappingProxyType(snapshot)

        category = LocationCategory(category)
        return MappingProxyType({
            location.id: snapshot[location.id]
            for location in locations
            if location.category == category
        })

    def get_reading(self, location_id: str) -> Optional[CrowdReading]:
        """Current reading for one location, or None if unknown."""
        return self.get_snapshot().get(location_id)

    def get_active_alerts(self) -> List[Alert]:
        """Unresolved alerts in creation order."""
        return self.alerts.active()

    def get_all_alerts(self) -> List[Alert]:
        """All alerts including resolved ones, in creation order."""
        return self.alerts.all()

    def get_alert(self, alert_id: str) -> Optional[Alert]:
        """Look up one alert by id."""
        return self.alerts.get(alert_id)

    def resolve_alert(self, alert_id: str) -> bool:
        """
        Resolve an alert.

        Unknown or already resolved ids are ignored.

        Returns:
            True if an active alert was resolved
        """
        return self.alerts.resolve(alert_id)

    @property
    def locations(self) -> List[Location]:
        """Catalog the simulator was initialized with."""
        return list(self._locations)

    @property
    def is_initialized(self) -> bool:
        return self._snapshot is not None

    @property
    def tick_count(self) -> int:
        """Ticks completed since initialize()."""
        return self._tick_count

    def _require_snapshot(self) -> Dict[str, CrowdReading]:
        if self._snapshot is None:
            raise SimulatorStateError("CrowdSimulator used before initialize()")
        return self._snapshot
