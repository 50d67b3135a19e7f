"""
Simulator Tests
===============

Initialization recipe, tick protocol, label consistency and alerting.
"""

from datetime import datetime

import numpy as np
import pytest
from pydantic import ValidationError

from conftest import FakeClock, ScriptedRandom
from crowdflow.engine.classifier import classify_density, classify_risk
from crowdflow.engine.simulator import CrowdSimulator
from crowdflow.errors import ConfigurationError, SimulatorStateError
from crowdflow.models.alert import AlertType
from crowdflow.models.location import LocationCategory
from crowdflow.models.reading import DayType, DensityLevel, RiskLevel, Weather


def make_simulator(clock, rng):
    return CrowdSimulator(rng=rng, clock=clock)


class TestInitialize:
    """Tests for the live base-occupancy recipe."""

    def test_peak_hour_counts_by_category(self, clock, scripted_random, sample_locations):
        """Peak-hour base counts per category."""
        simulator = make_simulator(clock, scripted_random)
        simulator.initialize(sample_locations)
        snapshot = simulator.get_snapshot()

        # 1000 x 0.8 x 1.2 / 1000 x 0.8 x 1.1 / 1000 x 0.8 / 200 x 0.8
        assert snapshot["ghat-1"].current_count == 960
        assert snapshot["gate-1"].current_count == 880
        assert snapshot["food-1"].current_count == 800
        assert snapshot["health-1"].current_count == 160

    def test_off_peak_hour_counts(self, scripted_random, sample_locations):
        """Off-peak base counts use 0.3."""
        clock = FakeClock(datetime(2026, 10, 14, 12, 0, 0))
        simulator = make_simulator(clock, scripted_random)
        simulator.initialize(sample_locations)
        snapshot = simulator.get_snapshot()

        assert snapshot["ghat-1"].current_count == 360
        assert snapshot["food-1"].current_count == 300

    def test_jitter_scales_base_count(self, clock, food_stall):
        """Base jitter multiplies the base count."""
        simulator = make_simulator(clock, ScriptedRandom(uniform_values=(0.8,)))
        simulator.initialize([food_stall])

        assert simulator.get_reading("food-1").current_count == 640

    def test_labels_consistent_without_tick(self, clock, sample_locations):
        """Initial labels match the classifier."""
        simulator = CrowdSimulator(seed=11, clock=clock)
        simulator.initialize(sample_locations)

        for location in sample_locations:
            reading = simulator.get_reading(location.id)
            assert reading.predicted_count == reading.current_count
            assert reading.density == classify_density(reading.current_count, location.capacity)
            assert reading.risk_level == classify_risk(reading.current_count, location.capacity)

    def test_context_draws(self, clock, food_stall):
        """Weather and day type come from the random source."""
        simulator = make_simulator(clock, ScriptedRandom(random_values=(0.9, 0.05)))
        simulator.initialize([food_stall])
        reading = simulator.get_reading("food-1")

        assert reading.weather == Weather.RAINY
        assert reading.day_type == DayType.FESTIVAL

    def test_weekend_day_type(self, scripted_random, food_stall):
        """Saturday is a weekend."""
        saturday = FakeClock(datetime(2026, 10, 17, 12, 0, 0))
        simulator = make_simulator(saturday, scripted_random)
        simulator.initialize([food_stall])

        assert simulator.get_reading("food-1").day_type == DayType.WEEKEND

    def test_rejects_duplicate_ids(self, clock, scripted_random, food_stall):
        """Duplicate ids fail at initialize."""
        simulator = make_simulator(clock, scripted_random)
        with pytest.raises(ConfigurationError):
            simulator.initialize([food_stall, food_stall])

    def test_use_before_initialize(self, clock, scripted_random):
        """Tick and snapshot need initialize first."""
        simulator = make_simulator(clock, scripted_random)

        assert simulator.is_initialized is False
        with pytest.raises(SimulatorStateError):
            simulator.tick()
        with pytest.raises(SimulatorStateError):
            simulator.get_snapshot()


class TestTick:
    """Tests for the tick protocol."""

    def test_predicted_stored_unjittered(self, clock, food_stall):
        """Predicted count is stored before tick jitter."""
        simulator = make_simulator(clock, ScriptedRandom(uniform_values=(1.0, 1.05)))
        simulator.initialize([food_stall])
        simulator.tick()
        reading = simulator.get_reading("food-1")

        # 800 x 1.4 (evening) x 1.1 (sunny) = 1232, then x 1.05 jitter
        assert reading.predicted_count == 1232
        assert reading.current_count == 1293
        assert reading.density == DensityLevel.HIGH
        assert reading.risk_level == RiskLevel.CRITICAL

    def test_reading_replaced_with_new_timestamp(self, clock, scripted_random, food_stall):
        """Each tick replaces the reading with a new timestamp."""
        simulator = make_simulator(clock, scripted_random)
        simulator.initialize([food_stall])
        before = simulator.get_reading("food-1")

        clock.now = datetime(2026, 10, 14, 18, 0, 3)
        simulator.tick()
        after = simulator.get_reading("food-1")

        assert after is not before
        assert after.timestamp == clock.now
        assert after.weather == before.weather
        assert after.day_type == before.day_type
        assert simulator.tick_count == 1

    def test_count_never_negative(self, food_stall):
        """Counts are clamped at zero."""
        clock = FakeClock(datetime(2026, 10, 14, 23, 0, 0))
        simulator = make_simulator(clock, ScriptedRandom(uniform_values=(0.0,)))
        simulator.initialize([food_stall])
        simulator.tick()

        assert simulator.get_reading("food-1").current_count == 0

    def test_labels_match_classifier_after_ticks(self, clock, sample_locations):
        """Labels match the classifier after every tick."""
        simulator = CrowdSimulator(seed=2024, clock=clock)
        simulator.initialize(sample_locations)

        for hour in [18, 19, 20, 23, 2, 7, 12]:
            clock.now = clock.now.replace(hour=hour)
            simulator.tick()
            for location in sample_locations:
                reading = simulator.get_reading(location.id)
                assert reading.risk_level == classify_risk(reading.current_count, location.capacity)
                assert reading.density == classify_density(reading.current_count, location.capacity)

    def test_same_seed_same_results(self, sample_locations):
        """Same seed gives the same counts."""
        results = []
        for _ in range(2):
            clock = FakeClock(datetime(2026, 10, 14, 18, 0, 0))
            simulator = CrowdSimulator(rng=np.random.default_rng(5), clock=clock)
            simulator.initialize(sample_locations)
            simulator.tick()
            simulator.tick()
            results.append({k: v.current_count for k, v in simulator.get_snapshot().items()})

        assert results[0] == results[1]


class TestSnapshot:
    """Tests for snapshot publication."""

    def test_catalog_order(self, clock, scripted_random, sample_locations):
        """Snapshot keys follow catalog order."""
        simulator = make_simulator(clock, scripted_random)
        simulator.initialize(sample_locations)

        assert list(simulator.get_snapshot()) == [loc.id for loc in sample_locations]

    def test_snapshot_is_read_only(self, clock, scripted_random, food_stall):
        """Snapshot and readings cannot be mutated."""
        simulator = make_simulator(clock, scripted_random)
        simulator.initialize([food_stall])
        snapshot = simulator.get_snapshot()

        with pytest.raises(TypeError):
            snapshot["food-1"] = None
        with pytest.raises(ValidationError):
            snapshot["food-1"].current_count = 0

    def test_previous_snapshot_unaffected_by_tick(self, clock, scripted_random, food_stall):
        """Earlier snapshots keep pre-tick values."""
        simulator = make_simulator(clock, scripted_random)
        simulator.initialize([food_stall])
        before = simulator.get_snapshot()

        simulator.tick()

        assert before["food-1"].current_count == 800
        assert simulator.get_snapshot()["food-1"].current_count == 1232

    def test_category_filter(self, clock, scripted_random, sample_locations):
        """Category filter restricts the snapshot."""
        simulator = make_simulator(clock, scripted_random)
        simulator.initialize(sample_locations)

        ghats = simulator.get_snapshot(category=LocationCategory.GHAT)
        assert list(ghats) == ["ghat-1"]


class TestAlerting:
    """Tests for alert evaluation during ticks."""

    def test_no_alert_before_critical(self, clock, scripted_random, food_stall):
        """Warning risk raises no alert."""
        simulator = make_simulator(clock, scripted_random)
        simulator.initialize([food_stall])

        assert simulator.get_reading("food-1").risk_level == RiskLevel.WARNING
        assert simulator.get_active_alerts() == []

    def test_consecutive_critical_ticks_raise_one_alert(self, clock, scripted_random, food_stall):
        """Sustained critical risk raises one alert."""
        simulator = make_simulator(clock, scripted_random)
        simulator.initialize([food_stall])

        simulator.tick()
        simulator.tick()

        assert simulator.get_reading("food-1").risk_level == RiskLevel.CRITICAL
        active = simulator.get_active_alerts()
        assert len(active) == 1
        assert active[0].type == AlertType.CONGESTION
        assert active[0].timestamp == clock.now

    def test_resolve_then_critical_creates_new_alert(self, clock, scripted_random, food_stall):
        """A new critical episode after resolve gets a new alert."""
        simulator = make_simulator(clock, scripted_random)
        simulator.initialize([food_stall])
        simulator.tick()
        first = simulator.get_active_alerts()[0]

        simulator.resolve_alert(first.id)
        simulator.tick()

        active = simulator.get_active_alerts()
        assert len(active) == 1
        assert active[0].id != first.id
        assert simulator.get_alert(first.id).resolved is True
        assert len(simulator.get_all_alerts()) == 2

    def test_no_automatic_resolution(self, clock, scripted_random, food_stall):
        """Alerts stay active after the location drops to safe."""
        simulator = make_simulator(clock, scripted_random)
        simulator.initialize([food_stall])
        simulator.tick()

        clock.now = clock.now.replace(hour=23)
        simulator.tick()
        simulator.tick()

        assert simulator.get_reading("food-1").risk_level == RiskLevel.SAFE
        assert len(simulator.get_active_alerts()) == 1

    def test_resolve_unknown_alert_is_noop(self, clock, scripted_random, food_stall):
        """Unknown ids resolve as a no-op."""
        simulator = make_simulator(clock, scripted_random)
        simulator.initialize([food_stall])
        simulator.tick()

        assert simulator.resolve_alert("missing") is False
        assert len(simulator.get_active_alerts()) == 1

    def test_active_alerts_in_creation_order(self, clock, scripted_random, sample_locations):
        """Active alerts follow catalog order within a tick."""
        simulator = make_simulator(clock, scripted_random)
        simulator.initialize(sample_locations)
        simulator.tick()

        ids = [a.location_id for a in simulator.get_active_alerts()]
        assert ids == [loc.id for loc in sample_locations]
