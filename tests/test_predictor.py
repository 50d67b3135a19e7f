"""
Predictor Tests
===============

Rule-table multipliers and flooring.
"""

import pytest

from crowdflow.engine.predictor import RulePredictor, hour_multiplier
from crowdflow.models.reading import DayType, Weather


@pytest.fixture
def predictor():
    return RulePredictor()


class TestHourBands:
    """Tests for the hour-of-day multiplier."""

    @pytest.mark.parametrize("hour,expected", [
        (0, 0.5), (5, 0.5),
        (6, 1.3), (9, 1.3),
        (10, 1.0), (16, 1.0),
        (17, 1.4), (20, 1.4),
        (21, 1.0),
        (22, 0.5), (23, 0.5),
    ])
    def test_bands(self, hour, expected):
        """Multiplier for each hour band."""
        assert hour_multiplier(hour) == expected

    def test_rejects_out_of_range_hour(self):
        """Hour 24 is a ValueError."""
        with pytest.raises(ValueError):
            hour_multiplier(24)


class TestPredict:
    """Tests for RulePredictor.predict."""

    def test_evening_rainy_normal(self, predictor):
        """1000 x 1.4 x 0.7 x 1.0 = 980."""
        assert predictor.predict(18, Weather.RAINY, DayType.NORMAL, 1000) == 980

    def test_multipliers_compose_by_product(self, predictor):
        """1000 x 1.3 x 1.1 x 1.5 = 2145."""
        assert predictor.predict(7, Weather.SUNNY, DayType.FESTIVAL, 1000) == 2145

    def test_night_cloudy_weekend(self, predictor):
        """1000 x 0.5 x 1.0 x 1.2 = 600."""
        assert predictor.predict(23, Weather.CLOUDY, DayType.WEEKEND, 1000) == 600

    def test_neutral_context_is_identity(self, predictor):
        """Midday, cloudy, normal day leaves the count unchanged."""
        assert predictor.predict(12, Weather.CLOUDY, DayType.NORMAL, 1234) == 1234

    def test_result_is_floored(self, predictor):
        """7 x 1.1 = 7.7 -> 7."""
        assert predictor.predict(12, Weather.SUNNY, DayType.NORMAL, 7) == 7

    def test_accepts_plain_strings(self, predictor):
        """String weather and day type are accepted."""
        assert predictor.predict(18, "rainy", "normal", 1000) == 980

    def test_zero_average(self, predictor):
        """A zero baseline predicts zero."""
        assert predictor.predict(18, Weather.SUNNY, DayType.FESTIVAL, 0) == 0

    def test_rejects_negative_average(self, predictor):
        """A negative baseline is a ValueError."""
        with pytest.raises(ValueError):
            predictor.predict(12, Weather.SUNNY, DayType.NORMAL, -1)
