"""
Crowd Count Predictor
=====================

Deterministic rule-based prediction of the next occupancy count.

The prediction is the historical average scaled by a chain of multipliers
applied in fixed order and composed by product:

    1. Hour band:  [6, 9] x1.3 (morning peak), [17, 20] x1.4 (evening peak),
                   >= 22 or <= 5 x0.5 (night), otherwise x1.0
    2. Weather:    rainy x0.7, sunny x1.1, cloudy x1.0
    3. Day type:   weekend x1.2, festival x1.5, normal x1.0

The product is floored to an integer and clamped at zero.

The predictor never sees a location's capacity. Density and risk labels for
a predicted count are assigned by the simulator through the classifier.

Example:
    predictor = RulePredictor()
    predictor.predict(hour=18, weather=Weather.RAINY,
                      day_type=DayType.NORMAL, historical_average=1000)
    # -> 980  (1000 x 1.4 x 0.7 x 1.0)
"""

import logging
from typing import Dict

from crowdflow.engine.occupancy import floor_count
from crowdflow.models.reading import DayType, Weather


logger = logging.getLogger(__name__)


MORNING_PEAK_MULTIPLIER = 1.3
EVENING_PEAK_MULTIPLIER = 1.4
NIGHT_MULTIPLIER = 0.5

WEATHER_MULTIPLIERS: Dict[Weather, float] = {
    Weather.RAINY: 0.7,
    Weather.SUNNY: 1.1,
    Weather.CLOUDY: 1.0,
}

DAY_TYPE_MULTIPLIERS: Dict[DayType, float] = {
    DayType.WEEKEND: 1.2,
    DayType.FESTIVAL: 1.5,
    DayType.NORMAL: 1.0,
}


def hour_multiplier(hour: int) -> float:
    """Multiplier for the hour-of-day band."""
    if not 0 <= hour <= 23:
        raise ValueError(f"hour must be in [0, 23], got {hour}")
    if 6 <= hour <= 9:
        return MORNING_PEAK_MULTIPLIER
    if 17 <= hour <= 20:
        return EVENING_PEAK_MULTIPLIER
    if hour >= 22 or hour <= 5:
        return NIGHT_MULTIPLIER
    return 1.0


class RulePredictor:
    """
    Rule-table predictor for near-future occupancy.

    Stateless; one instance can be shared by any number of simulators.
    """

    def multiplier(self, hour: int, weather: Weather, day_type: DayType) -> float:
        """Composite multiplier for the given context."""
        value = 1.0
        value *= hour_multiplier(hour)
        value *= WEATHER_MULTIPLIERS[Weather(weather)]
        value *= DAY_TYPE_MULTIPLIERS[DayType(day_type)]
        return value

    def predict(
        self,
        hour: int,
        weather: Weather,
        day_type: DayType,
        historical_average: float,
    ) -> int:
        """
        Predict the occupancy count for the given context.

        Args:
            hour: Hour of day in [0, 23]
            weather: Weather condition
            day_type: Calendar context
            historical_average: Baseline count (>= 0)

        Returns:
            Predicted count (>= 0)
        """
        if historical_average < 0:
            raise ValueError("historical_average must be non-negative")

        raw = historical_average * self.multiplier(hour, weather, day_type)
        # 1.4 * 0.7 is 0.97999... in binary floating point
        predicted = floor_count(raw)

        logger.debug(
            f"predict(hour={hour}, weather={Weather(weather).value}, "
            f"day_type={DayType(day_type).value}, avg={historical_average}) -> {predicted}"
        )
        return predicted
