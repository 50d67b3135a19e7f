"""
Insights Module
===============

Aggregate insights over the live snapshot.

This module computes summaries for observability ONLY.
Insights do NOT influence simulation or alerting.

Derived from:
    - Location catalog (capacity, category)
    - Live snapshot (counts, bands, weather)
    - Active alerts (severity)
    - Clock (peak-hour status)

Recommendation Rules (in order):
    critical   - at least one location at critical risk
    warning    - overall utilization above 80%
    info       - current hour is a peak hour
    weather    - rainy is the dominant weather

NO SIMULATOR STATE IS MUTATED.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Mapping, Optional, Sequence

import numpy as np

from crowdflow.engine.occupancy import PEAK_HOURS
from crowdflow.models.alert import Alert, AlertSeverity
from crowdflow.models.location import Location
from crowdflow.models.reading import CrowdReading, DensityLevel, RiskLevel, Weather


logger = logging.getLogger(__name__)


DENSITY_SCORES: Dict[DensityLevel, int] = {
    DensityLevel.LOW: 1,
    DensityLevel.MEDIUM: 2,
    DensityLevel.HIGH: 3,
}

UTILIZATION_WARNING_PCT = 80


@dataclass(frozen=True, slots=True)
class Recommendation:
    """Operator recommendation derived from the insights."""

    type: str
    message: str
    action: str


@dataclass(frozen=True, slots=True)
class CategoryStats:
    """Occupancy totals for one location category."""

    locations: int
    people: int
    capacity: int
    utilization_pct: int


@dataclass(frozen=True, slots=True)
class InsightsSnapshot:
    """
    Aggregate view over all monitored locations.

    All values are DERIVED from the snapshot and alerts.
    """

    total_people: int
    total_capacity: int
    utilization_pct: int
    risk_counts: Dict[str, int]
    density_counts: Dict[str, int]
    average_density_score: float
    dominant_weather: Optional[str]
    average_current_count: float
    average_predicted_count: float
    critical_alerts: int
    warning_alerts: int
    trend_direction: str
    is_peak_hour: bool
    categories: Dict[str, CategoryStats] = field(default_factory=dict)
    recommendations: List[Recommendation] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Export as dictionary for logging/serialization."""
        return {
            "total_people": self.total_people,
            "total_capacity": self.total_capacity,
            "utilization_pct": self.utilization_pct,
            "risk_counts": dict(self.risk_counts),
            "density_counts": dict(self.density_counts),
            "average_density_score": round(self.average_density_score, 2),
            "dominant_weather": self.dominant_weather,
            "average_current_count": round(self.average_current_count, 1),
            "average_predicted_count": round(self.average_predicted_count, 1),
            "critical_alerts": self.critical_alerts,
            "warning_alerts": self.warning_alerts,
            "trend_direction": self.trend_direction,
            "is_peak_hour": self.is_peak_hour,
            "categories": {
                name: {
                    "locations": stats.locations,
                    "people": stats.people,
                    "capacity": stats.capacity,
                    "utilization_pct": stats.utilization_pct,
                }
                for name, stats in self.categories.items()
            },
            "recommendations": [
                {"type": r.type, "message": r.message, "action": r.action}
                for r in self.recommendations
            ],
        }


def _percent(part: int, whole: int) -> int:
    return round(part / whole * 100) if whole > 0 else 0


def recommend(
    critical_locations: int,
    utilization_pct: int,
    is_peak_hour: bool,
    dominant_weather: Optional[str],
) -> List[Recommendation]:
    """Apply the recommendation rules in fixed order."""
    recommendations = []

    if critical_locations > 0:
        recommendations.append(Recommendation(
            type="critical",
            message=f"Immediate action needed at {critical_locations} location(s)",
            action="Deploy crowd control teams",
        ))

    if utilization_pct > UTILIZATION_WARNING_PCT:
        recommendations.append(Recommendation(
            type="warning",
            message="Overall capacity approaching limit",
            action="Consider entry restrictions",
        ))

    if is_peak_hour:
        recommendations.append(Recommendation(
            type="info",
            message="Peak hour detected",
            action="Increase monitoring frequency",
        ))

    if dominant_weather == Weather.RAINY.value:
        recommendations.append(Recommendation(
            type="weather",
            message="Weather may affect crowd patterns",
            action="Prepare covered areas",
        ))

    return recommendations


class InsightsComputer:
    """
    Computes aggregate insights from the catalog, snapshot and alerts.

    Does NOT import the simulator.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        """
        Initialize insights computer.

        Args:
            clock: Returns the current time (defaults to datetime.now)
        """
        self._clock = clock or datetime.now

    def compute(
        self,
        locations: Sequence[Location],
        snapshot: Mapping[str, CrowdReading],
        alerts: Sequence[Alert],
    ) -> InsightsSnapshot:
        """
        Compute an insights snapshot.

        Args:
            locations: Location catalog
            snapshot: Current readings keyed by location id
            alerts: Active alerts

        Returns:
            InsightsSnapshot
        """
        readings = [snapshot[loc.id] for loc in locations if loc.id in snapshot]

        current = np.array([r.current_count for r in readings], dtype=float)
        predicted = np.array([r.predicted_count for r in readings], dtype=float)
        scores = np.array([DENSITY_SCORES[r.density] for r in readings], dtype=float)

        total_people = int(current.sum())
        total_capacity = sum(loc.capacity for loc in locations)

        risk_counts = Counter(r.risk_level.value for r in readings)
        density_counts = Counter(r.density.value for r in readings)
        weather_counts = Counter(r.weather.value for r in readings)

        categories: Dict[str, CategoryStats] = {}
        for category in dict.fromkeys(loc.category for loc in locations):
            members = [loc for loc in locations if loc.category == category]
            people = sum(snapshot[loc.id].current_count for loc in members if loc.id in snapshot)
            capacity = sum(loc.capacity for loc in members)
            categories[category.value] = CategoryStats(
                locations=len(members),
                people=people,
                capacity=capacity,
                utilization_pct=_percent(people, capacity),
            )

        utilization_pct = _percent(total_people, total_capacity)
        average_current = float(current.mean()) if readings else 0.0
        average_predicted = float(predicted.mean()) if readings else 0.0
        dominant_weather = weather_counts.most_common(1)[0][0] if weather_counts else None
        is_peak_hour = self._clock().hour in PEAK_HOURS

        return InsightsSnapshot(
            total_people=total_people,
            total_capacity=total_capacity,
            utilization_pct=utilization_pct,
            risk_counts={level.value: risk_counts.get(level.value, 0) for level in RiskLevel},
            density_counts={level.value: density_counts.get(level.value, 0) for level in DensityLevel},
            average_density_score=float(scores.mean()) if readings else 0.0,
            dominant_weather=dominant_weather,
            average_current_count=average_current,
            average_predicted_count=average_predicted,
            critical_alerts=sum(1 for a in alerts if a.severity == AlertSeverity.HIGH),
            warning_alerts=sum(1 for a in alerts if a.severity == AlertSeverity.MEDIUM),
            trend_direction="increasing" if average_predicted > average_current else "decreasing",
            is_peak_hour=is_peak_hour,
            categories=categories,
            recommendations=recommend(
                critical_locations=risk_counts.get(RiskLevel.CRITICAL.value, 0),
                utilization_pct=utilization_pct,
                is_peak_hour=is_peak_hour,
                dominant_weather=dominant_weather,
            ),
        )
