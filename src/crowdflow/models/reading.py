"""
Crowd Reading Models
====================

This module defines the per-location occupancy reading held in the live
snapshot and produced by the history generator.

Invariant:
    density and risk_level are pure functions of (current_count, capacity)
    at classification time. Readings are never patched field by field; each
    tick replaces a location's reading wholesale.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class DensityLevel(str, Enum):
    """Coarse occupancy band (ratio < 0.4, < 0.7, >= 0.7)."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskLevel(str, Enum):
    """
    Safety classification driving alerting.

    Attributes:
        SAFE: ratio below 0.6
        WARNING: ratio in [0.6, 0.85)
        CRITICAL: ratio at or above 0.85, raises a congestion alert
    """

    SAFE = "safe"
    WARNING = "warning"
    CRITICAL = "critical"


class Weather(str, Enum):
    """Weather condition attached to a reading."""

    SUNNY = "sunny"
    CLOUDY = "cloudy"
    RAINY = "rainy"


class DayType(str, Enum):
    """Calendar context attached to a reading."""

    NORMAL = "normal"
    WEEKEND = "weekend"
    FESTIVAL = "festival"


class CrowdReading(BaseModel):
    """
    Occupancy reading for one location at one instant.

    Attributes:
        location_id: Foreign key into the location catalog
        timestamp: When the reading was produced
        current_count: Observed (simulated) number of people
        predicted_count: Raw predictor output for this step
        density: Density band for current_count / capacity
        risk_level: Risk band for current_count / capacity
        weather: Weather condition
        day_type: Calendar context
    """

    location_id: str = Field(
        ...,
        description="Location identifier",
    )

    timestamp: datetime = Field(
        ...,
        description="Time the reading was produced",
    )

    current_count: int = Field(
        ...,
        ge=0,
        description="Current number of people",
    )

    predicted_count: int = Field(
        ...,
        ge=0,
        description="Predicted number of people (unjittered model output)",
    )

    density: DensityLevel = Field(
        ...,
        description="Density band (low, medium, high)",
    )

    risk_level: RiskLevel = Field(
        ...,
        description="Risk band (safe, warning, critical)",
    )

    weather: Weather = Field(
        ...,
        description="Weather condition",
    )

    day_type: DayType = Field(
        ...,
        description="Day type (normal, weekend, festival)",
    )

    class Config:
        """Pydantic model configuration."""

        frozen = True
