"""
Data Models
===========

Pydantic models for the CrowdFlow engine.

This module re-exports all data models for convenient access.

Models:
    Location:
        - LocationCategory: Kind of monitored place
        - Location: Catalog entry with capacity

    Reading:
        - DensityLevel, RiskLevel: Classification bands
        - Weather, DayType: Context features
        - CrowdReading: Per-location occupancy reading

    Alert:
        - AlertType, AlertSeverity: Alert categories
        - Alert: Alert raised by the simulator
"""

from crowdflow.models.location import Location, LocationCategory
from crowdflow.models.reading import (
    CrowdReading,
    DayType,
    DensityLevel,
    RiskLevel,
    Weather,
)
from crowdflow.models.alert import Alert, AlertSeverity, AlertType

__all__ = [
    # Location
    "LocationCategory",
    "Location",
    # Reading
    "DensityLevel",
    "RiskLevel",
    "Weather",
    "DayType",
    "CrowdReading",
    # Alert
    "AlertType",
    "AlertSeverity",
    "Alert",
]
