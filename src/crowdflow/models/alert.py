"""
Alert Models
============

This module defines the alerts raised by the simulator.

Lifecycle:
    none -> active -> resolved

    Resolved is terminal. A new congestion episode at the same location
    produces a new Alert with a new id. Alerts are never deleted; resolved
    alerts stay in the store for audit and export.

Only CONGESTION alerts are produced by the engine. EMERGENCY and WEATHER
exist in the data model for integrations that supply their own alerts.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class AlertType(str, Enum):
    """Category of alert."""

    CONGESTION = "congestion"
    EMERGENCY = "emergency"
    WEATHER = "weather"


class AlertSeverity(str, Enum):
    """Alert severity."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Alert(BaseModel):
    """
    An alert raised for a location.

    Alerts are immutable values. Resolution replaces the stored alert with
    a copy whose resolved flag is True.

    Attributes:
        id: Unique identifier assigned at creation
        location_id: Location the alert concerns
        type: Alert category
        severity: Alert severity
        message: Human readable text
        timestamp: Creation time
        resolved: Whether an operator has acknowledged the alert
    """

    id: str = Field(
        ...,
        description="Unique alert identifier",
    )

    location_id: str = Field(
        ...,
        description="Location identifier",
    )

    type: AlertType = Field(
        ...,
        description="Alert category (congestion, emergency, weather)",
    )

    severity: AlertSeverity = Field(
        ...,
        description="Alert severity (low, medium, high)",
    )

    message: str = Field(
        ...,
        description="Human readable alert text",
    )

    timestamp: datetime = Field(
        ...,
        description="Creation time",
    )

    resolved: bool = Field(
        default=False,
        description="True once an operator has resolved the alert",
    )

    class Config:
        """Pydantic model configuration."""

        frozen = True
