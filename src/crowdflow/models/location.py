"""
Location Models
===============

This module defines the monitored places of the gathering area.

Locations are EXPLICITLY DECLARED in the location catalog, NOT discovered
at runtime. They are loaded once at startup and never mutated.

Example Location:
    {
        "id": "ghat-1",
        "name": "Ram Ghat",
        "category": "ghat",
        "capacity": 5000,
        "x": 45,
        "y": 60
    }

Note:
    Coordinates are display-only and take no part in any engine decision.
"""

from enum import Enum

from pydantic import BaseModel, Field


class LocationCategory(str, Enum):
    """
    Kind of monitored place.

    The category influences base occupancy (ghats and entry gates draw
    larger crowds than food stalls and health centers).
    """

    GHAT = "ghat"
    ENTRY_GATE = "entry_gate"
    FOOD_STALL = "food_stall"
    HEALTH_CENTER = "health_center"


class Location(BaseModel):
    """
    A monitored place with a fixed capacity.

    Attributes:
        id: Unique identifier within the catalog
        name: Human readable display name
        category: Kind of place
        capacity: Maximum safe number of people (> 0)
        x: Horizontal display coordinate
        y: Vertical display coordinate
    """

    id: str = Field(
        ...,
        min_length=1,
        description="Unique location identifier",
    )

    name: str = Field(
        ...,
        description="Display name",
    )

    category: LocationCategory = Field(
        ...,
        description="Kind of place (ghat, entry_gate, food_stall, health_center)",
    )

    capacity: int = Field(
        ...,
        gt=0,
        description="Maximum safe occupancy (people)",
    )

    x: float = Field(
        default=0.0,
        description="Horizontal display coordinate",
    )

    y: float = Field(
        default=0.0,
        description="Vertical display coordinate",
    )

    class Config:
        """Pydantic model configuration."""

        frozen = True
