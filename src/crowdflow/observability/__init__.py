"""
Observability Module
====================

Aggregate insights for the CrowdFlow engine.

This module provides:
    - InsightsComputer: Derives aggregate metrics from the live snapshot

DESIGN RULES:
    - Does NOT import the simulator
    - Does NOT influence simulation or alerting
"""

from crowdflow.observability.insights import (
    CategoryStats,
    InsightsComputer,
    InsightsSnapshot,
    Recommendation,
    recommend,
)


__all__ = [
    "CategoryStats",
    "InsightsComputer",
    "InsightsSnapshot",
    "Recommendation",
    "recommend",
]
