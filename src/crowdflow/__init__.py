"""
CrowdFlow Safety Engine
=======================

Simulation and alerting engine for crowd safety at a public gathering area.

This package ingests per-location occupancy figures, evolves them over time,
classifies density and risk, predicts near-future counts and raises alerts
when a location turns critical.

Components:
    - models: Immutable value types (Location, CrowdReading, Alert)
    - catalog: Location catalog loading and validation
    - engine: Classifier, predictor, simulator, alert store, history generator
    - observability: Aggregate insights over the live snapshot

Example:
    from crowdflow.catalog import load_catalog
    from crowdflow.engine import CrowdSimulator

    simulator = CrowdSimulator()
    simulator.initialize(load_catalog())
    simulator.tick()

    for alert in simulator.get_active_alerts():
        print(alert.message)
"""

__version__ = "0.1.0"
__author__ = "CrowdFlow Project"

__all__ = [
    "__version__",
]
