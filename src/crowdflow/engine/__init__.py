"""
Engine Module
=============

Simulation and alerting core.

This module contains:
    - classifier.py: Occupancy ratio to density/risk bands
    - predictor.py: Rule-table count prediction
    - occupancy.py: Base-occupancy recipe and context draws
    - alerts.py: Alert store with the active/resolved lifecycle
    - simulator.py: Live readings, tick protocol, alert evaluation
    - history.py: Synthetic historical readings
    - runner.py: Fixed-cadence live-update driver

Key Design Decisions:
    - Classifier and predictor are pure
    - All randomness and time are injected
    - Snapshots are immutable values published atomically per tick
"""

from crowdflow.engine.alerts import AlertStore
from crowdflow.engine.classifier import classify_density, classify_risk
from crowdflow.engine.history import HistoricalGenerator, generate_history
from crowdflow.engine.predictor import RulePredictor
from crowdflow.engine.runner import LiveUpdateRunner
from crowdflow.engine.simulator import CrowdSimulator

__all__ = [
    "AlertStore",
    "classify_density",
    "classify_risk",
    "HistoricalGenerator",
    "generate_history",
    "RulePredictor",
    "LiveUpdateRunner",
    "CrowdSimulator",
]
