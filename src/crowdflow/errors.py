"""
Error Types
===========

Exceptions raised by the CrowdFlow engine.

Taxonomy:
    - ConfigurationError: Invalid location catalog (fatal at load time)
    - SimulatorStateError: Simulator used before initialize()

Resolving an unknown alert is NOT an error and raises nothing.
"""


class CrowdFlowError(Exception):
    """Base class for all CrowdFlow errors."""


class ConfigurationError(CrowdFlowError):
    """Location catalog is invalid (non-positive capacity, duplicate id, bad file)."""


class SimulatorStateError(CrowdFlowError):
    """Simulator operation attempted before initialize()."""
