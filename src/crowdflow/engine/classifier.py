"""
Occupancy Classifier
====================

Pure functions mapping an occupancy ratio to density and risk bands.

Bands (ratio = count / capacity):
    Density:  < 0.4 low,  < 0.7 medium,   >= 0.7 high
    Risk:     < 0.6 safe, < 0.85 warning, >= 0.85 critical

Both functions are non-decreasing in the ratio. Capacity must be > 0;
the catalog loader guarantees this for every Location.
"""

from crowdflow.models.reading import DensityLevel, RiskLevel


DENSITY_MEDIUM_RATIO = 0.4
DENSITY_HIGH_RATIO = 0.7

RISK_WARNING_RATIO = 0.6
RISK_CRITICAL_RATIO = 0.85


def occupancy_ratio(count: int, capacity: int) -> float:
    """Return count / capacity."""
    if capacity <= 0:
        raise ValueError("capacity must be positive")
    return count / capacity


def classify_density(count: int, capacity: int) -> DensityLevel:
    """Classify occupancy into a density band."""
    ratio = occupancy_ratio(count, capacity)
    if ratio < DENSITY_MEDIUM_RATIO:
        return DensityLevel.LOW
    if ratio < DENSITY_HIGH_RATIO:
        return DensityLevel.MEDIUM
    return DensityLevel.HIGH


def classify_risk(count: int, capacity: int) -> RiskLevel:
    """Classify occupancy into a risk band."""
    ratio = occupancy_ratio(count, capacity)
    if ratio < RISK_WARNING_RATIO:
        return RiskLevel.SAFE
    if ratio < RISK_CRITICAL_RATIO:
        return RiskLevel.WARNING
    return RiskLevel.CRITICAL
