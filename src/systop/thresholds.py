"""Severity classification for thresholded metrics."""

from systop.models import Severity

TEMPERATURE_WARNING_C = 70.0
TEMPERATURE_CRITICAL_C = 80.0
SWAP_WARNING_PERCENT = 10.0
SWAP_CRITICAL_PERCENT = 50.0


def _classify(value: float, warning: float, critical: float) -> Severity:
    if value > critical:
        return Severity.CRITICAL
    if value > warning:
        return Severity.WARNING
    return Severity.NORMAL


def classify_temperature(celsius: float) -> Severity:
    """Classify a CPU temperature: above 70C warns, above 80C is critical."""
    return _classify(celsius, TEMPERATURE_WARNING_C, TEMPERATURE_CRITICAL_C)


def classify_swap(percent: float | None) -> Severity | None:
    """
    Classify swap pressure: above 10% warns, above 50% is critical.

    Returns None when swap is not configured (percent is None).
    """
    if percent is None:
        return None
    return _classify(percent, SWAP_WARNING_PERCENT, SWAP_CRITICAL_PERCENT)
