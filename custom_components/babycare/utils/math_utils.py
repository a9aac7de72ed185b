# File: utils/math_utils.py
"""Math and calculation utilities for BabyCare.

Pure Python math functions with ZERO Home Assistant dependencies.

Functions:
    - round_value: Consistent rounding to configured precision
    - seconds_to_hours: Duration conversion for chart values
    - safe_average: Division that yields 0 for an empty denominator
    - calculate_percentage: Progress percentage calculations
"""

from __future__ import annotations

# ==============================================================================
# Constants (local copies to avoid circular imports)
# ==============================================================================

DATA_FLOAT_PRECISION = 2
SECONDS_PER_HOUR = 3600


def round_value(value: float, precision: int = DATA_FLOAT_PRECISION) -> float:
    """Round a value to the configured precision.

    Examples:
        round_value(7.456) → 7.46
        round_value(8.0) → 8.0
    """
    return round(value, precision)


def seconds_to_hours(seconds: float) -> float:
    """Convert seconds to hours without rounding.

    Chart values must equal `total / 3600` exactly, so rounding is left to
    the presentation layer.
    """
    return seconds / SECONDS_PER_HOUR


def safe_average(total: float, count: int | float) -> float:
    """Return total / count, or 0.0 when count is not positive.

    Examples:
        safe_average(28800, 2) → 14400.0
        safe_average(0, 0) → 0.0
    """
    if count <= 0:
        return 0.0
    return total / count


def calculate_percentage(
    current: float,
    target: float,
    precision: int = DATA_FLOAT_PRECISION,
) -> float:
    """Calculate progress percentage with proper rounding.

    Args:
        current: Current progress value
        target: Target/total value
        precision: Number of decimal places for rounding

    Returns:
        Percentage with proper rounding, or 0.0 if target is 0

    Examples:
        calculate_percentage(400, 800) → 50.0
        calculate_percentage(1, 3) → 33.33
        calculate_percentage(5, 0) → 0.0
    """
    if target <= 0:
        return 0.0
    return round_value((current / target) * 100, precision)
