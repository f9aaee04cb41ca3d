"""
FPL Predictor Utilities Module

Numeric helpers shared by the ingestion models and the feature services:
- Tolerant parsing of values that arrive as strings, numbers or nulls
- Division and averaging with explicit fallbacks for empty inputs
"""

import math
from typing import Any, Iterable


def safe_float(value: Any, default: float = 0.0) -> float:
    """
    Convert a raw value to float, falling back to a default

    Args:
        value: Raw value (str, int, float or None)
        default: Value returned for None, empty strings, NaN and parse failures

    Returns:
        Parsed float or the default
    """
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return float(value)
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(parsed) or math.isinf(parsed):
        return default
    return parsed


def safe_int(value: Any, default: int = 0) -> int:
    """Convert a raw value to int via safe_float, truncating fractions."""
    return int(safe_float(value, float(default)))


def safe_divide(numerator: float, denominator: float, fallback: float = 0.0) -> float:
    """
    Divide, returning a fallback when the denominator is zero

    Args:
        numerator: Dividend
        denominator: Divisor
        fallback: Result when denominator == 0

    Returns:
        numerator / denominator, or fallback
    """
    if denominator == 0:
        return fallback
    return numerator / denominator


def mean_or_zero(values: Iterable[float]) -> float:
    """Arithmetic mean of values, 0.0 for an empty iterable."""
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)
