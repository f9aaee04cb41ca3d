"""
FPL Predictor Utility Functions

This package contains common numeric helpers for:
- Tolerant parsing of the string-typed numbers found in raw FPL data
- Zero-guarded division and averaging
"""

from .helpers import mean_or_zero, safe_divide, safe_float, safe_int

__all__ = ["mean_or_zero", "safe_divide", "safe_float", "safe_int"]
