"""
common/score_utils.py - Index Value Utilities

Provides standardized utilities for volatility index values:
- Bounds clamping (values stay within 0-100)
- Half-up rounding (matches the display rounding of the index)

Design Philosophy:
- DETERMINISTIC: Same inputs always produce same outputs
- FLOAT-BASED: the index is a float series; rounding is half-up, not banker's

Usage:
    from common.score_utils import clamp_index, round_half_up

    value = clamp_index(raw_value)
    display = round_half_up(value, 1)
"""

from __future__ import annotations

import math

# Index bounds
INDEX_MIN = 0.0
INDEX_MAX = 100.0


def clamp_index(
    value: float,
    min_val: float = INDEX_MIN,
    max_val: float = INDEX_MAX,
) -> float:
    """
    Clamp an index value into [min_val, max_val].

    Args:
        value: Raw value
        min_val: Lower bound (default 0)
        max_val: Upper bound (default 100)

    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round half toward positive infinity.

    Python's round() is banker's rounding; the displayed index rounds 0.x5
    upward instead.

    Examples:
        round_half_up(12.25, 1) -> 12.3
        round_half_up(2.5) -> 3.0
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round_half_up_int(value: float) -> int:
    """Half-up rounding to an int."""
    return int(math.floor(value + 0.5))
