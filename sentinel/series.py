"""
sentinel/series.py - Volatility Series Generation

generate_signal_series() is the stochastic signal model: a mean-reverting
random walk around (baseline + cohort offset) with a weekend dip, a seasonal
swing across the window, and Gaussian noise scaled by the cohort's variance
multiplier. Values are clamped to [0, 100] every step.

An optional step_transform adjusts each day's value after the model terms and
before the clamp, so its effect carries into the next day's mean reversion.
narrative_emphasis_transform() builds the transform that escalates the final
days of the window toward "today". Leaving it out yields the organic model.

build_points() converts raw values into rounded VolatilityDataPoints.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from common.random_state import SeededRandomGenerator
from common.score_utils import clamp_index, round_half_up
from common.types import VolatilityPointDict
from sentinel.cohorts import CohortCharacteristics

# Weekend days (day_offset mod 7 in {5, 6}) dip by this much before scaling
WEEKEND_OFFSET = -5.0
WEEKEND_WEIGHT = 0.3

# Seasonal swing amplitude on the 0-100 scale before scaling
SEASONAL_AMPLITUDE = 15.0
SEASONAL_WEIGHT = 0.5

# Noise standard deviation before the cohort variance multiplier
NOISE_SCALE = 8.0

# Escalation added per day of depth into the emphasis window
EMPHASIS_SLOPE = 2.0
DEFAULT_EMPHASIS_WINDOW = 7

# (day_offset, value) -> value, applied before each day's clamp
StepTransform = Callable[[int, float], float]


@dataclass(frozen=True)
class VolatilityDataPoint:
    """One day of the volatility index."""
    day_offset: int          # <= 0, 0 = today
    value: float             # 0-100, one decimal
    exceeds_baseline: bool   # raw value > cohort trigger threshold

    def to_dict(self) -> VolatilityPointDict:
        return {
            "day_offset": self.day_offset,
            "value": self.value,
            "exceeds_baseline": self.exceeds_baseline,
        }


def day_offsets(history_days: int) -> range:
    """Offsets from -history_days to 0 inclusive, oldest first."""
    return range(-history_days, 1)


def weekday_effect(day: int) -> float:
    return WEEKEND_OFFSET if day % 7 >= 5 else 0.0


def seasonal_effect(day: int, history_days: int, sensitivity: float) -> float:
    progress = (day + history_days) / history_days
    return sensitivity * SEASONAL_AMPLITUDE * math.sin(progress * math.pi * 2)


def generate_signal_series(
    rng: SeededRandomGenerator,
    characteristics: CohortCharacteristics,
    history_days: int,
    baseline_threshold: float,
    step_transform: Optional[StepTransform] = None,
) -> List[float]:
    """
    Generate the signal for one cohort.

    Args:
        rng: Generator owned by this computation
        characteristics: Cohort signal parameters
        history_days: Days before today (series length is history_days + 1)
        baseline_threshold: Reference level (default config: 50)
        step_transform: Optional (day, value) -> value hook applied before
            each day's clamp. None yields the organic model.

    Returns:
        Raw clamped values, oldest to newest
    """
    if history_days < 1:
        raise ValueError(f"history_days must be >= 1, got {history_days}")

    target = baseline_threshold + characteristics.baseline_offset
    current = target
    series: List[float] = []

    for day in day_offsets(history_days):
        weekend = weekday_effect(day)
        seasonal = seasonal_effect(day, history_days, characteristics.seasonal_sensitivity)
        noise = rng.normal(0.0, NOISE_SCALE * characteristics.variance_multiplier)
        reversion = characteristics.recovery_rate * (target - current)

        current = current + noise + reversion + weekend * WEEKEND_WEIGHT + seasonal * SEASONAL_WEIGHT
        if step_transform is not None:
            current = step_transform(day, current)
        current = clamp_index(current)
        series.append(current)

    return series


def emphasis_term(day: int, variance_multiplier: float, window_days: int = DEFAULT_EMPHASIS_WINDOW) -> float:
    """Escalation for one day; zero outside the final window_days."""
    if day <= -window_days:
        return 0.0
    return (window_days + day) * EMPHASIS_SLOPE * variance_multiplier


def narrative_emphasis_transform(
    characteristics: CohortCharacteristics,
    window_days: int = DEFAULT_EMPHASIS_WINDOW,
) -> StepTransform:
    """
    Build the step transform that escalates the final days of the window.

    The term is added before the clamp, so an emphasized day also shifts
    the reversion pull on the day after it.
    """

    def _emphasize(day: int, value: float) -> float:
        return value + emphasis_term(day, characteristics.variance_multiplier, window_days)

    return _emphasize


def build_points(raw_values: Sequence[float], trigger_threshold: float) -> List[VolatilityDataPoint]:
    """Round raw values for display and flag breaches against the raw value."""
    history_days = len(raw_values) - 1
    return [
        VolatilityDataPoint(
            day_offset=day,
            value=round_half_up(value, 1),
            exceeds_baseline=value > trigger_threshold,
        )
        for day, value in zip(day_offsets(history_days), raw_values)
    ]
