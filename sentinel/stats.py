"""
sentinel/stats.py - Series Statistics

Population statistics over raw (unrounded) daily values. Used by the
differentiation checks: distinct cohorts must differ in mean or standard
deviation by a visible margin.
"""
from __future__ import annotations

from dataclasses import dataclass
from statistics import fmean, pstdev
from typing import Sequence

from common.types import SeriesStatsDict


@dataclass(frozen=True)
class SeriesStats:
    mean: float
    std_dev: float
    min: float
    max: float

    def to_dict(self) -> SeriesStatsDict:
        return {
            "mean": self.mean,
            "std_dev": self.std_dev,
            "min": self.min,
            "max": self.max,
        }


def compute_series_stats(values: Sequence[float]) -> SeriesStats:
    """
    Mean, population standard deviation, min and max.

    Raises:
        ValueError: If values is empty
    """
    if not values:
        raise ValueError("cannot compute statistics of an empty series")
    mean = fmean(values)
    return SeriesStats(
        mean=mean,
        std_dev=pstdev(values, mean),
        min=min(values),
        max=max(values),
    )
