"""
sentinel/engine.py - Cohort Series Engine

Single engine used by the synthetic demo and by any future aggregated feed.
Same pipeline, different inputs.

Pipeline:
    (vertical, cohort, n, seed) -> combined seed -> SeededRandomGenerator
    -> signal series [+ per-step narrative emphasis] -> points
    -> trigger scan -> system state -> stats + series hash

Design Philosophy:
- DETERMINISTIC: identical inputs produce identical points and hash
- ISOLATED: every call owns its generator; no module-level RNG exists
- FAIL-LOUD: unknown or inadmissible cohorts raise, never fall back

Usage:
    result = build_cohort_series("k12", "14-18", n=600, seed=42424242)
    result.system_state      # SystemState.SUSTAINED_VOLATILITY, ...
    result.series_hash       # stable fingerprint of the rounded points
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from common.input_validation import CohortValidationError, validate_int_range
from common.random_state import SeededRandomGenerator, combine_seed
from common.types import CohortSeriesDict
from governance.hashing import compute_series_hash
from sentinel.cohorts import (
    AgeCohortBand,
    Vertical,
    cohort_index,
    get_cohort_characteristics,
    resolve_cohort_for_vertical,
    vertical_index,
)
from sentinel.config import DEFAULT_SENTINEL_CONFIG, SentinelConfig
from sentinel.series import (
    VolatilityDataPoint,
    build_points,
    generate_signal_series,
    narrative_emphasis_transform,
)
from sentinel.stats import SeriesStats, compute_series_stats
from sentinel.triggers import (
    AssessmentItem,
    SentinelTrigger,
    SystemState,
    classify_system_state,
    detect_trigger_events,
    generate_assessments,
)

__version__ = "1.0.0"

logger = logging.getLogger(__name__)

DIFFERENTIATION_SAMPLE_SIZE = 3000


@dataclass
class CohortSeriesResult:
    """Complete engine output for one (vertical, cohort, n, seed)."""
    points: List[VolatilityDataPoint]
    baseline: float
    upper_band: float
    lower_band: float
    trigger_events: List[SentinelTrigger]
    system_state: SystemState
    consecutive_days_above_baseline: int  # longest run anywhere, not the run ending today
    current_run_days: int
    assessments: List[AssessmentItem]
    series_hash: str
    stats: SeriesStats
    raw_values: List[float] = field(default_factory=list, repr=False)

    @property
    def latest_trigger(self) -> Optional[SentinelTrigger]:
        return self.trigger_events[-1] if self.trigger_events else None

    def to_dict(self) -> CohortSeriesDict:
        return {
            "points": [p.to_dict() for p in self.points],
            "baseline": self.baseline,
            "upper_band": self.upper_band,
            "lower_band": self.lower_band,
            "trigger_events": [t.to_dict() for t in self.trigger_events],
            "system_state": self.system_state.value,
            "consecutive_days_above_baseline": self.consecutive_days_above_baseline,
            "current_run_days": self.current_run_days,
            "assessments": [a.to_dict() for a in self.assessments],
            "series_hash": self.series_hash,
            "stats": self.stats.to_dict(),
        }


def build_cohort_series(
    vertical: Any,
    age_cohort: Any,
    n: int,
    seed: int,
    history_days: Optional[int] = None,
    baseline_threshold: Optional[float] = None,
    *,
    config: Optional[SentinelConfig] = None,
    as_of_date: Optional[date] = None,
    narrative_emphasis: Optional[bool] = None,
) -> CohortSeriesResult:
    """
    Build the volatility series for one cohort.

    Args:
        vertical: Vertical member or value ("k12", "university", ...)
        age_cohort: AgeCohortBand member or value ("14-18", ...)
        n: Cohort sample size (part of the seed)
        seed: Nominal seed
        history_days: Overrides config.history_days
        baseline_threshold: Overrides config.baseline_threshold
        config: Engine configuration (default DEFAULT_SENTINEL_CONFIG)
        as_of_date: Date of day 0 for trigger dates (default today). Does not
            affect points, stats or hash.
        narrative_emphasis: Overrides config.narrative_emphasis

    Returns:
        CohortSeriesResult

    Raises:
        CohortValidationError: Unknown vertical/cohort, cohort not admitted by
            the vertical, or non-integer n/seed
        ConfigValidationError: Overrides out of range
    """
    resolved_vertical, resolved_cohort = resolve_cohort_for_vertical(vertical, age_cohort)
    validate_int_range(n, "n", min_value=0, error_cls=CohortValidationError)
    validate_int_range(seed, "seed", error_cls=CohortValidationError)

    cfg = (config or DEFAULT_SENTINEL_CONFIG).with_overrides(
        history_days=history_days,
        baseline_threshold=baseline_threshold,
        narrative_emphasis=narrative_emphasis,
    )
    as_of = as_of_date or date.today()

    combined_seed = combine_seed(
        seed,
        cohort_index(resolved_cohort),
        vertical_index(resolved_vertical),
        n,
    )
    rng = SeededRandomGenerator(combined_seed)
    characteristics = get_cohort_characteristics(resolved_cohort)

    step_transform = None
    if cfg.narrative_emphasis:
        step_transform = narrative_emphasis_transform(characteristics, cfg.emphasis_window_days)

    raw_values = generate_signal_series(
        rng,
        characteristics,
        cfg.history_days,
        cfg.baseline_threshold,
        step_transform,
    )

    points = build_points(raw_values, characteristics.trigger_threshold)
    scan = detect_trigger_events(points, cfg.trigger_days, as_of)
    system_state = classify_system_state(scan.max_consecutive, len(scan.triggers), cfg.trigger_days)
    stats = compute_series_stats(raw_values)
    series_hash = compute_series_hash(p.value for p in points)

    logger.debug(
        "Built %s/%s series: n=%d seed=%d draws=%d state=%s run=%d hash=%s",
        resolved_vertical.value, resolved_cohort.value, n, seed,
        rng.audit().draws, system_state.value, scan.max_consecutive, series_hash,
    )

    return CohortSeriesResult(
        points=points,
        baseline=cfg.baseline_threshold,
        upper_band=characteristics.trigger_threshold,
        lower_band=cfg.baseline_threshold - cfg.lower_band_offset,
        trigger_events=scan.triggers,
        system_state=system_state,
        consecutive_days_above_baseline=scan.max_consecutive,
        current_run_days=scan.current_run,
        assessments=generate_assessments(system_state),
        series_hash=series_hash,
        stats=stats,
        raw_values=raw_values,
    )


# =============================================================================
# ACCEPTANCE HELPERS
# =============================================================================

def validate_determinism(
    vertical: Any,
    age_cohort: Any,
    n: int,
    seed: int,
    **kwargs: Any,
) -> Dict[str, bool]:
    """Build the same series twice and compare hashes and points."""
    first = build_cohort_series(vertical, age_cohort, n, seed, **kwargs)
    second = build_cohort_series(vertical, age_cohort, n, seed, **kwargs)
    return {
        "is_identical": first.series_hash == second.series_hash and first.points == second.points,
    }


def validate_cohort_differentiation(
    seed: int,
    cohort_a: Any,
    cohort_b: Any,
    vertical: Any = Vertical.GLOBAL,
    n: int = DIFFERENTIATION_SAMPLE_SIZE,
) -> Dict[str, Any]:
    """
    Compare two cohorts at the same seed.

    Returns:
        Dict with hashes_match, std_dev_diff, mean_diff
    """
    series_a = build_cohort_series(vertical, cohort_a, n, seed)
    series_b = build_cohort_series(vertical, cohort_b, n, seed)
    return {
        "hashes_match": series_a.series_hash == series_b.series_hash,
        "std_dev_diff": abs(series_a.stats.std_dev - series_b.stats.std_dev),
        "mean_diff": abs(series_a.stats.mean - series_b.stats.mean),
    }


__all__ = [
    "AgeCohortBand",
    "CohortSeriesResult",
    "Vertical",
    "build_cohort_series",
    "validate_cohort_differentiation",
    "validate_determinism",
]
