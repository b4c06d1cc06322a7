"""
sentinel/synthetic.py - Synthetic Cohort Generator and Display Builder

Deterministic synthetic cohort inputs for the sentinel demo, plus the
display bundle (SentinelData) consumed by chart and label layers.

GOVERNANCE:
- Demo population is 3,000 synthetic people per vertical
- Age cohort selection picks which cohort series is displayed
- All data is synthetic and deterministic; no real user data
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

from common.types import CohortSeriesDict, SentinelDataDict
from sentinel.cohorts import (
    AGE_COHORT_LABELS,
    CHILD_COHORTS,
    AgeCohortBand,
    Vertical,
    get_cohorts_for_vertical,
    parse_vertical,
    resolve_cohort_for_vertical,
)
from sentinel.config import SentinelConfig
from sentinel.engine import CohortSeriesResult, build_cohort_series
from sentinel.sample_sizes import resolve_sample_size
from sentinel.series import VolatilityDataPoint
from sentinel.triggers import AssessmentItem, SentinelTrigger, SystemState

logger = logging.getLogger(__name__)

DEMO_SEED = 42424242

UNIVERSITY_STUDENT_COHORTS = (AgeCohortBand.AGE_18_24, AgeCohortBand.AGE_25_34)


@dataclass
class SyntheticCohortResult:
    """Engine result tagged with the synthetic inputs that produced it."""
    series: CohortSeriesResult
    n: int
    age_cohort: AgeCohortBand
    vertical: Vertical
    is_demo: bool = True

    def to_dict(self) -> CohortSeriesDict:
        payload = self.series.to_dict()
        payload["n"] = self.n
        payload["age_cohort"] = self.age_cohort.value
        payload["vertical"] = self.vertical.value
        payload["is_demo"] = self.is_demo
        return payload


@dataclass
class SentinelData:
    """Display bundle for one cohort."""
    scope: str
    cohort_label: str
    system_state: SystemState
    consecutive_days_above_baseline: int
    volatility_trend: List[VolatilityDataPoint]
    baseline_value: float
    current_trigger: Optional[SentinelTrigger]
    assessments: List[AssessmentItem]
    is_demo: bool
    sample_size: int
    age_cohort: AgeCohortBand
    series_hash: str

    def to_dict(self) -> SentinelDataDict:
        return {
            "scope": self.scope,
            "cohort_label": self.cohort_label,
            "system_state": self.system_state.value,
            "consecutive_days_above_baseline": self.consecutive_days_above_baseline,
            "volatility_trend": [p.to_dict() for p in self.volatility_trend],
            "baseline_value": self.baseline_value,
            "current_trigger": self.current_trigger.to_dict() if self.current_trigger else None,
            "assessments": [a.to_dict() for a in self.assessments],
            "is_demo": self.is_demo,
            "sample_size": self.sample_size,
            "age_cohort": self.age_cohort.value,
            "series_hash": self.series_hash,
        }


def generate_synthetic_cohort_inputs(
    vertical: Any,
    age_cohort: Any,
    n: int,
    seed: int,
    *,
    config: Optional[SentinelConfig] = None,
    as_of_date: Optional[date] = None,
) -> SyntheticCohortResult:
    """Run the engine on synthetic inputs and tag the result as demo data."""
    resolved_vertical, resolved_cohort = resolve_cohort_for_vertical(vertical, age_cohort)
    series = build_cohort_series(
        resolved_vertical,
        resolved_cohort,
        n,
        seed,
        config=config,
        as_of_date=as_of_date,
    )
    return SyntheticCohortResult(
        series=series,
        n=n,
        age_cohort=resolved_cohort,
        vertical=resolved_vertical,
    )


def build_cohort_label(vertical: Any, age_cohort: Any) -> str:
    """
    Display label for a cohort.

    K-12 splits students from staff, university splits students from
    faculty/staff, every other vertical uses a neutral cohort label.
    """
    resolved_vertical, resolved_cohort = resolve_cohort_for_vertical(vertical, age_cohort)
    label = AGE_COHORT_LABELS[resolved_cohort]

    if resolved_vertical == Vertical.K12:
        role = "Students" if resolved_cohort in CHILD_COHORTS else "Staff"
        return f"{role} · {label}"
    if resolved_vertical == Vertical.UNIVERSITY:
        role = "Students" if resolved_cohort in UNIVERSITY_STUDENT_COHORTS else "Faculty/Staff"
        return f"{role} · {label}"
    return f"Cohort: {label}"


def build_sentinel_demo_data(
    vertical: Any,
    age_cohort: Any,
    seed: int = DEMO_SEED,
    *,
    config: Optional[SentinelConfig] = None,
    as_of_date: Optional[date] = None,
) -> SentinelData:
    """
    Build the complete display bundle for one cohort.

    Sample size comes from the vertical's table, falling back to the
    vertical-level default when the table has no entry.

    Raises:
        CohortValidationError: Unknown vertical/cohort or cohort not admitted
    """
    resolved_vertical, resolved_cohort = resolve_cohort_for_vertical(vertical, age_cohort)
    effective_n = resolve_sample_size(resolved_vertical, resolved_cohort)

    result = generate_synthetic_cohort_inputs(
        resolved_vertical,
        resolved_cohort,
        effective_n,
        seed,
        config=config,
        as_of_date=as_of_date,
    )
    series = result.series

    return SentinelData(
        scope="global" if resolved_vertical == Vertical.GLOBAL else "organization",
        cohort_label=build_cohort_label(resolved_vertical, resolved_cohort),
        system_state=series.system_state,
        consecutive_days_above_baseline=series.consecutive_days_above_baseline,
        volatility_trend=series.points,
        baseline_value=series.baseline,
        current_trigger=series.latest_trigger,
        assessments=series.assessments,
        is_demo=True,
        sample_size=effective_n,
        age_cohort=resolved_cohort,
        series_hash=series.series_hash,
    )


def pre_generate_all_cohorts(
    vertical: Any,
    seed: int = DEMO_SEED,
    *,
    config: Optional[SentinelConfig] = None,
    as_of_date: Optional[date] = None,
) -> Dict[AgeCohortBand, SentinelData]:
    """
    Build display bundles for every cohort of a vertical.

    Returns:
        Dict keyed by cohort, in the vertical's cohort order
    """
    resolved_vertical = parse_vertical(vertical)
    cohorts = get_cohorts_for_vertical(resolved_vertical)
    bundles = {
        cohort: build_sentinel_demo_data(resolved_vertical, cohort, seed, config=config, as_of_date=as_of_date)
        for cohort in cohorts
    }
    logger.info("Pre-generated %d cohort series for %s (seed=%d)", len(bundles), resolved_vertical.value, seed)
    return bundles
