"""
sentinel - Deterministic Synthetic Cohort Volatility Engine

Generates reproducible, cohort-differentiated daily volatility series,
detects sustained threshold breaches, and classifies a system state.

Provides:
- cohorts: verticals, age cohort bands, characteristics, labels
- config: SentinelConfig and defaults
- series: signal model, narrative emphasis, data points
- triggers: trigger detection, state classification, assessments
- stats: population statistics over raw values
- sample_sizes: per-vertical sample sizes with the k-anonymity floor
- engine: build_cohort_series and acceptance helpers
- synthetic: demo inputs and the SentinelData display bundle

CONSTRAINTS:
- All data is synthetic; no real user data
- K-anonymity floor (Rule of 5) on every sample size
- Every call owns its own random generator
"""

from sentinel.cohorts import (
    AGE_COHORT_BANDS,
    AGE_COHORT_LABELS,
    VERTICALS,
    AgeCohortBand,
    CohortCharacteristics,
    Vertical,
    get_cohort_characteristics,
    get_cohorts_for_vertical,
    get_default_cohort,
)
from sentinel.config import DEFAULT_SENTINEL_CONFIG, SentinelConfig
from sentinel.engine import (
    CohortSeriesResult,
    build_cohort_series,
    validate_cohort_differentiation,
    validate_determinism,
)
from sentinel.sample_sizes import (
    GLOBAL_DEMO_SAMPLE_SIZE,
    K_ANONYMITY_FLOOR,
    get_cohort_sample_size,
    resolve_sample_size,
)
from sentinel.series import VolatilityDataPoint
from sentinel.stats import SeriesStats
from sentinel.synthetic import (
    DEMO_SEED,
    SentinelData,
    SyntheticCohortResult,
    build_cohort_label,
    build_sentinel_demo_data,
    generate_synthetic_cohort_inputs,
    pre_generate_all_cohorts,
)
from sentinel.triggers import AssessmentItem, SentinelTrigger, SystemState

__version__ = "1.0.0"

__all__ = [
    "AGE_COHORT_BANDS",
    "AGE_COHORT_LABELS",
    "VERTICALS",
    "AgeCohortBand",
    "CohortCharacteristics",
    "Vertical",
    "get_cohort_characteristics",
    "get_cohorts_for_vertical",
    "get_default_cohort",
    "DEFAULT_SENTINEL_CONFIG",
    "SentinelConfig",
    "CohortSeriesResult",
    "build_cohort_series",
    "validate_cohort_differentiation",
    "validate_determinism",
    "GLOBAL_DEMO_SAMPLE_SIZE",
    "K_ANONYMITY_FLOOR",
    "get_cohort_sample_size",
    "resolve_sample_size",
    "VolatilityDataPoint",
    "SeriesStats",
    "DEMO_SEED",
    "SentinelData",
    "SyntheticCohortResult",
    "build_cohort_label",
    "build_sentinel_demo_data",
    "generate_synthetic_cohort_inputs",
    "pre_generate_all_cohorts",
    "AssessmentItem",
    "SentinelTrigger",
    "SystemState",
]
