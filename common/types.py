"""
Shared type definitions for the cohort sentinel.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional
from typing_extensions import TypedDict, NotRequired


# =============================================================================
# TYPE ALIASES
# =============================================================================

DateString = str  # Format: YYYY-MM-DD
SeriesHash = str


class Severity(str, Enum):
    """Assessment severity levels."""
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


# =============================================================================
# SERIALIZED RECORD TYPES (to_dict payloads)
# =============================================================================

class VolatilityPointDict(TypedDict):
    """One day of the volatility index."""
    day_offset: int
    value: float
    exceeds_baseline: bool


class SentinelTriggerDict(TypedDict):
    """Trigger emitted when a breach run reaches the trigger-day count."""
    triggered_at: DateString
    days_above_baseline: int
    peak_value: float


class AssessmentDict(TypedDict):
    """Textual annotation attached to a series."""
    text: str
    severity: str


class SeriesStatsDict(TypedDict):
    """Population statistics over raw values."""
    mean: float
    std_dev: float
    min: float
    max: float


class CohortSeriesDict(TypedDict):
    """Complete engine result."""
    points: List[VolatilityPointDict]
    baseline: float
    upper_band: float
    lower_band: float
    trigger_events: List[SentinelTriggerDict]
    system_state: str
    consecutive_days_above_baseline: int
    current_run_days: int
    assessments: List[AssessmentDict]
    series_hash: SeriesHash
    stats: SeriesStatsDict
    n: NotRequired[int]
    age_cohort: NotRequired[str]
    vertical: NotRequired[str]
    is_demo: NotRequired[bool]


class SentinelDataDict(TypedDict):
    """Display bundle consumed by rendering and label layers."""
    scope: str
    cohort_label: str
    system_state: str
    consecutive_days_above_baseline: int
    volatility_trend: List[VolatilityPointDict]
    baseline_value: float
    current_trigger: Optional[SentinelTriggerDict]
    assessments: List[AssessmentDict]
    is_demo: bool
    sample_size: int
    age_cohort: str
    series_hash: SeriesHash
