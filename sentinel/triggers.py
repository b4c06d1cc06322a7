"""
sentinel/triggers.py - Trigger Detection and System State Classification

TriggerDetector:
    Single left-to-right scan with a running breach counter. A trigger is
    emitted once per run, on the day the run first reaches trigger_days.
    Later days of the same run do not emit again.

StateClassifier:
    Pure mapping from (longest run, trigger count, trigger_days) to
    SystemState:
    - CRITICAL: a trigger fired and longest run >= trigger_days + 3
    - SUSTAINED_VOLATILITY: longest run >= trigger_days
    - ELEVATED: longest run >= max(1, trigger_days - 2)
    - BASELINE: otherwise
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import List, Sequence

from common.types import AssessmentDict, SentinelTriggerDict, Severity
from sentinel.series import VolatilityDataPoint

CRITICAL_MARGIN_DAYS = 3
ELEVATED_MARGIN_DAYS = 2


class SystemState(str, Enum):
    """Discrete classification of the series."""
    BASELINE = "baseline"
    ELEVATED = "elevated"
    SUSTAINED_VOLATILITY = "sustained_volatility"
    CRITICAL = "critical"


@dataclass(frozen=True)
class SentinelTrigger:
    """Emitted when a breach run reaches the trigger-day count."""
    triggered_at: date
    days_above_baseline: int
    peak_value: float

    def to_dict(self) -> SentinelTriggerDict:
        return {
            "triggered_at": self.triggered_at.isoformat(),
            "days_above_baseline": self.days_above_baseline,
            "peak_value": self.peak_value,
        }


@dataclass(frozen=True)
class AssessmentItem:
    text: str
    severity: Severity = Severity.INFO

    def to_dict(self) -> AssessmentDict:
        return {"text": self.text, "severity": self.severity.value}


@dataclass
class TriggerScan:
    """Result of one scan over a point series."""
    triggers: List[SentinelTrigger] = field(default_factory=list)
    max_consecutive: int = 0   # longest breach run anywhere in the series
    current_run: int = 0       # breach run ending at the last point


def detect_trigger_events(
    points: Sequence[VolatilityDataPoint],
    trigger_days: int,
    as_of_date: date,
) -> TriggerScan:
    """
    Scan points for sustained breaches.

    Args:
        points: Series ordered oldest to newest
        trigger_days: Consecutive breach days that emit a trigger
        as_of_date: Date of day_offset 0; trigger dates are derived from it

    Returns:
        TriggerScan with triggers, the longest run, and the trailing run
    """
    scan = TriggerScan()
    run = 0
    peak = 0.0

    for point in points:
        if point.exceeds_baseline:
            run += 1
            peak = max(peak, point.value)
            if run == trigger_days:
                scan.triggers.append(SentinelTrigger(
                    triggered_at=as_of_date + timedelta(days=point.day_offset),
                    days_above_baseline=run,
                    peak_value=peak,
                ))
            scan.max_consecutive = max(scan.max_consecutive, run)
        else:
            run = 0
            peak = 0.0

    scan.current_run = run
    return scan


def elevated_threshold(trigger_days: int) -> int:
    """Run length that counts as elevated; never below one day."""
    return max(1, trigger_days - ELEVATED_MARGIN_DAYS)


def classify_system_state(
    consecutive_days: int,
    trigger_count: int,
    trigger_days: int,
) -> SystemState:
    """Map breach-run length and trigger history to a SystemState."""
    if trigger_count > 0 and consecutive_days >= trigger_days + CRITICAL_MARGIN_DAYS:
        return SystemState.CRITICAL
    if consecutive_days >= trigger_days:
        return SystemState.SUSTAINED_VOLATILITY
    if consecutive_days >= elevated_threshold(trigger_days):
        return SystemState.ELEVATED
    return SystemState.BASELINE


def generate_assessments(system_state: SystemState) -> List[AssessmentItem]:
    """Textual annotations for a classified series."""
    assessments: List[AssessmentItem] = []

    if system_state in (SystemState.SUSTAINED_VOLATILITY, SystemState.CRITICAL):
        assessments.append(AssessmentItem("Sustained deviation from historical baseline", Severity.WARNING))
        assessments.append(AssessmentItem("Increased probability of downstream disruption", Severity.WARNING))
    elif system_state == SystemState.ELEVATED:
        assessments.append(AssessmentItem("Elevated volatility approaching trigger threshold", Severity.WARNING))

    # governance note
    assessments.append(AssessmentItem("Signal is aggregate and non-identifying", Severity.INFO))
    return assessments
