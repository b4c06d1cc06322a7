"""
sentinel/config.py - Engine Configuration

SentinelConfig carries every tunable the engine reads. Instances are frozen
and validated on construction, so an invalid configuration never reaches the
series generator.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict

from common.input_validation import (
    ConfigValidationError,
    validate_int_range,
    validate_number_range,
)
from common.score_utils import INDEX_MAX, INDEX_MIN


@dataclass(frozen=True)
class SentinelConfig:
    """Configuration for series generation and trigger detection."""

    # Days of history before today; the series has history_days + 1 points
    history_days: int = 14

    # Reference level the series is built around
    baseline_threshold: float = 50.0

    # Consecutive breach days required to emit a trigger
    trigger_days: int = 5

    # Lower band sits this far below the baseline
    lower_band_offset: float = 15.0

    # Final days of the window that receive the escalation term
    emphasis_window_days: int = 7

    # Whether build_cohort_series applies the escalation stage by default
    narrative_emphasis: bool = True

    def __post_init__(self) -> None:
        validate_int_range(self.history_days, "history_days", min_value=1, max_value=365)
        validate_number_range(self.baseline_threshold, "baseline_threshold", INDEX_MIN, INDEX_MAX)
        validate_int_range(self.trigger_days, "trigger_days", min_value=1)
        validate_number_range(self.lower_band_offset, "lower_band_offset", min_value=0.0)
        validate_int_range(self.emphasis_window_days, "emphasis_window_days", min_value=0)
        if not isinstance(self.narrative_emphasis, bool):
            raise ConfigValidationError(
                f"narrative_emphasis must be a bool, got {self.narrative_emphasis!r}"
            )

    def with_overrides(self, **overrides: Any) -> "SentinelConfig":
        """Copy with the non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_SENTINEL_CONFIG = SentinelConfig()
