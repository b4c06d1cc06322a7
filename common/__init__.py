"""
common - Shared utilities for the cohort sentinel.

Provides:
- input_validation: Argument validation and exceptions
- logging_config: Logging setup with run ID correlation
- random_state: Seeded Mulberry32 generator and seed derivation
- score_utils: Index clamping and half-up rounding
- types: Severity and serialized record types
"""

from common.input_validation import (
    CohortValidationError,
    ConfigValidationError,
    ValidationResult,
)
from common.random_state import RNGAudit, SeededRandomGenerator, combine_seed
from common.types import Severity
