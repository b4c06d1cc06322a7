#!/usr/bin/env python3
"""
Shared test fixtures for the cohort sentinel test suite.

Provides reusable fixtures for:
- Standard as_of_date for deterministic trigger dates
- Demo seed and default configuration
- Hand-built point series for trigger tests
- Root logger isolation for tests that configure logging
"""

import logging
import sys
from datetime import date
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Callable, List, Sequence

import pytest

# Add parent to path for module imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sentinel.config import DEFAULT_SENTINEL_CONFIG, SentinelConfig  # noqa: E402
from sentinel.series import VolatilityDataPoint, day_offsets  # noqa: E402
from sentinel.synthetic import DEMO_SEED  # noqa: E402


# ============================================================================
# STANDARD INPUTS
# ============================================================================

@pytest.fixture
def as_of_date() -> date:
    """Standard as_of_date for deterministic tests."""
    return date(2026, 1, 15)


@pytest.fixture
def demo_seed() -> int:
    return DEMO_SEED


@pytest.fixture
def default_config() -> SentinelConfig:
    return DEFAULT_SENTINEL_CONFIG


# ============================================================================
# POINT SERIES BUILDERS
# ============================================================================

@pytest.fixture
def make_points() -> Callable[..., List[VolatilityDataPoint]]:
    """
    Build a point series from breach flags (oldest first, last = day 0).

    Values default to 60.0 for breach days and 40.0 otherwise.
    """

    def _make(flags: Sequence[bool], values: Sequence[float] = None) -> List[VolatilityDataPoint]:
        if values is None:
            values = [60.0 if flag else 40.0 for flag in flags]
        history_days = len(flags) - 1
        return [
            VolatilityDataPoint(day_offset=day, value=value, exceeds_baseline=flag)
            for day, value, flag in zip(day_offsets(history_days), values, flags)
        ]

    return _make


# ============================================================================
# LOGGING ISOLATION
# ============================================================================

@pytest.fixture
def restore_root_logging():
    """Drop the handlers setup_logging() installs and restore the root level."""
    root = logging.getLogger()
    saved_level = root.level
    yield root
    # pytest's capture handlers are subclasses and stay attached
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, RotatingFileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)
