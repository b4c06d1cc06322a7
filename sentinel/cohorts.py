"""
sentinel/cohorts.py - Verticals, Age Cohort Bands, and Cohort Characteristics

Static, read-only tables that drive visibly different curves per cohort.

Tables:
1. COHORT_CHARACTERISTICS: cohort -> signal parameters (total over all bands)
2. AGE_COHORT_LABELS: cohort -> display label
3. VERTICAL_COHORTS: vertical -> admitted cohorts (ordered youngest first)
4. DEFAULT_COHORTS: vertical -> cohort shown first

Lookups never fall back to a default cohort; an unknown or inadmissible
cohort raises CohortValidationError.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from common.input_validation import CohortValidationError, coerce_enum

__version__ = "1.0.0"


class Vertical(str, Enum):
    """Institutional category. Member order is part of seed derivation."""
    K12 = "k12"
    UNIVERSITY = "university"
    HEALTHCARE = "healthcare"
    EMPLOYER = "employer"
    GLOBAL = "global"


class AgeCohortBand(str, Enum):
    """Fixed age bands. Member order is part of seed derivation."""
    AGE_5_10 = "5-10"
    AGE_11_13 = "11-13"
    AGE_14_18 = "14-18"
    AGE_18_24 = "18-24"
    AGE_25_34 = "25-34"
    AGE_35_44 = "35-44"
    AGE_45_54 = "45-54"
    AGE_55_64 = "55-64"
    AGE_65_PLUS = "65+"


VERTICALS: Tuple[Vertical, ...] = tuple(Vertical)
AGE_COHORT_BANDS: Tuple[AgeCohortBand, ...] = tuple(AgeCohortBand)

CHILD_COHORTS: Tuple[AgeCohortBand, ...] = (
    AgeCohortBand.AGE_5_10,
    AgeCohortBand.AGE_11_13,
    AgeCohortBand.AGE_14_18,
)
ADULT_COHORTS: Tuple[AgeCohortBand, ...] = tuple(
    band for band in AGE_COHORT_BANDS if band not in CHILD_COHORTS
)


@dataclass(frozen=True)
class CohortCharacteristics:
    """Signal parameters for one cohort."""
    baseline_offset: float       # offset on the 0-100 scale
    variance_multiplier: float   # > 0, higher = more volatile
    recovery_rate: float         # 0-1, mean-reversion strength
    seasonal_sensitivity: float  # 0-1, academic-calendar stress
    trigger_threshold: float     # 0-100, breach level for this cohort

    def to_dict(self) -> Dict[str, Any]:
        return {
            "baseline_offset": self.baseline_offset,
            "variance_multiplier": self.variance_multiplier,
            "recovery_rate": self.recovery_rate,
            "seasonal_sensitivity": self.seasonal_sensitivity,
            "trigger_threshold": self.trigger_threshold,
        }


COHORT_CHARACTERISTICS: Mapping[AgeCohortBand, CohortCharacteristics] = MappingProxyType({
    AgeCohortBand.AGE_5_10: CohortCharacteristics(15, 1.4, 0.60, 0.80, 55),
    AgeCohortBand.AGE_11_13: CohortCharacteristics(18, 1.5, 0.50, 0.85, 52),
    AgeCohortBand.AGE_14_18: CohortCharacteristics(20, 1.6, 0.45, 0.90, 50),
    AgeCohortBand.AGE_18_24: CohortCharacteristics(12, 1.3, 0.55, 0.70, 52),
    AgeCohortBand.AGE_25_34: CohortCharacteristics(8, 1.1, 0.65, 0.40, 55),
    AgeCohortBand.AGE_35_44: CohortCharacteristics(5, 1.0, 0.70, 0.30, 55),
    AgeCohortBand.AGE_45_54: CohortCharacteristics(3, 0.9, 0.75, 0.20, 58),
    AgeCohortBand.AGE_55_64: CohortCharacteristics(0, 0.8, 0.80, 0.15, 60),
    AgeCohortBand.AGE_65_PLUS: CohortCharacteristics(-5, 0.7, 0.85, 0.10, 62),
})

AGE_COHORT_LABELS: Mapping[AgeCohortBand, str] = MappingProxyType({
    AgeCohortBand.AGE_5_10: "5–10 (Elementary)",
    AgeCohortBand.AGE_11_13: "11–13 (Middle School)",
    AgeCohortBand.AGE_14_18: "14–18 (High School)",
    AgeCohortBand.AGE_18_24: "18–24",
    AgeCohortBand.AGE_25_34: "25–34",
    AgeCohortBand.AGE_35_44: "35–44",
    AgeCohortBand.AGE_45_54: "45–54",
    AgeCohortBand.AGE_55_64: "55–64",
    AgeCohortBand.AGE_65_PLUS: "65+",
})

# K-12 covers students from age 5 plus staff; every other vertical starts at 18.
VERTICAL_COHORTS: Mapping[Vertical, Tuple[AgeCohortBand, ...]] = MappingProxyType({
    Vertical.K12: AGE_COHORT_BANDS,
    Vertical.UNIVERSITY: ADULT_COHORTS,
    Vertical.HEALTHCARE: ADULT_COHORTS,
    Vertical.EMPLOYER: ADULT_COHORTS,
    Vertical.GLOBAL: ADULT_COHORTS,
})

DEFAULT_COHORTS: Mapping[Vertical, AgeCohortBand] = MappingProxyType({
    Vertical.K12: AgeCohortBand.AGE_11_13,
    Vertical.UNIVERSITY: AgeCohortBand.AGE_18_24,
    Vertical.HEALTHCARE: AgeCohortBand.AGE_25_34,
    Vertical.EMPLOYER: AgeCohortBand.AGE_25_34,
    Vertical.GLOBAL: AgeCohortBand.AGE_25_34,
})


def parse_vertical(value: Any) -> Vertical:
    return coerce_enum(Vertical, value, "vertical")


def parse_age_cohort(value: Any) -> AgeCohortBand:
    return coerce_enum(AgeCohortBand, value, "age cohort")


def vertical_index(vertical: Vertical) -> int:
    return VERTICALS.index(vertical)


def cohort_index(cohort: AgeCohortBand) -> int:
    return AGE_COHORT_BANDS.index(cohort)


def get_cohort_characteristics(cohort: Any) -> CohortCharacteristics:
    """
    Look up the signal parameters for a cohort.

    Raises:
        CohortValidationError: If cohort is not a defined band
    """
    return COHORT_CHARACTERISTICS[parse_age_cohort(cohort)]


def get_cohorts_for_vertical(vertical: Any) -> Tuple[AgeCohortBand, ...]:
    """Cohorts admitted by a vertical, youngest first."""
    return VERTICAL_COHORTS[parse_vertical(vertical)]


def get_default_cohort(vertical: Any) -> AgeCohortBand:
    return DEFAULT_COHORTS[parse_vertical(vertical)]


def resolve_cohort_for_vertical(vertical: Any, age_cohort: Any) -> Tuple[Vertical, AgeCohortBand]:
    """
    Validate a (vertical, cohort) pair.

    Returns:
        (Vertical, AgeCohortBand) enum members

    Raises:
        CohortValidationError: If either value is undefined, or the cohort is
            excluded from the vertical (e.g. child bands under university)
    """
    resolved_vertical = parse_vertical(vertical)
    resolved_cohort = parse_age_cohort(age_cohort)
    if resolved_cohort not in VERTICAL_COHORTS[resolved_vertical]:
        raise CohortValidationError(
            f"Age cohort {resolved_cohort.value!r} is not available for "
            f"vertical {resolved_vertical.value!r}"
        )
    return resolved_vertical, resolved_cohort
