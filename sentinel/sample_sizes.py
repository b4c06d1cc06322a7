"""
sentinel/sample_sizes.py - Cohort Sample Sizes per Vertical

Distributes a 3,000-person synthetic population across the age cohorts of
each vertical.

K-ANONYMITY FLOOR (Rule of 5):
    Every entry is exactly 0 (cohort not applicable to the vertical) or at
    least 5. Checked at import; a table that breaks the floor fails loudly.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from common.input_validation import ValidationResult
from sentinel.cohorts import AGE_COHORT_BANDS, AgeCohortBand, Vertical, parse_age_cohort, parse_vertical

K_ANONYMITY_FLOOR = 5

# Population used when a cohort has no vertical-specific size
GLOBAL_DEMO_SAMPLE_SIZE = 3000

_A = AgeCohortBand

K12_COHORT_SAMPLE_SIZES: Mapping[AgeCohortBand, int] = MappingProxyType({
    _A.AGE_5_10: 600,     # ~20% elementary K-5
    _A.AGE_11_13: 450,    # ~15% middle school
    _A.AGE_14_18: 600,    # ~20% high school
    _A.AGE_18_24: 150,    # ~5%  young staff, paras
    _A.AGE_25_34: 300,
    _A.AGE_35_44: 360,
    _A.AGE_45_54: 300,
    _A.AGE_55_64: 180,
    _A.AGE_65_PLUS: 60,   # ~2%  emeritus staff
})

UNIVERSITY_COHORT_SAMPLE_SIZES: Mapping[AgeCohortBand, int] = MappingProxyType({
    _A.AGE_5_10: 0,
    _A.AGE_11_13: 0,
    _A.AGE_14_18: 0,
    _A.AGE_18_24: 1200,   # ~40% undergraduate
    _A.AGE_25_34: 750,    # ~25% graduate / early career
    _A.AGE_35_44: 450,
    _A.AGE_45_54: 330,
    _A.AGE_55_64: 180,
    _A.AGE_65_PLUS: 90,
})

# General adult population; healthcare and employer share it
GLOBAL_COHORT_SAMPLE_SIZES: Mapping[AgeCohortBand, int] = MappingProxyType({
    _A.AGE_5_10: 0,
    _A.AGE_11_13: 0,
    _A.AGE_14_18: 0,
    _A.AGE_18_24: 450,
    _A.AGE_25_34: 750,
    _A.AGE_35_44: 600,
    _A.AGE_45_54: 510,
    _A.AGE_55_64: 420,
    _A.AGE_65_PLUS: 270,
})

SAMPLE_SIZE_TABLES: Mapping[Vertical, Mapping[AgeCohortBand, int]] = MappingProxyType({
    Vertical.K12: K12_COHORT_SAMPLE_SIZES,
    Vertical.UNIVERSITY: UNIVERSITY_COHORT_SAMPLE_SIZES,
    Vertical.HEALTHCARE: GLOBAL_COHORT_SAMPLE_SIZES,
    Vertical.EMPLOYER: GLOBAL_COHORT_SAMPLE_SIZES,
    Vertical.GLOBAL: GLOBAL_COHORT_SAMPLE_SIZES,
})

VERTICAL_DEFAULT_SAMPLE_SIZES: Mapping[Vertical, int] = MappingProxyType(
    {vertical: GLOBAL_DEMO_SAMPLE_SIZE for vertical in Vertical}
)


def validate_sample_size_table(
    tables: Mapping[Vertical, Mapping[AgeCohortBand, int]] = SAMPLE_SIZE_TABLES,
) -> ValidationResult:
    """
    Check totality and the k-anonymity floor for every (vertical, cohort).

    Returns:
        ValidationResult; passed is False if any entry is missing, negative,
        or between 1 and K_ANONYMITY_FLOOR - 1
    """
    result = ValidationResult(passed=True)
    applicable = 0

    for vertical in Vertical:
        table = tables.get(vertical)
        if table is None:
            result.errors.append(f"{vertical.value}: no sample size table")
            continue
        for cohort in AGE_COHORT_BANDS:
            size = table.get(cohort)
            if size is None:
                result.errors.append(f"{vertical.value}/{cohort.value}: missing sample size")
            elif size != 0 and size < K_ANONYMITY_FLOOR:
                result.errors.append(
                    f"{vertical.value}/{cohort.value}: sample size {size} below "
                    f"k-anonymity floor of {K_ANONYMITY_FLOOR}"
                )
            elif size > 0:
                applicable += 1

    result.passed = not result.errors
    result.stats["applicable_cohorts"] = applicable
    return result


def get_cohort_sample_size(vertical: Any, age_cohort: Any) -> int:
    """Table lookup; 0 means the cohort does not apply to the vertical."""
    return SAMPLE_SIZE_TABLES[parse_vertical(vertical)][parse_age_cohort(age_cohort)]


def resolve_sample_size(vertical: Any, age_cohort: Any) -> int:
    """Table size, or the vertical-level default when the table says 0."""
    size = get_cohort_sample_size(vertical, age_cohort)
    return size if size > 0 else VERTICAL_DEFAULT_SAMPLE_SIZES[parse_vertical(vertical)]


_TABLE_CHECK = validate_sample_size_table()
if not _TABLE_CHECK.passed:
    raise RuntimeError(_TABLE_CHECK.summary())
