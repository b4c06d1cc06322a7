"""
common/input_validation.py - Engine Input Validation Layer

Validates caller-supplied arguments before any series is generated.

Design Philosophy:
- Fail-loud: Raise exceptions for invalid arguments
- No silent defaults: an unknown vertical or cohort is never replaced
- Track failures: table checks return detailed error messages

Usage:
    from common.input_validation import (
        coerce_enum,
        validate_int_range,
        CohortValidationError,
    )

    vertical = coerce_enum(Vertical, "k12", "vertical")
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Type, TypeVar

E = TypeVar("E", bound=Enum)


# ============================================================================
# EXCEPTIONS
# ============================================================================

class CohortValidationError(ValueError):
    """Raised when a vertical or cohort argument is outside the defined set."""
    pass


class ConfigValidationError(ValueError):
    """Raised when an engine configuration value is out of range."""
    pass


# ============================================================================
# RESULTS
# ============================================================================

@dataclass
class ValidationResult:
    """Aggregated validation result."""
    passed: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)

    def summary(self) -> str:
        """Generate human-readable summary."""
        lines = [f"Validation {'PASSED' if self.passed else 'FAILED'}"]

        if self.errors:
            lines.append(f"\nErrors ({len(self.errors)}):")
            for err in self.errors[:10]:
                lines.append(f"  - {err}")
            if len(self.errors) > 10:
                lines.append(f"  ... and {len(self.errors) - 10} more")

        if self.warnings:
            lines.append(f"\nWarnings ({len(self.warnings)}):")
            for warn in self.warnings[:5]:
                lines.append(f"  - {warn}")

        if self.stats:
            lines.append("\nStats:")
            for k, v in sorted(self.stats.items()):
                lines.append(f"  {k}: {v}")

        return "\n".join(lines)


# ============================================================================
# ARGUMENT VALIDATION
# ============================================================================

def coerce_enum(enum_cls: Type[E], value: Any, field_name: str) -> E:
    """
    Resolve an enum member from a member or its string value.

    Args:
        enum_cls: Target enum class
        value: Enum member or raw value
        field_name: Argument name used in the error message

    Returns:
        The matching enum member

    Raises:
        CohortValidationError: If value does not name a member
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(repr(m.value) for m in enum_cls)
        raise CohortValidationError(
            f"Invalid {field_name}: {value!r} (expected one of {allowed})"
        ) from None


def validate_int_range(
    value: Any,
    field_name: str,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
    error_cls: Type[ValueError] = ConfigValidationError,
) -> int:
    """Check that value is an int (bools rejected) within optional bounds."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise error_cls(f"{field_name} must be an integer, got {value!r}")
    if min_value is not None and value < min_value:
        raise error_cls(f"{field_name} must be >= {min_value}, got {value}")
    if max_value is not None and value > max_value:
        raise error_cls(f"{field_name} must be <= {max_value}, got {value}")
    return value


def validate_number_range(
    value: Any,
    field_name: str,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
    error_cls: Type[ValueError] = ConfigValidationError,
) -> float:
    """Check that value is a real number within optional bounds."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise error_cls(f"{field_name} must be a number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise error_cls(f"{field_name} must be finite (not NaN or infinity), got {value}")
    if min_value is not None and value < min_value:
        raise error_cls(f"{field_name} must be >= {min_value}, got {value}")
    if max_value is not None and value > max_value:
        raise error_cls(f"{field_name} must be <= {max_value}, got {value}")
    return float(value)
