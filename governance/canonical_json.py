"""
Canonical JSON Serialization

Produces byte-identical JSON output for identical engine results.

Rules:
1. All dict keys sorted recursively
2. Floats converted to stable string representation (no scientific notation for normal ranges)
3. NaN and Inf are forbidden (raise ValueError)
4. Lists are NOT reordered (point order is oldest to newest)
5. Enums serialize as their value, dates as ISO strings
6. Objects exposing to_dict() serialize through it
7. Output ends with trailing newline
"""

import json
import math
from datetime import date
from enum import Enum
from typing import Any, IO, Optional


class CanonicalJSONEncoder(json.JSONEncoder):
    """
    JSON encoder that produces deterministic, canonical output.

    - Sorts dict keys
    - Formats floats with fixed precision (no scientific notation)
    - Rejects NaN/Inf
    - Handles Enum, date and to_dict() objects
    """

    # Maximum decimal places for float formatting
    FLOAT_PRECISION = 10

    def encode(self, o: Any) -> str:
        """Override to ensure top-level sorting."""
        return super().encode(self._canonicalize(o))

    def _canonicalize(self, obj: Any) -> Any:
        """Recursively canonicalize data structures."""
        if isinstance(obj, dict):
            keyed = {str(k.value if isinstance(k, Enum) else k): v for k, v in obj.items()}
            return {k: self._canonicalize(keyed[k]) for k in sorted(keyed)}
        elif isinstance(obj, (list, tuple)):
            return [self._canonicalize(item) for item in obj]
        elif isinstance(obj, Enum):
            return self._canonicalize(obj.value)
        elif isinstance(obj, bool) or obj is None:
            return obj
        elif isinstance(obj, float):
            return self._format_float(obj)
        elif isinstance(obj, (int, str)):
            return obj
        elif isinstance(obj, date):
            return obj.isoformat()
        elif hasattr(obj, "to_dict"):
            return self._canonicalize(obj.to_dict())
        return obj

    def _format_float(self, value: float) -> Any:
        """Format float with stable representation."""
        if math.isnan(value):
            raise ValueError("NaN values are not allowed in canonical JSON")
        if math.isinf(value):
            raise ValueError("Infinity values are not allowed in canonical JSON")

        if value == 0.0:
            return 0

        if value == int(value) and abs(value) < 2**53:
            return int(value)

        formatted = f"{value:.{self.FLOAT_PRECISION}f}"
        if '.' in formatted:
            formatted = formatted.rstrip('0')
            if formatted.endswith('.'):
                formatted += '0'

        return float(formatted)

    def default(self, o: Any) -> Any:
        """Handle types not natively supported by JSON."""
        raise TypeError(f"Object of type {type(o).__name__} is not JSON serializable")


def canonical_dumps(
    obj: Any,
    indent: Optional[int] = 2,
    ensure_ascii: bool = False,
) -> str:
    """
    Serialize object to canonical JSON string.

    Args:
        obj: Object to serialize
        indent: Indentation level (None for compact)
        ensure_ascii: If True, escape non-ASCII characters

    Returns:
        Canonical JSON string with trailing newline

    Raises:
        ValueError: If obj contains NaN or Inf
        TypeError: If obj contains non-serializable types
    """
    result = json.dumps(
        obj,
        cls=CanonicalJSONEncoder,
        indent=indent,
        sort_keys=True,
        ensure_ascii=ensure_ascii,
        separators=(',', ': ') if indent else (',', ':'),
    )
    return result + '\n'


def canonical_dump(
    obj: Any,
    fp: IO[str],
    indent: Optional[int] = 2,
    ensure_ascii: bool = False,
) -> None:
    """Serialize object to canonical JSON and write to file."""
    fp.write(canonical_dumps(obj, indent=indent, ensure_ascii=ensure_ascii))
