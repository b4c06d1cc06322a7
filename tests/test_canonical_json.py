#!/usr/bin/env python3
"""
Unit tests for governance/canonical_json.py

Tests deterministic serialization:
- Key sorting
- Float stabilization
- NaN/Inf rejection
- Enum, date and to_dict() handling
"""

import io
import json
import math
from dataclasses import dataclass
from datetime import date

import pytest

from governance.canonical_json import canonical_dump, canonical_dumps
from sentinel.cohorts import AgeCohortBand, Vertical


@dataclass
class _Point:
    day_offset: int
    value: float

    def to_dict(self):
        return {"day_offset": self.day_offset, "value": self.value}


class TestKeySorting:
    """Tests for recursive key ordering."""

    def test_nested_keys_sorted(self):
        """Keys should be sorted at every level; lists keep order."""
        result = canonical_dumps({"b": {"d": 1, "c": 2}, "a": [3, 1]}, indent=None)
        assert result == '{"a":[3,1],"b":{"c":2,"d":1}}\n'

    def test_insertion_order_irrelevant(self):
        """Dicts with the same items should serialize identically."""
        first = canonical_dumps({"x": 1, "y": 2})
        second = canonical_dumps({"y": 2, "x": 1})
        assert first == second

    def test_enum_keys(self):
        """Enum keys should serialize as their values."""
        result = canonical_dumps({Vertical.K12: 1, Vertical.GLOBAL: 2}, indent=None)
        assert result == '{"global":2,"k12":1}\n'


class TestFloats:
    """Tests for float formatting."""

    def test_integral_float_becomes_int(self):
        assert canonical_dumps({"v": 50.0}, indent=None) == '{"v":50}\n'

    def test_float_noise_removed(self):
        """Representation noise beyond ten decimals should be dropped."""
        assert canonical_dumps({"v": 0.1 + 0.2}, indent=None) == '{"v":0.3}\n'

    def test_nan_rejected(self):
        with pytest.raises(ValueError, match="NaN"):
            canonical_dumps({"v": math.nan})

    def test_inf_rejected(self):
        with pytest.raises(ValueError, match="Infinity"):
            canonical_dumps({"v": math.inf})


class TestTypeHandling:
    """Tests for non-JSON-native types."""

    def test_enum_values(self):
        result = canonical_dumps({"cohort": AgeCohortBand.AGE_14_18}, indent=None)
        assert result == '{"cohort":"14-18"}\n'

    def test_date_isoformat(self):
        result = canonical_dumps({"triggered_at": date(2026, 1, 15)}, indent=None)
        assert result == '{"triggered_at":"2026-01-15"}\n'

    def test_to_dict_objects(self):
        result = canonical_dumps([_Point(-1, 52.5)], indent=None)
        assert json.loads(result) == [{"day_offset": -1, "value": 52.5}]

    def test_unsupported_type_raises(self):
        with pytest.raises(TypeError):
            canonical_dumps({"v": object()})

    def test_non_ascii_preserved(self):
        """En dashes in labels should not be escaped by default."""
        result = canonical_dumps({"label": "14–18 (High School)"})
        assert "14–18" in result


class TestOutputShape:
    """Tests for output framing."""

    def test_trailing_newline(self):
        assert canonical_dumps({"a": 1}).endswith("\n")

    def test_indented_by_default(self):
        assert canonical_dumps({"a": 1}) == '{\n  "a": 1\n}\n'

    def test_canonical_dump_writes_file(self):
        buffer = io.StringIO()
        canonical_dump({"b": 1, "a": 2}, buffer, indent=None)
        assert buffer.getvalue() == '{"a":2,"b":1}\n'
