#!/usr/bin/env python3
"""
Unit tests for governance/hashing.py

Tests hashing functionality:
- Bytes hashing
- Canonical JSON hashing
- 32-bit rolling hash
- Series fingerprints
"""

import pytest

from governance.hashing import (
    compute_series_hash,
    hash_bytes,
    hash_canonical_json,
    hash_canonical_json_short,
    rolling_hash32,
)


# ============================================================================
# BYTES HASHING TESTS
# ============================================================================

class TestHashBytes:
    """Tests for hash_bytes function."""

    def test_empty_bytes(self):
        """Empty bytes should produce the known SHA256 digest."""
        assert hash_bytes(b"") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

    def test_lowercase_hex(self):
        result = hash_bytes(b"sentinel")
        assert len(result) == 64
        assert all(c in "0123456789abcdef" for c in result)


# ============================================================================
# CANONICAL JSON HASHING TESTS
# ============================================================================

class TestHashCanonicalJson:
    """Tests for canonical JSON hashing."""

    def test_key_order_independent(self):
        """Key order should not change the hash."""
        assert hash_canonical_json({"a": 1, "b": 2}) == hash_canonical_json({"b": 2, "a": 1})

    def test_value_sensitive(self):
        assert hash_canonical_json({"a": 1}) != hash_canonical_json({"a": 2})

    def test_short_hash_length(self):
        assert len(hash_canonical_json_short({"a": 1})) == 16
        assert len(hash_canonical_json_short({"a": 1}, length=8)) == 8

    def test_short_hash_is_prefix(self):
        obj = {"trigger_days": 5}
        assert hash_canonical_json(obj).startswith(hash_canonical_json_short(obj))


# ============================================================================
# ROLLING HASH TESTS
# ============================================================================

class TestRollingHash32:
    """Tests for the 31-multiplier rolling hash."""

    @pytest.mark.parametrize("text,expected", [
        ("", 0),
        ("a", 97),
        ("ab", 97 * 31 + 98),
        ("50", 1691),
        ("hello", 99162322),
    ])
    def test_known_values(self, text, expected):
        assert rolling_hash32(text) == expected

    def test_wraps_to_signed_32_bit(self):
        """Overflow should wrap; this string hashes to the minimum int32."""
        assert rolling_hash32("polygenelubricants") == -2147483648

    def test_result_in_int32_range(self):
        value = rolling_hash32("1230,5480,6120,9990,10000" * 20)
        assert -2**31 <= value < 2**31


# ============================================================================
# SERIES HASH TESTS
# ============================================================================

class TestComputeSeriesHash:
    """Tests for series fingerprints."""

    def test_empty_series(self):
        assert compute_series_hash([]) == "00000000"

    def test_single_value(self):
        """[0.5] hashes the text "50" (1691 = 0x69b)."""
        assert compute_series_hash([0.5]) == "0000069b"

    def test_minimum_int32_abs_renders_eight_digits(self):
        """abs() of the minimum int32 should render as 80000000."""
        assert format(abs(rolling_hash32("polygenelubricants")), "x").zfill(8) == "80000000"

    def test_float_representation_noise_ignored(self):
        """Values are scaled and rounded before hashing."""
        assert compute_series_hash([12.3, 45.6]) == compute_series_hash([12.300000000000001, 45.599999999999994])

    def test_value_sensitive(self):
        assert compute_series_hash([12.3, 45.6]) != compute_series_hash([12.4, 45.6])

    def test_order_sensitive(self):
        assert compute_series_hash([12.3, 45.6]) != compute_series_hash([45.6, 12.3])

    def test_accepts_generators(self):
        values = [52.1, 60.0, 71.4]
        assert compute_series_hash(v for v in values) == compute_series_hash(values)

    def test_format(self):
        result = compute_series_hash([52.1, 60.0, 71.4, 100.0, 0.0])
        assert len(result) >= 8
        assert all(c in "0123456789abcdef" for c in result)
