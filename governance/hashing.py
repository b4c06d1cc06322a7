"""
Hashing for Governance

Provides:
- SHA256 hashing of raw bytes and canonical JSON objects (result fingerprints)
- A 32-bit rolling polynomial hash over series values (series fingerprints)

SHA256 hashes are returned as lowercase hex strings. The rolling series hash
is NOT a security primitive; it only answers "did two computations produce
the same series".
"""

import hashlib
from typing import Any, Iterable

from common.score_utils import round_half_up_int
from governance.canonical_json import canonical_dumps

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000
SERIES_HASH_WIDTH = 8


def hash_bytes(data: bytes) -> str:
    """
    Compute SHA256 hash of raw bytes.

    Args:
        data: Bytes to hash

    Returns:
        Lowercase hex digest (64 characters)
    """
    return hashlib.sha256(data).hexdigest()


def hash_canonical_json(obj: Any) -> str:
    """
    Compute SHA256 hash of canonical JSON representation.

    Raises:
        ValueError: If obj contains NaN or Inf
        TypeError: If obj contains non-serializable types
    """
    canonical = canonical_dumps(obj, indent=None)
    return hash_bytes(canonical.encode('utf-8'))


def hash_canonical_json_short(obj: Any, length: int = 16) -> str:
    """Truncated SHA256 of the canonical JSON representation."""
    return hash_canonical_json(obj)[:length]


def rolling_hash32(text: str) -> int:
    """
    31-multiplier polynomial hash over the characters of text.

    Arithmetic wraps to a signed 32-bit integer after every step.
    """
    h = 0
    for ch in text:
        h = (h * 31 + ord(ch)) & _INT32_MASK
    if h & _INT32_SIGN:
        h -= 1 << 32
    return h


def compute_series_hash(values: Iterable[float]) -> str:
    """
    Fingerprint a series of rounded point values.

    Each value is scaled by 100 and rounded half-up, the integers are joined
    with commas, and the rolling hash of that string is rendered as at least
    8 lowercase hex digits.

    Args:
        values: Point values (already rounded to one decimal)

    Returns:
        Hex fingerprint string
    """
    text = ",".join(str(round_half_up_int(v * 100)) for v in values)
    return format(abs(rolling_hash32(text)), "x").zfill(SERIES_HASH_WIDTH)
