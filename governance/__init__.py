"""
Governance Module - Deterministic Output and Fingerprints

Provides:
- Canonical JSON serialization for byte-identical outputs
- SHA256 hashing of canonical JSON objects
- Rolling series hash for regression and differentiation checks
- Parameters file loading (governance.params_loader)

All operations are deterministic: same inputs produce identical outputs.
"""

from governance.canonical_json import canonical_dump, canonical_dumps
from governance.hashing import (
    compute_series_hash,
    hash_bytes,
    hash_canonical_json,
    hash_canonical_json_short,
    rolling_hash32,
)

__all__ = [
    "canonical_dump",
    "canonical_dumps",
    "compute_series_hash",
    "hash_bytes",
    "hash_canonical_json",
    "hash_canonical_json_short",
    "rolling_hash32",
]
