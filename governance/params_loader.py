"""
Parameters Loader

Loads sentinel engine parameters from a JSON file into a SentinelConfig.
Computes parameters_hash for the output provenance block.

Fail-closed: a missing, unreadable, or invalid params file stops the run.
"""

import json
import logging
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from common.input_validation import ConfigValidationError
from governance.hashing import hash_canonical_json_short
from sentinel.config import SentinelConfig

logger = logging.getLogger(__name__)

MAX_PARAMS_FILE_BYTES = 64 * 1024


class ParamsLoadError(Exception):
    """Error loading parameters file."""
    pass


class ParamsValidationError(ParamsLoadError):
    """Parameters file loaded but its contents are invalid."""
    pass


def compute_parameters_hash(params: Dict[str, Any], length: int = 16) -> str:
    """Truncated canonical-JSON hash of a parameters dict."""
    return hash_canonical_json_short(params, length=length)


def config_from_params(params: Dict[str, Any]) -> SentinelConfig:
    """
    Build a SentinelConfig from a parameters dict.

    Raises:
        ParamsValidationError: Unknown keys or out-of-range values
    """
    known = {f.name for f in fields(SentinelConfig)}
    unknown = sorted(set(params) - known)
    if unknown:
        raise ParamsValidationError(
            f"Unknown parameter(s): {', '.join(unknown)} (allowed: {', '.join(sorted(known))})"
        )
    try:
        return SentinelConfig(**params)
    except ConfigValidationError as e:
        raise ParamsValidationError(str(e)) from e


def load_params(path: Union[str, Path]) -> Tuple[SentinelConfig, str]:
    """
    Load engine parameters from a JSON object file.

    Args:
        path: Path to the params file

    Returns:
        Tuple of (SentinelConfig, parameters_hash)

    Raises:
        ParamsLoadError: If file missing, too large, or not a JSON object
        ParamsValidationError: If params fail validation
    """
    params_path = Path(path)

    if not params_path.exists():
        raise ParamsLoadError(f"Parameters file not found: {params_path}")

    if params_path.stat().st_size > MAX_PARAMS_FILE_BYTES:
        raise ParamsLoadError(
            f"Parameters file too large: {params_path} (max {MAX_PARAMS_FILE_BYTES} bytes)"
        )

    try:
        with open(params_path, 'r', encoding='utf-8') as f:
            params = json.load(f)
    except json.JSONDecodeError as e:
        raise ParamsLoadError(f"Invalid JSON in {params_path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ParamsLoadError(f"Invalid encoding in {params_path}: {e}") from e
    except OSError as e:
        raise ParamsLoadError(f"Error reading {params_path}: {e}") from e

    if not isinstance(params, dict):
        raise ParamsLoadError(f"Parameters must be a JSON object, got {type(params).__name__}")

    config = config_from_params(params)
    params_hash = compute_parameters_hash(config.to_dict())
    logger.debug("Loaded parameters from %s (hash: %s)", params_path, params_hash)
    return config, params_hash
