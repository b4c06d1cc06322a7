#!/usr/bin/env python3
"""
run_sentinel.py - Cohort Sentinel Command Line Entry Point

Builds the synthetic sentinel display bundle for one cohort (or every cohort
of a vertical) and emits canonical JSON.

DETERMINISM GUARANTEES:
- Identical vertical, cohort, seed and params produce identical series
- Trigger dates derive from --as-of-date (defaults to today)
- Canonical JSON output (sorted keys, stable floats)

Usage:
    python run_sentinel.py --vertical k12 --cohort 14-18
    python run_sentinel.py --vertical university --all-cohorts --output sentinel.json
    python run_sentinel.py --vertical global --params params/sentinel.json --as-of-date 2026-01-15
"""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from common.input_validation import CohortValidationError, ConfigValidationError
from common.logging_config import LogContext, setup_logging
from governance.canonical_json import canonical_dumps
from governance.hashing import hash_canonical_json_short
from governance.params_loader import ParamsLoadError, compute_parameters_hash, load_params
from sentinel import __version__ as ENGINE_VERSION
from sentinel.cohorts import VERTICALS, AGE_COHORT_BANDS, get_default_cohort, parse_vertical
from sentinel.config import DEFAULT_SENTINEL_CONFIG, SentinelConfig
from sentinel.synthetic import DEMO_SEED, build_sentinel_demo_data, pre_generate_all_cohorts

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date {value!r} (expected YYYY-MM-DD)") from None


def run_sentinel(
    vertical: str,
    cohort: Optional[str] = None,
    seed: int = DEMO_SEED,
    all_cohorts: bool = False,
    config: Optional[SentinelConfig] = None,
    as_of_date: Optional[date] = None,
    parameters_hash: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build sentinel output for a vertical.

    Args:
        vertical: Vertical value
        cohort: Cohort value (default: the vertical's default cohort)
        seed: Nominal seed
        all_cohorts: Build every cohort admitted by the vertical
        config: Engine configuration
        as_of_date: Date of day 0 (default today)
        parameters_hash: Hash of the loaded params file, if any

    Returns:
        Dict with "cohorts" (list of SentinelData dicts) and "provenance"

    Raises:
        CohortValidationError: Unknown vertical or cohort
    """
    cfg = config or DEFAULT_SENTINEL_CONFIG
    as_of = as_of_date or date.today()
    resolved_vertical = parse_vertical(vertical)

    if all_cohorts:
        bundles = list(pre_generate_all_cohorts(resolved_vertical, seed, config=cfg, as_of_date=as_of).values())
    else:
        selected = cohort if cohort is not None else get_default_cohort(resolved_vertical)
        bundles = [build_sentinel_demo_data(resolved_vertical, selected, seed, config=cfg, as_of_date=as_of)]

    cohorts: List[Dict[str, Any]] = [bundle.to_dict() for bundle in bundles]
    for bundle in bundles:
        logger.info(
            "%s: state=%s run=%d n=%d hash=%s",
            bundle.cohort_label, bundle.system_state.value,
            bundle.consecutive_days_above_baseline, bundle.sample_size, bundle.series_hash,
        )

    return {
        "cohorts": cohorts,
        "provenance": {
            "engine_version": ENGINE_VERSION,
            "vertical": resolved_vertical.value,
            "seed": seed,
            "as_of_date": as_of.isoformat(),
            "parameters_hash": parameters_hash or compute_parameters_hash(cfg.to_dict()),
            "result_hash": hash_canonical_json_short(cohorts),
        },
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Cohort Sentinel: deterministic synthetic cohort volatility series",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default cohort for a vertical
  python run_sentinel.py --vertical k12

  # Every admitted cohort, written to a file
  python run_sentinel.py --vertical university --all-cohorts --output sentinel.json

  # Organic signal only (no final-week escalation)
  python run_sentinel.py --vertical global --cohort 35-44 --no-emphasis
        """,
    )
    parser.add_argument(
        "--vertical",
        required=True,
        choices=[v.value for v in VERTICALS],
        help="Institutional vertical",
    )
    parser.add_argument(
        "--cohort",
        choices=[c.value for c in AGE_COHORT_BANDS],
        help="Age cohort band (default: the vertical's default cohort)",
    )
    parser.add_argument(
        "--all-cohorts",
        action="store_true",
        help="Build every cohort admitted by the vertical",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=DEMO_SEED,
        help=f"Nominal seed (default {DEMO_SEED})",
    )
    parser.add_argument(
        "--params",
        type=Path,
        help="JSON file with SentinelConfig overrides",
    )
    parser.add_argument(
        "--as-of-date",
        type=_parse_date,
        help="Date of day 0 for trigger dates (YYYY-MM-DD, default today)",
    )
    parser.add_argument(
        "--no-emphasis",
        action="store_true",
        help="Disable the final-week escalation stage",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Write JSON here instead of stdout",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also log to this rotating file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    parser.add_argument(
        "--structured-logs",
        action="store_true",
        help="Emit JSON log records",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {VERSION}",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.all_cohorts and args.cohort:
        parser.error("--cohort and --all-cohorts are mutually exclusive")

    setup_logging(
        log_file=args.log_file,
        log_level=getattr(logging, args.log_level),
        structured_output=args.structured_logs,
    )

    with LogContext():
        try:
            config = DEFAULT_SENTINEL_CONFIG
            parameters_hash = None
            if args.params:
                config, parameters_hash = load_params(args.params)
            if args.no_emphasis:
                config = config.with_overrides(narrative_emphasis=False)
                parameters_hash = None

            results = run_sentinel(
                vertical=args.vertical,
                cohort=args.cohort,
                seed=args.seed,
                all_cohorts=args.all_cohorts,
                config=config,
                as_of_date=args.as_of_date,
                parameters_hash=parameters_hash,
            )

            payload = canonical_dumps(results)
            if args.output:
                args.output.parent.mkdir(parents=True, exist_ok=True)
                args.output.write_text(payload, encoding="utf-8")
                logger.info("Wrote %d cohort(s) to %s", len(results["cohorts"]), args.output)
            else:
                sys.stdout.write(payload)
            return 0

        except (CohortValidationError, ConfigValidationError, ParamsLoadError) as e:
            logger.error("ERROR: %s", e)
            return 1
        except Exception as e:
            logger.exception("UNEXPECTED ERROR: %s", e)
            return 2


if __name__ == "__main__":
    sys.exit(main())
