"""CLI entrypoint for pincode locality and representative lookups."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

from locality_lookup.common.config_loader import load_settings
from locality_lookup.common.constants import (
    EXIT_HARD_FAIL,
    EXIT_INVALID_INPUT,
    EXIT_NOT_FOUND,
    EXIT_SUCCESS,
    LOG_LEVELS,
)
from locality_lookup.common.errors import ConfigError, DatasetUnavailable, InvalidPincode
from locality_lookup.common.http import HttpClient
from locality_lookup.common.logging import build_logger, log_event
from locality_lookup.lookup.formatting import representative_summaries
from locality_lookup.lookup.resolver import LocalityResolver, build_resolver


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--source", default=None, help="override dataset.source (URL or path)")
    parser.add_argument("--log-level", default=None, choices=list(LOG_LEVELS))

    commands = parser.add_subparsers(dest="command", required=True)
    localities = commands.add_parser("localities", help="list localities for a pincode")
    localities.add_argument("pincode")
    details = commands.add_parser("details", help="show representatives for a locality")
    details.add_argument("pincode")
    details.add_argument("locality")
    commands.add_parser("check", help="load the dataset and report counts")
    return parser.parse_args(argv)


def _emit(payload: Any) -> None:
    sys.stdout.write(json.dumps(payload, ensure_ascii=False, indent=2) + "\n")


def execute_command(args: argparse.Namespace, resolver: LocalityResolver) -> int:
    if args.command == "localities":
        _emit(resolver.lookup_localities(args.pincode).to_dict())
        return EXIT_SUCCESS
    if args.command == "details":
        record = resolver.get_locality_details(args.pincode, args.locality)
        if record is None:
            _emit({"pincode": args.pincode, "locality": args.locality, "found": False})
            return EXIT_NOT_FOUND
        payload = record.to_dict()
        payload["summaries"] = representative_summaries(record)
        _emit(payload)
        return EXIT_SUCCESS
    if args.command == "check":
        dataset = resolver.load_dataset()
        _emit(
            {
                "source": dataset.source,
                "shape": dataset.shape,
                "pincodes": len(dataset.by_pincode),
                "records": dataset.record_count,
                "skipped_rows": dataset.skipped_rows,
                "duplicate_names": dataset.duplicate_names,
            }
        )
        return EXIT_SUCCESS
    raise ValueError(f"Unknown command: {args.command}")


def run_command(args: argparse.Namespace) -> int:
    try:
        settings = load_settings(
            Path(args.config_dir),
            overlay_config_dir=Path(args.overlay_config_dir) if args.overlay_config_dir else None,
        )
    except ConfigError as exc:
        sys.stderr.write(f"{exc}\n")
        return EXIT_HARD_FAIL

    if args.source:
        settings = replace(settings, source=args.source)
    logger = build_logger(level=args.log_level or settings.log_level)

    with HttpClient(timeout=settings.timeout, retry=settings.retry) as client:
        resolver = build_resolver(settings, http_client=client, logger=logger)
        try:
            return execute_command(args, resolver)
        except InvalidPincode as exc:
            log_event(logger, str(exc), event="LOOKUP", status="error", error_code=exc.error_code)
            sys.stderr.write(f"{exc}\n")
            return EXIT_INVALID_INPUT
        except DatasetUnavailable as exc:
            sys.stderr.write(f"{exc}\n")
            return EXIT_HARD_FAIL


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    return run_command(args)


if __name__ == "__main__":
    raise SystemExit(main())
