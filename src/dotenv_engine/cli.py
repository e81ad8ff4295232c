"""
Command line interface for the dotenv engine.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional, Sequence

from .config import load_config
from .engine import EnvLoader
from .loader import DotenvError, LoadReport, load_env_file
from .report import diagnostics_frame, summarize_reports


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load dotenv files into the environment and report what changed")
    parser.add_argument(
        "--config",
        default=os.getenv("DOTENV_ENGINE_CONFIG", "examples/configs/example_config.yaml"),
        help="Path to the YAML profiles file",
    )
    parser.add_argument("--profile", help="Profile to load (defaults to the config's default_profile)")
    parser.add_argument(
        "--env-file",
        help="Load a single dotenv file instead of a profile. The config file is not read.",
    )
    parser.add_argument(
        "--override",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Let file values replace variables already set in the environment",
    )
    parser.add_argument(
        "--strict",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Fail without writing anything when a file has malformed lines or unresolved references",
    )
    parser.add_argument("--show-values", action="store_true", help="Print values instead of masking them")
    parser.add_argument("--verbose", action="store_true", help="Log every key written or kept")
    return parser.parse_args(argv)


def _run(args: argparse.Namespace) -> List[LoadReport]:
    if args.env_file:
        report = load_env_file(args.env_file, override=bool(args.override), strict=bool(args.strict))
        return [report] if report is not None else []
    config = load_config(args.config)
    return EnvLoader(config).run(profile=args.profile, override=args.override, strict=args.strict)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        reports = _run(args)
    except DotenvError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print("\nDotenv Load Results\n-------------------")
    summary = summarize_reports(reports, show_values=args.show_values)
    if summary.empty:
        print("no entries loaded")
    else:
        print(summary.to_string(index=False))

    for report in reports:
        line = (
            f"{report.source:30} | "
            f"entries: {len(report.result):>3} | "
            f"written: {report.written:>3} | "
            f"override: {report.override}"
        )
        print(line)
        if report.result.diagnostics:
            print(diagnostics_frame(report.result).to_string(index=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
