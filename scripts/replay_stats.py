#!/usr/bin/env python3
"""Replay a recorded telemetry session and print the stats panel."""

from __future__ import annotations

import argparse
from pathlib import Path

from packages.stats_panel import cli


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Replay recorded stream telemetry")
    parser.add_argument("events", type=Path, help="YAML list or JSONL file of recorded events")
    parser.add_argument("--config", type=Path, help="Optional stats panel configuration file")
    parser.add_argument(
        "--set", dest="overrides", action="append", help="Configuration overrides (key=value)"
    )
    parser.add_argument("--jsonl-out", type=Path, help="Append stat notifications to this file")
    parser.add_argument("--json", action="store_true", help="Emit the final stats as JSON")

    args = parser.parse_args(argv)

    cli_args: list[str] = []
    if args.config:
        cli_args.extend(["--config", str(args.config)])
    for override in args.overrides or ():
        cli_args.extend(["--set", override])

    cli_args.extend(["replay", str(args.events)])
    if args.jsonl_out:
        cli_args.extend(["--jsonl-out", str(args.jsonl_out)])
    if args.json:
        cli_args.append("--json")

    return cli.main(cli_args)


if __name__ == "__main__":  # pragma: no cover - script entry point
    raise SystemExit(main())
