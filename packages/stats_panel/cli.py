"""Command-line interface replaying recorded telemetry through the stats panel."""

from __future__ import annotations

import argparse
import ast
import json
import sys
from pathlib import Path
from typing import Any, Mapping, Sequence

from packages.telemetry import dashboards, logger
from packages.telemetry.exporters import FanoutSink, JsonlSink, MemorySink, RenderSink
from packages.utils.config import load_records

from .config import PanelConfig, load_configuration
from .panel import StatsPanel

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "configs" / "stats_panel" / "default.yaml"

EVENT_KINDS = ("stats", "latency", "players")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="streamstats", description="Stream stats panel CLI")
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH if DEFAULT_CONFIG_PATH.exists() else None,
        help="Optional path to a stats panel configuration YAML file.",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        metavar="KEY=VALUE",
        help="Override configuration values using dot notation (e.g. stream.disable_latency_test=True).",
    )
    parser.add_argument("--log-config", type=Path, help="Alternative logging YAML file")
    parser.add_argument("--log-level", help="Threshold for streamstats loggers (e.g. DEBUG)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    replay = subparsers.add_parser("replay", help="Replay recorded telemetry events")
    replay.add_argument("events", type=Path, help="YAML list or JSONL file of recorded events")
    replay.add_argument("--jsonl-out", type=Path, help="Append every stat notification to this file")
    replay.add_argument("--json", action="store_true", help="Emit the final stats as JSON")
    replay.add_argument("--timestamp", action="store_true", help="Stamp the dashboard header")

    subparsers.add_parser("show-config", help="Print the effective configuration")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        if args.log_config:
            logger.configure(args.log_config, force=True)
        if args.log_level:
            logger.set_level(args.log_level)
        overrides = _parse_overrides(args.overrides)
        config = load_configuration(args.config, overrides=overrides)
        if args.command == "replay":
            return _cmd_replay(args, config)
        if args.command == "show-config":
            print(json.dumps(config.to_dict(), indent=2, sort_keys=True))
            return 0
    except (OSError, ValueError, TypeError) as exc:
        print(f"[streamstats] error: {exc}", file=sys.stderr)
        return 1

    parser.print_help()
    return 1


def _cmd_replay(args: argparse.Namespace, config: PanelConfig) -> int:
    memory = MemorySink()
    sink: RenderSink = memory
    if args.jsonl_out:
        sink = FanoutSink([memory, JsonlSink(args.jsonl_out)])
    panel = StatsPanel(config, sink=sink)
    panel.configure(config.stream)

    count = 0
    for record in load_records(args.events):
        replay_event(panel, record)
        count += 1

    if args.json:
        print(json.dumps([stat.to_dict() for stat in panel.entries()], indent=2))
    else:
        print(
            dashboards.build_dashboard(
                panel.registry, sections=panel.visible_sections(), timestamp=args.timestamp
            )
        )
    print(f"[streamstats] replayed {count} events, {len(memory.notifications)} updates", file=sys.stderr)
    return 0


def replay_event(panel: StatsPanel, record: Mapping[str, Any]) -> None:
    """Feed one recorded ``{"kind": ..., "payload": ...}`` event to ``panel``."""

    kind = record.get("kind")
    payload = record.get("payload")
    if kind == "stats":
        panel.handle_stats(payload if payload is not None else {})
    elif kind == "latency":
        panel.handle_latency_info(payload if payload is not None else {})
    elif kind == "players":
        if isinstance(payload, bool) or not isinstance(payload, int):
            raise ValueError(f"players payload must be an integer, received {payload!r}")
        panel.handle_player_count(payload)
    else:
        raise ValueError(f"unknown event kind {kind!r}; expected one of {', '.join(EVENT_KINDS)}")


def _parse_overrides(raw: Sequence[str] | None) -> Mapping[str, Any]:
    overrides: dict[str, Any] = {}
    if not raw:
        return overrides
    for item in raw:
        key, sep, value_text = item.partition("=")
        if not sep:
            raise ValueError(f"override '{item}' is missing '='")
        key_parts = [part for part in key.split(".") if part]
        if not key_parts:
            raise ValueError("override key must not be empty")
        value = _coerce_literal(value_text)
        cursor = overrides
        for part in key_parts[:-1]:
            cursor = cursor.setdefault(part, {})  # type: ignore[assignment]
            if not isinstance(cursor, dict):
                raise ValueError(f"override '{key}' conflicts with an existing value")
        cursor[key_parts[-1]] = value
    return overrides


def _coerce_literal(value: str) -> Any:
    try:
        return ast.literal_eval(value)
    except (ValueError, SyntaxError):
        return value


if __name__ == "__main__":  # pragma: no cover - module entry point
    raise SystemExit(main())
