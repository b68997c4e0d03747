"""Helpers for loading YAML configuration and recorded event files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

import yaml

__all__ = ["load_config", "load_records"]


def load_config(path: str | Path) -> dict[str, Any]:
    """Return the parsed YAML mapping located at ``path``.

    An empty document yields an empty mapping; anything other than a mapping
    at the root is rejected with :class:`ValueError`.
    """

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"configuration file not found: {config_path}")
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"failed to parse configuration {config_path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("configuration root must be a mapping")
    return data


def load_records(path: str | Path) -> Iterator[dict[str, Any]]:
    """Yield the records stored in a ``.jsonl`` file or a YAML list.

    JSONL files hold one JSON object per line (blank lines are skipped); any
    other suffix is parsed as a YAML document whose root is a list of
    mappings.
    """

    source = Path(path)
    if not source.exists():
        raise FileNotFoundError(f"record file not found: {source}")
    if source.suffix == ".jsonl":
        with source.open("r", encoding="utf-8") as handle:
            for lineno, line in enumerate(handle, start=1):
                if not line.strip():
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError as exc:
                    raise ValueError(f"{source}:{lineno}: invalid JSON: {exc}") from exc
                if not isinstance(record, dict):
                    raise ValueError(f"{source}:{lineno}: record must be an object")
                yield record
        return
    try:
        data = yaml.safe_load(source.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"failed to parse records {source}: {exc}") from exc
    if data is None:
        return
    if not isinstance(data, list):
        raise ValueError("record file root must be a list")
    for index, record in enumerate(data):
        if not isinstance(record, dict):
            raise ValueError(f"{source}: record {index} must be a mapping")
        yield record
