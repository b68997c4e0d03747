"""Render sinks receiving stat notifications from the stats registry."""

from __future__ import annotations

import json
import time
from pathlib import Path
from threading import RLock
from typing import Iterable, Protocol

from . import hooks, logger

_LOGGER = logger.get_logger("streamstats.telemetry.exporters")


class RenderSink(Protocol):
    """Protocol implemented by everything that displays stats."""

    def notify(self, stat_id: str, title: str, value: str) -> None:  # pragma: no cover - interface definition
        ...


class NullSink:
    """Sink that discards every notification."""

    def notify(self, stat_id: str, title: str, value: str) -> None:
        return None


class MemorySink:
    """Keep one ``Title: value`` line per stat, in first-seen order."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._lines: dict[str, str] = {}
        self.notifications: list[tuple[str, str, str]] = []

    def notify(self, stat_id: str, title: str, value: str) -> None:
        with self._lock:
            self._lines[stat_id] = f"{title}: {value}"
            self.notifications.append((stat_id, title, value))

    def line(self, stat_id: str) -> str | None:
        with self._lock:
            return self._lines.get(stat_id)

    def render(self) -> str:
        """Return the current lines joined as a text block."""

        with self._lock:
            lines = list(self._lines.values())
        return "\n".join(lines) + ("\n" if lines else "")


class JsonlSink:
    """Append each notification as a JSON record to a file on disk."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = RLock()

    @property
    def path(self) -> Path:
        return self._path

    def notify(self, stat_id: str, title: str, value: str) -> None:
        record = {"id": stat_id, "title": title, "value": value, "timestamp": time.time()}
        with self._lock:
            with self._path.open("a", encoding="utf-8") as handle:
                json.dump(record, handle, ensure_ascii=False, sort_keys=True)
                handle.write("\n")


class HookSink:
    """Forward notifications to the hook registry as ``stats.stat.upserted``."""

    def notify(self, stat_id: str, title: str, value: str) -> None:
        hooks.dispatch(hooks.STAT_UPSERTED, {"id": stat_id, "title": title, "value": value})


class FanoutSink:
    """Forward each notification to several sinks.

    A failing sink is logged and skipped so the remaining sinks still see the
    update.
    """

    def __init__(self, sinks: Iterable[RenderSink]) -> None:
        self._sinks = tuple(sinks)

    @property
    def sinks(self) -> tuple[RenderSink, ...]:
        return self._sinks

    def notify(self, stat_id: str, title: str, value: str) -> None:
        for sink in self._sinks:
            try:
                sink.notify(stat_id, title, value)
            except Exception as exc:
                _LOGGER.exception("sink %s failed for %s: %s", type(sink).__name__, stat_id, exc)


__all__ = ["FanoutSink", "HookSink", "JsonlSink", "MemorySink", "NullSink", "RenderSink"]
