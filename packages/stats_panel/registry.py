"""Insertion-ordered registry of the stats shown on the panel."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterator

from packages.telemetry.exporters import NullSink, RenderSink


@dataclass
class Stat:
    """One labelled display value. ``id`` never changes once created."""

    id: str
    title: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "title": self.title, "value": self.value}


@dataclass(frozen=True)
class UpsertResult:
    """Outcome of :meth:`StatRegistry.upsert`."""

    created: bool
    changed: bool


class StatRegistry:
    """Identifier-keyed store iterating in first-insertion order.

    Updating an existing id replaces its title and value in place without
    moving it. There is no removal primitive; a new session gets a new
    registry. Every upsert is forwarded to the render sink.
    """

    def __init__(self, sink: RenderSink | None = None) -> None:
        self._lock = threading.RLock()
        self._stats: Dict[str, Stat] = {}
        self._sink: RenderSink = sink if sink is not None else NullSink()

    @property
    def sink(self) -> RenderSink:
        return self._sink

    def upsert(self, stat_id: str, title: str, value: str) -> UpsertResult:
        if not isinstance(stat_id, str) or not stat_id:
            raise ValueError("stat id must be a non-empty string")
        with self._lock:
            existing = self._stats.get(stat_id)
            if existing is None:
                self._stats[stat_id] = Stat(id=stat_id, title=title, value=value)
                result = UpsertResult(created=True, changed=True)
            else:
                changed = existing.title != title or existing.value != value
                existing.title = title
                existing.value = value
                result = UpsertResult(created=False, changed=changed)
        self._sink.notify(stat_id, title, value)
        return result

    def entries(self) -> tuple[Stat, ...]:
        """Return copies of the current stats in insertion order."""

        with self._lock:
            return tuple(Stat(id=s.id, title=s.title, value=s.value) for s in self._stats.values())

    def get(self, stat_id: str) -> Stat | None:
        with self._lock:
            stat = self._stats.get(stat_id)
            if stat is None:
                return None
            return Stat(id=stat.id, title=stat.title, value=stat.value)

    def ids(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._stats)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        with self._lock:
            return {stat_id: stat.to_dict() for stat_id, stat in self._stats.items()}

    def __contains__(self, stat_id: object) -> bool:
        with self._lock:
            return stat_id in self._stats

    def __len__(self) -> int:
        with self._lock:
            return len(self._stats)

    def __iter__(self) -> Iterator[Stat]:
        return iter(self.entries())


__all__ = ["Stat", "StatRegistry", "UpsertResult"]
