"""Named events raised by the stats panel: stat upserts and latency-test activity."""

from __future__ import annotations

import time
from dataclasses import dataclass
from threading import RLock
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping

from . import logger

HookFn = Callable[["HookEvent"], None]
StatListener = Callable[[str, str, str], None]

STAT_UPSERTED = "stats.stat.upserted"
LATENCY_TEST_REQUESTED = "stats.latency_test.requested"
LATENCY_TEST_STARTED = "stats.latency_test.started"
DATA_CHANNEL_LATENCY_TEST_STARTED = "stats.data_channel_latency_test.started"


@dataclass(slots=True, frozen=True)
class HookEvent:
    name: str
    payload: Mapping[str, Any]
    timestamp: float


class HookHandle:
    """Subscription to one event name; ``close()`` or a ``with`` block ends it."""

    def __init__(self, name: str, fn: HookFn) -> None:
        self.name = name
        self._fn: HookFn | None = fn

    @property
    def active(self) -> bool:
        return self._fn is not None

    def close(self) -> None:
        fn, self._fn = self._fn, None
        if fn is not None:
            unregister_hook(self.name, fn)

    def __enter__(self) -> "HookHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


_LOCK = RLock()
_HOOKS: Dict[str, list[HookFn]] = {}
_LOGGER = logger.get_logger("streamstats.telemetry.hooks")


def register_hook(name: str, fn: HookFn) -> HookHandle:
    if not isinstance(name, str) or not name:
        raise ValueError("hook name must be a non-empty string")
    if not callable(fn):
        raise TypeError("hook callback must be callable")
    with _LOCK:
        _HOOKS.setdefault(name, []).append(fn)
    return HookHandle(name, fn)


def unregister_hook(name: str, fn: HookFn) -> None:
    with _LOCK:
        bucket = _HOOKS.get(name, [])
        if fn in bucket:
            bucket.remove(fn)
        if not bucket:
            _HOOKS.pop(name, None)


def dispatch(name: str, payload: Mapping[str, Any] | None = None) -> int:
    """Deliver a read-only ``payload`` to every subscriber of ``name``.

    Returns how many subscribers handled the event. A subscriber that raises
    is logged with its traceback and skipped.
    """

    event = HookEvent(name, MappingProxyType(dict(payload or {})), time.time())
    with _LOCK:
        subscribers = tuple(_HOOKS.get(name, ()))
    handled = 0
    for fn in subscribers:
        try:
            fn(event)
        except Exception as exc:
            _LOGGER.exception("subscriber to %s failed: %s", name, exc)
        else:
            handled += 1
    return handled


def on_stat_upserted(listener: StatListener) -> HookHandle:
    """Subscribe ``listener(stat_id, title, value)`` to notifications sent by ``HookSink``."""

    def _forward(event: HookEvent) -> None:
        listener(event.payload["id"], event.payload["title"], event.payload["value"])

    return register_hook(STAT_UPSERTED, _forward)


def registered_hooks() -> Mapping[str, tuple[HookFn, ...]]:
    with _LOCK:
        return {name: tuple(subscribers) for name, subscribers in _HOOKS.items()}


__all__ = [
    "DATA_CHANNEL_LATENCY_TEST_STARTED",
    "HookEvent",
    "HookFn",
    "HookHandle",
    "LATENCY_TEST_REQUESTED",
    "LATENCY_TEST_STARTED",
    "STAT_UPSERTED",
    "StatListener",
    "dispatch",
    "on_stat_upserted",
    "register_hook",
    "registered_hooks",
    "unregister_hook",
]
