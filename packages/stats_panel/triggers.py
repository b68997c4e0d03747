"""Interactive latency-test triggers wired by the stats panel.

The visual button lives outside this package; a trigger only keeps the action
to run when it is pressed, whether it is disabled, its tooltip title and the
"test started" notification.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol

from packages.telemetry import hooks

TriggerAction = Callable[[], None]


@dataclass(slots=True, frozen=True)
class DataChannelLatencyTestConfig:
    """Request parameters for a data-channel latency test."""

    duration: int = 1000
    rps: int = 10
    request_size: int = 200
    response_size: int = 200

    def to_dict(self) -> dict[str, int]:
        return {
            "duration": self.duration,
            "rps": self.rps,
            "requestSize": self.request_size,
            "responseSize": self.response_size,
        }


class StreamingSession(Protocol):
    """The subset of the streaming client the triggers talk to."""

    def request_latency_test(self) -> Any:  # pragma: no cover - interface definition
        ...

    def request_data_channel_latency_test(
        self, config: DataChannelLatencyTestConfig
    ) -> bool:  # pragma: no cover - interface definition
        ...


def _noop() -> None:
    return None


class LatencyTestTrigger:
    """A start action plus a "test started" notification."""

    def __init__(self, name: str, started_event: str) -> None:
        self.name = name
        self.started_event = started_event
        self.action: TriggerAction = _noop
        self.disabled = False
        self.title = ""
        self.tests_started = 0

    def set_action(self, action: TriggerAction | None) -> None:
        self.action = action if action is not None else _noop

    def reset(self) -> None:
        self.action = _noop

    def disable(self, title: str) -> None:
        self.disabled = True
        self.title = title

    def click(self) -> bool:
        """Run the action unless the trigger is disabled."""

        if self.disabled:
            return False
        self.action()
        return True

    def handle_test_start(self) -> None:
        self.tests_started += 1
        hooks.dispatch(self.started_event, {"trigger": self.name, "count": self.tests_started})

    def __repr__(self) -> str:
        return f"LatencyTestTrigger(name={self.name!r}, disabled={self.disabled})"


def latency_test_trigger() -> LatencyTestTrigger:
    return LatencyTestTrigger("latency-test", hooks.LATENCY_TEST_STARTED)


def data_channel_latency_test_trigger() -> LatencyTestTrigger:
    return LatencyTestTrigger("data-channel-latency-test", hooks.DATA_CHANNEL_LATENCY_TEST_STARTED)


__all__ = [
    "DataChannelLatencyTestConfig",
    "LatencyTestTrigger",
    "StreamingSession",
    "TriggerAction",
    "data_channel_latency_test_trigger",
    "latency_test_trigger",
]
