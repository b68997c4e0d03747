"""The stats panel: routes telemetry deliveries into the stat registry."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Mapping

from packages.telemetry import hooks, logger
from packages.telemetry.exporters import RenderSink

from .config import DISABLE_LATENCY_TEST_TITLE, PanelConfig, StreamSettings
from .formatters import LocaleNumberFormatter, NumberFormatter
from .processors import StatUpdate, process_latency, process_player_count, process_stats
from .registry import Stat, StatRegistry, UpsertResult
from .sections import StatsSections, is_section_enabled
from .triggers import (
    DataChannelLatencyTestConfig,
    StreamingSession,
    data_channel_latency_test_trigger,
    latency_test_trigger,
)
from .types import AggregatedStats, LatencyInfo

_LOGGER = logger.get_logger("streamstats.panel")


class StatsPanel:
    """Holds the stat registry for one streaming session.

    Each ``handle_*`` call runs its processor and applies the resulting
    updates to the registry in order before returning. Stats snapshots and
    latency reports are dropped when the session stats section is disabled;
    the player count is always shown.
    """

    def __init__(
        self,
        config: PanelConfig | None = None,
        *,
        sink: RenderSink | None = None,
        number_format: NumberFormatter | None = None,
    ) -> None:
        self._config = config or PanelConfig()
        self._sink = sink
        self._number_format = number_format or LocaleNumberFormatter(self._config.locale)
        self.registry = StatRegistry(sink)
        self.latency_test = latency_test_trigger()
        self.data_channel_latency_test = data_channel_latency_test_trigger()

    @property
    def config(self) -> PanelConfig:
        return self._config

    def is_enabled(self, section: StatsSections) -> bool:
        return is_section_enabled(self._config.sections, section)

    def visible_sections(self) -> tuple[str, ...]:
        return tuple(section.value for section in StatsSections if self.is_enabled(section))

    # ------------------------------------------------------------------
    # Telemetry deliveries

    def handle_stats(self, stats: AggregatedStats | Mapping[str, Any]) -> list[StatUpdate]:
        snapshot = stats if isinstance(stats, AggregatedStats) else AggregatedStats.from_mapping(stats)
        updates = process_stats(
            snapshot,
            self._config.sections,
            number_format=self._number_format,
            byte_precision=self._config.byte_precision,
        )
        self._apply(updates)
        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug("stats snapshot: %s", json.dumps(snapshot.to_dict(), sort_keys=True))
        return updates

    def handle_latency_info(self, info: LatencyInfo | Mapping[str, Any]) -> list[StatUpdate]:
        latency = info if isinstance(info, LatencyInfo) else LatencyInfo.from_mapping(info)
        updates = process_latency(latency, self._config.sections)
        self._apply(updates)
        return updates

    def handle_player_count(self, player_count: int) -> list[StatUpdate]:
        updates = process_player_count(player_count)
        self._apply(updates)
        return updates

    def add_or_update_stat(self, stat_id: str, title: str, value: str) -> UpsertResult:
        return self.registry.upsert(stat_id, title, value)

    def entries(self) -> tuple[Stat, ...]:
        return self.registry.entries()

    def _apply(self, updates: Iterable[StatUpdate]) -> None:
        for update in updates:
            self.registry.upsert(update.id, update.title, update.value)

    # ------------------------------------------------------------------
    # Lifecycle

    def on_video_initialized(self, stream: StreamingSession) -> None:
        """Point both latency triggers at ``stream``."""

        def request_latency_test() -> None:
            hooks.dispatch(hooks.LATENCY_TEST_REQUESTED, {"trigger": self.latency_test.name})
            stream.request_latency_test()

        def request_data_channel_latency_test() -> None:
            request = DataChannelLatencyTestConfig()
            _LOGGER.debug("data channel latency test requested: %s", json.dumps(request.to_dict()))
            started = stream.request_data_channel_latency_test(request)
            if started:
                self.data_channel_latency_test.handle_test_start()

        self.latency_test.set_action(request_latency_test)
        self.data_channel_latency_test.set_action(request_data_channel_latency_test)

    def on_disconnect(self) -> None:
        """Unwire the triggers; displayed stats stay as they are."""

        self.latency_test.reset()
        self.data_channel_latency_test.reset()

    def configure(self, settings: StreamSettings) -> None:
        if settings.disable_latency_test:
            self.latency_test.disable(DISABLE_LATENCY_TEST_TITLE)
            self.data_channel_latency_test.disable(DISABLE_LATENCY_TEST_TITLE)
            _LOGGER.info(
                "-PixelStreamingDisableLatencyTester=true, requesting latency report from the "
                "browser to the streamer is disabled."
            )

    def new_session(self) -> StatRegistry:
        """Start over with an empty registry bound to the same sink."""

        self.registry = StatRegistry(self._sink)
        return self.registry


__all__ = ["StatsPanel"]
