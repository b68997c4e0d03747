"""Stat aggregation and formatting for a live streaming session's info panel."""

from .config import PanelConfig, StreamSettings, load_configuration
from .formatters import (
    LocaleNumberFormatter,
    NumberFormatter,
    format_bytes,
    format_integer,
    round_to_millis,
)
from .panel import StatsPanel
from .processors import StatUpdate, process_latency, process_player_count, process_stats
from .registry import Stat, StatRegistry, UpsertResult
from .sections import SectionConfig, StatsSections, is_section_enabled
from .types import AggregatedStats, CandidatePairStats, LatencyInfo

__all__ = [
    "AggregatedStats",
    "CandidatePairStats",
    "LatencyInfo",
    "LocaleNumberFormatter",
    "NumberFormatter",
    "PanelConfig",
    "SectionConfig",
    "Stat",
    "StatRegistry",
    "StatUpdate",
    "StatsPanel",
    "StatsSections",
    "StreamSettings",
    "UpsertResult",
    "format_bytes",
    "format_integer",
    "is_section_enabled",
    "load_configuration",
    "process_latency",
    "process_player_count",
    "process_stats",
    "round_to_millis",
]
