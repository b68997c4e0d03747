"""Transformations from telemetry snapshots to display stat updates.

Each processor is a pure function returning the updates for one delivery in
a fixed order. Fields fall into three groups when data is missing:

* capability-dependent fields get a sentinel (``"Chrome only"``,
  ``"Can't calculate"``);
* transient fields (bitrate, framerate, QP) are skipped for the cycle, so the
  panel keeps the last value;
* frames dropped is passed through as-is, empty when unknown.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from .formatters import (
    DEFAULT_LOCALE,
    LocaleNumberFormatter,
    NumberFormatter,
    ceil_millis,
    format_bytes,
    plain_number,
    round_to_millis,
)
from .sections import SectionConfig, StatsSections, is_section_enabled
from .types import AggregatedStats, CandidatePairStats, LatencyInfo, Number, is_number

CHROME_ONLY = "Chrome only"
CANT_CALCULATE = "Can't calculate"


@dataclass(slots=True, frozen=True)
class StatUpdate:
    id: str
    title: str
    value: str

    def as_tuple(self) -> tuple[str, str, str]:
        return (self.id, self.title, self.value)


# (id, title, accessor) in display order
_LATENCY_FIELDS: tuple[tuple[str, str, Callable[[LatencyInfo], Number | None]], ...] = (
    ("SenderSideLatency", "Sender latency (ms)", lambda info: info.sender_latency_ms),
    ("AvgAssemblyDelay", "Assembly delay (ms)", lambda info: info.average_assembly_delay_ms),
    ("AvgDecodeDelay", "Decode time (ms)", lambda info: info.average_decode_latency_ms),
    (
        "AvgJitterBufferDelay",
        "Jitter buffer (ms)",
        lambda info: info.average_jitter_buffer_delay_ms,
    ),
    ("AvgProcessingDelay", "Processing delay (ms)", lambda info: info.average_processing_delay_ms),
    ("AvgE2ELatency", "Total latency (ms)", lambda info: info.average_e2e_latency_ms),
)

PLAYER_COUNT_ID = "PlayerCountStat"
PLAYER_COUNT_TITLE = "Players"


def process_stats(
    stats: AggregatedStats,
    sections: SectionConfig | None = None,
    *,
    number_format: NumberFormatter | None = None,
    byte_precision: int = 2,
) -> list[StatUpdate]:
    """Return the connection and media stat updates for ``stats``.

    Nothing is returned when ``sections`` has the session stats disabled.
    """

    if not _session_stats_enabled(sections):
        return []
    fmt = number_format or LocaleNumberFormatter(DEFAULT_LOCALE)
    video = stats.inbound_video
    audio = stats.inbound_audio
    updates: list[StatUpdate] = []

    def add(stat_id: str, title: str, value: str) -> None:
        updates.append(StatUpdate(stat_id, title, value))

    if video.bytes_received is not None:
        add("InboundDataStat", "Received", format_bytes(video.bytes_received, byte_precision))

    add(
        "PacketsLostStat",
        "Packets Lost",
        fmt.format_integer(video.packets_lost) if video.packets_lost is not None else CHROME_ONLY,
    )

    if video.bitrate:
        add("VideoBitrateStat", "Video Bitrate (kbps)", plain_number(video.bitrate))
    if audio.bitrate:
        add("AudioBitrateStat", "Audio Bitrate (kbps)", plain_number(audio.bitrate))

    add("VideoResStat", "Video resolution", _resolution(video.frame_width, video.frame_height))

    add(
        "FramesDecodedStat",
        "Frames Decoded",
        fmt.format_integer(video.frames_decoded)
        if video.frames_decoded is not None
        else CHROME_ONLY,
    )

    if video.frames_per_second:
        add("FramerateStat", "Framerate", plain_number(video.frames_per_second))

    # No sentinel here, unlike frames decoded.
    add("FramesDroppedStat", "Frames dropped", _pass_through(video.frames_dropped))

    if video.codec_id:
        add("VideoCodecStat", "Video codec", _codec_name(stats, video.codec_id, "video/"))
    if audio.codec_id:
        add("AudioCodecStat", "Audio codec", _codec_name(stats, audio.codec_id, "audio/"))

    add("RTTStat", "Net RTT (ms)", _round_trip_time(stats.get_active_candidate_pair()))

    add("DurationStat", "Duration", _pass_through(stats.session.run_time))
    add("ControlsInputStat", "Controls stream input", _pass_through(stats.session.controls_stream_input))

    qp = stats.session.video_encoder_avg_qp
    if qp is not None and not math.isnan(qp):
        add("QPStat", "Video quantization parameter", plain_number(qp))

    return updates


def process_latency(info: LatencyInfo, sections: SectionConfig | None = None) -> list[StatUpdate]:
    """Return updates for every finite, strictly positive latency reading."""

    if not _session_stats_enabled(sections):
        return []
    updates: list[StatUpdate] = []
    for stat_id, title, accessor in _LATENCY_FIELDS:
        reading = accessor(info)
        if is_number(reading) and reading > 0:
            updates.append(StatUpdate(stat_id, title, str(ceil_millis(reading))))
    return updates


def process_player_count(count: int) -> list[StatUpdate]:
    if count < 0:
        raise ValueError("player count must be non-negative")
    return [StatUpdate(PLAYER_COUNT_ID, PLAYER_COUNT_TITLE, str(int(count)))]


def _session_stats_enabled(sections: SectionConfig | None) -> bool:
    return sections is None or is_section_enabled(sections, StatsSections.SESSION_STATS)


def _resolution(width: Number | None, height: Number | None) -> str:
    if width and height:
        return f"{plain_number(width)}x{plain_number(height)}"
    return CHROME_ONLY


def _codec_name(stats: AggregatedStats, codec_id: str, prefix: str) -> str:
    mime_type = stats.codec_mime_type(codec_id)
    if mime_type is None:
        return ""
    return mime_type.replace(prefix, "", 1)


def _round_trip_time(pair: CandidatePairStats | None) -> str:
    active = pair if pair is not None else CandidatePairStats()
    rtt = active.current_round_trip_time
    if is_number(rtt):
        return str(round_to_millis(rtt))
    return CANT_CALCULATE


def _pass_through(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        return plain_number(value)
    return str(value)


__all__ = [
    "CANT_CALCULATE",
    "CHROME_ONLY",
    "PLAYER_COUNT_ID",
    "PLAYER_COUNT_TITLE",
    "StatUpdate",
    "process_latency",
    "process_player_count",
    "process_stats",
]
