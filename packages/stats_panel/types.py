"""Typed telemetry inputs consumed by the stats panel.

Every measurement that a browser may or may not report is an explicit
``Optional`` value; ``None`` always means "the field was not on the report".
The ``from_mapping`` constructors accept the camelCase field names used by the
streaming client's stats reports, where a missing key is an absent field.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Sequence

Number = int | float


def is_number(value: Any) -> bool:
    """Return ``True`` for finite ints and floats (booleans excluded)."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _require_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(f"{what} must be a mapping, received {type(value).__name__}")
    return value


def _optional_number(data: Mapping[str, Any], key: str) -> Number | None:
    if key not in data or data[key] is None:
        return None
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{key} must be numeric, received {type(value).__name__}")
    return value


def _optional_text(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    return str(value)


@dataclass(slots=True, frozen=True)
class InboundVideoStats:
    bytes_received: Number | None = None
    packets_lost: Number | None = None
    bitrate: Number | None = None
    frame_width: Number | None = None
    frame_height: Number | None = None
    frames_decoded: Number | None = None
    frames_per_second: Number | None = None
    frames_dropped: Number | None = None
    codec_id: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "InboundVideoStats":
        payload = _require_mapping(data, "inboundVideoStats")
        return cls(
            bytes_received=_optional_number(payload, "bytesReceived"),
            packets_lost=_optional_number(payload, "packetsLost"),
            bitrate=_optional_number(payload, "bitrate"),
            frame_width=_optional_number(payload, "frameWidth"),
            frame_height=_optional_number(payload, "frameHeight"),
            frames_decoded=_optional_number(payload, "framesDecoded"),
            frames_per_second=_optional_number(payload, "framesPerSecond"),
            frames_dropped=_optional_number(payload, "framesDropped"),
            codec_id=_optional_text(payload, "codecId"),
        )


@dataclass(slots=True, frozen=True)
class InboundAudioStats:
    bytes_received: Number | None = None
    bitrate: Number | None = None
    codec_id: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "InboundAudioStats":
        payload = _require_mapping(data, "inboundAudioStats")
        return cls(
            bytes_received=_optional_number(payload, "bytesReceived"),
            bitrate=_optional_number(payload, "bitrate"),
            codec_id=_optional_text(payload, "codecId"),
        )


@dataclass(slots=True, frozen=True)
class CodecStats:
    mime_type: str

    @classmethod
    def from_value(cls, value: Any) -> "CodecStats":
        if isinstance(value, str):
            return cls(mime_type=value)
        payload = _require_mapping(value, "codec")
        return cls(mime_type=str(payload.get("mimeType", "")))


@dataclass(slots=True, frozen=True)
class CandidatePairStats:
    """A network path between the two endpoints; RTT is in seconds."""

    id: str | None = None
    selected: bool = False
    state: str | None = None
    current_round_trip_time: Number | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "CandidatePairStats":
        payload = _require_mapping(data, "candidate pair")
        return cls(
            id=_optional_text(payload, "id"),
            selected=bool(payload.get("selected", False)),
            state=_optional_text(payload, "state"),
            current_round_trip_time=_optional_number(payload, "currentRoundTripTime"),
        )


@dataclass(slots=True, frozen=True)
class SessionStats:
    run_time: str | None = None
    controls_stream_input: str | None = None
    video_encoder_avg_qp: Number | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "SessionStats":
        payload = _require_mapping(data, "sessionStats")
        return cls(
            run_time=_optional_text(payload, "runTime"),
            controls_stream_input=_optional_text(payload, "controlsStreamInput"),
            video_encoder_avg_qp=_optional_number(payload, "videoEncoderAvgQP"),
        )


@dataclass(slots=True, frozen=True)
class AggregatedStats:
    """Point-in-time bundle of inbound media, network path and session stats."""

    inbound_video: InboundVideoStats = field(default_factory=InboundVideoStats)
    inbound_audio: InboundAudioStats = field(default_factory=InboundAudioStats)
    codecs: Mapping[str, CodecStats] = field(default_factory=dict)
    candidate_pairs: tuple[CandidatePairStats, ...] = ()
    selected_candidate_pair_id: str | None = None
    session: SessionStats = field(default_factory=SessionStats)

    def get_active_candidate_pair(self) -> CandidatePairStats | None:
        """Return the pair the transport selected, or ``None`` if there is none."""

        if self.selected_candidate_pair_id is not None:
            for pair in self.candidate_pairs:
                if pair.id == self.selected_candidate_pair_id:
                    return pair
        for pair in self.candidate_pairs:
            if pair.selected:
                return pair
        return None

    def codec_mime_type(self, codec_id: str) -> str | None:
        codec = self.codecs.get(codec_id)
        return codec.mime_type if codec is not None else None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AggregatedStats":
        if not isinstance(data, Mapping):
            raise TypeError("stats snapshot must be a mapping")
        raw_codecs = _require_mapping(data.get("codecs"), "codecs")
        raw_pairs = data.get("candidatePairs") or ()
        if isinstance(raw_pairs, (str, bytes)) or not isinstance(raw_pairs, Sequence):
            raise TypeError("candidatePairs must be a list of mappings")
        pairs = [CandidatePairStats.from_mapping(item) for item in raw_pairs]
        active = data.get("activeCandidatePair")
        if active is not None:
            pairs.insert(0, replace(CandidatePairStats.from_mapping(active), selected=True))
        return cls(
            inbound_video=InboundVideoStats.from_mapping(data.get("inboundVideoStats")),
            inbound_audio=InboundAudioStats.from_mapping(data.get("inboundAudioStats")),
            codecs={str(key): CodecStats.from_value(value) for key, value in raw_codecs.items()},
            candidate_pairs=tuple(pairs),
            selected_candidate_pair_id=_optional_text(data, "selectedCandidatePairId"),
            session=SessionStats.from_mapping(data.get("sessionStats")),
        )

    def to_dict(self) -> dict[str, Any]:
        video = self.inbound_video
        audio = self.inbound_audio
        session = self.session
        return {
            "inboundVideoStats": _without_none({
                "bytesReceived": video.bytes_received,
                "packetsLost": video.packets_lost,
                "bitrate": video.bitrate,
                "frameWidth": video.frame_width,
                "frameHeight": video.frame_height,
                "framesDecoded": video.frames_decoded,
                "framesPerSecond": video.frames_per_second,
                "framesDropped": video.frames_dropped,
                "codecId": video.codec_id,
            }),
            "inboundAudioStats": _without_none({
                "bytesReceived": audio.bytes_received,
                "bitrate": audio.bitrate,
                "codecId": audio.codec_id,
            }),
            "codecs": {key: codec.mime_type for key, codec in self.codecs.items()},
            "candidatePairs": [
                _without_none({
                    "id": pair.id,
                    "selected": pair.selected,
                    "state": pair.state,
                    "currentRoundTripTime": pair.current_round_trip_time,
                })
                for pair in self.candidate_pairs
            ],
            "sessionStats": _without_none({
                "runTime": session.run_time,
                "controlsStreamInput": session.controls_stream_input,
                "videoEncoderAvgQP": session.video_encoder_avg_qp,
            }),
        }


@dataclass(slots=True, frozen=True)
class LatencyInfo:
    """Latency breakdown reported by the streamer, all values in milliseconds."""

    sender_latency_ms: Number | None = None
    average_assembly_delay_ms: Number | None = None
    average_decode_latency_ms: Number | None = None
    average_jitter_buffer_delay_ms: Number | None = None
    average_processing_delay_ms: Number | None = None
    average_e2e_latency_ms: Number | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LatencyInfo":
        if not isinstance(data, Mapping):
            raise TypeError("latency info must be a mapping")
        return cls(
            sender_latency_ms=_optional_number(data, "SenderLatencyMs"),
            average_assembly_delay_ms=_optional_number(data, "AverageAssemblyDelayMs"),
            average_decode_latency_ms=_optional_number(data, "AverageDecodeLatencyMs"),
            average_jitter_buffer_delay_ms=_optional_number(data, "AverageJitterBufferDelayMs"),
            average_processing_delay_ms=_optional_number(data, "AverageProcessingDelayMs"),
            average_e2e_latency_ms=_optional_number(data, "AverageE2ELatency"),
        )


def _without_none(payload: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


__all__ = [
    "AggregatedStats",
    "CandidatePairStats",
    "CodecStats",
    "InboundAudioStats",
    "InboundVideoStats",
    "LatencyInfo",
    "Number",
    "SessionStats",
    "is_number",
]
