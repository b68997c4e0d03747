"""Tests for building telemetry inputs from stats report mappings."""

from __future__ import annotations

import math

import pytest

from packages.stats_panel.types import AggregatedStats, LatencyInfo, is_number


def test_missing_keys_become_absent_fields() -> None:
    stats = AggregatedStats.from_mapping({"inboundVideoStats": {"bytesReceived": 10}})

    assert stats.inbound_video.bytes_received == 10
    assert stats.inbound_video.packets_lost is None
    assert stats.inbound_audio.bitrate is None
    assert stats.get_active_candidate_pair() is None


def test_selected_candidate_pair_id_wins_over_flag() -> None:
    stats = AggregatedStats.from_mapping(
        {
            "candidatePairs": [
                {"id": "CP1", "selected": True, "currentRoundTripTime": 0.5},
                {"id": "CP2", "currentRoundTripTime": 0.01},
            ],
            "selectedCandidatePairId": "CP2",
        }
    )

    assert stats.get_active_candidate_pair().id == "CP2"


def test_active_candidate_pair_key_is_selected() -> None:
    stats = AggregatedStats.from_mapping({"activeCandidatePair": {"currentRoundTripTime": 0.02}})

    pair = stats.get_active_candidate_pair()
    assert pair is not None
    assert pair.current_round_trip_time == 0.02


def test_codec_table_accepts_strings_and_mappings() -> None:
    stats = AggregatedStats.from_mapping(
        {"codecs": {"V1": "video/VP9", "A1": {"mimeType": "audio/opus", "sdpFmtpLine": "x=1"}}}
    )

    assert stats.codec_mime_type("V1") == "video/VP9"
    assert stats.codec_mime_type("A1") == "audio/opus"
    assert stats.codec_mime_type("missing") is None


def test_non_numeric_fields_are_rejected() -> None:
    with pytest.raises(TypeError):
        AggregatedStats.from_mapping({"inboundVideoStats": {"packetsLost": "12"}})
    with pytest.raises(TypeError):
        AggregatedStats.from_mapping(["not", "a", "mapping"])  # type: ignore[arg-type]


def test_latency_info_reads_report_keys() -> None:
    info = LatencyInfo.from_mapping({"AverageDecodeLatencyMs": 0, "AverageE2ELatency": 40.2})

    assert info.average_decode_latency_ms == 0
    assert info.average_e2e_latency_ms == 40.2
    assert info.sender_latency_ms is None


def test_to_dict_omits_absent_fields() -> None:
    payload = {
        "inboundVideoStats": {"bytesReceived": 5, "framesDropped": 1},
        "sessionStats": {"runTime": "00:00:05"},
    }
    data = AggregatedStats.from_mapping(payload).to_dict()

    assert data["inboundVideoStats"] == {"bytesReceived": 5, "framesDropped": 1}
    assert data["sessionStats"] == {"runTime": "00:00:05"}


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0.02, True), (3, True), (None, False), (True, False), (math.nan, False), (math.inf, False), ("1", False)],
)
def test_is_number(value, expected) -> None:
    assert is_number(value) is expected
