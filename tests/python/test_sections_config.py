"""Tests for the section gate and the panel configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from packages.stats_panel.config import PanelConfig, load_configuration
from packages.stats_panel.sections import SectionConfig, StatsSections, is_section_enabled
from packages.utils.config import load_config, load_records

REPO_ROOT = Path(__file__).resolve().parents[2]


def test_default_config_enables_every_section() -> None:
    config = SectionConfig()
    for section in StatsSections:
        assert is_section_enabled(config, section)


def test_unknown_sections_are_disabled() -> None:
    assert is_section_enabled(SectionConfig(), "Network Graphs") is False


def test_sections_parse_display_and_member_names() -> None:
    config = SectionConfig.from_names(["session_stats", "Latency Test"])

    assert is_section_enabled(config, StatsSections.SESSION_STATS)
    assert is_section_enabled(config, "Latency Test")
    assert not is_section_enabled(config, StatsSections.DATA_CHANNEL_LATENCY_TEST)


def test_section_flags_mapping() -> None:
    config = SectionConfig.from_flags({"Session Stats": False, "Latency Test": True})

    assert config.to_list() == ["Latency Test"]


def test_panel_config_defaults() -> None:
    config = PanelConfig.from_mapping(None)

    assert config.locale == "en-US"
    assert config.byte_precision == 2
    assert config.stream.disable_latency_test is False
    assert config.sections.to_list() == [section.value for section in StatsSections]


def test_merge_applies_nested_overrides() -> None:
    config = PanelConfig().merge(
        {"locale": "de-DE", "stream": {"disable_latency_test": "true"}, "sections": ["Latency Test"]}
    )

    assert config.locale == "de-DE"
    assert config.stream.disable_latency_test is True
    assert config.sections.to_list() == ["Latency Test"]


def test_invalid_byte_precision_is_rejected() -> None:
    with pytest.raises(ValueError):
        PanelConfig.from_mapping({"byte_precision": "lots"})
    with pytest.raises(ValueError):
        PanelConfig.from_mapping({"byte_precision": -1})


def test_load_configuration_reads_yaml(tmp_path: Path) -> None:
    path = tmp_path / "panel.yaml"
    path.write_text("locale: fr-FR\nbyte_precision: 1\n", encoding="utf-8")

    config = load_configuration(path, overrides={"byte_precision": 3})

    assert config.locale == "fr-FR"
    assert config.byte_precision == 3


def test_shipped_default_config_loads() -> None:
    data = load_config(REPO_ROOT / "configs" / "stats_panel" / "default.yaml")
    assert PanelConfig.from_mapping(data).to_dict() == PanelConfig().to_dict()


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_load_records_reads_jsonl_and_yaml(tmp_path: Path) -> None:
    jsonl = tmp_path / "events.jsonl"
    jsonl.write_text('{"kind": "players", "payload": 1}\n\n{"kind": "players", "payload": 2}\n')
    yaml_path = tmp_path / "events.yaml"
    yaml_path.write_text("- kind: players\n  payload: 3\n")

    assert [record["payload"] for record in load_records(jsonl)] == [1, 2]
    assert [record["payload"] for record in load_records(yaml_path)] == [3]


def test_load_records_reports_bad_lines(tmp_path: Path) -> None:
    jsonl = tmp_path / "broken.jsonl"
    jsonl.write_text('{"kind": "players"}\nnot json\n')
    with pytest.raises(ValueError, match="broken.jsonl:2"):
        list(load_records(jsonl))
