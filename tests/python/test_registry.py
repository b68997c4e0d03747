"""Tests for the insertion-ordered stat registry."""

from __future__ import annotations

import pytest

from packages.stats_panel.registry import StatRegistry
from packages.telemetry.exporters import MemorySink


def test_upsert_reports_creation_then_update() -> None:
    registry = StatRegistry()

    first = registry.upsert("RTTStat", "Net RTT (ms)", "24")
    second = registry.upsert("RTTStat", "Net RTT (ms)", "30")

    assert first.created is True and first.changed is True
    assert second.created is False and second.changed is True
    assert registry.get("RTTStat").value == "30"


def test_repeated_upsert_is_idempotent() -> None:
    registry = StatRegistry()
    registry.upsert("a", "A", "1")
    registry.upsert("b", "B", "2")
    before = registry.to_dict()

    result = registry.upsert("a", "A", "1")

    assert result.created is False
    assert result.changed is False
    assert registry.to_dict() == before
    assert registry.ids() == ("a", "b")


def test_updates_never_reorder_entries() -> None:
    registry = StatRegistry()
    for stat_id in ("a", "b", "c"):
        registry.upsert(stat_id, stat_id.upper(), "0")

    registry.upsert("b", "Bee", "5")
    registry.upsert("a", "A", "7")

    assert [stat.id for stat in registry.entries()] == ["a", "b", "c"]
    assert [stat.id for stat in registry] == ["a", "b", "c"]
    assert registry.get("b").title == "Bee"


def test_entries_are_detached_snapshots() -> None:
    registry = StatRegistry()
    registry.upsert("a", "A", "1")

    snapshot = registry.entries()
    snapshot[0].value = "mutated"

    assert registry.get("a").value == "1"
    assert registry.entries() == registry.entries()


def test_every_upsert_notifies_the_sink() -> None:
    sink = MemorySink()
    registry = StatRegistry(sink)

    registry.upsert("a", "A", "1")
    registry.upsert("a", "A", "1")
    registry.upsert("b", "B", "2")

    assert sink.notifications == [("a", "A", "1"), ("a", "A", "1"), ("b", "B", "2")]
    assert len(registry) == 2
    assert "a" in registry and "z" not in registry


def test_empty_id_is_rejected() -> None:
    with pytest.raises(ValueError):
        StatRegistry().upsert("", "Title", "value")


def test_get_unknown_id_returns_none() -> None:
    assert StatRegistry().get("missing") is None
