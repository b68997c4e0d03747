"""Text-only dashboards for inspecting the stats panel from a terminal."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from packages.stats_panel.registry import StatRegistry

HEADING = "Information"


def build_dashboard(
    registry: "StatRegistry",
    *,
    sections: tuple[str, ...] = (),
    timestamp: bool = False,
) -> str:
    """Return a human-readable snapshot of ``registry``.

    Stats appear in registry order, one ``Title: value`` line each, the same
    text the on-screen panel shows per element.
    """

    lines = [HEADING]
    if timestamp:
        lines.append("Generated at: " + datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC"))
    for section in sections:
        lines.append(f"[{section}]")
    lines.append("")
    entries = registry.entries()
    if not entries:
        lines.append("No stats received yet.")
    for stat in entries:
        lines.append(f"  {stat.title}: {stat.value}")
    return "\n".join(lines)


__all__ = ["HEADING", "build_dashboard"]
