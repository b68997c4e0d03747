"""Stat categories and the gate deciding which of them are displayed."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping


class StatsSections(str, Enum):
    SESSION_STATS = "Session Stats"
    LATENCY_TEST = "Latency Test"
    DATA_CHANNEL_LATENCY_TEST = "Data Channel Latency Test"

    @classmethod
    def parse(cls, value: str) -> "StatsSections | None":
        """Resolve a section from its display name or member name."""

        text = str(value).strip()
        for section in cls:
            if text == section.value or text.upper() == section.name:
                return section
        return None


ALL_SECTIONS: frozenset[str] = frozenset(section.value for section in StatsSections)


@dataclass(slots=True, frozen=True)
class SectionConfig:
    """Set of enabled section names."""

    enabled: frozenset[str] = field(default_factory=lambda: ALL_SECTIONS)

    @classmethod
    def from_names(cls, names: Iterable[str] | None) -> "SectionConfig":
        if names is None:
            return cls()
        enabled: set[str] = set()
        for name in names:
            section = StatsSections.parse(name)
            enabled.add(section.value if section is not None else str(name))
        return cls(enabled=frozenset(enabled))

    @classmethod
    def from_flags(cls, flags: Mapping[str, Any]) -> "SectionConfig":
        """Build from ``{section: bool}`` flags; falsy flags are disabled."""

        return cls.from_names(name for name, flag in flags.items() if flag)

    def to_list(self) -> list[str]:
        ordered = [section.value for section in StatsSections if section.value in self.enabled]
        extras = sorted(self.enabled - ALL_SECTIONS)
        return ordered + extras


def is_section_enabled(config: SectionConfig, section: StatsSections | str) -> bool:
    name = section.value if isinstance(section, StatsSections) else str(section)
    return name in config.enabled


__all__ = ["ALL_SECTIONS", "SectionConfig", "StatsSections", "is_section_enabled"]
