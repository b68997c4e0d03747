"""Configuration bundle for the stats panel."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence

from packages.utils import config as config_loader

from .formatters import DEFAULT_LOCALE
from .sections import SectionConfig

DISABLE_LATENCY_TEST_TITLE = "Disabled by -PixelStreamingDisableLatencyTester=true"


def _deep_update(base: Mapping[str, Any], updates: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``updates`` recursively merged."""

    result: dict[str, Any] = {key: value for key, value in base.items()}
    for key, value in updates.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), Mapping):
            result[key] = _deep_update(result[key], value)
        else:
            result[key] = value
    return result


def _coerce_bool(value: Any, *, fallback: bool) -> bool:
    if value is None:
        return fallback
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off", ""}:
            return False
        raise ValueError(f"cannot interpret {value!r} as a boolean")
    return bool(value)


def _coerce_sections(value: Any) -> SectionConfig:
    if value is None:
        return SectionConfig()
    if isinstance(value, Mapping):
        return SectionConfig.from_flags(value)
    if isinstance(value, str):
        return SectionConfig.from_names([value])
    if isinstance(value, Sequence):
        return SectionConfig.from_names(str(item) for item in value)
    raise ValueError("sections must be a list of names or a mapping of flags")


@dataclass(slots=True)
class StreamSettings:
    """Startup switches reported by the streaming application."""

    disable_latency_test: bool = False


@dataclass(slots=True)
class PanelConfig:
    """Top-level stats panel configuration."""

    sections: SectionConfig = field(default_factory=SectionConfig)
    locale: str = DEFAULT_LOCALE
    byte_precision: int = 2
    stream: StreamSettings = field(default_factory=StreamSettings)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "PanelConfig":
        payload = dict(data or {})
        precision = payload.get("byte_precision", 2)
        try:
            byte_precision = int(precision)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"byte_precision must be an integer, received {precision!r}") from exc
        if byte_precision < 0:
            raise ValueError("byte_precision must be non-negative")
        stream_payload = payload.get("stream")
        stream_payload = stream_payload if isinstance(stream_payload, Mapping) else {}
        return cls(
            sections=_coerce_sections(payload.get("sections")),
            locale=str(payload.get("locale") or DEFAULT_LOCALE),
            byte_precision=byte_precision,
            stream=StreamSettings(
                disable_latency_test=_coerce_bool(
                    stream_payload.get("disable_latency_test"), fallback=False
                )
            ),
        )

    def merge(self, overrides: Mapping[str, Any] | None) -> "PanelConfig":
        if not overrides:
            return self
        return PanelConfig.from_mapping(_deep_update(self.to_dict(), overrides))

    def to_dict(self) -> dict[str, Any]:
        return {
            "sections": self.sections.to_list(),
            "locale": self.locale,
            "byte_precision": self.byte_precision,
            "stream": {"disable_latency_test": self.stream.disable_latency_test},
        }


def load_configuration(
    config_path: str | Path | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
) -> PanelConfig:
    """Return a :class:`PanelConfig` from ``config_path`` and overrides."""

    data: Mapping[str, Any] | None = None
    if config_path is not None:
        data = config_loader.load_config(config_path)
    return PanelConfig.from_mapping(data).merge(overrides)


__all__ = [
    "DISABLE_LATENCY_TEST_TITLE",
    "PanelConfig",
    "StreamSettings",
    "load_configuration",
]
