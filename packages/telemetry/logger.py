"""``streamstats.*`` loggers, configured once from ``configs/logging.yaml``."""

from __future__ import annotations

import copy
import logging
import logging.config
from pathlib import Path
from threading import RLock
from typing import Any, Mapping

import yaml

ROOT_LOGGER = "streamstats"
CONFIG_PATH = Path(__file__).resolve().parents[2] / "configs" / "logging.yaml"

_LOCK = RLock()
_CONFIGURED = False

_FALLBACK: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {"standard": {"format": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"}},
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "formatter": "standard",
        }
    },
    "root": {"level": "WARNING", "handlers": ["console"]},
    "loggers": {ROOT_LOGGER: {"level": "INFO", "handlers": ["console"], "propagate": False}},
}

_SECTIONS = frozenset(_FALLBACK)


def _dict_config(path: Path) -> dict[str, Any]:
    config = copy.deepcopy(_FALLBACK)
    if not path.exists():
        return config
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logging.getLogger(ROOT_LOGGER).warning("ignoring unparsable %s: %s", path, exc)
        return config
    if isinstance(data, Mapping):
        config.update({key: value for key, value in data.items() if key in _SECTIONS})
    return config


def configure(path: str | Path | None = None, *, force: bool = False) -> None:
    """Apply the logging YAML at ``path`` (default ``configs/logging.yaml``).

    Later calls are no-ops unless ``force`` is set.
    """

    global _CONFIGURED
    with _LOCK:
        if _CONFIGURED and not force:
            return
        logging.config.dictConfig(_dict_config(Path(path) if path is not None else CONFIG_PATH))
        _CONFIGURED = True


def set_level(level: str | int) -> None:
    """Change the threshold of every ``streamstats`` logger."""

    configure()
    resolved = logging.getLevelName(level.upper()) if isinstance(level, str) else level
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level {level!r}")
    logging.getLogger(ROOT_LOGGER).setLevel(resolved)


def get_logger(name: str) -> logging.Logger:
    if not isinstance(name, str) or not name:
        raise ValueError("logger name must be a non-empty string")
    configure()
    return logging.getLogger(name)


__all__ = ["CONFIG_PATH", "ROOT_LOGGER", "configure", "get_logger", "set_level"]
