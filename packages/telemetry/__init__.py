"""Logging, hooks, render sinks and text dashboards for the stats panel."""

from . import dashboards, exporters, hooks, logger

__all__ = [
    "dashboards",
    "exporters",
    "hooks",
    "logger",
]
