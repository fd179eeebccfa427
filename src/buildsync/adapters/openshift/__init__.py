"""Public interface for the OpenShift adapter."""

from __future__ import annotations

from .client import OpenShiftWatchSource, build_config_path
from .schema import BuildConfigListPayload, BuildConfigPayload, StatusPayload, WatchEventPayload
from .translator import parse_build_config, parse_build_config_list, parse_watch_event

__all__ = [
    "BuildConfigListPayload",
    "BuildConfigPayload",
    "OpenShiftWatchSource",
    "StatusPayload",
    "WatchEventPayload",
    "build_config_path",
    "parse_build_config",
    "parse_build_config_list",
    "parse_watch_event",
]
