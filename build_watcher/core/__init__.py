"""Core module - config, AWS clients, exceptions, logging."""

from build_watcher.core.config import get_settings, Settings
from build_watcher.core.exceptions import (
    WatcherException,
    StartFailed,
    HandleNotFound,
    WatcherTimeout,
    JobFailed,
    DiagnosticsUnavailable,
)

__all__ = [
    "get_settings",
    "Settings",
    "WatcherException",
    "StartFailed",
    "HandleNotFound",
    "WatcherTimeout",
    "JobFailed",
    "DiagnosticsUnavailable",
]
