"""Lifecycle events from the provisioning system."""

from build_watcher.lifecycle.handler import LifecycleHandler, resolve_identity_token
from build_watcher.lifecycle.models import LifecycleEvent, LifecycleResponse

__all__ = [
    "LifecycleHandler",
    "resolve_identity_token",
    "LifecycleEvent",
    "LifecycleResponse",
]
