"""
Watcher exceptions.
"""

from typing import Any, Optional


class WatcherException(Exception):
    """Base watcher exception."""
    
    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class StartFailed(WatcherException):
    """The job service rejected the start request or returned no handle."""
    
    def __init__(self, detail: str = "no handle returned"):
        super().__init__(detail=f"Failed to start build: {detail}")


class HandleNotFound(WatcherException):
    """A status query found no record for the handle."""
    
    def __init__(self, handle: str):
        super().__init__(detail=f"Build {handle} not found")
        self.handle = handle


class WatcherTimeout(WatcherException):
    """The deadline elapsed while the job was still running."""
    
    def __init__(self, detail: str = "Timed out waiting for build to finish"):
        super().__init__(detail=detail)


class JobFailed(WatcherException):
    """The job reached a terminal status other than success."""
    
    def __init__(
        self,
        detail: str,
        status: Any,
        handle: Optional[str] = None,
        diagnostics: Optional[Any] = None,
    ):
        super().__init__(detail=detail)
        self.status = status
        self.handle = handle
        self.diagnostics = diagnostics


class DiagnosticsUnavailable(WatcherException):
    """Metadata or log retrieval failed. Never leaves the collector."""
    
    def __init__(self, detail: str = "diagnostics unavailable"):
        super().__init__(detail=detail)
