"""Build job models."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, List, NewType, Optional

from pydantic import BaseModel, Field

from build_watcher.core.exceptions import WatcherTimeout


JobHandle = NewType("JobHandle", str)


class JobStatus(str, Enum):
    PENDING = "PENDING"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    STOPPED = "STOPPED"
    TIMED_OUT = "TIMED_OUT"
    UNKNOWN = "UNKNOWN"

    @property
    def is_terminal(self) -> bool:
        return self not in (JobStatus.PENDING, JobStatus.RUNNING)

    @classmethod
    def from_build_status(cls, value: Optional[str]) -> "JobStatus":
        """Map a CodeBuild ``buildStatus`` to a JobStatus."""
        if not value:
            # Queued builds have no status yet.
            return cls.PENDING
        return _BUILD_STATUS_MAP.get(value.upper(), cls.UNKNOWN)


_BUILD_STATUS_MAP = {
    "IN_PROGRESS": JobStatus.RUNNING,
    "SUCCEEDED": JobStatus.SUCCEEDED,
    "FAILED": JobStatus.FAILED,
    "FAULT": JobStatus.FAILED,
    "STOPPED": JobStatus.STOPPED,
    "TIMED_OUT": JobStatus.TIMED_OUT,
}


class LogLocation(BaseModel):
    group_name: Optional[str] = None
    stream_name: Optional[str] = None
    deep_link: Optional[str] = None

    @property
    def is_fetchable(self) -> bool:
        return bool(self.group_name and self.stream_name)


class JobPhase(BaseModel):
    phase_type: str
    phase_status: Optional[str] = None
    duration_seconds: Optional[int] = None


class JobDetails(BaseModel):
    """Status snapshot for one build."""

    job_id: str
    status: JobStatus
    raw_status: Optional[str] = None
    current_phase: Optional[str] = None
    phases: List[JobPhase] = Field(default_factory=list)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    log_location: Optional[LogLocation] = None


class DiagnosticSummary(BaseModel):
    """Best-effort context attached to a failed build."""

    details: Optional[JobDetails] = None
    log_lines: List[str] = Field(default_factory=list)
    note: Optional[str] = None

    @property
    def logs_available(self) -> bool:
        return bool(self.log_lines)


@dataclass(frozen=True)
class PollAttempt:
    """A status query and the wait chosen before it."""

    number: int
    wait_seconds: float


@dataclass(frozen=True)
class Deadline:
    """Absolute point on a monotonic clock after which polling must stop."""

    started_at: float
    expires_at: float
    clock: Callable[[], float] = time.monotonic

    @classmethod
    def from_budget(
        cls,
        budget_seconds: float,
        safety_margin_seconds: float,
        floor_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> "Deadline":
        """
        Derive a deadline from the caller's remaining budget.

        Raises WatcherTimeout when the window left after the safety margin
        does not exceed the floor.
        """
        now = clock()
        window = budget_seconds - safety_margin_seconds
        if window <= floor_seconds:
            raise WatcherTimeout(
                f"Insufficient time to watch build: {max(window, 0):.1f}s available, "
                f"at least {floor_seconds:.1f}s required"
            )
        return cls(started_at=now, expires_at=now + window, clock=clock)

    @property
    def budget_seconds(self) -> float:
        return self.expires_at - self.started_at

    def elapsed(self) -> float:
        return self.clock() - self.started_at

    def remaining(self) -> float:
        return self.expires_at - self.clock()
