"""Shared fakes: a controllable clock and in-memory job / log services."""

from typing import List, Optional

import pytest

from build_watcher.core.config import Settings
from build_watcher.jobs.diagnostics import DiagnosticsCollector
from build_watcher.jobs.models import JobDetails, JobPhase, JobStatus, LogLocation
from build_watcher.jobs.poller import BackoffPolicy, StatusPoller
from build_watcher.jobs.service import JobClient
from build_watcher.lifecycle.handler import LifecycleHandler


class FakeClock:
    """Monotonic clock that only moves when sleep() is called."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeJobService:
    """Returns scripted statuses; the last one repeats once the script runs out."""

    def __init__(
        self,
        statuses: Optional[List[JobStatus]] = None,
        handle: Optional[str] = "liquibase-runner:0001",
        log_location: Optional[LogLocation] = None,
        missing: bool = False,
        start_error: Optional[Exception] = None,
    ):
        self.statuses = list(statuses or [JobStatus.SUCCEEDED])
        self.handle = handle
        self.log_location = log_location
        self.missing = missing
        self.start_error = start_error
        self.started: List[str] = []
        self.status_queries: List[str] = []

    def start(self, job_target_id: str) -> Optional[str]:
        self.started.append(job_target_id)
        if self.start_error is not None:
            raise self.start_error
        return self.handle

    def get_status(self, handle: str) -> Optional[JobDetails]:
        self.status_queries.append(handle)
        if self.missing:
            return None
        index = min(len(self.status_queries), len(self.statuses)) - 1
        status = self.statuses[index]
        return JobDetails(
            job_id=handle,
            status=status,
            raw_status=status.value,
            phases=[JobPhase(phase_type="BUILD", phase_status=status.value, duration_seconds=42)],
            log_location=self.log_location,
        )


class FakeLogService:
    def __init__(self, lines: Optional[List[str]] = None, error: Optional[Exception] = None):
        self.lines = list(lines or [])
        self.error = error
        self.calls = []

    def fetch_tail(self, location: LogLocation, count: int, from_most_recent: bool = True) -> List[str]:
        self.calls.append((location, count, from_most_recent))
        if self.error is not None:
            raise self.error
        return self.lines[-count:] if from_most_recent else self.lines[:count]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    return Settings(
        POLL_BASE_SECONDS=5,
        POLL_INCREMENT_SECONDS=1,
        POLL_MAX_SECONDS=30,
        DEADLINE_SAFETY_MARGIN_SECONDS=30,
        DEADLINE_FLOOR_SECONDS=10,
        LOG_TAIL_LINES=10,
    )


@pytest.fixture
def log_location():
    return LogLocation(
        group_name="/aws/codebuild/liquibase-runner",
        stream_name="0001",
        deep_link="https://console.aws.amazon.com/cloudwatch/home#logEvent:group=/aws/codebuild/liquibase-runner",
    )


@pytest.fixture
def make_handler(clock, settings):
    """Build a LifecycleHandler around the given fakes."""

    def _make(job_service: FakeJobService, log_service: Optional[FakeLogService] = None):
        log_service = log_service or FakeLogService()
        poller = StatusPoller(
            job_service,
            backoff=BackoffPolicy.from_settings(settings),
            sleep=clock.sleep,
        )
        handler = LifecycleHandler(
            job_client=JobClient(job_service),
            poller=poller,
            diagnostics=DiagnosticsCollector(job_service, log_service, tail_lines=settings.LOG_TAIL_LINES),
            settings=settings,
            clock=clock,
        )
        return handler

    return _make
