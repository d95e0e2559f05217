"""Status poller with linear backoff, bounded by a deadline."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterator, List, Tuple

from build_watcher.core.config import Settings
from build_watcher.core.exceptions import HandleNotFound, WatcherTimeout
from build_watcher.jobs.models import Deadline, JobHandle, JobStatus, PollAttempt
from build_watcher.jobs.service import JobService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackoffPolicy:
    """Wait between status queries: base, +increment per attempt, capped."""

    base_seconds: float = 5.0
    increment_seconds: float = 1.0
    max_seconds: float = 30.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "BackoffPolicy":
        return cls(
            base_seconds=settings.POLL_BASE_SECONDS,
            increment_seconds=settings.POLL_INCREMENT_SECONDS,
            max_seconds=settings.POLL_MAX_SECONDS,
        )

    def interval(self, attempt: int) -> float:
        """Wait after the given 1-indexed attempt."""
        step = max(attempt - 1, 0) * max(self.increment_seconds, 0.0)
        return min(self.base_seconds + step, self.max_seconds)

    def intervals(self) -> Iterator[float]:
        attempt = 1
        while True:
            yield self.interval(attempt)
            attempt += 1


@dataclass(frozen=True)
class PollResult:
    """Terminal status plus the attempts made to observe it."""

    status: JobStatus
    attempts: Tuple[PollAttempt, ...]

    @property
    def waits(self) -> List[float]:
        return [a.wait_seconds for a in self.attempts[1:]]


class StatusPoller:
    """Queries a build until it is terminal or the deadline passes."""

    def __init__(
        self,
        job_service: JobService,
        backoff: BackoffPolicy = BackoffPolicy(),
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.job_service = job_service
        self.backoff = backoff
        self.sleep = sleep

    def await_completion(self, handle: JobHandle, deadline: Deadline) -> JobStatus:
        """
        Return the terminal status of the build.

        Terminal statuses other than SUCCEEDED are returned, not raised.
        Raises HandleNotFound if the build disappears and WatcherTimeout if the
        deadline is reached first. The build itself is never stopped.
        """
        return self.poll(handle, deadline).status

    def poll(self, handle: JobHandle, deadline: Deadline) -> PollResult:
        attempts = [PollAttempt(number=1, wait_seconds=0.0)]
        intervals = self.backoff.intervals()

        while True:
            attempt = attempts[-1].number
            details = self.job_service.get_status(handle)
            if details is None:
                raise HandleNotFound(handle)

            logger.info(
                f"Build {handle} status: {details.raw_status or details.status.value} "
                f"(attempt {attempt}, {deadline.elapsed():.1f}s elapsed)"
            )
            if details.status.is_terminal:
                return PollResult(status=details.status, attempts=tuple(attempts))

            remaining = deadline.remaining()
            if remaining <= 0:
                logger.warning(
                    f"Gave up on build {handle} after {deadline.elapsed():.1f}s; "
                    f"it is still {details.status.value} and keeps running"
                )
                raise WatcherTimeout(
                    f"Timed out after {deadline.budget_seconds:.0f}s waiting for build "
                    f"{handle} (last status: {details.status.value}). "
                    f"The build was not stopped."
                )

            # Clamp the last wait so one final check lands on the deadline.
            wait = min(next(intervals), remaining)
            attempts.append(PollAttempt(number=attempt + 1, wait_seconds=wait))
            self.sleep(wait)
