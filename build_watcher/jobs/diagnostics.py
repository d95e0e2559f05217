"""Failure diagnostics for builds that did not succeed."""

from __future__ import annotations

import json
import logging
from typing import Optional

from build_watcher.core.exceptions import DiagnosticsUnavailable
from build_watcher.jobs.models import DiagnosticSummary, JobDetails, JobHandle
from build_watcher.jobs.service import JobService, LogService

logger = logging.getLogger(__name__)


class DiagnosticsCollector:
    """
    Gathers build metadata and the tail of the build log.

    Best-effort: collect() never raises. Failures are logged and leave a
    partial summary with a note.
    """

    def __init__(self, job_service: JobService, log_service: LogService, tail_lines: int = 10):
        self.job_service = job_service
        self.log_service = log_service
        self.tail_lines = tail_lines

    def collect(self, handle: JobHandle) -> DiagnosticSummary:
        summary = DiagnosticSummary()
        try:
            summary.details = self._fetch_details(handle)
            summary.log_lines = self._fetch_log_tail(summary.details)
        except DiagnosticsUnavailable as e:
            logger.warning(f"Diagnostics unavailable for build {handle}: {e.detail}")
            summary.note = e.detail
        except Exception as e:
            logger.warning(f"Diagnostics unavailable for build {handle}: {e}", exc_info=True)
            summary.note = f"diagnostics unavailable: {e}"
        return summary

    def _fetch_details(self, handle: JobHandle) -> JobDetails:
        details = self.job_service.get_status(handle)
        if details is None:
            raise DiagnosticsUnavailable(f"diagnostics unavailable: build {handle} not found")

        logger.info(f"Build details: {json.dumps(details.model_dump(mode='json'), indent=2)}")
        location = details.log_location
        if location and location.deep_link:
            logger.info(f"Build logs available at: {location.deep_link}")
        return details

    def _fetch_log_tail(self, details: JobDetails) -> list[str]:
        location = details.log_location
        if not (location and location.is_fetchable):
            return []

        raw = self.log_service.fetch_tail(location, self.tail_lines, from_most_recent=True)
        lines = [line.rstrip() for line in raw if line and line.strip()]
        return lines[-self.tail_lines:] if self.tail_lines > 0 else []


def format_failure_reason(status_value: str, summary: Optional[DiagnosticSummary]) -> str:
    """Human-readable reason for a build that ended without success."""
    if summary is not None and summary.note:
        return f"Build failed with status: {status_value} ({summary.note})"
    if summary is not None and summary.logs_available:
        lines = "\n".join(summary.log_lines)
        return f"Build failed with status: {status_value}\nLast {len(summary.log_lines)} build logs:\n{lines}"
    return f"Build failed with status: {status_value}, but logs are not available."
