"""Build job service: job client and the CodeBuild / CloudWatch Logs adapters."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

from botocore.exceptions import BotoCoreError, ClientError

from build_watcher.core.exceptions import StartFailed
from build_watcher.jobs.models import (
    JobDetails,
    JobHandle,
    JobPhase,
    JobStatus,
    LogLocation,
)

logger = logging.getLogger(__name__)


class JobService(Protocol):
    def start(self, job_target_id: str) -> Optional[str]: ...

    def get_status(self, handle: str) -> Optional[JobDetails]: ...


class LogService(Protocol):
    def fetch_tail(
        self, location: LogLocation, count: int, from_most_recent: bool = True
    ) -> List[str]: ...


class JobClient:
    """Starts a pre-configured job definition."""

    def __init__(self, job_service: JobService):
        self.job_service = job_service

    def start(self, job_target_id: str) -> JobHandle:
        try:
            job_id = self.job_service.start(job_target_id)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Start request for {job_target_id} rejected: {e}")
            raise StartFailed(str(e)) from e
        except Exception as e:
            logger.error(f"Start request for {job_target_id} failed: {e}")
            raise StartFailed(str(e) or e.__class__.__name__) from e

        job_id = (job_id or "").strip()
        if not job_id:
            raise StartFailed("no handle returned")

        logger.info(f"Started build {job_id} for project {job_target_id}")
        return JobHandle(job_id)


def _parse_build(build: Dict[str, Any]) -> JobDetails:
    logs = build.get("logs") or {}
    location = None
    if logs:
        location = LogLocation(
            group_name=logs.get("groupName"),
            stream_name=logs.get("streamName"),
            deep_link=logs.get("deepLink"),
        )
    phases = [
        JobPhase(
            phase_type=p.get("phaseType") or "UNKNOWN",
            phase_status=p.get("phaseStatus"),
            duration_seconds=p.get("durationInSeconds"),
        )
        for p in (build.get("phases") or [])
    ]
    raw_status = build.get("buildStatus")
    return JobDetails(
        job_id=build.get("id") or "",
        status=JobStatus.from_build_status(raw_status),
        raw_status=raw_status,
        current_phase=build.get("currentPhase"),
        phases=phases,
        start_time=build.get("startTime"),
        end_time=build.get("endTime"),
        log_location=location,
    )


class CodeBuildJobService:
    """JobService backed by AWS CodeBuild."""

    def __init__(self, client):
        self.client = client

    def start(self, job_target_id: str) -> Optional[str]:
        response = self.client.start_build(projectName=job_target_id)
        return (response.get("build") or {}).get("id")

    def get_status(self, handle: str) -> Optional[JobDetails]:
        response = self.client.batch_get_builds(ids=[handle])
        builds = response.get("builds") or []
        if not builds:
            if response.get("buildsNotFound"):
                logger.warning(f"CodeBuild reports build not found: {response['buildsNotFound']}")
            return None
        return _parse_build(builds[0])


class CloudWatchLogService:
    """LogService backed by CloudWatch Logs."""

    def __init__(self, client):
        self.client = client

    def fetch_tail(
        self, location: LogLocation, count: int, from_most_recent: bool = True
    ) -> List[str]:
        if not location.is_fetchable:
            return []
        # With startFromHead=False and a limit, GetLogEvents returns the newest
        # `limit` events in chronological order.
        response = self.client.get_log_events(
            logGroupName=location.group_name,
            logStreamName=location.stream_name,
            startFromHead=not from_most_recent,
            limit=count,
        )
        return [e.get("message") or "" for e in response.get("events") or []]
