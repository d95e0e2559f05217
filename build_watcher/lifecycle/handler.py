"""Lifecycle request handler: start a build, watch it, report the outcome."""

from __future__ import annotations

import logging
import time
from typing import Callable

from build_watcher.core.config import Settings
from build_watcher.core.exceptions import JobFailed, StartFailed, WatcherException
from build_watcher.jobs.diagnostics import DiagnosticsCollector, format_failure_reason
from build_watcher.jobs.models import Deadline, JobStatus
from build_watcher.jobs.poller import StatusPoller
from build_watcher.jobs.service import JobClient
from build_watcher.lifecycle.models import LifecycleEvent, LifecycleResponse

logger = logging.getLogger(__name__)


def resolve_identity_token(event: LifecycleEvent) -> str:
    """
    Physical resource id for the response.

    Minted from the logical id on Create and echoed afterwards. A changed id
    makes CloudFormation treat the resource as replaced.
    """
    if event.request_type == "Create":
        return event.logical_resource_id
    return event.physical_resource_id or event.logical_resource_id


class LifecycleHandler:
    """Maps lifecycle events onto one watched build invocation."""

    def __init__(
        self,
        job_client: JobClient,
        poller: StatusPoller,
        diagnostics: DiagnosticsCollector,
        settings: Settings,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.job_client = job_client
        self.poller = poller
        self.diagnostics = diagnostics
        self.settings = settings
        self.clock = clock

    def handle(self, event: LifecycleEvent, remaining_seconds: float) -> LifecycleResponse:
        token = resolve_identity_token(event)

        if event.request_type == "Delete":
            logger.info("Delete request received. No action required.")
            return LifecycleResponse(physical_resource_id=token, success=True)

        try:
            data = self._run_build(event, remaining_seconds)
        except JobFailed as e:
            logger.error(f"Error during build: {e.detail}")
            return LifecycleResponse(
                physical_resource_id=token,
                success=False,
                data={"BuildId": e.handle, "BuildStatus": e.status.value},
                reason=e.detail,
            )
        except WatcherException as e:
            logger.error(f"Error during build: {e.detail}")
            return LifecycleResponse(physical_resource_id=token, success=False, reason=e.detail)
        except Exception as e:
            logger.exception("Unexpected error during build")
            return LifecycleResponse(
                physical_resource_id=token,
                success=False,
                reason=str(e) or e.__class__.__name__,
            )

        return LifecycleResponse(physical_resource_id=token, success=True, data=data)

    def _run_build(self, event: LifecycleEvent, remaining_seconds: float) -> dict:
        # Checked before starting so no build is launched without time to watch it.
        deadline = Deadline.from_budget(
            remaining_seconds,
            self.settings.DEADLINE_SAFETY_MARGIN_SECONDS,
            self.settings.DEADLINE_FLOOR_SECONDS,
            clock=self.clock,
        )

        project_name = (event.resource_properties.project_name or "").strip()
        if not project_name:
            raise StartFailed("no ProjectName given")

        handle = self.job_client.start(project_name)
        status = self.poller.await_completion(handle, deadline)
        if status is not JobStatus.SUCCEEDED:
            summary = self.diagnostics.collect(handle)
            raise JobFailed(
                format_failure_reason(status.value, summary),
                status=status,
                handle=handle,
                diagnostics=summary,
            )

        logger.info(f"Build {handle} succeeded")
        return {"BuildId": handle, "BuildStatus": status.value}
