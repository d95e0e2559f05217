"""
Build watcher - Lambda entry point.

Invoked by a CloudFormation custom resource: starts a CodeBuild project,
waits for it to finish and reports the outcome.
"""

import json
import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from pydantic import ValidationError

from build_watcher.core.aws import get_codebuild_client, get_logs_client
from build_watcher.core.config import get_settings
from build_watcher.core.logging_config import configure_logging
from build_watcher.jobs.diagnostics import DiagnosticsCollector
from build_watcher.jobs.poller import BackoffPolicy, StatusPoller
from build_watcher.jobs.service import CloudWatchLogService, CodeBuildJobService, JobClient
from build_watcher.lifecycle.handler import LifecycleHandler
from build_watcher.lifecycle.models import LifecycleEvent, LifecycleResponse

configure_logging()
logger = logging.getLogger(__name__)


@lru_cache
def get_lifecycle_handler() -> LifecycleHandler:
    """Handler wired to real AWS clients, reused across warm invocations."""
    settings = get_settings()
    job_service = CodeBuildJobService(get_codebuild_client())
    log_service = CloudWatchLogService(get_logs_client())
    return LifecycleHandler(
        job_client=JobClient(job_service),
        poller=StatusPoller(job_service, backoff=BackoffPolicy.from_settings(settings)),
        diagnostics=DiagnosticsCollector(job_service, log_service, tail_lines=settings.LOG_TAIL_LINES),
        settings=settings,
    )


def _remaining_seconds(context: Optional[Any]) -> float:
    if context is not None and hasattr(context, "get_remaining_time_in_millis"):
        return context.get_remaining_time_in_millis() / 1000.0
    return get_settings().DEFAULT_BUDGET_SECONDS


def handler(event: Dict[str, Any], context: Optional[Any] = None) -> Dict[str, Any]:
    """Lambda handler. Always returns a response dict."""
    logger.info(f"Event: {json.dumps(event, indent=2, default=str)}")
    raw = event if isinstance(event, dict) else {}
    is_delete = raw.get("RequestType") == "Delete"

    try:
        lifecycle_event = LifecycleEvent.model_validate(event)
    except ValidationError as e:
        token = raw.get("PhysicalResourceId") or raw.get("LogicalResourceId") or get_settings().APP_NAME
        if is_delete:
            # Nothing is deleted, so a malformed Delete cannot block stack rollback.
            logger.warning(f"Malformed Delete event acknowledged: {e}")
            return LifecycleResponse(physical_resource_id=token, success=True).to_provider_dict()
        logger.error(f"Invalid lifecycle event: {e}")
        return LifecycleResponse(
            physical_resource_id=token,
            success=False,
            reason=f"Invalid lifecycle event: {e}",
        ).to_provider_dict()

    try:
        lifecycle_handler = get_lifecycle_handler()
    except Exception as e:
        logger.exception("Failed to initialize AWS clients")
        return LifecycleResponse(
            physical_resource_id=(
                lifecycle_event.physical_resource_id or lifecycle_event.logical_resource_id
            ),
            success=is_delete,
            reason=None if is_delete else f"Failed to initialize AWS clients: {e}",
        ).to_provider_dict()

    response = lifecycle_handler.handle(lifecycle_event, _remaining_seconds(context))
    logger.info(f"Response: {json.dumps(response.to_provider_dict(), default=str)}")
    return response.to_provider_dict()
