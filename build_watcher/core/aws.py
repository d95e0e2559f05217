"""AWS client factories."""

import boto3
from botocore.config import Config

from build_watcher.core.config import Settings, get_settings


def client_config(settings: Settings) -> Config:
    """
    Timeouts and retries for every SDK call.

    Worst case for one call is (connect + read) * attempts, which must stay
    below DEADLINE_SAFETY_MARGIN_SECONDS so a call made at the deadline still
    leaves time to respond. The poller owns backoff between status queries.
    """
    return Config(
        connect_timeout=settings.AWS_CONNECT_TIMEOUT_SECONDS,
        read_timeout=settings.AWS_READ_TIMEOUT_SECONDS,
        retries={"max_attempts": settings.AWS_MAX_ATTEMPTS, "mode": "standard"},
    )


def _client(service: str):
    settings = get_settings()
    kwargs = {"config": client_config(settings)}
    region = (settings.AWS_REGION or "").strip()
    if region:
        kwargs["region_name"] = region
    return boto3.client(service, **kwargs)


def get_codebuild_client():
    """Get boto3 CodeBuild client."""
    return _client("codebuild")


def get_logs_client():
    """Get boto3 CloudWatch Logs client."""
    return _client("logs")
