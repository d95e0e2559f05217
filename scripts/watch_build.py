#!/usr/bin/env python3
"""
Start a CodeBuild project and watch it, the same way the custom resource does.

Usage:
    python -m scripts.watch_build --project my-liquibase-runner

    # Watch with a shorter budget
    python -m scripts.watch_build --project my-liquibase-runner --budget-seconds 300

Exit codes:
    0 - Build succeeded
    1 - Build failed, timed out or could not be started
"""

import argparse
import json
import logging
import os
import sys

# Make build_watcher importable when run from scripts/ or repo root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from build_watcher.core.config import get_settings
from build_watcher.core.logging_config import configure_logging
from build_watcher.lifecycle.models import LifecycleEvent
from build_watcher.main import get_lifecycle_handler

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Start a CodeBuild project and wait for it.")
    parser.add_argument("--project", required=True, help="CodeBuild project name")
    parser.add_argument(
        "--budget-seconds",
        type=float,
        default=None,
        help="Total time budget (default: DEFAULT_BUDGET_SECONDS)",
    )
    parser.add_argument("--resource-id", default="ManualBuildWatch", help="Logical resource id")
    args = parser.parse_args(argv)

    configure_logging()
    settings = get_settings()
    budget = args.budget_seconds if args.budget_seconds is not None else settings.DEFAULT_BUDGET_SECONDS

    event = LifecycleEvent.model_validate(
        {
            "RequestType": "Create",
            "LogicalResourceId": args.resource_id,
            "ResourceProperties": {"ProjectName": args.project},
        }
    )
    logger.info(f"Watching project {args.project} with a {budget:.0f}s budget")
    response = get_lifecycle_handler().handle(event, budget)

    print(json.dumps(response.to_provider_dict(), indent=2, default=str))
    return 0 if response.success else 1


if __name__ == "__main__":
    sys.exit(main())
