from unittest.mock import MagicMock, patch

from build_watcher.lifecycle.models import LifecycleResponse
from scripts import watch_build


def _run(argv, response):
    lifecycle_handler = MagicMock()
    lifecycle_handler.handle.return_value = response
    with patch.object(watch_build, "get_lifecycle_handler", return_value=lifecycle_handler):
        code = watch_build.main(argv)
    return code, lifecycle_handler


def test_success_exit_code(capsys):
    response = LifecycleResponse(physical_resource_id="ManualBuildWatch", success=True)
    code, lifecycle_handler = _run(["--project", "liquibase-runner", "--budget-seconds", "300"], response)

    event, budget = lifecycle_handler.handle.call_args.args
    assert code == 0
    assert event.request_type == "Create"
    assert event.resource_properties.project_name == "liquibase-runner"
    assert budget == 300
    assert '"Status": "SUCCESS"' in capsys.readouterr().out


def test_failure_exit_code():
    response = LifecycleResponse(
        physical_resource_id="ManualBuildWatch",
        success=False,
        reason="Build failed with status: FAILED, but logs are not available.",
    )
    code, _ = _run(["--project", "liquibase-runner"], response)
    assert code == 1
