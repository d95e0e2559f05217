import pytest
from botocore.exceptions import ClientError

from build_watcher.core.exceptions import StartFailed
from build_watcher.jobs.service import JobClient

from tests.conftest import FakeJobService


def test_start_returns_handle():
    service = FakeJobService(handle="liquibase-runner:abcd")
    handle = JobClient(service).start("liquibase-runner")
    assert handle == "liquibase-runner:abcd"
    assert service.started == ["liquibase-runner"]


@pytest.mark.parametrize("handle", [None, "", "   "])
def test_start_without_handle_fails(handle):
    service = FakeJobService(handle=handle)
    with pytest.raises(StartFailed) as exc:
        JobClient(service).start("liquibase-runner")
    assert "no handle returned" in exc.value.detail


def test_rejected_start_fails_without_retry():
    error = ClientError(
        {"Error": {"Code": "ResourceNotFoundException", "Message": "Project cannot be found"}},
        "StartBuild",
    )
    service = FakeJobService(start_error=error)
    with pytest.raises(StartFailed) as exc:
        JobClient(service).start("missing-project")
    assert "Project cannot be found" in exc.value.detail
    assert service.started == ["missing-project"]


def test_non_boto_rejection_is_start_failed():
    service = FakeJobService(start_error=ConnectionError("job service unreachable"))
    with pytest.raises(StartFailed) as exc:
        JobClient(service).start("liquibase-runner")
    assert "job service unreachable" in exc.value.detail
    assert isinstance(exc.value.__cause__, ConnectionError)
