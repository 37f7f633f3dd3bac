"""Unit tests for BootstrapService."""

import io
import logging
from pathlib import Path
from unittest.mock import Mock

import pytest

from s3_bootstrap.application.bootstrap_service import (
    BootstrapRequest,
    BootstrapService,
    validate_request,
)
from s3_bootstrap.domain.artifact import DownloadedObject, ExecutionOutcome, PostExecAction
from s3_bootstrap.domain.errors import (
    ConfigError,
    ExecutionError,
    FetchError,
    ShutdownError,
    UsageError,
)
from s3_bootstrap.infrastructure.artifact_writer import ArtifactWriter

LOCATOR = "s3://my-bucket/path/to/setup.sh"


class BrokenBody(io.BytesIO):
    """Object body that fails mid-stream."""

    def read(self, size: int = -1) -> bytes:
        raise ConnectionResetError("connection reset by peer")


@pytest.fixture
def executor() -> Mock:
    executor = Mock()
    executor.execute.return_value = ExecutionOutcome(exit_code=0)
    return executor


@pytest.fixture
def shutdown() -> Mock:
    return Mock()


@pytest.fixture
def shutdown_factory(shutdown: Mock) -> Mock:
    return Mock(return_value=shutdown)


@pytest.fixture
def make_service(tmp_path: Path, executor, shutdown_factory, fake_cancellation, fake_repository):
    """Build a service around a real writer in tmp_path and fake collaborators."""

    def _make(repository=fake_repository, repository_factory=None) -> BootstrapService:
        return BootstrapService(
            repository_factory=repository_factory or (lambda: repository),
            writer=ArtifactWriter(temp_dir=str(tmp_path)),
            executor=executor,
            shutdown_factory=shutdown_factory,
            cancellation=fake_cancellation,
        )

    return _make


def test_validate_request_post_exec_requires_exec() -> None:
    """Test that --post-exec without --exec is a usage error."""
    with pytest.raises(UsageError) as exc_info:
        validate_request(BootstrapRequest(locator=LOCATOR, post_exec=PostExecAction.SHUTDOWN))

    assert "--post-exec can only be used with --exec" in str(exc_info.value)


def test_download_only_prints_path(
    make_service, fake_repository, fake_cancellation, object_content, capsys, tmp_path
) -> None:
    """Test that without --exec the temporary path is printed and kept."""
    result = make_service().run(BootstrapRequest(locator=LOCATOR))

    assert result.exit_code == 0
    assert result.target is not None
    assert result.target.is_temporary is True
    assert Path(result.target.path).read_bytes() == object_content
    assert capsys.readouterr().out == f"{result.target.path}\n"
    assert fake_repository.requests == [("my-bucket", "path/to/setup.sh")]
    assert fake_repository.downloads[0].closed is True
    assert fake_cancellation.events == [("recorded", result.target.path)]


def test_save_path_is_not_recorded_for_cleanup(
    make_service, fake_cancellation, capsys, tmp_path
) -> None:
    """Test that explicit save paths are never cleanup candidates."""
    save_path = tmp_path / "opt" / "agent" / "setup.sh"

    result = make_service().run(BootstrapRequest(locator=LOCATOR, save_path=str(save_path)))

    assert result.exit_code == 0
    assert result.target.is_temporary is False
    assert save_path.exists()
    assert capsys.readouterr().out.strip() == str(save_path)
    assert fake_cancellation.events == []


def test_usage_error_happens_before_fetch(make_service, fake_repository) -> None:
    """Test that invalid flag combinations never reach the network."""
    factory = Mock(return_value=fake_repository)
    service = make_service(repository_factory=factory)

    result = service.run(
        BootstrapRequest(locator=LOCATOR, post_exec=PostExecAction.SHUTDOWN)
    )

    assert result.exit_code == 1
    factory.assert_not_called()


def test_bad_locator(make_service, fake_repository, caplog) -> None:
    """Test that an unsupported scheme fails before fetching."""
    factory = Mock(return_value=fake_repository)
    service = make_service(repository_factory=factory)

    with caplog.at_level(logging.ERROR):
        result = service.run(BootstrapRequest(locator="http://my-bucket/file.txt"))

    assert result.exit_code == 1
    assert "Error parsing S3 URL: not an S3 URL" in caplog.text
    factory.assert_not_called()


def test_config_error(make_service, caplog) -> None:
    """Test that missing credentials are fatal."""
    factory = Mock(side_effect=ConfigError("Unable to load AWS config: no credentials found"))

    with caplog.at_level(logging.ERROR):
        result = make_service(repository_factory=factory).run(BootstrapRequest(locator=LOCATOR))

    assert result.exit_code == 1
    assert "no credentials found" in caplog.text


def test_fetch_error_creates_no_file(make_service, make_repository, tmp_path, capsys) -> None:
    """Test that a missing key fails without writing anything."""
    repository = make_repository(error=FetchError("error getting object from S3: NoSuchKey"))

    result = make_service(repository=repository).run(BootstrapRequest(locator=LOCATOR))

    assert result.exit_code == 1
    assert result.target is None
    assert list(tmp_path.iterdir()) == []
    assert capsys.readouterr().out == ""


def test_copy_error_closes_stream_and_keeps_partial_file(
    make_service, make_repository, executor, tmp_path
) -> None:
    """Test that the stream is released when writing fails."""
    repository = make_repository()
    broken = BrokenBody()
    repository.download = Mock(return_value=DownloadedObject(broken))

    result = make_service(repository=repository).run(
        BootstrapRequest(locator=LOCATOR, execute=True)
    )

    assert result.exit_code == 1
    assert broken.closed is True
    assert len(list(tmp_path.iterdir())) == 1
    executor.execute.assert_not_called()


def test_execute_removes_temporary_artifact(
    make_service, executor, fake_cancellation, shutdown_factory
) -> None:
    """Test that a temporary artifact is run and then removed."""
    result = make_service().run(BootstrapRequest(locator=LOCATOR, execute=True))

    assert result.exit_code == 0
    executor.execute.assert_called_once_with(result.target.path)
    assert not Path(result.target.path).exists()
    assert fake_cancellation.events == [
        ("recorded", result.target.path),
        ("released", None),
    ]
    shutdown_factory.assert_not_called()


def test_execute_keeps_saved_artifact(make_service, executor, tmp_path) -> None:
    """Test that explicitly saved artifacts survive execution."""
    save_path = tmp_path / "setup.sh"

    result = make_service().run(
        BootstrapRequest(locator=LOCATOR, save_path=str(save_path), execute=True)
    )

    assert result.exit_code == 0
    assert save_path.exists()


def test_execution_failure_is_recorded(make_service, executor, caplog) -> None:
    """Test that a failing artifact sets exit status 1 and is still removed."""
    executor.execute.side_effect = ExecutionError("setup.sh exited with status 2", exit_code=2)

    with caplog.at_level(logging.ERROR):
        result = make_service().run(BootstrapRequest(locator=LOCATOR, execute=True))

    assert result.exit_code == 1
    assert result.execution == ExecutionOutcome(
        exit_code=2, error="setup.sh exited with status 2"
    )
    assert not Path(result.target.path).exists()
    assert "Error executing file" in caplog.text


def test_shutdown_after_execution(make_service, shutdown_factory, shutdown, capsys) -> None:
    """Test that shutdown is announced and fired after execution."""
    request = BootstrapRequest(
        locator=LOCATOR,
        execute=True,
        post_exec=PostExecAction.SHUTDOWN,
        debug=True,
        shutdown_delay=20,
    )

    result = make_service().run(request)

    assert result.exit_code == 0
    assert "System will shutdown in 20 seconds..." in capsys.readouterr().out
    shutdown_factory.assert_called_once_with(20, True)
    shutdown.fire.assert_called_once()


def test_shutdown_runs_after_failed_execution(make_service, executor, shutdown) -> None:
    """Test that execution failure neither skips shutdown nor gets downgraded."""
    executor.execute.side_effect = ExecutionError("could not start setup.sh")
    request = BootstrapRequest(locator=LOCATOR, execute=True, post_exec=PostExecAction.SHUTDOWN)

    result = make_service().run(request)

    assert result.exit_code == 1
    shutdown.fire.assert_called_once()


def test_shutdown_failure_sets_exit_status(make_service, shutdown, caplog) -> None:
    """Test that a failed shutdown makes an otherwise clean run fail."""
    shutdown.fire.side_effect = ShutdownError("sudo shutdown -h now exited with status 1")
    request = BootstrapRequest(locator=LOCATOR, execute=True, post_exec=PostExecAction.SHUTDOWN)

    with caplog.at_level(logging.ERROR):
        result = make_service().run(request)

    assert result.exit_code == 1
    assert "Error initiating shutdown" in caplog.text


def test_cancelled_run_stops_before_execution(make_service, executor, fake_cancellation) -> None:
    """Test that no further steps run once an interrupt was received."""
    fake_cancellation.cancelled = True

    result = make_service().run(BootstrapRequest(locator=LOCATOR, execute=True))

    assert result.exit_code == 1
    executor.execute.assert_not_called()
