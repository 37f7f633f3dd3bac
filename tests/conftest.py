"""Shared pytest fixtures for s3-bootstrap tests."""

import io
import logging

import pytest

from s3_bootstrap.domain.artifact import DownloadedObject


class FakeCancellation:
    """In-memory stand-in for the cancellation coordinator."""

    def __init__(self) -> None:
        self.cancelled = False
        self.events: list[tuple[str, str | None]] = []

    def is_cancelled(self) -> bool:
        return self.cancelled

    def record_artifact(self, path: str) -> None:
        self.events.append(("recorded", path))

    def release_artifact(self) -> None:
        self.events.append(("released", None))


class FakeObjectRepository:
    """Object repository serving a fixed payload."""

    def __init__(self, content: bytes = b"", error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.requests: list[tuple[str, str]] = []
        self.downloads: list[DownloadedObject] = []

    def download(self, bucket: str, key: str) -> DownloadedObject:
        self.requests.append((bucket, key))
        if self.error is not None:
            raise self.error
        downloaded = DownloadedObject(io.BytesIO(self.content), content_length=len(self.content))
        self.downloads.append(downloaded)
        return downloaded


@pytest.fixture
def object_content() -> bytes:
    """Create a sample object payload.

    Returns:
        Script bytes as stored in S3
    """
    return b"#!/bin/sh\necho bootstrapped\n"


@pytest.fixture
def fake_cancellation() -> FakeCancellation:
    """Create a fake cancellation coordinator.

    Returns:
        FakeCancellation instance
    """
    return FakeCancellation()


@pytest.fixture
def fake_repository(object_content: bytes) -> FakeObjectRepository:
    """Create a repository serving the sample payload.

    Returns:
        FakeObjectRepository instance
    """
    return FakeObjectRepository(content=object_content)


@pytest.fixture(autouse=True)
def clean_bootstrap_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove environment variables that change configuration defaults."""
    for name in (
        "AWS_REGION",
        "AWS_DEFAULT_REGION",
        "AWS_PROFILE",
        "BOOTSTRAP_FETCH_TIMEOUT",
        "BOOTSTRAP_SHUTDOWN_DELAY",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_repository():
    """Return a factory for repositories with custom payloads or errors.

    Returns:
        FakeObjectRepository class
    """
    return FakeObjectRepository


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers bound to a test's captured stderr once the test ends."""
    yield
    logger = logging.getLogger("s3_bootstrap")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
