#!/usr/bin/env python3
"""
Service coordinating the bootstrap lifecycle.

Sequences locator parsing, download, write, optional execution and optional
shutdown, and turns their outcomes into a process exit status.
"""

import logging
import sys
from dataclasses import dataclass
from typing import BinaryIO, Callable, Optional, Protocol

from s3_bootstrap.domain.artifact import (
    DownloadedObject,
    ExecutionOutcome,
    PostExecAction,
    SaveTarget,
    TargetFile,
)
from s3_bootstrap.domain.errors import (
    BootstrapError,
    ExecutionError,
    LocatorError,
    ShutdownError,
    UsageError,
)
from s3_bootstrap.domain.locator import Locator

__version__ = "0.1.0"
__author__ = "John Ayers"

logger = logging.getLogger(__name__)

CANCELLED_EXIT_CODE = 1


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "bootstrap_service",
        "description": "Service coordinating the bootstrap lifecycle",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


class ObjectRepository(Protocol):
    """Protocol defining interface for fetching objects.

    Infrastructure layer must implement this protocol.
    """

    def download(self, bucket: str, key: str) -> DownloadedObject:
        """Open a stream over an object.

        Args:
            bucket: Bucket name
            key: Object key

        Returns:
            DownloadedObject owning the stream
        """
        ...


class ArtifactWriterPort(Protocol):
    """Protocol for persisting and discarding artifacts."""

    def write(
        self,
        source: BinaryIO,
        target: SaveTarget,
        on_created: Optional[Callable[[TargetFile], None]] = None,
    ) -> TargetFile:
        ...

    def discard(self, path: str) -> bool:
        ...


class ArtifactExecutor(Protocol):
    """Protocol for running artifacts."""

    def execute(self, path: str) -> ExecutionOutcome:
        ...


class Shutdown(Protocol):
    """Protocol for a one-shot host shutdown."""

    def fire(self) -> None:
        ...


class Cancellation(Protocol):
    """Protocol for the interrupt listener shared with the main flow."""

    def is_cancelled(self) -> bool:
        ...

    def record_artifact(self, path: str) -> None:
        ...

    def release_artifact(self) -> None:
        ...


@dataclass(frozen=True)
class BootstrapRequest:
    """Parameters of a single bootstrap run.

    Attributes:
        locator: s3:// URL of the artifact
        save_path: Explicit destination path (None for a temporary file)
        execute: Whether to run the artifact after writing it
        post_exec: Action to take after execution
        debug: Print the shutdown command instead of running it
        shutdown_delay: Seconds to wait before shutting down
    """

    locator: str
    save_path: Optional[str] = None
    execute: bool = False
    post_exec: Optional[PostExecAction] = None
    debug: bool = False
    shutdown_delay: float = 20.0


@dataclass(frozen=True)
class BootstrapResult:
    """Outcome of a bootstrap run.

    Attributes:
        exit_code: Process exit status
        target: File that was written, if any
        execution: Execution outcome, if the artifact was run
    """

    exit_code: int
    target: Optional[TargetFile] = None
    execution: Optional[ExecutionOutcome] = None


def validate_request(request: BootstrapRequest) -> None:
    """Reject flag combinations that make no sense before any I/O happens.

    Args:
        request: Bootstrap request

    Raises:
        UsageError: If a post-exec action is set without execution
    """
    if request.post_exec is not None and not request.execute:
        raise UsageError("--post-exec can only be used with --exec")
    if request.shutdown_delay < 0:
        raise UsageError("shutdown delay must not be negative")


class BootstrapService:
    """Application service for the download-write-execute-shutdown lifecycle."""

    def __init__(
        self,
        repository_factory: Callable[[], ObjectRepository],
        writer: ArtifactWriterPort,
        executor: ArtifactExecutor,
        shutdown_factory: Callable[[float, bool], Shutdown],
        cancellation: Cancellation,
    ) -> None:
        """Initialize the bootstrap service.

        Args:
            repository_factory: Builds the object repository; may raise ConfigError
            writer: Persists the downloaded object
            executor: Runs the written artifact
            shutdown_factory: Builds a shutdown from (delay, debug)
            cancellation: Interrupt listener tracking the temporary artifact
        """
        self._repository_factory = repository_factory
        self._writer = writer
        self._executor = executor
        self._shutdown_factory = shutdown_factory
        self._cancellation = cancellation

    def _on_created(self, target_file: TargetFile) -> None:
        if target_file.is_temporary:
            self._cancellation.record_artifact(target_file.path)

    def download(self, locator: Locator, save_path: Optional[str] = None) -> TargetFile:
        """Fetch an object and write it to disk.

        The object stream is closed on every exit path.

        Args:
            locator: Object to fetch
            save_path: Explicit destination, or None for a temporary file

        Returns:
            TargetFile that was written

        Raises:
            ConfigError: If AWS configuration is unavailable
            FetchError: If the object cannot be fetched
            WriteError: If the object cannot be written
        """
        repository = self._repository_factory()

        with repository.download(locator.bucket, locator.key) as downloaded:
            logger.debug(
                f"Streaming {locator} ({downloaded.content_length or 'unknown'} bytes)"
            )
            target = SaveTarget(save_path=save_path, name_hint=locator.basename)
            return self._writer.write(downloaded, target, on_created=self._on_created)

    def execute(self, target_file: TargetFile) -> ExecutionOutcome:
        """Run the written artifact, recording rather than raising failures.

        A temporary artifact is removed once the child exits.

        Args:
            target_file: Artifact to run

        Returns:
            ExecutionOutcome of the run
        """
        try:
            return self._executor.execute(target_file.path)
        except ExecutionError as e:
            logger.error(f"Error executing file: {e}")
            return ExecutionOutcome(exit_code=e.child_exit_code, error=str(e))
        finally:
            if target_file.is_temporary:
                self._writer.discard(target_file.path)
                self._cancellation.release_artifact()

    def shutdown(self, delay: float, debug: bool) -> int:
        """Announce and perform the host shutdown.

        Args:
            delay: Seconds to wait
            debug: Print the command instead of running it

        Returns:
            0 on success, 1 if the shutdown failed
        """
        print(f"System will shutdown in {delay:g} seconds...")
        sys.stdout.flush()

        try:
            self._shutdown_factory(delay, debug).fire()
        except ShutdownError as e:
            logger.error(f"Error initiating shutdown: {e}")
            return e.exit_code
        return 0

    def run(self, request: BootstrapRequest) -> BootstrapResult:
        """Run the full bootstrap lifecycle.

        Args:
            request: Bootstrap request

        Returns:
            BootstrapResult with the exit status to report
        """
        try:
            validate_request(request)
        except UsageError as e:
            logger.error(f"Error: {e}")
            return BootstrapResult(exit_code=e.exit_code)

        try:
            locator = Locator.parse(request.locator)
        except LocatorError as e:
            logger.error(f"Error parsing S3 URL: {e}")
            return BootstrapResult(exit_code=e.exit_code)

        logger.info(f"Downloading {locator}")

        try:
            target_file = self.download(locator, request.save_path)
        except BootstrapError as e:
            logger.error(str(e))
            return BootstrapResult(exit_code=e.exit_code)

        if self._cancellation.is_cancelled():
            return BootstrapResult(exit_code=CANCELLED_EXIT_CODE, target=target_file)

        if not request.execute:
            print(target_file.path)
            return BootstrapResult(exit_code=0, target=target_file)

        outcome = self.execute(target_file)
        exit_code = 0 if outcome.succeeded else 1

        if self._cancellation.is_cancelled():
            return BootstrapResult(
                exit_code=CANCELLED_EXIT_CODE, target=target_file, execution=outcome
            )

        if request.post_exec is PostExecAction.SHUTDOWN:
            shutdown_status = self.shutdown(request.shutdown_delay, request.debug)
            if exit_code == 0:
                exit_code = shutdown_status

        return BootstrapResult(exit_code=exit_code, target=target_file, execution=outcome)


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
