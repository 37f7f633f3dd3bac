#!/usr/bin/env python3
"""
Domain models for downloaded artifacts.

Tracks the object stream fetched from S3, where it is written on disk, and
the outcome of running it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Optional

from s3_bootstrap.domain.errors import UsageError

__version__ = "0.1.0"
__author__ = "John Ayers"

EXECUTABLE_MODE = 0o755


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "artifact",
        "description": "Domain models for downloaded artifacts",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


class PostExecAction(Enum):
    """Actions that may follow execution of the artifact."""

    SHUTDOWN = "shutdown"

    @classmethod
    def from_flag(cls, value: Optional[str]) -> Optional["PostExecAction"]:
        """Convert a --post-exec flag value into an action.

        Args:
            value: Raw flag value, or None when the flag was not given

        Returns:
            Matching PostExecAction, or None when no action was requested

        Raises:
            UsageError: If the value is not a supported action
        """
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(action.value for action in cls)
            raise UsageError(f"invalid --post-exec value. Valid values: {valid}") from None


@dataclass(frozen=True)
class SaveTarget:
    """Where the downloaded object should be written.

    Attributes:
        save_path: Explicit destination path, or None to use a temporary file
        name_hint: Base name used to label a generated temporary file
    """

    save_path: Optional[str] = None
    name_hint: str = ""

    @property
    def is_temporary(self) -> bool:
        """True when a temporary path will be generated."""
        return self.save_path is None


@dataclass(frozen=True)
class TargetFile:
    """A file written to disk from a downloaded object.

    Attributes:
        path: Absolute or caller-supplied destination path
        is_temporary: Whether the path was generated by the writer
    """

    path: str
    is_temporary: bool


class DownloadedObject:
    """Exclusively owned stream over an S3 object body.

    The body is closed at most once, either explicitly or on leaving a
    ``with`` block.
    """

    def __init__(
        self,
        body: BinaryIO,
        content_length: Optional[int] = None,
        content_type: Optional[str] = None,
    ) -> None:
        self.body = body
        self.content_length = content_length
        self.content_type = content_type
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def read(self, size: int = -1) -> bytes:
        """Read up to size bytes from the object body."""
        if size is None or size < 0:
            return self.body.read()
        return self.body.read(size)

    def close(self) -> None:
        """Release the underlying HTTP response."""
        if self._closed:
            return
        self._closed = True
        self.body.close()

    def __enter__(self) -> "DownloadedObject":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


@dataclass(frozen=True)
class ExecutionOutcome:
    """Result of running a downloaded artifact.

    Attributes:
        exit_code: Child exit code, or None if the child never started
        error: Description of the failure, if any
    """

    exit_code: Optional[int]
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.exit_code == 0


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
