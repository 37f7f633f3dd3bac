#!/usr/bin/env python3
"""
Error taxonomy for s3-bootstrap.

Every failure the bootstrap lifecycle can surface is a BootstrapError. Fatal
errors terminate the run with exit status 1; ExecutionError and ShutdownError
are recorded by the coordinator and do not stop the remaining steps.
"""

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "errors",
        "description": "Error taxonomy for the bootstrap lifecycle",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


class BootstrapError(Exception):
    """Base class for all bootstrap failures."""

    exit_code = 1


class UsageError(BootstrapError):
    """Invalid command-line arguments or flag combination."""


class LocatorError(BootstrapError):
    """The locator string could not be turned into a bucket and key."""


class InvalidLocator(LocatorError):
    """The locator is not a well-formed URL."""


class UnsupportedScheme(LocatorError):
    """The locator URL does not use the s3 scheme."""


class ConfigError(BootstrapError):
    """AWS configuration or credentials are unavailable."""


class FetchError(BootstrapError):
    """The object could not be retrieved from S3."""

    def __init__(self, message: str, error_code: str | None = None) -> None:
        super().__init__(message)
        self.error_code = error_code


class WriteError(BootstrapError):
    """The downloaded object could not be persisted to disk."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class DirectoryCreateError(WriteError):
    """Parent directories of an explicit save path could not be created."""


class FileCreateError(WriteError):
    """The destination file could not be created."""


class CopyError(WriteError):
    """Streaming the object body into the destination file failed."""


class ArtifactPermissionError(WriteError):
    """The destination file could not be marked executable."""


class ExecutionError(BootstrapError):
    """The downloaded artifact could not be started or exited non-zero."""

    def __init__(self, message: str, exit_code: int | None = None) -> None:
        super().__init__(message)
        self.child_exit_code = exit_code


class ShutdownError(BootstrapError):
    """The host shutdown command could not be issued."""


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
