#!/usr/bin/env python3
"""
Executor for downloaded artifacts.

Runs the artifact as a child process sharing this process's stdin, stdout and
stderr. On Windows the interpreter is chosen from the file extension.
"""

import logging
import os
import subprocess
import sys
from typing import Callable

from s3_bootstrap.domain.artifact import ExecutionOutcome
from s3_bootstrap.domain.errors import ExecutionError

__version__ = "0.1.0"
__author__ = "John Ayers"

logger = logging.getLogger(__name__)


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "executor",
        "description": "Executor for downloaded artifacts",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


# Windows interpreter prefixes keyed by lower-cased extension.
# Extensions not listed here are run directly.
WINDOWS_LAUNCHERS: dict[str, list[str]] = {
    ".bat": ["cmd", "/C"],
    ".cmd": ["cmd", "/C"],
    ".ps1": ["powershell", "-File"],
    ".py": ["python"],
}


def is_windows(platform: str) -> bool:
    return platform.startswith("win")


def build_command(path: str, platform: str = sys.platform) -> list[str]:
    """Build the argv used to run an artifact.

    Args:
        path: Artifact path
        platform: sys.platform value of the host

    Returns:
        Command line as a list of arguments
    """
    if not is_windows(platform):
        return [path]

    extension = os.path.splitext(path)[1].lower()
    launcher = WINDOWS_LAUNCHERS.get(extension, [])
    return [*launcher, path]


class Executor:
    """Runs downloaded artifacts as child processes."""

    def __init__(
        self,
        platform: str = sys.platform,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ) -> None:
        """Initialize the executor.

        Args:
            platform: sys.platform value of the host
            runner: subprocess.run compatible callable
        """
        self.platform = platform
        self._runner = runner

    def execute(self, path: str) -> ExecutionOutcome:
        """Run an artifact and wait for it to exit.

        Args:
            path: Artifact path

        Returns:
            ExecutionOutcome with exit code 0

        Raises:
            ExecutionError: If the child cannot start or exits non-zero
        """
        command = build_command(path, self.platform)
        logger.info(f"Executing {path}")
        logger.debug(f"Command: {command}")

        # Keep our own buffered output ahead of the child's
        sys.stdout.flush()
        sys.stderr.flush()

        try:
            completed = self._runner(command, check=True)
        except subprocess.CalledProcessError as e:
            raise ExecutionError(
                f"{path} exited with status {e.returncode}", exit_code=e.returncode
            ) from e
        except OSError as e:
            raise ExecutionError(f"could not start {path}: {e}") from e

        logger.info(f"{path} exited with status {completed.returncode}")
        return ExecutionOutcome(exit_code=completed.returncode)


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
