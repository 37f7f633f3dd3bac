#!/usr/bin/env python3
"""
Shutdown scheduler for powering off the host after bootstrap.

Waits out a fixed delay, then issues the platform shutdown command. Debug
mode prints the command instead of running it.
"""

import logging
import subprocess
import sys
import time
from enum import Enum
from typing import Callable

from s3_bootstrap.domain.errors import ShutdownError

__version__ = "0.1.0"
__author__ = "John Ayers"

logger = logging.getLogger(__name__)

WINDOWS_SHUTDOWN_COMMAND = ["shutdown", "/s", "/t", "0"]
POSIX_SHUTDOWN_COMMAND = ["sudo", "shutdown", "-h", "now"]


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "shutdown_scheduler",
        "description": "Shutdown scheduler for powering off the host",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


class ShutdownState(Enum):
    """Lifecycle of a shutdown request."""

    ARMED = "armed"
    FIRED = "fired"


def shutdown_command(platform: str = sys.platform) -> list[str]:
    """Return the power-off command for a platform.

    Args:
        platform: sys.platform value of the host

    Returns:
        Command line as a list of arguments
    """
    if platform.startswith("win"):
        return list(WINDOWS_SHUTDOWN_COMMAND)
    return list(POSIX_SHUTDOWN_COMMAND)


def format_command(command: list[str]) -> str:
    return "[" + " ".join(command) + "]"


class ShutdownScheduler:
    """Issues a single delayed host shutdown."""

    def __init__(
        self,
        delay: float,
        debug: bool = False,
        platform: str = sys.platform,
        sleep: Callable[[float], None] = time.sleep,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ) -> None:
        """Initialize the shutdown scheduler.

        Args:
            delay: Seconds to wait before shutting down
            debug: If True, print the command instead of running it
            platform: sys.platform value of the host
            sleep: time.sleep compatible callable
            runner: subprocess.run compatible callable
        """
        self.delay = delay
        self.debug = debug
        self.platform = platform
        self._sleep = sleep
        self._runner = runner
        self.state = ShutdownState.ARMED

    def fire(self) -> None:
        """Wait for the delay, then shut the host down.

        Raises:
            ShutdownError: If already fired, or if the command fails
        """
        if self.state is ShutdownState.FIRED:
            raise ShutdownError("shutdown has already been issued")

        self._sleep(self.delay)
        command = shutdown_command(self.platform)
        self.state = ShutdownState.FIRED

        if self.debug:
            print(f"Debug: Would execute command: {format_command(command)}")
            sys.stdout.flush()
            return

        logger.info(f"Shutting down host: {' '.join(command)}")
        try:
            self._runner(command, check=True)
        except subprocess.CalledProcessError as e:
            raise ShutdownError(
                f"{' '.join(command)} exited with status {e.returncode}"
            ) from e
        except OSError as e:
            raise ShutdownError(f"could not run {' '.join(command)}: {e}") from e


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
