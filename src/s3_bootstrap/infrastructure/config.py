#!/usr/bin/env python3
"""
Configuration management for s3-bootstrap.

Handles loading and validation of configuration from the environment.
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

from s3_bootstrap.domain.errors import ConfigError

__version__ = "0.1.0"
__author__ = "John Ayers"

DEFAULT_FETCH_TIMEOUT = 30.0
DEFAULT_SHUTDOWN_DELAY = 20.0


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "config",
        "description": "Configuration management",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


def _seconds_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number of seconds, got {raw!r}") from None
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {raw!r}")
    return value


@dataclass(frozen=True)
class BootstrapConfig:
    """Runtime settings for a bootstrap run.

    Attributes:
        region: AWS region (None lets boto3 resolve it from the instance)
        profile: Named AWS profile (None uses the default credential chain)
        fetch_timeout: Seconds allowed for each S3 connect and each socket read
        shutdown_delay: Seconds to wait before powering off the host
    """

    region: Optional[str] = None
    profile: Optional[str] = None
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    shutdown_delay: float = DEFAULT_SHUTDOWN_DELAY

    @classmethod
    def from_env(cls) -> "BootstrapConfig":
        """Load configuration from environment variables.

        Returns:
            BootstrapConfig instance

        Raises:
            ConfigError: If a numeric setting is malformed
        """
        return cls(
            region=os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION"),
            profile=os.getenv("AWS_PROFILE") or None,
            fetch_timeout=_seconds_from_env("BOOTSTRAP_FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT),
            shutdown_delay=_seconds_from_env("BOOTSTRAP_SHUTDOWN_DELAY", DEFAULT_SHUTDOWN_DELAY),
        )

    def with_overrides(
        self,
        region: Optional[str] = None,
        profile: Optional[str] = None,
        shutdown_delay: Optional[float] = None,
    ) -> "BootstrapConfig":
        """Return a copy with command-line values taking precedence.

        Args:
            region: Region flag value, if given
            profile: Profile flag value, if given
            shutdown_delay: Shutdown delay flag value, if given

        Returns:
            New BootstrapConfig instance

        Raises:
            ConfigError: If the shutdown delay is negative
        """
        if shutdown_delay is not None and shutdown_delay < 0:
            raise ConfigError(f"shutdown delay must not be negative, got {shutdown_delay}")
        return replace(
            self,
            region=region or self.region,
            profile=profile or self.profile,
            shutdown_delay=self.shutdown_delay if shutdown_delay is None else shutdown_delay,
        )


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
