#!/usr/bin/env python3
"""
Credential manager for resolving ambient AWS credentials.

Builds boto3 sessions from the bootstrap configuration and fails early when
no credentials can be found, so the download step never starts without them.
"""

import logging
from typing import Callable

import boto3
from botocore.exceptions import BotoCoreError, ProfileNotFound

from s3_bootstrap.domain.errors import ConfigError
from s3_bootstrap.infrastructure.config import BootstrapConfig

__version__ = "0.1.0"
__author__ = "John Ayers"

logger = logging.getLogger(__name__)


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "credential_manager",
        "description": "Credential manager for ambient AWS credentials",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


class CredentialManager:
    """Creates boto3 sessions for the configured region and profile."""

    def __init__(self, session_factory: Callable[..., boto3.Session] = boto3.Session) -> None:
        """Initialize the credential manager.

        Args:
            session_factory: Callable building a boto3 Session
        """
        self._session_factory = session_factory

    def create_session(self, config: BootstrapConfig) -> boto3.Session:
        """Create a boto3 session for the configured region and profile.

        Args:
            config: Bootstrap configuration

        Returns:
            boto3 Session

        Raises:
            ConfigError: If the named profile does not exist
        """
        logger.debug(
            f"Creating session (region={config.region or 'default'}, "
            f"profile={config.profile or 'default'})"
        )
        try:
            return self._session_factory(
                region_name=config.region,
                profile_name=config.profile,
            )
        except ProfileNotFound as e:
            raise ConfigError(f"Unable to load AWS config: {e}") from e

    def load_session(self, config: BootstrapConfig) -> boto3.Session:
        """Return a session whose credentials are known to resolve.

        Args:
            config: Bootstrap configuration

        Returns:
            boto3 Session with credentials available

        Raises:
            ConfigError: If no credentials can be resolved
        """
        session = self.create_session(config)
        try:
            credentials = session.get_credentials()
        except BotoCoreError as e:
            raise ConfigError(f"Unable to load AWS config: {e}") from e

        if credentials is None:
            raise ConfigError("Unable to load AWS config: no credentials found")

        logger.debug(f"Resolved AWS credentials via {getattr(credentials, 'method', 'unknown')}")
        return session


# Global singleton instance
_credential_manager = CredentialManager()


def get_credential_manager() -> CredentialManager:
    """Get the global credential manager instance.

    Returns:
        Global CredentialManager instance
    """
    return _credential_manager


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
