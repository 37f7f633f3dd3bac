#!/usr/bin/env python3
"""
S3 object repository implementation.

Provides the concrete object fetcher using boto3.
"""

import logging
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from s3_bootstrap.domain.artifact import DownloadedObject
from s3_bootstrap.domain.errors import FetchError
from s3_bootstrap.infrastructure.config import DEFAULT_FETCH_TIMEOUT

__version__ = "0.1.0"
__author__ = "John Ayers"

logger = logging.getLogger(__name__)


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "s3_object_repository",
        "description": "S3 object repository implementation",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


class S3ObjectRepository:
    """Repository for fetching S3 objects using boto3.

    Implements the ObjectRepository protocol.
    """

    def __init__(self, session: boto3.Session, timeout: float = DEFAULT_FETCH_TIMEOUT) -> None:
        """Initialize S3 object repository.

        Args:
            session: boto3 Session with resolved credentials
            timeout: Connect and read timeout in seconds
        """
        self.session = session
        self.timeout = timeout
        self._client: Any = None

    def _get_s3_client(self) -> Any:
        """Get boto3 S3 client with per-operation connect and read timeouts.

        Returns:
            boto3 S3 client
        """
        if self._client is None:
            client_config = Config(
                connect_timeout=self.timeout,
                read_timeout=self.timeout,
                retries={"total_max_attempts": 1},
            )
            self._client = self.session.client("s3", config=client_config)
        return self._client

    def download(self, bucket: str, key: str) -> DownloadedObject:
        """Open a stream over an S3 object.

        Args:
            bucket: S3 bucket name
            key: Object key

        Returns:
            DownloadedObject owning the response body

        Raises:
            FetchError: If the object cannot be retrieved
        """
        client = self._get_s3_client()
        logger.debug(f"Requesting s3://{bucket}/{key} (timeout: {self.timeout}s)")

        try:
            response = client.get_object(Bucket=bucket, Key=key)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "")
            raise FetchError(f"error getting object from S3: {e}", error_code=error_code) from e
        except BotoCoreError as e:
            raise FetchError(f"error getting object from S3: {e}") from e

        return DownloadedObject(
            body=response["Body"],
            content_length=response.get("ContentLength"),
            content_type=response.get("ContentType"),
        )


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
