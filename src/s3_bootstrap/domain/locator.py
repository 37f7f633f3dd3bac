#!/usr/bin/env python3
"""
Domain model for S3 object locators.

Parses s3://bucket/key strings into an immutable bucket/key pair.
"""

from dataclasses import dataclass
from urllib.parse import unquote, urlparse

from s3_bootstrap.domain.errors import InvalidLocator, UnsupportedScheme

__version__ = "0.1.0"
__author__ = "John Ayers"

S3_SCHEME = "s3"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "locator",
        "description": "Domain model for S3 object locators",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


@dataclass(frozen=True)
class Locator:
    """Immutable reference to a single S3 object.

    Attributes:
        bucket: S3 bucket name (the URL host)
        key: Object key (the URL path without its leading slash)
    """

    bucket: str
    key: str

    @classmethod
    def parse(cls, value: str) -> "Locator":
        """Parse an s3:// URL into a Locator.

        Args:
            value: URL of the form s3://bucket/path/to/object

        Returns:
            Locator instance

        Raises:
            InvalidLocator: If the string is not a well-formed URL
            UnsupportedScheme: If the URL scheme is not s3
        """
        try:
            parsed = urlparse(value)
        except ValueError as e:
            raise InvalidLocator(f"invalid S3 URL: {e}") from e

        if parsed.scheme != S3_SCHEME:
            raise UnsupportedScheme(f"not an S3 URL (should start with {S3_SCHEME}://)")

        # Userinfo is not part of the bucket name
        bucket = parsed.netloc.rpartition("@")[2]
        key = unquote(parsed.path).removeprefix("/")

        if not bucket:
            raise InvalidLocator(f"invalid S3 URL: missing bucket in {value!r}")
        if not key:
            raise InvalidLocator(f"invalid S3 URL: missing object key in {value!r}")

        return cls(bucket=bucket, key=key)

    @property
    def basename(self) -> str:
        """Final path component of the key, used to name temporary files."""
        return self.key.rsplit("/", 1)[-1]

    def __str__(self) -> str:
        return f"{S3_SCHEME}://{self.bucket}/{self.key}"


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
