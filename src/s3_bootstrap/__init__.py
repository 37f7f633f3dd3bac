#!/usr/bin/env python3
"""
s3-bootstrap: CLI tool to self-provision an instance from an S3 artifact.

This package downloads a single object from S3, saves it to a temporary or
user-specified path, optionally executes it, and can power off the host
afterwards.
"""

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "__init__",
        "description": "Package initialization for s3-bootstrap",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }
