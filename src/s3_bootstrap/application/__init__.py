#!/usr/bin/env python3
"""
Application layer for s3-bootstrap.

Sequences the download, write, execute and shutdown steps by coordinating
domain objects and infrastructure adapters.
"""

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "application.__init__",
        "description": "Application layer initialization",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }
