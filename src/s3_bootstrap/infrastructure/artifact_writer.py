#!/usr/bin/env python3
"""
Artifact writer for downloaded S3 objects.

Resolves the destination path, streams the object body into it and marks the
result executable. A failed copy leaves the partial file in place.
"""

import logging
import os
import shutil
import sys
import tempfile
from pathlib import Path
from typing import BinaryIO, Callable, Optional

from botocore.exceptions import BotoCoreError

from s3_bootstrap.domain.artifact import EXECUTABLE_MODE, SaveTarget, TargetFile
from s3_bootstrap.domain.errors import (
    ArtifactPermissionError,
    CopyError,
    DirectoryCreateError,
    FileCreateError,
)

__version__ = "0.1.0"
__author__ = "John Ayers"

logger = logging.getLogger(__name__)

TEMP_PREFIX = "bootstrap-"
COPY_CHUNK_SIZE = 1024 * 1024


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "artifact_writer",
        "description": "Artifact writer for downloaded S3 objects",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


def discard_artifact(path: str) -> bool:
    """Delete an artifact, treating a missing file as already removed.

    Args:
        path: File to delete

    Returns:
        True if the path no longer exists afterwards
    """
    try:
        Path(path).unlink(missing_ok=True)
    except OSError as e:
        logger.debug(f"Could not remove artifact {path}: {e}")
        return False
    logger.debug(f"Removed artifact {path}")
    return True


class ArtifactWriter:
    """Persists downloaded objects to disk."""

    def __init__(self, platform: str = sys.platform, temp_dir: Optional[str] = None) -> None:
        """Initialize the artifact writer.

        Args:
            platform: sys.platform value deciding whether chmod is applied
            temp_dir: Directory for generated files (None uses the system default)
        """
        self.platform = platform
        self.temp_dir = temp_dir

    @property
    def sets_permissions(self) -> bool:
        """Windows decides executability by extension, so chmod is skipped there."""
        return not self.platform.startswith("win")

    def _open_explicit(self, save_path: str) -> BinaryIO:
        parent = os.path.dirname(save_path)
        if parent:
            try:
                os.makedirs(parent, mode=0o755, exist_ok=True)
            except OSError as e:
                raise DirectoryCreateError(
                    f"Error creating directories: {e}", path=parent
                ) from e

        try:
            return open(save_path, "wb")
        except OSError as e:
            raise FileCreateError(f"Error creating file: {e}", path=save_path) from e

    def _open_temporary(self, name_hint: str) -> BinaryIO:
        suffix = f"-{name_hint}" if name_hint else ""
        try:
            return tempfile.NamedTemporaryFile(
                mode="wb",
                prefix=TEMP_PREFIX,
                suffix=suffix,
                dir=self.temp_dir,
                delete=False,
            )
        except OSError as e:
            raise FileCreateError(f"Error creating temporary file: {e}") from e

    def write(
        self,
        source: BinaryIO,
        target: SaveTarget,
        on_created: Optional[Callable[[TargetFile], None]] = None,
    ) -> TargetFile:
        """Stream a downloaded object into its destination file.

        Args:
            source: Readable byte stream of the object body
            target: Destination choice (explicit path or generated temporary)
            on_created: Called with the TargetFile as soon as the file exists,
                before any bytes are copied

        Returns:
            TargetFile describing the written file

        Raises:
            DirectoryCreateError: If parent directories cannot be created
            FileCreateError: If the destination file cannot be created
            CopyError: If streaming the body fails
            ArtifactPermissionError: If the file cannot be made executable
        """
        if target.is_temporary:
            handle = self._open_temporary(target.name_hint)
        else:
            handle = self._open_explicit(target.save_path)

        with handle:
            target_file = TargetFile(path=handle.name, is_temporary=target.is_temporary)
            if on_created is not None:
                on_created(target_file)

            try:
                shutil.copyfileobj(source, handle, COPY_CHUNK_SIZE)
                handle.flush()
            except (OSError, BotoCoreError) as e:
                raise CopyError(
                    f"Error copying S3 object to file: {e}", path=target_file.path
                ) from e

            if self.sets_permissions:
                try:
                    os.chmod(handle.name, EXECUTABLE_MODE)
                except OSError as e:
                    raise ArtifactPermissionError(
                        f"Error making file executable: {e}", path=target_file.path
                    ) from e

        logger.debug(f"Wrote artifact to {target_file.path}")
        return target_file

    def discard(self, path: str) -> bool:
        """Remove a written artifact; see discard_artifact."""
        return discard_artifact(path)


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
