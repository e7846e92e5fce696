"""
Export storage.

Creates output files for exported documents: checks the storage is
writable, creates the target directory and picks a file name that does
not collide with an existing export.
"""

from dataclasses import dataclass
import logging
import os
from pathlib import Path
import re
from typing import Optional, TextIO

from app.config import settings
from app.features.tracks.models import Track
from .errors import DirectoryCreationError, OutputOpenError, StorageUnavailableError
from .writers.base import TrackFormatWriter

logger = logging.getLogger(__name__)

# Longest file base name kept from a track name
MAX_FILE_BASE_LENGTH = 100
# Attempts at "name(N).ext" before giving up
MAX_UNIQUE_SUFFIX = 1000
# Name picks before giving up when concurrent exports race for a name
MAX_OPEN_ATTEMPTS = 5

_UNSAFE_CHARS = re.compile(r'[^\w\-. ()]+', re.UNICODE)


def sanitize_file_base(name: Optional[str]) -> str:
    """
    Turn a track name into a safe file base name.

    Characters outside letters, digits and ``-_. ()`` are replaced by
    underscores; empty results fall back to 'track'.
    """
    base = _UNSAFE_CHARS.sub("_", name or "").strip(" .")
    base = base[:MAX_FILE_BASE_LENGTH].rstrip(" .")
    return base or "track"


def build_unique_filename(directory: Path, name: Optional[str], extension: str) -> Optional[str]:
    """
    Build a file name that does not exist in directory yet.

    Returns 'name.ext', then 'name(1).ext', 'name(2).ext', ...

    Returns:
        File name, or None if no free name was found
    """
    base = sanitize_file_base(name)
    candidate = f"{base}.{extension}"
    if not (directory / candidate).exists():
        return candidate

    for suffix in range(1, MAX_UNIQUE_SUFFIX):
        candidate = f"{base}({suffix}).{extension}"
        if not (directory / candidate).exists():
            return candidate

    return None


@dataclass
class OutputSink:
    """An opened output file. Closing it is idempotent."""
    path: Path
    stream: TextIO

    def close(self) -> None:
        if not self.stream.closed:
            self.stream.close()

    def __enter__(self) -> "OutputSink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class FileSinkFactory:
    """
    Opens output files under an export root.

    Without an explicit directory, documents go to <export_root>/<extension>/.

    Usage:
        factory = FileSinkFactory()
        sink = factory.open(track, writer)
    """

    def __init__(self, export_root: Optional[Path] = None):
        self.export_root = Path(export_root or settings.export_root)

    def default_directory(self, writer: TrackFormatWriter) -> Path:
        return self.export_root / writer.extension

    def open(
        self,
        track: Track,
        writer: TrackFormatWriter,
        directory: Optional[Path] = None,
    ) -> OutputSink:
        """
        Create the output file for a track.

        Args:
            track: Track being exported (name is used for the file name)
            writer: Writer that will fill the file (gives the extension)
            directory: Target directory, defaults to default_directory()

        Returns:
            OutputSink with an open text stream

        Raises:
            StorageUnavailableError: Storage is missing or read-only
            DirectoryCreationError: Directory could not be created
            OutputOpenError: File could not be created
        """
        directory = Path(directory) if directory is not None else self.default_directory(writer)

        if not self.is_storage_available(directory):
            logger.info(f"Export storage not available for {directory}")
            raise StorageUnavailableError(f"Export storage not available: {directory}")

        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.info(f"Could not create export directory {directory}: {e}")
            raise DirectoryCreationError(f"Could not create {directory}: {e}") from e

        for _ in range(MAX_OPEN_ATTEMPTS):
            filename = build_unique_filename(directory, track.name, writer.extension)
            if filename is None:
                logger.error(f"Unable to get a unique filename for {track.name}")
                raise OutputOpenError(f"No free file name for {track.name!r} in {directory}")

            path = directory / filename
            try:
                # newline="" keeps csv line endings untouched
                stream = path.open("x", encoding="utf-8", newline="")
            except FileExistsError:
                # Taken by a concurrent export since the name was picked
                continue
            except OSError as e:
                logger.error(f"Failed to open output file {path}: {e}")
                raise OutputOpenError(f"Failed to open {path}: {e}") from e

            logger.info(f"Writing track to: {path}")
            return OutputSink(path=path, stream=stream)

        raise OutputOpenError(f"Could not create an output file in {directory}")

    @staticmethod
    def is_storage_available(directory: Path) -> bool:
        """
        Check that the nearest existing ancestor of directory is a
        writable directory.
        """
        probe = directory.resolve()
        while not probe.exists():
            if probe.parent == probe:
                return False
            probe = probe.parent
        if not probe.is_dir():
            probe = probe.parent
        return os.access(probe, os.W_OK | os.X_OK)
