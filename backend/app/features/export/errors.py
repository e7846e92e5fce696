"""
Export exceptions.

Each exception carries the ExportErrorCode it is reported as.
"""

from .types import ExportErrorCode


class ExportError(Exception):
    """Base class for failures that end an export."""

    code: ExportErrorCode = ExportErrorCode.WRITE_FAILED

    def __init__(self, message: str = "", code: ExportErrorCode | None = None):
        super().__init__(message or (code or self.code).message)
        if code is not None:
            self.code = code


class StorageUnavailableError(ExportError):
    """Export storage is missing or not writable."""
    code = ExportErrorCode.STORAGE_UNAVAILABLE


class DirectoryCreationError(ExportError):
    """Target directory could not be created."""
    code = ExportErrorCode.DIRECTORY_CREATION_FAILED


class OutputOpenError(ExportError):
    """Output file could not be created."""
    code = ExportErrorCode.OUTPUT_OPEN_FAILED
