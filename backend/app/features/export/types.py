"""
Export result types.

Only enums and dataclasses, so writers, storage and the service can
share them without circular imports.
"""

from dataclasses import dataclass
from enum import Enum


class ExportErrorCode(str, Enum):
    """Codes reported on ExportOutcome."""
    TRACK_NOT_FOUND = "track_not_found"
    STORAGE_UNAVAILABLE = "storage_unavailable"
    DIRECTORY_CREATION_FAILED = "directory_creation_failed"
    OUTPUT_OPEN_FAILED = "output_open_failed"
    WRITE_FAILED = "write_failed"
    SUCCESS = "success"

    @property
    def message(self) -> str:
        """Human readable message for this code."""
        return ERROR_MESSAGES[self]


ERROR_MESSAGES = {
    ExportErrorCode.TRACK_NOT_FOUND: "The track does not exist.",
    ExportErrorCode.STORAGE_UNAVAILABLE: "No writable export storage found.",
    ExportErrorCode.DIRECTORY_CREATION_FAILED: "Could not create the export directory.",
    ExportErrorCode.OUTPUT_OPEN_FAILED: "Could not create the output file.",
    ExportErrorCode.WRITE_FAILED: "Writing the track failed.",
    ExportErrorCode.SUCCESS: "Finished writing the track.",
}


class ExportState(str, Enum):
    """Lifecycle of a single export run."""
    IDLE = "idle"
    OPENING = "opening"
    WRITING = "writing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ExportState.SUCCEEDED, ExportState.FAILED)


@dataclass(frozen=True)
class ExportOutcome:
    """Result of one export attempt."""
    success: bool
    error_code: ExportErrorCode

    @property
    def message(self) -> str:
        return self.error_code.message
