"""
Exception types raised by the GPS extractor.

Per-file problems are only raised in strict mode; a missing root
directory is always fatal.
"""

from typing import Optional


class GpsExtractorError(Exception):
    """Base exception for the GPS extractor."""


class DirectoryNotFoundError(GpsExtractorError):
    """Raised when the scan root does not exist or is not a directory."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Directory does not exist: {path}")


class ScanAbortedError(GpsExtractorError):
    """
    Raised when strict mode aborts a scan on the first per-file problem.

    Attributes:
        path: File that caused the abort
        reason: Machine-readable reason (a SkipReason or FailureReason)
        detail: Human-readable detail, if any
    """

    def __init__(self, path: str, reason, detail: Optional[str] = None):
        self.path = path
        self.reason = reason
        self.detail = detail
        message = f"{reason.value}: {path}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class NotJPEGError(ScanAbortedError):
    """Raised in strict mode when a file's content is not JPEG."""


class ExtractionFailureError(ScanAbortedError):
    """Raised in strict mode when GPS coordinates could not be extracted."""


class UnreadableDirectoryError(ScanAbortedError):
    """Raised in strict mode when a directory under the root cannot be listed."""
