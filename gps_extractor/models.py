"""
Data types shared by the sniffer, the extractor and the scanner.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Tuple, Union

from .exceptions import ExtractionFailureError, NotJPEGError, UnreadableDirectoryError


class SkipReason(Enum):
    """Reasons a file is passed over before extraction."""
    NOT_JPEG = "not_jpeg"


class FailureReason(Enum):
    """Reasons coordinate extraction fails, mildest first."""
    NO_GPS_DATA = "no_gps_data"
    MALFORMED_METADATA = "malformed_metadata"
    READ_ERROR = "read_error"

    @property
    def severity(self) -> int:
        return list(FailureReason).index(self)


@dataclass(frozen=True)
class ScanRequest:
    """
    Input to a single scan.

    Attributes:
        root_directory: Directory to search recursively
        strict: Abort the whole scan on the first per-file problem
        verbose: Log per-file progress at info instead of debug level
        max_workers: Worker threads for per-file work; 1 scans sequentially
    """
    root_directory: Union[str, Path] = field(default_factory=os.getcwd)
    strict: bool = False
    verbose: bool = False
    max_workers: int = 4

    def __post_init__(self):
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")


@dataclass(frozen=True)
class ExtractionResult:
    """GPS coordinates found in one JPEG file."""
    path: str
    coordinates: Tuple[float, float]

    @property
    def latitude(self) -> float:
        return self.coordinates[0]

    @property
    def longitude(self) -> float:
        return self.coordinates[1]

    def as_dict(self) -> Dict[str, object]:
        return {"path": self.path, "latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class Success:
    path: str
    coordinates: Tuple[float, float]

    def to_result(self) -> ExtractionResult:
        return ExtractionResult(path=self.path, coordinates=self.coordinates)


@dataclass(frozen=True)
class Skipped:
    path: str
    reason: SkipReason

    def describe(self) -> str:
        return f"Path is not a valid JPEG file: {self.path}"

    def to_error(self) -> NotJPEGError:
        return NotJPEGError(self.path, self.reason)


@dataclass(frozen=True)
class Failed:
    path: str
    reason: FailureReason
    detail: str = ""

    def describe(self) -> str:
        message = f"GPS extraction failed ({self.reason.value}) for {self.path}"
        if self.detail:
            message = f"{message}: {self.detail}"
        return message

    def to_error(self) -> ExtractionFailureError:
        return ExtractionFailureError(self.path, self.reason, self.detail or None)


@dataclass(frozen=True)
class Unreadable:
    """A directory the walk could not list."""
    path: str
    detail: str = ""
    reason: FailureReason = FailureReason.READ_ERROR

    def describe(self) -> str:
        message = f"Cannot list directory {self.path}"
        if self.detail:
            message = f"{message}: {self.detail}"
        return message

    def to_error(self) -> UnreadableDirectoryError:
        return UnreadableDirectoryError(self.path, self.reason, self.detail or None)


ExtractionOutcome = Union[Success, Skipped, Failed]
