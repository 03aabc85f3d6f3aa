"""
GPS Extractor Package

Recursively scans a directory for files that are JPEG images by content,
whatever their extension, and extracts the GPS coordinates embedded in
their EXIF metadata.
"""

__version__ = "1.0.0"
__author__ = "GPS Extractor Team"

from .exceptions import (
    DirectoryNotFoundError,
    ExtractionFailureError,
    GpsExtractorError,
    NotJPEGError,
    ScanAbortedError,
    UnreadableDirectoryError,
)
from .metadata_extractor import MetadataExtractor
from .models import ExtractionResult, FailureReason, ScanRequest, SkipReason
from .scanner import BatchScanner, scan_all
from .type_sniffer import is_jpeg

__all__ = [
    "BatchScanner",
    "DirectoryNotFoundError",
    "ExtractionFailureError",
    "ExtractionResult",
    "FailureReason",
    "GpsExtractorError",
    "MetadataExtractor",
    "NotJPEGError",
    "ScanAbortedError",
    "ScanRequest",
    "SkipReason",
    "UnreadableDirectoryError",
    "is_jpeg",
    "scan_all",
]
