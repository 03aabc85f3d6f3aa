"""
Directory scanning and batch GPS extraction.

Walks a directory tree, sniffs every regular file for JPEG content,
extracts GPS coordinates from the JPEGs and returns the results sorted
by path. In strict mode the first problem aborts the whole scan;
otherwise problem files are logged and left out of the results.
"""

import os
import logging
import threading
from pathlib import Path
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Dict, Iterator, List, Optional, Union

from .exceptions import DirectoryNotFoundError
from .metadata_extractor import MetadataExtractor
from .models import (
    ExtractionOutcome,
    ExtractionResult,
    Failed,
    FailureReason,
    ScanRequest,
    Skipped,
    SkipReason,
    Success,
    Unreadable,
)
from .type_sniffer import is_jpeg

ProgressBarFactory = Callable[[int, str], Optional[object]]


def iter_files(root_directory: Union[str, Path],
               onerror: Optional[Callable[[OSError], None]] = None) -> Iterator[str]:
    """
    Recursively yield every regular file under a directory.

    Directory and file names are visited in sorted order. Symlinks to
    regular files are yielded under the link's own path; symlinks to
    directories are never descended into, so link cycles cannot loop.
    Broken links and special files are not yielded.

    Args:
        root_directory: Directory to walk
        onerror: Called with the OSError for each directory that cannot
            be listed; the walk then continues with its siblings

    Yields:
        File paths joined onto `root_directory`
    """
    for dirpath, dirnames, filenames in os.walk(os.fspath(root_directory), onerror=onerror, followlinks=False):
        dirnames.sort()
        for filename in sorted(filenames):
            file_path = os.path.join(dirpath, filename)
            if os.path.isfile(file_path):
                yield file_path


class BatchScanner:
    """
    Scans a directory tree for JPEG files and collects their GPS coordinates.
    """

    def __init__(self, extractor: Optional[MetadataExtractor] = None,
                 logger: Optional[logging.Logger] = None,
                 progress_bar_factory: Optional[ProgressBarFactory] = None):
        """
        Initialize the batch scanner.

        Args:
            extractor: Coordinate extractor (created if omitted, sharing `logger`
                when one is given)
            logger: Logger for diagnostic output (defaults to the module logger)
            progress_bar_factory: Callable taking (total, description) and
                returning a progress bar with update()/close(), or None
        """
        self.logger = logger or logging.getLogger(__name__)
        self.extractor = extractor or MetadataExtractor(logger=logger)
        self.progress_bar_factory = progress_bar_factory

    def scan_all(self, request: ScanRequest) -> List[ExtractionResult]:
        """
        Extract GPS coordinates from every JPEG file under the request's root.

        Args:
            request: Scan parameters

        Returns:
            Results sorted by path in ascending codepoint order

        Raises:
            DirectoryNotFoundError: If the root is missing or not a directory
            NotJPEGError: In strict mode, for the first file that is not JPEG
            ExtractionFailureError: In strict mode, for the first JPEG whose
                coordinates could not be extracted
            UnreadableDirectoryError: In strict mode, for the first directory
                under the root that cannot be listed
        """
        root = os.fspath(request.root_directory)
        if not os.path.isdir(root):
            self.logger.critical(f"Specified directory does not exist: {root}")
            raise DirectoryNotFoundError(root)

        detail_level = logging.INFO if request.verbose else logging.DEBUG
        self.logger.info(f"Scanning directory: {root} (strict={request.strict}, workers={request.max_workers})")

        walk_errors = []
        file_paths = list(iter_files(root, onerror=walk_errors.append))
        self.logger.log(detail_level, f"Found {len(file_paths)} files under {root}")

        stats = {"skipped": 0, "failed": 0}
        for error in walk_errors:
            unreadable = Unreadable(os.fspath(error.filename or root), error.strerror or str(error))
            self._apply_policy(unreadable, request, stats)

        results = []
        progress_bar = self._create_progress_bar(len(file_paths))
        outcomes = self._process_files(file_paths, request, detail_level)
        try:
            for outcome in outcomes:
                if progress_bar:
                    progress_bar.update(1)
                if isinstance(outcome, Success):
                    self.logger.log(detail_level, f"GPS found in {outcome.path}: {outcome.coordinates}")
                    results.append(outcome.to_result())
                else:
                    self._apply_policy(outcome, request, stats)
        finally:
            outcomes.close()
            if progress_bar:
                progress_bar.close()

        results.sort(key=lambda result: result.path)
        self._log_summary(len(file_paths), len(results), stats)
        return results

    def _apply_policy(self, outcome: Union[Skipped, Failed, Unreadable],
                      request: ScanRequest, stats: Dict[str, int]):
        """Abort on a problem outcome in strict mode, otherwise log and count it."""
        if request.strict:
            self.logger.critical(outcome.describe())
            raise outcome.to_error()

        self.logger.info(outcome.describe())
        stats["skipped" if isinstance(outcome, Skipped) else "failed"] += 1

    def process_file(self, file_path: str, detail_level: int = logging.DEBUG) -> ExtractionOutcome:
        """
        Sniff and extract a single file.

        Args:
            file_path: Path to the file
            detail_level: Level for per-file progress messages

        Returns:
            Skipped if the content is not JPEG, Failed if the file cannot be
            read, otherwise the extractor's outcome
        """
        try:
            if not is_jpeg(file_path, strict=True):
                return Skipped(file_path, SkipReason.NOT_JPEG)
        except OSError as e:
            return Failed(file_path, FailureReason.READ_ERROR, str(e))

        self.logger.log(detail_level, f"Extracting GPS data from {file_path}")
        return self.extractor.extract_coordinates(file_path)

    def _process_files(self, file_paths: List[str], request: ScanRequest,
                       detail_level: int) -> Iterator[ExtractionOutcome]:
        """Yield one outcome per file, sequentially or from a worker pool."""
        if request.max_workers == 1 or len(file_paths) <= 1:
            for file_path in file_paths:
                yield self.process_file(file_path, detail_level)
            return

        cancelled = threading.Event()

        def worker(file_path: str) -> Optional[ExtractionOutcome]:
            if cancelled.is_set():
                return None
            return self.process_file(file_path, detail_level)

        executor = ThreadPoolExecutor(max_workers=request.max_workers)
        try:
            futures = [executor.submit(worker, file_path) for file_path in file_paths]
            for future in as_completed(futures):
                outcome = future.result()
                if outcome is not None:
                    yield outcome
        finally:
            # Reached early when the consumer stops iterating (strict abort)
            cancelled.set()
            executor.shutdown(wait=True, cancel_futures=True)

    def _create_progress_bar(self, total: int):
        if self.progress_bar_factory is None:
            return None
        return self.progress_bar_factory(total, "Scanning files")

    def _log_summary(self, total_files: int, result_count: int, stats: dict):
        self.logger.info(
            f"Scan complete: {total_files} files, {result_count} with GPS data, "
            f"{stats['skipped']} skipped, {stats['failed']} failed"
        )


def scan_all(request: ScanRequest, logger: Optional[logging.Logger] = None) -> List[ExtractionResult]:
    """Scan with a default BatchScanner; see BatchScanner.scan_all."""
    return BatchScanner(logger=logger).scan_all(request)
