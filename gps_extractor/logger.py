"""
Logging setup for the GPS extractor command line.

The scanning modules only ever log through the logger they are given;
this module owns handler configuration for the `gps_extractor` logger
and creates progress bars.
"""

import logging
import sys
from typing import Optional

from tqdm import tqdm

PACKAGE_LOGGER = "gps_extractor"


class Logger:
    """
    Log sink configuration for the GPS extractor application.

    Configures the package logger with a console handler and an optional
    file handler, leaving the root logger alone.
    """

    def __init__(self, log_level: str = "WARNING", log_file: Optional[str] = None):
        """
        Initialize the logger.

        Args:
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Optional log file path
        """
        self.log_level = getattr(logging, log_level.upper(), logging.WARNING)
        self.log_file = log_file
        self._setup_logging()

    def _setup_logging(self):
        """Set up logging configuration."""
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        package_logger = logging.getLogger(PACKAGE_LOGGER)
        package_logger.setLevel(self.log_level)
        package_logger.propagate = False

        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
            handler.close()

        # Results go to stdout, diagnostics to stderr
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(formatter)
        package_logger.addHandler(console_handler)

        if self.log_file:
            try:
                file_handler = logging.FileHandler(self.log_file, mode='w', encoding='utf-8', errors='backslashreplace')
                file_handler.setLevel(self.log_level)
                file_handler.setFormatter(formatter)
                package_logger.addHandler(file_handler)
                package_logger.info(f"Logging to file: {self.log_file}")
            except OSError as e:
                package_logger.error(f"Failed to set up file logging: {e}")

    def get_logger(self, name: str = PACKAGE_LOGGER) -> logging.Logger:
        """
        Get a logger instance below the package logger.

        Args:
            name: Logger name (usually __name__)

        Returns:
            Configured logger instance
        """
        return logging.getLogger(name)

    def log_scan_summary(self, directory: str, result_count: int, strict: bool):
        """
        Log a summary of a finished scan.

        Args:
            directory: Directory that was scanned
            result_count: Number of files with GPS data
            strict: Whether strict mode was enabled
        """
        logger = self.get_logger()

        logger.info("=" * 50)
        logger.info("SCAN SUMMARY")
        logger.info("=" * 50)
        logger.info(f"Directory: {directory}")
        logger.info(f"Strict mode: {'on' if strict else 'off'}")
        logger.info(f"Files with GPS data: {result_count}")
        logger.info("=" * 50)

    def create_progress_bar(self, total: int, desc: str = "Processing") -> Optional[tqdm]:
        """
        Create a progress bar for tracking a scan.

        Args:
            total: Total number of items to process
            desc: Description for the progress bar

        Returns:
            tqdm progress bar on stderr, or None when there is nothing to track
        """
        if total > 0:
            return tqdm(total=total, desc=desc, unit="files", ncols=80, file=sys.stderr)
        return None
