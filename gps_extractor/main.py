"""
Main entry point for the GPS extractor.

Parses command line options, configures logging, runs the scan and
prints the results.
"""

import argparse
import os
import sys
from typing import List, Optional

from . import __version__
from .exceptions import GpsExtractorError
from .logger import Logger
from .models import ScanRequest
from .output import RENDERERS, printable
from .scanner import BatchScanner


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gps-extractor",
        description="Find JPEG images by content and print their GPS coordinates.",
    )
    parser.add_argument("directory", nargs="?", help="Directory to search (default: current directory)")
    parser.add_argument("-d", "--dir", dest="dir_option", metavar="PATH",
                        help="Directory to search; takes precedence over the positional argument")
    parser.add_argument("-s", "--strict", action="store_true",
                        help="Abort on the first file that is not JPEG or has no usable GPS data")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Verbose logging and a progress bar")
    parser.add_argument("-w", "--workers", type=int, default=4,
                        help="Number of concurrent workers (default: 4)")
    parser.add_argument("--log-file", help="Also write log output to this file")

    output = parser.add_mutually_exclusive_group()
    output.add_argument("--html", dest="output_format", action="store_const", const="html",
                        help="HTML table output")
    output.add_argument("--json", dest="output_format", action="store_const", const="json",
                        help="JSON output")
    parser.set_defaults(output_format="plain")

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


class GpsExtractorApp:
    """
    Command line application wrapping a BatchScanner.
    """

    def __init__(self, args: argparse.Namespace):
        """
        Initialize the application.

        Args:
            args: Parsed command line arguments
        """
        self.args = args
        self.logger = Logger(
            log_level="INFO" if args.verbose else "WARNING",
            log_file=args.log_file,
        )
        self.log = self.logger.get_logger(__name__)

        progress_bar_factory = self.logger.create_progress_bar if args.verbose else None
        self.scanner = BatchScanner(progress_bar_factory=progress_bar_factory)

    def build_request(self) -> ScanRequest:
        """Resolve the scan directory: --dir, then the positional argument, then cwd."""
        directory = self.args.dir_option or self.args.directory or os.getcwd()
        return ScanRequest(
            root_directory=directory,
            strict=self.args.strict,
            verbose=self.args.verbose,
            max_workers=self.args.workers,
        )

    def run(self) -> int:
        """
        Run the scan and print the results.

        Returns:
            Process exit code
        """
        request = self.build_request()
        self.log.info("Started extraction with options:")
        self.log.info(repr(request))

        try:
            results = self.scanner.scan_all(request)
        except GpsExtractorError as e:
            print(f"Error: {printable(str(e))}", file=sys.stderr)
            return 1

        self.logger.log_scan_summary(os.fspath(request.root_directory), len(results), request.strict)

        rendered = RENDERERS[self.args.output_format](results)
        if rendered:
            print(rendered)
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.workers < 1:
        parser.error("--workers must be at least 1")

    try:
        return GpsExtractorApp(args).run()
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
