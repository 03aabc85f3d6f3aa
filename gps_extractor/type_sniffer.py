"""
Content-based file type detection.

A file counts as JPEG when it starts with the start-of-image marker
followed by another marker, whatever its name or extension.
"""

import logging
from typing import Union
from pathlib import Path

logger = logging.getLogger(__name__)

# SOI (FF D8) followed by the first byte of the next marker
JPEG_SIGNATURE = b"\xff\xd8\xff"


def read_header(file_path: Union[str, Path], size: int) -> bytes:
    """
    Read up to `size` bytes from the start of a file.

    Args:
        file_path: Path to the file
        size: Maximum number of bytes to read

    Returns:
        The bytes read, shorter than `size` for short files

    Raises:
        OSError: If the file cannot be opened or read
    """
    with open(file_path, 'rb') as f:
        return f.read(size)


def is_jpeg(file_path: Union[str, Path], strict: bool = False) -> bool:
    """
    Check whether a file contains JPEG data by inspecting its first bytes.

    Args:
        file_path: Path to the file to check
        strict: Propagate read errors instead of treating them as "not JPEG"

    Returns:
        True if the file starts with the JPEG signature, False otherwise
    """
    try:
        header = read_header(file_path, len(JPEG_SIGNATURE))
    except OSError as e:
        if strict:
            raise
        logger.debug(f"Could not read header of {file_path}: {e}")
        return False

    return header == JPEG_SIGNATURE
