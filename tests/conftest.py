"""Shared fixtures: real JPEG files with and without EXIF GPS blocks.

Images are written with Pillow; GPS blocks are built with piexif.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Tuple

import piexif
import pytest
from PIL import Image

EIFFEL_TOWER = (48.8584, 2.2945)
SYDNEY_OPERA_HOUSE = (-33.8568, 151.2153)
STATUE_OF_LIBERTY = (40.6892, -74.0445)


def to_dms_rationals(value: float) -> Tuple[Tuple[int, int], ...]:
    """Decimal degrees -> EXIF ((deg, 1), (min, 1), (sec * 10000, 10000))."""
    value = abs(value)
    degrees = int(value)
    minutes_float = (value - degrees) * 60
    minutes = int(minutes_float)
    seconds = round((minutes_float - minutes) * 60 * 10000)
    return ((degrees, 1), (minutes, 1), (seconds, 10000))


def gps_block(latitude: float, longitude: float) -> Dict[int, object]:
    return {
        piexif.GPSIFD.GPSVersionID: (2, 2, 0, 0),
        piexif.GPSIFD.GPSLatitudeRef: "N" if latitude >= 0 else "S",
        piexif.GPSIFD.GPSLatitude: to_dms_rationals(latitude),
        piexif.GPSIFD.GPSLongitudeRef: "E" if longitude >= 0 else "W",
        piexif.GPSIFD.GPSLongitude: to_dms_rationals(longitude),
    }


def write_jpeg(path: Path, gps: Optional[Dict[int, object]] = None) -> Path:
    """Write a small JPEG, with an EXIF GPS block when `gps` is given."""
    path.parent.mkdir(parents=True, exist_ok=True)
    image = Image.new("RGB", (16, 16), color=(200, 30, 30))
    if gps is None:
        image.save(path, "JPEG")
    else:
        exif_bytes = piexif.dump({"0th": {}, "Exif": {}, "GPS": gps, "1st": {}, "thumbnail": None})
        image.save(path, "JPEG", exif=exif_bytes)
    return path


@pytest.fixture
def make_jpeg(tmp_path):
    """Factory: make_jpeg("a/b.jpg", coordinates=(lat, lon)) -> Path."""
    def _make(relative: str, coordinates: Optional[Tuple[float, float]] = None,
              gps: Optional[Dict[int, object]] = None) -> Path:
        if coordinates is not None:
            gps = gps_block(*coordinates)
        return write_jpeg(tmp_path / relative, gps)
    return _make


@pytest.fixture
def make_text(tmp_path):
    """Factory: make_text("notes.jpg", "content") -> Path."""
    def _make(relative: str, content: str = "just some plain text\n") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
    return _make


@pytest.fixture
def eiffel_jpeg(make_jpeg) -> Path:
    return make_jpeg("eiffel.jpg", coordinates=EIFFEL_TOWER)


@pytest.fixture
def quiet_logger() -> logging.Logger:
    """Logger independent of the package logger configuration."""
    return logging.getLogger("tests.gps_extractor")
