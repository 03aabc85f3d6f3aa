"""
GPS metadata extraction for JPEG files.

Reads the EXIF GPS block with Pillow first and falls back to exifread
when Pillow finds nothing usable. Every problem is reported as a Failed
outcome; nothing is raised to the caller.
"""

import math
import logging
from pathlib import Path
from typing import Any, BinaryIO, Callable, Dict, Optional, Tuple, Union

import exifread
from PIL import Image, UnidentifiedImageError
from PIL.ExifTags import GPSTAGS

from .models import ExtractionOutcome, Failed, FailureReason, Success

# EXIF pointer to the GPS IFD
GPS_IFD_TAG = 0x8825

GpsReader = Callable[[BinaryIO], Dict[str, Any]]


class MetadataExtractor:
    """
    Extracts GPS coordinates from the EXIF block of JPEG files.

    The caller is expected to have checked the file content is JPEG;
    the extractor does not sniff it again.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the metadata extractor.

        Args:
            logger: Logger for diagnostic output (defaults to the module logger)
        """
        self.logger = logger or logging.getLogger(__name__)

    def extract_coordinates(self, file_path: Union[str, Path]) -> ExtractionOutcome:
        """
        Extract GPS coordinates from a JPEG file.

        Args:
            file_path: Path to the JPEG file

        Returns:
            Success with (latitude, longitude) in signed decimal degrees,
            or Failed with the reason extraction did not succeed
        """
        path = str(file_path)
        readers = (
            ("Pillow", self._read_gps_with_pillow),
            ("exifread", self._read_gps_with_exifread),
        )

        try:
            with open(path, 'rb') as f:
                worst = None
                for name, reader in readers:
                    f.seek(0)
                    outcome = self._extract_with(name, reader, f, path)
                    if isinstance(outcome, Success):
                        return outcome
                    if worst is None or outcome.reason.severity > worst.reason.severity:
                        worst = outcome
                return worst
        except OSError as e:
            self.logger.debug(f"Could not read {path}: {e}")
            return Failed(path, FailureReason.READ_ERROR, str(e))

    def _extract_with(self, name: str, reader: GpsReader, f: BinaryIO, path: str) -> ExtractionOutcome:
        """Run one EXIF reader and turn its GPS block into an outcome."""
        try:
            gps_info = reader(f)
        except UnidentifiedImageError as e:
            self.logger.debug(f"{name} could not parse {path}: {e}")
            return Failed(path, FailureReason.MALFORMED_METADATA, str(e))
        except OSError as e:
            self.logger.debug(f"{name} failed reading {path}: {e}")
            return Failed(path, FailureReason.READ_ERROR, str(e))
        except Exception as e:
            self.logger.debug(f"{name} extraction failed for {path}: {e}")
            return Failed(path, FailureReason.MALFORMED_METADATA, f"{type(e).__name__}: {e}")

        if not gps_info:
            self.logger.debug(f"{name} found no GPS block in {path}")
            return Failed(path, FailureReason.NO_GPS_DATA, "no GPS block")

        try:
            coordinates = self._convert_gps_to_decimal(gps_info)
        except (ValueError, TypeError, ZeroDivisionError) as e:
            self.logger.debug(f"Invalid GPS values in {path}: {e}")
            return Failed(path, FailureReason.MALFORMED_METADATA, str(e))

        if coordinates is None:
            self.logger.debug(f"{name} found no latitude/longitude in {path}")
            return Failed(path, FailureReason.NO_GPS_DATA, "no latitude/longitude")

        return Success(path, coordinates)

    def _read_gps_with_pillow(self, f: BinaryIO) -> Dict[str, Any]:
        """
        Read the GPS IFD using Pillow.

        Returns:
            GPS tags keyed by name (e.g. 'GPSLatitude'), empty if absent
        """
        with Image.open(f) as img:
            gps_ifd = img.getexif().get_ifd(GPS_IFD_TAG)

        return {GPSTAGS.get(tag_id, tag_id): value for tag_id, value in gps_ifd.items()}

    def _read_gps_with_exifread(self, f: BinaryIO) -> Dict[str, Any]:
        """
        Read the GPS tags using exifread.

        Returns:
            GPS tag values keyed by name (e.g. 'GPSLatitude'), empty if absent
        """
        tags = exifread.process_file(f, details=False)

        gps_info = {}
        for tag, value in tags.items():
            if tag.startswith('GPS '):
                gps_info[tag[len('GPS '):]] = value.values
        return gps_info

    def _convert_gps_to_decimal(self, gps_info: Dict[str, Any]) -> Optional[Tuple[float, float]]:
        """
        Convert GPS coordinates from degrees/minutes/seconds to decimal format.

        Args:
            gps_info: GPS tags keyed by name

        Returns:
            (latitude, longitude), None if either is missing

        Raises:
            ValueError: If the values are present but unusable
        """
        lat = self._convert_dms_to_decimal(gps_info, 'GPSLatitude', 'GPSLatitudeRef', ('N', 'S'))
        lon = self._convert_dms_to_decimal(gps_info, 'GPSLongitude', 'GPSLongitudeRef', ('E', 'W'))

        if lat is None or lon is None:
            return None
        if not -90.0 <= lat <= 90.0:
            raise ValueError(f"latitude out of range: {lat}")
        if not -180.0 <= lon <= 180.0:
            raise ValueError(f"longitude out of range: {lon}")
        return (lat, lon)

    def _convert_dms_to_decimal(self, gps_info: Dict[str, Any], coord_key: str,
                                ref_key: str, refs: Tuple[str, str]) -> Optional[float]:
        """
        Convert one degrees/minutes/seconds value to signed decimal degrees.

        Args:
            gps_info: GPS tags keyed by name
            coord_key: Key for the coordinate value
            ref_key: Key for the coordinate reference
            refs: (positive, negative) reference letters, e.g. ('N', 'S')

        Returns:
            Decimal coordinate, None if the coordinate is absent
        """
        coord = gps_info.get(coord_key)
        if coord is None:
            return None

        if not isinstance(coord, (list, tuple)):
            coord = [coord]
        if not 1 <= len(coord) <= 3:
            raise ValueError(f"{coord_key} has {len(coord)} components")

        parts = [_to_float(value) for value in coord] + [0.0, 0.0]
        degrees, minutes, seconds = parts[:3]
        decimal = degrees + (minutes / 60.0) + (seconds / 3600.0)

        ref = _normalize_ref(gps_info.get(ref_key)) or refs[0]
        if ref not in refs:
            raise ValueError(f"unexpected {ref_key}: {ref!r}")
        if ref == refs[1]:
            decimal = -decimal

        return decimal


def _to_float(value: Any) -> float:
    """Convert an EXIF rational (Pillow, exifread or raw tuple) to float."""
    if isinstance(value, tuple) and len(value) == 2:
        num, den = value
    elif hasattr(value, 'num') and hasattr(value, 'den'):
        num, den = value.num, value.den
    else:
        result = float(value)
        if not math.isfinite(result):
            raise ValueError(f"non-finite rational: {value!r}")
        return result

    if den == 0:
        raise ValueError(f"zero denominator in rational {num}/{den}")
    return float(num) / float(den)


def _normalize_ref(ref: Any) -> str:
    # Reference tags are single ASCII letters, sometimes NUL padded
    if ref is None:
        return ''
    if isinstance(ref, (list, tuple)):
        ref = ref[0] if ref else ''
    if isinstance(ref, bytes):
        ref = ref.decode('ascii', errors='ignore')
    return str(ref).strip('\x00 ').upper()
