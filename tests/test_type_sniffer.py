"""Tests for type_sniffer.py: content-based JPEG detection."""

import pytest

from gps_extractor.type_sniffer import JPEG_SIGNATURE, is_jpeg, read_header


class TestIsJpeg:
    def test_jpeg_with_jpg_extension(self, make_jpeg):
        assert is_jpeg(make_jpeg("photo.jpg")) is True

    def test_jpeg_with_misleading_extension(self, make_jpeg):
        assert is_jpeg(make_jpeg("photo.txt")) is True

    def test_jpeg_without_extension(self, make_jpeg):
        assert is_jpeg(make_jpeg("IMG_0001")) is True

    def test_text_named_jpg(self, make_text):
        assert is_jpeg(make_text("fake.jpg")) is False

    def test_png_is_not_jpeg(self, tmp_path):
        path = tmp_path / "image.jpg"
        path.write_bytes(b"\x89PNG\r\n\x1a\n" + b"\x00" * 32)
        assert is_jpeg(path) is False

    def test_signature_alone_is_enough(self, tmp_path):
        path = tmp_path / "stub"
        path.write_bytes(JPEG_SIGNATURE)
        assert is_jpeg(path) is True

    def test_soi_without_following_marker(self, tmp_path):
        path = tmp_path / "short"
        path.write_bytes(b"\xff\xd8")
        assert is_jpeg(path) is False

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.jpg"
        path.write_bytes(b"")
        assert is_jpeg(path) is False

    def test_missing_file_is_false(self, tmp_path):
        assert is_jpeg(tmp_path / "missing.jpg") is False

    def test_directory_is_false(self, tmp_path):
        assert is_jpeg(tmp_path) is False

    def test_missing_file_strict_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            is_jpeg(tmp_path / "missing.jpg", strict=True)

    def test_accepts_str_path(self, make_jpeg):
        assert is_jpeg(str(make_jpeg("photo.jpg"))) is True


class TestReadHeader:
    def test_short_file(self, tmp_path):
        path = tmp_path / "tiny"
        path.write_bytes(b"ab")
        assert read_header(path, 8) == b"ab"

    def test_reads_only_requested_bytes(self, make_jpeg):
        assert read_header(make_jpeg("photo.jpg"), 3) == JPEG_SIGNATURE
