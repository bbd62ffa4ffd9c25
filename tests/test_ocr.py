"""
Tests for the local EasyOCR extractor.

EasyOCR itself is mocked; only line grouping and result handling are tested.
"""

import pytest
from unittest.mock import Mock, patch

from namecard.ocr import OCRExtractor, correct_text, group_into_lines


def box(x, y, w=50, h=20):
    return [[x, y], [x + w, y], [x + w, y + h], [x, y + h]]


class TestLineGrouping:

    def test_groups_by_vertical_position(self):
        results = [
            (box(0, 40, 100), "010-1234-5678", 0.95),
            (box(60, 2), "Hong", 0.8),
            (box(0, 0), "홍길동", 0.9),
        ]

        lines = group_into_lines(results)

        assert [[item[1] for item in line] for line in lines] == [["홍길동", "Hong"], ["010-1234-5678"]]

    def test_empty(self):
        assert group_into_lines([]) == []


class TestTextCorrection:

    @pytest.mark.parametrize("text,expected", [
        ("www . abc.c0m", "www.abc.com"),
        ("kim@abc . com", "kim@abc.com"),
        ("  홍길동   대표 ", "홍길동 대표"),
    ])
    def test_correct_text(self, text, expected):
        assert correct_text(text) == expected


class TestOCRExtractor:
    """Test cases for OCRExtractor with a fake reader."""

    @pytest.fixture
    def reader(self):
        return Mock()

    @pytest.fixture
    def extractor(self, reader, tmp_path):
        with patch("namecard.ocr.EASYOCR_AVAILABLE", True), patch("namecard.ocr.easyocr") as mock_easyocr:
            mock_easyocr.Reader.return_value = reader
            extractor = OCRExtractor(model_dir=str(tmp_path / "models"))
        extractor._load_image = Mock(return_value="image")
        return extractor

    def test_default_languages(self, extractor):
        assert extractor.languages == ["ko", "en"]
        assert extractor.is_available() is True

    def test_extract_text(self, extractor, reader):
        reader.readtext.return_value = [
            (box(0, 0), "홍길동", 0.9),
            (box(60, 2), "대표", 0.9),
            (box(0, 40, 120), "www . abc.c0m", 0.8),
            (box(0, 80), "noise", 0.05),
        ]

        result = extractor.extract_text("card.jpg")

        assert result["success"] is True
        assert result["raw_text"] == "홍길동 대표\nwww.abc.com"
        assert result["method"] == "easyocr"
        assert 0.8 <= result["confidence"] <= 0.9

    def test_no_text(self, extractor, reader):
        reader.readtext.return_value = []

        result = extractor.extract_text("card.jpg")

        assert result["success"] is False
        assert result["error"] == "No text extracted from image"

    def test_reader_error(self, extractor, reader):
        reader.readtext.side_effect = RuntimeError("CUDA out of memory")

        result = extractor.extract_text("card.jpg")

        assert result["success"] is False
        assert "CUDA" in result["error"]

    def test_unavailable_without_easyocr(self, tmp_path):
        with patch("namecard.ocr.EASYOCR_AVAILABLE", False):
            extractor = OCRExtractor(model_dir=str(tmp_path / "models"))

        result = extractor.extract_text("card.jpg")

        assert extractor.is_available() is False
        assert result["success"] is False
        assert result["error"] == "EasyOCR not available"
