"""
Tests for GoogleVisionOCR.

The Vision REST call is mocked; images are generated with Pillow.
"""

import base64
import io

import pytest
import requests
from PIL import Image
from unittest.mock import Mock, patch

from namecard.vision import MAX_IMAGE_SIZE, VISION_ENDPOINT, GoogleVisionOCR


def vision_response(payload, ok=True, status_code=200):
    response = Mock()
    response.ok = ok
    response.status_code = status_code
    response.json.return_value = payload
    return response


class TestGoogleVisionOCR:
    """Test cases for GoogleVisionOCR."""

    @pytest.fixture
    def image_path(self, tmp_path):
        path = tmp_path / "card.png"
        Image.new("RGB", (3000, 2000), "white").save(path)
        return path

    @pytest.fixture
    def ocr(self):
        return GoogleVisionOCR(api_key="test-key", timeout=5)

    @patch("namecard.vision.requests.post")
    def test_extract_text(self, mock_post, ocr, image_path):
        mock_post.return_value = vision_response({
            "responses": [{
                "fullTextAnnotation": {
                    "text": "홍길동\n010-1234-5678\n",
                    "pages": [{"confidence": 0.9}],
                }
            }]
        })

        result = ocr.extract_text(image_path)

        assert result["success"] is True
        assert result["raw_text"] == "홍길동\n010-1234-5678"
        assert result["confidence"] == pytest.approx(0.9)
        assert result["method"] == "google_vision"

        args, kwargs = mock_post.call_args
        assert args[0] == VISION_ENDPOINT
        assert kwargs["params"] == {"key": "test-key"}
        assert kwargs["timeout"] == 5
        request = kwargs["json"]["requests"][0]
        assert request["features"] == [{"type": "DOCUMENT_TEXT_DETECTION"}]
        assert request["imageContext"] == {"languageHints": ["ko", "en"]}

    @patch("namecard.vision.requests.post")
    def test_image_is_downscaled_jpeg(self, mock_post, ocr, image_path):
        mock_post.return_value = vision_response({"responses": [{"fullTextAnnotation": {"text": "x"}}]})

        ocr.extract_text(image_path)

        content = mock_post.call_args[1]["json"]["requests"][0]["image"]["content"]
        with Image.open(io.BytesIO(base64.b64decode(content))) as sent:
            assert sent.format == "JPEG"
            assert sent.width <= MAX_IMAGE_SIZE[0]
            assert sent.height <= MAX_IMAGE_SIZE[1]

    def test_missing_api_key(self, monkeypatch, image_path):
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        ocr = GoogleVisionOCR()

        result = ocr.extract_text(image_path)

        assert ocr.is_available() is False
        assert result["success"] is False
        assert "not configured" in result["error"]

    def test_api_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "env-key")
        assert GoogleVisionOCR().api_key == "env-key"

    def test_unreadable_image(self, ocr, tmp_path):
        path = tmp_path / "broken.jpg"
        path.write_bytes(b"not an image")

        result = ocr.extract_text(path)

        assert result["success"] is False
        assert "Cannot read image" in result["error"]

    @patch("namecard.vision.requests.post")
    def test_network_error(self, mock_post, ocr, image_path):
        mock_post.side_effect = requests.ConnectionError("connection refused")

        result = ocr.extract_text(image_path)

        assert result["success"] is False
        assert "connection refused" in result["error"]

    @patch("namecard.vision.requests.post")
    def test_http_error(self, mock_post, ocr, image_path):
        mock_post.return_value = vision_response(
            {"error": {"message": "API key not valid"}}, ok=False, status_code=400
        )

        result = ocr.extract_text(image_path)

        assert result["success"] is False
        assert "API key not valid" in result["error"]

    @patch("namecard.vision.requests.post")
    def test_invalid_json(self, mock_post, ocr, image_path):
        response = vision_response({})
        response.json.side_effect = ValueError("no json")
        mock_post.return_value = response

        result = ocr.extract_text(image_path)

        assert result["success"] is False
        assert "Invalid JSON" in result["error"]

    @patch("namecard.vision.requests.post")
    def test_no_text(self, mock_post, ocr, image_path):
        mock_post.return_value = vision_response({"responses": [{}]})

        result = ocr.extract_text(image_path)

        assert result["success"] is False
        assert result["error"] == "No text detected"
