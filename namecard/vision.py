"""
Google Cloud Vision OCR (primary engine).

Sends the card image to the Vision REST endpoint with DOCUMENT_TEXT_DETECTION
and Korean/English language hints. Images are downscaled and re-encoded as
JPEG first so that requests stay well below Vision's 4MB payload limit.
"""

import base64
import io
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import requests
from PIL import Image

logger = logging.getLogger(__name__)

VISION_ENDPOINT = "https://vision.googleapis.com/v1/images:annotate"
MAX_IMAGE_SIZE: Tuple[int, int] = (1920, 1080)
JPEG_QUALITY = 85


class GoogleVisionOCR:
    """Text extraction through the Cloud Vision images:annotate API."""

    method = "google_vision"

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        language_hints: Optional[List[str]] = None,
    ):
        """
        Args:
            api_key: Google API key (or set GOOGLE_API_KEY env var)
            timeout: Request timeout in seconds
            language_hints: Vision language hints, Korean and English by default
        """
        self.api_key = api_key or os.getenv("GOOGLE_API_KEY")
        self.timeout = timeout
        self.language_hints = language_hints or ["ko", "en"]

        if not self.api_key:
            logger.warning("No Google API key provided. Set GOOGLE_API_KEY to enable Vision OCR")

    def is_available(self) -> bool:
        return bool(self.api_key)

    def _encode_image(self, image_path: Path) -> str:
        """Downscale to fit MAX_IMAGE_SIZE and return base64 JPEG content."""
        with Image.open(image_path) as img:
            img = img.convert("RGB")
            img.thumbnail(MAX_IMAGE_SIZE, Image.LANCZOS)
            buffer = io.BytesIO()
            img.save(buffer, format="JPEG", quality=JPEG_QUALITY)

        logger.debug(f"Encoded {image_path} as {buffer.tell()} byte JPEG")
        return base64.b64encode(buffer.getvalue()).decode("utf-8")

    def _build_request(self, content: str) -> Dict:
        return {
            "requests": [
                {
                    "image": {"content": content},
                    "features": [{"type": "DOCUMENT_TEXT_DETECTION"}],
                    "imageContext": {"languageHints": self.language_hints},
                }
            ]
        }

    def _failure(self, error: str) -> Dict:
        return {
            "success": False,
            "error": error,
            "raw_text": "",
            "confidence": 0.0,
            "method": self.method,
        }

    def extract_text(self, image_path: Path) -> Dict:
        """
        Extract text from a business card image.

        Args:
            image_path: Path to image

        Returns:
            Dictionary with extraction results
        """
        if not self.is_available():
            return self._failure("Google API key not configured")

        try:
            content = self._encode_image(Path(image_path))
        except (OSError, ValueError) as e:
            logger.error(f"Cannot read image {image_path}: {e}")
            return self._failure(f"Cannot read image: {e}")

        try:
            response = requests.post(
                VISION_ENDPOINT,
                params={"key": self.api_key},
                json=self._build_request(content),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Vision API request failed: {e}")
            return self._failure(f"Vision API request failed: {e}")

        try:
            payload = response.json()
        except ValueError:
            logger.error(f"Invalid JSON response from Vision API (status {response.status_code})")
            return self._failure("Invalid JSON response from Vision API")

        if not response.ok:
            message = payload.get("error", {}).get("message", "Unknown error")
            logger.error(f"Vision API error {response.status_code}: {message}")
            return self._failure(f"Vision API failed: {message}")

        first = (payload.get("responses") or [{}])[0]
        if "error" in first:
            return self._failure(f"Vision API failed: {first['error'].get('message', 'Unknown error')}")

        annotation = first.get("fullTextAnnotation") or {}
        text = annotation.get("text", "").strip()
        if not text:
            return self._failure("No text detected")

        confidences = [page.get("confidence") for page in annotation.get("pages", []) if page.get("confidence")]
        confidence = sum(confidences) / len(confidences) if confidences else 1.0

        logger.info(f"Vision extracted {len(text.splitlines())} lines")
        return {
            "success": True,
            "raw_text": text,
            "confidence": confidence,
            "method": self.method,
        }
