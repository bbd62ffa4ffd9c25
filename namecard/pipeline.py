"""
Business Card Processing Pipeline

OCR with Google Vision first and local EasyOCR as the fallback, then field
extraction with the card parser.
"""

import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from .ocr import OCRExtractor
from .parser import CardParser
from .vision import GoogleVisionOCR

logger = logging.getLogger(__name__)


class CardPipeline:
    """Complete pipeline for processing business cards.

    OCR engines are tried in order (Vision, then EasyOCR); the first one
    that returns text wins.
    """

    def __init__(
        self,
        vision: Optional[GoogleVisionOCR] = None,
        local_ocr: Optional[OCRExtractor] = None,
        parser: Optional[CardParser] = None,
        google_api_key: Optional[str] = None,
        vision_timeout: float = 30.0,
        use_local_ocr: bool = True,
        ocr_languages: List[str] = None,
        ocr_gpu: bool = False,
        ocr_max_dimension: int = 2400,
    ):
        self.vision = vision or GoogleVisionOCR(
            api_key=google_api_key,
            timeout=vision_timeout,
            language_hints=ocr_languages,
        )

        self.local_ocr = local_ocr
        if self.local_ocr is None and use_local_ocr:
            self.local_ocr = OCRExtractor(
                languages=ocr_languages or ["ko", "en"],
                gpu=ocr_gpu,
                max_dimension=ocr_max_dimension,
            )

        self.parser = parser or CardParser()

        logger.info("CardPipeline initialized")

    def _engines(self) -> List:
        engines = []
        if self.vision is not None and self.vision.is_available():
            engines.append(self.vision)
        if self.local_ocr is not None and self.local_ocr.is_available():
            engines.append(self.local_ocr)
        return engines

    def _run_ocr(self, image_path: Path) -> Dict:
        """Try each OCR engine in turn; return the first result with text."""
        errors = []
        for engine in self._engines():
            ocr_start = time.time()
            result = engine.extract_text(image_path)
            logger.debug(f"{engine.method}: {time.time() - ocr_start:.2f}s")

            if result.get("success") and result.get("raw_text"):
                return result

            errors.append(f"{engine.method}: {result.get('error', 'no text')}")
            logger.warning(f"{engine.method} failed ({result.get('error')}), trying next engine")

        return {
            "success": False,
            "error": "; ".join(errors) or "No OCR engine available",
            "raw_text": "",
            "confidence": 0.0,
            "method": None,
        }

    # ======================================================
    # SINGLE IMAGE
    # ======================================================

    def process_image(self, image_path: Path) -> Dict:
        """
        Process a business card image.

        Args:
            image_path: Path to the image
        """
        start_time = time.time()

        try:
            logger.info(f"Processing image: {image_path}")

            ocr_result = self._run_ocr(Path(image_path))
            if not ocr_result["success"]:
                return {
                    "success": False,
                    "error": ocr_result["error"],
                    "raw_text": "",
                    "image": str(image_path),
                }

            record = self.parser.parse(ocr_result["raw_text"])

            total_time = time.time() - start_time
            logger.info(f"Total processing time: {total_time:.2f}s ({ocr_result['method']})")

            return {
                "success": True,
                "contact_data": record.to_dict(),
                "raw_text": record.raw_text,
                "ocr_confidence": ocr_result.get("confidence", 0.0),
                "ocr_method": ocr_result["method"],
                "processing_time_ms": int(total_time * 1000),
                "image": str(image_path),
                "processed_at": datetime.now(timezone.utc).isoformat(),
            }

        except Exception as e:
            logger.exception("Pipeline error")
            return {
                "success": False,
                "error": str(e),
                "image": str(image_path),
            }

    def process_text(self, text: str) -> Dict:
        """Extract fields from already recognized text."""
        start_time = time.time()
        record = self.parser.parse(text)
        return {
            "success": True,
            "contact_data": record.to_dict(),
            "raw_text": record.raw_text,
            "ocr_method": None,
            "processing_time_ms": int((time.time() - start_time) * 1000),
            "processed_at": datetime.now(timezone.utc).isoformat(),
        }

    # ======================================================
    # STATUS
    # ======================================================

    def get_status(self) -> Dict:
        """Get pipeline status information."""
        return {
            "ocr_engines": [engine.method for engine in self._engines()],
            "vision_enabled": self.vision is not None and self.vision.is_available(),
            "local_ocr_enabled": self.local_ocr is not None and self.local_ocr.is_available(),
            "ocr_languages": self.vision.language_hints if self.vision is not None else [],
        }
