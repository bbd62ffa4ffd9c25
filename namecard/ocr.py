"""
Local EasyOCR extractor (fallback engine when Vision is unavailable).
"""
import logging
import os
import re
from pathlib import Path
from typing import Dict, List, Sequence

logger = logging.getLogger(__name__)

try:
    import cv2
    import easyocr
    import numpy as np
    EASYOCR_AVAILABLE = True
except ImportError:
    cv2 = None
    easyocr = None
    np = None
    EASYOCR_AVAILABLE = False
    logger.warning("easyocr not installed. Run: pip install namecard[ocr]")

MIN_CONFIDENCE = 0.15


def group_into_lines(results: Sequence, tolerance: float = 0.5) -> List[List]:
    """
    Group EasyOCR detections into visual lines.

    A detection joins the current line when its vertical centre lies within
    ``tolerance`` box-heights of the line's first box. Boxes in a line are
    ordered left to right.

    Args:
        results: EasyOCR ``readtext`` output of ``(bbox, text, confidence)``
        tolerance: Fraction of box height used as the same-line threshold

    Returns:
        Lines, each a list of detections
    """
    def top(item):
        return min(point[1] for point in item[0])

    def height(item):
        ys = [point[1] for point in item[0]]
        return max(max(ys) - min(ys), 1)

    def centre(item):
        ys = [point[1] for point in item[0]]
        return (max(ys) + min(ys)) / 2

    lines: List[List] = []
    for item in sorted(results, key=top):
        if lines:
            anchor = lines[-1][0]
            if abs(centre(item) - centre(anchor)) <= height(anchor) * tolerance:
                lines[-1].append(item)
                continue
        lines.append([item])

    return [sorted(line, key=lambda item: min(point[0] for point in item[0])) for line in lines]


def correct_text(text: str) -> str:
    """Fix OCR slips in web addresses ("www . abc", ".c0m") and tidy spaces."""
    text = re.sub(r"www\s*\.\s*", "www.", text, flags=re.IGNORECASE)
    text = re.sub(r"\.c[o0]m\b", ".com", text, flags=re.IGNORECASE)
    text = re.sub(r"@(\w+)\s*\.\s*(com|net|org|co\.kr|kr)\b", r"@\1.\2", text, flags=re.IGNORECASE)
    return " ".join(text.split())


class OCRExtractor:
    """OCR extractor using a local EasyOCR reader."""

    method = "easyocr"

    def __init__(
        self,
        languages: List[str] = None,
        gpu: bool = False,
        model_dir: str = "./models",
        max_dimension: int = 2400,
    ):
        """
        Initialize OCR extractor.

        Args:
            languages: List of languages for OCR
            gpu: Use GPU for OCR
            model_dir: Directory for model storage
            max_dimension: Longer image side is scaled down to this
        """
        self.languages = languages or ["ko", "en"]
        self.gpu = gpu
        self.max_dimension = max_dimension
        self.reader = None

        if not EASYOCR_AVAILABLE:
            logger.error("easyocr package not installed")
            return

        os.makedirs(model_dir, exist_ok=True)

        logger.info(f"Initializing EasyOCR with languages: {self.languages}")
        try:
            self.reader = easyocr.Reader(
                lang_list=self.languages,
                gpu=self.gpu,
                model_storage_directory=model_dir,
                download_enabled=True,
                verbose=False,
            )
            logger.info("EasyOCR initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize EasyOCR: {e}")

    def is_available(self) -> bool:
        return self.reader is not None

    def _load_image(self, image_path: Path):
        img = cv2.imread(str(image_path))
        if img is None:
            raise ValueError(f"Cannot read image: {image_path}")

        h, w = img.shape[:2]
        longest = max(h, w)
        if longest > self.max_dimension:
            scale = self.max_dimension / longest
            img = cv2.resize(img, (int(w * scale), int(h * scale)), interpolation=cv2.INTER_AREA)
            logger.debug(f"Resized from {w}x{h} to {img.shape[1]}x{img.shape[0]}")

        if img.dtype != np.uint8:
            img = img.astype(np.uint8)
        return img

    def extract_text(self, image_path: Path) -> Dict:
        """
        Extract text from image.

        Args:
            image_path: Path to image

        Returns:
            Dictionary with extraction results
        """
        if not self.is_available():
            return {
                "success": False,
                "error": "EasyOCR not available",
                "raw_text": "",
                "confidence": 0.0,
                "method": self.method,
            }

        try:
            logger.info(f"Extracting text from {image_path}")
            img = self._load_image(Path(image_path))
            results = self.reader.readtext(img, detail=1, paragraph=False)

            kept = [item for item in results if item[2] >= MIN_CONFIDENCE and item[1].strip()]

            lines = []
            for group in group_into_lines(kept):
                line = correct_text(" ".join(item[1].strip() for item in group))
                if line:
                    lines.append(line)

            # Longer text weighs more in the overall confidence.
            weights = [len(item[1]) for item in kept]
            total_weight = sum(weights)
            confidence = sum(item[2] * w for item, w in zip(kept, weights)) / total_weight if total_weight else 0.0

            logger.info(f"Extracted {len(lines)} lines with {confidence:.2%} confidence")

            if not lines:
                return {
                    "success": False,
                    "error": "No text extracted from image",
                    "raw_text": "",
                    "confidence": 0.0,
                    "method": self.method,
                }

            return {
                "success": True,
                "raw_text": "\n".join(lines),
                "confidence": confidence,
                "method": self.method,
            }

        except Exception as e:
            logger.error(f"OCR extraction error: {e}", exc_info=True)
            return {
                "success": False,
                "error": str(e),
                "raw_text": "",
                "confidence": 0.0,
                "method": self.method,
            }
