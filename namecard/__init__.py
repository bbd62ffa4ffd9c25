"""
Business card field extraction for Korean/English OCR text.
"""

from .candidates import Candidate, CandidateKind
from .export import SHEET_HEADER, find_duplicate, to_sheet_row
from .lines import Line, split_lines
from .ocr import OCRExtractor
from .parser import BusinessCardRecord, CardParser, extract
from .pipeline import CardPipeline
from .vision import GoogleVisionOCR

__all__ = [
    "BusinessCardRecord",
    "Candidate",
    "CandidateKind",
    "CardParser",
    "CardPipeline",
    "GoogleVisionOCR",
    "Line",
    "OCRExtractor",
    "SHEET_HEADER",
    "extract",
    "find_duplicate",
    "split_lines",
    "to_sheet_row",
]
