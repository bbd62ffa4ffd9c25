"""
Line normalization shared by every detector.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

HANGUL_RE = re.compile(r"[가-힣]")


@dataclass(frozen=True)
class Line:
    """A trimmed, non-empty OCR line and its position in the card."""

    text: str
    index: int

    @property
    def lower(self) -> str:
        return self.text.lower()

    def has_hangul(self) -> bool:
        return bool(HANGUL_RE.search(self.text))


def split_lines(raw_text: Optional[str]) -> List[Line]:
    """Split raw OCR text into trimmed, non-empty lines.

    Args:
        raw_text: Full OCR output; may be empty or None

    Returns:
        Lines in OCR order, indexed from 0 after empty lines are dropped
    """
    if not raw_text:
        return []

    lines: List[Line] = []
    for chunk in raw_text.splitlines():
        text = chunk.strip()
        if text:
            lines.append(Line(text=text, index=len(lines)))
    return lines


def tokens(text: str) -> List[str]:
    """Split a line into tokens on whitespace and common card punctuation."""
    return [t for t in re.split(r"[\s|/·•,()\[\]_\-]+", text) if t]
