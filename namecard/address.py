"""
Address detection with multi-line stitching.
"""

import logging
import re
from typing import List, Optional, Sequence

from .candidates import Candidate, CandidateKind, pick_best
from .contacts import LANDLINE_RE, MOBILE_RE
from .keywords import CITY_NAMES, ENGLISH_STREET_RE
from .lines import Line
from .matching import find_title, is_admin_token, is_place_token, is_url_or_email

logger = logging.getLogger(__name__)

MAX_CONTINUATION = 3
MIN_LINE_LENGTH = 5

DIGIT_RE = re.compile(r"\d")


def _is_blocked(text: str) -> bool:
    """Lines holding contact details or a title never belong to an address."""
    return (
        is_url_or_email(text)
        or bool(MOBILE_RE.search(text))
        or bool(LANDLINE_RE.search(text))
        or find_title(text) is not None
    )


def _is_city_prefixed(token: str) -> bool:
    """Fused forms such as "서울시강남구"."""
    return any(token.startswith(city) and len(token) > len(city) + 1 for city in CITY_NAMES) and is_admin_token(token)


def _admin_count(text: str) -> int:
    return sum(1 for token in text.split() if is_admin_token(token))


def starts_address(text: str) -> bool:
    if len(text) < MIN_LINE_LENGTH or _is_blocked(text):
        return False

    words = text.split()
    if any(is_place_token(word.strip(",.()")) or _is_city_prefixed(word) for word in words):
        return True

    admin = _admin_count(text)
    if admin >= 2:
        return True
    if admin == 1 and DIGIT_RE.search(text):
        return True
    return bool(ENGLISH_STREET_RE.search(text))


def continues_address(text: str) -> bool:
    if len(text) < MIN_LINE_LENGTH or _is_blocked(text):
        return False
    return bool(DIGIT_RE.search(text)) or _admin_count(text) > 0 or bool(ENGLISH_STREET_RE.search(text))


def address_candidates(lines: Sequence[Line]) -> List[Candidate]:
    """One candidate per start line, scored by how many lines it spans."""
    candidates: List[Candidate] = []

    for position, line in enumerate(lines):
        if not starts_address(line.text):
            continue

        parts = [line.text]
        for following in lines[position + 1: position + 1 + MAX_CONTINUATION]:
            if not continues_address(following.text):
                break
            parts.append(following.text)

        candidates.append(
            Candidate(
                value=" ".join(parts),
                score=len(parts),
                source_line=line.index,
                kind=CandidateKind.ADDRESS,
            )
        )

    return candidates


def detect_address(lines: Sequence[Line]) -> Optional[Candidate]:
    candidates = address_candidates(lines)
    best = pick_best(candidates, key=lambda c: (c.score, len(c.value)))
    logger.debug(f"Address: {len(candidates)} candidates, selected {best.value if best else None}")
    return best
