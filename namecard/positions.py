"""
Position (job title) detection.

Three candidate rules, strongest first:
    unit + title on one line      "마케팅팀 팀장"
    unit line next to a title     "마케팅팀" / "팀장"
    any line carrying a title     "Senior Manager", "홍길동 대표"
"""

import logging
import re
from typing import List, Optional, Sequence

from .candidates import Candidate, CandidateKind, pick_best
from .keywords import ENGLISH_TITLE_RE, KOREAN_TITLES, ROMANIZED_SURNAMES, UNIT_SUFFIXES
from .lines import Line, tokens
from .matching import find_title, has_corporate_marker, is_exact_title, is_name_token, is_title_token, peel_title

logger = logging.getLogger(__name__)

POSITION_WINDOW = 15
MAX_POSITION_LENGTH = 30
MAX_UNIT_LENGTH = 20

UNIT_INLINE_SCORE = 30
STITCHED_SCORE = 25
KEYWORD_SCORE = 15
NAME_PROXIMITY_BONUS = 5

_UNITS = "|".join(UNIT_SUFFIXES)
_TITLES = "|".join(re.escape(t) for t in sorted(KOREAN_TITLES, key=len, reverse=True))

UNIT_TITLE_RE = re.compile(rf"[가-힣A-Za-z0-9&]+?(?:{_UNITS})\s*(?:{_TITLES})")
UNIT_LINE_RE = re.compile(rf"[가-힣A-Za-z&][가-힣A-Za-z&\s]*(?:{_UNITS})")
LONG_DIGITS_RE = re.compile(r"\d{3,}")
LATIN_NAME_TAIL_RE = re.compile(r"[\s,]+([A-Z][a-z]+(?:\s+[A-Z][a-z]+){1,2})")


def _has_name(line: Line) -> bool:
    return any(is_name_token(peel_title(token)) for token in tokens(line.text))


def _near_name(line: Line, window: Sequence[Line]) -> bool:
    for index in (line.index - 1, line.index, line.index + 1):
        if 0 <= index < len(window) and _has_name(window[index]):
            return True
    return False


def _unit_inline(line: Line) -> Optional[Candidate]:
    if has_corporate_marker(line.text):
        return None
    match = UNIT_TITLE_RE.search(line.text)
    if not match:
        return None
    value = " ".join(match.group(0).split())
    return Candidate(value=value, score=UNIT_INLINE_SCORE, source_line=line.index, kind=CandidateKind.UNIT_INLINE)


def _is_unit_line(text: str) -> bool:
    return (
        len(text) <= MAX_UNIT_LENGTH
        and bool(UNIT_LINE_RE.fullmatch(text))
        and not is_title_token(text)
        and not has_corporate_marker(text)
    )


def _stitched(line: Line, window: Sequence[Line]) -> Optional[Candidate]:
    if not _is_unit_line(line.text):
        return None

    # The line below is the usual layout; the line above is tried second.
    for index in (line.index + 1, line.index - 1):
        if 0 <= index < len(window) and is_exact_title(window[index].text):
            value = f"{line.text} {window[index].text.strip()}"
            return Candidate(value=value, score=STITCHED_SCORE, source_line=line.index, kind=CandidateKind.STITCHED)
    return None


def _strip_names(text: str, title: str) -> str:
    """Remove Korean personal-name tokens, keeping any title fused onto them."""
    kept = []
    for token in text.split():
        if is_name_token(token):
            continue
        peeled = peel_title(token)
        if peeled != token and is_name_token(peeled):
            token = token[len(peeled):]
        kept.append(token)
    return " ".join(kept) or title


def _strip_latin_name(text: str) -> str:
    """Drop a romanized name printed after an English title ("CEO John Kim" -> "CEO")."""
    titles = list(ENGLISH_TITLE_RE.finditer(text))
    if not titles:
        return text

    head = text[: titles[-1].end()]
    match = LATIN_NAME_TAIL_RE.fullmatch(text, titles[-1].end())
    if not match:
        return text

    words = match.group(1).split()
    if words[0].lower() in ROMANIZED_SURNAMES or words[-1].lower() in ROMANIZED_SURNAMES:
        return head
    return text


def _keyword(line: Line, window: Sequence[Line]) -> Optional[Candidate]:
    text = line.text
    if len(text) > MAX_POSITION_LENGTH or "@" in text or LONG_DIGITS_RE.search(text):
        return None

    title = find_title(text)
    if not title:
        return None

    value = title if has_corporate_marker(text) else _strip_latin_name(_strip_names(text, title))
    score = KEYWORD_SCORE
    if _near_name(line, window):
        score += NAME_PROXIMITY_BONUS
    return Candidate(value=value, score=score, source_line=line.index, kind=CandidateKind.KEYWORD)


def position_candidates(lines: Sequence[Line]) -> List[Candidate]:
    window = list(lines[:POSITION_WINDOW])
    candidates: List[Candidate] = []

    for line in window:
        for rule in (_unit_inline(line), _stitched(line, window), _keyword(line, window)):
            if rule is not None:
                candidates.append(rule)

    return candidates


def detect_position(lines: Sequence[Line]) -> Optional[Candidate]:
    """Pick the strongest position candidate; the earliest line wins ties."""
    candidates = position_candidates(lines)
    best = pick_best(candidates)
    logger.debug(f"Position: {len(candidates)} candidates, selected {best.value if best else None}")
    return best
