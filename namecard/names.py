"""
Person-name detection.

Names sit near the top of a card, so only a leading window of lines is
considered. Each rule proposes scored candidates; the pooled maximum wins
when its score is positive, otherwise two simple fallbacks are tried.
"""

import logging
import re
from typing import List, Optional, Sequence

from .candidates import Candidate, CandidateKind, pick_best
from .keywords import COMMON_SURNAMES, COMPANY_WORDS, ENGLISH_TITLE_RE, ROMANIZED_SURNAMES, SURNAME_SET
from .lines import Line, tokens
from .matching import (
    HANGUL_NAME_RE,
    find_title,
    has_corporate_marker,
    is_name_shaped,
    is_name_token,
    is_place_token,
    is_title_token,
    is_unit_token,
    peel_title,
)

logger = logging.getLogger(__name__)

NAME_WINDOW = 10
FALLBACK_WINDOW = 3

# Base scores per rule
TITLE_INLINE_SCORE = 15
TITLE_ADJACENT_SCORE = 25
MIXED_SPACED_SCORE = 18
MIXED_FUSED_SCORE = 16
LATIN_SHORT_SCORE = 12
LATIN_LONG_SCORE = 18

KEYWORD_PENALTY = 50
COLLISION_PENALTY = 30

SPACED_NAME_RE = re.compile(r"^[가-힣](?:\s+[가-힣]{1,3}){1,3}$")
LATIN_NAME_RE = re.compile(
    r"(?<![A-Za-z])([A-Z][a-z]+)\s+([A-Z][a-z]+(?:-[A-Za-z][a-z]+)?)(?:\s+([A-Z][a-z]+))?(?![A-Za-z-])"
)
# Korean name directly followed by a Latin rendering: "양희연 H.Hailey Yang", "양희연H.Hailey"
MIXED_SCRIPT_RE = re.compile(r"(?<![가-힣])([가-힣]{2,4})(\s*)(?=[A-Z])")
WESTERN_NAME_RE = re.compile(r"^[A-Z][a-z]+(?:\s[A-Z]\.)?\s[A-Z][a-z]+$")

_NON_NAME_WORDS = frozenset({
    "street", "avenue", "road", "tower", "building", "center", "centre",
    "plaza", "office", "team", "department", "university", "school", "law",
    "bank", "hotel", "hospital", "clinic", "seoul", "busan", "korea",
})


def _korean_bonus(name: str) -> int:
    """Length-3 names and frequent surnames are the most likely readings."""
    bonus = 10 if len(name) == 3 else 0
    if name[0] in COMMON_SURNAMES:
        bonus += 20
    elif name[0] in SURNAME_SET:
        bonus += 10
    return bonus


def _recency(index: int) -> int:
    return max(0, NAME_WINDOW - index)


def _looks_like_non_name(words: Sequence[str]) -> bool:
    for word in words:
        lowered = word.lower()
        if lowered in COMPANY_WORDS or lowered in _NON_NAME_WORDS:
            return True
        if ENGLISH_TITLE_RE.fullmatch(word):
            return True
    return False


def _name_tokens(text: str) -> List[str]:
    """Korean name tokens on a line, peeling fused titles ("홍길동대표")."""
    found = []
    for token in tokens(text):
        token = peel_title(token)
        if is_name_token(token) and token not in found:
            found.append(token)
    return found


class _CandidatePool:
    """Collects name candidates, applying the shared score adjustments."""

    def __init__(self, taken: Sequence[str]):
        self.taken = {value for value in taken if value}
        self.candidates: List[Candidate] = []

    def add(self, value: str, base: int, line_index: int, kind: CandidateKind) -> None:
        score = base + _recency(line_index)
        if value in self.taken:
            score -= COLLISION_PENALTY
        self.candidates.append(Candidate(value=value, score=score, source_line=line_index, kind=kind))


def _add_korean_line(pool: _CandidatePool, line: Line) -> None:
    text = line.text
    if HANGUL_NAME_RE.match(text):
        name, kind = text, CandidateKind.KOREAN
    elif SPACED_NAME_RE.match(text):
        name, kind = re.sub(r"\s+", "", text), CandidateKind.KOREAN_SPACED
        if not HANGUL_NAME_RE.match(name):
            return
    else:
        return

    if name[0] not in SURNAME_SET or is_place_token(name) or is_unit_token(name):
        return

    score = _korean_bonus(name)
    if is_title_token(name) or has_corporate_marker(name):
        score -= KEYWORD_PENALTY
    pool.add(name, score, line.index, kind)


def _add_latin(pool: _CandidatePool, line: Line) -> None:
    for match in LATIN_NAME_RE.finditer(line.text):
        words = [word for word in match.groups() if word]
        if words[0].lower() not in ROMANIZED_SURNAMES or _looks_like_non_name(words):
            continue
        parts = len(words) + sum(word.count("-") for word in words)
        base = LATIN_LONG_SCORE if parts >= 3 else LATIN_SHORT_SCORE
        pool.add(" ".join(words), base, line.index, CandidateKind.ENGLISH)


def _add_mixed_script(pool: _CandidatePool, line: Line) -> None:
    for match in MIXED_SCRIPT_RE.finditer(line.text):
        name, gap = match.groups()
        if not is_name_token(name):
            continue
        base = MIXED_SPACED_SCORE if gap else MIXED_FUSED_SCORE
        pool.add(name, base + _korean_bonus(name), line.index, CandidateKind.MIXED_SCRIPT)


def _add_title_context(pool: _CandidatePool, line: Line, window: Sequence[Line]) -> None:
    if not find_title(line.text):
        return

    for name in _name_tokens(line.text):
        pool.add(name, TITLE_INLINE_SCORE + _korean_bonus(name), line.index, CandidateKind.TITLE_INLINE)

    for neighbor_index in (line.index - 1, line.index + 1):
        if not 0 <= neighbor_index < len(window):
            continue
        neighbor = window[neighbor_index]
        for name in _name_tokens(neighbor.text):
            pool.add(
                name,
                TITLE_ADJACENT_SCORE + _korean_bonus(name),
                neighbor.index,
                CandidateKind.TITLE_ADJACENT,
            )


def name_candidates(lines: Sequence[Line], company: str = "", position: str = "") -> List[Candidate]:
    """Score every name reading found in the leading window of lines.

    Args:
        lines: Normalized card lines
        company: Already chosen company, penalized on collision
        position: Already chosen position, penalized on collision

    Returns:
        Candidates in generation order (line by line)
    """
    window = list(lines[:NAME_WINDOW])
    pool = _CandidatePool([company, position])

    for line in window:
        _add_korean_line(pool, line)
        _add_latin(pool, line)
        _add_mixed_script(pool, line)
        _add_title_context(pool, line, window)

    return pool.candidates


def _collides(text: str, company: str, position: str) -> bool:
    """True when a line is the chosen company or part of the chosen position."""
    return bool(company and text == company) or bool(position and text in position)


def _fallback(lines: Sequence[Line], company: str = "", position: str = "") -> Optional[Candidate]:
    for line in lines[:FALLBACK_WINDOW]:
        text = line.text
        if is_name_shaped(text) and not _collides(text, company, position):
            return Candidate(value=text, score=0, source_line=line.index, kind=CandidateKind.FALLBACK)

    for line in lines[:NAME_WINDOW]:
        text = line.text
        if len(text) > 25 or not WESTERN_NAME_RE.match(text) or _looks_like_non_name(text.split()):
            continue
        if not _collides(text, company, position):
            return Candidate(value=text, score=0, source_line=line.index, kind=CandidateKind.FALLBACK)

    return None


def detect_name(lines: Sequence[Line], company: str = "", position: str = "") -> Optional[Candidate]:
    candidates = name_candidates(lines, company, position)
    best = pick_best(candidates)

    logger.debug(f"Name: {len(candidates)} candidates, best {best}")

    if best is not None and best.score > 0:
        return best
    return _fallback(lines, company, position)
