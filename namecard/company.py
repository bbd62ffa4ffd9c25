"""
Company detection.

Candidates come from corporate markers, ALL-CAPS brand lines and the
email domain. Ranking is by score, then by the longest value; the stored
value has Korean corporate markers removed.
"""

import dataclasses
import logging
import re
from typing import List, Optional, Sequence

from .candidates import Candidate, CandidateKind, pick_best
from .contacts import BARE_DOMAIN_RE, LANDLINE_RE, MOBILE_RE
from .keywords import (
    ENGLISH_LEGAL_SUFFIX_RE,
    ENGLISH_TITLE_RE,
    KOREAN_CORPORATE_MARKERS,
    PERSONAL_EMAIL_DOMAINS,
    ROMANIZED_SURNAMES,
)
from .lines import Line
from .matching import find_title, has_corporate_marker, is_name_token, is_title_token, is_url_or_email

logger = logging.getLogger(__name__)

DOMAIN_WINDOW = 15

LEGAL_SCORE = 30
DOMAIN_TEXT_SCORE = 20
BRAND_SCORE = 15
DOMAIN_DERIVED_SCORE = 5

BRAND_RE = re.compile(r"^[A-Z0-9&.,'\- ]{3,50}$")
LATIN_WORD_RE = re.compile(r"[A-Za-z]{4,}")
MARKER_RE = re.compile(
    "|".join(re.escape(marker) for marker in sorted(KOREAN_CORPORATE_MARKERS, key=len, reverse=True))
    + r"|\(\s*주\s*\)"
)

# Field labels printed in capitals on many cards.
_LABEL_WORDS = frozenset({
    "TEL", "FAX", "MOBILE", "PHONE", "EMAIL", "E-MAIL", "ADDRESS", "ADDR",
    "WEB", "WEBSITE", "HOMEPAGE", "OFFICE", "DIRECT",
})


def _is_contact_line(text: str) -> bool:
    return (
        is_url_or_email(text)
        or bool(BARE_DOMAIN_RE.search(text))
        or bool(MOBILE_RE.search(text))
        or bool(LANDLINE_RE.search(text))
    )


def _cut_at_title(text: str) -> str:
    """Keep the words before the first title ("(주)가나다 대표이사 홍길동" -> "(주)가나다")."""
    kept = []
    for word in text.split():
        if is_title_token(word) or ENGLISH_TITLE_RE.fullmatch(word):
            break
        kept.append(word)
    while kept and is_name_token(kept[-1]):
        kept.pop()
    return " ".join(kept)


def strip_markers(value: str) -> str:
    """Remove Korean corporate markers and tidy the remaining text."""
    value = MARKER_RE.sub(" ", value)
    value = " ".join(value.split())
    return value.strip(" ,-·|/:")


# =========================
# CANDIDATE RULES
# =========================

def _legal(line: Line) -> Optional[Candidate]:
    text = line.text
    korean = has_corporate_marker(text)
    if not korean and not ENGLISH_LEGAL_SUFFIX_RE.search(text):
        return None

    if find_title(text):
        if not korean:
            return None
        text = _cut_at_title(text)

    return Candidate(value=text, score=LEGAL_SCORE, source_line=line.index, kind=CandidateKind.LEGAL_SUFFIX)


def _is_romanized_name(text: str) -> bool:
    """Two or three plain words with a surname at either end ("HONG GILDONG")."""
    words = text.split()
    if not 2 <= len(words) <= 3 or not all(word.isalpha() for word in words):
        return False
    return words[0].lower() in ROMANIZED_SURNAMES or words[-1].lower() in ROMANIZED_SURNAMES


def _brand(line: Line) -> Optional[Candidate]:
    text = line.text
    if not BRAND_RE.match(text) or sum(c.isalpha() for c in text) < 3:
        return None
    if text.strip(" .:") in _LABEL_WORDS or find_title(text):
        return None
    if _is_romanized_name(text):
        return None
    return Candidate(value=text, score=BRAND_SCORE, source_line=line.index, kind=CandidateKind.BRAND)


def domain_label(email: str) -> str:
    """The part of an email domain before its first dot, lowercased."""
    if "@" not in email:
        return ""
    return email.rsplit("@", 1)[1].split(".", 1)[0].lower()


def _mentions_label(text: str, label: str) -> bool:
    compact = re.sub(r"[^0-9a-z]", "", text.lower())
    if len(label) >= 3 and label in compact:
        return True
    if len(compact) >= 3 and compact in label:
        return True
    return any(word.lower() in label for word in LATIN_WORD_RE.findall(text))


def _domain_candidates(lines: Sequence[Line], email: str) -> List[Candidate]:
    label = domain_label(email)
    if not label or label in PERSONAL_EMAIL_DOMAINS:
        return []

    found = [
        Candidate(value=line.text, score=DOMAIN_TEXT_SCORE, source_line=line.index, kind=CandidateKind.DOMAIN_TEXT)
        for line in lines[:DOMAIN_WINDOW]
        if not _is_contact_line(line.text) and not find_title(line.text) and _mentions_label(line.text, label)
    ]
    if found:
        return found

    return [Candidate(value=label.capitalize(), score=DOMAIN_DERIVED_SCORE, source_line=-1, kind=CandidateKind.DOMAIN_DERIVED)]


def company_candidates(lines: Sequence[Line], email: str = "") -> List[Candidate]:
    """Generate company candidates with their stored (marker-free) values.

    Args:
        lines: Normalized card lines
        email: Already detected email, used for domain back-inference

    Returns:
        Candidates in generation order; ones that are empty once markers
        are removed are dropped
    """
    raw: List[Candidate] = []
    for line in lines:
        if _is_contact_line(line.text):
            continue
        for rule in (_legal(line), _brand(line)):
            if rule is not None:
                raw.append(rule)
    raw.extend(_domain_candidates(lines, email))

    candidates = []
    for candidate in raw:
        value = strip_markers(candidate.value)
        if value:
            candidates.append(dataclasses.replace(candidate, value=value))
    return candidates


def detect_company(lines: Sequence[Line], email: str = "") -> Optional[Candidate]:
    candidates = company_candidates(lines, email)
    best = pick_best(candidates, key=lambda c: (c.score, len(c.value)))
    logger.debug(f"Company: {len(candidates)} candidates, selected {best.value if best else None}")
    return best
