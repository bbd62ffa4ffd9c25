"""
Email, phone and website detectors.

These run first: they have the strongest structural signal, and the
company detector reads the email they produce.
"""

import logging
import re
from typing import Dict, List, Optional, Sequence

from .candidates import Candidate, CandidateKind, pick_best
from .keywords import (
    EMAIL_LABELS,
    FAX_HINT_RE,
    MOBILE_HINT_RE,
    OFFICE_HINT_RE,
    WEBSITE_TLDS,
)
from .lines import Line

logger = logging.getLogger(__name__)


EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")

MOBILE_RE = re.compile(
    r"(?<![\d+])(?:(\+?82)[\s.\-]*(?:\(0\)[\s.\-]*)?)?"
    r"(0?1[016789])[\s.\-]*(\d{3,4})[\s.\-]*(\d{4})(?!\d)"
)
LANDLINE_RE = re.compile(
    r"(?<![\d+])(?:(\+?82)[\s.\-]*)?"
    r"\(?(0?\d{1,2})\)?[\s.\-]*(\d{3,4})[\s.\-]*(\d{4})(?!\d)"
)
INTERNATIONAL_RE = re.compile(
    r"(?<![\d+])\+(\d{1,3})((?:[\s.\-]*\(?\d{1,4}\)?){2,5})(?!\d)"
)

URL_RE = re.compile(r"https?://[^\s,;]+", re.IGNORECASE)
WWW_RE = re.compile(r"(?<![\w.])www\.[^\s,;@]+", re.IGNORECASE)
BARE_DOMAIN_RE = re.compile(
    r"(?<![\w.@-])(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+"
    r"(?:" + "|".join(re.escape(tld) for tld in WEBSITE_TLDS) + r")"
    r"(?![a-z0-9-])(?!\.[a-z0-9])(?:/[^\s,;]*)?",
    re.IGNORECASE,
)
WEBSITE_LABEL_RE = re.compile(r"^W(?:\s*[:.)]\s*|\s+|(?=www\.|https?://))", re.IGNORECASE)

PHONE_SCORES = {
    CandidateKind.MOBILE: 10,
    CandidateKind.LANDLINE: 6,
    CandidateKind.INTERNATIONAL: 4,
}
# Mobile numbers win ties over office numbers.
PHONE_KIND_RANK = {
    CandidateKind.MOBILE: 2,
    CandidateKind.LANDLINE: 1,
    CandidateKind.INTERNATIONAL: 0,
}
MOBILE_HINT_BONUS = 5
OFFICE_HINT_BONUS = 3
FAX_HINT_PENALTY = 6


# =========================
# EMAIL
# =========================

def _strip_email_label(value: str) -> str:
    """Drop a stray OCR label letter fused onto the local part ("Ekim@..." -> "kim@...")."""
    local, _, domain = value.partition("@")
    if len(local) < 2 or local[0] not in EMAIL_LABELS:
        return value

    following = local[1]
    if following in "._-" and len(local) > 2:
        local = local[2:]
    elif following.islower():
        local = local[1:]
    return f"{local}@{domain}"


def detect_email(raw_text: str, lines: Sequence[Line] = ()) -> Optional[Candidate]:
    """Find the first email address in the full OCR text."""
    if not raw_text:
        return None

    match = EMAIL_RE.search(raw_text)
    if not match:
        return None

    found = match.group(0)
    source_line = next((line.index for line in lines if found in line.text), -1)
    return Candidate(
        value=_strip_email_label(found),
        score=1,
        source_line=source_line,
        kind=CandidateKind.EMAIL,
    )


# =========================
# PHONE
# =========================

def _digits(value: str) -> str:
    return re.sub(r"\D", "", value)


def _format_mobile(match: re.Match) -> Optional[str]:
    country, prefix, middle, last = match.groups()
    if not country and not prefix.startswith("0"):
        return None
    return f"0{prefix.lstrip('0')}-{middle}-{last}"


def _format_landline(match: re.Match) -> Optional[str]:
    country, area, middle, last = match.groups()
    area_digits = area.lstrip("0")
    # Area codes starting with 1 are mobile prefixes, handled by MOBILE_RE.
    if not area_digits or area_digits.startswith("1"):
        return None
    if country:
        return f"+82-{area_digits}-{middle}-{last}"
    if not area.startswith("0"):
        return None
    return f"0{area_digits}-{middle}-{last}"


def _format_international(match: re.Match) -> Optional[str]:
    country, rest = match.groups()
    groups = re.findall(r"\d+", rest)
    digits = country + "".join(groups)
    if digits.startswith("82") or not 8 <= len(digits) <= 15:
        return None
    return "+" + "-".join([country] + groups)


_PHONE_FAMILIES = (
    (CandidateKind.MOBILE, MOBILE_RE, _format_mobile),
    (CandidateKind.LANDLINE, LANDLINE_RE, _format_landline),
    (CandidateKind.INTERNATIONAL, INTERNATIONAL_RE, _format_international),
)


def phone_candidates(lines: Sequence[Line]) -> List[Candidate]:
    """Generate phone candidates, deduplicated by their digits."""
    by_digits: Dict[str, Candidate] = {}

    for line in lines:
        bonus = 0
        if MOBILE_HINT_RE.search(line.text):
            bonus += MOBILE_HINT_BONUS
        if OFFICE_HINT_RE.search(line.text):
            bonus += OFFICE_HINT_BONUS
        if FAX_HINT_RE.search(line.text):
            bonus -= FAX_HINT_PENALTY

        for kind, pattern, formatter in _PHONE_FAMILIES:
            for match in pattern.finditer(line.text):
                value = formatter(match)
                if not value:
                    continue
                candidate = Candidate(
                    value=value,
                    score=PHONE_SCORES[kind] + bonus,
                    source_line=line.index,
                    kind=kind,
                )
                key = _digits(value)
                existing = by_digits.get(key)
                if existing is None or candidate.score > existing.score:
                    by_digits[key] = candidate

    return list(by_digits.values())


def detect_phone(lines: Sequence[Line]) -> Optional[Candidate]:
    candidates = phone_candidates(lines)
    best = pick_best(candidates, key=lambda c: (c.score, PHONE_KIND_RANK[c.kind]))
    logger.debug(f"Phone: {len(candidates)} candidates, selected {best.value if best else None}")
    return best


# =========================
# WEBSITE
# =========================

def detect_website(lines: Sequence[Line]) -> Optional[Candidate]:
    """Find the first website-looking token, skipping lines that hold an email.

    No fallback to the email's domain: a card without a printed website
    gets an empty website.
    """
    for line in lines:
        if "@" in line.text:
            continue

        text = WEBSITE_LABEL_RE.sub("", line.text, count=1)
        for pattern in (URL_RE, WWW_RE, BARE_DOMAIN_RE):
            match = pattern.search(text)
            if not match:
                continue
            url = match.group(0).rstrip(".,;:)")
            if not re.match(r"https?://", url, re.IGNORECASE):
                url = "https://" + url
            return Candidate(
                value=url,
                score=1,
                source_line=line.index,
                kind=CandidateKind.WEBSITE,
            )

    return None
