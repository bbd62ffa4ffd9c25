"""
Token-level predicates shared by the name, position, company and address
detectors.
"""

import re
from typing import Optional

from .keywords import (
    ADMIN_SUFFIXES,
    CITY_NAMES,
    CITY_SUFFIXES,
    ENGLISH_TITLE_RE,
    KOREAN_CORPORATE_MARKERS,
    KOREAN_TITLES,
    PROVINCE_NAMES,
    SURNAME_SET,
)
from .lines import tokens

HANGUL_NAME_RE = re.compile(r"^[가-힣]{2,4}$")

_TITLES_LONGEST_FIRST = tuple(sorted(KOREAN_TITLES, key=len, reverse=True))
_NUMBERED_SUFFIXES = ("번지", "층", "호")
# Units a person's name never ends with.
_NON_NAME_ENDINGS = ("팀", "센터", "그룹", "본부")


def is_url_or_email(text: str) -> bool:
    lowered = text.lower()
    return "@" in text or "www." in lowered or "http" in lowered


def find_title(text: str) -> Optional[str]:
    """Return the first position keyword in a line, or None.

    Korean titles count only at the end of a token so that "대표이사" and
    "홍길동대표" match while "이사랑" or "대표번호" do not.
    """
    if not text or is_url_or_email(text):
        return None

    for token in tokens(text):
        for title in _TITLES_LONGEST_FIRST:
            if token.endswith(title):
                return title

    match = ENGLISH_TITLE_RE.search(text)
    return match.group(0) if match else None


def is_title_token(token: str) -> bool:
    return any(token.endswith(title) for title in KOREAN_TITLES)


def is_exact_title(text: str) -> bool:
    """True when the whole line is one position keyword ("팀장", "Manager")."""
    text = text.strip()
    if text in KOREAN_TITLES:
        return True
    match = ENGLISH_TITLE_RE.fullmatch(text)
    return match is not None


def peel_title(token: str) -> str:
    """Strip a trailing title keyword off a fused token ("홍길동대표" -> "홍길동")."""
    for title in _TITLES_LONGEST_FIRST:
        if token.endswith(title) and len(token) > len(title):
            return token[: -len(title)]
    return token


def has_corporate_marker(text: str) -> bool:
    compact = text.replace(" ", "")
    return any(marker.replace(" ", "") in compact for marker in KOREAN_CORPORATE_MARKERS)


def is_place_token(token: str) -> bool:
    """True for province or metro-city names such as "서울", "부산광역시", "경기도"."""
    if token in PROVINCE_NAMES:
        return True
    for city in CITY_NAMES:
        if token.startswith(city) and token[len(city):] in CITY_SUFFIXES:
            return True
    return False


def is_unit_token(token: str) -> bool:
    """True for organizational units such as "마케팅팀" or "연구센터"."""
    return token.endswith(_NON_NAME_ENDINGS)


def is_name_shaped(token: str) -> bool:
    """A 2-4 syllable Hangul token that is not a title, marker, place or unit."""
    return (
        bool(HANGUL_NAME_RE.match(token))
        and not is_title_token(token)
        and not has_corporate_marker(token)
        and not is_place_token(token)
        and not is_unit_token(token)
    )


def is_name_token(token: str) -> bool:
    """Surname gate for a Korean personal-name token."""
    return is_name_shaped(token) and token[0] in SURNAME_SET


def is_admin_token(token: str) -> bool:
    """True for administrative-unit tokens ("강남구", "테헤란로", "13층", "1001호")."""
    token = token.strip(",.()[]")
    if len(token) < 2:
        return False
    for suffix in ADMIN_SUFFIXES:
        if not token.endswith(suffix) or len(token) <= len(suffix):
            continue
        before = token[-len(suffix) - 1]
        if suffix in _NUMBERED_SUFFIXES:
            return before.isdigit()
        return before.isdigit() or "가" <= before <= "힣"
    return False
