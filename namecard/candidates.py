"""
Scored candidates and the reducer that picks a winner.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional, Tuple


class CandidateKind(str, Enum):
    """Which rule produced a candidate."""

    # names
    KOREAN = "korean"
    KOREAN_SPACED = "korean-spaced"
    ENGLISH = "english"
    TITLE_INLINE = "title-inline"
    TITLE_ADJACENT = "title-adjacent"
    MIXED_SCRIPT = "mixed-script"
    FALLBACK = "fallback"
    # phones
    MOBILE = "mobile"
    LANDLINE = "landline"
    INTERNATIONAL = "international"
    # positions
    KEYWORD = "keyword"
    STITCHED = "stitched"
    UNIT_INLINE = "unit-inline"
    # companies
    LEGAL_SUFFIX = "legal-suffix"
    BRAND = "brand"
    DOMAIN_TEXT = "domain-text"
    DOMAIN_DERIVED = "domain-derived"
    # contacts and addresses
    EMAIL = "email"
    WEBSITE = "website"
    ADDRESS = "address"


@dataclass(frozen=True)
class Candidate:
    """A provisional value for one output field."""

    value: str
    score: float
    source_line: int
    kind: CandidateKind


def pick_best(
    candidates: Iterable[Candidate],
    key: Optional[Callable[[Candidate], Tuple]] = None,
) -> Optional[Candidate]:
    """Return the highest-ranked candidate, or None when there are none.

    Ranking defaults to score alone. Among equal keys the first candidate
    seen wins, so callers control tie-breaks through generation order.
    """
    rank = key or (lambda c: (c.score,))
    best: Optional[Candidate] = None
    best_rank: Optional[Tuple] = None

    for candidate in candidates:
        candidate_rank = rank(candidate)
        if best is None or candidate_rank > best_rank:
            best, best_rank = candidate, candidate_rank

    return best
