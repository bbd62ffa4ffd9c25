"""
Closed vocabularies used by the field detectors.

Everything here is plain immutable data: frozensets for membership tests,
tuples where order matters (longest keyword first for regex alternation).
"""

import re
from typing import FrozenSet, Tuple


# =========================
# NAMES
# =========================

# Ordered by frequency; the first ten form the "common" subset.
KOREAN_SURNAMES: Tuple[str, ...] = (
    "김", "이", "박", "최", "정", "강", "조", "윤", "장", "임",
    "한", "오", "서", "신", "권", "황", "안", "송", "류", "전",
    "홍", "고", "문", "손", "양", "배", "백", "허", "유", "남",
    "심", "노", "하", "곽", "성", "차", "주", "우", "구", "나",
    "민", "진", "지", "엄", "원", "채", "천", "방", "공", "현",
    "함", "변", "염", "여", "추", "도", "소",
)

SURNAME_SET: FrozenSet[str] = frozenset(KOREAN_SURNAMES)
COMMON_SURNAMES: FrozenSet[str] = frozenset(KOREAN_SURNAMES[:10])

ROMANIZED_SURNAMES: FrozenSet[str] = frozenset({
    "kim", "gim", "lee", "yi", "rhee", "park", "pak", "bak", "choi", "choe",
    "jung", "jeong", "chung", "kang", "gang", "cho", "jo", "yoon", "yun",
    "jang", "chang", "lim", "im", "han", "oh", "seo", "suh", "shin", "sin",
    "kwon", "gwon", "hwang", "ahn", "an", "song", "ryu", "yoo", "yu", "jeon",
    "jun", "chun", "hong", "ko", "koh", "go", "moon", "mun", "son", "sohn",
    "yang", "bae", "baek", "paik", "heo", "huh", "nam", "sim", "shim", "noh",
    "roh", "ha", "kwak", "gwak", "sung", "seong", "cha", "joo", "ju", "woo",
    "koo", "ku", "gu", "na", "min", "jin", "ji", "eom", "um", "won", "chae",
    "cheon", "bang", "kong", "gong", "hyun", "hyeon", "ham", "byun", "byeon",
    "yeom", "yeo", "choo", "chu", "do", "so",
})


# =========================
# POSITIONS
# =========================

KOREAN_TITLES: Tuple[str, ...] = (
    "대표이사", "공동대표", "부대표", "대표", "부회장", "회장", "부사장", "사장",
    "전무이사", "상무이사", "전무", "상무", "이사장", "이사", "감사", "본부장",
    "센터장", "연구소장", "소장", "지점장", "점장", "실장", "국장", "부장",
    "차장", "과장", "대리", "팀장", "파트장", "그룹장", "주임", "사원",
    "수석연구원", "책임연구원", "선임연구원", "연구원", "수석", "책임", "선임",
    "매니저", "디자이너", "개발자", "엔지니어", "컨설턴트", "파트너",
    "변호사", "회계사", "세무사", "변리사", "노무사", "고문", "교수", "원장",
    "위원", "팀원", "프로",
)

ENGLISH_TITLES: Tuple[str, ...] = (
    "Chief Executive Officer", "Chief Technology Officer", "Chief Operating Officer",
    "Vice President", "Managing Director", "Managing Partner", "General Manager",
    "Co-Founder", "Team Lead", "Head of",
    "CEO", "CTO", "CFO", "COO", "CMO", "CIO", "CSO", "VP",
    "President", "Director", "Manager", "Chief", "Executive", "Officer",
    "Founder", "Chairman", "Partner", "Associate", "Counsel", "Attorney",
    "Lawyer", "Professor", "Engineer", "Developer", "Designer", "Consultant",
    "Analyst", "Specialist", "Researcher", "Representative", "Principal",
    "Architect", "Advisor",
)

# Organizational unit suffixes (team, department, office, center, group, division).
UNIT_SUFFIXES: Tuple[str, ...] = ("센터", "그룹", "본부", "팀", "부", "실")

KOREAN_TITLE_SET: FrozenSet[str] = frozenset(KOREAN_TITLES)

_ENGLISH_ACRONYMS = tuple(t for t in ENGLISH_TITLES if t.isupper())
_ENGLISH_WORDS = tuple(t for t in ENGLISH_TITLES if not t.isupper())

# Acronyms are matched case-sensitively so "vp" in prose does not count.
ENGLISH_TITLE_RE = re.compile(
    r"(?<![A-Za-z])(?:"
    + "|".join(re.escape(t) for t in _ENGLISH_ACRONYMS)
    + r")(?![A-Za-z])"
    + r"|(?i:(?<![A-Za-z])(?:"
    + "|".join(re.escape(t) for t in sorted(_ENGLISH_WORDS, key=len, reverse=True))
    + r")(?![A-Za-z]))"
)


# =========================
# COMPANIES
# =========================

KOREAN_CORPORATE_MARKERS: Tuple[str, ...] = (
    "주식회사", "유한회사", "합자회사", "합명회사", "법무법인", "재단법인",
    "사단법인", "(주)", "( 주 )", "(유)", "㈜", "㈔",
)

ENGLISH_LEGAL_SUFFIX_RE = re.compile(
    r"(?<![A-Za-z])(?:Co\.?,?\s*Ltd|Corporation|Corp|Inc|LLC|L\.L\.C|Ltd|Group|GmbH|PLC|LLP)(?![A-Za-z])",
    re.IGNORECASE,
)

COMPANY_WORDS: FrozenSet[str] = frozenset({
    "company", "corp", "corporation", "inc", "llc", "ltd", "group", "partners",
    "lab", "labs", "solutions", "systems", "technologies", "holdings",
    "korea", "global", "international",
})

# Free mail providers never name the card holder's company.
PERSONAL_EMAIL_DOMAINS: FrozenSet[str] = frozenset({
    "gmail", "googlemail", "naver", "daum", "hanmail", "kakao", "nate",
    "hotmail", "outlook", "live", "msn", "yahoo", "icloud", "me", "aol",
    "protonmail", "korea", "empas", "paran", "dreamwiz", "chol", "lycos",
})


# =========================
# ADDRESSES
# =========================

CITY_NAMES: Tuple[str, ...] = (
    "서울", "부산", "대구", "인천", "광주", "대전", "울산", "세종", "경기",
    "강원", "충북", "충남", "전북", "전남", "경북", "경남", "제주",
)

PROVINCE_NAMES: FrozenSet[str] = frozenset({
    "충청북도", "충청남도", "전라북도", "전라남도", "경상북도", "경상남도",
    "경기도", "강원도", "제주도", "강원특별자치도", "전북특별자치도",
    "제주특별자치도", "세종특별자치시",
})

CITY_SUFFIXES: FrozenSet[str] = frozenset({
    "", "시", "도", "특별시", "광역시", "특별자치시", "특별자치도",
})

ADMIN_SUFFIXES: Tuple[str, ...] = (
    "번지", "번길", "시", "도", "구", "군", "읍", "면", "동", "리", "로", "길",
    "층", "호",
)

ENGLISH_STREET_RE = re.compile(
    r"\d.*\b(?:Street|St|Avenue|Ave|Road|Rd|Boulevard|Blvd|Suite|Ste|Floor|Fl)\b\.?"
    r"|\b(?:Street|Avenue|Road|Boulevard|Suite|Floor)\b.*\d",
    re.IGNORECASE,
)


# =========================
# CONTACTS
# =========================

EMAIL_LABELS: FrozenSet[str] = frozenset("EMTWF")

WEBSITE_TLDS: Tuple[str, ...] = ("co.kr", "com", "kr", "net", "org", "io", "ai")

MOBILE_HINT_RE = re.compile(
    r"\b(?:mobile|mob|cell|cellular|h\.?p)\b|\bm\s*[:.)]|휴대폰|휴대전화|핸드폰|모바일",
    re.IGNORECASE,
)
OFFICE_HINT_RE = re.compile(
    r"\b(?:tel|phone|office|direct|dir)\b|\b[td]\s*[:.)]|전화|사무실|대표번호|직통",
    re.IGNORECASE,
)
FAX_HINT_RE = re.compile(r"\bfax\b|\bf\s*[:.)]|팩스", re.IGNORECASE)
