"""
Tests for CardParser and extract().

Tests the assembly of OCR text into a BusinessCardRecord.
"""

import pytest
from unittest.mock import patch

from namecard.lines import split_lines, tokens
from namecard.parser import BusinessCardRecord, CardParser, RECORD_FIELDS, extract


KOREAN_CARD = """(주)가나다
홍길동
마케팅팀
팀장
M. 010-1234-5678
T. 02-123-4567
E. gildong@ganada.co.kr
www.ganada.co.kr
서울특별시 강남구 테헤란로 123
가나다빌딩 4층"""

ENGLISH_CARD = """John Smith
Senior Manager
ACME Corporation
john.smith@acme.com
+1 555 123 4567
www.acme.com
123 Main Street, Suite 400"""


class TestLineNormalizer:

    def test_split_lines(self):
        lines = split_lines("  홍길동  \n\n\r\n팀장\r\n")
        assert [line.text for line in lines] == ["홍길동", "팀장"]
        assert [line.index for line in lines] == [0, 1]

    def test_whitespace_only(self):
        assert split_lines("   \n\t\n") == []
        assert split_lines(None) == []

    def test_tokens(self):
        assert tokens("홍길동 | 대표/CEO") == ["홍길동", "대표", "CEO"]


class TestCardParser:
    """Test cases for CardParser."""

    @pytest.fixture
    def parser(self):
        """Create parser instance."""
        return CardParser()

    def test_korean_card(self, parser):
        record = parser.parse(KOREAN_CARD)

        assert record.name == "홍길동"
        assert record.company == "가나다"
        assert record.position == "마케팅팀 팀장"
        assert record.email == "gildong@ganada.co.kr"
        assert record.phone == "010-1234-5678"
        assert record.website == "https://www.ganada.co.kr"
        assert record.address == "서울특별시 강남구 테헤란로 123 가나다빌딩 4층"
        assert record.raw_text == KOREAN_CARD

    def test_english_card(self, parser):
        record = parser.parse(ENGLISH_CARD)

        assert record.name == "John Smith"
        assert record.company == "ACME Corporation"
        assert record.position == "Senior Manager"
        assert record.email == "john.smith@acme.com"
        assert record.phone == "+1-555-123-4567"
        assert record.website == "https://www.acme.com"
        assert record.address == "123 Main Street, Suite 400"

    def test_to_dict(self, parser):
        data = parser.parse("홍길동").to_dict()
        assert set(data) == set(RECORD_FIELDS) | {"raw_text"}
        assert data["name"] == "홍길동"
        assert data["email"] == ""

    def test_non_string_input(self, parser):
        record = parser.parse(None)
        assert record == BusinessCardRecord()

    def test_failing_detector_leaves_field_empty(self, parser):
        with patch("namecard.parser.detect_phone", side_effect=RuntimeError("boom")):
            record = parser.parse("홍길동\n010-1234-5678")

        assert record.phone == ""
        assert record.name == "홍길동"

    def test_parse_batch(self, parser):
        records = parser.parse_batch(["홍길동", "010-1234-5678"])
        assert [r.name for r in records] == ["홍길동", ""]
        assert [r.phone for r in records] == ["", "010-1234-5678"]


class TestExtractionProperties:
    """Behaviour every extraction must satisfy."""

    @pytest.mark.parametrize("text", [
        "",
        "   ",
        "!!! --- ???",
        "1234567890123456789012345",
        "@@@\n...\n(((",
        "가\n나\n다",
        KOREAN_CARD,
        ENGLISH_CARD,
    ])
    def test_always_returns_string_fields(self, text):
        record = extract(text)
        for field in RECORD_FIELDS + ("raw_text",):
            assert isinstance(getattr(record, field), str)

    def test_empty_input(self):
        record = extract("")
        assert record == BusinessCardRecord()
        assert all(value == "" for value in record.to_dict().values())

    def test_single_korean_name(self):
        assert extract("홍길동").name == "홍길동"

    @pytest.mark.parametrize("text", ["010-1234-5678", "+82 10 1234 5678"])
    def test_phone_law(self, text):
        assert extract(text).phone == "010-1234-5678"

    def test_email_label_law(self):
        assert extract("Esomeone@example.com").email == "someone@example.com"

    def test_domain_back_inference(self):
        record = extract("홍길동\nkairos@lawmission.net\nMISSION")
        assert "MISSION" in record.company

    def test_domain_fallback(self):
        assert extract("홍길동\nkairos@lawmission.net").company == "Lawmission"

    def test_idempotent(self):
        assert extract(KOREAN_CARD) == extract(KOREAN_CARD)
        assert extract(KOREAN_CARD).to_dict() == extract(KOREAN_CARD).to_dict()

    def test_stitching_law(self):
        assert extract("마케팅팀\n팀장").position == "마케팅팀 팀장"

    def test_legal_suffix_ranking(self):
        assert extract("MISSION\n주식회사 가나다").company == "가나다"
        assert extract("주식회사 가나다\nMISSION").company == "가나다"

    def test_company_and_name_resolve_separately(self):
        record = extract("(주)한결\n이한결\nkim@hangyeol.com")
        assert record.company == "한결"
        assert record.name == "이한결"

    def test_stitched_unit_is_not_a_name(self):
        record = extract("마케팅팀\n팀장")
        assert record.position == "마케팅팀 팀장"
        assert record.name == ""

    @pytest.mark.parametrize("text,company", [
        ("hong@samsung.com\nSamsung Electronics", "Samsung Electronics"),
        ("가나다\n(주)가나다", "가나다"),
    ])
    def test_name_never_copies_company(self, text, company):
        record = extract(text)
        assert record.company == company
        assert record.name == ""

    def test_romanized_name_line_is_not_the_company(self):
        record = extract("HONG GILDONG\n홍길동\nhong@ganada.co.kr")
        assert record.company == "Ganada"
        assert record.name == "홍길동"
