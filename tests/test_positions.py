"""
Tests for the position detector.
"""

import pytest

from namecard.candidates import CandidateKind
from namecard.lines import split_lines
from namecard.positions import detect_position, position_candidates


def position_of(text):
    candidate = detect_position(split_lines(text))
    return candidate.value if candidate else None


class TestPositionDetector:
    """Test cases for position detection."""

    def test_stitches_unit_and_title(self):
        candidate = detect_position(split_lines("마케팅팀\n팀장"))
        assert candidate.value == "마케팅팀 팀장"
        assert candidate.kind == CandidateKind.STITCHED

    def test_stitched_scores_above_single_line(self):
        candidates = position_candidates(split_lines("마케팅팀\n팀장"))
        stitched = [c for c in candidates if c.kind == CandidateKind.STITCHED]
        single = [c for c in candidates if c.kind == CandidateKind.KEYWORD]
        assert stitched and single
        assert stitched[0].score > max(c.score for c in single)

    def test_stitches_title_above_unit(self):
        assert position_of("팀장\n마케팅팀") == "마케팅팀 팀장"

    @pytest.mark.parametrize("text,expected", [
        ("마케팅팀 팀장", "마케팅팀 팀장"),
        ("영업부 부장", "영업부 부장"),
        ("개발팀팀장", "개발팀팀장"),
    ])
    def test_unit_inline(self, text, expected):
        candidate = detect_position(split_lines(text))
        assert candidate.value == expected
        assert candidate.kind == CandidateKind.UNIT_INLINE

    def test_unit_inline_beats_stitched(self):
        text = "영업팀\n팀장\n마케팅팀 팀장"
        assert position_of(text) == "마케팅팀 팀장"

    @pytest.mark.parametrize("text,expected", [
        ("대표이사", "대표이사"),
        ("Senior Manager", "Senior Manager"),
        ("CEO", "CEO"),
        ("변호사", "변호사"),
    ])
    def test_single_keyword(self, text, expected):
        assert position_of(text) == expected

    def test_removes_person_name(self):
        assert position_of("홍길동 대표") == "대표"
        assert position_of("홍길동대표") == "대표"

    @pytest.mark.parametrize("text,expected", [
        ("CEO John Kim", "CEO"),
        ("Vice President Kim Minsoo", "Vice President"),
        ("Manager, Lee Jihoon", "Manager"),
    ])
    def test_removes_romanized_name(self, text, expected):
        assert position_of(text) == expected

    def test_keeps_words_that_are_not_names(self):
        assert position_of("Director Business Development") == "Director Business Development"

    def test_corporate_line_keeps_only_title(self):
        assert position_of("(주)가나다 대표이사 홍길동") == "대표이사"

    def test_skips_contact_lines(self):
        assert position_of("CEO kim@abc.com") is None
        assert position_of("대표 02-1234-5678") is None

    def test_first_found_wins_ties(self):
        assert position_of("이사\n부장") == "이사"

    def test_name_proximity_bonus(self):
        candidates = position_candidates(split_lines("이사\n홍길동\n부장"))
        assert all(c.score == 20 for c in candidates)

    def test_no_position(self):
        assert position_of("홍길동\n010-1234-5678") is None
        assert position_of("") is None
