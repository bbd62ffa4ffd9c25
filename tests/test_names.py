"""
Tests for the name detector.
"""

import pytest

from namecard.candidates import CandidateKind
from namecard.lines import split_lines
from namecard.names import detect_name, name_candidates


def name_of(text, company="", position=""):
    candidate = detect_name(split_lines(text), company, position)
    return candidate.value if candidate else None


class TestKoreanNames:
    """Test cases for Hangul names."""

    def test_single_name_line(self):
        assert name_of("홍길동") == "홍길동"

    def test_spaced_name(self):
        assert name_of("홍 길 동") == "홍길동"
        assert name_of("김 민수") == "김민수"

    def test_name_above_title(self):
        candidate = detect_name(split_lines("김민수\n대표이사"))
        assert candidate.value == "김민수"
        assert candidate.kind == CandidateKind.TITLE_ADJACENT

    def test_name_inline_with_title(self):
        candidate = detect_name(split_lines("(주)가나다\n홍길동 대표"))
        assert candidate.value == "홍길동"

    def test_name_fused_with_title(self):
        assert name_of("홍길동대표") == "홍길동"

    def test_common_surname_scores_higher(self):
        lines = split_lines("홍길동\n김철수")
        scores = {c.value: c.score for c in name_candidates(lines)}
        assert scores["김철수"] > scores["홍길동"]
        assert name_of("홍길동\n김철수") == "김철수"

    def test_earlier_line_wins_between_equals(self):
        assert name_of("이민호\n이준호") == "이민호"

    def test_requires_surname(self):
        lines = split_lines("대표번호")
        assert name_candidates(lines) == []

    def test_title_words_are_not_names(self):
        assert name_of("팀장") is None

    def test_collision_penalty(self):
        lines = split_lines("홍길동")
        plain = name_candidates(lines)[0].score
        penalized = name_candidates(lines, company="홍길동")[0].score
        assert penalized == plain - 30

    def test_only_leading_window(self):
        text = "\n".join(["ABC"] * 12 + ["홍길동"])
        assert name_candidates(split_lines(text)) == []


class TestLatinNames:
    """Test cases for romanized and Western names."""

    def test_romanized_name(self):
        candidate = detect_name(split_lines("Kim Minsoo"))
        assert candidate.value == "Kim Minsoo"
        assert candidate.kind == CandidateKind.ENGLISH

    def test_hyphenated_given_name_scores_higher(self):
        two = name_candidates(split_lines("Kim Minsoo"))[0].score
        hyphenated = name_candidates(split_lines("Kim Min-Soo"))[0].score
        assert hyphenated > two

    def test_three_words(self):
        assert name_of("Hong Gil Dong") == "Hong Gil Dong"

    def test_non_surname_first_word_is_fallback(self):
        candidate = detect_name(split_lines("John Smith\nSenior Manager"))
        assert candidate.value == "John Smith"
        assert candidate.kind == CandidateKind.FALLBACK

    def test_company_words_rejected(self):
        assert name_candidates(split_lines("Kim Solutions")) == []


class TestMixedScriptNames:
    """Test cases for Hangul names followed by a Latin rendering."""

    @pytest.mark.parametrize("text", ["양희연 H.Hailey Yang", "양희연H.Hailey"])
    def test_mixed_script(self, text):
        candidate = detect_name(split_lines(text))
        assert candidate.value == "양희연"
        assert candidate.kind == CandidateKind.MIXED_SCRIPT

    def test_spaced_scores_above_fused(self):
        spaced = name_candidates(split_lines("양희연 Hailey"))[0].score
        fused = name_candidates(split_lines("양희연Hailey"))[0].score
        assert spaced > fused


class TestEdgeCases:

    def test_empty(self):
        assert detect_name([]) is None

    def test_no_name(self):
        assert name_of("010-1234-5678\nkim@abc.com") is None

    def test_unit_line_is_not_a_name(self):
        assert name_of("마케팅팀") is None
        assert name_of("전략팀\n팀장") is None

    def test_fallback_skips_company(self):
        assert name_of("가나다", company="가나다") is None
        assert name_of("John Smith", company="John Smith") is None

    def test_fallback_skips_position_parts(self):
        assert name_of("영업부\n부장", position="영업부 부장") is None

    def test_fallback_still_finds_other_lines(self):
        candidate = detect_name(split_lines("가나다\n마동석"), company="가나다")
        assert candidate.value == "마동석"
        assert candidate.kind == CandidateKind.FALLBACK
