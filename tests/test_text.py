"""Tests for geumbok.core.text — utterance clean-up and corrections."""

from __future__ import annotations

from geumbok.core.text import apply_corrections, normalize_utterance


class TestNormalizeUtterance:
    def test_collapses_whitespace(self) -> None:
        assert normalize_utterance("  커피   5000원\t샀어\n") == "커피 5000원 샀어"

    def test_non_breaking_space(self) -> None:
        assert normalize_utterance("커피\u00a05000원") == "커피 5000원"

    def test_zero_width_characters_dropped(self) -> None:
        assert normalize_utterance("가\u200b계부\ufeff") == "가계부"

    def test_empty(self) -> None:
        assert normalize_utterance("   ") == ""


class TestApplyCorrections:
    def test_replacement(self) -> None:
        assert apply_corrections("가게부 보여줘", {"가게부": "가계부"}) == "가계부 보여줘"

    def test_case_insensitive(self) -> None:
        assert apply_corrections("KTX 표", {"ktx": "기차"}) == "기차 표"

    def test_literal_match(self) -> None:
        assert apply_corrections("a.c abc", {"a.c": "x"}) == "x abc"

    def test_multiple_replacements(self) -> None:
        corrections = {"가게부": "가계부", "복지 써비스": "복지서비스"}
        result = apply_corrections("가게부랑 복지 써비스", corrections)
        assert result == "가계부랑 복지서비스"

    def test_empty_corrections_no_change(self) -> None:
        assert apply_corrections("안녕", {}) == "안녕"

    def test_empty_key_ignored(self) -> None:
        assert apply_corrections("안녕", {"": "x"}) == "안녕"
