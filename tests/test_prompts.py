"""Tests for prompts and locale resolution."""

import pytest

from interviewer.llm import build_system_prompt, get_language_instruction
from interviewer.llm.prompts import LANGUAGE_INSTRUCTIONS
from interviewer.locale import resolve_language


class TestResolveLanguage:
    """Tests for resolve_language()."""

    @pytest.mark.parametrize(
        "locale,expected",
        [("zh-TW", "zho"), ("en", "eng"), ("ja", "jpn"), ("ko", "kor")],
    )
    def test_known_locales(self, locale, expected):
        assert resolve_language(locale) == expected

    @pytest.mark.parametrize("locale", ["fr", "zh-CN", "", None])
    def test_unknown_locale_falls_back_to_chinese(self, locale):
        assert resolve_language(locale) == "zho"


class TestLanguageInstruction:
    """Tests for get_language_instruction()."""

    def test_all_languages_present(self):
        assert set(LANGUAGE_INSTRUCTIONS) == {
            "zho", "eng", "jpn", "kor", "fra", "deu", "spa",
            "ita", "por", "rus", "ara", "tha", "vie",
        }

    def test_english(self):
        assert get_language_instruction("eng") == "Please respond in English"

    def test_unknown_code_falls_back(self):
        assert get_language_instruction("xxx") == LANGUAGE_INSTRUCTIONS["zho"]


class TestSystemPrompt:
    """Tests for build_system_prompt()."""

    def test_contains_marker_and_language(self):
        prompt = build_system_prompt("kor")
        assert prompt.count("[INTERVIEW_END]") >= 2
        assert "한국어로 응답해주세요" in prompt
        assert "very first reply" not in prompt

    def test_test_mode(self):
        prompt = build_system_prompt("eng", test_mode=True)
        assert "very first reply" in prompt
