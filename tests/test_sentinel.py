"""Tests for SentinelProcessor."""

import pytest

from interviewer.stream import SentinelProcessor, check_and_strip


class TestCheckAndStrip:
    """Tests for marker detection and stripping."""

    def test_marker_at_end(self):
        result = check_and_strip("Thanks for your time. [INTERVIEW_END]")
        assert result.found is True
        assert result.cleaned == "Thanks for your time."

    def test_no_marker_still_trims(self):
        result = check_and_strip("  Tell me about yourself.\n")
        assert result.found is False
        assert result.cleaned == "Tell me about yourself."

    def test_all_occurrences_removed(self):
        result = check_and_strip("[INTERVIEW_END]Bye[INTERVIEW_END] now [INTERVIEW_END]")
        assert result.found is True
        assert result.cleaned == "Bye now"

    def test_marker_in_middle(self):
        result = check_and_strip("Great answer. [INTERVIEW_END] Good luck!")
        assert result.found is True
        assert result.cleaned == "Great answer.  Good luck!"

    def test_partial_marker_not_found(self):
        result = check_and_strip("Almost [INTERVIE")
        assert result.found is False
        assert result.cleaned == "Almost [INTERVIE"

    def test_marker_only(self):
        result = check_and_strip("[INTERVIEW_END]")
        assert result.found is True
        assert result.cleaned == ""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "plain",
            "  padded  ",
            "Thanks. [INTERVIEW_END]",
            "[INTERVIEW_END] x [INTERVIEW_END]",
            "Bye [INTERVIEW_[INTERVIEW_END]END]",
        ],
    )
    def test_clean_is_idempotent(self, text):
        once = check_and_strip(text).cleaned
        twice = check_and_strip(once)
        assert twice.cleaned == once
        assert twice.found is False

    def test_marker_rejoined_by_removal(self):
        result = check_and_strip("Bye [INTERVIEW_[INTERVIEW_END]END]")
        assert result.found is True
        assert result.cleaned == "Bye"


class TestSentinelProcessor:
    """Tests for marker configuration."""

    def test_custom_marker(self):
        processor = SentinelProcessor(marker="<<END>>")
        result = processor.check_and_strip("Done <<END>> [INTERVIEW_END]")
        assert result.found is True
        assert result.cleaned == "Done  [INTERVIEW_END]"

    def test_empty_marker_rejected(self):
        with pytest.raises(ValueError):
            SentinelProcessor(marker="")
