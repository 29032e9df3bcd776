"""End-of-interview marker detection."""

from dataclasses import dataclass

from ..config import INTERVIEW_END_MARKER


@dataclass(frozen=True)
class SentinelResult:
    found: bool
    cleaned: str


class SentinelProcessor:
    """Finds the termination marker in accumulated text and strips it.

    Stateless; the one-shot "already finishing" flag lives on the session.
    """

    def __init__(self, marker: str = INTERVIEW_END_MARKER):
        if not marker:
            raise ValueError("marker must be non-empty")
        self._marker = marker

    @property
    def marker(self) -> str:
        return self._marker

    def check_and_strip(self, text: str) -> SentinelResult:
        """Remove every marker occurrence and trim surrounding whitespace."""
        cleaned = text
        # Removing one marker can join its neighbours into another
        while self._marker in cleaned:
            cleaned = cleaned.replace(self._marker, "")
        return SentinelResult(found=self._marker in text, cleaned=cleaned.strip())


def check_and_strip(text: str) -> SentinelResult:
    """check_and_strip with the default interview marker."""
    return SentinelProcessor().check_and_strip(text)
