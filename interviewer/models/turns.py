"""Conversation turn data models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal

Role = Literal["user", "assistant"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Turn:
    """One role-tagged contribution to the interview."""

    role: Role
    text: str = ""
    created_at: datetime = field(default_factory=_utcnow)
    finalized: bool = True

    def to_payload(self) -> dict:
        """Wire form sent to the chat endpoint (timestamps excluded)."""
        return {"role": self.role, "content": self.text}
