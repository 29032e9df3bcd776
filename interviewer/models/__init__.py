"""Core data models for the interview assistant."""

from .cooldown import CooldownStatus, DurationParts
from .session import SessionState
from .stream import StreamEvent, StreamEventType
from .turns import Role, Turn

__all__ = [
    # Turns
    "Role",
    "Turn",
    # Session
    "SessionState",
    # Stream
    "StreamEvent",
    "StreamEventType",
    # Cooldown
    "CooldownStatus",
    "DurationParts",
]
