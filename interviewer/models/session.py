"""Session lifecycle data models."""

from enum import Enum


class SessionState(str, Enum):
    """States of the interview session state machine."""

    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"
    STREAMING = "streaming"
    FINISHING = "finishing"
