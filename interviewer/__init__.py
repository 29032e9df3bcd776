"""Interview assistant: streaming interview sessions with a completion cooldown."""

from .app import Application, IApplication
from .client import ChatClient, IChatTransport
from .cooldown import CooldownStore, ICooldownStore, format_duration
from .errors import TransportError
from .llm import ILLMProvider, LLMProvider
from .models import (
    CooldownStatus,
    DurationParts,
    SessionState,
    StreamEvent,
    StreamEventType,
    Turn,
)
from .session import CooldownGate, IInterviewSession, InterviewSession
from .stream import SentinelProcessor, StreamDecoder, check_and_strip

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Models
    "Turn",
    "SessionState",
    "StreamEvent",
    "StreamEventType",
    "CooldownStatus",
    "DurationParts",
    # Components
    "ICooldownStore",
    "CooldownStore",
    "format_duration",
    "StreamDecoder",
    "SentinelProcessor",
    "check_and_strip",
    "IChatTransport",
    "ChatClient",
    "TransportError",
    "IInterviewSession",
    "InterviewSession",
    "CooldownGate",
    "ILLMProvider",
    "LLMProvider",
]
