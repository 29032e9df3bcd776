"""Decoded stream event models."""

from dataclasses import dataclass
from enum import Enum


class StreamEventType(str, Enum):
    """Kinds of events produced by the stream decoder."""

    CONTENT = "content"
    END = "end"


@dataclass(frozen=True)
class StreamEvent:
    """A decoded unit of incremental response content."""

    type: StreamEventType
    content: str = ""

    @classmethod
    def content_fragment(cls, content: str) -> "StreamEvent":
        return cls(type=StreamEventType.CONTENT, content=content)

    @classmethod
    def end(cls) -> "StreamEvent":
        return cls(type=StreamEventType.END)
