"""Stream decoding module."""

from .decoder import StreamDecoder, decode_stream
from .sentinel import SentinelProcessor, SentinelResult, check_and_strip

__all__ = [
    "StreamDecoder",
    "decode_stream",
    "SentinelProcessor",
    "SentinelResult",
    "check_and_strip",
]
