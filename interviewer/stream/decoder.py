"""Incremental decoder for the chat endpoint's event stream.

Frames are ``data: <JSON>`` lines terminated by a blank line. Chunks may split
a frame (or a multi-byte character) at any byte; the decoder buffers only the
trailing incomplete frame.
"""

import codecs
import json
from typing import AsyncIterable, AsyncIterator

from ..logging_config import get_logger
from ..models import StreamEvent

logger = get_logger(__name__)

FRAME_DELIMITER = "\n\n"
DATA_PREFIX = "data: "


class StreamDecoder:
    """Turns arbitrarily chunked bytes into content events.

    One instance per stream; not reentrant.
    """

    def __init__(self):
        self._text_decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self._closed = False

    @property
    def pending(self) -> str:
        """Buffered text not yet terminated by a frame delimiter."""
        return self._buffer

    def feed(self, chunk: bytes) -> list[StreamEvent]:
        """Consume one chunk and return the content events it completes."""
        if self._closed:
            raise RuntimeError("StreamDecoder already closed")

        self._buffer += self._text_decoder.decode(chunk)
        *frames, self._buffer = self._buffer.split(FRAME_DELIMITER)

        events = []
        for frame in frames:
            event = self._parse_frame(frame)
            if event is not None:
                events.append(event)
        return events

    def close(self) -> StreamEvent:
        """Finish the stream. Residual partial input is discarded."""
        residual = self._buffer + self._text_decoder.decode(b"", final=True)
        if residual.strip():
            logger.debug("Discarding incomplete trailing frame (%d chars)", len(residual))
        self._buffer = ""
        self._closed = True
        return StreamEvent.end()

    def _parse_frame(self, frame: str) -> StreamEvent | None:
        if not frame.strip() or not frame.startswith(DATA_PREFIX):
            return None

        json_str = frame[len(DATA_PREFIX):].strip()
        if not json_str:
            return None

        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            logger.warning("Dropping malformed frame: %s (frame=%r)", e, frame[:200])
            return None

        content = data.get("content") if isinstance(data, dict) else None
        if not isinstance(content, str) or not content:
            return None

        return StreamEvent.content_fragment(content)


async def decode_stream(chunks: AsyncIterable[bytes]) -> AsyncIterator[StreamEvent]:
    """Decode a whole byte stream, ending with a stream-end event."""
    decoder = StreamDecoder()
    async for chunk in chunks:
        for event in decoder.feed(chunk):
            yield event
    yield decoder.close()
