"""HTTP transport for the chat endpoint."""

from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Protocol

import httpx

from ..errors import TransportError
from ..logging_config import get_logger

logger = get_logger(__name__)


class IChatTransport(Protocol):
    """Opens a streamed chat response."""

    def open_stream(
        self, messages: list[dict], language: str
    ) -> AsyncContextManager[AsyncIterator[bytes]]:
        """Post the turn history; yield the response body as raw byte chunks.

        Entering the context means the response is available. Failures raise
        TransportError, either on entry or while iterating.
        """
        ...


class ChatClient:
    """Streams chat responses over httpx."""

    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        path: str = "/api/chat",
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ):
        self._api_url = api_url.rstrip("/")
        self._path = path
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=10.0),
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._owns_client:
            await self._client.aclose()

    @asynccontextmanager
    async def open_stream(
        self, messages: list[dict], language: str
    ) -> AsyncIterator[AsyncIterator[bytes]]:
        url = f"{self._api_url}{self._path}"
        payload = {"messages": messages, "language": language}

        try:
            async with self._client.stream("POST", url, json=payload) as response:
                if not response.is_success:
                    raise TransportError(
                        f"Chat request failed: HTTP {response.status_code}",
                        status_code=response.status_code,
                    )
                logger.debug("Chat stream opened (%d messages)", len(messages))
                yield self._iter_body(response)
        except httpx.HTTPError as e:
            raise TransportError(f"Chat request failed: {e}") from e

    async def _iter_body(self, response: httpx.Response) -> AsyncIterator[bytes]:
        try:
            async for chunk in response.aiter_bytes():
                yield chunk
        except httpx.HTTPError as e:
            raise TransportError(f"Cannot read chat stream: {e}") from e
