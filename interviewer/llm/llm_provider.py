"""LLM Provider implementation using Anthropic Claude API."""

import os
from typing import AsyncIterator, Protocol

import anthropic


class ILLMProvider(Protocol):
    """Abstraction for streaming LLM access."""

    def stream(
        self,
        messages: list[dict],  # [{"role": "user", "content": "..."}]
        system: str | None = None,
        max_tokens: int | None = None,
    ) -> AsyncIterator[str]:
        """Yield completion text fragments as they are generated."""
        ...


def normalize_messages(messages: list[dict]) -> list[dict]:
    """Prepare client turns for the Messages API.

    Drops empty turns and any assistant turns before the first user turn
    (e.g. a client-side welcome message), and merges consecutive turns of the
    same role.
    """
    normalized: list[dict] = []
    for msg in messages:
        content = msg.get("content", "")
        if not content:
            continue
        if not normalized and msg["role"] != "user":
            continue
        if normalized and normalized[-1]["role"] == msg["role"]:
            normalized[-1]["content"] += "\n\n" + content
        else:
            normalized.append({"role": msg["role"], "content": content})
    return normalized


class LLMProvider:
    """Anthropic Claude API provider."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "claude-3-5-sonnet-20241022",
        max_tokens: int = 8192,
        temperature: float = 1.0,
    ):
        self._api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not self._api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable not set")

        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._client = anthropic.AsyncAnthropic(api_key=self._api_key)

    @property
    def model(self) -> str:
        return self._model

    async def stream(
        self,
        messages: list[dict],
        system: str | None = None,
        max_tokens: int | None = None,
    ) -> AsyncIterator[str]:
        """Stream a completion using Claude API."""
        kwargs = {
            "model": self._model,
            "messages": normalize_messages(messages),
            "max_tokens": max_tokens or self._max_tokens,
            "temperature": self._temperature,
        }
        if system:
            kwargs["system"] = system

        try:
            async with self._client.messages.stream(**kwargs) as stream:
                async for text in stream.text_stream:
                    if text:
                        yield text
        except Exception as e:
            # Re-raise for handling by caller
            raise RuntimeError(f"LLM API error: {e}") from e

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.close()
