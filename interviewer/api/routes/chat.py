"""Chat streaming API routes."""

import json
from typing import AsyncIterator, Literal

from fastapi import APIRouter
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel, Field

from ...config import DEFAULT_LANGUAGE
from ...llm import ILLMProvider, build_system_prompt
from ...logging_config import get_logger

logger = get_logger(__name__)


class ChatMessage(BaseModel):
    """One prior turn as sent by the client."""

    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Request model for a chat turn."""

    messages: list[ChatMessage] = Field(default_factory=list)
    language: str = DEFAULT_LANGUAGE


def encode_frame(content: str) -> bytes:
    """Frame one content fragment for the event stream."""
    return f"data: {json.dumps({'content': content}, ensure_ascii=False)}\n\n".encode("utf-8")


async def _frames(first: str, rest: AsyncIterator[str]) -> AsyncIterator[bytes]:
    yield encode_frame(first)
    try:
        async for content in rest:
            yield encode_frame(content)
    except Exception as e:
        # Aborts the response; the client sees a transport error
        logger.error("Streaming error: %s", e, exc_info=True)
        raise


async def _empty() -> AsyncIterator[bytes]:
    return
    yield


def create_chat_router(
    llm_provider: ILLMProvider | None, test_mode: bool = False
) -> APIRouter:
    """Create chat router."""
    router = APIRouter(prefix="/api", tags=["chat"])

    @router.post("/chat")
    async def chat(request: ChatRequest):
        """Relay the conversation to the LLM and stream the reply as frames."""
        if llm_provider is None:
            return JSONResponse(
                status_code=500, content={"error": "ANTHROPIC_API_KEY not set"}
            )

        system_prompt = build_system_prompt(request.language, test_mode=test_mode)
        messages = [msg.model_dump() for msg in request.messages]
        logger.info(
            "Chat request: %d messages (language=%s)",
            len(messages),
            request.language,
        )

        fragments = llm_provider.stream(messages=messages, system=system_prompt)

        # Pull the first fragment before committing to a 200 streaming response
        try:
            first = await fragments.__anext__()
        except StopAsyncIteration:
            body = _empty()
        except Exception as e:
            logger.error("LLM API error: %s", e, exc_info=True)
            return JSONResponse(
                status_code=500,
                content={"error": str(e) or "Error while processing request"},
            )
        else:
            body = _frames(first, fragments)

        return StreamingResponse(
            body,
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
            },
        )

    return router
