"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import Settings
from ..llm import ILLMProvider, LLMProvider
from ..logging_config import get_logger
from .routes import chat

logger = get_logger(__name__)


def create_llm_provider(settings: Settings) -> ILLMProvider | None:
    """Build the LLM provider, or None when no API key is configured."""
    try:
        return LLMProvider(
            api_key=settings.anthropic_api_key,
            model=settings.llm_model,
            max_tokens=settings.llm_max_tokens,
        )
    except ValueError as e:
        logger.warning("LLM provider unavailable: %s", e)
        return None


def create_fastapi_app(
    settings: Settings | None = None,
    llm_provider: ILLMProvider | None = None,
) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or Settings.from_env()
    if llm_provider is None:
        llm_provider = create_llm_provider(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifespan."""
        logger.info(
            "Chat server started (llm=%s, test_mode=%s)",
            "configured" if llm_provider else "missing",
            settings.test_interview_end,
        )
        yield
        close = getattr(llm_provider, "close", None)
        if close:
            await close()
        logger.info("Chat server stopped")

    fastapi_app = FastAPI(
        title="Interview Assistant API",
        description="Streaming chat endpoint for the interview assistant",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Enable CORS
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    fastapi_app.include_router(
        chat.create_chat_router(llm_provider, test_mode=settings.test_interview_end)
    )

    return fastapi_app
