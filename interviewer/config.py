"""Project-level configuration, protocol constants and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"
LOGS_DIR = PROJECT_ROOT / "logs"
DEFAULT_DB_PATH = DATA_DIR / "interviewer.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

# Protocol constants
INTERVIEW_END_MARKER = "[INTERVIEW_END]"
COOLDOWN_KEY = "interai_interview_cooldown"
COOLDOWN_DURATION_MS = 24 * 60 * 60 * 1000
FINISH_COUNTDOWN_SECONDS = 10
DEFAULT_LANGUAGE = "zho"
DEFAULT_ERROR_MESSAGE = "Sorry, something went wrong. Please try again."


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() == "true"


@dataclass
class Settings:
    """Runtime settings for both the chat server and the interview client."""

    api_host: str = "localhost"
    api_port: int = 8000
    api_url: str = ""
    database_url: str | None = None
    anthropic_api_key: str | None = None
    llm_model: str = "claude-3-5-sonnet-20241022"
    llm_max_tokens: int = 8192
    test_interview_end: bool = False
    log_level: str = "INFO"
    locale: str = "zh-TW"

    def __post_init__(self) -> None:
        if not self.api_url:
            self.api_url = f"http://{self.api_host}:{self.api_port}"

    @classmethod
    def from_env(cls, env_file: PathLike | None = None) -> "Settings":
        """Load settings from environment variables (including .env file)."""
        load_dotenv(env_file or PROJECT_ROOT / ".env")

        api_host = os.getenv("API_HOST", cls.api_host)
        api_port = int(os.getenv("API_PORT", str(cls.api_port)))

        return cls(
            api_host=api_host,
            api_port=api_port,
            api_url=os.getenv("API_URL", ""),
            database_url=os.getenv("DATABASE_URL"),
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY"),
            llm_model=os.getenv("LLM_MODEL", cls.llm_model),
            llm_max_tokens=int(os.getenv("LLM_MAX_TOKENS", str(cls.llm_max_tokens))),
            test_interview_end=_env_flag("TEST_INTERVIEW_END"),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            locale=os.getenv("LOCALE", cls.locale),
        )
