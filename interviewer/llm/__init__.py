"""LLM module."""

from .llm_provider import ILLMProvider, LLMProvider, normalize_messages
from .prompts import build_system_prompt, get_language_instruction

__all__ = [
    "ILLMProvider",
    "LLMProvider",
    "normalize_messages",
    "build_system_prompt",
    "get_language_instruction",
]
