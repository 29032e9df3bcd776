"""UI locale to request language code resolution."""

from .config import DEFAULT_LANGUAGE

LOCALE_LANGUAGES = {
    "zh-TW": "zho",
    "en": "eng",
    "ja": "jpn",
    "ko": "kor",
}


def resolve_language(locale: str | None) -> str:
    """Map a UI locale to the language code sent with each chat request."""
    if not locale:
        return DEFAULT_LANGUAGE
    return LOCALE_LANGUAGES.get(locale, DEFAULT_LANGUAGE)
