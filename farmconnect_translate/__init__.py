"""FarmConnect translation pipeline: multi-provider fallback translation for farmer-facing text."""

from farmconnect_translate.translation import (
    TranslationError,
    TranslationService,
    LanguageSession,
    is_translation_failure,
    translate_text,
    translate_to_english,
    detect_language,
    translate_batch,
    translate_structured_content,
)

__all__ = [
    "TranslationError",
    "TranslationService",
    "LanguageSession",
    "is_translation_failure",
    "translate_text",
    "translate_to_english",
    "detect_language",
    "translate_batch",
    "translate_structured_content",
]
