"""
Translation module - Core translation functionality

This module provides:
- TranslationService: provider fallback chain, batch and structured helpers
- Provider invokers for googletrans, Google REST, MyMemory and LibreTranslate
- LanguageSession: current language with cached dynamic translations
"""

from farmconnect_translate.translation.exceptions import TranslationError, ProviderError
from farmconnect_translate.translation.outcome import (
    Failure,
    Success,
    TranslationOutcome,
    TranslationRequest,
)
from farmconnect_translate.translation.service import (
    TranslationService,
    get_default_service,
    reset_default_service,
    is_translation_failure,
    translate_text,
    translate_to_english,
    detect_language,
    translate_batch,
    translate_structured_content,
)
from farmconnect_translate.translation.session import LanguageSession
