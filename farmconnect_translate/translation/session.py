"""
Language Session

Holds the user's current UI language and remembers dynamic translations
for it. Static strings are served from the language packs; everything
else goes through the TranslationService.
"""

from typing import Dict, Tuple

from farmconnect_translate import i18n
from farmconnect_translate.logger import get_logger

logger = get_logger(__name__)


class LanguageSession:
    """Current language plus an in-memory translation cache."""

    def __init__(self, service, language: str = i18n.DEFAULT_LANGUAGE):
        self.service = service
        self._language = i18n.DEFAULT_LANGUAGE
        self._cache: Dict[Tuple[str, str], str] = {}
        self.language = language

    @property
    def language(self) -> str:
        return self._language

    @language.setter
    def language(self, lang: str):
        if lang not in i18n.SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language: {lang}")
        if lang != self._language:
            # Cached strings belong to the previous language
            self._cache.clear()
        self._language = lang

    def set_language(self, lang: str) -> None:
        self.language = lang
        logger.info(f"Language switched to {lang}")

    def static(self, key: str, **kwargs) -> str:
        """Static UI string for key in the current language."""
        return i18n.get_translation(key, self._language, **kwargs)

    async def translate(self, text: str) -> str:
        """
        Localize free text for the current language.

        Returns the original text when the language is English, and also
        when the service raises.
        """
        if self._language == i18n.DEFAULT_LANGUAGE or not text:
            return text or ''

        cache_key = (text, self._language)
        if cache_key in self._cache:
            return self._cache[cache_key]

        static_key = i18n.find_static_key(text)
        if static_key:
            return self.static(static_key)

        try:
            translated = await self.service.translate_text(text, self._language)
        except Exception as e:
            logger.error(f"Translation failed: {e}")
            return text

        if not translated:
            return text
        # Sentinel results are not cached so the next call retries the providers
        if not self.service.is_failure(translated):
            self._cache[cache_key] = translated
        return translated
