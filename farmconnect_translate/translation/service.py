"""
Translation Service Module

This module provides the main service for translation:
- TranslationService class running the provider fallback chain
- Batch and structure-preserving helpers built on top of it
- Module-level shortcuts bound to a default service

For provider-specific API implementations, see translation/providers.py
"""

import asyncio
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

from farmconnect_translate.config import (
    load_config,
    get_provider_order,
    DEFAULT_TARGET_LANGUAGE,
    FAILURE_MARKER,
)
from farmconnect_translate.logger import get_logger
from farmconnect_translate.translation.exceptions import ProviderError
from farmconnect_translate.translation.outcome import (
    Failure,
    Success,
    TranslationOutcome,
    TranslationRequest,
)
from farmconnect_translate.translation.providers import (
    PROVIDERS,
    ProviderFunc,
    detect_with_google_rest,
    get_httpx_timeout,
)
from farmconnect_translate.translation.structured import join_lines, plan_content

logger = get_logger(__name__)


def is_translation_failure(value: str, marker: str = FAILURE_MARKER) -> bool:
    """True if value is the sentinel fallback returned when every provider failed."""
    return isinstance(value, str) and value.startswith(marker)


class TranslationService:
    """Translates text by trying each provider in priority order."""

    def __init__(
        self,
        providers: Optional[Sequence[Tuple[str, ProviderFunc]]] = None,
        config: Optional[Dict[str, Any]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config if config is not None else load_config()
        self.transport = transport
        self.failure_marker = self.config.get('failure_marker', FAILURE_MARKER)
        if not isinstance(self.failure_marker, str) or not self.failure_marker.strip():
            logger.warning(f"Invalid failure_marker {self.failure_marker!r} in config, using default")
            self.failure_marker = FAILURE_MARKER
        self.default_target_language = self.config.get('default_target_language', DEFAULT_TARGET_LANGUAGE)
        if providers is None:
            providers = [(name, PROVIDERS[name]) for name in get_provider_order(self.config)]
        self.providers: List[Tuple[str, ProviderFunc]] = list(providers)
        logger.info(f"Initialized translation service with providers: {[name for name, _ in self.providers]}")

    def http_client(self, timeout_config: Any = None) -> httpx.AsyncClient:
        """Build the AsyncClient used for one provider call."""
        return httpx.AsyncClient(timeout=get_httpx_timeout(timeout_config), transport=self.transport)

    def mark_failed(self, text: str) -> str:
        return f"{self.failure_marker} {text}"

    def is_failure(self, value: str) -> bool:
        return is_translation_failure(value, self.failure_marker)

    async def _attempt(self, name: str, provider: ProviderFunc, request: TranslationRequest) -> TranslationOutcome:
        """Run one provider and fold any error into a Failure."""
        try:
            translated = await provider(self, request.text, request.target_language)
        except ProviderError as e:
            return Failure(provider=name, reason=str(e))
        except Exception as e:
            return Failure(provider=name, reason=f"{type(e).__name__}: {e}")

        if not isinstance(translated, str) or not translated.strip():
            return Failure(provider=name, reason="empty translation")
        return Success(text=translated, provider=name)

    async def translate_text(self, text: str, target_language: Optional[str] = None) -> str:
        """
        Translate text, falling back through the providers.

        Never raises for provider problems: when every provider fails the
        original text is returned prefixed with the failure marker.

        Args:
            text: Text to translate
            target_language: Target language code (defaults to the configured one, 'bn')

        Returns:
            Translated text, the unchanged input if it is blank, or the sentinel string
        """
        request = TranslationRequest(text=text, target_language=target_language or self.default_target_language)
        if request.is_blank:
            return text

        logger.debug(f"Attempting to translate: \"{text[:80]}\" to {request.target_language}")

        for name, provider in self.providers:
            outcome = await self._attempt(name, provider, request)
            if outcome.ok:
                logger.debug(f"Translation successful using {name}")
                return outcome.text
            logger.warning(f"{name} translation failed, trying next provider: {outcome.reason}")

        logger.error("All translation methods failed, returning original text")
        return self.mark_failed(text)

    async def translate_to_english(self, text: str) -> str:
        """Reverse translation helper."""
        return await self.translate_text(text, "en")

    async def detect_language(self, text: str) -> str:
        """Detect the language of text, 'unknown' if it cannot be determined."""
        if not text or not text.strip():
            return "unknown"
        try:
            return await detect_with_google_rest(self, text)
        except Exception as e:
            logger.error(f"Language detection failed: {e}")
            return "unknown"

    async def translate_batch(self, texts: List[str], target_language: Optional[str] = None) -> List[str]:
        """
        Translate many texts concurrently.

        Returns:
            List of translations in the same order as texts
        """
        if not texts:
            return []

        results = await asyncio.gather(
            *(self.translate_text(text, target_language) for text in texts),
            return_exceptions=True,
        )

        translations = []
        for index, result in enumerate(results):
            if isinstance(result, BaseException):
                logger.error(f"Translation failed for text {index}: {result}")
                translations.append(self.mark_failed(texts[index]))
            else:
                translations.append(result)
        return translations

    async def translate_structured_content(self, content: str, target_language: Optional[str] = None) -> str:
        """
        Translate markdown-like content line by line.

        Header marks, bullet markers, numbering and blank lines are kept as
        they are; only the text after them is sent to a provider.
        """
        if not content or not content.strip():
            return content

        try:
            plans, separators = plan_content(content)
            pending = [(index, plan) for index, plan in enumerate(plans) if plan.payload is not None]

            results = await asyncio.gather(
                *(self.translate_text(plan.payload, target_language) for _, plan in pending),
                return_exceptions=True,
            )

            rendered = [plan.line for plan in plans]
            for (index, plan), result in zip(pending, results):
                if isinstance(result, BaseException):
                    logger.error(f"Translation failed for line {index}: {result}")
                    continue
                rendered[index] = plan.render(result)

            return join_lines(rendered, separators)
        except Exception as e:
            logger.error(f"Structured content translation failed: {e}")
            return await self.translate_text(content, target_language)


_default_service: Optional[TranslationService] = None


def get_default_service() -> TranslationService:
    """Lazily create the shared service from the current configuration."""
    global _default_service
    if _default_service is None:
        _default_service = TranslationService()
    return _default_service


def reset_default_service() -> None:
    """Drop the shared service so the next call picks up new configuration."""
    global _default_service
    _default_service = None


async def translate_text(text: str, target_language: str = DEFAULT_TARGET_LANGUAGE) -> str:
    return await get_default_service().translate_text(text, target_language)


async def translate_to_english(text: str) -> str:
    return await get_default_service().translate_to_english(text)


async def detect_language(text: str) -> str:
    return await get_default_service().detect_language(text)


async def translate_batch(texts: List[str], target_language: str = DEFAULT_TARGET_LANGUAGE) -> List[str]:
    return await get_default_service().translate_batch(texts, target_language)


async def translate_structured_content(content: str, target_language: str = DEFAULT_TARGET_LANGUAGE) -> str:
    return await get_default_service().translate_structured_content(content, target_language)
