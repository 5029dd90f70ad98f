"""
Translation Exceptions

This module contains exception classes for the translation pipeline.
Separated to avoid circular imports between service.py and providers.py.
"""


class TranslationError(Exception):
    """Translation service error with optional code and details."""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ProviderError(TranslationError):
    """A single translation provider failed; the fallback chain moves on."""

    def __init__(self, provider: str, message: str, code: str = "provider_failed", details: dict = None):
        super().__init__(message, code=code, details=details)
        self.provider = provider
