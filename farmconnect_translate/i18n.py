"""
Static UI strings for FarmConnect.

Common labels (navigation, buttons, weather, prices, planning...) ship
pre-translated as JSON language packs so they never cost a provider call.
Keys are flat, e.g. 'market-prices'. A missing key falls back to English
and then to the key itself.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from farmconnect_translate.logger import get_logger

logger = get_logger(__name__)

# Language pack directory
LOCALES_DIR = Path(__file__).parent / "locales"

# Default language
DEFAULT_LANGUAGE = "en"

# Supported languages with their display names
SUPPORTED_LANGUAGES = {
    "en": {"name": "English", "native_name": "English"},
    "bn": {"name": "Bangla", "native_name": "বাংলা"},
}

# Cache for loaded language packs
_language_cache: Dict[str, Dict[str, str]] = {}


def normalize_language_code(lang_code: str) -> str:
    """
    Normalize a language code to one of the supported languages.

    Args:
        lang_code: Raw language code (e.g., 'bn-BD', 'BN', 'en_US')

    Returns:
        Supported language code, or DEFAULT_LANGUAGE
    """
    if not lang_code:
        return DEFAULT_LANGUAGE

    lang_prefix = lang_code.lower().replace('_', '-').split('-')[0]
    if lang_prefix in SUPPORTED_LANGUAGES:
        return lang_prefix
    return DEFAULT_LANGUAGE


def load_language(lang_code: str) -> Dict[str, str]:
    """
    Load a language pack from JSON file.

    Args:
        lang_code: The language code (e.g., 'en', 'bn')

    Returns:
        Dictionary of key -> string for the language
    """
    lang_code = normalize_language_code(lang_code)

    if lang_code in _language_cache:
        return _language_cache[lang_code]

    lang_file = LOCALES_DIR / f"{lang_code}.json"

    if not lang_file.exists():
        logger.debug(f"Language file not found: {lang_file}, falling back to {DEFAULT_LANGUAGE}")
        if lang_code != DEFAULT_LANGUAGE:
            return load_language(DEFAULT_LANGUAGE)
        return {}

    try:
        with open(lang_file, 'r', encoding='utf-8') as f:
            translations = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load language file {lang_file}: {e}")
        if lang_code != DEFAULT_LANGUAGE:
            return load_language(DEFAULT_LANGUAGE)
        return {}

    _language_cache[lang_code] = translations
    logger.debug(f"Loaded language pack: {lang_code}")
    return translations


def get_translation(key: str, lang: str = DEFAULT_LANGUAGE, **kwargs) -> str:
    """
    Get the static string for key in lang.

    Args:
        key: The string key (e.g., 'market-prices')
        lang: The language code (default: 'en')
        **kwargs: Optional format arguments for string interpolation

    Returns:
        The localized string, or the key itself if not found
    """
    if not key:
        return ''

    lang = normalize_language_code(lang)
    value = load_language(lang).get(key)

    if value is None and lang != DEFAULT_LANGUAGE:
        value = load_language(DEFAULT_LANGUAGE).get(key)

    if value is None:
        logger.debug(f"Static translation not found for key: {key} (lang: {lang})")
        return key

    if kwargs:
        try:
            value = value.format(**kwargs)
        except KeyError as e:
            logger.warning(f"Missing interpolation key {e} for translation: {key}")

    return value


def find_static_key(text: str) -> Optional[str]:
    """Find the key whose English string equals text, ignoring case."""
    if not text:
        return None
    needle = text.strip().lower()
    for key, value in load_language(DEFAULT_LANGUAGE).items():
        if value.lower() == needle:
            return key
    return None


def get_available_languages() -> List[Dict[str, Any]]:
    """
    Get a list of available languages.

    Returns:
        List of dictionaries with language info
    """
    languages = []
    for code, info in SUPPORTED_LANGUAGES.items():
        lang_file = LOCALES_DIR / f"{code}.json"
        languages.append({
            "code": code,
            "name": info["name"],
            "native_name": info["native_name"],
            "available": lang_file.exists()
        })
    return languages


def get_all_translations(lang: str = DEFAULT_LANGUAGE) -> Dict[str, str]:
    """Get all static strings for a language (useful for frontend)."""
    return dict(load_language(lang))


def clear_cache() -> None:
    """Clear the language cache (useful for development/testing)."""
    _language_cache.clear()
    logger.debug("Language cache cleared")
