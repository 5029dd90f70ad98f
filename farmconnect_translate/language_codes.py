"""
Language code mappings and utilities.

Standards:
- ISO 639-1: 2-letter language codes (en, bn, hi)
- BCP 47: Language + Region codes (en-US, bn-BD, zh-CN)

The translation providers accept the same short codes, so these helpers are
used to validate target languages before any provider call is made.
"""

from typing import Optional, Dict

# ISO 639-1 language codes (2-letter) that the translation providers support
# Source: https://en.wikipedia.org/wiki/List_of_ISO_639-1_codes
ISO_639_1 = {
    'af': 'Afrikaans',
    'am': 'Amharic',
    'ar': 'Arabic',
    'as': 'Assamese',
    'az': 'Azerbaijani',
    'bg': 'Bulgarian',
    'bn': 'Bengali',
    'bs': 'Bosnian',
    'ca': 'Catalan',
    'cs': 'Czech',
    'da': 'Danish',
    'de': 'German',
    'el': 'Greek',
    'en': 'English',
    'es': 'Spanish',
    'fa': 'Persian',
    'fi': 'Finnish',
    'fr': 'French',
    'gu': 'Gujarati',
    'he': 'Hebrew',
    'hi': 'Hindi',
    'hu': 'Hungarian',
    'id': 'Indonesian',
    'it': 'Italian',
    'ja': 'Japanese',
    'km': 'Khmer',
    'kn': 'Kannada',
    'ko': 'Korean',
    'lo': 'Lao',
    'ml': 'Malayalam',
    'mr': 'Marathi',
    'ms': 'Malay',
    'my': 'Burmese',
    'ne': 'Nepali',
    'nl': 'Dutch',
    'no': 'Norwegian',
    'or': 'Odia',
    'pa': 'Punjabi',
    'pl': 'Polish',
    'pt': 'Portuguese',
    'ro': 'Romanian',
    'ru': 'Russian',
    'si': 'Sinhala',
    'sv': 'Swedish',
    'sw': 'Swahili',
    'ta': 'Tamil',
    'te': 'Telugu',
    'th': 'Thai',
    'tr': 'Turkish',
    'uk': 'Ukrainian',
    'ur': 'Urdu',
    'vi': 'Vietnamese',
    'zh': 'Chinese',
}

# Common BCP 47 codes (language-region)
BCP_47_COMMON = {
    'bn-BD': 'Bengali (Bangladesh)',
    'bn-IN': 'Bengali (India)',
    'en-GB': 'English (United Kingdom)',
    'en-US': 'English (United States)',
    'pt-BR': 'Portuguese (Brazil)',
    'zh-CN': 'Chinese (Simplified)',
    'zh-TW': 'Chinese (Traditional)',
}

ALL_LANGUAGE_CODES = {**ISO_639_1, **BCP_47_COMMON}


def normalize_language_code(code: str) -> Optional[str]:
    """
    Return the accepted form of a language code, or None if it is not valid.

    Known BCP 47 codes keep their region; otherwise the region is dropped and
    the base ISO 639-1 code is used.

    Examples:
        >>> normalize_language_code('en_us')
        'en-US'
        >>> normalize_language_code('bn-ZZZ')
        'bn'
        >>> normalize_language_code('xx') is None
        True
    """
    if not code or not isinstance(code, str):
        return None
    candidate = code.strip().replace('_', '-')
    for known in ALL_LANGUAGE_CODES:
        if known.lower() == candidate.lower():
            return known
    base = extract_base_language(candidate)
    if base in ISO_639_1:
        return base
    return None


def is_valid_language_code(code: str) -> bool:
    """
    Check if a language code is valid.

    Args:
        code: Language code (e.g., 'bn', 'bn-BD')

    Returns:
        True if code is valid

    Examples:
        >>> is_valid_language_code('bn')
        True
        >>> is_valid_language_code('xx')
        False
    """
    return normalize_language_code(code) is not None


def get_language_name(code: str) -> Optional[str]:
    """
    Get the full language name from code.

    Examples:
        >>> get_language_name('bn')
        'Bengali'
    """
    if not code:
        return None
    return ALL_LANGUAGE_CODES.get(code) or ISO_639_1.get(extract_base_language(code))


def extract_base_language(code: str) -> str:
    """
    Extract base language from code (remove region).

    Examples:
        >>> extract_base_language('bn-BD')
        'bn'
    """
    return code.replace('_', '-').split('-')[0].lower()
