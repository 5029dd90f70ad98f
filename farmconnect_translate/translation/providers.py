"""
Translation Provider Implementations

This module contains the call implementations for each translation provider:
- Google Translate through the googletrans library
- Google Translate public REST endpoint (client=gtx)
- MyMemory
- LibreTranslate

Each function takes a TranslationService instance, the text and the target
language, and returns the translated text. Any failure is raised as
ProviderError so the service can move on to the next provider.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict

import httpx
from googletrans import Translator

from farmconnect_translate.config import get_provider_config
from farmconnect_translate.logger import get_logger
from farmconnect_translate.translation.exceptions import ProviderError

logger = get_logger(__name__)

ProviderFunc = Callable[[Any, str, str], Awaitable[str]]


def get_httpx_timeout(timeout_config: Any) -> httpx.Timeout:
    """
    Convert timeout configuration to httpx.Timeout object.

    Args:
        timeout_config: Either a number (read timeout) or a dict with
            connect, write, read, pool keys

    Returns:
        httpx.Timeout object
    """
    if isinstance(timeout_config, dict):
        return httpx.Timeout(
            connect=timeout_config.get('connect', 5.0),
            write=timeout_config.get('write', 10.0),
            read=timeout_config.get('read', 15.0),
            pool=timeout_config.get('pool', 5.0),
        )
    else:
        timeout_value = float(timeout_config) if timeout_config else 15.0
        return httpx.Timeout(
            connect=5.0,
            write=10.0,
            read=timeout_value,
            pool=5.0,
        )


def get_deadline_seconds(timeout_config: Any) -> float:
    """Overall deadline for providers that are not plain httpx calls."""
    if isinstance(timeout_config, dict):
        return float(timeout_config.get('read', 15.0)) + float(timeout_config.get('connect', 5.0))
    return float(timeout_config) if timeout_config else 15.0


def handle_http_error(e: httpx.HTTPStatusError, provider: str):
    """Handle HTTP errors with detailed messages."""
    status_code = e.response.status_code
    error_text = "Unknown error"

    try:
        error_json = e.response.json()
        if isinstance(error_json, dict) and "error" in error_json:
            error_detail = error_json["error"]
            if isinstance(error_detail, dict):
                error_text = error_detail.get("message", str(error_detail))
            else:
                error_text = str(error_detail)
        elif isinstance(error_json, dict) and "responseDetails" in error_json:
            error_text = str(error_json["responseDetails"])
    except ValueError:
        error_text = e.response.text[:500] or e.response.reason_phrase or "No details"

    raise ProviderError(
        provider,
        f"{provider} API error ({status_code}): {error_text}",
        details={"status_code": status_code},
    )


def _parse_json(response: httpx.Response, provider: str) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise ProviderError(provider, f"{provider} returned malformed JSON: {e}", code="malformed_response")


async def call_google_library(service, text: str, target_language: str) -> str:
    """Translate with the googletrans library."""
    provider_config = get_provider_config(service.config, 'google_library')
    deadline = get_deadline_seconds(provider_config.get('timeout'))
    service_urls = provider_config.get('service_urls') or ["translate.googleapis.com"]

    logger.debug(f"Calling googletrans (target: {target_language})")

    try:
        async with Translator(service_urls=service_urls) as translator:
            result = await asyncio.wait_for(
                translator.translate(text, dest=target_language),
                timeout=deadline,
            )
    except asyncio.TimeoutError:
        raise ProviderError("google_library", "googletrans request timeout", code="timeout")
    except Exception as e:
        raise ProviderError("google_library", f"googletrans call failed: {e}")

    translated = getattr(result, 'text', None)
    if not translated:
        raise ProviderError("google_library", "googletrans returned no text", code="malformed_response")
    return translated


async def call_google_rest_api(service, text: str, target_language: str) -> str:
    """
    Translate with the public Google Translate endpoint.

    The body is an array of arrays; data[0] holds one [translated, original, ...]
    segment per sentence.
    """
    provider_config = get_provider_config(service.config, 'google_rest')
    api_url = provider_config.get('api_url', 'https://translate.googleapis.com/translate_a/single')
    params = {"client": "gtx", "sl": "auto", "tl": target_language, "dt": "t", "q": text}
    headers = {"User-Agent": provider_config.get('user_agent', '')}

    logger.debug(f"Calling Google REST API (target: {target_language})")

    try:
        async with service.http_client(provider_config.get('timeout')) as client:
            response = await client.get(api_url, params=params, headers=headers)
            response.raise_for_status()
            data = _parse_json(response, "google_rest")
    except httpx.HTTPStatusError as e:
        handle_http_error(e, "google_rest")
    except httpx.TimeoutException:
        raise ProviderError("google_rest", "Google REST API request timeout", code="timeout")
    except httpx.HTTPError as e:
        raise ProviderError("google_rest", f"Google REST API call failed: {e}")

    try:
        segments = [segment[0] for segment in data[0] if segment and segment[0]]
    except (TypeError, IndexError, KeyError):
        segments = []

    if not segments:
        logger.warning(f"Unexpected response structure from Google REST API: {str(data)[:200]}")
        raise ProviderError("google_rest", "Could not parse translation response", code="malformed_response")
    return "".join(segments)


async def call_mymemory_api(service, text: str, target_language: str) -> str:
    """Translate with the MyMemory API (responseData.translatedText)."""
    provider_config = get_provider_config(service.config, 'mymemory')
    api_url = provider_config.get('api_url', 'https://api.mymemory.translated.net/get')
    source_language = provider_config.get('source_language', 'en')
    params = {"q": text, "langpair": f"{source_language}|{target_language}"}

    logger.debug(f"Calling MyMemory API (langpair: {params['langpair']})")

    try:
        async with service.http_client(provider_config.get('timeout')) as client:
            response = await client.get(api_url, params=params)
            response.raise_for_status()
            data = _parse_json(response, "mymemory")
    except httpx.HTTPStatusError as e:
        handle_http_error(e, "mymemory")
    except httpx.TimeoutException:
        raise ProviderError("mymemory", "MyMemory API request timeout", code="timeout")
    except httpx.HTTPError as e:
        raise ProviderError("mymemory", f"MyMemory API call failed: {e}")

    if not isinstance(data, dict):
        raise ProviderError("mymemory", "Unexpected MyMemory response format", code="malformed_response")

    # MyMemory reports quota and language errors in the body with HTTP 200
    status = data.get('responseStatus')
    if status is not None and str(status) != "200":
        raise ProviderError(
            "mymemory",
            f"MyMemory API error ({status}): {data.get('responseDetails', 'No details')}",
            details={"status_code": status},
        )

    translated = (data.get('responseData') or {}).get('translatedText')
    if not translated:
        raise ProviderError("mymemory", "No translatedText in MyMemory response", code="malformed_response")
    return translated


async def call_libretranslate_api(service, text: str, target_language: str) -> str:
    """Translate with a LibreTranslate instance (translatedText)."""
    provider_config = get_provider_config(service.config, 'libretranslate')
    api_url = provider_config.get('api_url', 'https://libretranslate.de/translate')

    body = {
        "q": text,
        "source": "auto",
        "target": target_language,
        "format": "text",
    }
    if provider_config.get('api_key'):
        body["api_key"] = provider_config['api_key']

    logger.debug(f"Calling LibreTranslate API (url: {api_url})")

    try:
        async with service.http_client(provider_config.get('timeout')) as client:
            response = await client.post(api_url, json=body)
            response.raise_for_status()
            data = _parse_json(response, "libretranslate")
    except httpx.HTTPStatusError as e:
        handle_http_error(e, "libretranslate")
    except httpx.TimeoutException:
        raise ProviderError("libretranslate", "LibreTranslate API request timeout", code="timeout")
    except httpx.HTTPError as e:
        raise ProviderError("libretranslate", f"LibreTranslate API call failed: {e}")

    translated = data.get('translatedText') if isinstance(data, dict) else None
    if not translated:
        raise ProviderError("libretranslate", "No translatedText in LibreTranslate response", code="malformed_response")
    return translated


async def detect_with_google_rest(service, text: str) -> str:
    """Return the source language Google reports for text (data[2])."""
    provider_config = get_provider_config(service.config, 'google_rest')
    api_url = provider_config.get('api_url', 'https://translate.googleapis.com/translate_a/single')
    params = {"client": "gtx", "sl": "auto", "tl": "en", "dt": "t", "q": text}
    headers = {"User-Agent": provider_config.get('user_agent', '')}

    try:
        async with service.http_client(provider_config.get('timeout')) as client:
            response = await client.get(api_url, params=params, headers=headers)
            response.raise_for_status()
            data = _parse_json(response, "google_rest")
    except httpx.HTTPStatusError as e:
        handle_http_error(e, "google_rest")
    except httpx.HTTPError as e:
        raise ProviderError("google_rest", f"Language detection call failed: {e}")

    if isinstance(data, list) and len(data) > 2 and isinstance(data[2], str) and data[2]:
        return data[2]
    raise ProviderError("google_rest", "No detected language in response", code="malformed_response")


PROVIDERS: Dict[str, ProviderFunc] = {
    "google_library": call_google_library,
    "google_rest": call_google_rest_api,
    "mymemory": call_mymemory_api,
    "libretranslate": call_libretranslate_api,
}
