"""Translation API routes."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

from flask import Blueprint, current_app, jsonify, request

import farmconnect_translate.language_codes as lc
from farmconnect_translate import i18n
from farmconnect_translate.logger import get_logger
from farmconnect_translate.translation.exceptions import TranslationError

translation_bp = Blueprint("translation", __name__)
logger = get_logger(__name__)

MAX_BATCH_SIZE = 200


def get_service():
    """The TranslationService bound to the running app."""
    return current_app.extensions["translation_service"]


def error_response(e: TranslationError, status: int = 400):
    body: Dict[str, Any] = {"error": str(e), "code": e.code or "translation_error"}
    if e.details:
        body["details"] = e.details
    return jsonify(body), status


def read_target_language(data: Dict[str, Any]) -> Optional[str]:
    """Validate the optional target_language field and return its accepted form."""
    target_language = data.get("target_language")
    if target_language is None:
        return None
    normalized = lc.normalize_language_code(target_language)
    if normalized is None:
        raise TranslationError(
            f"Unsupported target language: {target_language}",
            code="invalid_language",
            details={"target_language": target_language},
        )
    return normalized


def require_string(data: Dict[str, Any], field: str) -> str:
    value = data.get(field)
    if not isinstance(value, str):
        raise TranslationError(f"'{field}' must be a string", code="invalid_request", details={"field": field})
    return value


@translation_bp.post("/translate")
def translate():
    """Translate one text."""
    data: Dict[str, Any] = request.get_json(silent=True) or {}
    try:
        text = require_string(data, "text")
        target_language = read_target_language(data)
    except TranslationError as e:
        logger.warning("Rejected translate request: %s", e)
        return error_response(e)

    service = get_service()
    translation = asyncio.run(service.translate_text(text, target_language))
    return jsonify({"translation": translation, "failed": service.is_failure(translation)})


@translation_bp.post("/translate/batch")
def translate_batch():
    """Translate a list of texts, keeping their order."""
    data: Dict[str, Any] = request.get_json(silent=True) or {}
    texts = data.get("texts")
    try:
        if not isinstance(texts, list) or not all(isinstance(text, str) for text in texts):
            raise TranslationError("'texts' must be a list of strings", code="invalid_request", details={"field": "texts"})
        if len(texts) > MAX_BATCH_SIZE:
            raise TranslationError(
                f"At most {MAX_BATCH_SIZE} texts per batch",
                code="batch_too_large",
                details={"max": MAX_BATCH_SIZE, "received": len(texts)},
            )
        target_language = read_target_language(data)
    except TranslationError as e:
        logger.warning("Rejected batch request: %s", e)
        return error_response(e)

    service = get_service()
    translations = asyncio.run(service.translate_batch(texts, target_language))
    failed_indexes = [index for index, value in enumerate(translations) if service.is_failure(value)]
    return jsonify({"translations": translations, "failed_indexes": failed_indexes})


@translation_bp.post("/translate/structured")
def translate_structured():
    """Translate markdown-like content, keeping headers and bullets."""
    data: Dict[str, Any] = request.get_json(silent=True) or {}
    try:
        content = require_string(data, "content")
        target_language = read_target_language(data)
    except TranslationError as e:
        logger.warning("Rejected structured request: %s", e)
        return error_response(e)

    translation = asyncio.run(get_service().translate_structured_content(content, target_language))
    return jsonify({"translation": translation})


@translation_bp.post("/detect")
def detect():
    data: Dict[str, Any] = request.get_json(silent=True) or {}
    try:
        text = require_string(data, "text")
    except TranslationError as e:
        return error_response(e)

    language = asyncio.run(get_service().detect_language(text))
    return jsonify({"language": language, "name": lc.get_language_name(language)})


@translation_bp.get("/languages")
def languages():
    """UI languages with static string packs."""
    return jsonify(i18n.get_available_languages())


@translation_bp.get("/i18n/<lang>")
def static_strings(lang: str):
    if lang not in i18n.SUPPORTED_LANGUAGES:
        return error_response(
            TranslationError(f"Unsupported UI language: {lang}", code="invalid_language", details={"lang": lang}),
            404,
        )
    return jsonify(i18n.get_all_translations(lang))
