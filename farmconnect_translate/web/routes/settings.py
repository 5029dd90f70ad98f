"""Settings management API routes."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request

import farmconnect_translate.config as config
from farmconnect_translate.config import (
    BUILTIN_PROVIDERS,
    BUILTIN_PROVIDER_DISPLAY_NAMES,
    PROVIDER_DEFAULTS,
)
import farmconnect_translate.language_codes as lc
from farmconnect_translate.logger import get_logger, refresh_log_mode
from farmconnect_translate.translation.service import TranslationService

settings_bp = Blueprint("settings", __name__)
logger = get_logger(__name__)

LOG_MODES = ("off", "info", "debug")
TIMEOUT_KEYS = ("connect", "read", "write", "pool")


def is_positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def validate_timeout(provider: str, timeout: Any) -> str:
    """A timeout is a positive number or a dict of positive numbers keyed by TIMEOUT_KEYS."""
    if is_positive_number(timeout):
        return ""
    if isinstance(timeout, dict):
        unknown = [key for key in timeout if key not in TIMEOUT_KEYS]
        if unknown:
            return f"{provider} timeout has unknown keys: {', '.join(map(str, unknown))}"
        if all(is_positive_number(value) for value in timeout.values()):
            return ""
    return f"{provider} timeout must be a positive number or an object of positive numbers"


def validate_settings(new_config: Dict[str, Any]) -> str:
    """Return an error message, or an empty string if new_config is acceptable."""
    order = new_config.get("provider_order")
    if order is not None:
        if not isinstance(order, list) or not order:
            return "provider_order must be a non-empty list"
        unknown = [name for name in order if name not in BUILTIN_PROVIDERS]
        if unknown:
            return f"Unknown providers in provider_order: {', '.join(map(str, unknown))}"

    log_mode = new_config.get("log_mode")
    if log_mode is not None and log_mode not in LOG_MODES:
        return f"log_mode must be one of {', '.join(LOG_MODES)}"

    target = new_config.get("default_target_language")
    if target is not None and not lc.is_valid_language_code(target):
        return f"Unsupported default_target_language: {target}"

    if "failure_marker" in new_config:
        marker = new_config["failure_marker"]
        if not isinstance(marker, str) or not marker.strip():
            return "failure_marker must be a non-empty string"

    for provider in BUILTIN_PROVIDERS:
        if provider not in new_config:
            continue
        section = new_config[provider]
        if not isinstance(section, dict):
            return f"{provider} settings must be an object"
        if "timeout" in section:
            error = validate_timeout(provider, section["timeout"])
            if error:
                return error
        for key in ("api_url", "user_agent", "source_language", "api_key"):
            if key in section and not isinstance(section[key], str):
                return f"{provider} {key} must be a string"
        if "api_url" in section and not section["api_url"].startswith(("http://", "https://")):
            return f"{provider} api_url must be an http(s) URL"
        service_urls = section.get("service_urls")
        if service_urls is not None and (
            not isinstance(service_urls, list) or not all(isinstance(url, str) and url for url in service_urls)
        ):
            return f"{provider} service_urls must be a list of host names"

    return ""


@settings_bp.get("/")
def get_settings():
    """Return current configuration with provider meta information."""
    current_config = config.load_config()
    logger.debug("Settings retrieved")
    return jsonify({
        "config": current_config,
        "meta": {
            "builtin_providers": [
                {"id": p, "name": BUILTIN_PROVIDER_DISPLAY_NAMES[p]}
                for p in BUILTIN_PROVIDERS
            ],
            "provider_defaults": PROVIDER_DEFAULTS,
            "log_modes": list(LOG_MODES),
        }
    })


@settings_bp.put("/")
def update_settings():
    """Update configuration and rebuild the app's translation service."""
    data = request.get_json(silent=True)
    if not data or not isinstance(data.get("config"), dict):
        return jsonify({"error": "Missing 'config' object", "code": "config_missing"}), 400

    new_config = data["config"]
    error = validate_settings(new_config)
    if error:
        logger.warning("Rejected settings update: %s", error)
        return jsonify({"error": error, "code": "invalid_config"}), 400

    if "default_target_language" in new_config:
        new_config["default_target_language"] = lc.normalize_language_code(new_config["default_target_language"])

    merged = config.merge_config(new_config, base=config.load_config())
    try:
        config.save_config(merged)
    except OSError as e:
        logger.error(f"Failed to save settings: {e}")
        return jsonify({"error": "Failed to save settings", "code": "config_write_failed"}), 500

    refresh_log_mode()
    current_app.extensions["translation_service"] = TranslationService(
        config=merged,
        transport=current_app.extensions["translation_service"].transport,
    )
    logger.info("Settings updated")
    return jsonify({"config": merged})
