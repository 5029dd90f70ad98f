import copy
import json
from pathlib import Path
from typing import Dict, Any, List

from farmconnect_translate.logger import get_logger

logger = get_logger(__name__)

# Pipeline constants
DEFAULT_TARGET_LANGUAGE = "bn"
FAILURE_MARKER = "[অনুবাদ ব্যর্থ]"

# Provider configuration constants
BUILTIN_PROVIDERS = ["google_library", "google_rest", "mymemory", "libretranslate"]

BUILTIN_PROVIDER_DISPLAY_NAMES = {
    "google_library": "Google Translate (googletrans)",
    "google_rest": "Google Translate (REST)",
    "mymemory": "MyMemory",
    "libretranslate": "LibreTranslate",
}

PROVIDER_DEFAULTS = {
    "timeout": 15
}

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

# Get base directory (project root)
BASE_DIR = Path(__file__).parent.parent
CONFIG_DIR = BASE_DIR / "config"
CONFIG_FILE = CONFIG_DIR / "config.json"

# Default configuration template
DEFAULT_CONFIG = {
    "default_target_language": DEFAULT_TARGET_LANGUAGE,
    "failure_marker": FAILURE_MARKER,
    "provider_order": list(BUILTIN_PROVIDERS),
    "google_library": {
        "timeout": 15,
        "service_urls": ["translate.googleapis.com"],
    },
    "google_rest": {
        "timeout": 15,
        "api_url": "https://translate.googleapis.com/translate_a/single",
        "user_agent": BROWSER_USER_AGENT,
    },
    "mymemory": {
        "timeout": 15,
        "api_url": "https://api.mymemory.translated.net/get",
        "source_language": "en",
    },
    "libretranslate": {
        "timeout": 15,
        "api_url": "https://libretranslate.de/translate",
        "api_key": "",
    },
    "log_mode": "off"
}


def ensure_config_directory():
    """Ensure the config directory exists."""
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    logger.debug(f"Config directory ensured: {CONFIG_FILE.parent}")


def merge_config(overrides: Dict[str, Any], base: Dict[str, Any] = None) -> Dict[str, Any]:
    """
    Merge user configuration over base (the defaults when omitted).

    Provider sections are merged key by key so a config file only needs
    to list the values it changes.
    """
    config = copy.deepcopy(base if base is not None else DEFAULT_CONFIG)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(config.get(key), dict):
            config[key].update(value)
        else:
            config[key] = value
    return config


def load_config() -> Dict[str, Any]:
    """Load the configuration from the JSON config file."""
    if not CONFIG_FILE.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(CONFIG_FILE, 'r', encoding='utf-8') as f:
            overrides = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse config file {CONFIG_FILE}: {e}")
        logger.warning("Using default configuration")
        return copy.deepcopy(DEFAULT_CONFIG)
    except OSError as e:
        logger.error(f"Failed to read config file {CONFIG_FILE}: {e}")
        logger.warning("Using default configuration")
        return copy.deepcopy(DEFAULT_CONFIG)

    if not isinstance(overrides, dict):
        logger.warning(f"Config file {CONFIG_FILE} does not contain an object, using defaults")
        return copy.deepcopy(DEFAULT_CONFIG)

    logger.debug("Configuration loaded from file")
    return merge_config(overrides)


def save_config(config: Dict[str, Any]):
    """Save the configuration to the JSON config file."""
    ensure_config_directory()
    try:
        with open(CONFIG_FILE, 'w', encoding='utf-8') as f:
            json.dump(config, f, indent=4, ensure_ascii=False)
        logger.info("Configuration saved")
    except OSError as e:
        logger.error(f"Failed to save config: {e}")
        raise


def get_provider_config(config: Dict[str, Any], provider: str) -> Dict[str, Any]:
    """Get one provider's section with PROVIDER_DEFAULTS filled in."""
    provider_config = dict(PROVIDER_DEFAULTS)
    provider_config.update(config.get(provider) or {})
    return provider_config


def get_provider_order(config: Dict[str, Any]) -> List[str]:
    """
    Get the fallback priority order.

    Unknown names are dropped with a warning; an empty result falls back
    to the built-in order.
    """
    order = config.get('provider_order') or BUILTIN_PROVIDERS
    valid = []
    for name in order:
        if name in BUILTIN_PROVIDERS and name not in valid:
            valid.append(name)
        else:
            logger.warning(f"Ignoring unknown or duplicate provider in provider_order: {name}")
    return valid or list(BUILTIN_PROVIDERS)
