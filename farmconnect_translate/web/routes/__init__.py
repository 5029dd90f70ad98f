"""Route blueprints for the web application."""

from .translation import translation_bp
from .settings import settings_bp

__all__ = [
    "translation_bp",
    "settings_bp",
]
