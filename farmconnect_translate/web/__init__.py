"""Web application package for FarmConnect Translate."""

from flask import Flask


def create_app(service=None) -> Flask:
    """Application factory for the JSON API."""
    from .app import build_app  # Import here to avoid circular imports

    return build_app(service=service)


__all__ = ["create_app"]
