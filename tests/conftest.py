"""Shared fixtures: isolated config file and scripted fake providers."""

import copy

import pytest

import farmconnect_translate.config as config
from farmconnect_translate import i18n
from farmconnect_translate.translation.exceptions import ProviderError
from farmconnect_translate.translation.service import TranslationService


class FakeProvider:
    """Async provider that records calls and returns or raises on demand."""

    def __init__(self, name="fake", result="X", fail_on=(), error=None):
        self.name = name
        self.result = result
        self.fail_on = set(fail_on)
        self.error = error
        self.calls = []

    async def __call__(self, service, text, target_language):
        self.calls.append((text, target_language))
        if self.error is not None:
            raise self.error
        if text in self.fail_on:
            raise ProviderError(self.name, f"{self.name} refused {text!r}")
        if callable(self.result):
            return self.result(text)
        return self.result


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config file at a temp dir so tests never touch the real one."""
    config_file = tmp_path / "config" / "config.json"
    monkeypatch.setattr(config, "CONFIG_FILE", config_file)
    yield config_file
    i18n.clear_cache()


@pytest.fixture
def default_config():
    return copy.deepcopy(config.DEFAULT_CONFIG)


@pytest.fixture
def make_provider():
    return FakeProvider


@pytest.fixture
def make_service(default_config):
    """Build a TranslationService over the given (name, provider) pairs."""

    def _make(*providers, transport=None):
        pairs = [(provider.name, provider) for provider in providers]
        return TranslationService(providers=pairs, config=default_config, transport=transport)

    return _make
