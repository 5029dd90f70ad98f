"""Tests for the Flask JSON API."""

import httpx
import pytest

from farmconnect_translate.config import FAILURE_MARKER
from farmconnect_translate.web import create_app


@pytest.fixture
def provider(make_provider):
    return make_provider(name="p1", result=lambda text: f"bn:{text}", fail_on={"broken"})


@pytest.fixture
def client(provider, make_service):
    app = create_app(service=make_service(provider))
    app.config["TESTING"] = True
    return app.test_client()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_translate(client, provider):
    response = client.post("/api/translate", json={"text": "Rice", "target_language": "bn"})

    assert response.status_code == 200
    assert response.get_json() == {"translation": "bn:Rice", "failed": False}
    assert provider.calls == [("Rice", "bn")]


def test_translate_reports_failure(client):
    response = client.post("/api/translate", json={"text": "broken"})

    assert response.get_json() == {"translation": f"{FAILURE_MARKER} broken", "failed": True}


def test_translate_rejects_missing_text(client):
    response = client.post("/api/translate", json={})

    assert response.status_code == 400
    assert response.get_json()["code"] == "invalid_request"


def test_translate_rejects_unknown_language(client, provider):
    response = client.post("/api/translate", json={"text": "Rice", "target_language": "klingon"})

    assert response.status_code == 400
    assert response.get_json()["code"] == "invalid_language"
    assert not provider.calls


@pytest.mark.parametrize("requested, sent", [("bn-ZZZ", "bn"), ("en_us", "en-US"), ("BN", "bn")])
def test_translate_normalizes_target_language(client, provider, requested, sent):
    response = client.post("/api/translate", json={"text": "Rice", "target_language": requested})

    assert response.status_code == 200
    assert provider.calls == [("Rice", sent)]


def test_batch(client):
    response = client.post("/api/translate/batch", json={"texts": ["a", "broken", "c"]})

    assert response.status_code == 200
    assert response.get_json() == {
        "translations": ["bn:a", f"{FAILURE_MARKER} broken", "bn:c"],
        "failed_indexes": [1],
    }


def test_batch_rejects_non_list(client):
    response = client.post("/api/translate/batch", json={"texts": "a"})

    assert response.status_code == 400


def test_batch_rejects_oversized_batch(client):
    response = client.post("/api/translate/batch", json={"texts": ["x"] * 201})

    assert response.status_code == 400
    assert response.get_json()["code"] == "batch_too_large"


def test_structured(client):
    response = client.post("/api/translate/structured", json={"content": "# Title\n- item"})

    assert response.get_json() == {"translation": "# bn:Title\n- bn:item"}


def test_detect(make_service):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[[["x", "y", None]], None, "bn"]))
    app = create_app(service=make_service(transport=transport))

    response = app.test_client().post("/api/detect", json={"text": "ধান"})

    assert response.get_json() == {"language": "bn", "name": "Bengali"}


def test_languages_and_static_strings(client):
    languages = client.get("/api/languages").get_json()
    assert {language["code"] for language in languages} == {"en", "bn"}

    strings = client.get("/api/i18n/bn").get_json()
    assert strings["weather"] == "আবহাওয়া"

    assert client.get("/api/i18n/fr").status_code == 404


def test_settings_update_persists_and_rebuilds_service(client, isolated_config):
    response = client.put("/api/settings/", json={"config": {"provider_order": ["mymemory"], "log_mode": "off"}})

    assert response.status_code == 200
    assert response.get_json()["config"]["provider_order"] == ["mymemory"]
    assert isolated_config.exists()

    settings = client.get("/api/settings/").get_json()
    assert settings["config"]["provider_order"] == ["mymemory"]
    assert [p["id"] for p in settings["meta"]["builtin_providers"]][0] == "google_library"

    service = client.application.extensions["translation_service"]
    assert [name for name, _ in service.providers] == ["mymemory"]


def test_settings_rejects_unknown_provider(client):
    response = client.put("/api/settings/", json={"config": {"provider_order": ["bing"]}})

    assert response.status_code == 400
    assert response.get_json()["code"] == "invalid_config"


@pytest.mark.parametrize("marker", [5, "", "   ", None, ["x"]])
def test_settings_rejects_bad_failure_marker(client, isolated_config, marker):
    response = client.put("/api/settings/", json={"config": {"failure_marker": marker}})

    assert response.status_code == 400
    assert response.get_json()["code"] == "invalid_config"
    assert not isolated_config.exists()

    translated = client.post("/api/translate", json={"text": "broken"})
    assert translated.status_code == 200
    assert translated.get_json() == {"translation": f"{FAILURE_MARKER} broken", "failed": True}


@pytest.mark.parametrize("timeout", ["slow", 0, -3, True, {"read": "slow"}, {"read": -1}, {"socket": 5}, [5]])
def test_settings_rejects_bad_provider_timeout(client, isolated_config, timeout):
    response = client.put("/api/settings/", json={"config": {"google_rest": {"timeout": timeout}}})

    assert response.status_code == 400
    assert "timeout" in response.get_json()["error"]
    assert not isolated_config.exists()


@pytest.mark.parametrize("api_url", [123, None, "ftp://example.org/translate"])
def test_settings_rejects_bad_api_url(client, isolated_config, api_url):
    response = client.put("/api/settings/", json={"config": {"mymemory": {"api_url": api_url}}})

    assert response.status_code == 400
    assert "api_url" in response.get_json()["error"]
    assert not isolated_config.exists()


def test_settings_rejects_non_string_service_urls(client):
    response = client.put("/api/settings/", json={"config": {"google_library": {"service_urls": "translate.google.com"}}})

    assert response.status_code == 400
    assert response.get_json()["code"] == "invalid_config"


def test_settings_accepts_valid_timeouts_and_marker(client):
    response = client.put("/api/settings/", json={"config": {
        "failure_marker": "[failed]",
        "google_rest": {"timeout": {"connect": 2, "read": 7.5}},
        "libretranslate": {"timeout": 30, "api_url": "https://translate.example.org/translate"},
    }})

    assert response.status_code == 200
    merged = response.get_json()["config"]
    assert merged["google_rest"]["timeout"] == {"connect": 2, "read": 7.5}
    assert merged["google_rest"]["api_url"].startswith("https://")
    assert merged["libretranslate"]["timeout"] == 30

    service = client.application.extensions["translation_service"]
    assert service.failure_marker == "[failed]"
    assert service.is_failure("[failed] Rice")


def test_settings_normalizes_default_target_language(client):
    response = client.put("/api/settings/", json={"config": {"default_target_language": "bn_bd"}})

    assert response.status_code == 200
    assert response.get_json()["config"]["default_target_language"] == "bn-BD"
