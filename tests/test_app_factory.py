"""
Tests for app.py — Flask application factory
"""

from flask import Flask

from app import create_app
from services.health import HealthChecker
from services.tts import TTSService


class TestCreateApp:
    def test_returns_flask_instance(self, service):
        assert isinstance(create_app(service), Flask)

    def test_config_override_applies(self, service):
        app = create_app(service, config_override={"TESTING": True, "MY_CUSTOM": "hello"})
        assert app.config["TESTING"] is True
        assert app.config["MY_CUSTOM"] == "hello"

    def test_max_content_length_set(self, service):
        assert create_app(service).config["MAX_CONTENT_LENGTH"] == 1 * 1024 * 1024

    def test_service_is_exposed_as_extension(self, service):
        app = create_app(service)
        assert app.extensions["tts_service"] is service
        assert isinstance(app.extensions["health_checker"], HealthChecker)
        assert app.extensions["health_checker"].service is service

    def test_blueprints_registered(self, flask_app):
        assert {"tts", "health"} <= set(flask_app.blueprints)

    def test_builds_service_from_config_when_omitted(self, monkeypatch, tmp_path):
        for key in ("ELEVENLABS_API_KEY", "VARCO_API_KEY"):
            monkeypatch.delenv(key, raising=False)
        monkeypatch.setenv("OUTPUT_DIR", str(tmp_path))
        app = create_app(config_override={"TESTING": True})
        assert isinstance(app.extensions["tts_service"], TTSService)
        assert app.extensions["tts_service"].get_configured_providers() == []


class TestResponseHeaders:
    def test_security_headers(self, client):
        resp = client.get("/health/live")
        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert resp.headers["X-Frame-Options"] == "SAMEORIGIN"

    def test_cors_allows_localhost(self, client):
        resp = client.get("/api/providers", headers={"Origin": "http://localhost:5173"})
        assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:5173"

    def test_cors_rejects_other_origins(self, client):
        resp = client.get("/api/providers", headers={"Origin": "https://evil.example"})
        assert "Access-Control-Allow-Origin" not in resp.headers
