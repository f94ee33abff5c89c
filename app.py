"""
Flask application factory for the TTS Hub web server.

Usage:
    from app import create_app
    app = create_app()

The TTSService is built from config/default.yaml + environment when not
passed in; tests inject their own service with fake providers.
"""
import logging
import os
from typing import Optional

from flask import Flask
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from config.loader import Config
from routes.health import health_bp
from routes.tts import tts_bp
from services.health import HealthChecker
from services.tts import TTSService

logger = logging.getLogger(__name__)

# Synthesis requests are small JSON bodies
_MAX_UPLOAD_BYTES = 1 * 1024 * 1024  # 1 MB


def create_app(service: Optional[TTSService] = None, config_override: dict = None) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        service: TTSService to serve. Built from Config() when omitted.
        config_override: Optional dict of Flask config values to apply.
                         Primarily used in tests to inject TESTING=True etc.

    Returns:
        The configured Flask app.
    """
    app = Flask(__name__, static_folder=None)
    app.config['MAX_CONTENT_LENGTH'] = _MAX_UPLOAD_BYTES

    # Apply test / caller overrides last so they take precedence
    if config_override:
        app.config.update(config_override)

    # Trust one level of X-Forwarded-* headers (nginx / reverse proxy).
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    # Any localhost port for dev; extra origins via CORS_ORIGINS (comma-separated)
    _extra_origins = [o.strip() for o in os.getenv('CORS_ORIGINS', '').split(',') if o.strip()]
    CORS(app, origins=[
        r'^http://localhost:\d+$',
        *_extra_origins,
    ])

    if service is None:
        service = TTSService(Config().tts_config())
    app.extensions['tts_service'] = service
    app.extensions['health_checker'] = HealthChecker(service)

    app.register_blueprint(tts_bp)
    app.register_blueprint(health_bp)

    @app.after_request
    def add_security_headers(response):
        response.headers.setdefault('X-Content-Type-Options', 'nosniff')
        response.headers.setdefault('X-Frame-Options', 'SAMEORIGIN')
        response.headers.setdefault('Referrer-Policy', 'strict-origin-when-cross-origin')
        return response

    return app
