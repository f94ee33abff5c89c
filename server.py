#!/usr/bin/env python3
"""
TTS Hub Server — Entry Point

Loads .env, builds the TTSService from configuration and serves the
TTS web API (routes/tts.py) plus health probes.

Start:
    tts-hub-server            (or: python server.py)
"""

import logging
import signal

from dotenv import load_dotenv

from app import create_app
from config.loader import Config
from services.tts import TTSService

logger = logging.getLogger(__name__)


def main() -> None:
    load_dotenv()
    config = Config()
    logging.basicConfig(level=str(config.get('logging.level', 'INFO')).upper())

    service = TTSService(config.tts_config())
    app = create_app(service)

    host = config.get('server.host', '127.0.0.1')
    port = int(config.get('server.port', 3000))

    # Clean SIGTERM shutdown so process managers can stop the server.
    def _handle_sigterm(signum, frame):
        logger.info("SIGTERM received — shutting down.")
        raise SystemExit(0)

    signal.signal(signal.SIGTERM, _handle_sigterm)

    configured = ', '.join(p.value for p in service.get_configured_providers()) or 'none'
    logger.info("TTS Hub starting on http://%s:%s", host, port)
    logger.info("  Configured providers → %s", configured)
    logger.info("  Default provider     → %s", service.get_default_provider())

    try:
        app.run(host=host, port=port, debug=False, threaded=True)
    finally:
        service.close()


if __name__ == "__main__":
    main()
