"""Flask blueprints for the TTS web API."""
