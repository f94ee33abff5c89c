"""Service layer: TTS dispatch and health probes."""
