"""
Varco (NC AI) TTS provider.

Auth header is ``openapi_key``. Synthesis returns base64-encoded WAV inside a
JSON envelope and only ever produces WAV. The voice list is a bare JSON array
and there is no by-id endpoint.
"""

from __future__ import annotations

import base64
import logging
from typing import Any, Dict, List, Optional

from providers.base import OperationFailedError
from providers.tts.base import (
    AudioFormat,
    ProviderName,
    SynthesizeOptions,
    SynthesizeResult,
    TTSProvider,
    Voice,
    normalize_gender,
)

logger = logging.getLogger(__name__)

SYNTHESIZE_PATH = "/tts/standard/v1/api/synthesize"
VOICES_PATH = "/tts/standard/v1/api/voices/varco"

FIXED_FORMAT = AudioFormat.WAV

SPEED_RANGE = (0.5, 2.0)
PITCH_RANGE = (0.5, 1.5)
NEUTRAL_PROSODY = 1.0


def sanitize_prosody(value: Optional[float], accepted: tuple) -> float:
    """Return value when inside the accepted band, else the neutral 1.0.

    Out-of-range input (e.g. a semitone pitch like -20..20) is reset rather
    than clamped or rejected.
    """
    if value is None:
        return NEUTRAL_PROSODY
    low, high = accepted
    if value < low or value > high:
        logger.debug("[varco] %s outside %s, using %s", value, accepted, NEUTRAL_PROSODY)
        return NEUTRAL_PROSODY
    return value


class VarcoProvider(TTSProvider):
    """Varco cloud TTS provider."""

    name = ProviderName.VARCO
    DEFAULT_API_URL = "https://openapi.ai.nc.com"

    def get_default_headers(self) -> Dict[str, str]:
        return {
            "openapi_key": self.config.api_key,
            "Content-Type": "application/json",
        }

    def synthesize(self, text: str, options: SynthesizeOptions) -> SynthesizeResult:
        self.validate_text(text)
        payload = {
            "text": text,
            "voice": options.voice_id,
            "properties": {
                "speed": sanitize_prosody(options.speed, SPEED_RANGE),
                "pitch": sanitize_prosody(options.pitch, PITCH_RANGE),
            },
        }

        logger.debug("[varco] synthesize voice=%s", options.voice_id)
        try:
            resp = self.client.post(SYNTHESIZE_PATH, json=payload)
            resp.raise_for_status()
            encoded = resp.json().get("audio")
            if not encoded:
                raise OperationFailedError(
                    self.name.value,
                    "Text-to-speech synthesis",
                    "No audio data received from Varco API",
                )
            audio = base64.b64decode(encoded)
        except Exception as exc:
            raise self._translate_error(exc, "Text-to-speech synthesis") from exc

        logger.info("[varco] generated %d bytes (%s)", len(audio), FIXED_FORMAT.value)
        return SynthesizeResult(audio=audio, format=FIXED_FORMAT, provider=self.name)

    def list_voices(self) -> List[Voice]:
        try:
            resp = self.client.get(VOICES_PATH)
            resp.raise_for_status()
            records = resp.json()
            if not isinstance(records, list):
                raise TypeError(f"expected a JSON array of voices, got {type(records).__name__}")
            return [self._map_voice(record) for record in records]
        except Exception as exc:
            raise self._translate_error(exc, "List voices") from exc

    def get_voice(self, voice_id: str) -> Optional[Voice]:
        for voice in self.list_voices():
            if voice.id == voice_id:
                return voice
        return None

    def _map_voice(self, record: Dict[str, Any]) -> Voice:
        return Voice(
            id=record.get("speaker_uuid") or record["speaker_name"],
            name=record["speaker_name"],
            provider=self.name,
            language=record.get("language"),
            gender=normalize_gender(record.get("gender"), short_forms=True),
            preview_url=record.get("sample_url"),
            description=record.get("description"),
        )


__all__ = ["VarcoProvider", "sanitize_prosody", "FIXED_FORMAT"]
