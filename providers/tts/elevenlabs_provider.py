"""
ElevenLabs TTS provider.

REST API, ``xi-api-key`` auth header. Synthesis returns the audio body
directly; voices come wrapped in a ``{"voices": [...]}`` envelope.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

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

MODEL_ID = "eleven_multilingual_v2"

# requested format -> (vendor output_format, format actually produced)
OUTPUT_FORMATS: Dict[AudioFormat, Tuple[str, AudioFormat]] = {
    AudioFormat.MP3: ("mp3_44100_128", AudioFormat.MP3),
    AudioFormat.WAV: ("pcm_44100", AudioFormat.PCM),
    AudioFormat.PCM: ("pcm_44100", AudioFormat.PCM),
    AudioFormat.OGG: ("mp3_44100_128", AudioFormat.MP3),
}


class ElevenLabsProvider(TTSProvider):
    """ElevenLabs cloud TTS provider."""

    name = ProviderName.ELEVENLABS
    DEFAULT_API_URL = "https://api.elevenlabs.io/v1"

    def get_default_headers(self) -> Dict[str, str]:
        return {
            "xi-api-key": self.config.api_key,
            "Content-Type": "application/json",
        }

    def synthesize(self, text: str, options: SynthesizeOptions) -> SynthesizeResult:
        self.validate_text(text)
        requested = AudioFormat(options.format or AudioFormat.MP3)
        output_format, produced = OUTPUT_FORMATS[requested]

        payload = {
            "text": text,
            "model_id": MODEL_ID,
            "voice_settings": {
                "stability": _or_default(options.stability, 0.5),
                "similarity_boost": _or_default(options.similarity_boost, 0.75),
                "style": _or_default(options.style, 0),
                "use_speaker_boost": True,
            },
        }

        logger.debug("[elevenlabs] synthesize voice=%s output_format=%s", options.voice_id, output_format)
        try:
            resp = self.client.post(
                f"/text-to-speech/{options.voice_id}",
                json=payload,
                params={"output_format": output_format},
            )
            resp.raise_for_status()
            audio = resp.content
            if not audio:
                raise OperationFailedError(
                    self.name.value, "Text-to-speech synthesis", "No audio data received"
                )
        except Exception as exc:
            raise self._translate_error(exc, "Text-to-speech synthesis") from exc

        logger.info("[elevenlabs] generated %d bytes (%s)", len(audio), produced.value)
        return SynthesizeResult(audio=audio, format=produced, provider=self.name)

    def list_voices(self) -> List[Voice]:
        try:
            resp = self.client.get("/voices")
            resp.raise_for_status()
            return [self._map_voice(record) for record in resp.json()["voices"]]
        except Exception as exc:
            raise self._translate_error(exc, "List voices") from exc

    def get_voice(self, voice_id: str) -> Optional[Voice]:
        try:
            resp = self.client.get(f"/voices/{voice_id}")
            resp.raise_for_status()
            return self._map_voice(resp.json())
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 404:
                return None
            raise self._translate_error(exc, "Get voice") from exc
        except Exception as exc:
            raise self._translate_error(exc, "Get voice") from exc

    def _map_voice(self, record: Dict[str, Any]) -> Voice:
        labels = record.get("labels") or {}
        return Voice(
            id=record["voice_id"],
            name=record.get("name", record["voice_id"]),
            provider=self.name,
            gender=normalize_gender(labels.get("gender")),
            preview_url=record.get("preview_url"),
            description=record.get("description") or labels.get("description"),
        )


def _or_default(value: Optional[float], default: float) -> float:
    return default if value is None else value


__all__ = ["ElevenLabsProvider", "OUTPUT_FORMATS", "MODEL_ID"]
