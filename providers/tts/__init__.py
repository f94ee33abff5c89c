"""TTS provider package: shared contract plus one adapter per vendor."""

from providers.tts.base import (
    AudioFormat,
    ProviderConfig,
    ProviderName,
    SynthesizeOptions,
    SynthesizeResult,
    TTSConfig,
    TTSProvider,
    Voice,
    normalize_gender,
)
from providers.tts.elevenlabs_provider import ElevenLabsProvider
from providers.tts.varco_provider import VarcoProvider

__all__ = [
    "AudioFormat",
    "ProviderConfig",
    "ProviderName",
    "SynthesizeOptions",
    "SynthesizeResult",
    "TTSConfig",
    "TTSProvider",
    "Voice",
    "normalize_gender",
    "ElevenLabsProvider",
    "VarcoProvider",
]
