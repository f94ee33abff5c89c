"""
services/tts.py — TTS dispatch service

Holds one adapter per configured provider and routes calls to them.
Multi-provider calls (voice listing, voice lookup) fan out across every
configured adapter in registry order and tolerate individual failures.

Usage:
    from config.loader import Config
    from services.tts import TTSService

    service = TTSService(Config().tts_config())
    path = service.synthesize_to_file("Hello", SynthesizeOptions(voice_id="abc"))
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Generic, Iterator, List, Optional, TypeVar, Union

from providers.base import InvalidProviderError, ProviderNotConfiguredError
from providers.registry import create_provider, get_available_providers, is_valid_provider
from providers.tts.base import (
    ProviderName,
    SynthesizeOptions,
    SynthesizeResult,
    TTSConfig,
    TTSProvider,
    Voice,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

NameLike = Union[str, ProviderName]


@dataclass(frozen=True)
class ProviderOutcome(Generic[T]):
    """Result of one provider call during a fan-out: a value or an error."""

    provider: ProviderName
    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class TTSService:
    """Routes TTS calls to the configured provider adapters."""

    def __init__(self, config: TTSConfig):
        self.config = config
        self._default_provider = config.default_provider
        self._providers: Dict[ProviderName, TTSProvider] = {}
        self._initialize_providers()

    def _initialize_providers(self) -> None:
        for name in get_available_providers():
            provider_config = self.config.providers.get(name)
            if provider_config is None:
                continue
            self._providers[name] = create_provider(name, provider_config)
            logger.info("TTS provider configured: %s", name.value)

        if not self._providers:
            logger.warning(
                "No TTS providers configured. Set ELEVENLABS_API_KEY or VARCO_API_KEY "
                "(e.g. in .env)."
            )

    # ------------------------------------------------------------------
    # Provider resolution
    # ------------------------------------------------------------------

    def get_provider(self, name: Optional[NameLike] = None) -> TTSProvider:
        """Return the adapter for name, or for the default provider when omitted.

        Raises:
            ProviderNotConfiguredError: no adapter exists for that name.
        """
        requested = name or self._default_provider
        provider = None
        if is_valid_provider(requested):
            provider = self._providers.get(ProviderName(requested))

        if provider is None:
            raise ProviderNotConfiguredError(
                _display(requested), [p.value for p in self._providers]
            )
        return provider

    # ------------------------------------------------------------------
    # Synthesis
    # ------------------------------------------------------------------

    def synthesize(
        self,
        text: str,
        options: SynthesizeOptions,
        provider: Optional[NameLike] = None,
    ) -> SynthesizeResult:
        return self.get_provider(provider).synthesize(text, options)

    def synthesize_to_file(
        self,
        text: str,
        options: SynthesizeOptions,
        provider: Optional[NameLike] = None,
        output_path: Optional[Union[str, Path]] = None,
    ) -> Path:
        """Synthesize and write the audio; returns the path written.

        Without output_path the file lands in the configured output directory
        as tts_<epoch-ms>.<format>, using the format actually produced.
        """
        result = self.synthesize(text, options, provider=provider)

        output_dir = Path(self.config.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        if output_path:
            path = Path(output_path)
        else:
            timestamp = int(time.time() * 1000)
            path = output_dir / f"tts_{timestamp}.{result.format.value}"

        path.write_bytes(result.audio)
        logger.info("Wrote %d bytes of %s audio to %s", len(result.audio), result.format.value, path)
        return path

    # ------------------------------------------------------------------
    # Voices
    # ------------------------------------------------------------------

    def list_voices(self, provider: Optional[NameLike] = None) -> List[Voice]:
        """Voices from one provider, or from every configured provider.

        In fan-out mode a failing provider is logged and left out; the call
        itself never fails, it returns whatever the healthy providers gave.
        """
        if provider:
            return self.get_provider(provider).list_voices()

        outcomes = list(self._fan_out(lambda p: p.list_voices()))
        for outcome in outcomes:
            if not outcome.ok:
                logger.warning(
                    "Failed to fetch voices from %s: %s", outcome.provider.value, outcome.error
                )

        voices: List[Voice] = []
        for outcome in outcomes:
            if outcome.ok:
                voices.extend(outcome.value)
        return voices

    def get_voice(self, voice_id: str, provider: Optional[NameLike] = None) -> Optional[Voice]:
        """Look a voice up on one provider, or the first provider that has it."""
        if provider:
            return self.get_provider(provider).get_voice(voice_id)

        for outcome in self._fan_out(lambda p: p.get_voice(voice_id)):
            if not outcome.ok:
                logger.debug("Skipping %s during voice lookup: %s", outcome.provider.value, outcome.error)
                continue
            if outcome.value is not None:
                return outcome.value
        return None

    def _fan_out(self, call: Callable[[TTSProvider], T]) -> Iterator[ProviderOutcome[T]]:
        """Apply call to each configured adapter in turn, capturing errors.

        Lazy, so callers that stop early do not hit the remaining providers.
        """
        for name, adapter in self._providers.items():
            try:
                yield ProviderOutcome(provider=name, value=call(adapter))
            except Exception as exc:
                yield ProviderOutcome(provider=name, error=exc)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def get_configured_providers(self) -> List[ProviderName]:
        return list(self._providers.keys())

    def get_all_providers(self) -> List[ProviderName]:
        return get_available_providers()

    def is_provider_configured(self, name: NameLike) -> bool:
        return is_valid_provider(name) and ProviderName(name) in self._providers

    def set_default_provider(self, name: NameLike) -> None:
        """Change the provider used when callers do not name one.

        Raises:
            InvalidProviderError: name is not a supported provider.
            ProviderNotConfiguredError: supported, but has no credentials.
        """
        if not is_valid_provider(name):
            raise InvalidProviderError(_display(name))
        if ProviderName(name) not in self._providers:
            raise ProviderNotConfiguredError(_display(name))
        self._default_provider = ProviderName(name).value

    def get_default_provider(self) -> str:
        return _display(self._default_provider)

    def close(self) -> None:
        """Release every adapter's HTTP client."""
        for name, adapter in self._providers.items():
            adapter.close()
            logger.debug("Closed %s provider", name.value)


def _display(name: Optional[NameLike]) -> str:
    if isinstance(name, ProviderName):
        return name.value
    return str(name)


__all__ = ["TTSService", "ProviderOutcome"]
