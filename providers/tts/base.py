"""
TTS provider contract and the data model shared by every adapter.

Adapters subclass TTSProvider, supply their auth headers and vendor
request/response mapping, and get an httpx client, error translation and
the default availability probe from here.
"""

import logging
from abc import abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx

from providers.base import (
    AuthenticationFailedError,
    BadRequestError,
    BaseProvider,
    OperationFailedError,
    ProviderError,
    ProviderRequestError,
    RateLimitedError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30000


class ProviderName(str, Enum):
    ELEVENLABS = "elevenlabs"
    VARCO = "varco"


class AudioFormat(str, Enum):
    MP3 = "mp3"
    WAV = "wav"
    PCM = "pcm"
    OGG = "ogg"


@dataclass(frozen=True)
class Voice:
    """A speaker offered by one provider. ``id`` is only unique per provider."""

    id: str
    name: str
    provider: ProviderName
    language: Optional[str] = None
    gender: Optional[str] = None
    preview_url: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "name": self.name,
            "language": self.language,
            "gender": self.gender,
            "provider": self.provider.value,
            "previewUrl": self.preview_url,
            "description": self.description,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass
class SynthesizeOptions:
    voice_id: str
    format: Optional[AudioFormat] = None
    speed: Optional[float] = None
    pitch: Optional[float] = None
    stability: Optional[float] = None
    similarity_boost: Optional[float] = None
    style: Optional[float] = None


@dataclass
class SynthesizeResult:
    audio: bytes
    format: AudioFormat
    provider: ProviderName
    duration: Optional[float] = None


@dataclass(frozen=True)
class ProviderConfig:
    api_key: str
    api_url: Optional[str] = None
    timeout: int = DEFAULT_TIMEOUT_MS


@dataclass
class TTSConfig:
    """Everything TTSService needs; built by config.loader or by hand in tests."""

    default_provider: str
    output_dir: Path
    providers: Dict[ProviderName, ProviderConfig] = field(default_factory=dict)


def normalize_gender(gender: Optional[str], short_forms: bool = False) -> Optional[str]:
    """Map a vendor gender label onto male / female / neutral.

    With ``short_forms`` the single letters "m" and "f" are accepted too.
    Empty or missing labels stay unspecified (None).
    """
    if not gender:
        return None
    lower = gender.lower()
    if lower == "male" or (short_forms and lower == "m"):
        return "male"
    if lower == "female" or (short_forms and lower == "f"):
        return "female"
    return "neutral"


class TTSProvider(BaseProvider):
    """Abstract base class for HTTP-backed TTS vendors."""

    name: ProviderName
    DEFAULT_API_URL = ""

    def __init__(
        self,
        config: ProviderConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.config = replace(config, api_url=config.api_url or self.DEFAULT_API_URL)
        self.client = httpx.Client(
            base_url=self.config.api_url,
            headers=self.get_default_headers(),
            timeout=(self.config.timeout or DEFAULT_TIMEOUT_MS) / 1000.0,
            transport=transport,
        )

    @abstractmethod
    def get_default_headers(self) -> Dict[str, str]:
        """Auth + content headers sent with every request."""
        pass

    @abstractmethod
    def synthesize(self, text: str, options: SynthesizeOptions) -> SynthesizeResult:
        pass

    @abstractmethod
    def list_voices(self) -> List[Voice]:
        pass

    @abstractmethod
    def get_voice(self, voice_id: str) -> Optional[Voice]:
        """Return the voice, or None when the vendor does not know it."""
        pass

    def is_available(self) -> bool:
        """Connectivity probe: succeeds iff list_voices() does."""
        try:
            self.list_voices()
            return True
        except Exception as exc:
            logger.debug("%s availability probe failed: %s", self.name.value, exc)
            return False

    def get_info(self) -> Dict[str, Any]:
        return {
            "name": self.name.value,
            "api_url": self.config.api_url,
            "timeout_ms": self.config.timeout,
        }

    def validate_text(self, text: str) -> None:
        if text is None:
            raise ValueError("Text cannot be None")
        if not isinstance(text, str):
            raise ValueError(f"Text must be str, got {type(text).__name__}")
        if not text.strip():
            raise ValueError("Text cannot be empty or whitespace-only")

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self.client.close()

    # ------------------------------------------------------------------
    # Error translation
    # ------------------------------------------------------------------

    def _translate_error(self, exc: Exception, operation: str) -> ProviderError:
        """Classify a failed vendor call into the shared error taxonomy."""
        if isinstance(exc, ProviderError):
            return exc

        provider = self.name.value
        if isinstance(exc, httpx.HTTPStatusError):
            status = exc.response.status_code
            detail = _error_detail(exc.response) or str(exc)
            if status == 401:
                return AuthenticationFailedError(provider)
            if status == 429:
                return RateLimitedError(provider)
            if status == 400:
                return BadRequestError(provider, detail)
            return OperationFailedError(provider, operation, detail, status_code=status)

        return ProviderRequestError(provider, operation, str(exc))


def _error_detail(response: httpx.Response) -> str:
    """Best-effort vendor error message from a failed response."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()

    if isinstance(body, dict):
        if isinstance(body.get("message"), str):
            return body["message"]
        detail = body.get("detail")
        if isinstance(detail, dict) and isinstance(detail.get("message"), str):
            return detail["message"]
        if isinstance(detail, str):
            return detail
    return response.text.strip()


__all__ = [
    "ProviderName",
    "AudioFormat",
    "Voice",
    "SynthesizeOptions",
    "SynthesizeResult",
    "ProviderConfig",
    "TTSConfig",
    "TTSProvider",
    "normalize_gender",
    "DEFAULT_TIMEOUT_MS",
]
