"""
pytest fixtures for the TTS Hub test suite.

Vendor HTTP is never hit: adapters are tested against httpx.MockTransport,
and the dispatch service / web / CLI tests swap the registry factory for
fake providers.
"""

import os
import sys

import pytest

# Ensure project root is on sys.path so imports work
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from providers.base import OperationFailedError  # noqa: E402
from providers.tts.base import (  # noqa: E402
    AudioFormat,
    ProviderConfig,
    ProviderName,
    SynthesizeResult,
    TTSConfig,
    Voice,
)


class FakeProvider:
    """Duck-typed stand-in for a TTSProvider adapter."""

    def __init__(self, name, voices=None, fail=False, audio=b"fake-audio", audio_format=AudioFormat.MP3):
        self.name = ProviderName(name)
        self.voices = list(voices or [])
        self.fail = fail
        self.audio = audio
        self.audio_format = audio_format
        self.calls = []
        self.closed = False

    def _maybe_fail(self, operation):
        if self.fail:
            raise OperationFailedError(self.name.value, operation, "boom", status_code=500)

    def synthesize(self, text, options):
        self.calls.append(("synthesize", text, options))
        self._maybe_fail("Text-to-speech synthesis")
        return SynthesizeResult(audio=self.audio, format=self.audio_format, provider=self.name)

    def list_voices(self):
        self.calls.append(("list_voices",))
        self._maybe_fail("List voices")
        return list(self.voices)

    def get_voice(self, voice_id):
        self.calls.append(("get_voice", voice_id))
        self._maybe_fail("Get voice")
        for voice in self.voices:
            if voice.id == voice_id:
                return voice
        return None

    def is_available(self):
        return not self.fail

    def get_info(self):
        return {"name": self.name.value, "api_url": "http://fake", "timeout_ms": 30000}

    def close(self):
        self.closed = True


def make_voice(provider, voice_id, name=None, **kwargs):
    return Voice(id=voice_id, name=name or voice_id, provider=ProviderName(provider), **kwargs)


@pytest.fixture
def fake_providers():
    """One healthy fake per supported provider, keyed by ProviderName."""
    return {
        ProviderName.ELEVENLABS: FakeProvider(
            "elevenlabs",
            voices=[make_voice("elevenlabs", "el-1", "Rachel"), make_voice("elevenlabs", "el-2", "Adam")],
        ),
        ProviderName.VARCO: FakeProvider(
            "varco",
            voices=[make_voice("varco", "va-1", "Minji", language="korean")],
            audio_format=AudioFormat.WAV,
        ),
    }


@pytest.fixture
def make_service(monkeypatch, tmp_path, fake_providers):
    """Factory: TTSService over the fake providers named in ``configured``."""
    import services.tts as tts_mod

    monkeypatch.setattr(tts_mod, "create_provider", lambda name, cfg: fake_providers[name])

    def _make(configured=("elevenlabs", "varco"), default="elevenlabs", output_dir=None):
        config = TTSConfig(
            default_provider=default,
            output_dir=output_dir or tmp_path / "output",
            providers={ProviderName(n): ProviderConfig(api_key=f"{n}-key") for n in configured},
        )
        return tts_mod.TTSService(config)

    return _make


@pytest.fixture
def service(make_service):
    return make_service()


@pytest.fixture
def flask_app(service):
    """Flask test app serving the fake-backed service."""
    from app import create_app
    return create_app(service, config_override={"TESTING": True})


@pytest.fixture
def client(flask_app):
    return flask_app.test_client()
