"""
Tests for config/loader.py
"""

from pathlib import Path

import pytest

from config.loader import (
    Config,
    _ENV_MAP,
    _apply_env_overrides,
    _cast,
    _deep_get,
    _deep_set,
    _load_yaml,
)
from providers.tts.base import ProviderName, TTSConfig

SAMPLE_YAML = """\
tts:
  default_provider: varco
  output_dir: ./audio
providers:
  elevenlabs:
    api_key: ""
    api_url: ""
    timeout: 30000
  varco:
    api_key: "va-from-yaml"
    api_url: ""
    timeout: 15000
server:
  host: 127.0.0.1
  port: 3000
logging:
  level: INFO
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's real environment out of every test."""
    for env_key in _ENV_MAP:
        monkeypatch.delenv(env_key, raising=False)


@pytest.fixture
def sample_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(SAMPLE_YAML)
    return path


# ---------------------------------------------------------------------------
# Unit: _cast
# ---------------------------------------------------------------------------

class TestCast:
    def test_int_cast(self):
        assert _cast("5001", int) == 5001

    def test_str_passthrough(self):
        assert _cast("hello", str) == "hello"

    def test_bad_int_raises(self):
        with pytest.raises(ValueError):
            _cast("fast", int)


# ---------------------------------------------------------------------------
# Unit: _deep_set / _deep_get
# ---------------------------------------------------------------------------

class TestDeepAccess:
    def test_deep_set_nested(self):
        d = {}
        _deep_set(d, "providers.varco.api_key", "k")
        assert d == {"providers": {"varco": {"api_key": "k"}}}

    def test_deep_set_overwrites(self):
        d = {"a": {"b": 1}}
        _deep_set(d, "a.b", 99)
        assert d["a"]["b"] == 99

    def test_deep_get_nested(self):
        assert _deep_get({"a": {"b": {"c": "deep"}}}, "a.b.c") == "deep"

    def test_deep_get_missing_returns_default(self):
        assert _deep_get({}, "x.y.z", "fallback") == "fallback"

    def test_deep_get_through_scalar_returns_default(self):
        assert _deep_get({"a": 5}, "a.b") is None


# ---------------------------------------------------------------------------
# Unit: _load_yaml
# ---------------------------------------------------------------------------

class TestLoadYaml:
    def test_loads_existing_yaml(self, sample_yaml):
        data = _load_yaml(sample_yaml)
        assert data["tts"]["default_provider"] == "varco"

    def test_returns_empty_dict_for_missing_file(self, tmp_path):
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_returns_empty_dict_for_empty_yaml(self, tmp_path):
        f = tmp_path / "empty.yaml"
        f.write_text("")
        assert _load_yaml(f) == {}


# ---------------------------------------------------------------------------
# Unit: _apply_env_overrides
# ---------------------------------------------------------------------------

class TestEnvOverrides:
    def test_api_key_override(self, monkeypatch):
        monkeypatch.setenv("ELEVENLABS_API_KEY", "el-env")
        data = {"providers": {"elevenlabs": {"api_key": ""}}}
        _apply_env_overrides(data)
        assert data["providers"]["elevenlabs"]["api_key"] == "el-env"

    def test_timeout_is_cast_to_int(self, monkeypatch):
        monkeypatch.setenv("VARCO_TIMEOUT", "5000")
        data = {}
        _apply_env_overrides(data)
        assert data["providers"]["varco"]["timeout"] == 5000

    def test_default_provider_override(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_TTS_PROVIDER", "varco")
        data = {"tts": {"default_provider": "elevenlabs"}}
        _apply_env_overrides(data)
        assert data["tts"]["default_provider"] == "varco"

    def test_unset_env_vars_not_applied(self):
        data = {"server": {"port": 3000}}
        _apply_env_overrides(data)
        assert data["server"]["port"] == 3000

    def test_double_underscore_override(self, monkeypatch):
        monkeypatch.setenv("SERVER__PORT", "7777")
        data = {"server": {"port": 3000}}
        _apply_env_overrides(data)
        assert data["server"]["port"] == "7777"

    def test_double_underscore_ignores_unknown_keys(self, monkeypatch):
        monkeypatch.setenv("SERVER__WORKERS", "4")
        data = {"server": {"port": 3000}}
        _apply_env_overrides(data)
        assert "workers" not in data["server"]


# ---------------------------------------------------------------------------
# Integration: Config class
# ---------------------------------------------------------------------------

class TestConfigClass:
    def test_default_yaml_ships_expected_keys(self):
        c = Config()
        assert c.get("tts.default_provider") == "elevenlabs"
        assert c.get("server.port") == 3000
        assert c.get("providers.varco.timeout") == 30000

    def test_get_returns_default_on_missing(self, sample_yaml):
        assert Config(sample_yaml).get("nonexistent.key", "fallback") == "fallback"


class TestProviderConfigs:
    def test_only_providers_with_keys_are_configured(self, sample_yaml):
        configs = Config(sample_yaml).provider_configs()
        assert list(configs) == [ProviderName.VARCO]
        varco = configs[ProviderName.VARCO]
        assert varco.api_key == "va-from-yaml"
        assert varco.api_url is None
        assert varco.timeout == 15000

    def test_env_key_configures_provider(self, sample_yaml, monkeypatch):
        monkeypatch.setenv("ELEVENLABS_API_KEY", "el-env")
        monkeypatch.setenv("ELEVENLABS_API_URL", "https://eu.elevenlabs.example/v1")
        configs = Config(sample_yaml).provider_configs()
        assert list(configs) == [ProviderName.ELEVENLABS, ProviderName.VARCO]
        assert configs[ProviderName.ELEVENLABS].api_url == "https://eu.elevenlabs.example/v1"

    def test_empty_env_key_leaves_provider_unconfigured(self, sample_yaml, monkeypatch):
        monkeypatch.setenv("VARCO_API_KEY", "")
        assert Config(sample_yaml).provider_configs() == {}

    def test_missing_timeout_uses_default(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("providers:\n  elevenlabs:\n    api_key: k\n")
        assert Config(path).provider_configs()[ProviderName.ELEVENLABS].timeout == 30000


class TestTTSConfig:
    def test_builds_service_config(self, sample_yaml):
        cfg = Config(sample_yaml).tts_config()
        assert isinstance(cfg, TTSConfig)
        assert cfg.default_provider == "varco"
        assert cfg.output_dir == Path("./audio").resolve()
        assert cfg.output_dir.is_absolute()
        assert ProviderName.VARCO in cfg.providers

    def test_output_dir_env_override(self, sample_yaml, monkeypatch, tmp_path):
        monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "out"))
        assert Config(sample_yaml).tts_config().output_dir == (tmp_path / "out").resolve()

    def test_defaults_when_yaml_missing(self, tmp_path):
        cfg = Config(tmp_path / "missing.yaml").tts_config()
        assert cfg.default_provider == "elevenlabs"
        assert cfg.providers == {}
