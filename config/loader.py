"""
Config loader: reads config/default.yaml with environment variable overrides.

Usage:
    from config.loader import Config

    config = Config()
    config.get('server.port')          # -> 3000
    service = TTSService(config.tts_config())

Environment variable override rules:
  - Direct named overrides (highest priority):
      DEFAULT_TTS_PROVIDER -> tts.default_provider
      OUTPUT_DIR           -> tts.output_dir
      ELEVENLABS_API_KEY   -> providers.elevenlabs.api_key
      ELEVENLABS_API_URL   -> providers.elevenlabs.api_url
      ELEVENLABS_TIMEOUT   -> providers.elevenlabs.timeout  (ms)
      VARCO_API_KEY        -> providers.varco.api_key
      VARCO_API_URL        -> providers.varco.api_url
      VARCO_TIMEOUT        -> providers.varco.timeout       (ms)
      HOST                 -> server.host
      PORT                 -> server.port
      LOG_LEVEL            -> logging.level
  - Generic double-underscore override:
      SERVER__PORT=5002    -> server.port = 5002

A provider counts as configured only when its api_key is non-empty.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml

from providers.registry import get_available_providers
from providers.tts.base import DEFAULT_TIMEOUT_MS, ProviderConfig, ProviderName, TTSConfig

logger = logging.getLogger(__name__)

# Path to the default config file (same directory as this module)
_DEFAULT_YAML = Path(__file__).parent / "default.yaml"

# Named env var → dotted config key mappings
_ENV_MAP = {
    "DEFAULT_TTS_PROVIDER": ("tts.default_provider",           str),
    "OUTPUT_DIR":           ("tts.output_dir",                 str),
    "ELEVENLABS_API_KEY":   ("providers.elevenlabs.api_key",   str),
    "ELEVENLABS_API_URL":   ("providers.elevenlabs.api_url",   str),
    "ELEVENLABS_TIMEOUT":   ("providers.elevenlabs.timeout",   int),
    "VARCO_API_KEY":        ("providers.varco.api_key",        str),
    "VARCO_API_URL":        ("providers.varco.api_url",        str),
    "VARCO_TIMEOUT":        ("providers.varco.timeout",        int),
    "HOST":                 ("server.host",                    str),
    "PORT":                 ("server.port",                    int),
    "LOG_LEVEL":            ("logging.level",                  str),
}


def _cast(value: str, cast_type) -> Any:
    """Cast a string env var value to the target type."""
    if cast_type == int:
        return int(value)
    return value  # str passthrough


def _deep_set(data: dict, dotted_key: str, value: Any) -> None:
    """Set a value in a nested dict using a dotted key path."""
    parts = dotted_key.split(".")
    node = data
    for part in parts[:-1]:
        node = node.setdefault(part, {})
    node[parts[-1]] = value


def _deep_get(data: dict, dotted_key: str, default: Any = None) -> Any:
    """Get a value from a nested dict using a dotted key path."""
    parts = dotted_key.split(".")
    node = data
    for part in parts:
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node


def _load_yaml(path: Path) -> dict:
    """Load a YAML file, returning empty dict if missing."""
    if not path.exists():
        logger.warning("Config file not found: %s", path)
        return {}
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _apply_env_overrides(data: dict) -> None:
    """Apply named env var overrides to the config dict (in-place)."""
    # Named mappings (highest precedence)
    for env_key, (config_key, cast_type) in _ENV_MAP.items():
        value = os.environ.get(env_key)
        if value is not None:
            _deep_set(data, config_key, _cast(value, cast_type))

    # Generic double-underscore overrides: SERVER__PORT=5002 → server.port
    for env_key, value in os.environ.items():
        if "__" in env_key:
            parts = env_key.lower().split("__", 1)
            if len(parts) == 2:
                dotted = f"{parts[0]}.{parts[1]}"
                # Only override if the key already exists in the loaded config
                if _deep_get(data, dotted) is not None:
                    _deep_set(data, dotted, value)


class Config:
    """Config accessor loaded from YAML + env overrides."""

    def __init__(self, yaml_path: Path = _DEFAULT_YAML):
        self._data = _load_yaml(yaml_path)
        _apply_env_overrides(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dotted key. Returns default if not found."""
        return _deep_get(self._data, key, default)

    def provider_configs(self) -> Dict[ProviderName, ProviderConfig]:
        """Credentials for every provider that has an API key set."""
        configs: Dict[ProviderName, ProviderConfig] = {}
        for name in get_available_providers():
            section = self.get(f"providers.{name.value}") or {}
            api_key = section.get("api_key")
            if not api_key:
                continue
            configs[name] = ProviderConfig(
                api_key=str(api_key),
                api_url=section.get("api_url") or None,
                timeout=int(section.get("timeout") or DEFAULT_TIMEOUT_MS),
            )
        return configs

    def tts_config(self) -> TTSConfig:
        """Build the explicit configuration value consumed by TTSService."""
        return TTSConfig(
            default_provider=str(self.get("tts.default_provider", ProviderName.ELEVENLABS.value)),
            output_dir=Path(self.get("tts.output_dir", "./output")).resolve(),
            providers=self.provider_configs(),
        )
