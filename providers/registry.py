"""
Provider registry: closed ProviderName -> adapter class mapping.

The vendor set is fixed, so the table is built once at import time and is
read-only. There is no register() call; adding a vendor means adding an
adapter module and a row below.

Usage:
    from providers.registry import create_provider, is_valid_provider

    tts = create_provider("varco", ProviderConfig(api_key="..."))
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import List, Mapping, Type, Union

from providers.base import UnknownProviderError
from providers.tts.base import ProviderConfig, ProviderName, TTSProvider
from providers.tts.elevenlabs_provider import ElevenLabsProvider
from providers.tts.varco_provider import VarcoProvider

logger = logging.getLogger(__name__)

PROVIDERS: Mapping[ProviderName, Type[TTSProvider]] = MappingProxyType({
    ProviderName.ELEVENLABS: ElevenLabsProvider,
    ProviderName.VARCO: VarcoProvider,
})

# Members and their string values both count as valid names.
_NAMES = frozenset(PROVIDERS) | frozenset(p.value for p in PROVIDERS)


def is_valid_provider(name: Union[str, ProviderName, None]) -> bool:
    """True iff name is one of the supported provider names."""
    return name in _NAMES


def get_available_providers() -> List[ProviderName]:
    """Every supported provider, configured or not, in registry order."""
    return list(PROVIDERS.keys())


def create_provider(name: Union[str, ProviderName], config: ProviderConfig) -> TTSProvider:
    """Instantiate the adapter for name.

    Raises:
        UnknownProviderError: name is not a supported provider.
    """
    if not is_valid_provider(name):
        raise UnknownProviderError(str(name), [p.value for p in PROVIDERS])

    provider_class = PROVIDERS[ProviderName(name)]
    logger.debug("Creating %s provider (%s)", ProviderName(name).value, provider_class.__name__)
    return provider_class(config)


__all__ = [
    "PROVIDERS",
    "create_provider",
    "get_available_providers",
    "is_valid_provider",
]
