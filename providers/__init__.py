"""
Provider package: abstract contract, vendor adapters and the registry.

Sub-packages:
  providers.tts      — TTSProvider base class, data model, vendor adapters
  providers.registry — closed name -> adapter mapping
"""

from providers.base import (
    AuthenticationFailedError,
    BadRequestError,
    BaseProvider,
    InvalidProviderError,
    OperationFailedError,
    ProviderError,
    ProviderNotConfiguredError,
    ProviderRequestError,
    RateLimitedError,
    UnknownProviderError,
)
from providers.registry import (
    PROVIDERS,
    create_provider,
    get_available_providers,
    is_valid_provider,
)

__all__ = [
    # Base classes
    "BaseProvider",
    "ProviderError",
    "AuthenticationFailedError",
    "BadRequestError",
    "InvalidProviderError",
    "OperationFailedError",
    "ProviderNotConfiguredError",
    "ProviderRequestError",
    "RateLimitedError",
    "UnknownProviderError",
    # Registry
    "PROVIDERS",
    "create_provider",
    "get_available_providers",
    "is_valid_provider",
]
