"""
Provider abstract base class and error hierarchy.

Every TTS backend shares this contract. Errors raised by a backend are
tagged with the provider name ("[elevenlabs] ...") and carry a stable
``code`` string so callers can branch without parsing messages.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional


class BaseProvider(ABC):
    """Common base for all provider types."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return True if the provider can handle requests right now."""
        pass

    @abstractmethod
    def get_info(self) -> Dict[str, Any]:
        """Return metadata dict with at minimum a 'name' key."""
        pass

    def __repr__(self) -> str:
        info = self.get_info()
        return f"{self.__class__.__name__}(name='{info.get('name', 'unknown')}')"


class ProviderError(Exception):
    """Base exception for all provider errors."""

    code = "provider_error"

    def __init__(self, provider_name: Optional[str], message: str):
        self.provider_name = provider_name
        self.message = message
        if provider_name:
            super().__init__(f"[{provider_name}] {message}")
        else:
            super().__init__(message)


class AuthenticationFailedError(ProviderError):
    """Vendor rejected the API key (HTTP 401)."""

    code = "authentication_failed"

    def __init__(self, provider_name: str):
        super().__init__(provider_name, "Authentication failed: Invalid API key")


class RateLimitedError(ProviderError):
    """Vendor throttled the request (HTTP 429)."""

    code = "rate_limited"

    def __init__(self, provider_name: str):
        super().__init__(provider_name, "Rate limit exceeded. Please try again later.")


class BadRequestError(ProviderError):
    """Vendor refused the payload (HTTP 400)."""

    code = "bad_request"

    def __init__(self, provider_name: str, detail: str):
        self.detail = detail
        super().__init__(provider_name, f"Bad request: {detail}")


class OperationFailedError(ProviderError):
    """Any other HTTP failure, or a response without usable content."""

    code = "operation_failed"

    def __init__(
        self,
        provider_name: str,
        operation: str,
        detail: str,
        status_code: Optional[int] = None,
    ):
        self.operation = operation
        self.detail = detail
        self.status_code = status_code
        super().__init__(provider_name, f"{operation} failed: {detail}")


class ProviderRequestError(ProviderError):
    """Non-HTTP failure (connection refused, timeout, undecodable body)."""

    code = "unknown"

    def __init__(self, provider_name: str, operation: str, detail: str):
        self.operation = operation
        self.detail = detail
        super().__init__(provider_name, f"{operation} failed: {detail}")


class UnknownProviderError(ProviderError):
    """Raised by the registry for a name outside the supported set."""

    code = "unknown_provider"

    def __init__(self, name: str, available: Iterable[str]):
        self.requested = name
        self.available = list(available)
        super().__init__(
            None,
            f"Unknown provider: {name}. Available providers: {', '.join(self.available)}",
        )


class InvalidProviderError(ProviderError):
    """Raised when a default provider is set to an unsupported name."""

    code = "invalid_provider"

    def __init__(self, name: str):
        self.requested = name
        super().__init__(None, f"Invalid provider: {name}")


class ProviderNotConfiguredError(ProviderError):
    """Raised when a supported provider has no credentials configured."""

    code = "provider_not_configured"

    def __init__(self, name: str, configured: Optional[Iterable[str]] = None):
        self.requested = name
        if configured is None:
            self.configured = None
            message = f'Provider "{name}" is not configured'
        else:
            self.configured = list(configured)
            message = (
                f'Provider "{name}" is not configured. '
                f"Available providers: {', '.join(self.configured) or 'none'}"
            )
        super().__init__(None, message)


__all__ = [
    "BaseProvider",
    "ProviderError",
    "AuthenticationFailedError",
    "RateLimitedError",
    "BadRequestError",
    "OperationFailedError",
    "ProviderRequestError",
    "UnknownProviderError",
    "InvalidProviderError",
    "ProviderNotConfiguredError",
]
