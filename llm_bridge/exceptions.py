"""
Exception types for the provider layer.

Raised only for conditions detectable before any I/O happens. Transport
failures never surface as exceptions past the executor; invalid response
formats are returned as a list of violations instead of raised.
"""

from __future__ import annotations


class ProviderError(Exception):
    """Base class for all provider-layer errors."""


class MissingCredentialError(ProviderError):
    """No API key is configured for the provider instance."""

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f"No API key set for {provider}.")


class InvalidPromptShapeError(ProviderError):
    """Prompt input is neither a string nor a sequence of role/content pairs."""


class UnsupportedCapabilityError(ProviderError):
    """The provider family cannot perform the requested operation."""

    def __init__(self, provider: str, capability: str) -> None:
        self.provider = provider
        self.capability = capability
        super().__init__(f"Provider '{provider}' does not support {capability}.")


class UnknownProviderError(ProviderError):
    pass


class TransportFailure(ProviderError):
    """
    Raised by the default HTTP primitives. The executor catches it (and any
    other exception from an injected primitive) and returns a failure value.
    """
