"""
llm_bridge: one synchronous request/response contract over several LLM
provider families (OpenAI, Anthropic, Gemini, Mistral, Gemini via its
OpenAI-compatible endpoint).
"""

from .exceptions import (
    ProviderError,
    MissingCredentialError,
    InvalidPromptShapeError,
    UnsupportedCapabilityError,
    UnknownProviderError,
    TransportFailure,
)
from .provider import Provider
from .providers import (
    ProviderFactory,
    create_provider,
    openai_provider,
    anthropic_provider,
    gemini_provider,
    mistral_provider,
    gemini_openai_provider,
)

__all__ = [
    "ProviderError",
    "MissingCredentialError",
    "InvalidPromptShapeError",
    "UnsupportedCapabilityError",
    "UnknownProviderError",
    "TransportFailure",
    "Provider",
    "ProviderFactory",
    "create_provider",
    "openai_provider",
    "anthropic_provider",
    "gemini_provider",
    "mistral_provider",
    "gemini_openai_provider",
]
