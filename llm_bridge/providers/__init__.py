"""
Aggregator and exports for the providers package.

One convenience constructor per provider family; each returns a configured
Provider bound to that family's adapter.
"""

from typing import Any, Optional

from .base import ProviderFactory, create_provider
from .anthropic import AnthropicAdapter
from .gemini import GeminiAdapter
from .gemini_openai import GeminiOpenAIAdapter
from .mistral import MistralAdapter
from .openai import OpenAIAdapter

__all__ = [
    "ProviderFactory",
    "create_provider",
    "AnthropicAdapter",
    "GeminiAdapter",
    "GeminiOpenAIAdapter",
    "MistralAdapter",
    "OpenAIAdapter",
    "openai_provider",
    "anthropic_provider",
    "gemini_provider",
    "mistral_provider",
    "gemini_openai_provider",
]


def openai_provider(api_key: Optional[str] = None, base_url: Optional[str] = None, **kwargs: Any):
    return ProviderFactory.create("openai", api_key=api_key, base_url=base_url, **kwargs)


def anthropic_provider(api_key: Optional[str] = None, base_url: Optional[str] = None, **kwargs: Any):
    return ProviderFactory.create("anthropic", api_key=api_key, base_url=base_url, **kwargs)


def gemini_provider(api_key: Optional[str] = None, base_url: Optional[str] = None, **kwargs: Any):
    return ProviderFactory.create("gemini", api_key=api_key, base_url=base_url, **kwargs)


def mistral_provider(api_key: Optional[str] = None, base_url: Optional[str] = None, **kwargs: Any):
    return ProviderFactory.create("mistral", api_key=api_key, base_url=base_url, **kwargs)


def gemini_openai_provider(api_key: Optional[str] = None, base_url: Optional[str] = None, **kwargs: Any):
    return ProviderFactory.create("gemini_openai", api_key=api_key, base_url=base_url, **kwargs)
