"""
Provider Factory

Purpose
- Centralized creation of configured Provider instances bound to one adapter.
- Lazy-imports adapter modules by canonical name.
- Resolves API keys and base URLs from explicit arguments, then the
  environment (after loading .env), then adapter defaults.

Contracts
- Returns [Provider](llm_bridge/provider.py) instances.
- A missing key is not an error here; the first call raises
  MissingCredentialError instead.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type

from dotenv import load_dotenv

from llm_bridge.exceptions import UnknownProviderError
from .interfaces import ProviderAdapter
from .repositories.keys import KeysRepository

logger = logging.getLogger(__name__)


class ProviderFactory:
    """
    Create providers based on a canonical name (e.g., 'openai').
    """

    # Map canonical provider names to import paths and class names
    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "openai": {
            "module": "llm_bridge.providers.openai.client",
            "class": "OpenAIAdapter",
        },
        "anthropic": {
            "module": "llm_bridge.providers.anthropic.client",
            "class": "AnthropicAdapter",
        },
        "gemini": {
            "module": "llm_bridge.providers.gemini.client",
            "class": "GeminiAdapter",
        },
        "mistral": {
            "module": "llm_bridge.providers.mistral.client",
            "class": "MistralAdapter",
        },
        "gemini_openai": {
            "module": "llm_bridge.providers.gemini_openai.client",
            "class": "GeminiOpenAIAdapter",
        },
    }

    @classmethod
    def names(cls):
        return sorted(cls._PROVIDERS)

    @classmethod
    def adapter_for(cls, provider: str) -> ProviderAdapter:
        name = (provider or "").lower().strip()
        spec = cls._PROVIDERS.get(name)
        if not spec:
            raise UnknownProviderError(f"Unknown provider '{provider}'")

        module_path, class_name = spec["module"], spec["class"]
        mod = __import__(module_path, fromlist=[class_name])
        klass: Type[ProviderAdapter] = getattr(mod, class_name)
        return klass()

    @classmethod
    def create(
        cls,
        provider: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        keys: Optional[KeysRepository] = None,
        **kwargs: Any,
    ):
        """
        Create a configured provider instance.

        Args:
            provider: Canonical provider name (e.g., 'openai')
            api_key: Explicit key; falls back to the provider's env var
            base_url: Explicit endpoint; falls back to env, then adapter default
            **kwargs: Passed to Provider (http_call, download)

        Raises:
            UnknownProviderError: if provider is not registered.
        """
        from llm_bridge.provider import Provider

        adapter = cls.adapter_for(provider)
        load_dotenv()
        repo = keys or KeysRepository()
        resolution = repo.get_resolution(adapter.name, api_key)
        logger.debug("Creating %s provider (key source: %s)", adapter.name, resolution.source)

        return Provider(
            adapter,
            api_key=resolution.api_key,
            base_url=base_url or repo.get_base_url(adapter.name),
            **kwargs,
        )


def create_provider(provider: str, api_key: Optional[str] = None, base_url: Optional[str] = None, **kwargs: Any):
    return ProviderFactory.create(provider, api_key=api_key, base_url=base_url, **kwargs)
