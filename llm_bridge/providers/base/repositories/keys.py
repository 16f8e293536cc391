"""
Keys Repository

Purpose
- Centralize API key and base URL resolution for providers.
- Environment variables only (a .env file is loaded by the factory via
  python-dotenv before lookups).

Design
- Non-throwing accessors that return None if a value is not resolved.
- Simple, explicit env var map per provider.

Usage
- repo = KeysRepository()
- key = repo.get_api_key("openai")
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class KeyResolution:
    provider: str
    api_key: Optional[str]
    source: str  # "explicit", "env", "none"
    extra: Dict[str, Any] = field(default_factory=dict)


class KeysRepository:
    """
    Resolve provider credentials with a strict priority order:

    1) Explicit value passed by the caller
    2) Environment variables
    3) None

    This repository only reads values; it does not mutate any external state.
    """

    ENV_MAP: Dict[str, str] = {
        "openai": "OPENAI_API_KEY",
        "anthropic": "ANTHROPIC_API_KEY",
        "gemini": "GEMINI_API_KEY",
        "gemini_openai": "GEMINI_API_KEY",
        "mistral": "MISTRAL_API_KEY",
    }

    BASE_URL_ENV_MAP: Dict[str, str] = {
        "openai": "OPENAI_BASE_URL",
        "anthropic": "ANTHROPIC_BASE_URL",
        "gemini": "GEMINI_BASE_URL",
        "gemini_openai": "GEMINI_OPENAI_BASE_URL",
        "mistral": "MISTRAL_BASE_URL",
    }

    def get_api_key(self, provider: str, explicit: Optional[str] = None) -> Optional[str]:
        return self.get_resolution(provider, explicit).api_key

    def get_resolution(self, provider: str, explicit: Optional[str] = None) -> KeyResolution:
        p = (provider or "").lower().strip()
        if explicit:
            return KeyResolution(provider=p, api_key=explicit, source="explicit")

        env_var = self.ENV_MAP.get(p)
        if env_var:
            val = os.getenv(env_var)
            if val:
                return KeyResolution(provider=p, api_key=val, source="env", extra={"env_var": env_var})

        return KeyResolution(provider=p, api_key=None, source="none", extra={"env_var": env_var})

    def get_base_url(self, provider: str) -> Optional[str]:
        env_var = self.BASE_URL_ENV_MAP.get((provider or "").lower().strip())
        return (os.getenv(env_var) or None) if env_var else None
