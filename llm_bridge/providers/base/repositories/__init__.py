"""
Repositories for provider configuration lookups.
"""

from .keys import KeysRepository, KeyResolution

__all__ = ["KeysRepository", "KeyResolution"]
