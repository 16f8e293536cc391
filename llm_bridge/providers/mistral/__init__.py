"""
Mistral provider package.

Exports:
- MistralAdapter: OpenAI-compatible chat with json_object mode
"""

from .client import MistralAdapter

__all__ = ["MistralAdapter"]
