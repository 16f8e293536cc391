"""
Anthropic provider package.

Exports:
- AnthropicAdapter: messages API, directive-only JSON, no images
"""

from .client import AnthropicAdapter

__all__ = ["AnthropicAdapter"]
