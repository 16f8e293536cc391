"""
Gemini (OpenAI-compatible endpoint) provider package.

Exports:
- GeminiOpenAIAdapter: native JSON schema, data-URI images
"""

from .client import GeminiOpenAIAdapter

__all__ = ["GeminiOpenAIAdapter"]
