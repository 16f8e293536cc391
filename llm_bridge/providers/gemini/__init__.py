"""
Gemini provider package.

Exports:
- GeminiAdapter: native generateContent API with inline images
"""

from .client import GeminiAdapter

__all__ = ["GeminiAdapter"]
