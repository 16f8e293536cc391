"""
OpenAI provider package.

Exports:
- OpenAIAdapter: chat completions, image analysis, and image generation
"""

from .client import OpenAIAdapter

__all__ = ["OpenAIAdapter"]
