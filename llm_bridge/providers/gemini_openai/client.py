"""
GeminiOpenAIAdapter

Gemini through Google's OpenAI-compatible endpoint. Accepts native JSON-schema
response formats like OpenAI, but cannot fetch image URLs itself: images are
downloaded and sent as data URIs.

The base URL may be either the compatibility root
(https://generativelanguage.googleapis.com/v1beta/openai) or the full
chat-completions endpoint; the path is only appended when missing.
"""

from __future__ import annotations

from typing import Any, Dict

from llm_bridge.providers.base.interfaces import IMAGE_INLINE, JSON_NATIVE, join_url
from llm_bridge.providers.base.models import Attachment
from llm_bridge.providers.base.openai_compatible import OpenAICompatibleAdapter


class GeminiOpenAIAdapter(OpenAICompatibleAdapter):
    name = "gemini_openai"
    default_base_url = "https://generativelanguage.googleapis.com/v1beta/openai"
    default_model = "gemini-2.0-flash"
    default_max_tokens = 1000
    json_mode = JSON_NATIVE
    image_transport = IMAGE_INLINE

    completion_path = "/chat/completions"

    def completion_url(self, base_url: str) -> str:
        base = join_url(base_url, "")
        if base.endswith(self.completion_path):
            return base
        return base + self.completion_path

    def render_attachment(self, attachment: Attachment) -> Dict[str, Any]:
        if attachment.kind == "image":
            uri = f"data:{attachment.mime_type};base64,{attachment.data or ''}"
            return {"type": "image_url", "image_url": {"url": uri}}
        return super().render_attachment(attachment)
