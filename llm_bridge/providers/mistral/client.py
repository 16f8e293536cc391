"""
MistralAdapter

OpenAI-compatible chat API with two quirks:
- JSON mode is a bare {"type": "json_object"} switch; schema shape travels as
  a prompt directive.
- Image parts carry the URL directly: {"type": "image_url", "image_url": "<url>"}.
Vision requests default to the pixtral model.
"""

from __future__ import annotations

from typing import Any, Dict

from llm_bridge.providers.base.interfaces import IMAGE_URL, JSON_OBJECT_FLAG
from llm_bridge.providers.base.models import Attachment
from llm_bridge.providers.base.openai_compatible import OpenAICompatibleAdapter


class MistralAdapter(OpenAICompatibleAdapter):
    name = "mistral"
    default_base_url = "https://api.mistral.ai"
    default_model = "mistral-large-latest"
    default_vision_model = "pixtral-12b-2409"
    default_max_tokens = 1000
    json_mode = JSON_OBJECT_FLAG
    image_transport = IMAGE_URL
    extra_headers = {"Accept": "application/json"}

    def render_attachment(self, attachment: Attachment) -> Dict[str, Any]:
        if attachment.kind == "image":
            return {"type": "image_url", "image_url": attachment.ref}
        return super().render_attachment(attachment)
