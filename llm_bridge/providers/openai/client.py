"""
OpenAIAdapter

Chat completions with native JSON-schema response formats, URL-referenced
image analysis, and image generation (the only family that offers it).

Notes
- Reasoning model families (o1, o3, o4, gpt-5) take `max_completion_tokens`
  instead of `max_tokens`.
- Image generation goes to /v1/images/generations; the answer is the first
  image's URL, or its base64 body when the caller asked for b64_json.
"""

from __future__ import annotations

from typing import Any, Dict

from llm_bridge.core.extraction import as_text, dig
from llm_bridge.providers.base.interfaces import IMAGE_URL, JSON_NATIVE, join_url
from llm_bridge.providers.base.models import CallParams, RequestDescriptor
from llm_bridge.providers.base.openai_compatible import OpenAICompatibleAdapter

_COMPLETION_TOKEN_FAMILIES = ("o1", "o3", "o4", "gpt-5")


class OpenAIAdapter(OpenAICompatibleAdapter):
    name = "openai"
    default_base_url = "https://api.openai.com"
    default_model = "gpt-4o"
    default_vision_model = "gpt-4o"
    default_image_model = "dall-e-3"
    default_max_tokens = 1000
    json_mode = JSON_NATIVE
    image_transport = IMAGE_URL

    image_generation_path = "/v1/images/generations"

    def token_param(self, model: str) -> str:
        lower = (model or "").lower()
        if lower.startswith(_COMPLETION_TOKEN_FAMILIES):
            return "max_completion_tokens"
        return "max_tokens"

    # -------------------- Image generation --------------------

    def build_image_generation_request(
        self, api_key: str, base_url: str, prompt: str, params: CallParams
    ) -> RequestDescriptor:
        payload: Dict[str, Any] = {
            "model": params.model or self.default_image_model,
            "prompt": prompt,
            "n": 1,
            "size": "1024x1024",
        }
        # here response_format is the image encoding ("url" or "b64_json")
        if isinstance(params.response_format, str):
            payload["response_format"] = params.response_format
        payload.update(params.extra)
        return RequestDescriptor(
            url=join_url(base_url, self.image_generation_path),
            method="POST",
            headers=self.auth_headers(api_key),
            payload=payload,
            debug_prompt=params.debug_prompt,
            debug_response=params.debug_response,
            secret_headers=("Authorization",),
        )

    def extract_image(self, response: Any) -> str:
        first = dig(response, "data", 0, default={})
        return as_text(dig(first, "url", default="")) or as_text(dig(first, "b64_json", default=""))
