"""
GeminiAdapter

Native Gemini `generateContent` API.

Wire shape:
    POST {base}/models/{model}:generateContent?key=<key>
    {
      "contents": [{"role": "user", "parts": [{"text": ...}]}],
      "systemInstruction": {"parts": [{"text": ...}]},
      "generationConfig": {"maxOutputTokens": ..., "responseMimeType": ..., "responseSchema": ...}
    }

Notes
- The key travels as a query parameter, not a header.
- A base URL that already ends in ":generateContent" is used as-is (the
  model is then whatever the URL names; a different requested model is
  logged at debug level).
- JSON output: prompt directive plus responseMimeType=application/json. The
  responseSchema dialect rejects `additionalProperties`, so it is stripped.
- Images are sent inline as base64 `inline_data`.
- Roles: assistant -> model; system messages go to systemInstruction.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List
from urllib.parse import quote

from llm_bridge.core.extraction import as_text, dig
from llm_bridge.core.response_format import strip_additional_properties
from llm_bridge.providers.base.interfaces import (
    IMAGE_INLINE,
    JSON_GENERATION_CONFIG,
    ProviderAdapter,
    join_url,
)
from llm_bridge.providers.base.models import Attachment, CallParams, Message, RequestDescriptor

logger = logging.getLogger(__name__)

GENERATE_SUFFIX = ":generateContent"
_PINNED_MODEL = re.compile(r"/models/([^/:]+)" + re.escape(GENERATE_SUFFIX) + r"$")


class GeminiAdapter(ProviderAdapter):
    name = "gemini"
    default_base_url = "https://generativelanguage.googleapis.com/v1beta"
    default_model = "gemini-1.5-flash"
    default_max_tokens = 1000
    json_mode = JSON_GENERATION_CONFIG
    image_transport = IMAGE_INLINE

    def endpoint(self, base_url: str, model: str) -> str:
        base = join_url(base_url, "")
        if base.endswith(GENERATE_SUFFIX):
            pinned = _PINNED_MODEL.search(base)
            if pinned and pinned.group(1) != model:
                logger.debug("Base URL pins model %s; requested model %s is not used", pinned.group(1), model)
            return base
        return base + f"/models/{model}{GENERATE_SUFFIX}"

    def render_attachment(self, attachment: Attachment) -> Dict[str, Any]:
        if attachment.kind == "image":
            return {"inline_data": {"mime_type": attachment.mime_type, "data": attachment.data or ""}}
        return {"text": attachment.text or ""}

    def render_message(self, message: Message) -> Dict[str, Any]:
        if isinstance(message.content, str):
            parts = [{"text": message.content}]
        else:
            parts = [self.render_attachment(a) for a in message.content]
        role = "model" if message.role == "assistant" else "user"
        return {"role": role, "parts": parts}

    def build_request(
        self,
        api_key: str,
        base_url: str,
        messages: List[Message],
        params: CallParams,
    ) -> RequestDescriptor:
        model = params.model or self.default_model
        system = [m.text_or_joined() for m in messages if m.role == "system"]

        payload: Dict[str, Any] = {
            "contents": [self.render_message(m) for m in messages if m.role != "system"],
        }
        if system:
            payload["systemInstruction"] = {"parts": [{"text": s} for s in system]}

        generation_config: Dict[str, Any] = {"maxOutputTokens": self.max_tokens_for(params)}
        if params.temperature is not None:
            generation_config["temperature"] = params.temperature
        fmt = params.response_format
        if fmt is not None:
            generation_config["responseMimeType"] = "application/json"
            schema = fmt.get("schema") if isinstance(fmt, dict) else None
            if isinstance(schema, dict):
                generation_config["responseSchema"] = strip_additional_properties(schema)
        payload["generationConfig"] = generation_config
        payload.update(params.extra)

        url = self.endpoint(base_url, model)
        sep = "&" if "?" in url else "?"
        return RequestDescriptor(
            url=f"{url}{sep}key={quote(api_key, safe='')}",
            method="POST",
            headers={"Content-Type": "application/json"},
            payload=payload,
            debug_prompt=params.debug_prompt,
            debug_response=params.debug_response,
            secret_query_params=("key",),
        )

    def extract_content(self, response: Any) -> str:
        return as_text(dig(response, "candidates", 0, "content", "parts", 0, "text", default=""))
