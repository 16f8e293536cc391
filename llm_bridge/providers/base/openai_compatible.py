"""
OpenAI-compatible adapter base.

Shared by every family exposing a Chat Completions-compatible API:
- OpenAI (https://api.openai.com)
- Mistral (https://api.mistral.ai)
- Gemini through its OpenAI-compatible endpoint

Wire shape:
    POST {base}{path}
    Authorization: Bearer <key>
    {"model": ..., "messages": [{"role": ..., "content": ...}], "max_tokens": ...}

Answer text lives at choices[0].message.content.
"""

from __future__ import annotations

from typing import Any, Dict, List

from llm_bridge.core.extraction import as_text, dig
from .interfaces import JSON_NATIVE, JSON_OBJECT_FLAG, ProviderAdapter, join_url
from .models import Attachment, CallParams, Message, RequestDescriptor


class OpenAICompatibleAdapter(ProviderAdapter):
    """
    Provider-agnostic adapter for OpenAI-compatible chat APIs.

    Subclasses override the class-level defaults, `completion_path`, and the
    attachment rendering where their image format differs.
    """

    completion_path: str = "/v1/chat/completions"
    extra_headers: Dict[str, str] = {}

    def completion_url(self, base_url: str) -> str:
        return join_url(base_url, self.completion_path)

    def token_param(self, model: str) -> str:
        return "max_tokens"

    def auth_headers(self, api_key: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            **self.extra_headers,
        }

    def render_attachment(self, attachment: Attachment) -> Dict[str, Any]:
        if attachment.kind == "image":
            return {"type": "image_url", "image_url": {"url": attachment.ref}}
        return super().render_attachment(attachment)

    def render_message(self, message: Message) -> Dict[str, Any]:
        if isinstance(message.content, str):
            return {"role": message.role, "content": message.content}
        return {
            "role": message.role,
            "content": [self.render_attachment(a) for a in message.content],
        }

    def apply_response_format(self, payload: Dict[str, Any], fmt: Dict[str, Any]) -> None:
        if self.json_mode == JSON_NATIVE:
            payload["response_format"] = {"json_schema": fmt, "type": "json_schema"}
        elif self.json_mode == JSON_OBJECT_FLAG:
            payload["response_format"] = {"type": "json_object"}

    def build_request(
        self,
        api_key: str,
        base_url: str,
        messages: List[Message],
        params: CallParams,
    ) -> RequestDescriptor:
        model = params.model or self.default_model
        payload: Dict[str, Any] = {
            "model": model,
            "messages": [self.render_message(m) for m in messages],
            self.token_param(model): self.max_tokens_for(params),
        }
        if params.temperature is not None:
            payload["temperature"] = params.temperature
        if params.response_format is not None:
            self.apply_response_format(payload, params.response_format)
        payload.update(params.extra)

        return RequestDescriptor(
            url=self.completion_url(base_url),
            method="POST",
            headers=self.auth_headers(api_key),
            payload=payload,
            debug_prompt=params.debug_prompt,
            debug_response=params.debug_response,
            secret_headers=("Authorization",),
        )

    def extract_content(self, response: Any) -> str:
        return as_text(dig(response, "choices", 0, "message", "content", default=""))
