"""
AnthropicAdapter

Messages API. Directive-only for JSON output and no image support in this
layer.

Wire shape:
    POST {base}/v1/messages
    x-api-key: <key>
    anthropic-version: 2023-06-01
    {"model": ..., "max_tokens": ..., "messages": [...], "system": "..."}

The messages API has no system role; system messages are joined into the
top-level `system` field. The answer is the first content block, read under
the key named by its own `type`.
"""

from __future__ import annotations

from typing import Any, Dict, List

from llm_bridge.core.extraction import as_text, dig
from llm_bridge.providers.base.interfaces import JSON_DIRECTIVE, ProviderAdapter, join_url
from llm_bridge.providers.base.models import CallParams, Message, RequestDescriptor

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicAdapter(ProviderAdapter):
    name = "anthropic"
    default_base_url = "https://api.anthropic.com"
    default_model = "claude-3-5-sonnet-20241022"
    default_max_tokens = 1024
    json_mode = JSON_DIRECTIVE
    image_transport = None

    def render_message(self, message: Message) -> Dict[str, Any]:
        if isinstance(message.content, str):
            return {"role": message.role, "content": message.content}
        return {
            "role": message.role,
            "content": [self.render_attachment(a) for a in message.content],
        }

    def build_request(
        self,
        api_key: str,
        base_url: str,
        messages: List[Message],
        params: CallParams,
    ) -> RequestDescriptor:
        system = [m.text_or_joined() for m in messages if m.role == "system"]
        payload: Dict[str, Any] = {
            "model": params.model or self.default_model,
            "max_tokens": self.max_tokens_for(params),
            "messages": [self.render_message(m) for m in messages if m.role != "system"],
        }
        if system:
            payload["system"] = "\n\n".join(system)
        if params.temperature is not None:
            payload["temperature"] = params.temperature
        payload.update(params.extra)

        return RequestDescriptor(
            url=join_url(base_url, "/v1/messages"),
            method="POST",
            headers={
                "x-api-key": api_key,
                "anthropic-version": ANTHROPIC_VERSION,
                "Content-Type": "application/json",
            },
            payload=payload,
            debug_prompt=params.debug_prompt,
            debug_response=params.debug_response,
            secret_headers=("x-api-key",),
        )

    def extract_content(self, response: Any) -> str:
        block = dig(response, "content", 0, default={})
        block_type = dig(block, "type", default="")
        if not isinstance(block_type, str) or not block_type:
            return ""
        return as_text(dig(block, block_type, default=""))
