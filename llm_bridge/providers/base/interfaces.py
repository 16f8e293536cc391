"""
Provider-agnostic interfaces for the providers layer.

This module defines the boundary contract every provider family implements:
- ProviderAdapter: builds a RequestDescriptor from canonical messages and
  extracts answer text from the provider's response envelope
- Capability flags on the adapter class (JSON mode, image transport)
- SupportsImageGeneration: optional capability marker for image generation

Adapters are stateless. A Provider instance selects one adapter at
construction and never re-dispatches per call.

Related DTOs are defined in: llm_bridge/providers/base/models.py
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from llm_bridge.exceptions import UnsupportedCapabilityError
from .models import Attachment, CallParams, Message, RequestDescriptor


# How an adapter honors a requested response format.
JSON_NATIVE = "native"                    # schema embedded and enforced server-side
JSON_DIRECTIVE = "directive"              # prompt directive only
JSON_OBJECT_FLAG = "json_object"          # directive + {"type": "json_object"}
JSON_GENERATION_CONFIG = "generation_config"  # directive + generationConfig MIME flag/schema

# How an adapter transmits images.
IMAGE_URL = "url"
IMAGE_INLINE = "inline"


def join_url(base: str, path: str) -> str:
    """Join base and path, stripping exactly one trailing slash from base."""
    if base.endswith("/"):
        base = base[:-1]
    return base + path


class ProviderAdapter(ABC):
    """
    One adapter per provider family.

    Subclasses set the class-level defaults and capability flags, and implement
    request building, message rendering, and content extraction.
    """

    name: str = ""
    default_base_url: str = ""
    default_model: str = ""
    default_vision_model: Optional[str] = None
    default_max_tokens: int = 1000
    json_mode: str = JSON_DIRECTIVE
    image_transport: Optional[str] = None

    @property
    def native_json(self) -> bool:
        return self.json_mode == JSON_NATIVE

    @property
    def supports_image_analysis(self) -> bool:
        return self.image_transport is not None

    def resolve_model(self, explicit: Optional[str] = None, vision: bool = False) -> str:
        if explicit:
            return explicit
        if vision and self.default_vision_model:
            return self.default_vision_model
        return self.default_model

    def max_tokens_for(self, params: CallParams) -> int:
        return params.max_tokens if params.max_tokens is not None else self.default_max_tokens

    def require_image_support(self) -> None:
        if not self.supports_image_analysis:
            raise UnsupportedCapabilityError(self.name, "image analysis")

    # -------------------- Contract --------------------

    @abstractmethod
    def build_request(
        self,
        api_key: str,
        base_url: str,
        messages: List[Message],
        params: CallParams,
    ) -> RequestDescriptor:
        """Assemble endpoint URL, headers, and payload. Must be pure."""
        ...

    @abstractmethod
    def extract_content(self, response: Any) -> str:
        """
        Locate the answer text inside the provider's success envelope.
        Absence of the expected path yields "".
        """
        ...

    @abstractmethod
    def render_message(self, message: Message) -> Dict[str, Any]:
        ...

    def render_attachment(self, attachment: Attachment) -> Dict[str, Any]:
        if attachment.kind == "image":
            raise UnsupportedCapabilityError(self.name, "image analysis")
        return {"type": "text", "text": attachment.text or ""}


@runtime_checkable
class SupportsImageGeneration(Protocol):
    """
    Capability marker for adapters that can generate images from a prompt.
    """
    default_image_model: str

    def build_image_generation_request(
        self, api_key: str, base_url: str, prompt: str, params: CallParams
    ) -> RequestDescriptor:
        ...

    def extract_image(self, response: Any) -> str:
        ...
