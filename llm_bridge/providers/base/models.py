"""
Provider-agnostic domain models (DTOs) for the providers layer.

These dataclasses define the normalized contract every adapter consumes and
produces: canonical messages and attachments, context entries, normalized call
parameters, and the per-call request descriptor. They are intentionally
minimal and JSON-serializable to allow easy logging and testing.

Design goals
- Pure data: no provider-specific behavior here.
- Adapters convert these DTOs into their own wire shapes.
- Upstream layers depend only on these models and the adapter interface.
"""

from __future__ import annotations

import json
import shlex
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple, Union


# Message roles accepted from callers.
Role = Literal["system", "user", "assistant"]
ROLES = ("system", "user", "assistant")

AttachmentKind = Literal["text", "image"]

# Stands in for every credential in debug and failure results.
REDACTED = "[REDACTED]"


@dataclass
class Attachment:
    """
    A single piece of multi-modal message content.

    For images, `ref` is the caller's reference (usually a URL). `mime_type` is
    inferred from the reference suffix, and `data` holds base64 bytes when the
    adapter needs the image inline.
    """
    kind: AttachmentKind
    text: Optional[str] = None
    ref: Optional[str] = None
    mime_type: Optional[str] = None
    data: Optional[str] = None

    @classmethod
    def of_text(cls, text: str) -> "Attachment":
        return cls(kind="text", text=text)

    @classmethod
    def of_image(cls, ref: str, mime_type: Optional[str] = None, data: Optional[str] = None) -> "Attachment":
        return cls(kind="image", ref=ref, mime_type=mime_type, data=data)

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class Message:
    """
    A canonical chat message. Content is a flat string or a list of Attachment.
    """
    role: Role
    content: Union[str, List[Attachment]]

    def is_structured(self) -> bool:
        return isinstance(self.content, list)

    def text_or_joined(self) -> str:
        """
        Flattened text representation, for providers that only take strings
        in some positions (e.g. system prompts).
        """
        if isinstance(self.content, str):
            return self.content
        parts: List[str] = []
        for p in self.content:
            if p.kind == "text" and p.text:
                parts.append(p.text)
            else:
                parts.append(f"[{p.kind}]")
        return "\n".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role,
            "content": (
                self.content if isinstance(self.content, str)
                else [p.to_dict() for p in self.content]
            ),
        }


@dataclass(frozen=True)
class ContextEntry:
    label: str
    value: Any


# Caller-facing aliases for the recognized parameters.
_PARAM_ALIASES: Dict[str, str] = {
    "responseFormat": "response_format",
    "debugPrompt": "debug_prompt",
    "debugResponse": "debug_response",
    "maxTokens": "max_tokens",
}

_KNOWN_PARAMS = (
    "model",
    "max_tokens",
    "temperature",
    "response_format",
    "debug_prompt",
    "debug_response",
)


@dataclass
class CallParams:
    """
    Normalized call parameters.

    Recognized keys are lifted into fields; anything else lands in `extra`
    and is passed through to the provider payload untouched.
    """
    model: Optional[str] = None
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    response_format: Optional[Dict[str, Any]] = None
    debug_prompt: bool = False
    debug_response: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_options(cls, *layers: Optional[Mapping[str, Any]]) -> "CallParams":
        """
        Merge option mappings left to right (later layers win) and normalize.

        Typical use: CallParams.from_options(default_options, params, kwargs)
        """
        merged: Dict[str, Any] = {}
        for layer in layers:
            for key, value in (layer or {}).items():
                merged[_PARAM_ALIASES.get(key, key)] = value

        known = {k: merged.pop(k) for k in _KNOWN_PARAMS if k in merged}
        return cls(
            model=known.get("model") or None,
            max_tokens=known.get("max_tokens"),
            temperature=known.get("temperature"),
            response_format=known.get("response_format"),
            debug_prompt=bool(known.get("debug_prompt", False)),
            debug_response=bool(known.get("debug_response", False)),
            extra=merged,
        )


@dataclass
class RequestDescriptor:
    """
    Fully built, provider-specific HTTP request. Ephemeral: one per call.

    `secret_headers` and `secret_query_params` name the credential-bearing
    pieces so that redaction does not need to know the provider.
    """
    url: str
    method: str
    headers: Dict[str, str]
    payload: Dict[str, Any]
    debug_prompt: bool = False
    debug_response: bool = False
    secret_headers: Tuple[str, ...] = ()
    secret_query_params: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "method": self.method,
            "headers": dict(self.headers),
            "payload": self.payload,
            "debugPrompt": self.debug_prompt,
            "debugResponse": self.debug_response,
        }

    def to_curl(self) -> str:
        """
        Render as a curl command line. Call on a redacted descriptor when the
        output is going anywhere a human can read it.
        """
        headers = " ".join(f"-H {shlex.quote(f'{k}: {v}')}" for k, v in self.headers.items())
        body = shlex.quote(json.dumps(self.payload, ensure_ascii=False))
        return f"curl -X {self.method} {headers} -d {body} {shlex.quote(self.url)}"
