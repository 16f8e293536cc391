"""
Provider instance: the caller-facing object.

A Provider owns its configuration (API key, base URL, default model, default
options) and its context store, and is bound to exactly one adapter for its
whole life. Setters return the instance so configuration chains:

    provider = openai_provider().configure(key).set_model("gpt-4o-mini")
    provider.add_context("Product", {"sku": "123"}).add_context("Locale", "fr-FR")
    answer = provider.generate_text("Summarize the product", response_format=fmt)

Per call: context -> messages -> response-format negotiation -> request
building -> execution -> content extraction. Everything is synchronous and at
most one outbound call is made (plus one download per inline image).

Model precedence for a call: `model` passed to the call, then set_model(),
then a `model` key in set_default_options(), then the family default.

A response format on a directive-only family is applied to a per-call copy
of the context store; get_context() only ever shows what the caller added.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from llm_bridge.core.attachments import DownloadFn, build_image_messages
from llm_bridge.core.context import ContextStore
from llm_bridge.core.executor import HttpCallFn, RequestExecutor, failure_result
from llm_bridge.core.extraction import coerce_json
from llm_bridge.core.messages import build_messages
from llm_bridge.core.response_format import negotiate
from llm_bridge.core.transport import requests_call, requests_download_base64
from llm_bridge.exceptions import MissingCredentialError, UnsupportedCapabilityError
from llm_bridge.providers.base.interfaces import ProviderAdapter, SupportsImageGeneration
from llm_bridge.providers.base.models import CallParams, ContextEntry, Message

logger = logging.getLogger(__name__)


def is_failure(result: Any) -> bool:
    return isinstance(result, dict) and result.get("status") == "failure" and "request" in result


class Provider:
    def __init__(
        self,
        adapter: ProviderAdapter,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        http_call: Optional[HttpCallFn] = None,
        download: Optional[DownloadFn] = None,
    ) -> None:
        self.adapter = adapter
        self.api_key: str = api_key or ""
        self.base_url: str = base_url or adapter.default_base_url
        self.default_model: Optional[str] = None
        self.default_options: Dict[str, Any] = {}
        self.contexts = ContextStore()
        self.executor = RequestExecutor(http_call or requests_call)
        self.download: DownloadFn = download or requests_download_base64

    def __repr__(self) -> str:
        return f"Provider(name={self.name!r}, base_url={self.base_url!r}, key_set={bool(self.api_key)})"

    @property
    def name(self) -> str:
        return self.adapter.name

    # -------------------- Configuration --------------------

    def configure(self, key: str, endpoint: Optional[str] = None) -> "Provider":
        self.api_key = key or ""
        if endpoint:
            self.base_url = endpoint
        return self

    def set_api_key(self, key: str) -> "Provider":
        self.api_key = key or ""
        return self

    def set_base_url(self, url: str) -> "Provider":
        self.base_url = url
        return self

    def set_model(self, name: Optional[str]) -> "Provider":
        self.default_model = name or None
        return self

    def set_default_options(self, options: Optional[Mapping[str, Any]]) -> "Provider":
        self.default_options = dict(options or {})
        return self

    # -------------------- Context --------------------

    def add_context(self, label: str, value: Any) -> "Provider":
        self.contexts.add(label, value)
        return self

    def get_context(self, label: Optional[str] = None) -> List[ContextEntry]:
        return self.contexts.get(label)

    def clear_context(self, label: Optional[str] = None) -> "Provider":
        self.contexts.clear(label)
        return self

    # -------------------- Operations --------------------

    def generate_text(self, prompt: Any, params: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Any:
        """
        Text completion.

        Returns extracted text, parsed JSON (when a response format was
        requested and the reply parses), the raw response (debug_response),
        the redacted request (debug_prompt), a list of violations (invalid
        response format), or a failure dict.

        Raises:
            MissingCredentialError, InvalidPromptShapeError
        """
        self._require_key()
        messages = build_messages(prompt)
        call = self._call_params(params, kwargs, vision=False)

        contexts = self.contexts.copy()
        errors = negotiate(self.adapter.native_json, contexts, call.response_format)
        if errors:
            return errors
        return self._send(messages, call, contexts)

    def analyze_image(
        self,
        image_refs: Sequence[str],
        prompt: str,
        params: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> Any:
        """
        Image analysis: one user message per image, then the prompt.

        Raises:
            UnsupportedCapabilityError: before any download or request when the
                provider family has no image support.
            MissingCredentialError
        """
        self.adapter.require_image_support()
        self._require_key()
        call = self._call_params(params, kwargs, vision=True)

        contexts = self.contexts.copy()
        errors = negotiate(self.adapter.native_json, contexts, call.response_format)
        if errors:
            return errors

        fetch = not call.debug_prompt
        try:
            messages = build_image_messages(image_refs, prompt, self.adapter, self.download, fetch=fetch)
        except Exception as e:
            logger.warning("Image download failed for %s", self.name)
            placeholder = build_image_messages(image_refs, prompt, self.adapter, fetch=False)
            request = self.adapter.build_request(
                self.api_key, self.base_url, contexts.inject(placeholder), call
            )
            return failure_result(request, f"Image download failed: {e}")
        return self._send(messages, call, contexts)

    def generate_image(self, prompt: str, params: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Any:
        """
        Image generation. Returns the first image URL (or base64 body).

        Raises:
            UnsupportedCapabilityError: every family except OpenAI.
            MissingCredentialError
        """
        adapter = self.adapter
        if not isinstance(adapter, SupportsImageGeneration):
            raise UnsupportedCapabilityError(self.name, "image generation")
        self._require_key()

        call = CallParams.from_options(self.default_options, params, kwargs)
        call.model = call.model or adapter.default_image_model
        request = adapter.build_image_generation_request(self.api_key, self.base_url, prompt, call)

        result = self.executor.execute(request)
        if call.debug_prompt or call.debug_response or is_failure(result):
            return result
        return adapter.extract_image(result)

    # -------------------- internal helpers --------------------

    def _require_key(self) -> None:
        if not self.api_key:
            raise MissingCredentialError(self.name)

    def _call_params(self, params: Optional[Mapping[str, Any]], kwargs: Mapping[str, Any], vision: bool) -> CallParams:
        call = CallParams.from_options(self.default_options, params, kwargs)
        per_call = CallParams.from_options(params, kwargs).model
        call.model = self.adapter.resolve_model(per_call or self.default_model or call.model, vision=vision)
        return call

    def _send(self, messages: List[Message], call: CallParams, contexts: ContextStore) -> Any:
        logger.debug("Building %s request (model=%s)", self.name, call.model)
        request = self.adapter.build_request(
            self.api_key, self.base_url, contexts.inject(messages), call
        )
        result = self.executor.execute(request)
        if call.debug_prompt or call.debug_response or is_failure(result):
            return result

        content = self.adapter.extract_content(result)
        if call.response_format is not None:
            return coerce_json(content)
        return content
