"""
Request executor.

Runs a RequestDescriptor through one injected synchronous HTTP primitive:

    http_call(url, method, payload, headers) -> response

Behavior
- debug_prompt: no network I/O; the redacted request is returned as a dict.
- Otherwise the primitive's raw result is returned as-is.
- If the primitive raises, the exception is converted into
  {"status": "failure", "request": <redacted>, "message": <cause>}.
  execute() never raises.

Redaction is recomputed from the live descriptor on every path that exposes
the request, so no credential is observable from a debug or failure result.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, List
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

from llm_bridge.providers.base.models import REDACTED, RequestDescriptor

logger = logging.getLogger(__name__)

HttpCallFn = Callable[[str, str, Dict[str, Any], Dict[str, str]], Any]


def redact_url(url: str, secret_params: tuple) -> str:
    if not secret_params:
        return url
    parts = urlsplit(url)
    if not parts.query:
        return url
    secret = {p.lower() for p in secret_params}
    query = [
        (k, REDACTED if k.lower() in secret else v)
        for k, v in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(query, safe="[]")))


def redact_request(request: RequestDescriptor) -> RequestDescriptor:
    """Copy of `request` with secret headers and query parameters replaced."""
    secret = {h.lower() for h in request.secret_headers}
    headers = {k: (REDACTED if k.lower() in secret else v) for k, v in request.headers.items()}
    return replace(
        request,
        url=redact_url(request.url, request.secret_query_params),
        headers=headers,
    )


def _secret_values(request: RequestDescriptor) -> List[str]:
    secret = {h.lower() for h in request.secret_headers}
    values: List[str] = []
    for k, v in request.headers.items():
        if k.lower() in secret and v:
            values.append(v)
            if v.startswith("Bearer "):
                values.append(v[len("Bearer "):])
    params = {p.lower() for p in request.secret_query_params}
    for k, v in parse_qsl(urlsplit(request.url).query, keep_blank_values=True):
        if k.lower() in params and v:
            values.append(v)
    # Longest first so "Bearer <key>" is replaced before "<key>".
    return sorted(set(values), key=len, reverse=True)


def scrub(text: str, request: RequestDescriptor) -> str:
    """Replace any credential value echoed inside `text`."""
    for value in _secret_values(request):
        text = text.replace(value, REDACTED)
        text = text.replace(quote(value, safe=""), REDACTED)
    return text


def failure_result(request: RequestDescriptor, message: str) -> Dict[str, Any]:
    return {
        "status": "failure",
        "request": redact_request(request).to_dict(),
        "message": scrub(message, request),
    }


class RequestExecutor:
    """Single point where outbound calls happen."""

    def __init__(self, http_call: HttpCallFn) -> None:
        self.http_call = http_call

    def execute(self, request: RequestDescriptor) -> Any:
        if request.debug_prompt:
            logger.debug("debug_prompt set; returning request without sending it")
            return redact_request(request).to_dict()

        logger.debug("%s %s", request.method, redact_url(request.url, request.secret_query_params))
        try:
            return self.http_call(request.url, request.method, request.payload, request.headers)
        except Exception as e:
            logger.warning("Provider call failed: %s", scrub(str(e), request))
            return failure_result(request, str(e))
