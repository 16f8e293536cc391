"""
Default synchronous I/O primitives backed by `requests`.

The provider layer only ever talks to the network through two callables:

    http_call(url, method, payload, headers) -> response
    download(url) -> base64 string

These are the defaults; hosting environments inject their own. Timeouts are
the primitive's job: LLM_BRIDGE_HTTP_TIMEOUT (seconds, default 60).
"""

from __future__ import annotations

import base64
import os
from typing import Any, Dict

import requests

from llm_bridge.exceptions import TransportFailure

DEFAULT_TIMEOUT = 60.0


def _timeout() -> float:
    raw = os.getenv("LLM_BRIDGE_HTTP_TIMEOUT")
    try:
        return float(raw) if raw else DEFAULT_TIMEOUT
    except ValueError:
        return DEFAULT_TIMEOUT


def requests_call(url: str, method: str, payload: Dict[str, Any], headers: Dict[str, str]) -> Any:
    """
    Send `payload` as a JSON body and return the decoded JSON response.
    Non-JSON bodies come back as text.

    Raises:
        TransportFailure: connection errors and non-2xx statuses.
    """
    try:
        response = requests.request(
            method=method.upper(),
            url=url,
            headers=headers,
            json=payload,
            timeout=_timeout(),
        )
        response.raise_for_status()
    except requests.HTTPError as e:
        body = e.response.text[:500] if e.response is not None else ""
        raise TransportFailure(f"HTTP {e.response.status_code if e.response is not None else '?'}: {body}") from e
    except requests.RequestException as e:
        raise TransportFailure(f"Request failed: {e}") from e

    try:
        return response.json()
    except ValueError:
        return response.text


def requests_download_base64(url: str) -> str:
    """Fetch `url` and return its body base64-encoded."""
    try:
        response = requests.get(url, timeout=_timeout())
        response.raise_for_status()
    except requests.RequestException as e:
        raise TransportFailure(f"Download failed: {e}") from e
    return base64.b64encode(response.content).decode("ascii")
