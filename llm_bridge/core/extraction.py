"""
Content extraction helpers and JSON coercion.

Adapters describe where their answer text lives; `dig` walks that path and
returns a default instead of raising when any hop is missing. `coerce_json`
is best-effort: a reply that is not valid JSON comes back as the raw text.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Union

logger = logging.getLogger(__name__)


def dig(obj: Any, *path: Union[str, int], default: Any = None) -> Any:
    """
    Follow dict keys / list indexes. Returns `default` on any missing hop.

    dig(resp, "choices", 0, "message", "content", default="")
    """
    cur = obj
    for hop in path:
        if isinstance(hop, int):
            if not isinstance(cur, list) or not -len(cur) <= hop < len(cur):
                return default
            cur = cur[hop]
        else:
            if not isinstance(cur, dict) or hop not in cur:
                return default
            cur = cur[hop]
    return default if cur is None else cur


def as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _clean_json_markers(s: str) -> str:
    """Strip common code fences from LLM JSON replies."""
    s = s.strip()
    if s.startswith("```json"):
        s = s[7:]
    elif s.startswith("```"):
        s = s[3:]
    if s.endswith("```"):
        s = s[:-3]
    return s.strip()


def coerce_json(text: Any) -> Any:
    """
    Parse `text` as JSON. Retries once with markdown fences removed; on
    failure returns `text` unchanged.
    """
    if not isinstance(text, str) or not text.strip():
        return text
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    cleaned = _clean_json_markers(text)
    if cleaned != text.strip():
        try:
            return json.loads(cleaned)
        except json.JSONDecodeError:
            pass
    logger.debug("Response is not valid JSON; returning raw text")
    return text
