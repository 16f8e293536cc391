"""
Response-format negotiation.

A response format looks like:

    {
        "name": "nutri_score_analysis",
        "strict": True,
        "schema": {
            "type": "object",
            "properties": {...},
            "required": [...],
            "additionalProperties": False,
        },
    }

Native-JSON adapters embed it in the payload after validation. Every other
adapter gets it as two context entries (the schema and a no-markdown
directive) so it rides the normal context-injection path. Adapters with a
narrower JSON switch add their own flag on top while building the request.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

from llm_bridge.core.context import ContextStore

logger = logging.getLogger(__name__)

SCHEMA_LABEL = "RESPOND WITH THIS SCHEMA"
DIRECTIVE_LABEL = "RESPONSE DIRECTIVE"
DIRECTIVE_TEXT = (
    "Please output only the raw JSON without markdown formatting "
    "(NO backticks or language directive), explanation, or commentary"
)

# Schema keywords whose values are themselves schemas or lists/maps of schemas.
_SUBSCHEMA_KEYS = ("items", "additionalItems", "not")
_SUBSCHEMA_LIST_KEYS = ("anyOf", "oneOf", "allOf", "prefixItems")
_SUBSCHEMA_MAP_KEYS = ("properties", "patternProperties", "$defs", "definitions")


def validate_response_format(fmt: Any) -> List[str]:
    """
    Check a response format against the native-JSON invariants.
    Returns one message per violated invariant; empty means valid.
    """
    if not isinstance(fmt, dict):
        return ["Response format must be an object."]

    errors: List[str] = []
    if not fmt.get("name"):
        errors.append("Missing 'name' property.")
    if fmt.get("strict") is not True:
        errors.append("'strict' must be true.")

    schema = fmt.get("schema")
    if not isinstance(schema, dict):
        errors.append("Missing 'schema' property.")
        return errors

    if schema.get("type") != "object":
        errors.append("Schema 'type' must be 'object'.")
    properties = schema.get("properties")
    if not isinstance(properties, dict) or not properties:
        errors.append("Schema 'properties' must be a non-empty object.")
    if not isinstance(schema.get("required"), list):
        errors.append("Schema 'required' must be an array.")
    if schema.get("additionalProperties") is not False:
        errors.append("Schema 'additionalProperties' must be false.")
    return errors


def strip_additional_properties(schema: Any) -> Any:
    """
    Return a copy of `schema` with every `additionalProperties` keyword removed,
    recursing through nested object and array fragments. Input is not mutated.
    """
    if isinstance(schema, list):
        return [strip_additional_properties(s) for s in schema]
    if not isinstance(schema, dict):
        return schema

    out: Dict[str, Any] = {}
    for key, value in schema.items():
        if key == "additionalProperties":
            continue
        if key in _SUBSCHEMA_KEYS or key in _SUBSCHEMA_LIST_KEYS:
            out[key] = strip_additional_properties(value)
        elif key in _SUBSCHEMA_MAP_KEYS and isinstance(value, dict):
            out[key] = {name: strip_additional_properties(sub) for name, sub in value.items()}
        else:
            out[key] = value
    return out


def inject_directive(contexts: ContextStore, fmt: Any) -> None:
    """
    Add the schema and the directive as context entries. Earlier copies of
    both labels are replaced so repeated calls do not stack directives.
    """
    contexts.clear(SCHEMA_LABEL)
    contexts.clear(DIRECTIVE_LABEL)
    contexts.add(SCHEMA_LABEL, json.dumps(fmt, separators=(",", ":"), ensure_ascii=False))
    contexts.add(DIRECTIVE_LABEL, DIRECTIVE_TEXT)


def negotiate(native_json: bool, contexts: ContextStore, fmt: Any) -> List[str]:
    """
    Apply a requested response format for one call.

    Provider passes a per-call copy of its context store, so the directive
    never outlives the call that asked for it.

    Returns the violation list for native-JSON adapters (empty when the format
    is valid or absent). Directive adapters always get [] back. Only None means
    "no format"; an empty mapping is a format and is validated.
    """
    if fmt is None:
        return []
    if native_json:
        errors = validate_response_format(fmt)
        if errors:
            logger.debug("Response format rejected: %s", errors)
        return errors
    logger.debug("Downgrading response format to prompt directive")
    inject_directive(contexts, fmt)
    return []
