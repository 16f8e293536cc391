"""
Normalize caller prompt input into canonical messages.

Accepted shapes:
- "text"                                   -> [user: "text"]
- [("assistant", "Hi"), ("user", "Yo")]    -> role/content pairs
- [{"role": "user", "content": "..."}]     -> well-formed message mappings
- [Message(...)]                           -> passed through

Content may be a string or a list of Attachment. Anything else raises
InvalidPromptShapeError before a request is built.
"""

from __future__ import annotations

from typing import Any, List, Mapping

from llm_bridge.exceptions import InvalidPromptShapeError
from llm_bridge.providers.base.models import ROLES, Attachment, Message


def _check_content(content: Any, index: int) -> Any:
    if isinstance(content, str):
        return content
    if isinstance(content, list) and all(isinstance(c, Attachment) for c in content):
        return list(content)
    raise InvalidPromptShapeError(
        f"Message {index}: content must be a string or a list of attachments, got {type(content).__name__}"
    )


def _check_role(role: Any, index: int) -> str:
    if role not in ROLES:
        raise InvalidPromptShapeError(f"Message {index}: unknown role {role!r}")
    return role


def _to_message(item: Any, index: int) -> Message:
    if isinstance(item, Message):
        return Message(role=_check_role(item.role, index), content=_check_content(item.content, index))
    if isinstance(item, Mapping):
        if "role" not in item or "content" not in item:
            raise InvalidPromptShapeError(f"Message {index}: mapping needs 'role' and 'content'")
        return Message(role=_check_role(item["role"], index), content=_check_content(item["content"], index))
    if isinstance(item, (list, tuple)) and len(item) == 2:
        role, content = item
        return Message(role=_check_role(role, index), content=_check_content(content, index))
    raise InvalidPromptShapeError(
        f"Message {index}: expected a (role, content) pair or a message mapping, got {type(item).__name__}"
    )


def build_messages(prompt: Any) -> List[Message]:
    if isinstance(prompt, str):
        return [Message(role="user", content=prompt)]
    if isinstance(prompt, (list, tuple)) and prompt:
        return [_to_message(item, i) for i, item in enumerate(prompt)]
    raise InvalidPromptShapeError(
        f"Prompt must be a string or a non-empty sequence of messages, got {type(prompt).__name__}"
    )
