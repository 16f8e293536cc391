"""
Per-instance context store.

Entries are labelled JSON values attached to every subsequent call. They are
kept in insertion order and never deduplicated; serialization groups values
sharing a label into one array, in arrival order.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from llm_bridge.providers.base.models import ContextEntry, Message

logger = logging.getLogger(__name__)


class ContextStore:
    def __init__(self) -> None:
        self._entries: List[ContextEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def copy(self) -> "ContextStore":
        """Independent store with the same entries (entries themselves are frozen)."""
        other = ContextStore()
        other._entries = list(self._entries)
        return other

    def add(self, label: str, value: Any) -> None:
        self._entries.append(ContextEntry(label=str(label), value=value))

    def get(self, label: Optional[str] = None) -> List[ContextEntry]:
        if label is None:
            return list(self._entries)
        return [e for e in self._entries if e.label == label]

    def clear(self, label: Optional[str] = None) -> None:
        if label is None:
            self._entries = []
        else:
            self._entries = [e for e in self._entries if e.label != label]

    def grouped(self) -> Dict[str, List[Any]]:
        """Label -> values, labels in first-seen order."""
        out: Dict[str, List[Any]] = {}
        for entry in self._entries:
            out.setdefault(entry.label, []).append(entry.value)
        return out

    def serialize(self) -> str:
        # Compact separators match what JSON.stringify produces.
        return json.dumps(self.grouped(), separators=(",", ":"), ensure_ascii=False)

    def inject(self, messages: List[Message]) -> List[Message]:
        """
        Return messages with the serialized context prepended as one user
        message. Unchanged when the store is empty.
        """
        if not self._entries:
            return list(messages)
        logger.debug("Injecting %d context entries", len(self._entries))
        return [Message(role="user", content=self.serialize())] + list(messages)
