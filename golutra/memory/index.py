"""Keyword index over memory records."""

from __future__ import annotations

import re
import string
from collections import Counter

from golutra.contracts import MemoryScope
from golutra.memory.store import MemoryRecord, MemoryStore, storage_key

_SEPARATORS = re.compile(r"[\s" + re.escape(string.punctuation) + r"]")


def tokenize(key: str, value: str) -> list[str]:
    """Split on whitespace and ASCII punctuation, lowercase, drop tokens under two bytes."""
    combined = f"{key} {value}"
    return [
        token
        for token in (part.lower() for part in _SEPARATORS.split(combined))
        if len(token.encode("utf-8")) >= 2
    ]


class MemoryIndex:
    """Inverted index from keyword to storage keys."""

    def __init__(self) -> None:
        self._inverted: dict[str, list[str]] = {}

    def index_record(self, record: MemoryRecord) -> None:
        doc_id = storage_key(record.owner, record.scope, record.key)
        for token in tokenize(record.key, record.value):
            self._inverted.setdefault(token, []).append(doc_id)

    def remove_record(self, record: MemoryRecord) -> None:
        doc_id = storage_key(record.owner, record.scope, record.key)
        for token, entries in list(self._inverted.items()):
            kept = [entry for entry in entries if entry != doc_id]
            if kept:
                self._inverted[token] = kept
            else:
                del self._inverted[token]

    def search(self, query: str, limit: int) -> list[str]:
        """Storage keys matching the query, best match first."""
        scores: Counter[str] = Counter()
        for token in tokenize(query, ""):
            scores.update(self._inverted.get(token, ()))
        return [doc_id for doc_id, _ in scores.most_common(limit)]

    def rebuild_from_store(self, store: MemoryStore) -> None:
        self._inverted.clear()
        for scope in MemoryScope:
            for record in store.list_by_scope(scope):
                self.index_record(record)