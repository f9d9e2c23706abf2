"""Memory shared across agents, kept in a store with a keyword index."""

from __future__ import annotations

import threading
import time
from typing import Optional

from golutra.contracts import MemoryScope
from golutra.memory.index import MemoryIndex
from golutra.memory.store import MemoryRecord, MemoryStore, MemoryStoreError


def _now() -> int:
    return int(time.time())


class SharedMemory:
    """Reads, writes and searches memory on behalf of agents."""

    def __init__(self, store: MemoryStore) -> None:
        self._store = store
        self._index = MemoryIndex()
        self._index.rebuild_from_store(store)
        self._lock = threading.Lock()

    def remember(self, owner: str, scope: MemoryScope, key: str, value: str) -> None:
        """Store a value, keeping creation time and access count of an existing entry."""
        now = _now()
        existing = self._store.get(owner, scope, key)
        record = MemoryRecord(
            key=key,
            value=value,
            scope=scope,
            owner=owner,
            created_at=existing.created_at if existing else now,
            updated_at=now,
            access_count=existing.access_count if existing else 0,
        )
        self._store.put(record)
        with self._lock:
            if existing is not None:
                self._index.remove_record(existing)
            self._index.index_record(record)

    def recall(self, owner: str, scope: MemoryScope, key: str) -> Optional[str]:
        """Return a stored value and count the access."""
        record = self._store.get(owner, scope, key)
        if record is None:
            return None
        record.access_count += 1
        record.updated_at = _now()
        try:
            self._store.put(record)
        except MemoryStoreError:
            pass
        return record.value

    def search(self, query: str, limit: int) -> list[str]:
        with self._lock:
            return self._index.search(query, limit)

    def list_scope(self, scope: MemoryScope) -> list[MemoryRecord]:
        return self._store.list_by_scope(scope)

    def forget(self, owner: str, scope: MemoryScope, key: str) -> bool:
        """Delete an entry; return whether it existed."""
        try:
            record = self._store.get(owner, scope, key)
        except MemoryStoreError:
            record = None
        if record is not None:
            with self._lock:
                self._index.remove_record(record)
        return self._store.delete(owner, scope, key)