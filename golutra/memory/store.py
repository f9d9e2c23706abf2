"""Persistent key-value storage of memory records."""

from __future__ import annotations

import json
import os
import sqlite3
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from golutra.contracts import MemoryScope

_TABLE = "agent_memory"


class MemoryStoreError(Exception):
    """Raised when the memory database cannot be read or written."""


@dataclass
class MemoryRecord:
    """One stored memory entry."""

    key: str
    value: str
    scope: MemoryScope
    owner: str
    created_at: int = 0
    updated_at: int = 0
    access_count: int = 0

    def _to_json(self) -> bytes:
        return json.dumps(
            {
                "key": self.key,
                "value": self.value,
                "scope": self.scope.value,
                "owner": self.owner,
                "created_at": self.created_at,
                "updated_at": self.updated_at,
                "access_count": self.access_count,
            },
            ensure_ascii=False,
        ).encode("utf-8")

    @classmethod
    def _from_json(cls, data: bytes) -> "MemoryRecord":
        try:
            raw = json.loads(data)
            return cls(
                key=raw["key"],
                value=raw["value"],
                scope=MemoryScope(raw["scope"]),
                owner=raw["owner"],
                created_at=int(raw["created_at"]),
                updated_at=int(raw["updated_at"]),
                access_count=int(raw["access_count"]),
            )
        except (ValueError, KeyError, TypeError) as exc:
            raise MemoryStoreError(f"corrupt memory record: {exc}") from exc


def storage_key(owner: str, scope: MemoryScope, key: str) -> str:
    """Key under which a record is stored: ``scope:owner:key``."""
    return f"{scope.tag}:{owner}:{key}"


class MemoryStore:
    """Memory records kept in a single SQLite file."""

    def __init__(self, path: Union[str, "os.PathLike[str]"]) -> None:
        self._lock = threading.Lock()
        conn = None
        try:
            conn = sqlite3.connect(os.fspath(path), check_same_thread=False)
            with conn:
                conn.execute(
                    f"CREATE TABLE IF NOT EXISTS {_TABLE} "
                    "(key TEXT PRIMARY KEY, value BLOB NOT NULL)"
                )
        except sqlite3.Error as exc:
            if conn is not None:
                conn.close()
            raise MemoryStoreError(f"memory db open: {exc}") from exc
        self._conn = conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        with self._lock:
            try:
                with self._conn:
                    yield self._conn
            except sqlite3.Error as exc:
                raise MemoryStoreError(str(exc)) from exc

    def put(self, record: MemoryRecord) -> None:
        """Insert or replace a record."""
        key = storage_key(record.owner, record.scope, record.key)
        with self._transaction() as conn:
            conn.execute(
                f"INSERT OR REPLACE INTO {_TABLE} (key, value) VALUES (?, ?)",
                (key, record._to_json()),
            )

    def get(self, owner: str, scope: MemoryScope, key: str) -> Optional[MemoryRecord]:
        """Return the record, or None if absent."""
        with self._transaction() as conn:
            row = conn.execute(
                f"SELECT value FROM {_TABLE} WHERE key = ?",
                (storage_key(owner, scope, key),),
            ).fetchone()
        return None if row is None else MemoryRecord._from_json(row[0])

    def list_by_scope(self, scope: MemoryScope) -> list[MemoryRecord]:
        """All records in a scope, ordered by storage key."""
        with self._transaction() as conn:
            rows = conn.execute(
                f"SELECT key, value FROM {_TABLE} ORDER BY key"
            ).fetchall()
        return [
            MemoryRecord._from_json(value)
            for key, value in rows
            if key.startswith(scope.tag)
        ]

    def delete(self, owner: str, scope: MemoryScope, key: str) -> bool:
        """Remove a record; return whether it existed."""
        with self._transaction() as conn:
            cursor = conn.execute(
                f"DELETE FROM {_TABLE} WHERE key = ?",
                (storage_key(owner, scope, key),),
            )
            return cursor.rowcount > 0

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def __enter__(self) -> "MemoryStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()