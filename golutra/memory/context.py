"""Assembly of task context from instructions, files, outputs and memory."""

from __future__ import annotations

from typing import Optional

from golutra.contracts import ContextItem, MemoryScope
from golutra.memory.shared import SharedMemory
from golutra.memory.store import MemoryStoreError

_TAG_SCOPES = {"priv": MemoryScope.PRIVATE, "task": MemoryScope.TASK}


class ContextBuilder:
    """Collects context items within a rough token budget (four bytes per token)."""

    def __init__(self, memory: SharedMemory, max_tokens: int) -> None:
        self._memory = memory
        self._items: list[ContextItem] = []
        self._max_tokens = max_tokens
        self._current_tokens = 0

    def add_instruction(self, instruction: str) -> "ContextBuilder":
        self._push("instruction", instruction)
        return self

    def add_memory_search(self, query: str, limit: int) -> "ContextBuilder":
        """Add the values of memory entries matching the query."""
        for doc_id in self._memory.search(query, limit):
            parts = doc_id.split(":", 2)
            if len(parts) != 3:
                continue
            tag, owner, key = parts
            scope = _TAG_SCOPES.get(tag, MemoryScope.GLOBAL)
            try:
                value = self._memory.recall(owner, scope, key)
            except MemoryStoreError:
                continue
            if value is not None:
                self._push("memory", value, doc_id)
        return self

    def add_file(self, path: str, content: str) -> "ContextBuilder":
        self._push("file", content, path)
        return self

    def add_agent_output(self, agent_id: str, output: str) -> "ContextBuilder":
        self._push("output", output, agent_id)
        return self

    def build(self) -> list[ContextItem]:
        return list(self._items)

    def _push(self, kind: str, content: str, source: Optional[str] = None) -> None:
        estimate = len(content.encode("utf-8")) // 4
        if self._current_tokens + estimate > self._max_tokens:
            return
        self._current_tokens += estimate
        self._items.append(ContextItem(kind=kind, content=content, source=source))