"""In-memory record of past executions."""

from __future__ import annotations

import copy
import threading
import time
from dataclasses import dataclass, field
from typing import Optional


def _now() -> int:
    return int(time.time())


@dataclass
class TaskResult:
    task_id: str
    agent_id: str
    output: str
    success: bool


@dataclass
class ExecutionRecord:
    """One execution of a plan and the results of its tasks."""

    plan_id: str
    instruction: str
    task_count: int
    agent_count: int
    assignments: list[tuple[str, str]] = field(default_factory=list)
    task_results: dict[str, TaskResult] = field(default_factory=dict)
    started_at: int = 0
    finished_at: Optional[int] = None


class ExecutionHistory:
    """Execution records kept in memory, oldest first."""

    def __init__(self) -> None:
        self._records: list[ExecutionRecord] = []
        self._lock = threading.Lock()

    def record_start(
        self,
        plan_id: str,
        instruction: str,
        task_count: int,
        agent_count: int,
        assignments: list[tuple[str, str]],
    ) -> None:
        record = ExecutionRecord(
            plan_id=plan_id,
            instruction=instruction,
            task_count=task_count,
            agent_count=agent_count,
            assignments=list(assignments),
            started_at=_now(),
        )
        with self._lock:
            self._records.append(record)

    def _latest(self, plan_id: str) -> Optional[ExecutionRecord]:
        return next((r for r in reversed(self._records) if r.plan_id == plan_id), None)

    def record_task_result(self, plan_id: str, result: TaskResult) -> None:
        """Attach a task result to the latest record of the plan."""
        with self._lock:
            record = self._latest(plan_id)
            if record is not None:
                record.task_results[result.task_id] = result

    def record_finish(self, plan_id: str) -> None:
        with self._lock:
            record = self._latest(plan_id)
            if record is not None:
                record.finished_at = _now()

    def list_recent(self, limit: int) -> list[ExecutionRecord]:
        """Up to ``limit`` records, newest first."""
        with self._lock:
            newest = list(reversed(self._records))[:limit]
            return [copy.deepcopy(r) for r in newest]

    def get(self, plan_id: str) -> Optional[ExecutionRecord]:
        """The first record of the plan, or None."""
        with self._lock:
            record = next((r for r in self._records if r.plan_id == plan_id), None)
            return None if record is None else copy.deepcopy(record)