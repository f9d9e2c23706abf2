"""Dependency-aware scheduling of plan tasks."""

from __future__ import annotations

from golutra.contracts import ExecutionPlan


class DagScheduler:
    """Releases tasks once all their dependencies have completed."""

    def __init__(self, plan: ExecutionPlan) -> None:
        self._task_ids = [t.id for t in plan.tasks]
        self._in_degree: dict[str, int] = {tid: 0 for tid in self._task_ids}
        self._successors: dict[str, list[str]] = {tid: [] for tid in self._task_ids}
        for task_id, dep_id in plan.dependencies:
            self._in_degree[task_id] = self._in_degree.get(task_id, 0) + 1
            self._successors.setdefault(dep_id, []).append(task_id)
        self._completed: set[str] = set()
        self._dispatched: set[str] = set()

    def ready_tasks(self) -> list[str]:
        """Tasks with no pending dependencies that are neither running nor done."""
        return [
            tid
            for tid in self._task_ids
            if tid not in self._completed
            and tid not in self._dispatched
            and self._in_degree.get(tid, 0) == 0
        ]

    def mark_dispatched(self, task_id: str) -> None:
        self._dispatched.add(task_id)

    def complete_task(self, task_id: str) -> None:
        """Mark a task done and release its successors."""
        self._completed.add(task_id)
        self._dispatched.discard(task_id)
        for succ in self._successors.get(task_id, ()):
            if succ in self._in_degree:
                self._in_degree[succ] = max(self._in_degree[succ] - 1, 0)

    def is_done(self) -> bool:
        return len(self._completed) == len(self._task_ids)

    def has_in_flight(self) -> bool:
        return bool(self._dispatched)

    def completed_count(self) -> int:
        return len(self._completed)

    def total_count(self) -> int:
        return len(self._task_ids)