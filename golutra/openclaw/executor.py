"""Dispatch of tasks to agents and tracking of their progress and output."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass
from typing import Optional

from golutra.agent_runtime.lifecycle import AgentLifecycle
from golutra.contracts import (
    ContextItem,
    ErrorMessage,
    MemoryScope,
    ProgressMessage,
    ResultMessage,
    TaskMessage,
)
from golutra.memory.context import ContextBuilder
from golutra.memory.shared import SharedMemory
from golutra.memory.store import MemoryStoreError

_CONTEXT_TOKENS = 8000
_MEMORY_HITS = 5


class TaskStatus(enum.Enum):
    PENDING = "Pending"
    RUNNING = "Running"
    DONE = "Done"
    FAILED = "Failed"


@dataclass(frozen=True)
class TaskState:
    """Where a task stands, with the agent and result that go with it."""

    status: TaskStatus
    agent_id: str = ""
    started_at: Optional[float] = None
    output: str = ""
    error: str = ""

    def __str__(self) -> str:
        if self.status is TaskStatus.RUNNING:
            return f'Running {{ agent_id: "{self.agent_id}" }}'
        if self.status is TaskStatus.DONE:
            return f'Done {{ agent_id: "{self.agent_id}", output: "{self.output}" }}'
        if self.status is TaskStatus.FAILED:
            return f'Failed {{ agent_id: "{self.agent_id}", error: "{self.error}" }}'
        return self.status.value


class TaskExecutor:
    """Sends tasks to agents and collects what they report back."""

    def __init__(self) -> None:
        self._states: dict[str, TaskState] = {}
        self._outputs: dict[str, str] = {}
        self._agent_tasks: dict[str, str] = {}

    def dispatch(
        self,
        lifecycle: AgentLifecycle,
        agent_id: str,
        task_id: str,
        instruction: str,
        context: list[ContextItem],
    ) -> None:
        """Send a task to an agent and mark it running."""
        lifecycle.send_message(
            agent_id, TaskMessage(id=task_id, instruction=instruction, context=context)
        )
        self._states[task_id] = TaskState(
            TaskStatus.RUNNING, agent_id=agent_id, started_at=time.monotonic()
        )
        self._outputs[task_id] = ""
        self._agent_tasks[agent_id] = task_id

    def dispatch_with_context(
        self,
        lifecycle: AgentLifecycle,
        agent_id: str,
        task_id: str,
        instruction: str,
        memory: SharedMemory,
        predecessor_outputs: dict[str, str],
    ) -> None:
        """Dispatch with context from memory and from finished predecessors."""
        builder = (
            ContextBuilder(memory, _CONTEXT_TOKENS)
            .add_instruction(instruction)
            .add_memory_search(instruction, _MEMORY_HITS)
        )
        for pred_id, output in predecessor_outputs.items():
            builder = builder.add_agent_output(pred_id, output)
        self.dispatch(lifecycle, agent_id, task_id, instruction, builder.build())

    def poll_outputs(self, lifecycle: AgentLifecycle) -> list[tuple[str, str, str]]:
        """New output as (agent_id, task_id, text) chunks."""
        results: list[tuple[str, str, str]] = []
        for agent_id, message in lifecycle.poll_all_outputs():
            task_id = self._agent_tasks.get(agent_id, "")
            if isinstance(message, ResultMessage):
                if task_id in self._outputs:
                    self._outputs[task_id] += message.output
                results.append((agent_id, task_id, message.output))
            elif isinstance(message, ErrorMessage):
                self._states[task_id] = TaskState(
                    TaskStatus.FAILED, agent_id=agent_id, error=message.message
                )
                results.append((agent_id, task_id, f"[ERROR] {message.message}"))
            elif isinstance(message, ProgressMessage):
                results.append(
                    (agent_id, task_id, f"[PROGRESS {message.percent:.0f}%] {message.detail}")
                )
        return results

    def complete_task(self, task_id: str) -> str:
        """Mark a running task done and return its accumulated output."""
        output = self._outputs.get(task_id, "")
        state = self._states.get(task_id)
        if state is not None and state.status is TaskStatus.RUNNING:
            self._states[task_id] = TaskState(
                TaskStatus.DONE, agent_id=state.agent_id, output=output
            )
            self._agent_tasks.pop(state.agent_id, None)
        return output

    def remember_output(self, memory: SharedMemory, task_id: str, agent_id: str) -> None:
        """Store a task's non-empty output in task-scoped memory."""
        output = self._outputs.get(task_id)
        if not output:
            return
        try:
            memory.remember(agent_id, MemoryScope.TASK, f"task_output:{task_id}", output)
        except MemoryStoreError:
            pass

    def task_state(self, task_id: str) -> Optional[TaskState]:
        return self._states.get(task_id)

    def all_task_states(self) -> dict[str, TaskState]:
        return dict(self._states)

    def agent_output(self, agent_id: str) -> Optional[str]:
        """Output so far of the task the agent is working on."""
        task_id = self._agent_tasks.get(agent_id)
        return None if task_id is None else self._outputs.get(task_id)

    def completed_outputs(self) -> dict[str, str]:
        return {
            tid: state.output
            for tid, state in self._states.items()
            if state.status is TaskStatus.DONE
        }

    def has_active_tasks(self) -> bool:
        return any(s.status is TaskStatus.RUNNING for s in self._states.values())