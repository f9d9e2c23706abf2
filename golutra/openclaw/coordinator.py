"""The coordinator: turns instructions into tasks, staffs agents and dispatches work."""

from __future__ import annotations

import logging
import queue
import threading
import uuid
from dataclasses import dataclass, field
from typing import Optional

from golutra.agent_runtime.health import (
    AgentDead,
    AgentRestart,
    HealthCheckConfig,
    HealthChecker,
    HealthEvent,
)
from golutra.agent_runtime.interface import AgentError
from golutra.agent_runtime.lifecycle import AgentLifecycle
from golutra.contracts import ExecutionPlan, MemoryScope, StatusKind, TaskMessage
from golutra.memory.shared import SharedMemory
from golutra.memory.store import MemoryStoreError
from golutra.openclaw import planner
from golutra.openclaw.agent_factory import AgentFactory
from golutra.openclaw.channel import ChannelManager
from golutra.openclaw.executor import TaskExecutor
from golutra.openclaw.history import ExecutionHistory
from golutra.openclaw.protocol import ProtocolRouter
from golutra.openclaw.scheduler import DagScheduler

_log = logging.getLogger(__name__)


@dataclass
class ExecutionReport:
    """What an execution set up: plan, team size, channel and assignments."""

    plan_id: str
    task_count: int
    agent_count: int
    channel_id: Optional[str] = None
    assignments: list[tuple[str, str]] = field(default_factory=list)


class OpenClaw:
    """Receives instructions, plans tasks, creates agents and dispatches the work."""

    def __init__(
        self,
        lifecycle: AgentLifecycle,
        memory: SharedMemory,
        cwd: Optional[str] = None,
        health_interval: float = 5.0,
    ) -> None:
        self._lifecycle = lifecycle
        self._factory = AgentFactory()
        self._router = ProtocolRouter()
        self._memory = memory
        self._executor = TaskExecutor()
        self._executor_lock = threading.Lock()
        self._history = ExecutionHistory()
        self._cwd = cwd
        self._health_interval = health_interval
        self._health_stop = threading.Event()
        self._health_events: "queue.SimpleQueue[HealthEvent]" = queue.SimpleQueue()
        self._health_thread = threading.Thread(
            target=self._health_loop, name="openclaw-health", daemon=True
        )
        self._health_thread.start()

    def _health_loop(self) -> None:
        checker = HealthChecker(HealthCheckConfig(interval=self._health_interval))
        while not self._health_stop.is_set():
            for event in checker.check_all(self._lifecycle):
                if isinstance(event, AgentRestart):
                    try:
                        self._lifecycle.restart_agent(event.agent_id)
                    except AgentError:
                        pass
                elif isinstance(event, AgentDead):
                    _log.warning("openclaw: agent %s marked dead", event.agent_id)
                self._health_events.put(event)
            self._health_stop.wait(self._health_interval)

    def execute(self, instruction: str) -> ExecutionReport:
        """Plan an instruction, staff it with agents and dispatch the ready tasks."""
        tasks = planner.decompose(instruction)
        execution_plan = planner.plan(tasks)
        assessment = planner.assess(execution_plan)

        _log.info(
            "openclaw: plan=%s tasks=%d complexity=%d agents=%d",
            execution_plan.id,
            len(execution_plan.tasks),
            assessment.score,
            assessment.suggested_agent_count,
        )

        assignments = [
            (task.id, self._ensure_agent_for_role(task.required_role, task.preferred_tool))
            for task in execution_plan.tasks
        ]

        channel_id = None
        if assessment.needs_channel:
            members = [agent_id for _, agent_id in assignments]
            channel_id = ChannelManager(self._router).create_task_channel(
                execution_plan.id, members
            )

        self._history.record_start(
            execution_plan.id,
            instruction,
            len(execution_plan.tasks),
            len(assignments),
            list(assignments),
        )

        scheduler = DagScheduler(execution_plan)
        self._dispatch_ready_tasks(execution_plan, scheduler, assignments)

        return ExecutionReport(
            plan_id=execution_plan.id,
            task_count=len(execution_plan.tasks),
            agent_count=len(assignments),
            channel_id=channel_id,
            assignments=assignments,
        )

    def _dispatch_ready_tasks(
        self,
        execution_plan: ExecutionPlan,
        scheduler: DagScheduler,
        assignments: list[tuple[str, str]],
    ) -> None:
        tasks = {task.id: task for task in execution_plan.tasks}
        agents: dict[str, str] = {}
        for task_id, agent_id in assignments:
            agents.setdefault(task_id, agent_id)

        with self._executor_lock:
            for task_id in scheduler.ready_tasks():
                task = tasks.get(task_id)
                agent_id = agents.get(task_id)
                if task is None or agent_id is None:
                    continue
                predecessor_outputs = self._executor.completed_outputs()
                try:
                    self._executor.dispatch_with_context(
                        self._lifecycle,
                        agent_id,
                        task_id,
                        task.instruction,
                        self._memory,
                        predecessor_outputs,
                    )
                except (AgentError, MemoryStoreError) as exc:
                    _log.warning(
                        "openclaw: failed to dispatch %s to %s: %s", task_id, agent_id, exc
                    )
                scheduler.mark_dispatched(task_id)

    def _ensure_agent_for_role(self, role: str, preferred_tool: Optional[str]) -> str:
        for agent_id, agent_role, status in self._lifecycle.list_agents():
            if agent_role == role and status.kind is StatusKind.IDLE:
                return agent_id
        template = self._factory.auto_select(role, preferred_tool)
        template_id = template.id if template is not None else "general"
        config = self._factory.create_from_template(template_id, self._cwd)
        return self._lifecycle.spawn_agent(config)

    def poll_outputs(self) -> list[tuple[str, str, str]]:
        """New agent output as (agent_id, task_id, chunk)."""
        with self._executor_lock:
            return self._executor.poll_outputs(self._lifecycle)

    def has_active_tasks(self) -> bool:
        with self._executor_lock:
            return self._executor.has_active_tasks()

    def task_states(self) -> list[tuple[str, str]]:
        """(task_id, description of its state) for every known task."""
        with self._executor_lock:
            return [
                (task_id, str(state))
                for task_id, state in self._executor.all_task_states().items()
            ]

    def agent_output(self, agent_id: str) -> Optional[str]:
        with self._executor_lock:
            return self._executor.agent_output(agent_id)

    def send_to_agent(self, agent_id: str, message: str) -> None:
        """Send a hand-written instruction to an agent."""
        task = TaskMessage(id=f"manual-{uuid.uuid4().hex}", instruction=message, context=[])
        self._lifecycle.send_message(agent_id, task)

    def remember(self, key: str, value: str) -> None:
        """Store a value in global memory on behalf of the user."""
        self._memory.remember("user", MemoryScope.GLOBAL, key, value)

    def poll_health_events(self) -> list[HealthEvent]:
        """Health events gathered since the last call, without blocking."""
        events: list[HealthEvent] = []
        while True:
            try:
                events.append(self._health_events.get_nowait())
            except queue.Empty:
                return events

    def history(self) -> ExecutionHistory:
        return self._history

    def lifecycle(self) -> AgentLifecycle:
        return self._lifecycle

    def router(self) -> ProtocolRouter:
        return self._router

    def factory(self) -> AgentFactory:
        return self._factory

    def shutdown(self) -> None:
        """Stop health checks and every agent."""
        self._health_stop.set()
        self._lifecycle.shutdown_all()