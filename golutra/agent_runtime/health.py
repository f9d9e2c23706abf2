"""Periodic agent health checks and the events they raise."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, Union

from golutra.contracts import AgentStatus, StatusKind


@dataclass
class HealthCheckConfig:
    """Check interval in seconds and failure thresholds."""

    interval: float = 5.0
    failure_threshold: int = 3
    dead_threshold: int = 10


@dataclass(frozen=True)
class AgentRestart:
    agent_id: str
    role: str
    attempt: int


@dataclass(frozen=True)
class AgentDead:
    agent_id: str
    role: str
    reason: str


@dataclass(frozen=True)
class AgentStopped:
    agent_id: str
    role: str


HealthEvent = Union[AgentRestart, AgentDead, AgentStopped]


class _AgentLister(Protocol):
    def list_agents(self) -> list[tuple[str, str, AgentStatus]]: ...


@dataclass
class _AgentHealthState:
    last_check: float
    consecutive_failures: int = 0
    marked_dead: bool = False


class HealthChecker:
    """Tracks consecutive failures per agent and reports what needs action."""

    def __init__(
        self,
        config: Optional[HealthCheckConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config if config is not None else HealthCheckConfig()
        self._clock = clock
        self._states: dict[str, _AgentHealthState] = field(default_factory=dict) and {}

    def check_all(self, lifecycle: _AgentLister) -> list[HealthEvent]:
        """Run one round of checks over every listed agent."""
        events: list[HealthEvent] = []
        agents = lifecycle.list_agents()

        for agent_id, role, status in agents:
            state = self._states.get(agent_id)
            if state is None:
                state = _AgentHealthState(last_check=self._clock())
                self._states[agent_id] = state
            if state.marked_dead:
                continue
            now = self._clock()
            if now - state.last_check < self.config.interval:
                continue
            state.last_check = now

            if status.kind is StatusKind.ERROR:
                state.consecutive_failures += 1
                if state.consecutive_failures >= self.config.dead_threshold:
                    state.marked_dead = True
                    events.append(AgentDead(agent_id, role, status.message))
                elif state.consecutive_failures >= self.config.failure_threshold:
                    events.append(AgentRestart(agent_id, role, state.consecutive_failures))
            elif status.kind is StatusKind.STOPPED:
                state.marked_dead = True
                events.append(AgentStopped(agent_id, role))
            else:
                state.consecutive_failures = 0

        active = {agent_id for agent_id, _, _ in agents}
        self._states = {k: v for k, v in self._states.items() if k in active}
        return events

    def remove(self, agent_id: str) -> None:
        """Forget the tracking state of an agent."""
        self._states.pop(agent_id, None)