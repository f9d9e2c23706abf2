"""Creation, monitoring, restart and removal of running agents."""

from __future__ import annotations

import threading
from dataclasses import dataclass

from golutra.agent_runtime.interface import AgentError, AgentHandle, AgentInterface
from golutra.contracts import AgentConfig, AgentMessage, AgentStatus


@dataclass
class _LiveAgent:
    config: AgentConfig
    handle: AgentHandle
    adapter: AgentInterface
    restart_count: int = 0


class AgentLifecycle:
    """Keeps every live agent together with the adapter that drives it."""

    def __init__(self, max_restarts: int = 3) -> None:
        self.max_restarts = max_restarts
        self._agents: dict[str, _LiveAgent] = {}
        self._adapters: dict[str, AgentInterface] = {}
        self._agents_lock = threading.Lock()
        self._adapters_lock = threading.Lock()

    def register_adapter(self, adapter: AgentInterface) -> None:
        """Make an adapter available for its tool type, replacing any earlier one."""
        with self._adapters_lock:
            self._adapters[adapter.tool_type()] = adapter

    def spawn_agent(self, config: AgentConfig) -> str:
        """Start an agent with the adapter for its tool type and return its id."""
        with self._adapters_lock:
            adapter = self._adapters.get(config.tool_type)
        if adapter is None:
            raise AgentError(f"no adapter for tool_type: {config.tool_type}")
        handle = adapter.spawn(config)
        with self._agents_lock:
            self._agents[config.id] = _LiveAgent(config, handle, adapter)
        return config.id

    def _live(self, agent_id: str) -> _LiveAgent:
        live = self._agents.get(agent_id)
        if live is None:
            raise AgentError(f"agent not found: {agent_id}")
        return live

    def send_message(self, agent_id: str, message: AgentMessage) -> None:
        with self._agents_lock:
            live = self._live(agent_id)
            live.adapter.send(live.handle, message)

    def agent_status(self, agent_id: str) -> AgentStatus:
        with self._agents_lock:
            live = self._live(agent_id)
            return live.adapter.status(live.handle)

    def list_agents(self) -> list[tuple[str, str, AgentStatus]]:
        """(id, role, status) of every live agent."""
        with self._agents_lock:
            return [
                (agent_id, live.config.role, live.adapter.status(live.handle))
                for agent_id, live in self._agents.items()
            ]

    def kill_agent(self, agent_id: str) -> None:
        """Remove an agent and stop its process."""
        with self._agents_lock:
            live = self._agents.pop(agent_id, None)
            if live is None:
                raise AgentError(f"agent not found: {agent_id}")
            live.adapter.shutdown(live.handle)

    def restart_agent(self, agent_id: str) -> None:
        """Stop and start an agent again, up to ``max_restarts`` times."""
        with self._agents_lock:
            live = self._live(agent_id)
            if live.restart_count >= self.max_restarts:
                raise AgentError(
                    f"agent {agent_id} exceeded max restarts ({self.max_restarts})"
                )
            try:
                live.adapter.shutdown(live.handle)
            except AgentError:
                pass
            live.handle = live.adapter.spawn(live.config)
            live.restart_count += 1

    def poll_agent_output(self, agent_id: str) -> list[AgentMessage]:
        """Pending messages of one agent; empty if the agent is unknown."""
        with self._agents_lock:
            live = self._agents.get(agent_id)
            return [] if live is None else live.handle.drain()

    def poll_all_outputs(self) -> list[tuple[str, AgentMessage]]:
        """Pending messages of all agents, tagged with the agent id."""
        with self._agents_lock:
            return [
                (agent_id, message)
                for agent_id, live in self._agents.items()
                for message in live.handle.drain()
            ]

    def shutdown_all(self) -> None:
        """Stop every agent; raise one AgentError naming all that failed."""
        with self._agents_lock:
            agents = list(self._agents.items())
            self._agents.clear()
            errors = []
            for agent_id, live in agents:
                try:
                    live.adapter.shutdown(live.handle)
                except AgentError as exc:
                    errors.append(f"{agent_id}: {exc}")
        if errors:
            raise AgentError("; ".join(errors))