"""The contract every agent tool adapter implements."""

from __future__ import annotations

import queue
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from golutra.contracts import AgentCapabilities, AgentConfig, AgentMessage, AgentStatus


class AgentError(Exception):
    """Raised when an agent cannot be started, reached or stopped."""


@dataclass
class AgentHandle:
    """A running agent and the queue of messages it has produced."""

    id: str
    role: str
    tool_type: str
    alive: bool = True
    _outbox: "queue.SimpleQueue[AgentMessage]" = field(
        default_factory=queue.SimpleQueue, init=False, repr=False, compare=False
    )

    def push(self, message: AgentMessage) -> None:
        """Record a message produced by the agent."""
        self._outbox.put(message)

    def drain(self) -> list[AgentMessage]:
        """Take all pending messages without blocking."""
        messages = []
        while True:
            try:
                messages.append(self._outbox.get_nowait())
            except queue.Empty:
                return messages


class AgentInterface(ABC):
    """An adapter that starts and drives one kind of agent tool."""

    @abstractmethod
    def agent_id(self) -> str:
        """Identifier of the adapter."""

    @abstractmethod
    def capabilities(self) -> AgentCapabilities:
        """What agents of this kind can do."""

    @abstractmethod
    def tool_type(self) -> str:
        """Tool type this adapter serves, as named in AgentConfig.tool_type."""

    @abstractmethod
    def spawn(self, config: AgentConfig) -> AgentHandle:
        """Start an agent; raise AgentError on failure."""

    @abstractmethod
    def send(self, handle: AgentHandle, message: AgentMessage) -> None:
        """Deliver a message to the agent; raise AgentError on failure."""

    @abstractmethod
    def status(self, handle: AgentHandle) -> AgentStatus:
        """Current status of the agent."""

    @abstractmethod
    def shutdown(self, handle: AgentHandle) -> None:
        """Stop the agent; raise AgentError on failure."""