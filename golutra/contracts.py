"""Agent data structures and messages shared across the runtime."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Union

AgentId = str


@dataclass
class AgentCapabilities:
    """What an agent can do; used by the planner to pick agents."""

    languages: list[str] = field(default_factory=list)
    skills: list[str] = field(default_factory=list)
    long_running: bool = False
    max_concurrent_tasks: int = 1


class StatusKind(enum.Enum):
    """The lifecycle stage of an agent."""

    PENDING = "Pending"
    STARTING = "Starting"
    IDLE = "Idle"
    BUSY = "Busy"
    ERROR = "Error"
    STOPPED = "Stopped"


@dataclass(frozen=True)
class AgentStatus:
    """Runtime status of an agent, with the task or error it carries."""

    kind: StatusKind
    task_id: str = ""
    message: str = ""

    @classmethod
    def busy(cls, task_id: str) -> "AgentStatus":
        return cls(StatusKind.BUSY, task_id=task_id)

    @classmethod
    def error(cls, message: str) -> "AgentStatus":
        return cls(StatusKind.ERROR, message=message)

    def __str__(self) -> str:
        if self.kind is StatusKind.BUSY:
            return f'Busy {{ task_id: "{self.task_id}" }}'
        if self.kind is StatusKind.ERROR:
            return f'Error {{ message: "{self.message}" }}'
        return self.kind.value


class MemoryScope(enum.Enum):
    """Which agents may see a memory entry."""

    PRIVATE = "Private"
    TASK = "Task"
    GLOBAL = "Global"

    @property
    def tag(self) -> str:
        """Short prefix used in storage keys."""
        return _SCOPE_TAGS[self]


_SCOPE_TAGS = {
    MemoryScope.PRIVATE: "priv",
    MemoryScope.TASK: "task",
    MemoryScope.GLOBAL: "glob",
}


@dataclass
class AgentConfig:
    """Everything needed to start one agent."""

    id: AgentId
    role: str
    tool_type: str
    command: Optional[str] = None
    cwd: Optional[str] = None
    system_prompt: Optional[str] = None
    capabilities: AgentCapabilities = field(default_factory=AgentCapabilities)
    unlimited_access: bool = False
    memory_scope: MemoryScope = MemoryScope.TASK


@dataclass
class ContextItem:
    """A piece of context attached to a task."""

    kind: str
    content: str
    source: Optional[str] = None


@dataclass
class Artifact:
    """Something a task produced: a file change, a log, a metric."""

    kind: str
    content: str
    path: Optional[str] = None


@dataclass
class TaskMessage:
    id: str
    instruction: str
    context: list[ContextItem] = field(default_factory=list)


@dataclass
class ResultMessage:
    task_id: str
    output: str
    artifacts: list[Artifact] = field(default_factory=list)


@dataclass
class ProgressMessage:
    task_id: str
    percent: float
    detail: str


@dataclass
class ErrorMessage:
    task_id: str
    code: str
    message: str


@dataclass
class MemoryMessage:
    key: str
    value: str
    scope: MemoryScope


@dataclass
class BroadcastMessage:
    channel_id: str
    sender_id: AgentId
    content: str


AgentMessage = Union[
    TaskMessage,
    ResultMessage,
    ProgressMessage,
    ErrorMessage,
    MemoryMessage,
    BroadcastMessage,
]


class ChannelKind(enum.Enum):
    TASK = "Task"
    PERSISTENT = "Persistent"
    BROADCAST = "Broadcast"


@dataclass(frozen=True)
class ChannelType:
    """Kind of a channel; task channels carry their task id."""

    kind: ChannelKind
    task_id: Optional[str] = None

    @classmethod
    def task(cls, task_id: str) -> "ChannelType":
        return cls(ChannelKind.TASK, task_id=task_id)


@dataclass
class Channel:
    id: str
    name: str
    members: list[AgentId]
    channel_type: ChannelType


@dataclass
class TaskNode:
    id: str
    instruction: str
    required_role: str
    preferred_tool: Optional[str] = None
    complexity: int = 1
    context_keys: list[str] = field(default_factory=list)


@dataclass
class ExecutionPlan:
    """Tasks and their dependencies as (task_id, depends_on) pairs."""

    id: str
    tasks: list[TaskNode] = field(default_factory=list)
    dependencies: list[tuple[str, str]] = field(default_factory=list)