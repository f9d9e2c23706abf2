"""Parsing of lines typed at the interactive prompt."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class CommandKind(enum.Enum):
    EXECUTE = "execute"
    LIST_AGENTS = "list_agents"
    AGENT_STATUS = "agent_status"
    KILL_AGENT = "kill_agent"
    LIST_TEMPLATES = "list_templates"
    LIST_CHANNELS = "list_channels"
    SEARCH_MEMORY = "search_memory"
    AGENT_OUTPUT = "agent_output"
    TASKS = "tasks"
    SEND_MESSAGE = "send_message"
    REMEMBER = "remember"
    HISTORY = "history"
    HELP = "help"
    QUIT = "quit"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Command:
    """A parsed command and its arguments; UNKNOWN carries a message to show."""

    kind: CommandKind
    args: tuple[str, ...] = ()

    @property
    def arg(self) -> str:
        """The first argument, or an empty string."""
        return self.args[0] if self.args else ""


_SIMPLE = {
    "/agents": CommandKind.LIST_AGENTS,
    "/ls": CommandKind.LIST_AGENTS,
    "/templates": CommandKind.LIST_TEMPLATES,
    "/channels": CommandKind.LIST_CHANNELS,
    "/tasks": CommandKind.TASKS,
    "/history": CommandKind.HISTORY,
    "/help": CommandKind.HELP,
    "/?": CommandKind.HELP,
    "/quit": CommandKind.QUIT,
    "/exit": CommandKind.QUIT,
    "/q": CommandKind.QUIT,
}

_WITH_ARG = {
    "/kill": (CommandKind.KILL_AGENT, "用法: /kill <agent_id>"),
    "/memory": (CommandKind.SEARCH_MEMORY, "用法: /memory <query>"),
    "/search": (CommandKind.SEARCH_MEMORY, "用法: /memory <query>"),
    "/output": (CommandKind.AGENT_OUTPUT, "用法: /output <agent_id>"),
}

_WITH_PAIR = {
    "/send": (CommandKind.SEND_MESSAGE, "用法: /send <agent_id> <message>"),
    "/remember": (CommandKind.REMEMBER, "用法: /remember <key> <value>"),
}


def _unknown(message: str) -> Command:
    return Command(CommandKind.UNKNOWN, (message,))


def parse(text: str) -> Command:
    """Turn one input line into a command; plain text is a task to execute."""
    trimmed = text.strip()
    if not trimmed:
        return _unknown("")
    if not trimmed.startswith("/"):
        return Command(CommandKind.EXECUTE, (trimmed,))

    cmd, _, rest = trimmed.partition(" ")
    arg = rest.strip()

    if cmd in _SIMPLE:
        return Command(_SIMPLE[cmd])
    if cmd == "/status":
        if not arg:
            return Command(CommandKind.LIST_AGENTS)
        return Command(CommandKind.AGENT_STATUS, (arg,))
    if cmd in _WITH_ARG:
        kind, usage = _WITH_ARG[cmd]
        return Command(kind, (arg,)) if arg else _unknown(usage)
    if cmd in _WITH_PAIR:
        kind, usage = _WITH_PAIR[cmd]
        parts = arg.split(" ", 1)
        if len(parts) < 2 or not parts[1].strip():
            return _unknown(usage)
        return Command(kind, (parts[0], parts[1].strip()))
    return _unknown(f"未知命令: {cmd}")