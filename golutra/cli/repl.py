"""The interactive read-eval-print loop of the command line."""

from __future__ import annotations

import queue
import sys
import threading
from typing import Optional, TextIO

from golutra.agent_runtime.health import AgentDead, AgentRestart, AgentStopped
from golutra.agent_runtime.interface import AgentError
from golutra.agent_runtime.lifecycle import AgentLifecycle
from golutra.cli import commands
from golutra.cli.commands import CommandKind
from golutra.cli.events import CliEventEmitter
from golutra.cli.renderer import Renderer
from golutra.memory.shared import SharedMemory
from golutra.memory.store import MemoryStoreError
from golutra.openclaw.coordinator import OpenClaw

_PROMPT = "\x1b[32mgolutra>\x1b[0m "
_CLEAR_LINE = "\r\x1b[K"
_POLL_SECONDS = 0.05
_EOF = object()

_HELP_LINES = (
    "",
    "命令:",
    "  <任务描述>              直接输入任务，OpenClaw 自动编排执行",
    "  /agents                 列出活跃 Agent",
    "  /status <id>            查看 Agent 状态",
    "  /kill <id>              终止 Agent",
    "  /output <agent_id>      查看 Agent 最近输出",
    "  /tasks                  查看当前任务状态",
    "  /send <id> <message>    手动向 Agent 发送消息",
    "  /templates              列出可用 Agent 模板",
    "  /channels               列出协作频道",
    "  /memory <query>         搜索共享记忆",
    "  /remember <key> <value> 手动写入记忆",
    "  /history                查看执行历史",
    "  /help                   显示帮助",
    "  /quit                   退出",
    "",
)

_BANNER_LINES = (
    "",
    "  \x1b[1;36mgolutra\x1b[0m — AI Agent 协作引擎",
    "  输入任务指令开始，/help 查看命令",
    "",
)


def truncate(text: str, max_len: int) -> str:
    """The text cut to ``max_len`` characters, with "..." when it was longer."""
    if len(text) <= max_len:
        return text
    return f"{text[:max_len]}..."


class Repl:
    """Reads commands, runs them, and shows agent output and health events as they arrive."""

    def __init__(
        self,
        lifecycle: AgentLifecycle,
        memory: SharedMemory,
        cwd: Optional[str] = None,
        stream: Optional[TextIO] = None,
    ) -> None:
        self._stream = stream
        self._openclaw = OpenClaw(lifecycle, memory, cwd)
        self._renderer = Renderer(stream)
        self._events = CliEventEmitter(stream)
        self._memory = memory

    @property
    def _out(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def _line(self, text: str = "") -> None:
        print(text, file=self._out)

    def _write(self, text: str) -> None:
        out = self._out
        out.write(text)
        out.flush()

    def run(self, input_stream: Optional[TextIO] = None) -> None:
        """Run until the user quits or the input ends."""
        source = input_stream if input_stream is not None else sys.stdin
        self._print_banner()

        lines: "queue.Queue[object]" = queue.Queue()

        def read_lines() -> None:
            try:
                for line in iter(source.readline, ""):
                    lines.put(line)
            except (OSError, ValueError):
                pass
            lines.put(_EOF)

        threading.Thread(target=read_lines, name="repl-stdin", daemon=True).start()

        need_prompt = True
        while True:
            if need_prompt:
                self._write(_PROMPT)
                need_prompt = False

            try:
                line = lines.get(timeout=_POLL_SECONDS)
            except queue.Empty:
                line = None
            if line is _EOF:
                break
            if isinstance(line, str):
                if self.handle_input(line):
                    break
                need_prompt = True

            outputs = self._openclaw.poll_outputs()
            if outputs:
                if not need_prompt:
                    self._write(_CLEAR_LINE)
                for agent_id, _task_id, chunk in outputs:
                    self._renderer.agent_output(agent_id, chunk)
                need_prompt = True

            for event in self._openclaw.poll_health_events():
                if not need_prompt:
                    self._write(_CLEAR_LINE)
                if isinstance(event, AgentRestart):
                    self._line(
                        f"[!] Agent {event.agent_id} ({event.role}) 重启中 (第 {event.attempt} 次)"
                    )
                elif isinstance(event, AgentDead):
                    self._line(f"[✗] Agent {event.agent_id} ({event.role}) 已死亡: {event.reason}")
                elif isinstance(event, AgentStopped):
                    self._line(f"[·] Agent {event.agent_id} ({event.role}) 已停止")
                need_prompt = True

    def handle_input(self, line: str) -> bool:
        """Run one input line; return True when the loop should end."""
        command = commands.parse(line)
        kind = command.kind
        if kind is CommandKind.EXECUTE:
            self._handle_execute(command.arg)
        elif kind is CommandKind.LIST_AGENTS:
            self._handle_list_agents()
        elif kind is CommandKind.AGENT_STATUS:
            self._handle_agent_status(command.arg)
        elif kind is CommandKind.KILL_AGENT:
            self._handle_kill_agent(command.arg)
        elif kind is CommandKind.LIST_TEMPLATES:
            self._handle_list_templates()
        elif kind is CommandKind.LIST_CHANNELS:
            self._handle_list_channels()
        elif kind is CommandKind.SEARCH_MEMORY:
            self._handle_search_memory(command.arg)
        elif kind is CommandKind.AGENT_OUTPUT:
            self._handle_agent_output(command.arg)
        elif kind is CommandKind.TASKS:
            self._handle_tasks()
        elif kind is CommandKind.SEND_MESSAGE:
            self._handle_send(*command.args)
        elif kind is CommandKind.REMEMBER:
            self._handle_remember(*command.args)
        elif kind is CommandKind.HISTORY:
            self._handle_history()
        elif kind is CommandKind.HELP:
            self._print_help()
        elif kind is CommandKind.QUIT:
            self._events.info("正在关闭...")
            try:
                self._openclaw.shutdown()
            except AgentError:
                pass
            return True
        elif command.arg:
            self._events.error(command.arg)
        return False

    def _handle_execute(self, instruction: str) -> None:
        try:
            report = self._openclaw.execute(instruction)
        except (AgentError, LookupError, MemoryStoreError) as exc:
            self._events.error(str(exc))
            return
        self._events.plan_created(report.plan_id, report.task_count, report.agent_count)
        for task_id, agent_id in report.assignments:
            self._events.task_assigned(task_id, agent_id)
        if report.channel_id is not None:
            self._events.channel_created(report.channel_id, report.agent_count)
        self._renderer.report_summary(
            report.plan_id, report.task_count, report.agent_count, report.channel_id
        )

    def _handle_list_agents(self) -> None:
        agents = self._openclaw.lifecycle().list_agents()
        if not agents:
            self._line("(无活跃 Agent)")
            return
        self._renderer.agent_list(
            [(agent_id, role, str(status)) for agent_id, role, status in agents]
        )

    def _handle_agent_status(self, agent_id: str) -> None:
        try:
            status = self._openclaw.lifecycle().agent_status(agent_id)
        except AgentError as exc:
            self._events.error(str(exc))
            return
        self._line(f"  Agent {agent_id} — {status}")

    def _handle_kill_agent(self, agent_id: str) -> None:
        try:
            self._openclaw.lifecycle().kill_agent(agent_id)
        except AgentError as exc:
            self._events.error(str(exc))
            return
        self._line(f"  Agent {agent_id} 已终止")

    def _handle_list_templates(self) -> None:
        for template in self._openclaw.factory().list_templates():
            self._line(f"  {template.id} — {template.role} [{template.preferred_tool}]")

    def _handle_list_channels(self) -> None:
        channels = self._openclaw.router().list_channels()
        if not channels:
            self._line("(无活跃频道)")
            return
        for channel in channels:
            self._line(f"  {channel.id} — {channel.name} ({len(channel.members)} 成员)")

    def _handle_search_memory(self, query: str) -> None:
        results = self._memory.search(query, 10)
        if not results:
            self._line("(无匹配记忆)")
            return
        for key in results:
            self._line(f"  {key}")

    def _handle_agent_output(self, agent_id: str) -> None:
        output = self._openclaw.agent_output(agent_id)
        if not output:
            self._line(f"(Agent {agent_id} 无输出)")
            return
        self._renderer.separator()
        self._line(f"Agent {agent_id} 输出:")
        self._line(output)
        self._renderer.separator()

    def _handle_tasks(self) -> None:
        states = self._openclaw.task_states()
        if not states:
            self._line("(无任务)")
            return
        for task_id, state in states:
            self._line(f"  {task_id} — {state}")

    def _handle_send(self, agent_id: str, message: str) -> None:
        try:
            self._openclaw.send_to_agent(agent_id, message)
        except AgentError as exc:
            self._events.error(str(exc))
            return
        self._line(f"  消息已发送至 {agent_id}")

    def _handle_remember(self, key: str, value: str) -> None:
        try:
            self._openclaw.remember(key, value)
        except MemoryStoreError as exc:
            self._events.error(str(exc))
            return
        self._line(f"  已记忆: {key} = {value}")

    def _handle_history(self) -> None:
        records = self._openclaw.history().list_recent(10)
        if not records:
            self._line("(无执行历史)")
            return
        self._renderer.separator()
        for record in records:
            status = "完成" if record.finished_at is not None else "进行中"
            self._line(
                f"  {record.plan_id} — {record.task_count} 个任务, "
                f"{record.agent_count} 个 Agent [{status}]"
            )
            self._line(f"    指令: {truncate(record.instruction, 60)}")
        self._renderer.separator()

    def _print_banner(self) -> None:
        for text in _BANNER_LINES:
            self._line(text)

    def _print_help(self) -> None:
        for text in _HELP_LINES:
            self._line(text)