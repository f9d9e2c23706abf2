"""Terminal notices about agents, tasks, plans and channels."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from golutra.contracts import AgentStatus, StatusKind

_STATUS_TAGS = {
    StatusKind.IDLE: "空闲",
    StatusKind.STOPPED: "已停止",
    StatusKind.PENDING: "等待中",
    StatusKind.STARTING: "启动中",
}


class CliEventEmitter:
    """Writes one-line event notices to a stream (standard error by default)."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    def _emit(self, line: str) -> None:
        print(line, file=self._stream if self._stream is not None else sys.stderr)

    def agent_spawned(self, agent_id: str, role: str) -> None:
        self._emit(f"[+] Agent 启动: {agent_id} ({role})")

    def agent_status_changed(self, agent_id: str, status: AgentStatus) -> None:
        if status.kind is StatusKind.BUSY:
            self._emit(f"[~] {agent_id} 执行中: {status.task_id}")
        elif status.kind is StatusKind.ERROR:
            self._emit(f"[!] {agent_id} 异常: {status.message}")
        else:
            self._emit(f"[·] {agent_id} → {_STATUS_TAGS[status.kind]}")

    def task_assigned(self, task_id: str, agent_id: str) -> None:
        self._emit(f"[→] 任务 {task_id} → {agent_id}")

    def task_completed(self, task_id: str, agent_id: str) -> None:
        self._emit(f"[✓] 任务 {task_id} 完成 ({agent_id})")

    def plan_created(self, plan_id: str, task_count: int, agent_count: int) -> None:
        self._emit(f"[▶] 执行计划 {plan_id} — {task_count} 个任务, {agent_count} 个 Agent")

    def channel_created(self, channel_id: str, member_count: int) -> None:
        self._emit(f"[#] 频道 {channel_id} ({member_count} 成员)")

    def error(self, msg: str) -> None:
        self._emit(f"[✗] {msg}")

    def info(self, msg: str) -> None:
        self._emit(f"[i] {msg}")