"""Formatting of agent output, progress and summaries for the terminal."""

from __future__ import annotations

import sys
from typing import Optional, Sequence, TextIO

_BAR_WIDTH = 20
_RULE = "─" * 60


class Renderer:
    """Writes formatted output to a stream, coloured when it is a terminal."""

    def __init__(self, stream: Optional[TextIO] = None, use_color: Optional[bool] = None) -> None:
        self._stream = stream
        if use_color is None:
            target = stream if stream is not None else sys.stderr
            isatty = getattr(target, "isatty", None)
            use_color = bool(isatty()) if callable(isatty) else False
        self.use_color = use_color

    @property
    def _out(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def _line(self, text: str = "") -> None:
        print(text, file=self._out)

    def agent_output(self, agent_id: str, content: str) -> None:
        if self.use_color:
            prefix = f"\x1b[36m[{agent_id}]\x1b[0m "
        else:
            prefix = f"[{agent_id}] "
        self._line(prefix + content)

    def progress(self, task_id: str, percent: float, detail: str) -> None:
        """Redraw a progress bar on the current line."""
        filled = min(max(int(percent / 100.0 * _BAR_WIDTH), 0), _BAR_WIDTH)
        bar = f"[{'█' * filled}{'░' * (_BAR_WIDTH - filled)}] {percent:.0f}%"
        if self.use_color:
            text = f"\x1b[33m{task_id}\x1b[0m {bar} {detail}\r"
        else:
            text = f"{task_id} {bar} {detail}\r"
        out = self._out
        out.write(text)
        out.flush()

    def separator(self) -> None:
        self._line(_RULE)

    def report_summary(
        self,
        plan_id: str,
        task_count: int,
        agent_count: int,
        channel_id: Optional[str] = None,
    ) -> None:
        self.separator()
        self._line(f"执行计划: {plan_id}")
        self._line(f"任务数: {task_count}  Agent 数: {agent_count}")
        if channel_id is not None:
            self._line(f"协作频道: {channel_id}")
        self.separator()

    def agent_list(self, agents: Sequence[tuple[str, str, str]]) -> None:
        """One line per (id, role, status), or a note when there are none."""
        if not agents:
            self._line("(无活跃 Agent)")
            return
        for agent_id, role, status in agents:
            self._line(f"  {agent_id} — {role} [{status}]")