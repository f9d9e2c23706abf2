"""Creation of agent configurations from templates."""

from __future__ import annotations

import copy
import itertools
import threading
from typing import Optional

from golutra.contracts import AgentCapabilities, AgentConfig, MemoryScope
from golutra.openclaw.templates import AgentTemplate, builtin_templates


class AgentFactory:
    """Builds AgentConfig objects with unique ids from known templates."""

    def __init__(self) -> None:
        self._templates: list[AgentTemplate] = builtin_templates()
        self._counter = itertools.count()
        self._counter_lock = threading.Lock()

    def _next_seq(self) -> int:
        with self._counter_lock:
            return next(self._counter)

    def create_from_template(
        self, template_id: str, cwd: Optional[str] = None
    ) -> AgentConfig:
        """Config for a new agent of the given template; LookupError if unknown."""
        template = next((t for t in self._templates if t.id == template_id), None)
        if template is None:
            raise LookupError(f"template not found: {template_id}")
        return AgentConfig(
            id=f"{template.id}-{self._next_seq()}",
            role=template.role,
            tool_type=template.preferred_tool,
            command=None,
            cwd=cwd,
            system_prompt=template.system_prompt,
            capabilities=copy.deepcopy(template.capabilities),
            unlimited_access=template.unlimited_access,
            memory_scope=template.default_memory_scope,
        )

    def auto_select(
        self, required_role: str, preferred_tool: Optional[str] = None
    ) -> Optional[AgentTemplate]:
        """Best template by exact role, then by skill, then by preferred tool."""
        for template in self._templates:
            if template.role == required_role:
                return template
        for template in self._templates:
            if required_role in template.capabilities.skills:
                return template
        if preferred_tool is not None:
            return next(
                (t for t in self._templates if t.preferred_tool == preferred_tool),
                None,
            )
        return None

    def create_custom(
        self,
        role: str,
        tool_type: str,
        system_prompt: Optional[str],
        capabilities: AgentCapabilities,
        cwd: Optional[str] = None,
    ) -> AgentConfig:
        """Config for an agent described directly, without a template."""
        return AgentConfig(
            id=f"custom-{self._next_seq()}",
            role=role,
            tool_type=tool_type,
            command=None,
            cwd=cwd,
            system_prompt=system_prompt,
            capabilities=capabilities,
            unlimited_access=False,
            memory_scope=MemoryScope.TASK,
        )

    def list_templates(self) -> list[AgentTemplate]:
        return list(self._templates)

    def register_template(self, template: AgentTemplate) -> None:
        self._templates.append(template)