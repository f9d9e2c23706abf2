"""Task planning: splitting instructions into tasks and ordering them."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass, field

from golutra.contracts import ExecutionPlan, TaskNode

_CROCKFORD = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"

_COMPLEXITY_KEYWORDS = (
    "refactor", "重构", "migrate", "迁移", "architecture", "架构",
    "security", "安全", "audit", "审计", "performance", "性能",
)

_ROLE_RULES = (
    (("test", "测试"), "tester"),
    (("review", "审查"), "reviewer"),
    (("refactor", "重构"), "refactor"),
    (("deploy", "部署", "devops"), "devops"),
    (("audit", "审计"), "auditor"),
)


def _ulid() -> str:
    """A lexicographically sortable unique id: 48-bit milliseconds, 80 random bits."""
    value = (int(time.time() * 1000) << 80) | int.from_bytes(os.urandom(10), "big")
    return "".join(_CROCKFORD[(value >> shift) & 0x1F] for shift in range(125, -1, -5))


@dataclass
class ComplexityAssessment:
    """Overall difficulty of a plan and how to staff it."""

    score: int
    suggested_agent_count: int
    needs_channel: bool
    parallel_groups: list[list[str]] = field(default_factory=list)


def estimate_complexity(instruction: str) -> int:
    """Rough 1-10 difficulty from the instruction's length and keywords."""
    length = len(instruction.encode("utf-8"))
    lower = instruction.lower()
    hits = sum(1 for keyword in _COMPLEXITY_KEYWORDS if keyword in lower)
    if length <= 50:
        base = 2
    elif length <= 200:
        base = 4
    elif length <= 500:
        base = 6
    else:
        base = 8
    return min(base + hits, 10)


def infer_role(instruction: str) -> str:
    """Guess the role a task needs from its wording."""
    lower = instruction.lower()
    for words, role in _ROLE_RULES:
        if any(word in lower for word in words):
            return role
    return "general"


def decompose(instruction: str) -> list[TaskNode]:
    """Split an instruction into one task per non-empty line."""
    lines = [line.strip() for line in instruction.split("\n")]
    lines = [line for line in lines if line]

    if len(lines) <= 1:
        return [
            TaskNode(
                id="task-0",
                instruction=instruction,
                required_role="general",
                preferred_tool=None,
                complexity=estimate_complexity(instruction),
            )
        ]

    return [
        TaskNode(
            id=f"task-{i}",
            instruction=line,
            required_role=infer_role(line),
            preferred_tool=None,
            complexity=estimate_complexity(line),
        )
        for i, line in enumerate(lines)
    ]


def build_dependencies(tasks: list[TaskNode]) -> list[tuple[str, str]]:
    """Dependencies between role groups, as (task_id, depends_on) pairs.

    Tasks of one role run in parallel; every task of a role group depends on
    the last task of the group whose role first appeared just before it.
    """
    if len(tasks) <= 1:
        return []

    groups: dict[str, list[int]] = {}
    for i, task in enumerate(tasks):
        groups.setdefault(task.required_role, []).append(i)

    if len(groups) == 1:
        return []

    ordered = list(groups.values())
    deps: list[tuple[str, str]] = []
    for prev, curr in zip(ordered, ordered[1:]):
        last_prev = tasks[prev[-1]].id
        deps.extend((tasks[i].id, last_prev) for i in curr)
    return deps


def plan(tasks: list[TaskNode]) -> ExecutionPlan:
    """An execution plan with a fresh id and derived dependencies."""
    return ExecutionPlan(
        id=f"plan-{_ulid()}",
        tasks=tasks,
        dependencies=build_dependencies(tasks),
    )


def assess(execution_plan: ExecutionPlan) -> ComplexityAssessment:
    """Score a plan and suggest team size and collaboration needs."""
    max_complexity = max((t.complexity for t in execution_plan.tasks), default=1)
    total = len(execution_plan.tasks)

    if total <= 1:
        suggested = 1
    elif total <= 3:
        suggested = 2
    elif total <= 6:
        suggested = 3
    else:
        suggested = 4

    targets = {target for target, _ in execution_plan.dependencies}
    independent = [t.id for t in execution_plan.tasks if t.id not in targets]

    return ComplexityAssessment(
        score=max_complexity,
        suggested_agent_count=suggested,
        needs_channel=total > 2 or max_complexity > 5,
        parallel_groups=[independent] if len(independent) > 1 else [],
    )