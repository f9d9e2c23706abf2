import pytest

from golutra.contracts import ExecutionPlan, TaskNode
from golutra.openclaw.planner import (
    assess,
    build_dependencies,
    decompose,
    estimate_complexity,
    infer_role,
    plan,
)


def _node(task_id, role, complexity=1):
    return TaskNode(id=task_id, instruction=task_id, required_role=role, complexity=complexity)


def test_single_line_is_one_general_task():
    tasks = decompose("fix the login bug")
    assert len(tasks) == 1
    assert tasks[0].id == "task-0"
    assert tasks[0].instruction == "fix the login bug"
    assert tasks[0].required_role == "general"


def test_multiple_lines_become_tasks_with_roles():
    tasks = decompose("write tests\n\n  review code  \r\nrefactor module")
    assert [t.id for t in tasks] == ["task-0", "task-1", "task-2"]
    assert [t.instruction for t in tasks] == ["write tests", "review code", "refactor module"]
    assert [t.required_role for t in tasks] == ["tester", "reviewer", "refactor"]


@pytest.mark.parametrize(
    "text, role",
    [
        ("run the test suite", "tester"),
        ("编写测试", "tester"),
        ("Review the PR", "reviewer"),
        ("refactor parser", "refactor"),
        ("deploy to staging", "devops"),
        ("set up devops pipeline", "devops"),
        ("audit dependencies", "auditor"),
        ("write docs", "general"),
    ],
)
def test_infer_role(text, role):
    assert infer_role(text) == role


def test_infer_role_prefers_earlier_rule():
    assert infer_role("test and review") == "tester"


def test_estimate_complexity_short_text():
    assert estimate_complexity("hello") == 2


def test_estimate_complexity_grows_with_length_and_keywords():
    short = estimate_complexity("x" * 10)
    long = estimate_complexity("x" * 300)
    assert long > short
    assert estimate_complexity("refactor") > estimate_complexity("xxxxxxxx")


def test_estimate_complexity_is_capped():
    text = " ".join(["refactor migrate architecture security audit performance"] * 20)
    assert estimate_complexity(text) <= 10
    assert estimate_complexity(text) >= estimate_complexity("refactor")


def test_same_role_has_no_dependencies():
    tasks = [_node("a", "general"), _node("b", "general"), _node("c", "general")]
    assert build_dependencies(tasks) == []
    assert build_dependencies(tasks[:1]) == []


def test_later_group_depends_on_last_of_previous_group():
    tasks = [_node("a", "general"), _node("b", "general"), _node("c", "tester")]
    assert build_dependencies(tasks) == [("c", "b")]


def test_groups_ordered_by_first_appearance():
    tasks = [_node("t0", "general"), _node("t1", "tester"), _node("t2", "general")]
    assert build_dependencies(tasks) == [("t1", "t2")]


def test_chain_of_three_groups():
    tasks = [_node("x", "general"), _node("y", "tester"), _node("z", "reviewer")]
    assert build_dependencies(tasks) == [("y", "x"), ("z", "y")]


def test_plan_ids_are_unique_and_prefixed():
    tasks = [_node("a", "general"), _node("b", "tester")]
    first = plan(tasks)
    second = plan(list(tasks))
    assert first.id.startswith("plan-")
    assert first.id != second.id
    assert first.dependencies == build_dependencies(tasks)
    assert first.tasks == tasks


def test_assess_all_parallel():
    p = ExecutionPlan(id="p", tasks=[_node("a", "g", 3), _node("b", "g", 7), _node("c", "g", 2)])
    result = assess(p)
    assert result.score == 7
    assert result.parallel_groups == [["a", "b", "c"]]
    assert result.needs_channel is True


def test_assess_small_simple_plan_needs_no_channel():
    tasks = [_node("a", "g", 2), _node("b", "h", 2)]
    p = ExecutionPlan(id="p", tasks=tasks, dependencies=build_dependencies(tasks))
    result = assess(p)
    assert result.needs_channel is False
    assert result.parallel_groups == []


def test_assess_high_complexity_needs_channel():
    p = ExecutionPlan(id="p", tasks=[_node("a", "g", 9)])
    assert assess(p).needs_channel is True


def test_assess_empty_plan():
    result = assess(ExecutionPlan(id="p"))
    assert result.score == 1
    assert result.parallel_groups == []


def test_suggested_agents_never_decrease():
    counts = [
        assess(ExecutionPlan(id="p", tasks=[_node(f"t{i}", "g") for i in range(n)])).suggested_agent_count
        for n in range(0, 10)
    ]
    assert counts == sorted(counts)
    assert counts[0] >= 1