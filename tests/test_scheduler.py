from golutra.contracts import ExecutionPlan, TaskNode
from golutra.openclaw.scheduler import DagScheduler


def _plan(ids, deps=()):
    return ExecutionPlan(
        id="p",
        tasks=[TaskNode(id=i, instruction=i, required_role="g") for i in ids],
        dependencies=list(deps),
    )


def test_independent_tasks_are_all_ready():
    s = DagScheduler(_plan(["a", "b", "c"]))
    assert s.ready_tasks() == ["a", "b", "c"]
    assert s.total_count() == 3
    assert not s.has_in_flight()


def test_dispatched_tasks_leave_ready_list():
    s = DagScheduler(_plan(["a", "b"]))
    s.mark_dispatched("a")
    assert s.ready_tasks() == ["b"]
    assert s.has_in_flight()


def test_chain_releases_in_order():
    s = DagScheduler(_plan(["a", "b"], [("b", "a")]))
    assert s.ready_tasks() == ["a"]
    s.mark_dispatched("a")
    assert s.ready_tasks() == []
    s.complete_task("a")
    assert s.ready_tasks() == ["b"]
    assert not s.has_in_flight()


def test_diamond_waits_for_all_predecessors():
    s = DagScheduler(_plan(["a", "b", "c", "d"], [("b", "a"), ("c", "a"), ("d", "b"), ("d", "c")]))
    s.complete_task("a")
    assert s.ready_tasks() == ["b", "c"]
    s.complete_task("b")
    assert "d" not in s.ready_tasks()
    s.complete_task("c")
    assert s.ready_tasks() == ["d"]


def test_done_after_all_complete():
    ids = ["a", "b", "c"]
    s = DagScheduler(_plan(ids, [("c", "b")]))
    for tid in ids:
        assert not s.is_done()
        s.complete_task(tid)
    assert s.is_done()
    assert s.completed_count() == s.total_count() == len(ids)
    assert s.ready_tasks() == []


def test_dependency_on_unknown_task_keeps_task_blocked():
    s = DagScheduler(_plan(["a", "b"], [("b", "ghost")]))
    assert s.ready_tasks() == ["a"]
    s.complete_task("ghost")
    assert s.ready_tasks() == ["a", "b"]


def test_completion_twice_does_not_go_negative():
    s = DagScheduler(_plan(["a", "b", "c"], [("c", "a"), ("c", "b")]))
    s.complete_task("a")
    s.complete_task("a")
    assert "c" in s.ready_tasks()
    assert s.completed_count() == 1