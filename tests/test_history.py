import time

from golutra.openclaw.history import ExecutionHistory, TaskResult


def start(history, plan_id, instruction="do"):
    history.record_start(plan_id, instruction, 2, 1, [("task-0", "a1")])


def test_record_start_and_get():
    history = ExecutionHistory()
    before = int(time.time())
    start(history, "p1", "build it")
    record = history.get("p1")
    assert record.plan_id == "p1"
    assert record.instruction == "build it"
    assert record.task_count == 2
    assert record.agent_count == 1
    assert record.assignments == [("task-0", "a1")]
    assert record.task_results == {}
    assert record.finished_at is None
    assert before <= record.started_at <= int(time.time())


def test_get_unknown_is_none():
    assert ExecutionHistory().get("missing") is None


def test_record_finish_sets_timestamp():
    history = ExecutionHistory()
    start(history, "p1")
    history.record_finish("p1")
    record = history.get("p1")
    assert record.finished_at is not None
    assert record.finished_at >= record.started_at


def test_record_task_result():
    history = ExecutionHistory()
    start(history, "p1")
    result = TaskResult(task_id="task-0", agent_id="a1", output="ok", success=True)
    history.record_task_result("p1", result)
    assert history.get("p1").task_results == {"task-0": result}


def test_updates_for_unknown_plan_are_ignored():
    history = ExecutionHistory()
    start(history, "p1")
    history.record_finish("other")
    history.record_task_result("other", TaskResult("t", "a", "o", False))
    record = history.get("p1")
    assert record.finished_at is None
    assert record.task_results == {}


def test_list_recent_newest_first_and_limited():
    history = ExecutionHistory()
    for plan_id in ("p1", "p2", "p3"):
        start(history, plan_id)
    assert [r.plan_id for r in history.list_recent(10)] == ["p3", "p2", "p1"]
    assert [r.plan_id for r in history.list_recent(2)] == ["p3", "p2"]
    assert history.list_recent(0) == []


def test_updates_hit_latest_duplicate_and_get_returns_first():
    history = ExecutionHistory()
    start(history, "p1", "first")
    start(history, "p1", "second")
    history.record_finish("p1")
    newest, oldest = history.list_recent(2)
    assert newest.instruction == "second"
    assert newest.finished_at is not None
    assert oldest.finished_at is None
    assert history.get("p1").instruction == "first"


def test_returned_records_are_copies():
    history = ExecutionHistory()
    start(history, "p1")
    record = history.get("p1")
    record.assignments.append(("x", "y"))
    record.task_results["x"] = TaskResult("x", "y", "z", True)
    fresh = history.get("p1")
    assert fresh.assignments == [("task-0", "a1")]
    assert fresh.task_results == {}