from golutra.agent_runtime.health import (
    AgentDead,
    AgentRestart,
    AgentStopped,
    HealthCheckConfig,
    HealthChecker,
)
from golutra.contracts import AgentStatus, StatusKind


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class FakeLifecycle:
    def __init__(self):
        self.agents = {}

    def list_agents(self):
        return [(aid, role, status) for aid, (role, status) in self.agents.items()]


IDLE = AgentStatus(StatusKind.IDLE)
STOPPED = AgentStatus(StatusKind.STOPPED)


def test_default_config():
    assert HealthCheckConfig() == HealthCheckConfig(
        interval=5.0, failure_threshold=3, dead_threshold=10
    )


def test_first_check_waits_for_interval():
    clock = FakeClock()
    lifecycle = FakeLifecycle()
    lifecycle.agents["a"] = ("coder", AgentStatus.error("boom"))
    checker = HealthChecker(HealthCheckConfig(failure_threshold=1), clock)
    assert checker.check_all(lifecycle) == []
    clock.now = 4.9
    assert checker.check_all(lifecycle) == []
    clock.now = 5.0
    assert checker.check_all(lifecycle) == [AgentRestart("a", "coder", 1)]


def test_failures_escalate_to_dead():
    lifecycle = FakeLifecycle()
    lifecycle.agents["a"] = ("coder", AgentStatus.error("boom"))
    checker = HealthChecker(
        HealthCheckConfig(interval=0, failure_threshold=2, dead_threshold=4), FakeClock()
    )
    rounds = [checker.check_all(lifecycle) for _ in range(6)]
    assert rounds == [
        [],
        [AgentRestart("a", "coder", 2)],
        [AgentRestart("a", "coder", 3)],
        [AgentDead("a", "coder", "boom")],
        [],
        [],
    ]


def test_healthy_status_resets_failures():
    lifecycle = FakeLifecycle()
    checker = HealthChecker(
        HealthCheckConfig(interval=0, failure_threshold=2, dead_threshold=10), FakeClock()
    )
    sequence = [
        AgentStatus.error("x"),
        AgentStatus.error("x"),
        AgentStatus.busy("t1"),
        AgentStatus.error("x"),
        AgentStatus.error("x"),
    ]
    rounds = []
    for status in sequence:
        lifecycle.agents["a"] = ("coder", status)
        rounds.append(checker.check_all(lifecycle))
    assert rounds[1] == rounds[4] == [AgentRestart("a", "coder", 2)]
    assert rounds[2] == rounds[3] == []


def test_stopped_reported_once():
    lifecycle = FakeLifecycle()
    lifecycle.agents["a"] = ("coder", STOPPED)
    checker = HealthChecker(HealthCheckConfig(interval=0), FakeClock())
    assert checker.check_all(lifecycle) == [AgentStopped("a", "coder")]
    assert checker.check_all(lifecycle) == []


def test_remove_forgets_state():
    lifecycle = FakeLifecycle()
    lifecycle.agents["a"] = ("coder", STOPPED)
    checker = HealthChecker(HealthCheckConfig(interval=0), FakeClock())
    checker.check_all(lifecycle)
    checker.remove("a")
    assert checker.check_all(lifecycle) == [AgentStopped("a", "coder")]


def test_vanished_agents_are_pruned():
    lifecycle = FakeLifecycle()
    lifecycle.agents["a"] = ("coder", STOPPED)
    checker = HealthChecker(HealthCheckConfig(interval=0), FakeClock())
    assert checker.check_all(lifecycle) == [AgentStopped("a", "coder")]
    del lifecycle.agents["a"]
    assert checker.check_all(lifecycle) == []
    lifecycle.agents["a"] = ("coder", STOPPED)
    assert checker.check_all(lifecycle) == [AgentStopped("a", "coder")]


def test_idle_agents_raise_no_events():
    lifecycle = FakeLifecycle()
    lifecycle.agents["a"] = ("coder", IDLE)
    lifecycle.agents["b"] = ("tester", AgentStatus(StatusKind.STARTING))
    checker = HealthChecker(HealthCheckConfig(interval=0), FakeClock())
    assert [checker.check_all(lifecycle) for _ in range(3)] == [[], [], []]