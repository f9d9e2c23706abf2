# golutra

golutra is a headless engine that coordinates teams of agents. You give it
an instruction. It splits the instruction into tasks and infers a role for
each task. It then picks or creates an agent for every task from a set of
built-in templates. When the work calls for it, it opens a collaboration
channel. Finally it dispatches the tasks in dependency order. The agents
share a persistent memory with a keyword index. That memory is kept in a
SQLite file.

## What the package does not include

golutra ships no agent adapters. Nothing in the package launches an AI tool
or any other program. The `golutra` command starts with no adapter
registered, so a task instruction typed there fails with
`no adapter for tool_type: ...`. The memory, template, channel and history
commands still work. To run agents, write an implementation of
`golutra.agent_runtime.interface.AgentInterface` and register it yourself
(see below).

## The interactive shell

```
golutra [--data-dir DIR]
```

The shell keeps its data in `DIR`. Without the option, it uses the per-user
data directory for `golutra`. The shared memory is stored there as
`memory.sqlite3`. The current working directory becomes the working
directory of every agent the shell creates.

A line that does not start with `/` is a task instruction. An instruction
with several non-empty lines becomes one task per line. Each task's role is
inferred from its wording: tester, reviewer, refactor, devops, auditor, or
general. Tasks that share a role may run in parallel. Each role group waits
for the last task of the group before it.

| Command                    | Effect                                      |
|----------------------------|---------------------------------------------|
| `/agents`, `/ls`           | list active agents                          |
| `/status [<id>]`           | show one agent's status (all without id)    |
| `/kill <id>`               | terminate an agent                          |
| `/output <agent_id>`       | show the output of the agent's current task |
| `/tasks`                   | show the state of every task                |
| `/send <id> <message>`     | send a message to an agent by hand          |
| `/templates`               | list the built-in agent templates           |
| `/channels`                | list collaboration channels                 |
| `/memory <query>`, `/search <query>` | search the shared memory          |
| `/remember <key> <value>`  | store a global memory entry as `user`       |
| `/history`                 | show the ten most recent executions         |
| `/help`, `/?`              | show help                                   |
| `/quit`, `/exit`, `/q`     | shut all agents down and leave              |

## Plugging in agents

An adapter serves one tool type. The built-in templates ask for the tool
types `claude`, `gemini` and `shell`. The fallback `general` template uses
`claude`. An adapter receives messages through `send`. It reports what the
agent produced by pushing messages onto the `AgentHandle`:

```python
from golutra.agent_runtime.interface import AgentHandle, AgentInterface
from golutra.agent_runtime.lifecycle import AgentLifecycle
from golutra.cli.repl import Repl
from golutra.contracts import (
    AgentCapabilities, AgentStatus, ResultMessage, StatusKind, TaskMessage,
)
from golutra.memory.shared import SharedMemory
from golutra.memory.store import MemoryStore


class EchoAdapter(AgentInterface):
    def agent_id(self):
        return "echo"

    def capabilities(self):
        return AgentCapabilities()

    def tool_type(self):
        return "claude"

    def spawn(self, config):
        return AgentHandle(config.id, config.role, config.tool_type)

    def send(self, handle, message):
        if isinstance(message, TaskMessage):
            handle.push(ResultMessage(task_id=message.id, output=message.instruction))

    def status(self, handle):
        return AgentStatus(StatusKind.IDLE if handle.alive else StatusKind.STOPPED)

    def shutdown(self, handle):
        handle.alive = False


with MemoryStore("memory.sqlite3") as store:
    lifecycle = AgentLifecycle()
    lifecycle.register_adapter(EchoAdapter())
    Repl(lifecycle, SharedMemory(store)).run()
```

The coordinator is `golutra.openclaw.coordinator.OpenClaw`, which `Repl`
builds. It runs a background health check. The check restarts agents that
keep reporting errors, up to the lifecycle's `max_restarts`. It also reports
agents that have stopped or been given up on.

## Using the parts as a library

The planner, scheduler and memory layers work on their own:

```python
from golutra.openclaw.planner import assess, decompose, plan
from golutra.openclaw.scheduler import DagScheduler

tasks = decompose("refactor the parser\nwrite tests for the parser")
execution_plan = plan(tasks)
assessment = assess(execution_plan)

scheduler = DagScheduler(execution_plan)
for task_id in scheduler.ready_tasks():
    scheduler.mark_dispatched(task_id)
```

`golutra.memory.shared.SharedMemory` stores, recalls, searches and forgets
entries by owner, `MemoryScope` and key.
`golutra.memory.context.ContextBuilder` assembles task context within a
rough token budget. Execution history is kept in memory only and is not
saved between runs.

## Running the tests

Install the `test` extra, then run `pytest` from the project root.