"""Start-up of the standalone command-line engine."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO, Union

import platformdirs

from golutra.agent_runtime.lifecycle import AgentLifecycle
from golutra.cli.repl import Repl
from golutra.memory.shared import SharedMemory
from golutra.memory.store import MemoryStore, MemoryStoreError

MEMORY_FILE = "memory.sqlite3"


def bootstrap(
    data_dir: Union[str, "os.PathLike[str]"],
    cwd: Optional[str] = None,
    input_stream: Optional[TextIO] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Open the memory in ``data_dir`` and run the interactive loop."""
    with MemoryStore(Path(data_dir) / MEMORY_FILE) as store:
        memory = SharedMemory(store)
        lifecycle = AgentLifecycle()
        Repl(lifecycle, memory, cwd, stream).run(input_stream)


def _default_data_dir() -> Path:
    return Path(platformdirs.user_data_dir("golutra", appauthor=False))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point; returns the exit status."""
    parser = argparse.ArgumentParser(
        prog="golutra", description="Headless multi-agent orchestration engine."
    )
    parser.add_argument(
        "--data-dir", type=Path, default=None, help="directory for persistent data"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    try:
        cwd: Optional[str] = os.getcwd()
    except OSError:
        cwd = None

    data_dir = args.data_dir if args.data_dir is not None else _default_data_dir()
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        print(f"无法创建数据目录 {str(data_dir)!r}: {exc}", file=sys.stderr)
        return 1

    try:
        bootstrap(data_dir, cwd, sys.stdin)
    except (MemoryStoreError, OSError) as exc:
        print(f"启动失败: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())