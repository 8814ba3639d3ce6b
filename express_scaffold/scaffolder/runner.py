"""External tool invocation for the scaffolder.

The package manager is treated as a black box: the scaffolder only cares
whether a command exited with status 0.  ``ToolRunner`` is the capability the
manifest and dependency steps receive; tests substitute a fake that records
calls instead of spawning ``npm``.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

from express_scaffold.utils import format_command, run_command

from .errors import ExternalToolError


@dataclass
class ToolResult:
    """Outcome of one external tool invocation."""

    args: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def command(self) -> str:
        return format_command(self.args)


class ToolRunner(Protocol):
    """Runs one external command in a given directory and waits for it."""

    async def run(self, args: Sequence[str], cwd: Path) -> ToolResult: ...


class SubprocessToolRunner:
    """``ToolRunner`` backed by a real child process.

    The executable (``args[0]``) is resolved through ``PATH`` first so that
    wrappers such as ``npm.cmd`` on Windows are found without a shell.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    async def run(self, args: Sequence[str], cwd: Path) -> ToolResult:
        argv = list(args)
        executable = shutil.which(argv[0])
        if executable is None:
            raise ExternalToolError(
                "Command lookup",
                format_command(argv),
                stderr=f"{argv[0]!r} was not found on PATH",
            )
        returncode, stdout, stderr = await run_command(
            [executable, *argv[1:]], cwd=cwd, timeout=self.timeout
        )
        return ToolResult(argv, returncode, stdout, stderr)


async def run_checked(
    runner: ToolRunner, step: str, args: Sequence[str], cwd: Path
) -> ToolResult:
    """Run *args* and raise ``ExternalToolError`` unless it exits with 0."""
    try:
        result = await runner.run(args, cwd)
    except OSError as exc:
        raise ExternalToolError(step, format_command(list(args)), stderr=str(exc)) from exc
    if not result.ok:
        raise ExternalToolError(step, result.command, result.returncode, result.stderr)
    return result
