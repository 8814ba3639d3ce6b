"""Exception hierarchy for the scaffolding pipeline.

Every failure the generator can hit is a ``ScaffoldError``.  None of them
are retried or rolled back by the pipeline; the CLI prints the message and
exits with status 1.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for all scaffolding failures."""


class InvalidProjectNameError(ScaffoldError):
    """Raised when the project name cannot be used as a directory name."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid project name {name!r}: {reason}")


class PathCollisionError(ScaffoldError):
    """Raised when the target project directory already exists."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"The directory {self.path.name} already exists ({self.path})")


class ExternalToolError(ScaffoldError):
    """Raised when an external tool (``npm init``, ``npm install``) fails."""

    def __init__(
        self,
        step: str,
        command: str,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        self.step = step
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        message = f"{step} failed"
        if returncode is not None:
            message += f" (exit {returncode})"
        message += f": {command}"
        if stderr:
            message += f"\n{stderr}"
        super().__init__(message)


class FilesystemError(ScaffoldError):
    """Raised when a directory or file cannot be created, read or written."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{message}: {self.path}")
