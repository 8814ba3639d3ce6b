"""Dependency installation through the package manager."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .runner import ToolResult, ToolRunner, run_checked


class DependencyInstaller:
    """Installs runtime and development dependencies into a project.

    Each call is a single package-manager invocation carrying the whole list,
    in the order given.  A non-zero exit raises ``ExternalToolError``.
    """

    def __init__(self, runner: ToolRunner, root: Path, package_manager: str = "npm") -> None:
        self.runner = runner
        self.root = Path(root)
        self.package_manager = package_manager

    async def install_runtime(self, names: Iterable[str]) -> ToolResult | None:
        """``npm install <names...>``; returns ``None`` when *names* is empty."""
        return await self._install("Dependency installation", [], names)

    async def install_dev(self, names: Iterable[str]) -> ToolResult | None:
        """``npm install --save-dev <names...>``."""
        return await self._install("Dev dependency installation", ["--save-dev"], names)

    async def _install(
        self, step: str, flags: list[str], names: Iterable[str]
    ) -> ToolResult | None:
        packages = _unique(names)
        if not packages:
            return None
        args = [self.package_manager, "install", *flags, *packages]
        return await run_checked(self.runner, step, args, self.root)


def _unique(names: Iterable[str]) -> list[str]:
    """Drop blanks and duplicates, keeping first-seen order."""
    seen: dict[str, None] = {}
    for name in names:
        name = name.strip()
        if name:
            seen.setdefault(name, None)
    return list(seen)
