"""Shared pytest fixtures for the express-scaffold test suite.

Provides reusable fixtures for:
- Output directories and scaffold configs rooted in ``tmp_path``
- A fake package-manager runner that records invocations, writes a
  ``package.json`` like ``npm init -y`` does, and fails on demand
- A sample ``ProjectContext``
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

import pytest

from express_scaffold.config import ProjectContext, ScaffoldConfig
from express_scaffold.scaffolder.runner import ToolResult


# ---------------------------------------------------------------------------
# Fake package manager
# ---------------------------------------------------------------------------

NPM_INIT_MANIFEST = {
    "name": "",
    "version": "1.0.0",
    "description": "",
    "main": "index.js",
    "scripts": {"test": 'echo "Error: no test specified" && exit 1'},
    "keywords": [],
    "author": "",
    "license": "ISC",
}


class FakeToolRunner:
    """In-memory stand-in for ``npm``.

    * ``init`` writes a default ``package.json`` into ``cwd``.
    * ``install`` records the packages under ``dependencies`` or
      ``devDependencies`` (``--save-dev``), rewriting the manifest the way
      npm does.
    * Any call whose arguments (after the executable) start with
      ``fail_on`` returns ``returncode`` with ``stderr`` instead.
    """

    def __init__(
        self,
        fail_on: Sequence[str] | None = None,
        returncode: int = 1,
        stderr: str = "npm ERR! network request failed",
    ) -> None:
        self.fail_on = list(fail_on) if fail_on else None
        self.returncode = returncode
        self.stderr = stderr
        self.calls: list[tuple[list[str], Path]] = []

    @property
    def commands(self) -> list[list[str]]:
        return [args for args, _ in self.calls]

    async def run(self, args: Sequence[str], cwd: Path) -> ToolResult:
        argv = list(args)
        self.calls.append((argv, Path(cwd)))
        if self.fail_on is not None and argv[1 : 1 + len(self.fail_on)] == self.fail_on:
            return ToolResult(argv, self.returncode, "", self.stderr)

        manifest_path = Path(cwd) / "package.json"
        if argv[1:2] == ["init"]:
            data = {**NPM_INIT_MANIFEST, "name": Path(cwd).name}
            manifest_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        elif argv[1:2] == ["install"]:
            data = json.loads(manifest_path.read_text(encoding="utf-8"))
            packages = [a for a in argv[2:] if not a.startswith("-")]
            key = "devDependencies" if "--save-dev" in argv else "dependencies"
            section = data.setdefault(key, {})
            for name in packages:
                section[name] = "^1.0.0"
            manifest_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return ToolResult(argv, 0, "", "")


@pytest.fixture
def fake_runner() -> FakeToolRunner:
    """A fake runner on which every command succeeds."""
    return FakeToolRunner()


@pytest.fixture
def make_runner():
    """Factory for fake runners that fail on a given sub-command.

    Usage:
        def test_x(make_runner):
            runner = make_runner(fail_on=["install", "--save-dev"])
    """
    return FakeToolRunner


# ---------------------------------------------------------------------------
# Paths & config
# ---------------------------------------------------------------------------

@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Parent directory in which projects are generated."""
    out = tmp_path / "workspace"
    out.mkdir()
    return out


@pytest.fixture
def scaffold_config(output_dir: Path) -> ScaffoldConfig:
    """Default config writing into ``output_dir``."""
    return ScaffoldConfig(output_dir=output_dir)


@pytest.fixture
def project_context(output_dir: Path) -> ProjectContext:
    """Context for a project called ``shop-api``."""
    return ProjectContext(name="shop-api", root_path=output_dir / "shop-api")


def snapshot_tree(root: Path) -> dict[str, bytes | None]:
    """Map every path under *root* to its bytes (``None`` for directories)."""
    return {
        p.relative_to(root).as_posix(): (None if p.is_dir() else p.read_bytes())
        for p in sorted(root.rglob("*"))
    }


@pytest.fixture
def tree_snapshot():
    """Expose :func:`snapshot_tree` to tests."""
    return snapshot_tree
