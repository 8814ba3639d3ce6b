"""Tests for dependency installation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from express_scaffold.config import DEFAULT_DEV_DEPENDENCIES, DEFAULT_RUNTIME_DEPENDENCIES
from express_scaffold.scaffolder.errors import ExternalToolError
from express_scaffold.scaffolder.installer import DependencyInstaller

pytestmark = pytest.mark.unit


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "shop-api"
    root.mkdir()
    (root / "package.json").write_text(json.dumps({"name": "shop-api"}), encoding="utf-8")
    return root


class TestDependencyInstaller:
    async def test_runtime_is_a_single_invocation(self, project_root, fake_runner):
        installer = DependencyInstaller(fake_runner, project_root)
        await installer.install_runtime(DEFAULT_RUNTIME_DEPENDENCIES)

        assert fake_runner.calls == [
            (
                [
                    "npm", "install",
                    "express", "mongoose", "dotenv", "cors",
                    "helmet", "morgan", "jsonwebtoken", "bcryptjs",
                ],
                project_root,
            )
        ]

    async def test_dev_uses_save_dev(self, project_root, fake_runner):
        installer = DependencyInstaller(fake_runner, project_root)
        await installer.install_dev(DEFAULT_DEV_DEPENDENCIES)
        assert fake_runner.commands == [["npm", "install", "--save-dev", "nodemon"]]

    async def test_duplicates_and_blanks_are_dropped(self, project_root, fake_runner):
        installer = DependencyInstaller(fake_runner, project_root)
        await installer.install_runtime(["express", " ", "cors", "express"])
        assert fake_runner.commands == [["npm", "install", "express", "cors"]]

    async def test_empty_list_runs_nothing(self, project_root, fake_runner):
        installer = DependencyInstaller(fake_runner, project_root)
        assert await installer.install_runtime([]) is None
        assert await installer.install_dev(set()) is None
        assert fake_runner.calls == []

    async def test_failure_is_fatal(self, project_root, make_runner):
        runner = make_runner(fail_on=["install", "express"])
        installer = DependencyInstaller(runner, project_root)
        with pytest.raises(ExternalToolError) as exc_info:
            await installer.install_runtime(["express"])
        assert exc_info.value.step == "Dependency installation"
        assert exc_info.value.returncode == 1

    async def test_dev_failure_names_its_step(self, project_root, make_runner):
        runner = make_runner(fail_on=["install", "--save-dev"])
        installer = DependencyInstaller(runner, project_root)
        await installer.install_runtime(["express"])
        with pytest.raises(ExternalToolError, match="Dev dependency installation failed"):
            await installer.install_dev(["nodemon"])

    async def test_custom_package_manager(self, project_root, fake_runner):
        installer = DependencyInstaller(fake_runner, project_root, package_manager="pnpm")
        await installer.install_dev(["nodemon"])
        assert fake_runner.commands == [["pnpm", "install", "--save-dev", "nodemon"]]
