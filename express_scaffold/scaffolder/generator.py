"""Main scaffolding orchestrator.

Takes a project name and a ``ScaffoldConfig`` and produces an Express.js +
MongoDB backend skeleton: directory tree, ``.env``/``.gitignore``,
``package.json`` with dependencies installed, and the user/auth API sources.

The pipeline is strictly linear.  Any failure aborts the remaining steps and
is re-raised unchanged; whatever was already written stays on disk unless
``cleanup_on_failure`` is set, in which case the project directory created
by this run is removed.
"""

from __future__ import annotations

import shutil
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Awaitable, TypeVar

from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from express_scaffold.config import ProjectContext, ScaffoldConfig
from express_scaffold.utils import (
    console,
    create_progress,
    format_duration,
    print_step,
    print_success,
    print_warning,
)

from .directories import PROJECT_DIRECTORIES, DirectoryBuilder
from .installer import DependencyInstaller
from .manifest import MANIFEST_FILENAME, ManifestManager
from .paths import PathResolver
from .runner import SubprocessToolRunner, ToolRunner
from .templates import ROOT_FILES, SOURCE_FILES, TemplateRenderer, write_entries

T = TypeVar("T")


class GenerationStage(str, Enum):
    """Orchestrator states, in pipeline order, plus the two terminal states."""

    IDLE = "idle"
    PATH_RESOLVED = "path_resolved"
    DIRECTORY_TREE_CREATED = "directory_tree_created"
    MANIFEST_INITIALIZED = "manifest_initialized"
    DEPENDENCIES_INSTALLED = "dependencies_installed"
    MANIFEST_PATCHED = "manifest_patched"
    TEMPLATES_WRITTEN = "templates_written"
    SUCCESS = "success"
    ABORTED = "aborted"


@dataclass
class GenerationResult:
    """What a successful run produced."""

    root: Path
    context: ProjectContext
    files_written: list[Path] = field(default_factory=list)
    stage: GenerationStage = GenerationStage.SUCCESS
    duration_seconds: float = 0.0


API_ROUTES: list[tuple[str, str, str]] = [
    ("POST", "", "Register a user"),
    ("POST", "/login", "Authenticate a user"),
    ("GET", "/profile", "Get the profile (auth)"),
    ("PUT", "/profile", "Update the profile (auth)"),
    ("GET", "", "List all users (admin)"),
    ("DELETE", "/:id", "Delete a user (admin)"),
]


class ProjectGenerator:
    """Sequences the scaffolding steps for one project.

    resolve path -> create directories -> init manifest -> install
    dependencies -> patch manifest -> render templates -> print summary.

    The target root is passed explicitly to every step; the process working
    directory is never changed.
    """

    def __init__(
        self,
        config: ScaffoldConfig | None = None,
        runner: ToolRunner | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config or ScaffoldConfig()
        self.runner = runner or SubprocessToolRunner(timeout=self.config.command_timeout)
        self.renderer = renderer or TemplateRenderer()
        self.resolver = PathResolver(self.config.output_dir)
        self.directory_builder = DirectoryBuilder(
            remove_on_failure=self.config.cleanup_on_failure
        )
        self.manifest_manager = ManifestManager(self.runner, self.config.package_manager)
        self.stage = GenerationStage.IDLE

    # -- Public API --------------------------------------------------------

    async def generate(self, name: str) -> GenerationResult:
        """Generate project *name* under ``config.output_dir``.

        Returns:
            A ``GenerationResult`` describing the new project.

        Raises:
            ScaffoldError: Any step's failure, unchanged.  ``self.stage`` is
                ``ABORTED`` afterwards.
        """
        started = time.monotonic()
        created_root: Path | None = None
        try:
            root = self.resolver.resolve(name)
            self._advance(GenerationStage.PATH_RESOLVED)
            context = self.config.build_context(root.name, root)

            print_step("📁", f"Creating {root.name}/...")
            await self.directory_builder.create_tree(root)
            created_root = root
            written = await write_entries(root, context, ROOT_FILES, self.renderer)
            self._advance(GenerationStage.DIRECTORY_TREE_CREATED)

            print_step("📦", f"Initialising {MANIFEST_FILENAME}...")
            manifest = await self._with_spinner(
                f"{self.config.package_manager} init",
                self.manifest_manager.initialize(root),
            )
            self._advance(GenerationStage.MANIFEST_INITIALIZED)

            print_step("📚", "Installing dependencies...")
            installer = DependencyInstaller(self.runner, root, self.config.package_manager)
            await self._with_spinner(
                f"{self.config.package_manager} install",
                installer.install_runtime(self.config.runtime_dependencies),
            )
            await self._with_spinner(
                f"{self.config.package_manager} install --save-dev",
                installer.install_dev(self.config.dev_dependencies),
            )
            self._advance(GenerationStage.DEPENDENCIES_INSTALLED)

            await self.manifest_manager.patch(
                manifest, self.config.scripts, self.config.module_mode
            )
            written.append(manifest.path)
            self._advance(GenerationStage.MANIFEST_PATCHED)

            print_step("📝", "Writing source files...")
            written.extend(
                await write_entries(root, context, SOURCE_FILES, self.renderer)
            )
            self._advance(GenerationStage.TEMPLATES_WRITTEN)
        except BaseException:
            self.stage = GenerationStage.ABORTED
            if created_root is not None and self.config.cleanup_on_failure:
                print_warning(f"Removing partially generated project {created_root}")
                shutil.rmtree(created_root, ignore_errors=True)
            raise

        self._advance(GenerationStage.SUCCESS)
        return GenerationResult(
            root=root,
            context=context,
            files_written=written,
            stage=self.stage,
            duration_seconds=time.monotonic() - started,
        )

    # -- Internals ---------------------------------------------------------

    def _advance(self, stage: GenerationStage) -> None:
        self.stage = stage

    async def _with_spinner(self, description: str, step: Awaitable[T]) -> T:
        with create_progress() as progress:
            progress.add_task(description, total=None)
            return await step


# ---------------------------------------------------------------------------
# Summary output
# ---------------------------------------------------------------------------


def print_project_summary(result: GenerationResult) -> None:
    """Print the success banner, next steps, layout and API routes."""
    ctx = result.context
    print_success(
        f"✅ Project '{ctx.name}' created in {format_duration(result.duration_seconds)}"
    )
    console.print(
        Panel(
            f"cd {display_path(result.root)}\nnpm run dev",
            title="Start the development server",
            expand=False,
        )
    )
    console.print(build_layout_tree(ctx.name))

    table = Table(title="API routes", show_header=True, header_style="bold cyan")
    table.add_column("Method", no_wrap=True)
    table.add_column("Path", no_wrap=True)
    table.add_column("Description")
    for method, suffix, description in API_ROUTES:
        table.add_row(method, f"{ctx.api_mount_path}{suffix}", description)
    console.print(table)


def build_layout_tree(name: str) -> Tree:
    """Rich tree of the generated layout."""
    tree = Tree(f"[bold]{name}/[/bold]")
    tree.add(".env")
    tree.add(".gitignore")
    tree.add(MANIFEST_FILENAME)
    src = tree.add("src/")
    for rel in PROJECT_DIRECTORIES:
        if rel != "src":
            src.add(rel.split("/", 1)[1] + "/")
    src.add("server.js")
    return tree


def display_path(root: Path) -> str:
    """*root* relative to the working directory when below it, else absolute."""
    try:
        relative = root.relative_to(Path.cwd().resolve())
    except ValueError:
        return str(root)
    return relative.as_posix()
