"""express-scaffold scaffolder -- generates Express.js + MongoDB backends.

Turns a project name into a ready-to-run directory with ``package.json``,
``.env``, ``.gitignore`` and a user registration/authentication API, and
installs its dependencies through ``npm``.

Quick usage::

    from express_scaffold.config import ScaffoldConfig
    from express_scaffold.scaffolder import ProjectGenerator

    generator = ProjectGenerator(ScaffoldConfig(output_dir="/tmp"))
    result = await generator.generate("shop-api")
"""

from express_scaffold.scaffolder.directories import PROJECT_DIRECTORIES, DirectoryBuilder
from express_scaffold.scaffolder.errors import (
    ExternalToolError,
    FilesystemError,
    InvalidProjectNameError,
    PathCollisionError,
    ScaffoldError,
)
from express_scaffold.scaffolder.generator import (
    GenerationResult,
    GenerationStage,
    ProjectGenerator,
    print_project_summary,
)
from express_scaffold.scaffolder.installer import DependencyInstaller
from express_scaffold.scaffolder.manifest import Manifest, ManifestManager
from express_scaffold.scaffolder.paths import PathResolver
from express_scaffold.scaffolder.runner import SubprocessToolRunner, ToolResult, ToolRunner
from express_scaffold.scaffolder.templates import (
    CATALOG,
    TemplateEntry,
    TemplateRenderer,
    render_catalog,
)

__all__ = [
    "CATALOG",
    "DependencyInstaller",
    "DirectoryBuilder",
    "ExternalToolError",
    "FilesystemError",
    "GenerationResult",
    "GenerationStage",
    "InvalidProjectNameError",
    "Manifest",
    "ManifestManager",
    "PROJECT_DIRECTORIES",
    "PathCollisionError",
    "PathResolver",
    "ProjectGenerator",
    "ScaffoldError",
    "SubprocessToolRunner",
    "TemplateEntry",
    "TemplateRenderer",
    "ToolResult",
    "ToolRunner",
    "print_project_summary",
    "render_catalog",
]
