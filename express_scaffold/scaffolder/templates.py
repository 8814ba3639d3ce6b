"""Jinja2 template rendering for project scaffolding.

Provides the ``TemplateRenderer`` class which loads Jinja2 templates from the
``express_scaffold/scaffolder/templates/`` directory, and the fixed
``CATALOG`` of files every generated project receives.  Rendering is pure
string substitution; writing the results to disk is a separate step.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from express_scaffold.config import ProjectContext

from .errors import FilesystemError


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    Templates are ``.j2`` files under a configurable template directory.
    Undefined variables raise instead of rendering as empty strings, so a
    template can never silently drop a substitution.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_path: str, context: ProjectContext) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"src/server.js.j2"``).
            context: Project values available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context.as_template_vars())


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TemplateEntry:
    """One generated file: where it goes and which template produces it."""

    relative_path: str
    template_name: str

    def render(self, context: ProjectContext, renderer: TemplateRenderer | None = None) -> str:
        return (renderer or _default_renderer()).render(self.template_name, context)


# Files at the project root; they do not depend on the package manager.
ROOT_FILES: tuple[TemplateEntry, ...] = (
    TemplateEntry(".env", "env.j2"),
    TemplateEntry(".gitignore", "gitignore.j2"),
)

SOURCE_FILES: tuple[TemplateEntry, ...] = (
    TemplateEntry("src/server.js", "src/server.js.j2"),
    TemplateEntry("src/config/db.js", "src/config/db.js.j2"),
    TemplateEntry("src/models/User.js", "src/models/User.js.j2"),
    TemplateEntry("src/controllers/userController.js", "src/controllers/userController.js.j2"),
    TemplateEntry("src/routes/userRoutes.js", "src/routes/userRoutes.js.j2"),
    TemplateEntry("src/middleware/authMiddleware.js", "src/middleware/authMiddleware.js.j2"),
    TemplateEntry("src/utils/generateToken.js", "src/utils/generateToken.js.j2"),
)

CATALOG: tuple[TemplateEntry, ...] = ROOT_FILES + SOURCE_FILES

_renderer: TemplateRenderer | None = None


def _default_renderer() -> TemplateRenderer:
    global _renderer
    if _renderer is None:
        _renderer = TemplateRenderer()
    return _renderer


def render_catalog(
    context: ProjectContext,
    entries: tuple[TemplateEntry, ...] = CATALOG,
    renderer: TemplateRenderer | None = None,
) -> list[tuple[str, str]]:
    """Render *entries* to ``(relative_path, content)`` pairs, in catalog order."""
    return [(entry.relative_path, entry.render(context, renderer)) for entry in entries]


async def write_entries(
    root: Path,
    context: ProjectContext,
    entries: tuple[TemplateEntry, ...] = CATALOG,
    renderer: TemplateRenderer | None = None,
) -> list[Path]:
    """Render *entries* and write each one under *root*.

    Parent directories must already exist (``DirectoryBuilder`` creates
    them).  Each write is independent of the others.

    Returns:
        The written paths, in catalog order.

    Raises:
        FilesystemError: If a file cannot be written.
    """
    written: list[Path] = []
    for relative_path, content in render_catalog(context, entries, renderer):
        out = Path(root) / relative_path
        await asyncio.to_thread(_write_file, out, content)
        written.append(out)
    return written


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Write *content* with LF line endings on every platform."""
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(content)
    except OSError as exc:
        raise FilesystemError(path, f"Cannot write file ({exc.strerror or exc})") from exc
