"""``package.json`` creation and patching.

The base manifest comes from ``<package manager> init -y``; afterwards the
scaffolder rewrites it once to add the run scripts and the module type.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from express_scaffold.utils import load_json, save_json

from .errors import FilesystemError
from .runner import ToolRunner, run_checked

MANIFEST_FILENAME = "package.json"


@dataclass
class Manifest:
    """In-memory copy of a project's ``package.json``."""

    path: Path
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def scripts(self) -> dict[str, str]:
        return dict(self.data.get("scripts") or {})

    @classmethod
    def load(cls, path: Path) -> "Manifest":
        """Read and parse *path*, wrapping I/O and JSON errors.

        The top level must be an object; anything else is rejected.
        """
        try:
            data = load_json(path)
        except FileNotFoundError as exc:
            raise FilesystemError(path, "Manifest was not created") from exc
        except (OSError, json.JSONDecodeError) as exc:
            raise FilesystemError(path, f"Cannot read manifest ({exc})") from exc
        if not isinstance(data, dict):
            raise FilesystemError(path, "Manifest is not a JSON object")
        return cls(path=Path(path), data=data)


class ManifestManager:
    """Creates the base manifest and applies the scaffolder's patch."""

    def __init__(self, runner: ToolRunner, package_manager: str = "npm") -> None:
        self.runner = runner
        self.package_manager = package_manager

    async def initialize(self, root: Path) -> Manifest:
        """Run ``<package manager> init -y`` in *root* and load the result.

        Raises:
            ExternalToolError: If the initializer exits non-zero.
            FilesystemError: If no readable ``package.json`` was produced.
        """
        await run_checked(
            self.runner,
            "Manifest initialisation",
            [self.package_manager, "init", "-y"],
            root,
        )
        return Manifest.load(Path(root) / MANIFEST_FILENAME)

    async def patch(
        self,
        manifest: Manifest,
        scripts: dict[str, str],
        module_mode: bool = True,
    ) -> Manifest:
        """Set ``scripts`` and ``type`` and write the whole file back.

        The document is re-read from disk first, since installing
        dependencies rewrites ``package.json`` after :meth:`initialize`.
        Existing keys keep their position; ``scripts`` is replaced, not
        merged.
        """
        current = Manifest.load(manifest.path)
        current.data["scripts"] = dict(scripts)
        current.data["type"] = "module" if module_mode else "commonjs"
        try:
            await save_json(current.data, current.path)
        except OSError as exc:
            raise FilesystemError(current.path, f"Cannot write manifest ({exc.strerror or exc})") from exc
        manifest.data = current.data
        return manifest
