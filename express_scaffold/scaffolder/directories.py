"""Creation of the generated project's directory tree."""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from express_scaffold.utils import ensure_dir

from .errors import FilesystemError

PROJECT_DIRECTORIES: tuple[str, ...] = (
    "src",
    "src/config",
    "src/controllers",
    "src/middleware",
    "src/models",
    "src/routes",
    "src/utils",
)


class DirectoryBuilder:
    """Creates the project root and its fixed ``src/`` layout.

    With *remove_on_failure* set, a root created by :meth:`create_tree` is
    removed again if a subdirectory cannot be created.
    """

    def __init__(
        self,
        directories: tuple[str, ...] = PROJECT_DIRECTORIES,
        remove_on_failure: bool = False,
    ) -> None:
        self.directories = directories
        self.remove_on_failure = remove_on_failure

    async def create_tree(self, root: Path) -> list[Path]:
        """Create *root* and every subdirectory, returning the created paths.

        The root must not exist yet; its parents are created if needed.  Each
        subdirectory is created recursively, so sibling order is irrelevant.

        Raises:
            FilesystemError: On any OS-level failure (permissions, disk full,
                root appeared in the meantime).
        """
        return await asyncio.to_thread(self._create_tree, Path(root))

    def _create_tree(self, root: Path) -> list[Path]:
        try:
            root.parent.mkdir(parents=True, exist_ok=True)
            root.mkdir()
        except OSError as exc:
            raise FilesystemError(root, f"Cannot create project directory ({exc.strerror or exc})") from exc

        created = [root]
        for rel in self.directories:
            target = root / rel
            try:
                ensure_dir(target)
            except OSError as exc:
                if self.remove_on_failure:
                    shutil.rmtree(root, ignore_errors=True)
                raise FilesystemError(target, f"Cannot create directory ({exc.strerror or exc})") from exc
            created.append(target)
        return created
