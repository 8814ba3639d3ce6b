"""Project name validation and target path resolution."""

from __future__ import annotations

import re
from pathlib import Path

from .errors import InvalidProjectNameError, PathCollisionError

_VALID_NAME = re.compile(r"^[A-Za-z0-9_-]+$")


def validate_project_name(name: str) -> str:
    """Return the stripped *name* or raise ``InvalidProjectNameError``.

    The name becomes both a directory name and the MongoDB database name,
    which may not contain ``.``, so only letters, digits, ``_`` and ``-`` are
    accepted.
    """
    cleaned = name.strip()
    if not cleaned:
        raise InvalidProjectNameError(name, "the name must not be empty")
    if cleaned in (".", ".."):
        raise InvalidProjectNameError(name, "the name must not be '.' or '..'")
    if not _VALID_NAME.match(cleaned):
        raise InvalidProjectNameError(
            name, "use only letters, digits, '_' and '-'"
        )
    return cleaned


class PathResolver:
    """Maps a project name to an absolute, not-yet-existing directory."""

    def __init__(self, base_dir: str | Path) -> None:
        self.base_dir = Path(base_dir).resolve()

    def resolve(self, name: str) -> Path:
        """Return ``<base_dir>/<name>``.

        Raises:
            InvalidProjectNameError: If *name* is empty or not filesystem-safe.
            PathCollisionError: If the path already exists (file or directory).
        """
        project_path = self.base_dir / validate_project_name(name)
        if project_path.exists() or project_path.is_symlink():
            raise PathCollisionError(project_path)
        return project_path
