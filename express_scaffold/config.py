"""express-scaffold configuration.

Typed settings for a generation run.  All settings use Pydantic v2 models so
they are validated at construction time and can be saved to / loaded from
JSON without boiler-plate.  The generator itself reads no environment
variables; everything comes from this model or the command line.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


DEFAULT_RUNTIME_DEPENDENCIES: list[str] = [
    "express",
    "mongoose",
    "dotenv",
    "cors",
    "helmet",
    "morgan",
    "jsonwebtoken",
    "bcryptjs",
]

DEFAULT_DEV_DEPENDENCIES: list[str] = ["nodemon"]

DEFAULT_SCRIPTS: dict[str, str] = {
    "start": "node src/server.js",
    "dev": "nodemon src/server.js",
}


class ProjectContext(BaseModel):
    """Immutable values substituted into the project templates.

    Built once per run by :meth:`ScaffoldConfig.build_context` and only read
    afterwards.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    root_path: Path
    port: int = Field(default=3000, ge=1, le=65535)
    jwt_secret_placeholder: str = Field(default="votre_secret_jwt")
    node_env: str = Field(default="development")
    mongo_host: str = Field(default="mongodb://localhost:27017")
    api_mount_path: str = Field(default="/api/users")
    token_expiry: str = Field(default="30d")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def db_name(self) -> str:
        """MongoDB database name; always the project name."""
        return self.name

    @computed_field  # type: ignore[prop-decorator]
    @property
    def mongodb_uri(self) -> str:
        return f"{self.mongo_host.rstrip('/')}/{self.db_name}"

    def as_template_vars(self) -> dict[str, object]:
        """Return the context as a plain dict for Jinja2."""
        return self.model_dump()


class ScaffoldConfig(BaseModel):
    """Settings for one generation run.

    Instances are created by the CLI entry point (optionally from a saved
    JSON file) and passed to :class:`~express_scaffold.scaffolder.ProjectGenerator`.
    """

    output_dir: Path = Field(default_factory=Path.cwd)
    port: int = Field(default=3000, ge=1, le=65535)
    jwt_secret_placeholder: str = Field(default="votre_secret_jwt")
    node_env: str = Field(default="development")
    mongo_host: str = Field(default="mongodb://localhost:27017")
    package_manager: str = Field(default="npm", min_length=1)
    runtime_dependencies: list[str] = Field(
        default_factory=lambda: list(DEFAULT_RUNTIME_DEPENDENCIES)
    )
    dev_dependencies: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DEV_DEPENDENCIES)
    )
    scripts: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_SCRIPTS))
    module_mode: bool = Field(
        default=True, description='Set "type": "module" in package.json'
    )
    command_timeout: Optional[float] = Field(
        default=None,
        ge=1,
        description="Seconds before an external tool is killed (None waits forever)",
    )
    cleanup_on_failure: bool = Field(
        default=False,
        description="Remove the project directory if a later step fails",
    )

    def build_context(self, name: str, root_path: Path) -> ProjectContext:
        """Create the template context for project *name* rooted at *root_path*."""
        return ProjectContext(
            name=name,
            root_path=root_path,
            port=self.port,
            jwt_secret_placeholder=self.jwt_secret_placeholder,
            node_env=self.node_env,
            mongo_host=self.mongo_host,
        )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ScaffoldConfig":
        """Load a previously-saved configuration from JSON.

        Args:
            path: The JSON file to read.

        Returns:
            A validated ``ScaffoldConfig`` instance.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)
