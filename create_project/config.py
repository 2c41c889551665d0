"""create-project configuration.

Centralised, typed configuration for a scaffolding run.  Settings use a
Pydantic v2 model so they are validated at construction time and can be
serialised to/from JSON or read from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


_PACKAGE_DIR = Path(__file__).parent


class Config(BaseModel):
    """Global create-project configuration.

    Instances are typically created once by the CLI entry point and then
    passed to the ``ProjectGenerator``.
    """

    templates_dir: Path = Field(
        default=_PACKAGE_DIR / "templates" / "files",
        description="Directory holding the template-* project directories",
    )
    config_files_dir: Path = Field(
        default=_PACKAGE_DIR / "templates" / "config_files",
        description="Directory holding static configuration files",
    )
    template_config_file: str = Field(
        default="template.config.json",
        description="Template metadata file removed from the generated project",
    )
    strict_versions: bool = Field(
        default=False,
        description="Fail instead of warning when a dependency version is unknown",
    )
    max_default_depth: int = Field(
        default=8, ge=1, description="Maximum nesting of withOption default dependencies"
    )

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def template_path(self, template_dir: str) -> Path:
        """Absolute path of a template directory name such as ``template-node``."""
        return self.templates_dir / template_dir

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            CREATE_PROJECT_TEMPLATES_DIR, CREATE_PROJECT_CONFIG_FILES_DIR,
            CREATE_PROJECT_STRICT_VERSIONS,
            CREATE_PROJECT_MAX_DEFAULT_DEPTH.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CREATE_PROJECT_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["CREATE_PROJECT_TEMPLATES_DIR"])
        if os.environ.get("CREATE_PROJECT_CONFIG_FILES_DIR"):
            kwargs["config_files_dir"] = Path(os.environ["CREATE_PROJECT_CONFIG_FILES_DIR"])
        if os.environ.get("CREATE_PROJECT_STRICT_VERSIONS"):
            kwargs["strict_versions"] = os.environ["CREATE_PROJECT_STRICT_VERSIONS"].lower() in {
                "1",
                "true",
                "yes",
            }
        if os.environ.get("CREATE_PROJECT_MAX_DEFAULT_DEPTH"):
            kwargs["max_default_depth"] = int(os.environ["CREATE_PROJECT_MAX_DEFAULT_DEPTH"])
        return cls(**kwargs)
