"""Main scaffolding orchestrator.

Takes a ``ScaffoldRequest`` and produces a project directory: the template
is copied into the target, ``package.json`` is tailored to the selected
options and the option-specific configuration files are installed.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from pydantic import BaseModel, Field

from create_project.config import Config
from create_project.errors import ScaffoldError
from create_project.resolver import DependencyResolver, ResolvedDependencies
from create_project.templates import get_template, select_options
from create_project.utils import print_step

from .configure import OptionConfigurator, read_and_remove_template_config
from .manifest import ManifestUpdater
from .paths import prepare_target_dir, resolve_target_dir


class TemplateNotFoundError(ScaffoldError):
    """Raised when a template's directory is missing on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f'Template directory "{path}" does not exist.')


# ---------------------------------------------------------------------------
# Request / result models
# ---------------------------------------------------------------------------


class ScaffoldRequest(BaseModel):
    """Everything needed to create one project."""

    project_name: str = Field(..., min_length=1, description="npm package name")
    target_dir: Path = Field(..., description="Directory the project is created in")
    template: str = Field(..., description="Template name, e.g. 'node'")
    options: list[str] = Field(default_factory=list, description="Options chosen by the user")
    overwrite: bool = Field(default=False, description="Replace existing target contents")


class ScaffoldResult(BaseModel):
    """Summary of a finished scaffolding run."""

    project_root: Path
    template: str
    options: list[str]
    dependencies: ResolvedDependencies
    configured_files: list[Path] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Creates a project from a bundled template.

    Steps:
    - validate and prepare the target directory
    - copy the template directory
    - read and remove the template metadata file
    - update ``package.json`` (name, dependencies, scripts)
    - install option-specific configuration files
    """

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()
        self.resolver = DependencyResolver(max_depth=self.config.max_default_depth)
        self.manifest = ManifestUpdater(
            self.resolver, strict_versions=self.config.strict_versions
        )
        self.configurator = OptionConfigurator(self.config.config_files_dir)

    # -- Public API --------------------------------------------------------

    async def generate(self, request: ScaffoldRequest) -> ScaffoldResult:
        """Generate the project described by *request*.

        Raises:
            ScaffoldError: If the template, options or target directory are
                unusable, or the manifest cannot be updated.
        """
        template = get_template(request.template)
        options = select_options(template, request.options)
        template_path = self.config.template_path(template.template_dir)
        if not template_path.is_dir():
            raise TemplateNotFoundError(template_path)

        project_root = resolve_target_dir(request.target_dir)

        # 1. Prepare the target directory
        await asyncio.to_thread(
            prepare_target_dir, project_root, overwrite=request.overwrite
        )
        print_step(f"Using target directory {project_root}")

        # 2. Copy the template
        await self._copy_template(template_path, project_root)
        print_step(f"Copied template {template.label}")

        # 3. Template metadata is not part of the generated project
        template_config = await read_and_remove_template_config(
            project_root, self.config.template_config_file
        )

        # 4. Tailor package.json
        resolved = await self.manifest.update_file(
            project_root,
            request.project_name,
            options,
            template.project_dependency_overrides,
        )
        print_step("Updated package.json")

        # 5. Option-specific configuration
        configured = await self.configurator.configure(project_root, options, template_config)
        if configured:
            print_step(f"Configured {', '.join(p.name for p in configured)}")

        return ScaffoldResult(
            project_root=project_root,
            template=template.name,
            options=options,
            dependencies=resolved,
            configured_files=configured,
        )

    # -- Helpers -----------------------------------------------------------

    @staticmethod
    async def _copy_template(template_path: Path, project_root: Path) -> None:
        await asyncio.to_thread(
            shutil.copytree, template_path, project_root, dirs_exist_ok=True
        )
