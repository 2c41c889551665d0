"""create-project scaffolder -- copies a template and tailors it to the chosen options.

Quick usage::

    from create_project.scaffolder import ProjectGenerator, ScaffoldRequest

    request = ScaffoldRequest(
        project_name="my-app",
        target_dir="./my-app",
        template="react",
        options=["eslint", "prettier", "vitest"],
    )
    result = await ProjectGenerator().generate(request)
"""

from create_project.scaffolder.generator import (
    ProjectGenerator,
    ScaffoldRequest,
    ScaffoldResult,
    TemplateNotFoundError,
)
from create_project.scaffolder.manifest import (
    InvalidManifestError,
    ManifestNotFoundError,
    ManifestUpdater,
    UnresolvedVersionError,
)
from create_project.scaffolder.paths import TargetDirectoryError

__all__ = [
    "InvalidManifestError",
    "ManifestNotFoundError",
    "ManifestUpdater",
    "ProjectGenerator",
    "ScaffoldRequest",
    "ScaffoldResult",
    "TargetDirectoryError",
    "TemplateNotFoundError",
    "UnresolvedVersionError",
]
