"""``package.json`` updates for a freshly copied template.

The ``ManifestUpdater`` reads the copied manifest, renames the package,
resolves the dependency sections through the ``DependencyResolver``, adds
the npm scripts implied by the selected options and writes the file back.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

from create_project.errors import ScaffoldError
from create_project.resolver import (
    SECTIONS,
    DependencyResolver,
    OverrideRuleSet,
    ResolvedDependencies,
    sort_dependencies,
)
from create_project.utils import load_json, print_warning, save_json


MANIFEST_FILE_NAME = "package.json"

# Option -> npm scripts it adds.
OPTION_SCRIPTS: dict[str, dict[str, str]] = {
    "eslint": {"lint": "eslint ."},
    "vitest": {
        "test": "vitest run",
        "test:watch": "vitest watch",
        "test:coverage": "vitest run --coverage",
        "test:coverage:watch": "vitest watch --coverage",
    },
    "husky": {"prepare": "husky"},
}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ManifestNotFoundError(ScaffoldError):
    """Raised when the target directory has no ``package.json``."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory
        super().__init__(f'Could not find {MANIFEST_FILE_NAME} in "{directory}".')


class InvalidManifestError(ScaffoldError):
    """Raised when ``package.json`` is not valid JSON or not a JSON object."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f'Invalid {MANIFEST_FILE_NAME} "{path}": {reason}')


class UnresolvedVersionError(ScaffoldError):
    """Raised in strict mode when a dependency has no known version."""

    def __init__(self, names: Sequence[str]) -> None:
        self.names = list(names)
        super().__init__(f"No version known for: {', '.join(self.names)}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def base_dependencies(manifest: dict[str, Any]) -> dict[str, dict[str, str]]:
    """Extract the three dependency sections of *manifest* (missing -> empty)."""
    return {
        section.value: dict(manifest.get(section.value) or {})
        for section in SECTIONS
    }


def apply_scripts(options: Sequence[str], scripts: dict[str, str]) -> dict[str, str]:
    """Return *scripts* extended with the scripts of the selected *options*."""
    updated = dict(scripts)
    for option in options:
        updated.update(OPTION_SCRIPTS.get(option, {}))
    return updated


def apply_dependencies(manifest: dict[str, Any], resolved: ResolvedDependencies) -> None:
    """Write every non-empty resolved section into *manifest*, sorted."""
    for section in SECTIONS:
        entries = resolved.section(section)
        if entries:
            manifest[section.value] = sort_dependencies(entries)


# ---------------------------------------------------------------------------
# ManifestUpdater
# ---------------------------------------------------------------------------


class ManifestUpdater:
    """Applies project name, dependencies and scripts to ``package.json``."""

    def __init__(self, resolver: DependencyResolver, *, strict_versions: bool = False) -> None:
        self.resolver = resolver
        self.strict_versions = strict_versions

    def update(
        self,
        manifest: dict[str, Any],
        project_name: str,
        options: Sequence[str],
        overrides: OverrideRuleSet | None = None,
    ) -> tuple[dict[str, Any], ResolvedDependencies]:
        """Return an updated copy of *manifest* and the resolution result.

        Raises:
            UnresolvedVersionError: In strict mode, if any dependency is left
                without a version.
        """
        updated = dict(manifest)
        updated["name"] = project_name

        resolved = self.resolver.resolve(options, base_dependencies(manifest), overrides)
        if resolved.has_unresolved:
            names = resolved.unresolved_names()
            if self.strict_versions:
                raise UnresolvedVersionError(names)
            print_warning(
                f"No version known for {', '.join(names)} -- "
                "the entries are written with an empty version."
            )

        apply_dependencies(updated, resolved)
        updated["scripts"] = apply_scripts(options, updated.get("scripts") or {})
        return updated, resolved

    async def update_file(
        self,
        target_dir: Path,
        project_name: str,
        options: Sequence[str],
        overrides: OverrideRuleSet | None = None,
    ) -> ResolvedDependencies:
        """Update ``package.json`` inside *target_dir* in place.

        Raises:
            ManifestNotFoundError: If the file does not exist.
            InvalidManifestError: If the file is not a JSON object.
            UnresolvedVersionError: In strict mode, see :meth:`update`.
        """
        manifest_path = Path(target_dir) / MANIFEST_FILE_NAME
        if not manifest_path.is_file():
            raise ManifestNotFoundError(Path(target_dir))

        try:
            manifest = load_json(manifest_path)
        except json.JSONDecodeError as exc:
            raise InvalidManifestError(manifest_path, str(exc)) from exc
        if not isinstance(manifest, dict):
            raise InvalidManifestError(
                manifest_path, f"expected an object, got {type(manifest).__name__}"
            )
        updated, resolved = self.update(manifest, project_name, options, overrides)
        await save_json(updated, manifest_path)
        return resolved
