"""Per-option project configuration.

Handles the configuration steps that need no template rendering: copying
static config files (``.prettierrc.json``, ``.editorconfig``, the Vitest
config and setup files) and editing a ``tsconfig`` for Vitest.  The
template's ``template.config.json`` supplies per-template settings and is
removed from the generated project once read.
"""

from __future__ import annotations

import asyncio
import json
import shutil
from pathlib import Path
from typing import Any, Sequence

from create_project.errors import ScaffoldError
from create_project.utils import load_json, load_jsonc, print_warning, save_json


# Option -> static files copied from the config files directory.
STATIC_CONFIG_FILES: dict[str, list[str]] = {
    "prettier": [".prettierrc.json"],
    "editorconfig": [".editorconfig"],
}

# Options whose files are produced by rendering, which this tool does not do.
UNGENERATED_OPTIONS: tuple[str, ...] = ("githooks", "githubActions")

VITEST_GLOBALS_TYPE = "vitest/globals"
JEST_DOM_TYPE = "@testing-library/jest-dom"
VITEST_CONFIG_FILE = "vitest.config.ts"
PROJECT_TSCONFIG = "tsconfig.json"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigFileFormatError(ScaffoldError):
    """Raised when a JSON config file is malformed or not a JSON object."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f'Cannot edit "{path}": {reason}')


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_object(path: Path, *, comments: bool = False) -> dict[str, Any]:
    try:
        data = load_jsonc(path) if comments else load_json(path)
    except json.JSONDecodeError as exc:
        raise ConfigFileFormatError(path, str(exc)) from exc
    if not isinstance(data, dict):
        raise ConfigFileFormatError(path, f"expected an object, got {type(data).__name__}")
    return data


async def read_and_remove_template_config(target_dir: Path, file_name: str) -> dict[str, Any]:
    """Return the template metadata file's contents and delete it from *target_dir*.

    A missing file yields an empty mapping.
    """
    config_path = Path(target_dir) / file_name
    if not config_path.is_file():
        return {}
    data = _load_object(config_path)
    await asyncio.to_thread(config_path.unlink)
    return data


def template_setting(template_config: dict[str, Any], option: str, key: str) -> Any:
    """Return ``template_config[option]["other"][key]`` or ``None``.

    An option entry may also be a bare string (a template file name) in
    which case it carries no extra settings.
    """
    entry = template_config.get(option)
    if not isinstance(entry, dict):
        return None
    return (entry.get("other") or {}).get(key)


async def add_types_to_tsconfig(tsconfig_path: Path, *types: str) -> list[str]:
    """Append *types* to ``compilerOptions.types`` of *tsconfig_path*.

    Entries already present are not duplicated.  Comments in the file are
    not preserved.

    Returns:
        The resulting ``types`` list.
    """
    tsconfig = _load_object(tsconfig_path, comments=True)
    compiler_options = tsconfig.setdefault("compilerOptions", {})
    current: list[str] = list(compiler_options.get("types") or [])
    for type_name in types:
        if type_name not in current:
            current.append(type_name)
    compiler_options["types"] = current
    await save_json(tsconfig, tsconfig_path)
    return current


async def include_file_in_tsconfig(tsconfig_path: Path, file_name: str) -> list[str]:
    """Append *file_name* to the ``include`` list of *tsconfig_path*.

    Returns:
        The resulting ``include`` list.
    """
    tsconfig = _load_object(tsconfig_path, comments=True)
    include: list[str] = list(tsconfig.get("include") or [])
    if file_name not in include:
        include.append(file_name)
    tsconfig["include"] = include
    await save_json(tsconfig, tsconfig_path)
    return include


def vitest_config_source(options: Sequence[str]) -> str:
    """Name of the bundled Vitest config matching the selected *options*."""
    if "react" not in options:
        return "vitest.config.node.ts"
    if "reactTestingLibrary" in options:
        return "vitest.config.react-testing-library.ts"
    return "vitest.config.react.ts"


# ---------------------------------------------------------------------------
# OptionConfigurator
# ---------------------------------------------------------------------------


class OptionConfigurator:
    """Applies option-specific configuration to a generated project."""

    def __init__(self, config_files_dir: Path) -> None:
        self.config_files_dir = Path(config_files_dir)

    async def configure(
        self,
        target_dir: Path,
        options: Sequence[str],
        template_config: dict[str, Any],
    ) -> list[Path]:
        """Run every configuration step for the selected *options*.

        Returns:
            Paths of the files written or modified.
        """
        for option in options:
            if option in UNGENERATED_OPTIONS:
                print_warning(
                    f"No files are generated for '{option}'; add its configuration manually."
                )

        written = await self.install_static_files(target_dir, options)
        if "vitest" in options:
            written.extend(await self.configure_vitest(target_dir, options, template_config))
        return written

    async def _copy(self, file_name: str, target_dir: Path, dest_name: str | None = None) -> Path:
        destination = Path(target_dir) / (dest_name or file_name)
        await asyncio.to_thread(shutil.copyfile, self.config_files_dir / file_name, destination)
        return destination

    async def install_static_files(self, target_dir: Path, options: Sequence[str]) -> list[Path]:
        """Copy the static config files of the selected *options* into *target_dir*."""
        written: list[Path] = []
        for option in options:
            for file_name in STATIC_CONFIG_FILES.get(option, []):
                written.append(await self._copy(file_name, target_dir))
        return written

    async def configure_vitest(
        self,
        target_dir: Path,
        options: Sequence[str],
        template_config: dict[str, Any],
    ) -> list[Path]:
        """Set up Vitest in a generated project.

        Registers the globals (and jest-dom matcher) types in the template's
        tsconfig, copies ``vitest.config.ts`` and includes it in the project
        tsconfig.  With ``reactTestingLibrary`` the test setup file is copied
        and included as well.

        Returns:
            Paths of the files written or modified.
        """
        tsconfig_name = template_setting(template_config, "vitest", "globalsTsconfig")
        if not tsconfig_name:
            print_warning("No vitest.other.globalsTsconfig in the template config -- skipping.")
            return []

        target = Path(target_dir)
        testing_library = "reactTestingLibrary" in options
        globals_tsconfig = target / tsconfig_name
        types = [VITEST_GLOBALS_TYPE]
        if testing_library:
            types.append(JEST_DOM_TYPE)
        await add_types_to_tsconfig(globals_tsconfig, *types)
        written = [globals_tsconfig]

        vitest_config = await self._copy(vitest_config_source(options), target, VITEST_CONFIG_FILE)
        project_tsconfig = target / PROJECT_TSCONFIG
        await include_file_in_tsconfig(project_tsconfig, VITEST_CONFIG_FILE)
        written.append(vitest_config)
        if project_tsconfig not in written:
            written.append(project_tsconfig)

        if testing_library:
            setup_file = template_setting(template_config, "vitest", "testSetupFileName")
            setup_tsconfig = template_setting(template_config, "vitest", "testSetupTsconfig")
            if not setup_file or not setup_tsconfig:
                print_warning(
                    "No vitest.other.testSetupFileName/testSetupTsconfig in the template "
                    "config -- skipping the test setup file."
                )
                return written
            written.append(await self._copy(setup_file, target))
            await include_file_in_tsconfig(target / setup_tsconfig, setup_file)
            if target / setup_tsconfig not in written:
                written.append(target / setup_tsconfig)

        return written
