"""Target directory helpers.

Validates the directory a project is created in, derives a project name from
it and prepares it (emptiness checks, clearing) before the template copy.
"""

from __future__ import annotations

import re
import shutil
from pathlib import Path

from create_project.errors import ScaffoldError


class TargetDirectoryError(ScaffoldError):
    """Raised when the target directory cannot be used."""


# Control characters are rejected even though POSIX allows them, as are
# names ending in a space or a period.
_SEGMENT_PATTERN = re.compile(r"^[^\x00-\x1f/][^\x00-\x1f/]{0,254}(?<![ .])$")

_PACKAGE_NAME_PATTERN = re.compile(
    r"^(?:@[a-z\d\-*~][a-z\d\-*._~]*/)?[a-z\d\-~][a-z\d\-._~]*$"
)

DEFAULT_PACKAGE_NAME = "my-project"


def is_valid_path(path: Path) -> bool:
    """Return ``True`` if every segment of *path* is a usable file name."""
    for part in path.parts:
        if part in (path.anchor, "", ".", ".."):
            continue
        if len(part) > 255 or not _SEGMENT_PATTERN.match(part):
            return False
    return True


def resolve_target_dir(target: str | Path) -> Path:
    """Resolve *target* to an absolute path and validate it.

    Raises:
        TargetDirectoryError: If the path is empty, the filesystem root, or
            has a segment that is not a valid file name.
    """
    if not str(target):
        raise TargetDirectoryError("Target directory path cannot be an empty string.")
    resolved = Path(target).expanduser().resolve()
    if resolved == Path(resolved.anchor):
        raise TargetDirectoryError("Target directory cannot be the root.")
    if not is_valid_path(resolved):
        raise TargetDirectoryError(
            f'Path "{resolved}" is invalid. Path names must not end in a period '
            "or an empty space."
        )
    return resolved


def project_name_from_path(path: str | Path) -> str:
    """Return the last segment of *path*, used as the default project name."""
    if not str(path):
        return ""
    return Path(path).name


def is_valid_package_name(name: str) -> bool:
    """Return ``True`` if *name* is a valid npm package name."""
    return bool(_PACKAGE_NAME_PATTERN.match(name))


def is_empty_dir(path: Path) -> bool:
    """Return ``True`` if *path* holds nothing but an optional ``.git`` entry."""
    entries = [entry.name for entry in path.iterdir()]
    return not entries or entries == [".git"]


def clear_dir(path: Path) -> None:
    """Remove everything inside *path* except ``.git``."""
    if not path.exists():
        return
    for entry in path.iterdir():
        if entry.name == ".git":
            continue
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()


def prepare_target_dir(path: Path, *, overwrite: bool = False) -> None:
    """Make sure *path* is an empty directory the template can be copied into.

    Args:
        path: Resolved target directory.
        overwrite: Delete a file in the way, or existing directory contents
            (``.git`` is kept).

    Raises:
        TargetDirectoryError: If the target is a file or a non-empty
            directory and *overwrite* is not set.
    """
    if path.exists() and not path.is_dir():
        if not overwrite:
            raise TargetDirectoryError(
                f'Target "{path}" is not a directory. Use --overwrite to replace it.'
            )
        path.unlink()

    if path.is_dir() and not is_empty_dir(path):
        if not overwrite:
            raise TargetDirectoryError(
                f'Target directory "{path}" is not empty. Use --overwrite to remove '
                "existing files."
            )
        clear_dir(path)

    path.mkdir(parents=True, exist_ok=True)
