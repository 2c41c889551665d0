"""Tests for target directory helpers (create_project.scaffolder.paths)."""

from __future__ import annotations

from pathlib import Path

import pytest

from create_project.scaffolder.paths import (
    TargetDirectoryError,
    clear_dir,
    is_empty_dir,
    is_valid_package_name,
    is_valid_path,
    prepare_target_dir,
    project_name_from_path,
    resolve_target_dir,
)


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Path validation
# ---------------------------------------------------------------------------


class TestResolveTargetDir:
    def test_relative_path_becomes_absolute(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert resolve_target_dir("my-app") == tmp_path.resolve() / "my-app"

    def test_empty_path_is_rejected(self):
        with pytest.raises(TargetDirectoryError, match="empty"):
            resolve_target_dir("")

    def test_root_is_rejected(self):
        with pytest.raises(TargetDirectoryError, match="root"):
            resolve_target_dir("/")

    def test_trailing_period_is_rejected(self, tmp_path: Path):
        with pytest.raises(TargetDirectoryError, match="invalid"):
            resolve_target_dir(tmp_path / "bad.")

    @pytest.mark.parametrize("name", ["bad ", "tab\there", "x" * 256])
    def test_invalid_segments(self, name):
        assert not is_valid_path(Path("/tmp") / name)

    def test_valid_segments(self):
        assert is_valid_path(Path("/tmp/my-app/.config/v1.2"))


class TestProjectNames:
    def test_name_from_path(self):
        assert project_name_from_path("./projects/my-app") == "my-app"
        assert project_name_from_path("") == ""

    @pytest.mark.parametrize("name", ["my-app", "@scope/lib", "a.b_c~d"])
    def test_valid_package_names(self, name):
        assert is_valid_package_name(name)

    @pytest.mark.parametrize("name", ["My-App", ".hidden", "_private", "has space", ""])
    def test_invalid_package_names(self, name):
        assert not is_valid_package_name(name)


# ---------------------------------------------------------------------------
# Directory preparation
# ---------------------------------------------------------------------------


class TestDirectoryContents:
    def test_git_only_counts_as_empty(self, tmp_path: Path):
        (tmp_path / ".git").mkdir()
        assert is_empty_dir(tmp_path)
        (tmp_path / "README.md").write_text("x", encoding="utf-8")
        assert not is_empty_dir(tmp_path)

    def test_clear_dir_keeps_git(self, tmp_path: Path):
        (tmp_path / ".git").mkdir()
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "index.ts").write_text("", encoding="utf-8")
        (tmp_path / "package.json").write_text("{}", encoding="utf-8")

        clear_dir(tmp_path)

        assert [p.name for p in tmp_path.iterdir()] == [".git"]

    def test_clear_missing_dir_is_noop(self, tmp_path: Path):
        clear_dir(tmp_path / "missing")


class TestPrepareTargetDir:
    def test_creates_missing_directory(self, tmp_project_dir: Path):
        prepare_target_dir(tmp_project_dir)
        assert tmp_project_dir.is_dir()

    def test_non_empty_directory_needs_overwrite(self, tmp_project_dir: Path):
        tmp_project_dir.mkdir()
        (tmp_project_dir / "old.txt").write_text("x", encoding="utf-8")
        with pytest.raises(TargetDirectoryError, match="not empty"):
            prepare_target_dir(tmp_project_dir)

    def test_overwrite_clears_directory(self, tmp_project_dir: Path):
        tmp_project_dir.mkdir()
        (tmp_project_dir / "old.txt").write_text("x", encoding="utf-8")
        prepare_target_dir(tmp_project_dir, overwrite=True)
        assert list(tmp_project_dir.iterdir()) == []

    def test_file_in_the_way(self, tmp_project_dir: Path):
        tmp_project_dir.write_text("x", encoding="utf-8")
        with pytest.raises(TargetDirectoryError, match="not a directory"):
            prepare_target_dir(tmp_project_dir)
        prepare_target_dir(tmp_project_dir, overwrite=True)
        assert tmp_project_dir.is_dir()
