"""Shared pytest fixtures for the create-project test suite.

Provides reusable fixtures for:
- Temporary target directories
- A Config pointing at the bundled templates
- A minimal on-disk template with a ``template.config.json``
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from create_project.config import Config


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Target directory that does not exist yet (auto-cleanup)."""
    yield tmp_path / "test-project"


@pytest.fixture
def config() -> Config:
    """Default configuration using the bundled templates."""
    return Config()


# ---------------------------------------------------------------------------
# Template fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mini_template(tmp_path: Path) -> Path:
    """A small template directory with a commented tsconfig."""
    template_dir = tmp_path / "templates" / "template-mini"
    (template_dir / "src").mkdir(parents=True)
    (template_dir / "package.json").write_text(
        json.dumps(
            {
                "name": "template-mini",
                "version": "0.0.0",
                "scripts": {"build": "tsc"},
                "devDependencies": {"typescript": ""},
            },
            indent=2,
        ),
        encoding="utf-8",
    )
    (template_dir / "tsconfig.json").write_text(
        "{\n"
        "  // compiler settings\n"
        '  "compilerOptions": { "strict": true },\n'
        '  "include": ["src/**/*.ts"],\n'
        "}\n",
        encoding="utf-8",
    )
    (template_dir / "src" / "index.ts").write_text("export {};\n", encoding="utf-8")
    (template_dir / "template.config.json").write_text(
        json.dumps({"vitest": {"other": {"globalsTsconfig": "tsconfig.json"}}}),
        encoding="utf-8",
    )
    return template_dir
