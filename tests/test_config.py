"""Unit tests for Config (create_project.config).

Tests cover:
- Defaults and bundled template paths
- Validation of max_default_depth
- save/load round trip
- from_env
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from create_project.config import Config


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestConfigDefaults:
    @pytest.mark.unit
    def test_defaults(self):
        cfg = Config()
        assert cfg.template_config_file == "template.config.json"
        assert cfg.strict_versions is False
        assert cfg.max_default_depth == 8

    @pytest.mark.unit
    def test_bundled_directories_exist(self):
        cfg = Config()
        assert cfg.templates_dir.is_dir()
        assert (cfg.config_files_dir / ".prettierrc.json").is_file()

    @pytest.mark.unit
    def test_template_path(self):
        cfg = Config(templates_dir=Path("/srv/templates"))
        assert cfg.template_path("template-node") == Path("/srv/templates/template-node")

    @pytest.mark.unit
    def test_max_default_depth_must_be_positive(self):
        with pytest.raises(ValidationError):
            Config(max_default_depth=0)


# ---------------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------------


class TestConfigSaveLoad:
    @pytest.mark.unit
    def test_round_trip(self, tmp_path: Path):
        cfg = Config(strict_versions=True, max_default_depth=3)
        path = cfg.save(tmp_path / "nested" / "config.json")

        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8"))["strict_versions"] is True
        assert Config.load(path) == cfg


class TestConfigFromEnv:
    @pytest.mark.unit
    def test_reads_variables(self, tmp_path: Path):
        env = {
            "CREATE_PROJECT_TEMPLATES_DIR": str(tmp_path),
            "CREATE_PROJECT_STRICT_VERSIONS": "true",
            "CREATE_PROJECT_MAX_DEFAULT_DEPTH": "4",
        }
        with patch.dict(os.environ, env):
            cfg = Config.from_env()
        assert cfg.templates_dir == tmp_path
        assert cfg.strict_versions is True
        assert cfg.max_default_depth == 4

    @pytest.mark.unit
    def test_falsey_strict_flag(self):
        with patch.dict(os.environ, {"CREATE_PROJECT_STRICT_VERSIONS": "no"}):
            assert Config.from_env().strict_versions is False

    @pytest.mark.unit
    def test_no_variables_gives_defaults(self):
        cleared = {k: v for k, v in os.environ.items() if not k.startswith("CREATE_PROJECT_")}
        with patch.dict(os.environ, cleared, clear=True):
            assert Config.from_env() == Config()
