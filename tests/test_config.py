"""Tests for codetree.lib.config module."""

from pathlib import Path
from unittest.mock import patch

import pytest

from codetree.lib.config import (
    DEFAULT_EXCLUDE_PATTERN,
    DEFAULT_MAX_WORKERS,
    compile_exclude_pattern,
    load_workspace_config,
)
from codetree.lib.validate import ValidationError


@pytest.fixture(autouse=True)
def no_user_config(tmp_path, monkeypatch):
    """Point XDG_CONFIG_HOME at an empty directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


class TestLoadWorkspaceConfig:
    """Test load_workspace_config layering."""

    def test_defaults(self):
        config = load_workspace_config(environ={})
        assert config.code_path == Path.home() / "code"
        assert config.exclude_pattern.pattern == DEFAULT_EXCLUDE_PATTERN
        assert config.story_name == ""
        assert config.story_branch_name == ""
        assert config.max_workers == DEFAULT_MAX_WORKERS

    def test_reads_env_file(self, tmp_path):
        env_file = tmp_path / "codetree.env"
        env_file.write_text(
            '# workspace\n'
            f'CODE_PATH="{tmp_path / "code"}"\n'
            'CODE_EXCLUDE_PATTERN="^vendor$"\n'
            'STORY_NAME=STORY-1\n'
            'SCAN_MAX_WORKERS=2\n'
        )
        config = load_workspace_config(env_file, environ={})
        assert config.code_path == tmp_path / "code"
        assert config.exclude_pattern.pattern == "^vendor$"
        assert config.story_name == "STORY-1"
        assert config.max_workers == 2

    def test_reads_default_env_file(self, tmp_path):
        env_file = tmp_path / "xdg" / "codetree" / "codetree.env"
        env_file.parent.mkdir(parents=True)
        env_file.write_text("STORY_NAME=from-default\n")
        config = load_workspace_config(environ={})
        assert config.story_name == "from-default"

    def test_environment_overrides_file(self, tmp_path):
        env_file = tmp_path / "codetree.env"
        env_file.write_text("STORY_NAME=from-file\n")
        config = load_workspace_config(env_file, environ={"CODETREE_STORY_NAME": "from-env"})
        assert config.story_name == "from-env"

    def test_overrides_win(self):
        config = load_workspace_config(
            environ={"CODETREE_STORY_NAME": "from-env"},
            overrides={"STORY_NAME": "from-flag", "STORY_BRANCH_NAME": None},
        )
        assert config.story_name == "from-flag"
        assert config.story_branch_name == ""

    def test_empty_exclude_pattern_excludes_nothing(self, tmp_path):
        env_file = tmp_path / "codetree.env"
        env_file.write_text('CODE_EXCLUDE_PATTERN=""\n')
        config = load_workspace_config(env_file, environ={})
        assert config.exclude_pattern is None

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_workspace_config(tmp_path / "missing.env", environ={})

    def test_unknown_key_fails_validation(self, tmp_path):
        env_file = tmp_path / "codetree.env"
        env_file.write_text("CODE_PAHT=/typo\n")
        with pytest.raises(ValidationError, match="CODE_PAHT"):
            load_workspace_config(env_file, environ={})

    def test_invalid_max_workers(self, tmp_path):
        env_file = tmp_path / "codetree.env"
        env_file.write_text("SCAN_MAX_WORKERS=0\n")
        with pytest.raises(ValidationError):
            load_workspace_config(env_file, environ={})

    def test_story_name_with_slash(self):
        with pytest.raises(ValidationError):
            load_workspace_config(environ={}, overrides={"STORY_NAME": "a/b"})

    @patch("codetree.lib.config.envparse.load_env")
    def test_invalid_regex(self, mock_load_env, tmp_path):
        mock_load_env.return_value = {"CODE_EXCLUDE_PATTERN": "(unclosed"}
        with pytest.raises(ValueError, match="Invalid exclude pattern"):
            load_workspace_config(tmp_path / "codetree.env", environ={})


class TestCompileExcludePattern:
    """Test compile_exclude_pattern."""

    def test_empty(self):
        assert compile_exclude_pattern("") is None

    def test_compiles(self):
        assert compile_exclude_pattern(r"^\.snapshots$").search(".snapshots")
