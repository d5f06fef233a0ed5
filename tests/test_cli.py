"""Tests for codetree.cli and codetree.commands."""

from types import SimpleNamespace
from unittest.mock import patch

import pytest

from codetree import cli
from codetree.code import Code
from codetree.commands.code import cmd_code_clone, cmd_code_list, cmd_code_pr_list
from codetree.commands.story import cmd_story_ensure, cmd_story_path
from codetree.lib.github import GitHubError, PullRequest

from conftest import EXCLUDE_PATTERN, IMPORT_PATHS, SNAPSHOT_IMPORT_PATH


@pytest.fixture
def code(code_dir, fake_vcs):
    return Code(code_dir, exclude_pattern=EXCLUDE_PATTERN, vcs=fake_vcs)


class TestParser:
    """Test argument parsing."""

    def test_clone(self):
        args = cli.build_parser().parse_args(["--code-path", "/code", "code", "clone", "https://github.com/o/r"])
        assert args.code_path == "/code"
        assert args.url == "https://github.com/o/r"
        assert args.func is cli.cmd_code_clone

    def test_pr_list_alias(self):
        args = cli.build_parser().parse_args(["code", "pr", "ls"])
        assert args.func is cli.cmd_code_pr_list

    def test_story_ensure(self):
        args = cli.build_parser().parse_args(["--story-name", "STORY-1", "story", "ensure", "github.com/o/r"])
        assert args.story_name == "STORY-1"
        assert args.import_path == "github.com/o/r"

    def test_command_required(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([])


class TestGetCode:
    """Test building the workspace from arguments."""

    def test_invalid_configuration_exits(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        args = cli.build_parser().parse_args(["--exclude-pattern", "(", "code", "list"])
        with pytest.raises(SystemExit) as exc:
            cli.get_code(args)
        assert exc.value.code == 2

    def test_main_lists_projects(self, code_dir, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
        assert cli.main(["--code-path", str(code_dir), "code", "list"]) == 0
        assert capsys.readouterr().out.split() == sorted(IMPORT_PATHS)


class TestCodeCommands:
    """Test ct code subcommands."""

    @pytest.fixture(autouse=True)
    def gh_available(self):
        with patch("codetree.commands.code.check_gh_available", return_value=(True, "")) as mock_check:
            yield mock_check

    def test_list_with_paths(self, code, code_dir, capsys):
        assert cmd_code_list(SimpleNamespace(paths=True), code) == 0
        out = capsys.readouterr().out
        assert str(code_dir / "repositories" / IMPORT_PATHS[0]) in out

    def test_clone(self, code, code_dir, capsys):
        url = f"file://{code_dir / '.snapshots' / SNAPSHOT_IMPORT_PATH}"
        assert cmd_code_clone(SimpleNamespace(url=url), code) == 0
        assert SNAPSHOT_IMPORT_PATH in capsys.readouterr().out

    def test_clone_existing_fails(self, code, capsys):
        assert cmd_code_clone(SimpleNamespace(url="https://github.com/owner1/repo1"), code) == 1
        assert "already exists" in capsys.readouterr().err

    def test_clone_missing_root_fails(self, tmp_path, fake_vcs, capsys):
        code = Code(tmp_path / "missing", vcs=fake_vcs)
        assert cmd_code_clone(SimpleNamespace(url="https://github.com/o/r"), code) == 1
        assert "ERROR" in capsys.readouterr().err

    def test_pr_list(self, code, code_dir, monkeypatch, capsys):
        monkeypatch.chdir(code_dir / "repositories" / IMPORT_PATHS[0])
        pr = PullRequest(number=7, title="Fix it", url="https://github.com/owner1/repo1/pull/7", created_at="2024-01-01")
        with patch("codetree.code.project.github.list_pull_requests", return_value=[pr]) as mock_list:
            assert cmd_code_pr_list(SimpleNamespace(), code) == 0
        mock_list.assert_called_once_with("owner1", "repo1")
        out = capsys.readouterr().out
        assert "Fix it" in out
        assert "https://github.com/owner1/repo1/pull/7" in out

    def test_pr_list_empty(self, code, code_dir, monkeypatch, capsys):
        monkeypatch.chdir(code_dir / "repositories" / IMPORT_PATHS[0])
        with patch("codetree.code.project.github.list_pull_requests", return_value=[]):
            assert cmd_code_pr_list(SimpleNamespace(), code) == 0
        assert "No pull requests found" in capsys.readouterr().out

    def test_pr_list_outside_project(self, code, code_dir, monkeypatch, capsys):
        monkeypatch.chdir(code_dir)
        assert cmd_code_pr_list(SimpleNamespace(), code) == 1
        assert "finding the project" in capsys.readouterr().err

    def test_pr_list_github_error(self, code, code_dir, monkeypatch, capsys):
        monkeypatch.chdir(code_dir / "repositories" / IMPORT_PATHS[0])
        with patch("codetree.code.project.github.list_pull_requests", side_effect=GitHubError("boom")):
            assert cmd_code_pr_list(SimpleNamespace(), code) == 1
        assert "boom" in capsys.readouterr().err

    def test_pr_list_without_gh(self, code, code_dir, monkeypatch, capsys, gh_available):
        monkeypatch.chdir(code_dir / "repositories" / IMPORT_PATHS[0])
        gh_available.return_value = (False, "GitHub CLI not authenticated")
        with patch("codetree.code.project.github.list_pull_requests") as mock_list:
            assert cmd_code_pr_list(SimpleNamespace(), code) == 1
        mock_list.assert_not_called()
        assert "not authenticated" in capsys.readouterr().err


class TestStoryCommands:
    """Test ct story subcommands."""

    def test_ensure_requires_story(self, code, capsys):
        assert cmd_story_ensure(SimpleNamespace(import_path=IMPORT_PATHS[0]), code) == 2
        assert "No story set" in capsys.readouterr().err

    def test_ensure(self, code, code_dir, capsys):
        code.set_story_name("STORY-123")
        assert cmd_story_ensure(SimpleNamespace(import_path=IMPORT_PATHS[0]), code) == 0
        expected = code_dir / "stories" / "STORY-123" / IMPORT_PATHS[0]
        assert capsys.readouterr().out.strip() == str(expected)
        assert expected.is_dir()

    def test_path_unknown_project(self, code, capsys):
        code.set_story_name("STORY-123")
        assert cmd_story_path(SimpleNamespace(import_path="github.com/x/y"), code) == 1
        assert "project not found" in capsys.readouterr().err

    def test_path_without_story(self, code, capsys):
        assert cmd_story_path(SimpleNamespace(import_path=IMPORT_PATHS[0]), code) == 1
        assert "no story configured" in capsys.readouterr().err
