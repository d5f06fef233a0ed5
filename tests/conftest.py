"""Shared fixtures: a workspace laid out on disk and a fake VCS."""

import re
from pathlib import Path

import pytest

IMPORT_PATHS = [
    "github.com/owner1/repo1",
    "github.com/owner2/repo2",
    "github.com/owner3/repo3",
]
SNAPSHOT_IMPORT_PATH = "github.com/owner4/repo4"
EXCLUDE_PATTERN = re.compile(r"^\.snapshots$")


def create_projects(root: Path) -> None:
    """Create repositories/<import path> for each project plus an excluded snapshot."""
    for import_path in IMPORT_PATHS:
        (root / "repositories" / import_path).mkdir(parents=True)
    (root / ".snapshots" / SNAPSHOT_IMPORT_PATH).mkdir(parents=True)


class FakeVCS:
    """Records git operations and fakes their effect on disk."""

    def __init__(self, tip: str = "abc123"):
        self.tip = tip
        self.calls = []
        self.branches: set[str] = set()
        self.non_repositories: set[Path] = set()
        self.fail_clone = False

    def clone(self, url, destination):
        self.calls.append(("clone", url, Path(destination)))
        if self.fail_clone:
            from codetree.code import VCSError
            raise VCSError(f"git clone {url}", "fatal: repository not found")
        Path(destination).mkdir(parents=True)

    def current_branch_tip(self, path):
        self.calls.append(("current_branch_tip", Path(path)))
        return self.tip

    def branch_exists(self, path, branch):
        return branch in self.branches

    def is_repository(self, path):
        return Path(path) not in self.non_repositories

    def add_worktree(self, repo, destination, branch, start_point=None):
        self.calls.append(("add_worktree", Path(repo), Path(destination), branch, start_point))
        Path(destination).mkdir(parents=True)
        self.branches.add(branch)


@pytest.fixture
def code_dir(tmp_path):
    root = tmp_path / "code"
    root.mkdir()
    create_projects(root)
    return root


@pytest.fixture
def fake_vcs():
    return FakeVCS()
