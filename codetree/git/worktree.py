"""Git clone and worktree operations."""

from pathlib import Path

from codetree.git.runner import run_git, GitResult, CLONE_TIMEOUT


def clone(url: str, destination: Path) -> GitResult:
    """Clone url into destination. The parent of destination must exist."""
    return run_git(["clone", url, str(destination)], timeout=CLONE_TIMEOUT)


def add_worktree(
    repo: Path,
    destination: Path,
    branch: str,
    start_point: str | None = None,
) -> GitResult:
    """
    Add a worktree of repo at destination.

    With a start_point, branch is created from it (``worktree add -b``).
    Without one, branch must already exist and is checked out as is.
    """
    if start_point:
        args = ["worktree", "add", "-b", branch, str(destination), start_point]
    else:
        args = ["worktree", "add", str(destination), branch]
    return run_git(args, repo, timeout=60)
