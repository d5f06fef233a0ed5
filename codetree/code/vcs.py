"""VCS capability: the git operations the workspace core needs."""

from pathlib import Path

from codetree import git
from codetree.code.errors import VCSError


class GitVCS:
    """VCS backed by the git CLI.

    Operations raise VCSError with git's stderr on failure.
    """

    def clone(self, url: str, destination: Path) -> None:
        result = git.clone(url, destination)
        if not result.success:
            raise VCSError(f"git clone {url}", result.stderr)

    def current_branch_tip(self, path: Path) -> str:
        """SHA of HEAD in path."""
        sha = git.get_commit_sha(path, "HEAD")
        if not sha:
            raise VCSError(f"git rev-parse HEAD in {path}")
        return sha

    def branch_exists(self, path: Path, branch: str) -> bool:
        return git.branch_exists(path, branch)

    def is_repository(self, path: Path) -> bool:
        return git.is_git_repository(path)

    def add_worktree(
        self,
        repo: Path,
        destination: Path,
        branch: str,
        start_point: str | None = None,
    ) -> None:
        result = git.add_worktree(repo, destination, branch, start_point)
        if not result.success:
            raise VCSError(f"git worktree add {destination}", result.stderr)
