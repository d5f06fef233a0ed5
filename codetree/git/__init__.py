"""Git operations for codetree.

Thin wrappers over the git CLI, used by the VCS capability in
``codetree.code.vcs``.

Return type conventions:
- Functions returning GitResult: Caller must check .success before using output.
  Examples: clone(), add_worktree()
- Functions returning bool: True on success/condition met, False otherwise.
  Examples: branch_exists(), is_git_repository()
- Functions returning parsed values: Return None on failure.
  Examples: get_current_branch(), get_commit_sha()
"""

from codetree.git.runner import GitResult, run_git
from codetree.git.branch import (
    get_current_branch,
    branch_exists,
    get_commit_sha,
    is_git_repository,
)
from codetree.git.worktree import (
    clone,
    add_worktree,
)

__all__ = [
    # runner
    "GitResult",
    "run_git",
    # branch
    "get_current_branch",
    "branch_exists",
    "get_commit_sha",
    "is_git_repository",
    # worktree
    "clone",
    "add_worktree",
]
