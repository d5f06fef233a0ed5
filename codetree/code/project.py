"""A project: one canonical repository plus an optional story working copy."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from codetree.code.errors import (
    NoStoryConfiguredError,
    RepositoryMissingError,
    UnsupportedHostError,
)
from codetree.lib import github

if TYPE_CHECKING:
    from codetree.code.workspace import Code

logger = logging.getLogger(__name__)

REPOSITORIES_DIR = "repositories"
STORIES_DIR = "stories"


class Project:
    """
    A project identified by its import path (host/owner/repo).

    The story it reports is the one currently configured on the owning Code,
    so setting a story name after the scan applies to every project.
    """

    def __init__(self, code: "Code", import_path: str, namespace: str = REPOSITORIES_DIR):
        self._code = code
        self._import_path = import_path
        self.namespace = namespace

    def __str__(self) -> str:
        return self._import_path

    def __repr__(self) -> str:
        return f"Project({self._import_path!r})"

    @property
    def import_path(self) -> str:
        return self._import_path

    @property
    def story_name(self) -> str:
        return self._code.story_name

    @property
    def story_branch_name(self) -> str:
        return self._code.story_branch_name

    def repository_path(self) -> Path:
        """Path of the canonical clone."""
        return self._code.repositories_dir / self._import_path

    def story_path(self) -> Path:
        """Path of the story working copy.

        Raises:
            NoStoryConfiguredError: if no story name is set
        """
        if not self.story_name:
            raise NoStoryConfiguredError(self._import_path)
        return self._code.stories_dir / self.story_name / self._import_path

    def ensure(self) -> Path:
        """
        Materialize the story working copy if it doesn't exist yet.

        Git repositories get a worktree on the story branch, created from the
        canonical repository's current tip when the branch is new. Anything
        else is linked in with symlink_or_copy. Returns the story path.

        Raises:
            NoStoryConfiguredError: if no story name is set
            RepositoryMissingError: if the canonical repository is not on disk
            VCSError: if a git operation fails
        """
        story_path = self.story_path()
        fs = self._code.fs
        if fs.exists(story_path):
            return story_path

        repository_path = self.repository_path()
        if not fs.exists(repository_path):
            raise RepositoryMissingError(self._import_path, str(repository_path))
        fs.mkdir_all(story_path.parent)

        vcs = self._code.vcs
        if not vcs.is_repository(repository_path):
            logger.debug(f"{self._import_path} is not a git repository, linking {story_path}")
            fs.symlink_or_copy(repository_path, story_path)
            return story_path

        branch = self.story_branch_name
        if vcs.branch_exists(repository_path, branch):
            logger.debug(f"Adding worktree {story_path} on existing branch {branch}")
            vcs.add_worktree(repository_path, story_path, branch)
        else:
            tip = vcs.current_branch_tip(repository_path)
            logger.debug(f"Adding worktree {story_path} on new branch {branch} from {tip}")
            vcs.add_worktree(repository_path, story_path, branch, start_point=tip)
        return story_path

    def list_pull_requests(self) -> list[github.PullRequest]:
        """
        List the open pull requests of this project on GitHub.

        Raises:
            UnsupportedHostError: if the project isn't hosted on github.com
            GitHubError: if the gh CLI fails
        """
        host, _, rest = self._import_path.partition("/")
        if host != github.GITHUB_HOST:
            raise UnsupportedHostError(self._import_path, host)
        owner, _, repo = rest.partition("/")
        return github.list_pull_requests(owner, repo)
