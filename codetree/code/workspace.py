"""
The workspace root.

Code composes the scanner, the registry and path resolution, and adds the
only mutating operation besides Project.ensure(): clone().
"""

import logging
import os
import re
import threading
from pathlib import Path

from codetree.code.errors import (
    CodePathEmptyError,
    NotScannedError,
    ProjectAlreadyExistsError,
    ProjectNotFoundError,
)
from codetree.code.fs import OsFilesystem
from codetree.code.importpath import import_path_from_url
from codetree.code.project import Project, REPOSITORIES_DIR, STORIES_DIR
from codetree.code.registry import Profile, Registry
from codetree.code.scanner import IMPORT_PATH_DEPTH, Scanner
from codetree.code.vcs import GitVCS
from codetree.lib.config import DEFAULT_MAX_WORKERS, WorkspaceConfig

logger = logging.getLogger(__name__)


class Code:
    """
    A workspace root holding canonical clones and story working copies.

    scan() must succeed before any query; queries raise NotScannedError
    otherwise. Filesystem and VCS capabilities are injected so tests can
    replace them.
    """

    def __init__(
        self,
        path: str | Path,
        exclude_pattern: re.Pattern | None = None,
        fs=None,
        vcs=None,
        story_name: str = "",
        story_branch_name: str = "",
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        self._path = Path(path) if path else None
        self.exclude_pattern = exclude_pattern
        self.fs = fs if fs is not None else OsFilesystem()
        self.vcs = vcs if vcs is not None else GitVCS()
        self.max_workers = max_workers
        self._story_name = story_name
        self._story_branch_name = story_branch_name
        self._registry = Registry()
        self._scanned = False
        # Serializes clone()'s check-and-clone sequence
        self._clone_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: WorkspaceConfig, fs=None, vcs=None) -> "Code":
        return cls(
            config.code_path,
            exclude_pattern=config.exclude_pattern,
            fs=fs,
            vcs=vcs,
            story_name=config.story_name,
            story_branch_name=config.story_branch_name,
            max_workers=config.max_workers,
        )

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def repositories_dir(self) -> Path:
        return self._path / REPOSITORIES_DIR

    @property
    def stories_dir(self) -> Path:
        return self._path / STORIES_DIR

    # Story context

    @property
    def story_name(self) -> str:
        return self._story_name

    def set_story_name(self, name: str) -> None:
        self._story_name = name or ""

    @property
    def story_branch_name(self) -> str:
        """The story branch, falling back to the story name."""
        return self._story_branch_name or self._story_name

    def set_story_branch_name(self, name: str) -> None:
        self._story_branch_name = name or ""

    # Scanning

    def validate(self) -> None:
        """
        Raises:
            CodePathEmptyError: if the path is empty or does not exist
        """
        if self._path is None or not str(self._path):
            raise CodePathEmptyError()
        try:
            self.fs.stat(self._path)
        except OSError:
            raise CodePathEmptyError(str(self._path)) from None

    def _register(self, namespace: str, import_path: str) -> Project:
        return self._registry.register(
            namespace,
            self._story_name,
            import_path,
            lambda: Project(self, import_path, namespace),
        )

    def scan(self) -> None:
        """
        Discover every project under the root.

        Repeated scans merge into the registry. Unreadable namespaces are
        logged and skipped.

        Raises:
            CodePathEmptyError: if the root is empty or does not exist
        """
        self.validate()
        scanner = Scanner(self.fs, self.exclude_pattern, self._register, self.max_workers)
        found = scanner.scan(self._path)
        logger.debug(f"Scanned {self._path}: {found} project(s)")
        self._scanned = True

    def _check_scanned(self) -> None:
        if not self._scanned:
            raise NotScannedError()

    # Queries

    def profile(self, name: str) -> Profile:
        """
        Raises:
            NotScannedError, ProfileNotFoundError
        """
        self._check_scanned()
        return self._registry.get_profile(name)

    def projects(self) -> list[Project]:
        """Every registered project, in no particular order."""
        self._check_scanned()
        return self._registry.projects()

    def sorted_projects(self) -> list[Project]:
        return sorted(self.projects(), key=lambda p: p.import_path)

    def get_project_by_relative_path(self, p: str) -> Project:
        """
        Look up a project by its import path.

        Raises:
            NotScannedError, ProjectNotFoundError
        """
        self._check_scanned()
        return self._registry.get_project(p)

    def get_project_by_absolute_path(self, p: str | Path) -> Project:
        """
        Look up the project whose canonical clone is exactly p.

        Paths inside a project's tree are not resolved to that project.

        Raises:
            NotScannedError, ProjectNotFoundError
        """
        self._check_scanned()
        # Symlinked roots resolve the same way os.getcwd() reports them
        path = os.path.realpath(str(p))
        repositories = os.path.realpath(str(self.repositories_dir))
        if os.path.commonpath([path, repositories]) != repositories or path == repositories:
            raise ProjectNotFoundError(str(p))
        import_path = Path(os.path.relpath(path, repositories)).as_posix()
        if len(import_path.split("/")) != IMPORT_PATH_DEPTH:
            raise ProjectNotFoundError(str(p))
        return self._registry.get_project(import_path)

    # Cloning

    def clone(self, url: str) -> Project:
        """
        Clone url into the repositories directory and register it.

        Raises:
            NotScannedError: if scan() has not run
            InvalidURLError: if no import path can be derived from url
            ProjectAlreadyExistsError: if the import path is registered
            VCSError: if git clone fails
        """
        self._check_scanned()
        import_path = import_path_from_url(url)

        with self._clone_lock:
            if self._registry.has_project(import_path):
                raise ProjectAlreadyExistsError(import_path)

            destination = self.repositories_dir / import_path
            self.fs.mkdir_all(destination.parent)
            logger.debug(f"Cloning {url} into {destination}")
            self.vcs.clone(url, destination)

            return self._register(REPOSITORIES_DIR, import_path)
