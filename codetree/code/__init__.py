"""Workspace core: scanning, project registry, path resolution and cloning.

Layout of a workspace root:

    <root>/repositories/<host>/<owner>/<repo>               canonical clones
    <root>/stories/<story>/<host>/<owner>/<repo>            story working copies
"""

from codetree.code.errors import (
    CodeError,
    CodePathEmptyError,
    NotScannedError,
    ProfileNotFoundError,
    StoryNotFoundError,
    ProjectNotFoundError,
    InvalidURLError,
    ProjectAlreadyExistsError,
    NoStoryConfiguredError,
    RepositoryMissingError,
    UnsupportedHostError,
    VCSError,
)
from codetree.code.fs import DirEntry, OsFilesystem
from codetree.code.vcs import GitVCS
from codetree.code.importpath import import_path_from_url
from codetree.code.project import Project
from codetree.code.registry import Profile, Story, Registry, DEFAULT_STORY_NAME
from codetree.code.workspace import Code

__all__ = [
    # errors
    "CodeError",
    "CodePathEmptyError",
    "NotScannedError",
    "ProfileNotFoundError",
    "StoryNotFoundError",
    "ProjectNotFoundError",
    "InvalidURLError",
    "ProjectAlreadyExistsError",
    "NoStoryConfiguredError",
    "RepositoryMissingError",
    "UnsupportedHostError",
    "VCSError",
    # capabilities
    "DirEntry",
    "OsFilesystem",
    "GitVCS",
    # model
    "import_path_from_url",
    "Project",
    "Profile",
    "Story",
    "Registry",
    "DEFAULT_STORY_NAME",
    "Code",
]
