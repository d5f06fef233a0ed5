"""
In-memory registry of the projects found in a workspace.

The registry keeps one flat import_path -> Project map, which makes an import
path unique per workspace root, plus a Profile -> Story -> Project grouping
mirroring where each project was discovered. All additions are get-or-create,
so overlapping or repeated discovery never produces duplicates.
"""

import threading
from contextlib import contextmanager
from typing import Callable, Iterator, TypeVar

from codetree.code.errors import (
    ProfileNotFoundError,
    ProjectNotFoundError,
    StoryNotFoundError,
)

T = TypeVar("T")

DEFAULT_STORY_NAME = "base"


class ReadWriteLock:
    """Lock allowing many concurrent readers or a single writer.

    Waiting writers block new readers so a steady stream of queries cannot
    starve a scan.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


def _get_or_create(lock: ReadWriteLock, items: dict[str, T], key: str, factory: Callable[[], T]) -> T:
    with lock.read_locked():
        existing = items.get(key)
    if existing is not None:
        return existing
    with lock.write_locked():
        # Another writer may have won the race between the two locks
        existing = items.get(key)
        if existing is None:
            existing = items[key] = factory()
        return existing


class Story:
    """A named unit of work grouping projects."""

    def __init__(self, lock: ReadWriteLock, name: str):
        self._lock = lock
        self.name = name
        self._projects = {}

    def __repr__(self) -> str:
        return f"Story({self.name!r})"

    def add_project(self, project):
        """Attach project, returning the instance already attached under its import path if any."""
        return _get_or_create(self._lock, self._projects, project.import_path, lambda: project)

    def get_project(self, import_path: str):
        with self._lock.read_locked():
            project = self._projects.get(import_path)
        if project is None:
            raise ProjectNotFoundError(import_path)
        return project

    def projects(self) -> list:
        with self._lock.read_locked():
            return list(self._projects.values())


class Profile:
    """A top-level namespace of the workspace, owning stories."""

    def __init__(self, lock: ReadWriteLock, name: str):
        self._lock = lock
        self.name = name
        self._stories: dict[str, Story] = {}

    def __repr__(self) -> str:
        return f"Profile({self.name!r})"

    def add_story(self, name: str) -> Story:
        name = name or DEFAULT_STORY_NAME
        return _get_or_create(self._lock, self._stories, name, lambda: Story(self._lock, name))

    def get_story(self, name: str) -> Story:
        name = name or DEFAULT_STORY_NAME
        with self._lock.read_locked():
            story = self._stories.get(name)
        if story is None:
            raise StoryNotFoundError(name)
        return story

    def stories(self) -> list[Story]:
        with self._lock.read_locked():
            return list(self._stories.values())

    def projects(self) -> list:
        """Projects of every story in this profile, each listed once."""
        seen = {}
        for story in self.stories():
            for project in story.projects():
                seen.setdefault(project.import_path, project)
        return list(seen.values())


class Registry:
    """Profiles and projects of one workspace root, guarded by one lock."""

    def __init__(self):
        self._lock = ReadWriteLock()
        self._profiles: dict[str, Profile] = {}
        self._projects = {}

    def add_profile(self, name: str) -> Profile:
        return _get_or_create(self._lock, self._profiles, name, lambda: Profile(self._lock, name))

    def get_profile(self, name: str) -> Profile:
        with self._lock.read_locked():
            profile = self._profiles.get(name)
        if profile is None:
            raise ProfileNotFoundError(name)
        return profile

    def profiles(self) -> list[Profile]:
        with self._lock.read_locked():
            return list(self._profiles.values())

    def add_project(self, import_path: str, factory: Callable):
        """Return the project registered under import_path, creating it with factory() if absent."""
        return _get_or_create(self._lock, self._projects, import_path, factory)

    def register(self, profile_name: str, story_name: str, import_path: str, factory: Callable):
        """Get-or-create the project and attach it to profile_name/story_name."""
        project = self.add_project(import_path, factory)
        return self.add_profile(profile_name).add_story(story_name).add_project(project)

    def has_project(self, import_path: str) -> bool:
        with self._lock.read_locked():
            return import_path in self._projects

    def get_project(self, import_path: str):
        with self._lock.read_locked():
            project = self._projects.get(import_path)
        if project is None:
            raise ProjectNotFoundError(import_path)
        return project

    def projects(self) -> list:
        """Every registered project, in no particular order."""
        with self._lock.read_locked():
            return list(self._projects.values())
