"""Filesystem capability used by the workspace core.

Everything the scanner and Project.ensure() touch on disk goes through a
Filesystem instance handed to Code, so tests can swap it out.
"""

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirEntry:
    """One entry of a directory listing."""
    name: str
    is_dir: bool


class OsFilesystem:
    """Filesystem backed by the operating system."""

    def stat(self, path: Path) -> os.stat_result:
        return os.stat(path)

    def exists(self, path: Path) -> bool:
        return os.path.lexists(path)

    def read_dir(self, path: Path) -> list[DirEntry]:
        """List path, following symlinks to decide is_dir.

        Raises:
            OSError: if path cannot be read
        """
        entries = []
        with os.scandir(path) as it:
            for entry in it:
                try:
                    is_dir = entry.is_dir()
                except OSError:
                    is_dir = False
                entries.append(DirEntry(name=entry.name, is_dir=is_dir))
        return entries

    def mkdir_all(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def symlink_or_copy(self, src: Path, dst: Path) -> None:
        """Symlink dst to src, copying the tree when symlinks are unavailable."""
        try:
            os.symlink(src, dst, target_is_directory=True)
        except (NotImplementedError, PermissionError) as e:
            logger.debug(f"Symlink {dst} -> {src} failed ({e}), copying instead")
            shutil.copytree(src, dst, symlinks=True)
