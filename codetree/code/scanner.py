"""
Workspace scanner.

Every top-level directory of the workspace root is a namespace (profile),
scanned on its own worker thread. Inside a namespace, directories three
levels deep (host/owner/repo) are projects. Unreadable directories are
logged and skipped so a partly broken workspace still yields what it can.
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable

from codetree.code.project import STORIES_DIR

logger = logging.getLogger(__name__)

IMPORT_PATH_DEPTH = 3  # host/owner/repo

# Story working copies are derived from canonical clones, never scanned
RESERVED_NAMESPACES = {STORIES_DIR}


class Scanner:
    """Walks a workspace root and reports each project it finds.

    Args:
        fs: Filesystem capability
        exclude_pattern: Directory names matching it are never descended into
        on_project: Called as on_project(namespace, import_path) for every
            project found. Runs on worker threads.
        max_workers: Upper bound on concurrent namespace scans
    """

    def __init__(
        self,
        fs,
        exclude_pattern: re.Pattern | None,
        on_project: Callable[[str, str], object],
        max_workers: int = 8,
    ):
        self.fs = fs
        self.exclude_pattern = exclude_pattern
        self.on_project = on_project
        self.max_workers = max(1, max_workers)

    def is_excluded(self, name: str) -> bool:
        return self.exclude_pattern is not None and bool(self.exclude_pattern.search(name))

    def _subdirectories(self, path: Path) -> list[str] | None:
        """Names of the non-excluded subdirectories of path, or None if unreadable."""
        try:
            entries = self.fs.read_dir(path)
        except OSError as e:
            logger.warning(f"Skipping unreadable directory {path}: {e}")
            return None
        return [e.name for e in entries if e.is_dir and not self.is_excluded(e.name)]

    def namespaces(self, root: Path) -> list[str]:
        """Top-level directories of root that should be scanned."""
        names = self._subdirectories(root)
        if names is None:
            return []
        return sorted(n for n in names if n not in RESERVED_NAMESPACES)

    def scan_namespace(self, root: Path, namespace: str) -> int:
        """Scan one namespace, returning the number of projects found."""
        logger.debug(f"Scanning namespace {namespace}")
        found = 0
        # Relative path parts still to visit, never deeper than host/owner
        pending: list[tuple[str, ...]] = [()]
        base = root / namespace
        while pending:
            parts = pending.pop()
            names = self._subdirectories(base.joinpath(*parts))
            if names is None:
                continue
            for name in names:
                child = parts + (name,)
                if len(child) == IMPORT_PATH_DEPTH:
                    import_path = "/".join(child)
                    logger.debug(f"Found project {import_path} in {namespace}")
                    self.on_project(namespace, import_path)
                    found += 1
                else:
                    pending.append(child)
        return found

    def scan(self, root: Path) -> int:
        """Scan every namespace of root concurrently; returns total projects found."""
        namespaces = self.namespaces(root)
        if not namespaces:
            return 0

        total = 0
        workers = min(len(namespaces), self.max_workers)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="codetree-scan") as executor:
            futures = {
                executor.submit(self.scan_namespace, root, namespace): namespace
                for namespace in namespaces
            }
            for future in as_completed(futures):
                namespace = futures[future]
                try:
                    total += future.result()
                except OSError as e:
                    logger.warning(f"Failed to scan namespace {namespace}: {e}")
        return total
