"""Derive import paths (host/owner/repo) from clone URLs."""

import re
from urllib.parse import urlsplit

from codetree.code.errors import InvalidURLError

# user@host:owner/repo.git
SCP_LIKE_PATTERN = re.compile(r'^(?:[^@/\s]+@)?(?P<host>[^:/\s]+):(?P<path>[^/\s][^\s]*)$')

SUPPORTED_SCHEMES = {"http", "https", "ssh", "git", "git+ssh", "ssh+git", "file"}

# Segments of an import path: host/owner/repo
IMPORT_PATH_SEGMENTS = 3


def _split_segments(path: str) -> list[str]:
    segments = [s for s in path.split("/") if s]
    if segments and segments[-1].endswith(".git"):
        segments[-1] = segments[-1][:-len(".git")]
    if any(s in (".", "..") or not s for s in segments):
        return []
    return segments


def import_path_from_url(url: str) -> str:
    """
    Derive the import path of a clone URL.

    Examples:
        https://github.com/owner/repo.git       -> github.com/owner/repo
        git@github.com:owner/repo.git           -> github.com/owner/repo
        ssh://git@example.com:2222/group/repo   -> example.com/group/repo
        file:///srv/mirror/github.com/owner/r   -> github.com/owner/r

    Raises:
        InvalidURLError: if url cannot be turned into a host/owner/repo path
    """
    url = (url or "").strip()
    if not url:
        raise InvalidURLError(url, "empty URL")

    if "://" not in url:
        match = SCP_LIKE_PATTERN.match(url)
        if not match:
            raise InvalidURLError(url, "not a URL")
        host = match.group("host").lower()
        segments = _split_segments(match.group("path"))
    else:
        try:
            parts = urlsplit(url)
            hostname = parts.hostname
        except ValueError as e:
            raise InvalidURLError(url, str(e)) from None

        scheme = parts.scheme.lower()
        if scheme not in SUPPORTED_SCHEMES:
            raise InvalidURLError(url, f"unsupported scheme {scheme!r}")

        if scheme == "file":
            segments = _split_segments(parts.path)
            if len(segments) < IMPORT_PATH_SEGMENTS:
                raise InvalidURLError(url, "path must end in host/owner/repo")
            return "/".join(segments[-IMPORT_PATH_SEGMENTS:])

        if not hostname:
            raise InvalidURLError(url, "missing host")
        host = hostname.lower()
        segments = _split_segments(parts.path)

    if len(segments) != IMPORT_PATH_SEGMENTS - 1:
        raise InvalidURLError(url, "path must be exactly owner/repo")

    return "/".join([host] + segments)
