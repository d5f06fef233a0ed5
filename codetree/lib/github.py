"""
GitHub integration helpers.

Lists pull requests through the gh CLI, which owns authentication.
"""

import json
import logging
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)


# Timeout for GitHub CLI operations (seconds)
GH_TIMEOUT_SECONDS = 30

GITHUB_HOST = "github.com"

PR_JSON_FIELDS = "number,title,url,createdAt,author,headRefName"


class GitHubError(Exception):
    """A gh CLI call failed or returned something unusable."""
    pass


@dataclass
class PullRequest:
    """An open pull request."""
    number: int
    title: str
    url: str
    created_at: str  # ISO timestamp as returned by GitHub
    author: str | None = None
    head_branch: str | None = None


def check_gh_available() -> tuple[bool, str]:
    """Check gh CLI is installed and authenticated.

    Returns: (ok, error_message)
    """
    try:
        result = subprocess.run(
            ["gh", "--version"],
            capture_output=True,
            timeout=5,
        )
        if result.returncode != 0:
            return False, "GitHub CLI (gh) not installed\n  Install: https://cli.github.com/"

        result = subprocess.run(
            ["gh", "auth", "status"],
            capture_output=True,
            text=True,
            timeout=10,
        )
        if result.returncode != 0:
            return False, "GitHub CLI not authenticated\n  Run: gh auth login"

        return True, ""

    except FileNotFoundError:
        return False, "GitHub CLI (gh) not found\n  Install: https://cli.github.com/"
    except subprocess.TimeoutExpired:
        return False, "GitHub CLI timed out"


def _parse_pull_request(data: dict) -> PullRequest:
    author = data.get("author") or {}
    return PullRequest(
        number=int(data["number"]),
        title=data.get("title", ""),
        url=data.get("url", ""),
        created_at=data.get("createdAt", ""),
        author=author.get("login"),
        head_branch=data.get("headRefName"),
    )


def list_pull_requests(owner: str, repo: str, state: str = "open") -> list[PullRequest]:
    """
    List pull requests of owner/repo on GitHub.

    Raises:
        GitHubError: if gh fails, times out, or returns invalid JSON
    """
    try:
        result = subprocess.run(
            ["gh", "pr", "list",
             "--repo", f"{owner}/{repo}",
             "--state", state,
             "--json", PR_JSON_FIELDS],
            capture_output=True,
            text=True,
            timeout=GH_TIMEOUT_SECONDS,
        )
    except FileNotFoundError:
        raise GitHubError("GitHub CLI (gh) not found") from None
    except subprocess.TimeoutExpired:
        raise GitHubError("GitHub API timeout") from None

    if result.returncode != 0:
        raise GitHubError(f"Failed to list pull requests for {owner}/{repo}: {result.stderr.strip()}")

    try:
        data = json.loads(result.stdout or "[]")
    except json.JSONDecodeError:
        raise GitHubError("Invalid JSON from gh") from None

    prs = []
    for item in data:
        try:
            prs.append(_parse_pull_request(item))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed pull request entry for {owner}/{repo}: {e}")
    return prs
