"""
ct code - Clone, list and inspect projects of the workspace.
"""

import os
import sys

from codetree.code import Code, CodeError
from codetree.lib.github import GitHubError, check_gh_available


def cmd_code_clone(args, code: Code) -> int:
    """Clone a new project into the repositories directory."""
    try:
        code.scan()
        project = code.clone(args.url)
    except CodeError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"Cloned {project} into {project.repository_path()}")
    return 0


def cmd_code_list(args, code: Code) -> int:
    """List every project of the workspace, sorted by import path."""
    try:
        code.scan()
        projects = code.sorted_projects()
    except CodeError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    for project in projects:
        if args.paths:
            print(f"{project.import_path:<50} {project.repository_path()}")
        else:
            print(project.import_path)
    return 0


def cmd_code_pr_list(args, code: Code) -> int:
    """List the open pull requests of the project in the current directory."""
    try:
        code.scan()
        project = code.get_project_by_absolute_path(os.getcwd())
    except CodeError as e:
        print(f"ERROR: finding the project for the current directory: {e}", file=sys.stderr)
        return 1

    ok, error = check_gh_available()
    if not ok:
        print(f"ERROR: {error}", file=sys.stderr)
        return 1

    try:
        prs = project.list_pull_requests()
    except (CodeError, GitHubError) as e:
        print(f"ERROR: getting the list of the pull requests: {e}", file=sys.stderr)
        return 1

    if not prs:
        print("No pull requests found for the project.")
        return 0

    print(f"{'Number':<8} {'Title':<50} {'URL':<60} Created at")
    print("-" * 140)
    for pr in prs:
        title = pr.title[:47] + "..." if len(pr.title) > 50 else pr.title
        print(f"{pr.number:<8} {title:<50} {pr.url:<60} {pr.created_at}")
    return 0
