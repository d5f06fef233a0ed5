"""
ct story - Story working copies of projects.
"""

import sys

from codetree.code import Code, CodeError


def _get_project(args, code: Code):
    code.scan()
    return code.get_project_by_relative_path(args.import_path)


def cmd_story_ensure(args, code: Code) -> int:
    """Create the story working copy of a project if needed."""
    if not code.story_name:
        print("ERROR: No story set. Use --story-name or CODETREE_STORY_NAME.", file=sys.stderr)
        return 2

    try:
        project = _get_project(args, code)
        story_path = project.ensure()
    except CodeError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(story_path)
    return 0


def cmd_story_path(args, code: Code) -> int:
    """Print the story path of a project."""
    try:
        project = _get_project(args, code)
        story_path = project.story_path()
    except CodeError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(story_path)
    return 0
