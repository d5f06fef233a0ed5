#!/usr/bin/env python3
"""codetree CLI entrypoint."""

import sys
import logging
import argparse
from pathlib import Path

from codetree.code import Code
from codetree.lib.config import load_workspace_config
from codetree.lib.validate import ValidationError
from codetree.commands import code as cmd_code_module
from codetree.commands import story as cmd_story_module


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        level=logging.WARNING,
    )
    if verbose:
        logging.getLogger("codetree").setLevel(logging.DEBUG)


def get_code(args) -> Code:
    """Build the workspace from config file, environment and flags."""
    overrides = {
        "CODE_PATH": args.code_path,
        "CODE_EXCLUDE_PATTERN": args.exclude_pattern,
        "STORY_NAME": args.story_name,
        "STORY_BRANCH_NAME": args.story_branch_name,
    }
    try:
        config = load_workspace_config(args.config, overrides=overrides)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        print(f"ERROR: Invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)
    return Code.from_config(config)


def cmd_code_clone(args):
    return cmd_code_module.cmd_code_clone(args, get_code(args))


def cmd_code_list(args):
    return cmd_code_module.cmd_code_list(args, get_code(args))


def cmd_code_pr_list(args):
    return cmd_code_module.cmd_code_pr_list(args, get_code(args))


def cmd_story_ensure(args):
    return cmd_story_module.cmd_story_ensure(args, get_code(args))


def cmd_story_path(args):
    return cmd_story_module.cmd_story_path(args, get_code(args))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='ct', description='Organize git checkouts under one workspace')
    parser.add_argument('--config', type=Path, help='Env file with workspace settings')
    parser.add_argument('--code-path', help='Workspace root (default: ~/code)')
    parser.add_argument('--exclude-pattern', help='Regex of directory names never scanned')
    parser.add_argument('--story-name', help='Story to work on')
    parser.add_argument('--story-branch-name', help='Branch of the story (defaults to the story name)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # ct code
    p_code = subparsers.add_parser('code', help='Manage projects')
    code_sub = p_code.add_subparsers(dest='code_cmd', required=True)

    # ct code clone
    p_clone = code_sub.add_parser('clone', help='Clone a new project into the workspace')
    p_clone.add_argument('url', help='URL to clone')
    p_clone.set_defaults(func=cmd_code_clone)

    # ct code list
    p_list = code_sub.add_parser('list', aliases=['ls'], help='List projects')
    p_list.add_argument('--paths', action='store_true', help='Show repository paths')
    p_list.set_defaults(func=cmd_code_list)

    # ct code pull-request
    p_pr = code_sub.add_parser('pull-request', aliases=['pr'], help='Interact with GitHub pull requests')
    pr_sub = p_pr.add_subparsers(dest='pr_cmd', required=True)

    # ct code pull-request list
    p_pr_list = pr_sub.add_parser('list', aliases=['ls'], help='List open pull requests of the current project')
    p_pr_list.set_defaults(func=cmd_code_pr_list)

    # ct story
    p_story = subparsers.add_parser('story', help='Story working copies')
    story_sub = p_story.add_subparsers(dest='story_cmd', required=True)

    # ct story ensure
    p_ensure = story_sub.add_parser('ensure', help='Create the story working copy of a project')
    p_ensure.add_argument('import_path', help='Project import path (host/owner/repo)')
    p_ensure.set_defaults(func=cmd_story_ensure)

    # ct story path
    p_path = story_sub.add_parser('path', help='Print the story path of a project')
    p_path.add_argument('import_path', help='Project import path (host/owner/repo)')
    p_path.set_defaults(func=cmd_story_path)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
