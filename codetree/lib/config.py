"""
Configuration loader for codetree.

Settings come from, lowest precedence first: built-in defaults, an env file
(``~/.config/codetree/codetree.env`` or an explicit path), CODETREE_*
environment variables, and finally command-line overrides.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

from . import envparse
from . import validate

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE_PATTERN = r"^\.snapshots$"
DEFAULT_MAX_WORKERS = 8

# Maps CODETREE_* environment variables to env file keys
ENVIRONMENT_KEYS = {
    "CODETREE_CODE_PATH": "CODE_PATH",
    "CODETREE_EXCLUDE_PATTERN": "CODE_EXCLUDE_PATTERN",
    "CODETREE_STORY_NAME": "STORY_NAME",
    "CODETREE_STORY_BRANCH_NAME": "STORY_BRANCH_NAME",
}


@dataclass
class WorkspaceConfig:
    """Workspace settings used to build a Code."""
    code_path: Path
    exclude_pattern: re.Pattern | None
    story_name: str = ""
    story_branch_name: str = ""
    max_workers: int = DEFAULT_MAX_WORKERS


def default_config_file() -> Path:
    """Location of the user's env file, honouring XDG_CONFIG_HOME."""
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "codetree" / "codetree.env"


def default_code_path() -> Path:
    return Path.home() / "code"


def compile_exclude_pattern(pattern: str) -> re.Pattern | None:
    """Compile the exclude pattern; an empty pattern excludes nothing."""
    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ValueError(f"Invalid exclude pattern '{pattern}': {e}") from None


def load_workspace_config(
    config_file: Path | None = None,
    overrides: dict[str, str] | None = None,
    environ: dict[str, str] | None = None,
) -> WorkspaceConfig:
    """
    Load and validate the workspace configuration.

    Args:
        config_file: Env file to read. When None, the default file is read
            if it exists. An explicit file that is missing is an error.
        overrides: Env-file-style keys (e.g. {"STORY_NAME": "x"}) taking
            precedence over everything else. Empty values are ignored.
        environ: Environment to read CODETREE_* variables from
            (defaults to os.environ).

    Raises:
        FileNotFoundError: if an explicit config_file doesn't exist
        ValueError: on env file syntax errors or an invalid exclude pattern
        ValidationError: if the merged settings don't match the schema
    """
    env: dict[str, str] = {}

    if config_file is not None:
        env.update(envparse.load_env(config_file))
    else:
        default_file = default_config_file()
        if default_file.exists():
            logger.debug(f"Loading configuration from {default_file}")
            env.update(envparse.load_env(default_file))

    environ = os.environ if environ is None else environ
    for var, key in ENVIRONMENT_KEYS.items():
        if environ.get(var):
            env[key] = environ[var]

    for key, value in (overrides or {}).items():
        if value:
            env[key] = value

    validate.validate(env, "workspace")

    code_path = Path(env["CODE_PATH"]).expanduser() if env.get("CODE_PATH") else default_code_path()

    return WorkspaceConfig(
        code_path=code_path,
        exclude_pattern=compile_exclude_pattern(env.get("CODE_EXCLUDE_PATTERN", DEFAULT_EXCLUDE_PATTERN)),
        story_name=env.get("STORY_NAME", ""),
        story_branch_name=env.get("STORY_BRANCH_NAME", ""),
        max_workers=int(env.get("SCAN_MAX_WORKERS", str(DEFAULT_MAX_WORKERS))),
    )
