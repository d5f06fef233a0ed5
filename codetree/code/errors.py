"""Errors raised by the workspace core."""


class CodeError(Exception):
    """Base class for workspace errors."""
    pass


class CodePathEmptyError(CodeError):
    """The code path is empty or does not exist."""

    def __init__(self, path: str = ""):
        self.path = path
        super().__init__(f"code path is empty or does not exist: {path!r}" if path else "code path is empty")


class NotScannedError(CodeError):
    """A query was issued before a successful scan()."""

    def __init__(self):
        super().__init__("code was not scanned")


class ProfileNotFoundError(CodeError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"profile not found: {name}")


class StoryNotFoundError(CodeError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"story not found: {name}")


class ProjectNotFoundError(CodeError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"project not found: {key}")


class InvalidURLError(CodeError):
    def __init__(self, url: str, reason: str = ""):
        self.url = url
        super().__init__(f"invalid URL given: {url!r}" + (f" ({reason})" if reason else ""))


class ProjectAlreadyExistsError(CodeError):
    def __init__(self, import_path: str):
        self.import_path = import_path
        super().__init__(f"project already exists: {import_path}")


class RepositoryMissingError(CodeError):
    """The canonical clone of a project is not on disk."""

    def __init__(self, import_path: str, path: str):
        self.import_path = import_path
        self.path = path
        super().__init__(f"canonical repository of {import_path} does not exist: {path}")


class NoStoryConfiguredError(CodeError):
    """story_path() or ensure() was called without a story name."""

    def __init__(self, import_path: str):
        self.import_path = import_path
        super().__init__(f"no story configured for {import_path}")


class UnsupportedHostError(CodeError):
    def __init__(self, import_path: str, host: str):
        self.import_path = import_path
        self.host = host
        super().__init__(f"{import_path}: host {host} is not supported")


class VCSError(CodeError):
    """A git operation failed."""

    def __init__(self, operation: str, stderr: str = ""):
        self.operation = operation
        self.stderr = stderr.strip()
        super().__init__(f"{operation} failed" + (f": {self.stderr}" if self.stderr else ""))
