"""Custom exceptions for git-worktree-keeper"""

from typing import List, Optional, Tuple


class WorktreeKeeperError(Exception):
    """Base exception for all git-worktree-keeper errors."""
    pass


class GitOperationError(WorktreeKeeperError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, target: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.target = target
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if target:
            error_msg += f" for '{target}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class GitHubAPIError(WorktreeKeeperError):
    """Exception raised for errors in GitHub API operations."""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        self.message = message

        error_msg = f"GitHub API operation '{operation}' failed"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class InvalidDurationError(WorktreeKeeperError):
    """Exception raised when a duration string like '30d' cannot be parsed."""

    def __init__(self, value: str, message: str):
        self.value = value
        self.message = message
        super().__init__(message)


class WorkspaceNotFoundError(WorktreeKeeperError):
    """Exception raised when no bare repository is found above a directory."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"not in a worktree workspace: {path}")


class WorktreeNotFoundError(WorktreeKeeperError):
    """Exception raised when a target does not name a known worktree."""

    def __init__(self, target: str):
        self.target = target
        super().__init__(f"worktree not found: {target}")


class UnlockError(WorktreeKeeperError):
    """Exception raised when one or more worktrees could not be unlocked."""

    def __init__(self, failures: List[Tuple[str, str]], unlocked: Optional[List[str]] = None):
        self.failures = failures
        self.unlocked = unlocked or []
        names = ", ".join(name for name, _ in failures)
        super().__init__(f"failed: {names}")
