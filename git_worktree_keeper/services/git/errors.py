"""Helpers for turning GitPython errors into readable messages."""

import git


def format_git_error(command: str, error: Exception) -> str:
    """
    Extract a readable message from a failed git invocation.

    Args:
        command: Short description of the command, e.g. "git worktree remove"
        error: The exception raised by GitPython

    Returns:
        Message including git's stderr when available
    """
    if isinstance(error, git.exc.GitCommandError):
        stderr = (error.stderr or "").strip()
        # GitPython prefixes captured stderr with "stderr: '...'"
        if stderr.startswith("stderr:"):
            stderr = stderr[len("stderr:"):].strip().strip("'").strip()
        status = error.status if error.status is not None else "unknown"
        if stderr:
            return f"{command} failed (exit {status}): {stderr}"
        return f"{command} failed with exit code {status}"
    return f"{command} failed: {error}"
