"""Locating the bare repository behind a worktree workspace."""

import os
from typing import Optional

from git_worktree_keeper.constants import (
    BARE_DIR_NAME,
    BARE_GITDIR_CONTENT,
    MAX_DIRECTORY_ITERATIONS,
)
from git_worktree_keeper.exceptions import WorkspaceNotFoundError
from git_worktree_keeper.logging_config import get_logger

logger = get_logger(__name__)


def _bare_dir_at(directory: str) -> Optional[str]:
    """Return the workspace's bare repository if directory is a workspace root."""
    bare_dir = os.path.join(directory, BARE_DIR_NAME)
    if os.path.isdir(bare_dir):
        return bare_dir

    git_file = os.path.join(directory, ".git")
    if os.path.isfile(git_file):
        try:
            with open(git_file, encoding="utf-8") as f:
                content = f.read().strip()
        except OSError as e:
            logger.debug(f"Failed to read {git_file}: {e}")
            return None
        if content == BARE_GITDIR_CONTENT:
            return os.path.join(directory, BARE_DIR_NAME)
    return None


def find_bare_dir(start: Optional[str] = None) -> str:
    """
    Walk up from start to find the workspace's bare repository.

    Args:
        start: Directory to start from, defaults to the current directory

    Returns:
        Absolute path of the bare repository

    Raises:
        WorkspaceNotFoundError: If no parent directory is a workspace root
    """
    origin = os.path.abspath(start or os.getcwd())
    directory = origin

    for _ in range(MAX_DIRECTORY_ITERATIONS):
        bare_dir = _bare_dir_at(directory)
        if bare_dir:
            logger.debug(f"Found workspace bare repository at {bare_dir}")
            return bare_dir

        parent = os.path.dirname(directory)
        if parent == directory:
            break
        directory = parent

    raise WorkspaceNotFoundError(origin)
