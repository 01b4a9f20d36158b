"""Worktree data models."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class WorktreeInfo:
    """Snapshot of a git worktree's status.

    Produced fresh on every inventory query and never mutated afterwards.
    """

    path: str  # Absolute path, unique per worktree
    branch: str = ""  # Empty when detached
    dirty: bool = False  # Has uncommitted changes
    locked: bool = False
    ahead: int = 0  # Commits not pushed to upstream
    gone: bool = False  # Upstream branch deleted on the remote
    detached: bool = False
    last_commit_time: int = 0  # Unix seconds, 0 = unknown

    @property
    def name(self) -> str:
        """Directory name of the worktree."""
        return os.path.basename(os.path.normpath(self.path))

    def __str__(self) -> str:
        """String representation of worktree."""
        branch = self.branch if not self.detached else "(detached)"
        lock_marker = " [locked]" if self.locked else ""
        return f"{branch} @ {self.path}{lock_marker}"
