"""Git-related services for git-worktree-keeper."""

from .operations import GitOperations
from .worktrees import WorktreeService
from .github import GitHubService
from .merge_detector import MergeDetector

__all__ = [
    "GitOperations",
    "WorktreeService",
    "GitHubService",
    "MergeDetector",
]
