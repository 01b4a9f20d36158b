"""Data models for git-worktree-keeper."""

from .worktree import WorktreeInfo
from .prune import SkipReason, PruneType, PruneCandidate, PruneResult, UnlockResult

__all__ = [
    "WorktreeInfo",
    "SkipReason",
    "PruneType",
    "PruneCandidate",
    "PruneResult",
    "UnlockResult",
]
