"""Prune and unlock engines for git-worktree-keeper."""

from .classifier import classify_candidates, classify_worktree
from .executor import PruneExecutor
from .merge_status import MergeStatusOracle
from .skip_reason import determine_skip_reason
from .unlock import UnlockEngine
from .worktree_keeper import WorktreeKeeper

__all__ = [
    "classify_candidates",
    "classify_worktree",
    "PruneExecutor",
    "MergeStatusOracle",
    "determine_skip_reason",
    "UnlockEngine",
    "WorktreeKeeper",
]
