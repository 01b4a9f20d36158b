"""Prune and unlock data models and related enums"""
from enum import Enum
from dataclasses import dataclass, field
from typing import List, Tuple

from git_worktree_keeper.models.worktree import WorktreeInfo


class SkipReason(Enum):
    """Why a prune candidate is protected from removal."""
    NONE = "none"
    CURRENT_WORKTREE = "current-worktree"
    DIRTY = "dirty"
    LOCKED = "locked"
    UNPUSHED = "unpushed"

    @property
    def description(self) -> str:
        """Human-readable reason shown next to skipped worktrees."""
        return _SKIP_DESCRIPTIONS[self]


_SKIP_DESCRIPTIONS = {
    SkipReason.NONE: "",
    SkipReason.CURRENT_WORKTREE: "current worktree",
    SkipReason.DIRTY: "dirty, use --force",
    SkipReason.LOCKED: "locked, use --force",
    SkipReason.UNPUSHED: "unpushed commits, use --force",
}


class PruneType(Enum):
    """Why a worktree is a prune candidate.

    Declaration order is the classification precedence.
    """
    GONE = "gone"
    DETACHED = "detached"
    MERGED = "merged"
    STALE = "stale"


@dataclass
class PruneCandidate:
    """A worktree selected by the classifier, with its protection verdict."""
    info: WorktreeInfo
    skip_reason: SkipReason
    prune_type: PruneType
    stale_age: str = ""  # Human-readable age, only set for stale candidates

    @property
    def removable(self) -> bool:
        return self.skip_reason == SkipReason.NONE


@dataclass
class PruneResult:
    """Outcome of executing a prune run.

    Failed and kept entries are tuples of (label, message).
    """
    pruned: List[str] = field(default_factory=list)
    skipped: List[Tuple[str, SkipReason]] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)
    deleted_branches: List[str] = field(default_factory=list)
    kept_branches: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)


@dataclass
class UnlockResult:
    """Outcome of an unlock run. Failed entries are (worktree name, reason)."""
    unlocked: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)
