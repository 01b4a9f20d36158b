"""Decide whether a worktree is protected from removal."""

from git_worktree_keeper.models.prune import SkipReason
from git_worktree_keeper.models.worktree import WorktreeInfo
from git_worktree_keeper.utils.paths import paths_equal, path_has_prefix


def is_current_worktree(info: WorktreeInfo, cwd: str) -> bool:
    """Check if cwd is the worktree's directory or somewhere below it."""
    return paths_equal(cwd, info.path) or path_has_prefix(cwd, info.path)


def determine_skip_reason(info: WorktreeInfo, cwd: str, force: bool) -> SkipReason:
    """
    Determine why a worktree must not be removed.

    The current worktree is always protected. Otherwise force bypasses the
    dirty, locked and unpushed checks, which apply in that order.

    Args:
        info: Worktree snapshot
        cwd: The caller's current directory
        force: Whether --force was given

    Returns:
        SkipReason.NONE if the worktree may be removed
    """
    if is_current_worktree(info, cwd):
        return SkipReason.CURRENT_WORKTREE

    if force:
        return SkipReason.NONE

    if info.dirty:
        return SkipReason.DIRTY
    if info.locked:
        return SkipReason.LOCKED
    if info.ahead > 0:
        return SkipReason.UNPUSHED

    return SkipReason.NONE
