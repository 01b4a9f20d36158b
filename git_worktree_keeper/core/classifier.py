"""Selection of prune candidates from the worktree inventory."""

from typing import List, Optional

from git_worktree_keeper.formatters.date import format_age
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models.prune import PruneCandidate, PruneType
from git_worktree_keeper.models.worktree import WorktreeInfo
from git_worktree_keeper.core.merge_status import MergeStatusOracle
from git_worktree_keeper.core.skip_reason import determine_skip_reason

logger = get_logger(__name__)


def classify_worktree(
    info: WorktreeInfo,
    include_merged: bool = False,
    include_detached: bool = False,
    stale_cutoff: Optional[int] = None,
    default_branch: str = "",
    oracle: Optional[MergeStatusOracle] = None,
) -> Optional[PruneType]:
    """
    Pick the prune type of a worktree, checking gone, detached, merged
    and stale in that order.

    Merged detection only uses local git so previews stay offline.

    Returns:
        The first matching PruneType, or None if the worktree is kept
    """
    if info.gone:
        return PruneType.GONE

    if include_detached and info.detached:
        return PruneType.DETACHED

    if (
        include_merged
        and oracle is not None
        and default_branch
        and info.branch
        and info.branch != default_branch
        and oracle.is_merged_locally(info.branch)
    ):
        return PruneType.MERGED

    if (
        stale_cutoff is not None
        and info.last_commit_time > 0
        and info.last_commit_time < stale_cutoff
    ):
        return PruneType.STALE

    return None


def classify_candidates(
    infos: List[WorktreeInfo],
    cwd: str,
    force: bool = False,
    include_merged: bool = False,
    include_detached: bool = False,
    stale_cutoff: Optional[int] = None,
    default_branch: str = "",
    oracle: Optional[MergeStatusOracle] = None,
    now: Optional[float] = None,
) -> List[PruneCandidate]:
    """
    Build the prune candidate list in inventory order.

    Each worktree appears at most once. The skip reason is computed for
    every candidate independently of why it was selected.

    Args:
        infos: Worktree inventory
        cwd: The caller's current directory
        force: Whether --force was given
        include_merged: Select worktrees whose branch is merged into default_branch
        include_detached: Select worktrees with a detached HEAD
        stale_cutoff: Unix timestamp; older last commits are stale. None disables.
        default_branch: Default branch name, "" disables merged selection
        oracle: Merge status oracle used for merged selection
        now: Clock override for stale age labels

    Returns:
        List of PruneCandidate
    """
    candidates = []
    for info in infos:
        prune_type = classify_worktree(
            info,
            include_merged=include_merged,
            include_detached=include_detached,
            stale_cutoff=stale_cutoff,
            default_branch=default_branch,
            oracle=oracle,
        )
        if prune_type is None:
            continue

        stale_age = ""
        if prune_type == PruneType.STALE:
            stale_age = format_age(info.last_commit_time, now=now)

        skip_reason = determine_skip_reason(info, cwd, force)
        logger.debug(f"Candidate {info.path}: {prune_type.value}, skip={skip_reason.value}")
        candidates.append(PruneCandidate(info, skip_reason, prune_type, stale_age))

    return candidates
