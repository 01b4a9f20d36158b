"""Labels used when reporting worktrees."""

from git_worktree_keeper.models.prune import PruneCandidate, PruneType, SkipReason


def format_candidate_label(candidate: PruneCandidate, with_age: bool = False) -> str:
    """
    Format the label identifying a prune candidate.

    Detached worktrees have no branch, so they are shown by directory name.

    Args:
        candidate: The prune candidate
        with_age: Append the stale age, e.g. "feature (3 months ago)"

    Returns:
        Label string
    """
    if candidate.prune_type == PruneType.DETACHED:
        return candidate.info.name

    label = candidate.info.branch
    if with_age and candidate.prune_type == PruneType.STALE and candidate.stale_age:
        label = f"{label} ({candidate.stale_age})"
    return label


def format_skip_item(label: str, reason: SkipReason) -> str:
    """Format a skipped entry as "label (reason)"."""
    return f"{label} ({reason.description})"


def pluralize(count: int, singular: str, plural: str) -> str:
    """Return "1 worktree" / "3 worktrees" style text."""
    return f"{count} {singular if count == 1 else plural}"
