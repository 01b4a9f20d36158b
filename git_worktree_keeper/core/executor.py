"""Execution of prune decisions."""

from typing import List, Optional, Tuple

from git_worktree_keeper.constants import NOT_FULLY_MERGED_MARKER
from git_worktree_keeper.formatters.labels import format_candidate_label
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models.prune import PruneCandidate, PruneResult, PruneType
from git_worktree_keeper.services.git.operations import GitOperations
from git_worktree_keeper.services.git.worktrees import WorktreeService
from git_worktree_keeper.core.merge_status import MergeStatusOracle

logger = get_logger(__name__)


class PruneExecutor:
    """Removes prune candidates one at a time, recording every outcome.

    A failure on one candidate never stops the others. Worktrees whose
    upstream is gone also get their local branch deleted afterwards.
    """

    def __init__(
        self,
        worktree_service: WorktreeService,
        git_operations: GitOperations,
        oracle: Optional[MergeStatusOracle] = None,
        force: bool = False,
    ):
        self.worktree_service = worktree_service
        self.git_operations = git_operations
        self.oracle = oracle
        self.force = force

    def execute(self, candidates: List[PruneCandidate]) -> PruneResult:
        """Process candidates in order.

        Args:
            candidates: Output of the classifier

        Returns:
            PruneResult with pruned, skipped and failed entries plus the
            deleted and kept branches
        """
        result = PruneResult()

        for candidate in candidates:
            label = format_candidate_label(candidate)

            if not candidate.removable:
                logger.debug(f"Skipping {label}: {candidate.skip_reason.value}")
                result.skipped.append((label, candidate.skip_reason))
                continue

            success, error = self.worktree_service.remove_worktree(
                candidate.info.path, force=self.force
            )
            if not success:
                result.failed.append((label, error or "unknown error"))
                continue

            result.pruned.append(label)

            if candidate.prune_type == PruneType.GONE and not candidate.info.detached:
                kept = self._delete_branch(candidate.info.branch)
                if kept is None:
                    result.deleted_branches.append(candidate.info.branch)
                else:
                    result.kept_branches.append(kept)

        return result

    def _delete_branch(self, branch: str) -> Optional[Tuple[str, str]]:
        """Delete the local branch of a removed worktree.

        The upstream is gone, so git -d cannot see merges done on the
        remote. A branch confirmed merged by either signal is force deleted.

        Returns:
            None when deleted, otherwise (branch, reason it was kept)
        """
        force_delete = self.oracle is not None and self.oracle.is_merged(branch)
        if force_delete:
            logger.debug(f"Branch {branch} is merged, using force delete")

        success, error = self.git_operations.delete_branch(branch, force=force_delete)
        if success:
            return None

        error = error or "unknown error"
        if NOT_FULLY_MERGED_MARKER in error:
            return branch, "unmerged commits"
        return branch, error
