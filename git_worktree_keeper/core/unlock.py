"""Unlocking worktrees by directory or branch name."""

from typing import List

from git_worktree_keeper.exceptions import UnlockError, WorktreeNotFoundError
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models.prune import UnlockResult
from git_worktree_keeper.models.worktree import WorktreeInfo
from git_worktree_keeper.services.git.worktrees import WorktreeService

logger = get_logger(__name__)


class UnlockEngine:
    """Unlocks several worktrees in one call.

    Every target is resolved before anything is unlocked, so an unknown
    target leaves all worktrees untouched.
    """

    def __init__(self, worktree_service: WorktreeService):
        self.worktree_service = worktree_service

    def unlock(self, targets: List[str]) -> UnlockResult:
        """Unlock the worktrees named by targets.

        Args:
            targets: Worktree directory names or branch names

        Returns:
            UnlockResult listing unlocked worktrees

        Raises:
            WorktreeNotFoundError: If a target matches no worktree
            UnlockError: If any worktree was not locked or failed to unlock.
                Other targets are still processed.
        """
        infos = self.worktree_service.list_worktrees_with_info(fast=True)

        resolved: List[WorktreeInfo] = []
        seen = set()
        for target in targets:
            info = WorktreeService.find_worktree(infos, target)
            if info is None:
                raise WorktreeNotFoundError(target)
            if info.path in seen:
                continue
            seen.add(info.path)
            resolved.append(info)

        result = UnlockResult()
        for info in resolved:
            if not self.worktree_service.is_worktree_locked(info.path):
                result.failed.append((info.name, "not locked"))
                continue

            success, error = self.worktree_service.unlock_worktree(info.path)
            if not success:
                result.failed.append((info.name, error or "unknown error"))
                continue

            result.unlocked.append(info.name)

        if result.failed:
            raise UnlockError(result.failed, unlocked=result.unlocked)
        return result
