"""Local merge detection for git-worktree-keeper."""

import git
from typing import Union, TYPE_CHECKING, Optional

from git_worktree_keeper.exceptions import GitOperationError
from git_worktree_keeper.services.git.errors import format_git_error
from git_worktree_keeper.logging_config import get_logger

if TYPE_CHECKING:
    from git_worktree_keeper.config import Config

logger = get_logger(__name__)


class MergeDetector:
    """Service for detecting if a branch has been merged into another locally."""

    def __init__(self, bare_dir: str, config: Optional[Union["Config", dict]] = None):
        """Initialize the merge detector.

        Args:
            bare_dir: Path to the bare repository
            config: Configuration dictionary or Config object
        """
        self.bare_dir = bare_dir
        self.config = config or {}

    def _get_repo(self):
        """Get a git.Repo instance for the bare repository."""
        return git.Repo(self.bare_dir)

    def is_branch_merged(self, branch_name: str, target: str) -> bool:
        """Check if every change on a branch is already in target.

        Detects regular and fast-forward merges through ancestry, then
        rebase and squash merges by comparing patch ids with git cherry.

        Raises:
            GitOperationError: If an argument is empty or git cherry fails
        """
        if not branch_name or not target:
            raise GitOperationError(
                "is_branch_merged", message="branch and target cannot be empty"
            )
        if branch_name == target:
            return False

        if self._check_ancestor(branch_name, target):
            logger.debug(f"Branch {branch_name} is merged into {target} (ancestor)")
            return True
        return self._check_patch_equivalence(branch_name, target)

    def _check_ancestor(self, branch_name: str, target: str) -> bool:
        """Check if the branch tip is an ancestor of target."""
        try:
            repo = self._get_repo()
            return repo.is_ancestor(branch_name, target)
        except git.exc.GitCommandError as e:
            logger.debug(f"Ancestor check failed for {branch_name}: {e}")
            return False

    def _check_patch_equivalence(self, branch_name: str, target: str) -> bool:
        """Check if every commit on the branch has an equivalent patch in target.

        git cherry prefixes commits already in target with "-" and missing
        ones with "+". No output means there is nothing left to merge.
        """
        try:
            repo = self._get_repo()
            output = repo.git.cherry("-v", target, branch_name)
        except git.exc.GitCommandError as e:
            raise GitOperationError(
                "is_branch_merged", branch_name, format_git_error("git cherry", e)
            )

        for line in output.strip().splitlines():
            if line.startswith("+ "):
                return False

        logger.debug(f"Branch {branch_name} is merged into {target} (patch-id)")
        return True
