"""Core functionality for git-worktree-keeper"""

import os
from typing import List, Optional, Set, Union

from git_worktree_keeper.config import Config, resolve_default_stale_threshold
from git_worktree_keeper.exceptions import GitOperationError
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models.prune import PruneCandidate, PruneResult, UnlockResult
from git_worktree_keeper.services.display_service import DisplayService
from git_worktree_keeper.services.git import GitHubService, GitOperations, MergeDetector, WorktreeService
from git_worktree_keeper.services.workspace import find_bare_dir
from git_worktree_keeper.utils.duration import stale_cutoff
from git_worktree_keeper.core.classifier import classify_candidates
from git_worktree_keeper.core.executor import PruneExecutor
from git_worktree_keeper.core.merge_status import MergeStatusOracle
from git_worktree_keeper.core.unlock import UnlockEngine

logger = get_logger(__name__)


class WorktreeKeeper:
    """Main class for pruning and unlocking the worktrees of a workspace."""

    def __init__(
        self,
        config: Union[Config, dict],
        cwd: Optional[str] = None,
        display: Optional[DisplayService] = None,
    ):
        """Initialize WorktreeKeeper.

        Args:
            config: Configuration dict or Config object
            cwd: Directory the command runs from, defaults to os.getcwd()
            display: Output service, a default one is created if omitted

        Raises:
            WorkspaceNotFoundError: If cwd is not inside a workspace
        """
        if isinstance(config, dict):
            self.config = Config.from_dict(config)
        else:
            self.config = config
        self.cwd = os.path.abspath(cwd or os.getcwd())
        self.display = display or DisplayService(self.config.verbose, self.config.debug)

        self.bare_dir = find_bare_dir(self.cwd)
        self.git_operations = GitOperations(self.bare_dir, self.config)
        self.worktree_service = WorktreeService(self.bare_dir)
        self.merge_detector = MergeDetector(self.bare_dir, self.config)
        self.github_service: Optional[GitHubService] = None
        self.default_branch = ""
        self.oracle: Optional[MergeStatusOracle] = None

    def _resolve_stale_cutoff(self, now: Optional[float] = None) -> Optional[int]:
        """Turn the stale threshold into a cutoff timestamp, None when stale mode is off."""
        threshold = self.config.stale_threshold
        if threshold is None:
            return None
        if not threshold:
            threshold = resolve_default_stale_threshold(
                self.bare_dir, self.config.default_stale_threshold
            )
        logger.debug(f"Stale threshold: {threshold}")
        return stale_cutoff(threshold, now=now)

    def _resolve_default_branch(self) -> str:
        """Get the default branch, "" when it cannot be determined."""
        try:
            return self.git_operations.get_default_branch()
        except GitOperationError as e:
            logger.debug(f"Could not determine default branch: {e}")
            return ""

    def _fetch_merged_pr_branches(self) -> Set[str]:
        """Query GitHub for branches whose pull requests were merged."""
        if self.github_service is None:
            service = GitHubService(self.config)
            service.setup_github_api(self.git_operations.get_remote_url())
            self.github_service = service
        return self.github_service.get_merged_pr_branches()

    def _build_oracle(self, default_branch: str) -> MergeStatusOracle:
        remote_lookup = None
        if self.config.github_token:
            remote_lookup = self._fetch_merged_pr_branches
        else:
            logger.debug("No GitHub token, merged pull request check disabled")
        return MergeStatusOracle(self.merge_detector, default_branch, remote_lookup)

    def find_candidates(self, now: Optional[float] = None) -> List[PruneCandidate]:
        """Refresh remote state and classify every worktree.

        Network problems only narrow what can be detected: a failed fetch
        leaves the last known tracking state in place, and an unknown
        default branch turns off merged detection.

        Raises:
            InvalidDurationError: If the stale threshold is malformed
            GitOperationError: If the worktrees cannot be listed
        """
        cutoff = self._resolve_stale_cutoff(now=now)

        success, error = self.git_operations.fetch_prune()
        if not success:
            self.display.warning(f"Failed to fetch: {error}")

        self.default_branch = self._resolve_default_branch()
        include_merged = self.config.merged
        if include_merged and not self.default_branch:
            self.display.warning("Could not determine default branch, skipping --merged check")
            include_merged = False

        self.oracle = self._build_oracle(self.default_branch)

        infos = self.worktree_service.list_worktrees_with_info(fast=False)
        logger.debug(f"Classifying {len(infos)} worktrees")

        return classify_candidates(
            infos,
            self.cwd,
            force=self.config.force,
            include_merged=include_merged,
            include_detached=self.config.detached,
            stale_cutoff=cutoff,
            default_branch=self.default_branch,
            oracle=self.oracle,
            now=now,
        )

    def prune(self, now: Optional[float] = None) -> Optional[PruneResult]:
        """Run a prune: preview by default, remove with dry_run off.

        Returns:
            The PruneResult of a committed run, None for a preview
        """
        try:
            candidates = self.find_candidates(now=now)

            if self.config.dry_run:
                self.display.display_dry_run(candidates)
                return None

            if not candidates:
                self.display.info("No worktrees to remove.")
                return PruneResult()

            executor = PruneExecutor(
                self.worktree_service,
                self.git_operations,
                oracle=self.oracle,
                force=self.config.force,
            )
            result = executor.execute(candidates)
            self.display.display_prune_result(result)
            return result
        finally:
            self.cleanup()

    def unlock(self, targets: List[str]) -> UnlockResult:
        """Unlock worktrees by directory or branch name.

        Raises:
            WorktreeNotFoundError: If any target is unknown; nothing is unlocked
            UnlockError: If any worktree failed to unlock
        """
        engine = UnlockEngine(self.worktree_service)
        result = engine.unlock(targets)
        self.display.display_unlock_result(result)
        return result

    def cleanup(self) -> None:
        """Release the GitHub API connection if one was opened."""
        if self.github_service is not None:
            self.github_service.close()
            self.github_service = None
