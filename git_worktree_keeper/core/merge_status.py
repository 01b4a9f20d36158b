"""Merge status lookups shared by one prune run."""

from typing import Callable, Dict, Optional, Set

from git_worktree_keeper.exceptions import GitHubAPIError, GitOperationError
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.services.git.merge_detector import MergeDetector

logger = get_logger(__name__)


class MergeStatusOracle:
    """Answers "is this branch merged?" from local git and merged pull requests.

    Local verdicts are cached per branch and the merged pull request set is
    fetched at most once. An instance lives for a single prune run, since
    upstream state changes between runs.
    """

    def __init__(
        self,
        merge_detector: MergeDetector,
        default_branch: str,
        remote_lookup: Optional[Callable[[], Set[str]]] = None,
    ):
        """Initialize the oracle.

        Args:
            merge_detector: Local merge detection service
            default_branch: Branch merges are checked against, "" if unknown
            remote_lookup: Callable returning branch names with merged pull
                requests; None disables the remote signal
        """
        self.merge_detector = merge_detector
        self.default_branch = default_branch
        self.remote_lookup = remote_lookup
        self._local_cache: Dict[str, bool] = {}
        self._remote_branches: Optional[Set[str]] = None

    def is_merged_locally(self, branch: str) -> bool:
        """Check if the branch is merged into the default branch locally.

        Errors count as "not merged".
        """
        if not branch or not self.default_branch or branch == self.default_branch:
            return False

        if branch in self._local_cache:
            return self._local_cache[branch]

        try:
            merged = self.merge_detector.is_branch_merged(branch, self.default_branch)
        except GitOperationError as e:
            logger.debug(f"Merge check failed for {branch}: {e}")
            merged = False

        self._local_cache[branch] = merged
        return merged

    def merged_pr_branches(self) -> Set[str]:
        """Get the branches with merged pull requests, querying the remote once."""
        if self._remote_branches is not None:
            return self._remote_branches

        self._remote_branches = set()
        if self.remote_lookup is None:
            return self._remote_branches

        try:
            self._remote_branches = set(self.remote_lookup())
        except (GitHubAPIError, GitOperationError) as e:
            logger.warning(f"Could not check merged pull requests: {e}")

        return self._remote_branches

    def is_merged_via_pr(self, branch: str) -> bool:
        return bool(branch) and branch in self.merged_pr_branches()

    def is_merged(self, branch: str) -> bool:
        """Check both signals, local first."""
        if self.is_merged_locally(branch):
            logger.debug(f"Branch {branch} is merged into {self.default_branch} locally")
            return True
        if self.is_merged_via_pr(branch):
            logger.debug(f"Branch {branch} was merged via pull request")
            return True
        return False
