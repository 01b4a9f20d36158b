"""Repository-level git operations for git-worktree-keeper."""

import git
from typing import Union, TYPE_CHECKING, Optional

from git_worktree_keeper.exceptions import GitOperationError
from git_worktree_keeper.services.git.errors import format_git_error
from git_worktree_keeper.logging_config import get_logger

if TYPE_CHECKING:
    from git_worktree_keeper.config import Config

logger = get_logger(__name__)


class GitOperations:
    """Service for operations on the bare repository behind a workspace."""

    def __init__(self, bare_dir: str, config: Union["Config", dict]):
        """Initialize the service.

        Args:
            bare_dir: Path to the bare repository
            config: Configuration dictionary or Config object
        """
        self.bare_dir = bare_dir
        self.config = config
        self.debug_mode = config.get("debug", False)
        self.remote_name = config.get("remote_name", "origin")

    def _get_repo(self):
        """Get a git.Repo instance for the bare repository."""
        return git.Repo(self.bare_dir)

    def fetch_prune(self) -> tuple[bool, Optional[str]]:
        """Fetch from the remote and drop stale remote-tracking refs.

        Returns:
            Tuple of (success, error_message). error_message is None on success.
        """
        try:
            repo = self._get_repo()
            logger.debug(f"Executing: git fetch --prune {self.remote_name} in {self.bare_dir}")
            repo.git.fetch("--prune", self.remote_name)
            return True, None
        except git.exc.GitCommandError as e:
            error_msg = format_git_error("git fetch --prune", e)
            logger.debug(f"Fetch failed: {error_msg}")
            return False, error_msg

    def get_default_branch(self) -> str:
        """Get the default branch from the bare repository's symbolic HEAD.

        Raises:
            GitOperationError: If HEAD is not a symbolic ref
        """
        try:
            repo = self._get_repo()
            ref = repo.git.symbolic_ref("HEAD").strip()
        except git.exc.GitCommandError as e:
            raise GitOperationError(
                "get_default_branch", self.bare_dir, format_git_error("git symbolic-ref HEAD", e)
            )

        branch = ref[len("refs/heads/"):] if ref.startswith("refs/heads/") else ref
        if not branch:
            raise GitOperationError("get_default_branch", self.bare_dir, "HEAD is empty")
        logger.debug(f"Default branch: {branch}")
        return branch

    def get_remote_url(self) -> Optional[str]:
        """Get the URL of the configured remote, None if it has no URL."""
        try:
            repo = self._get_repo()
            return repo.remote(self.remote_name).url
        except (ValueError, git.exc.GitCommandError) as e:
            logger.debug(f"No URL for remote {self.remote_name}: {e}")
            return None

    def delete_branch(self, branch_name: str, force: bool = False) -> tuple[bool, Optional[str]]:
        """Delete a local branch.

        Args:
            branch_name: Branch to delete
            force: Use -D instead of -d, skipping git's merged check

        Returns:
            Tuple of (success, error_message). error_message carries git's
            stderr so callers can recognise "not fully merged".
        """
        flag = "-D" if force else "-d"
        try:
            repo = self._get_repo()
            logger.debug(f"Executing: git branch {flag} {branch_name} in {self.bare_dir}")
            repo.git.branch(flag, branch_name)
            logger.info(f"Deleted local branch {branch_name}")
            return True, None
        except git.exc.GitCommandError as e:
            error_msg = format_git_error(f"git branch {flag}", e)
            logger.debug(f"Failed to delete branch {branch_name}: {error_msg}")
            return False, error_msg
