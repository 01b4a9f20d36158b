"""Worktree inventory and administration service for git-worktree-keeper."""

import git
import os
import re
from typing import Optional, Dict, Any, List

from git_worktree_keeper.exceptions import GitOperationError
from git_worktree_keeper.models.worktree import WorktreeInfo
from git_worktree_keeper.services.git.errors import format_git_error
from git_worktree_keeper.logging_config import get_logger

logger = get_logger(__name__)

_AHEAD_PATTERN = re.compile(r"ahead (\d+)")


class WorktreeService:
    """Service for inspecting and managing the worktrees of a bare repository."""

    def __init__(self, bare_dir: str):
        """Initialize the worktree service.

        Args:
            bare_dir: Path to the bare repository backing the worktrees
        """
        self.bare_dir = bare_dir

    def _get_repo(self):
        """Get a git.Repo instance for the bare repository.

        Returns:
            git.Repo: A fresh repository instance
        """
        return git.Repo(self.bare_dir)

    def list_worktrees(self) -> List[str]:
        """List absolute paths of all worktrees, excluding the bare repository.

        Returns:
            List of worktree paths in git's order

        Raises:
            GitOperationError: If git worktree list fails
        """
        try:
            repo = self._get_repo()
            # Format:
            # worktree /path/to/worktree
            # HEAD commit_sha
            # branch refs/heads/branch-name | detached | bare
            # (blank line between worktrees)
            output = repo.git.worktree("list", "--porcelain")
        except git.exc.GitCommandError as e:
            raise GitOperationError(
                "list_worktrees", self.bare_dir, format_git_error("git worktree list", e)
            )

        bare_path = os.path.normpath(os.path.abspath(self.bare_dir))
        worktrees = []
        current: Dict[str, Any] = {}

        def flush():
            path = current.get("path")
            if not path or current.get("bare"):
                return
            abs_path = os.path.normpath(os.path.abspath(path))
            if abs_path == bare_path:
                return
            worktrees.append(abs_path)

        for line in output.split("\n"):
            line = line.strip()
            if not line:
                flush()
                current = {}
                continue
            if line.startswith("worktree "):
                current["path"] = line.split(" ", 1)[1]
            elif line == "bare":
                current["bare"] = True

        # Handle last entry if no trailing blank line
        flush()

        logger.debug(f"Found {len(worktrees)} worktrees")
        return worktrees

    def list_worktrees_with_info(self, fast: bool = False) -> List[WorktreeInfo]:
        """Get a status snapshot for every worktree.

        Args:
            fast: Only populate path, branch, detached and lock state, skipping
                the dirty check, upstream tracking and last commit lookups

        Returns:
            List of WorktreeInfo sorted by branch name. Worktrees that cannot
            be inspected are logged and left out.
        """
        infos = []
        for path in self.list_worktrees():
            try:
                info = self.get_worktree_info(path, fast=fast)
            except GitOperationError as e:
                logger.warning(f"Skipping worktree {path} (may be corrupted): {e}")
                continue
            infos.append(info)
            logger.debug(f"  {info}")

        infos.sort(key=lambda wt: (wt.branch, wt.path))
        return infos

    def get_worktree_info(self, path: str, fast: bool = False) -> WorktreeInfo:
        """Build the status snapshot for a single worktree.

        Raises:
            GitOperationError: If the worktree cannot be opened
        """
        if not path:
            raise GitOperationError("get_worktree_info", message="worktree path cannot be empty")

        try:
            repo = git.Repo(path)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise GitOperationError("get_worktree_info", path, f"not a git worktree: {e}")

        try:
            try:
                branch = repo.active_branch.name
                detached = False
            except TypeError:
                # HEAD points at a commit, not a branch
                branch = ""
                detached = True

            fields: Dict[str, Any] = {
                "path": path,
                "branch": branch,
                "detached": detached,
                "locked": self.is_worktree_locked(path),
            }
            if fast:
                return WorktreeInfo(**fields)

            try:
                fields["dirty"] = repo.is_dirty(untracked_files=True)
            except git.exc.GitCommandError as e:
                raise GitOperationError(
                    "get_worktree_info", path, format_git_error("git status", e)
                )

            if not detached:
                fields.update(self._get_sync_status(repo, branch))

            fields["last_commit_time"] = self._get_last_commit_time(repo)
            return WorktreeInfo(**fields)
        finally:
            repo.close()

    def _get_sync_status(self, repo: git.Repo, branch: str) -> Dict[str, Any]:
        """Read upstream tracking state for a branch.

        Uses for-each-ref, which reports "[gone]" when the upstream branch was
        deleted on the remote and pruned locally. Branches without an upstream
        report nothing.
        """
        status: Dict[str, Any] = {}
        try:
            output = repo.git.for_each_ref(
                "--format=%(upstream) %(upstream:track)", f"refs/heads/{branch}"
            ).strip()
        except git.exc.GitCommandError as e:
            logger.debug(f"Failed to get sync status for {branch}: {e}")
            return status

        if not output:
            return status

        upstream_ref, _, track_info = output.partition(" ")
        if not upstream_ref:
            return status

        if "[gone]" in track_info:
            status["gone"] = True
            return status

        match = _AHEAD_PATTERN.search(track_info)
        if match:
            status["ahead"] = int(match.group(1))
        return status

    @staticmethod
    def _get_last_commit_time(repo: git.Repo) -> int:
        """Get the Unix timestamp of HEAD's commit, 0 if there is none."""
        try:
            output = repo.git.log("-1", "--format=%ct").strip()
            return int(output) if output else 0
        except (ValueError, git.exc.GitCommandError) as e:
            # Unborn branch: no commits yet
            logger.debug(f"No last commit time for {repo.working_tree_dir}: {e}")
            return 0

    @staticmethod
    def get_worktree_git_dir(worktree_path: str) -> Optional[str]:
        """Get the administrative git directory of a worktree.

        Returns:
            Absolute gitdir path, or None if the path has no .git file

        Raises:
            GitOperationError: If the .git file is unreadable or malformed
        """
        git_file = os.path.join(worktree_path, ".git")
        if not os.path.isfile(git_file):
            return None

        try:
            with open(git_file, encoding="utf-8") as f:
                line = f.read().strip()
        except OSError as e:
            raise GitOperationError("read_gitdir", worktree_path, f"failed to read .git file: {e}")

        if not line.startswith("gitdir:"):
            raise GitOperationError(
                "read_gitdir", worktree_path, "invalid .git file format: missing gitdir prefix"
            )

        gitdir = line[len("gitdir:"):].strip()
        if not os.path.isabs(gitdir):
            gitdir = os.path.join(worktree_path, gitdir)
        return os.path.normpath(gitdir)

    def is_worktree_locked(self, worktree_path: str) -> bool:
        """Check if a worktree is locked (its gitdir holds a "locked" file)."""
        try:
            gitdir = self.get_worktree_git_dir(worktree_path)
        except GitOperationError as e:
            logger.debug(f"Failed to get worktree gitdir for lock check: {e}")
            return False
        if not gitdir:
            return False
        return os.path.exists(os.path.join(gitdir, "locked"))

    def remove_worktree(self, path: str, force: bool = False) -> tuple[bool, Optional[str]]:
        """Remove a worktree at the specified path.

        Args:
            path: Path to the worktree directory
            force: Force removal even if working tree is dirty or locked

        Returns:
            Tuple of (success, error_message). error_message is None on success.
        """
        try:
            repo = self._get_repo()
            args = ["remove", path]
            if force:
                args.append("--force")

            logger.debug(f"Executing: git worktree {' '.join(args)} in {self.bare_dir}")
            repo.git.worktree(*args)
            logger.info(f"Removed worktree at {path}")
            return True, None
        except git.exc.GitCommandError as e:
            error_msg = format_git_error("git worktree remove", e)
            logger.error(f"Failed to remove worktree at {path}: {error_msg}")
            return False, error_msg
        except Exception as e:
            error_msg = f"Unexpected error removing worktree: {e}"
            logger.error(error_msg)
            return False, error_msg

    def unlock_worktree(self, path: str) -> tuple[bool, Optional[str]]:
        """Unlock a locked worktree.

        Returns:
            Tuple of (success, error_message). error_message is None on success.
        """
        try:
            repo = self._get_repo()
            logger.debug(f"Executing: git worktree unlock {path} in {self.bare_dir}")
            repo.git.worktree("unlock", path)
            logger.info(f"Unlocked worktree at {path}")
            return True, None
        except git.exc.GitCommandError as e:
            error_msg = format_git_error("git worktree unlock", e)
            logger.error(f"Failed to unlock worktree at {path}: {error_msg}")
            return False, error_msg
        except Exception as e:
            error_msg = f"Unexpected error unlocking worktree: {e}"
            logger.error(error_msg)
            return False, error_msg

    @staticmethod
    def find_worktree(infos: List[WorktreeInfo], target: str) -> Optional[WorktreeInfo]:
        """Find a worktree by directory name, falling back to branch name.

        Args:
            infos: Worktree inventory
            target: Directory basename or branch name

        Returns:
            The matching WorktreeInfo, or None
        """
        for info in infos:
            if info.name == target:
                return info

        for info in infos:
            if info.branch and info.branch == target:
                return info

        return None
