"""GitHub API integration service"""

import os
from typing import Optional, Set, TYPE_CHECKING, Union
from urllib.parse import urlparse
from github import Github, Auth

from git_worktree_keeper.exceptions import GitHubAPIError
from git_worktree_keeper.logging_config import get_logger

if TYPE_CHECKING:
    from github.Repository import Repository
    from git_worktree_keeper.config import Config

logger = get_logger(__name__)


def parse_github_repo(remote_url: str) -> Optional[str]:
    """Extract "owner/repo" from a GitHub remote URL, None for other hosts."""
    if not remote_url or "github.com" not in remote_url:
        return None

    if remote_url.startswith("git@"):
        # Handle SSH URL format (git@github.com:org/repo.git)
        path = remote_url.split("github.com:", 1)[1]
    else:
        # Handle HTTPS URL format (https://github.com/org/repo.git)
        parsed_url = urlparse(remote_url)
        path = parsed_url.path.strip("/")

    if path.endswith(".git"):
        path = path[:-4]

    if path.count("/") != 1:
        return None
    return path


class GitHubService:
    def __init__(self, config: Union["Config", dict]):
        """Initialize the service."""
        self.config = config
        self.debug_mode = config.get("debug", False)
        self.max_prs_to_fetch = config.get("max_prs_to_fetch", 500)
        self.github_token = config.get("github_token") or os.environ.get("GITHUB_TOKEN")
        self.github_repo: Optional[str] = None
        self.github: Optional[Github] = None
        self.gh_repo: Optional["Repository"] = None

    def setup_github_api(self, remote_url: Optional[str]) -> None:
        """Setup GitHub API access.

        Raises:
            GitHubAPIError: If the remote is not on GitHub, no token is
                configured, or the repository cannot be opened
        """
        path = parse_github_repo(remote_url or "")
        if not path:
            raise GitHubAPIError("setup", f"not a GitHub remote: {remote_url}")
        if not self.github_token:
            raise GitHubAPIError("setup", "no GitHub token (set GITHUB_TOKEN)")

        self.github_repo = path
        try:
            self.github = Github(auth=Auth.Token(self.github_token))
            self.gh_repo = self.github.get_repo(self.github_repo)
        except Exception as e:
            # Covers API errors as well as transport failures from requests
            raise GitHubAPIError("setup", str(e))

        logger.debug(f"[GitHub] GitHub integration enabled for: {path}")

    def get_merged_pr_branches(self, base: Optional[str] = None) -> Set[str]:
        """Get head branch names of merged pull requests opened from this repository.

        Args:
            base: Only consider PRs merged into this branch

        Returns:
            Set of branch names

        Raises:
            GitHubAPIError: If the API is not set up or a request fails
        """
        if self.gh_repo is None or self.github_repo is None:
            raise GitHubAPIError("get_merged_pr_branches", "GitHub API not set up")

        owner = self.github_repo.split("/")[0]
        kwargs = {"state": "closed", "sort": "updated", "direction": "desc"}
        if base:
            kwargs["base"] = base

        branches = set()
        try:
            for index, pr in enumerate(self.gh_repo.get_pulls(**kwargs)):
                if index >= self.max_prs_to_fetch:
                    break
                if pr.merged_at is None:
                    continue
                # Forks share branch names with us; only trust our own heads
                pr_owner, _, branch = pr.head.label.partition(":")
                if pr_owner != owner:
                    continue
                branches.add(branch or pr.head.ref)
        except Exception as e:
            raise GitHubAPIError("get_merged_pr_branches", str(e))

        logger.debug(f"[GitHub] Found {len(branches)} branches with merged PRs")
        return branches

    def close(self) -> None:
        """Close the GitHub API connection to clean up resources."""
        if self.github:
            try:
                self.github.close()
                logger.debug("[GitHub] Closed GitHub API connection")
            except Exception as e:
                logger.debug(f"[GitHub] Error closing GitHub API connection: {e}")
