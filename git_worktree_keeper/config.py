"""Configuration handling for git-worktree-keeper"""

import os
from dataclasses import dataclass
from typing import Optional

import git

from git_worktree_keeper.constants import (
    DEFAULT_REMOTE,
    DEFAULT_STALE_THRESHOLD,
    STALE_THRESHOLD_CONFIG_OPTION,
    STALE_THRESHOLD_CONFIG_SECTION,
)
from git_worktree_keeper.exceptions import InvalidDurationError
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.utils.duration import parse_duration

logger = get_logger(__name__)


@dataclass
class Config:
    """Configuration for git-worktree-keeper with validation."""

    # Execution modes
    dry_run: bool = True  # Preview unless --commit is given
    force: bool = False
    verbose: bool = False
    debug: bool = False

    # Candidate selection
    stale_threshold: Optional[str] = None  # e.g. "30d"; None disables, "" uses the workspace default
    merged: bool = False
    detached: bool = False
    default_stale_threshold: str = DEFAULT_STALE_THRESHOLD

    # Remote integration
    remote_name: str = DEFAULT_REMOTE
    github_token: Optional[str] = None
    max_prs_to_fetch: int = 500

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_stale_threshold()
        self._validate_default_stale_threshold()
        self._validate_remote_name()
        self._validate_max_prs()
        if not self.github_token:
            self.github_token = os.environ.get("GITHUB_TOKEN")

    def _validate_stale_threshold(self):
        """Validate stale_threshold parses as a duration."""
        if self.stale_threshold is None:
            return
        self.stale_threshold = self.stale_threshold.strip()
        if self.stale_threshold:
            parse_duration(self.stale_threshold)

    def _validate_default_stale_threshold(self):
        """Validate default_stale_threshold parses as a duration."""
        parse_duration(self.default_stale_threshold)

    def _validate_remote_name(self):
        """Validate remote_name is not empty."""
        if not self.remote_name or not self.remote_name.strip():
            raise ValueError("remote_name cannot be empty")
        self.remote_name = self.remote_name.strip()

    def _validate_max_prs(self):
        """Validate max_prs_to_fetch is positive."""
        if self.max_prs_to_fetch <= 0:
            raise ValueError(f"max_prs_to_fetch must be positive, got {self.max_prs_to_fetch}")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "dry_run": self.dry_run,
            "force": self.force,
            "verbose": self.verbose,
            "debug": self.debug,
            "stale_threshold": self.stale_threshold,
            "merged": self.merged,
            "detached": self.detached,
            "default_stale_threshold": self.default_stale_threshold,
            "remote_name": self.remote_name,
            "github_token": self.github_token,
            "max_prs_to_fetch": self.max_prs_to_fetch,
        }

    def get(self, key: str, default=None):
        """Get config value by key, mirroring dict access."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {
            "dry_run",
            "force",
            "verbose",
            "debug",
            "stale_threshold",
            "merged",
            "detached",
            "default_stale_threshold",
            "remote_name",
            "github_token",
            "max_prs_to_fetch",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)


def resolve_default_stale_threshold(bare_dir: str, fallback: str = DEFAULT_STALE_THRESHOLD) -> str:
    """
    Read the workspace's default stale threshold from git config.

    Looks up ``worktree-keeper.staleThreshold`` in the bare repository's
    config (including global and system scopes).

    Args:
        bare_dir: Path to the bare repository
        fallback: Threshold used when the key is unset or invalid

    Returns:
        The configured threshold, or fallback
    """
    try:
        repo = git.Repo(bare_dir)
        try:
            reader = repo.config_reader()
            value = reader.get_value(
                STALE_THRESHOLD_CONFIG_SECTION,
                STALE_THRESHOLD_CONFIG_OPTION,
                default=fallback,
            )
        finally:
            repo.close()
    except Exception as e:
        logger.debug(f"Could not read stale threshold from git config: {e}")
        return fallback

    value = str(value).strip()
    try:
        parse_duration(value)
    except InvalidDurationError as e:
        logger.warning(f"Ignoring invalid {STALE_THRESHOLD_CONFIG_SECTION}.{STALE_THRESHOLD_CONFIG_OPTION}: {e}")
        return fallback
    return value
