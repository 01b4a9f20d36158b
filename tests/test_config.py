"""Tests for configuration handling"""
import pytest

from git_worktree_keeper.config import Config, resolve_default_stale_threshold
from git_worktree_keeper.exceptions import InvalidDurationError


class TestConfig:
    """Test Config validation and conversion."""

    def test_defaults(self, no_github_token):
        """Test a default config previews without any extra modes."""
        config = Config()

        assert config.dry_run is True
        assert config.force is False
        assert config.stale_threshold is None
        assert config.github_token is None
        assert config.remote_name == "origin"

    def test_stale_threshold_trimmed_and_validated(self):
        """Test stale thresholds are parsed eagerly."""
        assert Config(stale_threshold=" 2w ").stale_threshold == "2w"

        with pytest.raises(InvalidDurationError):
            Config(stale_threshold="soon")

    def test_empty_stale_threshold_means_workspace_default(self):
        """Test an empty threshold is kept for later resolution."""
        assert Config(stale_threshold="").stale_threshold == ""

    def test_invalid_values(self):
        """Test remote name and PR limit validation."""
        with pytest.raises(ValueError):
            Config(remote_name="  ")
        with pytest.raises(ValueError):
            Config(max_prs_to_fetch=0)

    def test_token_from_env(self, monkeypatch):
        """Test GITHUB_TOKEN is used when no token is configured."""
        monkeypatch.setenv("GITHUB_TOKEN", "env_token")
        assert Config().github_token == "env_token"

    def test_dict_round_trip_and_get(self, mock_config):
        """Test from_dict ignores unknown keys and get mirrors dict access."""
        mock_config['unknown_key'] = True
        config = Config.from_dict(mock_config)

        assert config.get('github_token') == 'test_token_for_testing'
        assert config.get('missing', 'fallback') == 'fallback'
        assert Config.from_dict(config.to_dict()) == config


class TestDefaultStaleThreshold:
    """Test reading the workspace default from git config."""

    def test_unset(self, workspace):
        """Test the built-in default applies when git config has no value."""
        assert resolve_default_stale_threshold(workspace.bare_dir) == "30d"

    def test_configured(self, workspace):
        """Test worktree-keeper.staleThreshold is honored."""
        workspace.bare.git.config("worktree-keeper.staleThreshold", "2w")
        assert resolve_default_stale_threshold(workspace.bare_dir) == "2w"

    def test_invalid_falls_back(self, workspace):
        """Test an invalid configured value is ignored."""
        workspace.bare.git.config("worktree-keeper.staleThreshold", "forever")
        assert resolve_default_stale_threshold(workspace.bare_dir, fallback="7d") == "7d"

    def test_missing_repository(self, temp_dir):
        """Test unreadable repositories fall back."""
        assert resolve_default_stale_threshold(str(temp_dir / "nope")) == "30d"
