"""Pytest fixtures for git-worktree-keeper tests"""
import os
import tempfile
from pathlib import Path
from unittest.mock import Mock
import pytest
import git

from git_worktree_keeper.models.worktree import WorktreeInfo
from git_worktree_keeper.services.git.worktrees import WorktreeService


def _commit_file(repo: git.Repo, filename: str, content: str, message: str) -> str:
    """Write a file in a working tree, commit it and return the new sha."""
    path = Path(repo.working_tree_dir) / filename
    path.write_text(content)
    repo.git.add(filename)
    repo.git.commit("-m", message)
    return repo.git.rev_parse("HEAD")


class WorkspaceBuilder:
    """Builds a worktree workspace: a .bare clone of an origin repository
    with worktrees as siblings."""

    def __init__(self, root: Path):
        self.root = root

        # Origin repository standing in for the hosting remote
        origin_path = root / "origin"
        origin_path.mkdir()
        self.origin = git.Repo.init(origin_path)
        with self.origin.config_writer() as writer:
            writer.set_value("user", "name", "Test User")
            writer.set_value("user", "email", "test@example.com")
        _commit_file(self.origin, "README.md", "# Test Repository\n", "Initial commit")
        self.origin.git.branch("-M", "main")

        # Workspace with the bare clone
        self.path = root / "workspace"
        self.path.mkdir()
        self.bare_dir = str(self.path / ".bare")
        self.bare = git.Repo.clone_from(str(origin_path), self.bare_dir, bare=True)
        with self.bare.config_writer() as writer:
            writer.set_value('remote "origin"', "fetch", "+refs/heads/*:refs/remotes/origin/*")
            writer.set_value("user", "name", "Test User")
            writer.set_value("user", "email", "test@example.com")
        self.bare.git.fetch("origin")
        (self.path / ".git").write_text("gitdir: .bare\n")

    def worktree_path(self, name: str) -> str:
        return os.path.realpath(str(self.path / name))

    def add_worktree(self, name: str, branch: str = None, track: bool = True) -> str:
        """Add a worktree on a new branch created from main.

        With track, the branch also exists on origin and tracks it.
        """
        branch = branch or name
        path = self.worktree_path(name)
        if track:
            self.origin.create_head(branch)
            self.bare.git.fetch("origin")
            self.bare.git.branch("--track", branch, f"origin/{branch}")
        else:
            self.bare.git.branch(branch, "main")
        self.bare.git.worktree("add", path, branch)
        return path

    def add_main_worktree(self) -> str:
        path = self.worktree_path("main")
        self.bare.git.worktree("add", path, "main")
        return path

    def add_detached_worktree(self, name: str) -> str:
        path = self.worktree_path(name)
        self.bare.git.worktree("add", "--detach", path, "main")
        return path

    def make_gone(self, branch: str) -> None:
        """Delete the branch on origin and prune it locally."""
        self.origin.delete_head(branch, force=True)
        self.bare.git.fetch("--prune", "origin")

    def lock(self, path: str, reason: str = None) -> None:
        args = ["lock"]
        if reason:
            args += ["--reason", reason]
        self.bare.git.worktree(*args, path)

    def repo(self, path: str) -> git.Repo:
        return git.Repo(path)

    def close(self) -> None:
        self.origin.close()
        self.bare.close()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(os.path.realpath(tmpdir))


@pytest.fixture
def workspace(temp_dir):
    """Create a real worktree workspace for testing."""
    builder = WorkspaceBuilder(temp_dir)
    yield builder
    builder.close()


@pytest.fixture
def commit_file():
    """Helper committing a file in a worktree: commit_file(repo, name, content, message)."""
    return _commit_file


@pytest.fixture
def no_github_token(monkeypatch):
    """Make sure no GitHub token leaks in from the environment."""
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)


@pytest.fixture
def mock_config():
    """Create a mock configuration dictionary."""
    return {
        'verbose': False,
        'debug': False,
        'dry_run': True,
        'force': False,
        'stale_threshold': None,
        'merged': False,
        'detached': False,
        'remote_name': 'origin',
        'github_token': 'test_token_for_testing',
        'max_prs_to_fetch': 500
    }


@pytest.fixture
def make_info():
    """Factory for WorktreeInfo snapshots under /ws."""
    def _make(name: str = "feature", **kwargs) -> WorktreeInfo:
        kwargs.setdefault("branch", name)
        return WorktreeInfo(path=f"/ws/{name}", **kwargs)
    return _make


@pytest.fixture
def mock_worktree_service():
    """Create a mock WorktreeService that removes and unlocks successfully."""
    service = Mock(spec=WorktreeService)
    service.remove_worktree = Mock(return_value=(True, None))
    service.unlock_worktree = Mock(return_value=(True, None))
    service.is_worktree_locked = Mock(return_value=True)
    service.list_worktrees_with_info = Mock(return_value=[])
    return service


@pytest.fixture
def mock_git_operations():
    """Create a mock GitOperations that deletes branches successfully."""
    from git_worktree_keeper.services.git.operations import GitOperations

    operations = Mock(spec=GitOperations)
    operations.delete_branch = Mock(return_value=(True, None))
    return operations
