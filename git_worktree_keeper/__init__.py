"""
git-worktree-keeper - Prune and unlock the worktrees of a bare-repository workspace
"""

from .__version__ import __version__
from .core import WorktreeKeeper
from .cli.main import main

__all__ = ["WorktreeKeeper", "main", "__version__"]
