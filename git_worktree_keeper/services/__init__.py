"""Services for git-worktree-keeper."""

from .display_service import DisplayService
from .workspace import find_bare_dir

__all__ = [
    "DisplayService",
    "find_bare_dir",
]
