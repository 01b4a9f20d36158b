"""Utility functions for git-worktree-keeper.

This package provides utility modules:
- duration: Parsing of stale thresholds into durations and cutoffs
- paths: Separator-aware path comparison
"""

from .duration import parse_duration, stale_cutoff
from .paths import paths_equal, path_has_prefix

__all__ = [
    # Duration
    "parse_duration",
    "stale_cutoff",
    # Paths
    "paths_equal",
    "path_has_prefix",
]
