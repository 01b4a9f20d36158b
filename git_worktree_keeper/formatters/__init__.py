"""Formatting utilities for git-worktree-keeper.

This package provides formatting functions for reporting worktrees,
organized into logical modules:
- date: Commit age formatting
- labels: Candidate and skip labels, pluralization
"""

# Date formatters
from .date import format_age

# Label formatters
from .labels import (
    format_candidate_label,
    format_skip_item,
    pluralize,
)

__all__ = [
    # Date
    "format_age",
    # Labels
    "format_candidate_label",
    "format_skip_item",
    "pluralize",
]
