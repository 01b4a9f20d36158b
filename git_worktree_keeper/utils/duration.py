"""Parsing of human-friendly thresholds like "30d", "2w" or "6m"."""

import re
import time
from datetime import timedelta
from typing import Optional

from git_worktree_keeper.exceptions import InvalidDurationError

_NUMBER_PATTERN = re.compile(r"[+-]?[0-9]+")

# Months are a fixed 30 days, not calendar-aware
_UNIT_DAYS = {
    "d": 1,
    "w": 7,
    "m": 30,
}


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration such as "30d", "2w" or "6m" (case-insensitive).

    Args:
        value: A positive integer followed by a single unit character

    Returns:
        The duration as a timedelta

    Raises:
        InvalidDurationError: If the value is empty, malformed, non-positive
            or uses an unknown unit
    """
    s = (value or "").strip()
    if not s:
        raise InvalidDurationError(value, "duration cannot be empty")

    s = s.lower()
    if len(s) < 2:
        raise InvalidDurationError(value, f"invalid duration: {s}")

    unit = s[-1]
    num_str = s[:-1]

    if not _NUMBER_PATTERN.fullmatch(num_str):
        raise InvalidDurationError(value, f"invalid duration number: {s}")
    num = int(num_str)

    if num <= 0:
        raise InvalidDurationError(value, f"duration must be positive: {s}")

    if unit not in _UNIT_DAYS:
        raise InvalidDurationError(value, f"unknown duration unit: {unit} (use d, w, or m)")

    return timedelta(days=num * _UNIT_DAYS[unit])


def stale_cutoff(value: str, now: Optional[float] = None) -> int:
    """Return the Unix timestamp before which a last commit counts as stale."""
    duration = parse_duration(value)
    if now is None:
        now = time.time()
    return int(now - duration.total_seconds())
