"""Date and time formatting utilities."""

import time
from typing import Optional

SECONDS_PER_DAY = 24 * 60 * 60


def format_age(timestamp: int, now: Optional[float] = None) -> str:
    """
    Describe how long ago a Unix timestamp was in coarse buckets.

    Args:
        timestamp: Unix seconds, 0 meaning unknown
        now: Reference time in Unix seconds (defaults to the current time)

    Returns:
        "today", "yesterday", "N days ago", "1 week ago", "N weeks ago",
        "1 month ago", "N months ago", "1 year ago", "N years ago",
        or "" for an unknown timestamp
    """
    if timestamp == 0:
        return ""

    if now is None:
        now = time.time()

    # Whole elapsed days; commits from the future count as today
    days = max(int((now - timestamp) / SECONDS_PER_DAY), 0)

    if days == 0:
        return "today"
    if days == 1:
        return "yesterday"
    if days < 7:
        return f"{days} days ago"
    if days < 14:
        return "1 week ago"
    if days < 30:
        return f"{days // 7} weeks ago"
    if days < 60:
        return "1 month ago"
    if days < 365:
        return f"{days // 30} months ago"
    if days < 730:
        return "1 year ago"
    return f"{days // 365} years ago"
