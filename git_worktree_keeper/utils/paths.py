"""Path comparison helpers."""

import os


def _clean(path: str) -> str:
    return os.path.normcase(os.path.normpath(os.path.realpath(path)))


def paths_equal(a: str, b: str) -> bool:
    """Check whether two paths refer to the same location after normalization."""
    return _clean(a) == _clean(b)


def path_has_prefix(path: str, prefix: str) -> bool:
    """Check whether path lies strictly inside prefix.

    Matching happens on separator boundaries, so "/ws/feature-2" is not
    inside "/ws/feature".
    """
    path = _clean(path)
    prefix = _clean(prefix)
    if path == prefix:
        return False
    if not prefix.endswith(os.sep):
        prefix += os.sep
    return path.startswith(prefix)
