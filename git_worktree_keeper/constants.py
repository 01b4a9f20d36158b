"""Shared constants for git-worktree-keeper."""

# Workspace layout: the bare repository lives in this directory at the
# workspace root, and worktrees are siblings of it.
BARE_DIR_NAME = ".bare"
BARE_GITDIR_CONTENT = "gitdir: .bare"

# Safety bound when walking up the directory tree
MAX_DIRECTORY_ITERATIONS = 256

DEFAULT_REMOTE = "origin"
DEFAULT_STALE_THRESHOLD = "30d"

# Git config key holding the workspace's default stale threshold
STALE_THRESHOLD_CONFIG_SECTION = "worktree-keeper"
STALE_THRESHOLD_CONFIG_OPTION = "staleThreshold"

# Suggested values for --stale
STALE_THRESHOLD_SUGGESTIONS = ["7d", "14d", "30d", "2w", "1m"]

# git branch -d error text for branches with unmerged commits
NOT_FULLY_MERGED_MARKER = "not fully merged"

# Symbol constants
SYMBOL_SUCCESS = "✓"
SYMBOL_WARNING = "⚠"
SYMBOL_ERROR = "✗"
SYMBOL_SUBITEM = "↳"

# Rich color names for each outcome group
CLI_COLORS = {
    "success": "green",
    "info": "blue",
    "warning": "yellow",
    "error": "red",
    "dimmed": "dim",
}

# Debug log file, rewritten on every --debug run: ~/LOG_DIR_NAME/LOG_FILE_NAME
LOG_DIR_NAME = ".git-worktree-keeper"
LOG_FILE_NAME = "git-worktree-keeper.log"
LOG_DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_SHORT_FORMAT = "[%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Library loggers held at WARNING outside --debug. GitPython logs every
# command on git.cmd; PyGithub and urllib3 log each request.
NOISY_LOGGERS = ("git.cmd", "github", "urllib3")
