"""Command-line argument parsing for git-worktree-keeper."""

import argparse
from typing import List, Optional

from git_worktree_keeper.__version__ import __version__
from git_worktree_keeper.constants import STALE_THRESHOLD_SUGGESTIONS

PRUNE_EPILOG = """examples:
  git-worktree-keeper prune                 # Dry-run: show what would be removed
  git-worktree-keeper prune --commit        # Actually remove worktrees
  git-worktree-keeper prune --stale 30d     # Include inactive worktrees
  git-worktree-keeper prune --merged        # Include merged branches
  git-worktree-keeper prune --detached      # Include detached worktrees
  git-worktree-keeper prune --force         # Remove even if dirty or locked
"""


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its prune and unlock subcommands."""
    parser = argparse.ArgumentParser(
        prog="git-worktree-keeper",
        description="Keep a workspace of git worktrees (one bare repository, many checkouts) tidy",
        epilog="Merged pull request detection uses the GITHUB_TOKEN environment variable when set.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument(
        "--version", action="version", version=f"git-worktree-keeper {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    prune = subparsers.add_parser(
        "prune",
        help="Remove worktrees whose upstream branch is gone",
        description='Remove worktrees with deleted upstream branches (marked "gone"). '
        "For gone branches, local branches are also deleted after removing the worktree.",
        epilog=PRUNE_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    prune.add_argument(
        "--commit", action="store_true", help="Remove worktrees (dry-run without this flag)"
    )
    prune.add_argument(
        "-f", "--force", action="store_true", help="Remove even if dirty, locked, or unpushed"
    )
    prune.add_argument(
        "--stale",
        nargs="?",
        const="",
        default=None,
        metavar="THRESHOLD",
        help="Include inactive worktrees, e.g. "
        f"{', '.join(STALE_THRESHOLD_SUGGESTIONS)} "
        "(default: worktree-keeper.staleThreshold from git config, or 30d)",
    )
    prune.add_argument(
        "--merged", action="store_true", help="Include worktrees merged into default branch"
    )
    prune.add_argument("--detached", action="store_true", help="Include detached worktrees")

    unlock = subparsers.add_parser(
        "unlock",
        help="Unlock worktrees so they can be pruned",
        description="Unlock one or more worktrees, given by directory name or branch name.",
    )
    unlock.add_argument("targets", nargs="+", metavar="TARGET", help="Worktree directory or branch name")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
