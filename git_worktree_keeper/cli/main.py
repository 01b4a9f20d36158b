"""Command-line entry point for git-worktree-keeper"""

import sys
from typing import List, Optional

from rich.console import Console

from git_worktree_keeper.cli.args import parse_args
from git_worktree_keeper.config import Config
from git_worktree_keeper.core.worktree_keeper import WorktreeKeeper
from git_worktree_keeper.exceptions import UnlockError, WorktreeKeeperError
from git_worktree_keeper.logging_config import setup_logging
from git_worktree_keeper.models.prune import UnlockResult

console = Console()


def build_config(parsed_args) -> Config:
    """Build config from parsed arguments."""
    if parsed_args.command == "prune":
        return Config(
            dry_run=not parsed_args.commit,
            force=parsed_args.force,
            verbose=parsed_args.verbose,
            debug=parsed_args.debug,
            stale_threshold=parsed_args.stale,
            merged=parsed_args.merged,
            detached=parsed_args.detached,
        )
    return Config(verbose=parsed_args.verbose, debug=parsed_args.debug)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)
    log_file = setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    try:
        config = build_config(parsed_args)

        if parsed_args.debug:
            if log_file:
                console.print(f"[dim]Debug log: {log_file}[/dim]")
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                if key == "github_token" and value:
                    value = "***"
                console.print(f"  {key}: {value}")

        keeper = WorktreeKeeper(config)

        if parsed_args.command == "unlock":
            try:
                keeper.unlock(parsed_args.targets)
            except UnlockError as e:
                keeper.display.display_unlock_result(UnlockResult(e.unlocked, e.failures))
                raise
            return 0

        result = keeper.prune()
        if result is not None and result.has_failures:
            return 1
        return 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except WorktreeKeeperError as e:
        console.print(f"[red]Error: {e}[/red]")
        if parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
