"""Display service for prune and unlock results"""
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from git_worktree_keeper.constants import CLI_COLORS, SYMBOL_ERROR, SYMBOL_SUBITEM, SYMBOL_SUCCESS, SYMBOL_WARNING
from git_worktree_keeper.formatters import format_candidate_label, format_skip_item, pluralize
from git_worktree_keeper.models.prune import PruneCandidate, PruneResult, UnlockResult
from git_worktree_keeper.logging_config import get_logger

console = Console()
logger = get_logger(__name__)


class DisplayService:
    def __init__(self, verbose: bool = False, debug: bool = False, output: Optional[Console] = None):
        self.verbose = verbose
        self.debug_mode = debug
        self.console = output or console

    def _header(self, style: str, symbol: str, text: str) -> None:
        color = CLI_COLORS[style]
        self.console.print(f"[{color}]{symbol} {escape(text)}[/{color}]")

    def _item(self, text: str) -> None:
        color = CLI_COLORS["dimmed"]
        self.console.print(f"    [{color}]{escape(text)}[/{color}]")

    def info(self, text: str) -> None:
        self.console.print(f"[{CLI_COLORS['info']}]{escape(text)}[/{CLI_COLORS['info']}]")

    def warning(self, text: str) -> None:
        self._header("warning", SYMBOL_WARNING, text)

    def error(self, text: str) -> None:
        self._header("error", SYMBOL_ERROR, text)

    def display_dry_run(self, candidates: List[PruneCandidate]) -> None:
        """Show which worktrees a --commit run would remove and which it would skip."""
        if not candidates:
            self.info("No worktrees to prune.")
            return

        to_prune = []
        to_skip = []
        for candidate in candidates:
            label = format_candidate_label(candidate, with_age=True)
            if candidate.removable:
                to_prune.append(label)
            else:
                to_skip.append(format_skip_item(label, candidate.skip_reason))

        if to_prune:
            self.info(f"Would prune {pluralize(len(to_prune), 'worktree', 'worktrees')}:")
            for item in to_prune:
                self._item(item)

        if to_skip:
            self.warning(f"Would skip {pluralize(len(to_skip), 'worktree', 'worktrees')}:")
            for item in to_skip:
                self._item(item)

        if to_prune:
            self.console.print()
            if to_skip:
                self.info("Run with --commit to remove. Use --force to include skipped.")
            else:
                self.info("Run with --commit to remove.")

    def display_prune_result(self, result: PruneResult) -> None:
        """Show the outcome of a --commit run. Nothing is left out."""
        if result.pruned:
            self._header(
                "success", SYMBOL_SUCCESS,
                f"Pruned {pluralize(len(result.pruned), 'worktree', 'worktrees')}:",
            )
            for item in result.pruned:
                self._item(item)

            if result.deleted_branches:
                count = pluralize(len(result.deleted_branches), "local branch", "local branches")
                self._item(f"{SYMBOL_SUBITEM} deleted {count}")
            if len(result.kept_branches) == 1:
                branch, reason = result.kept_branches[0]
                self._item(f"{SYMBOL_SUBITEM} kept 1 local branch: {branch} ({reason})")
            elif result.kept_branches:
                self._item(f"{SYMBOL_SUBITEM} kept {len(result.kept_branches)} local branches:")
                for branch, reason in result.kept_branches:
                    self._item(f"    {branch} ({reason})")

        if result.skipped:
            self.warning(f"Skipped {pluralize(len(result.skipped), 'worktree', 'worktrees')}:")
            for label, reason in result.skipped:
                self._item(format_skip_item(label, reason))

        if result.failed:
            self.error(f"Failed to remove {pluralize(len(result.failed), 'worktree', 'worktrees')}:")
            for label, error in result.failed:
                self._item(f"{label}: {error}")

    def display_unlock_result(self, result: UnlockResult) -> None:
        """Show unlocked and failed worktrees."""
        for name in result.unlocked:
            self._header("success", SYMBOL_SUCCESS, f"Unlocked worktree {name}")
        for name, reason in result.failed:
            self._header("error", SYMBOL_ERROR, f"Failed to unlock {name}: {reason}")
