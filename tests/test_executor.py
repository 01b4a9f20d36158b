"""Tests for prune execution"""
from unittest.mock import Mock

from git_worktree_keeper.core.executor import PruneExecutor
from git_worktree_keeper.core.merge_status import MergeStatusOracle
from git_worktree_keeper.exceptions import GitHubAPIError
from git_worktree_keeper.models.prune import PruneCandidate, PruneType, SkipReason


def candidate(make_info, name, prune_type=PruneType.GONE, skip=SkipReason.NONE, **kwargs):
    return PruneCandidate(make_info(name, **kwargs), skip, prune_type)


def make_oracle(local=False, remote=()):
    detector = Mock()
    detector.is_branch_merged = Mock(return_value=local)
    return MergeStatusOracle(detector, "main", Mock(return_value=set(remote)))


class TestPruneExecutorRemoval:
    """Test worktree removal and outcome tallies."""

    def test_partial_failure_continues(self, make_info, mock_worktree_service, mock_git_operations):
        """Test one failed removal does not stop the others."""
        mock_worktree_service.remove_worktree.side_effect = [
            (True, None),
            (False, "git worktree remove failed (exit 128): fatal: busy"),
            (True, None),
        ]
        executor = PruneExecutor(mock_worktree_service, mock_git_operations, make_oracle())
        candidates = [
            candidate(make_info, "a", PruneType.STALE),
            candidate(make_info, "b", PruneType.STALE),
            candidate(make_info, "c", PruneType.STALE),
        ]

        result = executor.execute(candidates)

        assert result.pruned == ["a", "c"]
        assert result.failed == [("b", "git worktree remove failed (exit 128): fatal: busy")]
        assert result.has_failures
        assert mock_worktree_service.remove_worktree.call_count == 3

    def test_skipped_are_untouched(self, make_info, mock_worktree_service, mock_git_operations):
        """Test protected candidates are recorded without any git call."""
        executor = PruneExecutor(mock_worktree_service, mock_git_operations, make_oracle())
        result = executor.execute([
            candidate(make_info, "dirty", skip=SkipReason.DIRTY),
            candidate(make_info, "here", skip=SkipReason.CURRENT_WORKTREE),
        ])

        assert result.skipped == [("dirty", SkipReason.DIRTY), ("here", SkipReason.CURRENT_WORKTREE)]
        assert result.pruned == []
        mock_worktree_service.remove_worktree.assert_not_called()
        mock_git_operations.delete_branch.assert_not_called()

    def test_force_passed_through(self, make_info, mock_worktree_service, mock_git_operations):
        """Test force reaches git worktree remove."""
        executor = PruneExecutor(mock_worktree_service, mock_git_operations, make_oracle(), force=True)
        executor.execute([candidate(make_info, "a", PruneType.STALE)])

        mock_worktree_service.remove_worktree.assert_called_once_with("/ws/a", force=True)

    def test_detached_label(self, make_info, mock_worktree_service, mock_git_operations):
        """Test detached worktrees are reported by directory name."""
        executor = PruneExecutor(mock_worktree_service, mock_git_operations, make_oracle())
        result = executor.execute([
            candidate(make_info, "exp", PruneType.DETACHED, branch="", detached=True),
        ])
        assert result.pruned == ["exp"]


class TestPruneExecutorBranchDeletion:
    """Test local branch cleanup after removing gone worktrees."""

    def test_merged_locally_force_deletes(self, make_info, mock_worktree_service, mock_git_operations):
        """Test a locally merged branch is force deleted."""
        executor = PruneExecutor(mock_worktree_service, mock_git_operations, make_oracle(local=True))
        result = executor.execute([candidate(make_info, "feature")])

        mock_git_operations.delete_branch.assert_called_once_with("feature", force=True)
        assert result.deleted_branches == ["feature"]

    def test_merged_via_pr_only_force_deletes(self, make_info, mock_worktree_service, mock_git_operations):
        """Test a squash merge seen only through pull requests is force deleted."""
        executor = PruneExecutor(
            mock_worktree_service, mock_git_operations, make_oracle(local=False, remote={"feature"})
        )
        result = executor.execute([candidate(make_info, "feature")])

        mock_git_operations.delete_branch.assert_called_once_with("feature", force=True)
        assert result.deleted_branches == ["feature"]
        assert result.kept_branches == []

    def test_unmerged_uses_safe_delete(self, make_info, mock_worktree_service, mock_git_operations):
        """Test unconfirmed branches get a safe delete and are kept when git refuses."""
        mock_git_operations.delete_branch.return_value = (
            False, "git branch -d failed (exit 1): error: the branch 'feature' is not fully merged",
        )
        executor = PruneExecutor(mock_worktree_service, mock_git_operations, make_oracle())
        result = executor.execute([candidate(make_info, "feature")])

        mock_git_operations.delete_branch.assert_called_once_with("feature", force=False)
        assert result.pruned == ["feature"]
        assert result.kept_branches == [("feature", "unmerged commits")]
        assert not result.has_failures

    def test_other_delete_error_kept_with_text(self, make_info, mock_worktree_service, mock_git_operations):
        """Test unexpected branch errors are kept with the raw message."""
        mock_git_operations.delete_branch.return_value = (False, "ref locked")
        executor = PruneExecutor(mock_worktree_service, mock_git_operations, make_oracle(local=True))
        result = executor.execute([candidate(make_info, "feature")])

        assert result.pruned == ["feature"]
        assert result.kept_branches == [("feature", "ref locked")]

    def test_only_gone_branches_deleted(self, make_info, mock_worktree_service, mock_git_operations):
        """Test stale, merged and detached removals leave branches alone."""
        executor = PruneExecutor(mock_worktree_service, mock_git_operations, make_oracle(local=True))
        executor.execute([
            candidate(make_info, "stale", PruneType.STALE),
            candidate(make_info, "merged", PruneType.MERGED),
            candidate(make_info, "exp", PruneType.DETACHED, branch="", detached=True),
            candidate(make_info, "gone-detached", PruneType.GONE, detached=True),
        ])

        mock_git_operations.delete_branch.assert_not_called()

    def test_failed_removal_keeps_branch(self, make_info, mock_worktree_service, mock_git_operations):
        """Test no branch deletion is attempted when the worktree stays."""
        mock_worktree_service.remove_worktree.return_value = (False, "boom")
        executor = PruneExecutor(mock_worktree_service, mock_git_operations, make_oracle(local=True))
        result = executor.execute([candidate(make_info, "feature")])

        assert result.failed == [("feature", "boom")]
        mock_git_operations.delete_branch.assert_not_called()

    def test_remote_checked_once(self, make_info, mock_worktree_service, mock_git_operations):
        """Test pull requests are fetched once for many gone branches."""
        remote_lookup = Mock(return_value={"a", "b"})
        detector = Mock()
        detector.is_branch_merged = Mock(return_value=False)
        oracle = MergeStatusOracle(detector, "main", remote_lookup)
        executor = PruneExecutor(mock_worktree_service, mock_git_operations, oracle)

        result = executor.execute([candidate(make_info, n) for n in ("a", "b", "c")])

        remote_lookup.assert_called_once()
        assert result.deleted_branches == ["a", "b", "c"]
        assert [c.kwargs["force"] for c in mock_git_operations.delete_branch.call_args_list] == [
            True, True, False,
        ]

    def test_without_oracle_safe_delete(self, make_info, mock_worktree_service, mock_git_operations):
        """Test an executor without merge information always uses a safe delete."""
        executor = PruneExecutor(mock_worktree_service, mock_git_operations)
        executor.execute([candidate(make_info, "feature")])

        mock_git_operations.delete_branch.assert_called_once_with("feature", force=False)

    def test_failed_lookup_still_prunes_all(self, make_info, mock_worktree_service, mock_git_operations):
        """Test a pull request lookup that cannot connect falls back to safe deletes."""
        remote_lookup = Mock(side_effect=GitHubAPIError(
            "setup", "HTTPSConnectionPool(host='api.github.com', port=443): Max retries exceeded"
        ))
        detector = Mock()
        detector.is_branch_merged = Mock(return_value=False)
        oracle = MergeStatusOracle(detector, "main", remote_lookup)
        executor = PruneExecutor(mock_worktree_service, mock_git_operations, oracle)

        result = executor.execute([candidate(make_info, n) for n in ("a", "b", "c")])

        assert result.pruned == ["a", "b", "c"]
        assert not result.has_failures
        remote_lookup.assert_called_once()
        assert [c.kwargs["force"] for c in mock_git_operations.delete_branch.call_args_list] == [
            False, False, False,
        ]

    def test_delete_mode_follows_oracle_verdict(self, make_info, mock_worktree_service, mock_git_operations):
        """Test the combined merge verdict alone picks -D over -d."""
        oracle = Mock()
        oracle.is_merged = Mock(side_effect=lambda branch: branch == "merged")
        executor = PruneExecutor(mock_worktree_service, mock_git_operations, oracle)

        executor.execute([candidate(make_info, "merged"), candidate(make_info, "open")])

        assert [c.args[0] for c in oracle.is_merged.call_args_list] == ["merged", "open"]
        assert [c.kwargs["force"] for c in mock_git_operations.delete_branch.call_args_list] == [
            True, False,
        ]
