"""Tests for the sync orchestrator workflows"""
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from git_branch_steward.config import Config
from git_branch_steward.core.sync_orchestrator import SyncOrchestrator, conflict_steps
from git_branch_steward.core.working_copy import WorkingCopy
from git_branch_steward.exceptions import (
    PreflightError,
    StashIntegrityError,
    WorkingCopyBusyError,
)
from git_branch_steward.models.sync import GitResult, SyncOutcome, SyncPhase
from git_branch_steward.services.prompt_service import ScriptedDecisionProvider
from git_branch_steward.services.stash_service import StashCoordinator

from conftest import commit_file


class NeverConflict:
    """Conflict classifier that treats every failure as a plain failure."""

    def is_conflict(self, result):
        return False


@pytest.fixture
def make_orchestrator(mock_config, display):
    def _make(repo, decisions=None, config=None, **kwargs):
        config = config or mock_config
        wc = WorkingCopy(repo.working_dir, config)
        return SyncOrchestrator(
            wc,
            config,
            decisions=decisions or ScriptedDecisionProvider(),
            display=display,
            **kwargs,
        )

    return _make


def add_untracked(repo, name="notes.txt", content="scratch\n"):
    path = Path(repo.working_dir) / name
    path.write_text(content)
    return path


def stash_count(repo):
    output = repo.git.stash("list")
    return len(output.splitlines()) if output else 0


class TestCheckout:
    """Test the checkout workflow."""

    def test_missing_branch_without_choice_is_cancelled(self, git_repo_with_branches, make_orchestrator):
        """No choice made: nothing mutated and no save-point created."""
        repo = git_repo_with_branches
        notes = add_untracked(repo)
        orchestrator = make_orchestrator(repo)

        op = orchestrator.checkout("does-not-exist-anywhere")

        assert op.outcome == SyncOutcome.CANCELLED
        assert op.save_point is None
        assert op.exit_code == 1
        assert stash_count(repo) == 0
        assert notes.exists()
        assert repo.active_branch.name == "main"

    def test_fuzzy_choice_carries_changes(self, git_repo_with_branches, make_orchestrator):
        """A fuzzy match picked by the user is checked out with changes restored."""
        repo = git_repo_with_branches
        notes = add_untracked(repo)
        decisions = ScriptedDecisionProvider(selections=["feature-b"])
        orchestrator = make_orchestrator(repo, decisions)

        op = orchestrator.checkout("FEATURE")

        assert op.outcome == SyncOutcome.SUCCESS
        assert op.target_branch == "feature-b"
        assert repo.active_branch.name == "feature-b"
        assert notes.read_text() == "scratch\n"
        assert stash_count(repo) == 0
        assert op.history[-2:] == [SyncPhase.RESTORING, SyncPhase.DONE]

    def test_exact_match_clean_tree(self, git_repo_with_branches, make_orchestrator):
        """An exact name on a clean tree switches without any save-point."""
        orchestrator = make_orchestrator(git_repo_with_branches)

        op = orchestrator.checkout("feature-a")

        assert op.succeeded
        assert op.save_point is None
        assert op.phase == SyncPhase.DONE
        assert git_repo_with_branches.active_branch.name == "feature-a"

    def test_already_on_branch(self, git_repo, make_orchestrator):
        """Checking out the current branch is a no-op."""
        op = make_orchestrator(git_repo).checkout("main")

        assert op.succeeded
        assert op.history == [SyncPhase.IDLE, SyncPhase.DONE]

    def test_remote_only_branch(self, git_repo, other_clone, make_orchestrator):
        """A branch that only exists on the remote is created locally."""
        other_clone.git.checkout("-b", "remote-only")
        commit_file(other_clone, "remote.txt", "remote\n")
        other_clone.git.push("origin", "remote-only")
        git_repo.git.fetch("origin")

        op = make_orchestrator(git_repo).checkout("remote-only")

        assert op.succeeded
        assert git_repo.active_branch.name == "remote-only"
        assert git_repo.active_branch.tracking_branch().name == "origin/remote-only"


    def test_checkout_failure_restores_then_fails(self, git_repo_with_branches, make_orchestrator):
        """A refused checkout restores the save-point before reporting failure."""
        repo = git_repo_with_branches
        notes = add_untracked(repo)
        orchestrator = make_orchestrator(repo)

        refused = GitResult(False, stderr="error: checkout refused", exit_code=1)
        with patch.object(orchestrator.wc.git, "checkout", return_value=refused):
            op = orchestrator.checkout("feature-a")

        assert op.outcome == SyncOutcome.FAILURE
        assert "checkout refused" in op.message
        assert op.save_point is not None
        assert op.save_point.consumed
        assert op.history[-3:] == [SyncPhase.FAILED, SyncPhase.RESTORING, SyncPhase.DONE]
        assert stash_count(repo) == 0
        assert notes.read_text() == "scratch\n"
        assert repo.active_branch.name == "main"


class TestUpdate:
    """Test the update workflow."""

    def test_zero_behind_is_up_to_date(self, git_repo, make_orchestrator):
        """Nothing to pull: no rebase, and the save-point is restored."""
        add_untracked(git_repo)
        head_before = git_repo.head.commit.hexsha

        op = make_orchestrator(git_repo).update()

        assert op.outcome == SyncOutcome.SUCCESS
        assert "already up to date" in op.message
        assert git_repo.head.commit.hexsha == head_before
        assert op.save_point is not None
        assert op.save_point.consumed
        assert SyncPhase.RESTORING in op.history
        assert stash_count(git_repo) == 0
        assert (Path(git_repo.working_dir) / "notes.txt").exists()

    def test_pulls_new_commits(self, git_repo, other_clone, make_orchestrator):
        """New upstream commits are rebased onto."""
        commit_file(other_clone, "upstream.txt", "new\n")
        other_clone.git.push("origin", "main")

        op = make_orchestrator(git_repo).update()

        assert op.succeeded
        assert (Path(git_repo.working_dir) / "upstream.txt").exists()

    def test_merge_strategy(self, git_repo, other_clone, make_orchestrator):
        """--no-rebase merges the upstream instead."""
        commit_file(other_clone, "upstream.txt", "new\n")
        other_clone.git.push("origin", "main")
        commit_file(git_repo, "local.txt", "local\n")

        op = make_orchestrator(git_repo).update(use_rebase=False)

        assert op.succeeded
        assert len(git_repo.head.commit.parents) == 2

    def test_conflict_keeps_save_point(self, git_repo, other_clone, make_orchestrator):
        """A conflicting rebase stays in progress and the save-point is kept."""
        commit_file(other_clone, "README.md", "# Theirs\n")
        other_clone.git.push("origin", "main")
        commit_file(git_repo, "README.md", "# Ours\n")
        add_untracked(git_repo)

        op = make_orchestrator(git_repo).update()

        assert op.outcome == SyncOutcome.CONFLICT
        assert op.phase == SyncPhase.RECOVERY_REQUIRED
        assert op.exit_code == 1
        assert stash_count(git_repo) == 1
        assert any("git rebase --continue" in step for step in op.remediation)
        assert "git stash pop" in op.remediation[-1]

    def test_failure_without_conflict_restores(self, git_repo, other_clone, make_orchestrator):
        """A failure the classifier does not call a conflict is aborted and restored."""
        commit_file(other_clone, "README.md", "# Theirs\n")
        other_clone.git.push("origin", "main")
        commit_file(git_repo, "README.md", "# Ours\n")
        add_untracked(git_repo)

        op = make_orchestrator(git_repo, conflicts=NeverConflict()).update()

        assert op.outcome == SyncOutcome.FAILURE
        assert op.phase == SyncPhase.DONE
        assert stash_count(git_repo) == 0
        assert (Path(git_repo.working_dir) / "notes.txt").exists()

    def test_uncountable_behind_fails_and_restores(self, git_repo, make_orchestrator):
        """A failed behind-count is a failure, not "up to date"."""
        notes = add_untracked(git_repo)
        orchestrator = make_orchestrator(git_repo)

        with patch.object(orchestrator.wc.git, "behind_count", return_value=None):
            op = orchestrator.update()

        assert op.outcome == SyncOutcome.FAILURE
        assert op.exit_code == 1
        assert "Could not tell" in op.message
        assert op.phase == SyncPhase.DONE
        assert stash_count(git_repo) == 0
        assert notes.exists()

    def test_unstaged_fallback_is_reported(self, git_repo, make_orchestrator):
        """Staged changes that come back unstaged produce a warning."""
        notes = add_untracked(git_repo)
        orchestrator = make_orchestrator(git_repo)
        pop = orchestrator.wc.git.restore_save_point

        def refuse_index(reference, restore_index=True):
            if restore_index:
                return GitResult(False, stderr="error: Conflicts in index. Try without --index.", exit_code=1)
            return pop(reference, restore_index=False)

        with patch.object(orchestrator.wc.git, "restore_save_point", side_effect=refuse_index):
            op = orchestrator.update()

        assert op.outcome == SyncOutcome.SUCCESS
        assert any("git add" in warning for warning in op.warnings)
        assert stash_count(git_repo) == 0
        assert notes.exists()

    def test_requires_upstream(self, git_repo, make_orchestrator):
        """A branch without upstream cannot be updated."""
        git_repo.git.checkout("-b", "no-upstream")

        with pytest.raises(PreflightError, match="no upstream"):
            make_orchestrator(git_repo).update()

    def test_requires_remote(self, local_only_repo, make_orchestrator):
        """Update needs the configured remote."""
        with pytest.raises(PreflightError, match="not configured"):
            make_orchestrator(local_only_repo).update()

    def test_stash_failure_stops_update(self, git_repo, make_orchestrator):
        """An integrity failure aborts before any mutation."""
        stash = Mock(spec=StashCoordinator)
        stash.guarded.side_effect = StashIntegrityError("could not verify")
        orchestrator = make_orchestrator(git_repo, stash=stash)

        with pytest.raises(StashIntegrityError):
            orchestrator.update()

    def test_busy_working_copy(self, git_repo, make_orchestrator):
        """A second workflow cannot take the working copy."""
        orchestrator = make_orchestrator(git_repo)

        with orchestrator.wc.exclusive():
            with pytest.raises(WorkingCopyBusyError):
                orchestrator.update()


class TestUpdateAll:
    """Test the update-all workflow."""

    def test_updates_behind_branches(self, git_repo_with_branches, other_clone, make_orchestrator):
        """Only branches behind their upstream are touched; the original branch is restored."""
        repo = git_repo_with_branches
        other_clone.git.checkout("feature-a")
        commit_file(other_clone, "more.txt", "more\n")
        other_clone.git.push("origin", "feature-a")
        repo.git.branch("scratch")
        add_untracked(repo)

        op = make_orchestrator(repo).update_all()

        report = op.report
        assert op.outcome == SyncOutcome.SUCCESS
        assert report.updated == ["feature-a"]
        assert report.skipped == ["scratch"]
        assert set(report.up_to_date) == {"feature-b", "main"}
        assert repo.active_branch.name == "main"
        assert repo.commit("feature-a").hexsha == repo.commit("origin/feature-a").hexsha
        assert (Path(repo.working_dir) / "notes.txt").exists()

    def test_conflict_is_aborted_and_reported(self, git_repo_with_branches, other_clone, make_orchestrator):
        """A conflicting branch is aborted and listed as failed."""
        repo = git_repo_with_branches
        other_clone.git.checkout("feature-b")
        commit_file(other_clone, "feature-b.txt", "theirs\n")
        other_clone.git.push("origin", "feature-b")
        repo.git.checkout("feature-b")
        commit_file(repo, "feature-b.txt", "ours\n")
        repo.git.checkout("main")

        op = make_orchestrator(repo).update_all()

        assert op.outcome == SyncOutcome.FAILURE
        assert [str(f) for f in op.report.failed] == ["feature-b (conflicts)"]
        assert repo.active_branch.name == "main"
        assert not (Path(repo.git_dir) / "rebase-merge").exists()


    def test_dirty_tree_uses_one_save_point(self, git_repo_with_branches, other_clone, make_orchestrator):
        """One save-point covers the sweep and is restored back on the original branch."""
        repo = git_repo_with_branches
        for name in ("feature-a", "feature-b"):
            other_clone.git.checkout(name)
            commit_file(other_clone, f"{name}-more.txt", "more\n")
            other_clone.git.push("origin", name)
        readme = Path(repo.working_dir) / "README.md"
        readme.write_text("# Changed\n")
        notes = add_untracked(repo)
        orchestrator = make_orchestrator(repo)

        restored_on = []
        restore = orchestrator.stash.restore

        def restore_and_record(wc, save_point):
            restored_on.append(wc.current_branch())
            return restore(wc, save_point)

        with patch.object(orchestrator.stash, "guard", wraps=orchestrator.stash.guard) as guard, \
                patch.object(orchestrator.stash, "restore", side_effect=restore_and_record):
            op = orchestrator.update_all()

        assert op.outcome == SyncOutcome.SUCCESS
        assert op.report.updated == ["feature-a", "feature-b"]
        assert guard.call_count == 1
        assert restored_on == ["main"]
        assert op.save_point.consumed
        assert repo.active_branch.name == "main"
        assert readme.read_text() == "# Changed\n"
        assert notes.read_text() == "scratch\n"
        assert stash_count(repo) == 0

    def test_uncountable_behind_is_a_failure(self, git_repo_with_branches, make_orchestrator):
        """Branches whose behind-count failed are reported, not called up to date."""
        repo = git_repo_with_branches
        orchestrator = make_orchestrator(repo)

        with patch.object(orchestrator.wc.git, "behind_count", return_value=None):
            op = orchestrator.update_all()

        report = op.report
        assert op.outcome == SyncOutcome.FAILURE
        assert report.up_to_date == []
        assert report.updated == []
        assert sorted(f.branch for f in report.failed) == ["feature-a", "feature-b", "main"]
        assert all("could not count" in f.reason for f in report.failed)
        assert repo.active_branch.name == "main"


class TestMergeFrom:
    """Test the merge-from workflow and its aliases."""

    @pytest.fixture
    def diverged(self, git_repo):
        """main and feature both add shared.txt with different content."""
        git_repo.git.checkout("-b", "feature")
        commit_file(git_repo, "shared.txt", "feature\n")
        git_repo.git.checkout("main")
        commit_file(git_repo, "shared.txt", "main\n")
        return git_repo

    def test_absorb_conflict(self, diverged, make_orchestrator):
        """Conflict: save-point left un-restored, remediation lists resolve then commit."""
        add_untracked(diverged)

        op = make_orchestrator(diverged).merge_from("feature", alias="absorb")

        assert op.outcome == SyncOutcome.CONFLICT
        assert op.save_point is not None
        assert op.save_point.consumed is False
        assert stash_count(diverged) == 1
        assert not (Path(diverged.working_dir) / "notes.txt").exists()
        assert op.remediation[0].startswith("Resolve the conflicts")
        assert any("git add" in step for step in op.remediation)
        assert any("git commit" in step for step in op.remediation)
        assert "git stash pop" in op.remediation[-1]

    def test_yoink_success(self, git_repo, make_orchestrator):
        """A clean merge prints the alias outro and writes the merge message."""
        git_repo.git.checkout("-b", "feature")
        commit_file(git_repo, "feature.txt", "feature\n")
        git_repo.git.checkout("main")
        commit_file(git_repo, "main.txt", "main\n")

        op = make_orchestrator(git_repo).merge_from("feature", alias="yoink")

        assert op.succeeded
        assert op.message == "Changes successfully yoinked!"
        assert git_repo.head.commit.message.strip() == "Merge branch 'feature' into main"
        assert git_repo.active_branch.name == "main"

    def test_rebase_onto_source(self, git_repo, make_orchestrator):
        """--rebase replays the current branch onto the source."""
        git_repo.git.checkout("-b", "feature")
        commit_file(git_repo, "feature.txt", "feature\n")
        git_repo.git.checkout("main")

        op = make_orchestrator(git_repo).merge_from("feature", use_rebase=True)

        assert op.succeeded
        assert git_repo.head.commit.hexsha == git_repo.commit("feature").hexsha

    def test_current_branch_catch_up_conflict(self, git_repo, other_clone, make_orchestrator):
        """A conflicting catch-up of the current branch is aborted before the source is touched."""
        git_repo.git.checkout("-b", "feature")
        commit_file(git_repo, "feature.txt", "feature\n")
        git_repo.git.checkout("main")
        feature_head = git_repo.commit("feature").hexsha
        commit_file(other_clone, "README.md", "# Theirs\n")
        other_clone.git.push("origin", "main")
        commit_file(git_repo, "README.md", "# Ours\n")
        notes = add_untracked(git_repo)
        orchestrator = make_orchestrator(git_repo)

        with patch.object(orchestrator.wc.git, "checkout", wraps=orchestrator.wc.git.checkout) as checkout:
            op = orchestrator.merge_from("feature")

        assert op.outcome == SyncOutcome.FAILURE
        assert "aborted" in op.message
        assert checkout.call_count == 0
        assert not (Path(git_repo.git_dir) / "rebase-merge").exists()
        assert git_repo.active_branch.name == "main"
        assert git_repo.commit("feature").hexsha == feature_head
        assert notes.read_text() == "scratch\n"
        assert stash_count(git_repo) == 0

    def test_source_catch_up_conflict_returns_home(self, git_repo_with_branches, other_clone, make_orchestrator):
        """A conflicting catch-up of the source switches back before restoring."""
        repo = git_repo_with_branches
        other_clone.git.checkout("feature-a")
        commit_file(other_clone, "feature-a.txt", "theirs\n")
        other_clone.git.push("origin", "feature-a")
        repo.git.checkout("feature-a")
        commit_file(repo, "feature-a.txt", "ours\n")
        repo.git.checkout("main")
        source_head = repo.commit("feature-a").hexsha
        notes = add_untracked(repo)
        orchestrator = make_orchestrator(repo)

        restored_on = []
        restore = orchestrator.stash.restore

        def restore_and_record(wc, save_point):
            restored_on.append(wc.current_branch())
            return restore(wc, save_point)

        with patch.object(orchestrator.stash, "restore", side_effect=restore_and_record):
            op = orchestrator.merge_from("feature-a")

        assert op.outcome == SyncOutcome.FAILURE
        assert "feature-a" in op.message
        assert restored_on == ["main"]
        assert repo.active_branch.name == "main"
        assert repo.commit("feature-a").hexsha == source_head
        assert not (Path(repo.git_dir) / "rebase-merge").exists()
        assert notes.read_text() == "scratch\n"
        assert stash_count(repo) == 0

    def test_uncountable_behind_fails(self, git_repo, make_orchestrator):
        """A failed behind-count during catch-up stops the merge."""
        git_repo.git.checkout("-b", "feature")
        commit_file(git_repo, "feature.txt", "feature\n")
        git_repo.git.checkout("main")
        head_before = git_repo.head.commit.hexsha
        notes = add_untracked(git_repo)
        orchestrator = make_orchestrator(git_repo)

        with patch.object(orchestrator.wc.git, "behind_count", return_value=None):
            op = orchestrator.merge_from("feature")

        assert op.outcome == SyncOutcome.FAILURE
        assert "Could not tell" in op.message
        assert git_repo.head.commit.hexsha == head_before
        assert git_repo.active_branch.name == "main"
        assert notes.exists()
        assert stash_count(git_repo) == 0

    def test_self_merge_rejected(self, git_repo, make_orchestrator):
        """Merging a branch into itself is a preflight error."""
        with pytest.raises(PreflightError, match="itself"):
            make_orchestrator(git_repo).merge_from("main")

    def test_no_choice_cancels(self, git_repo, make_orchestrator):
        """An unresolved source with no choice made is cancelled."""
        op = make_orchestrator(git_repo).merge_from("nothing-like-this")

        assert op.outcome == SyncOutcome.CANCELLED
        assert op.save_point is None


class TestPrune:
    """Test the prune workflow."""

    def test_deletes_gone_branch(self, git_repo_with_branches, other_clone, make_orchestrator):
        """A branch whose remote was deleted is removed after confirmation."""
        repo = git_repo_with_branches
        other_clone.git.push("origin", "--delete", "feature-a")
        decisions = ScriptedDecisionProvider(confirmations=[True])

        op = make_orchestrator(repo, decisions).prune(force=True)

        assert op.outcome == SyncOutcome.SUCCESS
        assert op.report.deleted == ["feature-a"]
        assert "feature-a" not in [b.name for b in repo.branches]
        assert "feature-b" in [b.name for b in repo.branches]

    def test_unmerged_branch_needs_force(self, git_repo_with_branches, other_clone, make_orchestrator):
        """Without --force an unmerged branch is reported as failed."""
        repo = git_repo_with_branches
        other_clone.git.push("origin", "--delete", "feature-a")
        decisions = ScriptedDecisionProvider(confirmations=[True])

        op = make_orchestrator(repo, decisions).prune()

        assert op.outcome == SyncOutcome.FAILURE
        assert op.report.failed[0].branch == "feature-a"
        assert "--force" in op.report.failed[0].reason
        assert "feature-a" in [b.name for b in repo.branches]

    def test_declined_is_clean_noop(self, git_repo_with_branches, other_clone, make_orchestrator):
        """Declining the confirmation deletes nothing and exits 0."""
        repo = git_repo_with_branches
        other_clone.git.push("origin", "--delete", "feature-a")
        decisions = ScriptedDecisionProvider(confirmations=[False])

        op = make_orchestrator(repo, decisions).prune(force=True)

        assert op.outcome == SyncOutcome.CANCELLED
        assert op.declined
        assert op.exit_code == 0
        assert "feature-a" in [b.name for b in repo.branches]

    def test_nothing_to_prune(self, git_repo_with_branches, make_orchestrator):
        """With every upstream alive nothing is offered."""
        decisions = ScriptedDecisionProvider()

        op = make_orchestrator(git_repo_with_branches, decisions).prune()

        assert op.succeeded
        assert op.branches == []
        assert decisions.asked == []

    def test_non_interactive_does_not_delete(self, git_repo_with_branches, other_clone, make_orchestrator):
        """Non-interactive mode never confirms a deletion."""
        other_clone.git.push("origin", "--delete", "feature-a")
        config = Config(protected_branches=["main"], interactive=False, sequential=True)

        op = make_orchestrator(git_repo_with_branches, config=config).prune(force=True)

        assert op.declined
        assert "feature-a" in [b.name for b in git_repo_with_branches.branches]

    def test_unknown_remote(self, git_repo, make_orchestrator):
        """An unknown remote lists the ones available with their URLs."""
        with pytest.raises(PreflightError) as excinfo:
            make_orchestrator(git_repo).prune(remote="upstream")

        assert "origin" in excinfo.value.hint
        assert "remote.git (fetch)" in excinfo.value.hint


class TestReset:
    """Test the reset workflow."""

    def test_discards_changes(self, git_repo_with_branches, make_orchestrator):
        """Confirmed reset discards modifications and untracked files."""
        repo = git_repo_with_branches
        repo.git.checkout("feature-b")
        (Path(repo.working_dir) / "feature-b.txt").write_text("changed\n")
        notes = add_untracked(repo)
        decisions = ScriptedDecisionProvider(confirmations=[True])

        op = make_orchestrator(repo, decisions).reset()

        assert op.succeeded
        assert not notes.exists()
        assert not repo.is_dirty(untracked_files=True)
        assert repo.head.commit.hexsha == repo.commit("origin/feature-b").hexsha

    def test_declined(self, git_repo_with_branches, make_orchestrator):
        """Declining leaves everything in place and exits 0."""
        repo = git_repo_with_branches
        repo.git.checkout("feature-b")
        notes = add_untracked(repo)

        op = make_orchestrator(repo, ScriptedDecisionProvider(confirmations=[False])).reset()

        assert op.outcome == SyncOutcome.CANCELLED
        assert op.exit_code == 0
        assert notes.exists()

    def test_protected_requires_force(self, git_repo, make_orchestrator):
        """Resetting a protected branch needs --force."""
        with pytest.raises(PreflightError, match="protected"):
            make_orchestrator(git_repo).reset()

    def test_protected_asks_twice(self, git_repo, make_orchestrator):
        """With --force a protected branch needs a second confirmation."""
        notes = add_untracked(git_repo)
        decisions = ScriptedDecisionProvider(confirmations=[True, False])

        op = make_orchestrator(git_repo, decisions).reset(force=True)

        assert op.declined
        assert len(decisions.asked) == 2
        assert notes.exists()

    def test_clear_stashes(self, git_repo_with_branches, make_orchestrator):
        """--clear-stashes drops entries mentioning the branch."""
        repo = git_repo_with_branches
        repo.git.checkout("feature-b")
        add_untracked(repo)
        repo.git.stash("push", "--include-untracked", "-m", "wip")

        op = make_orchestrator(repo, ScriptedDecisionProvider(confirmations=[True])).reset(clear_stashes=True)

        assert op.succeeded
        assert stash_count(repo) == 0


class TestConflictSteps:
    """Test the remediation text for stopped operations."""

    def test_rebase_steps(self):
        steps = conflict_steps("rebase")
        assert "git rebase --continue" in steps[-1]

    def test_merge_steps(self):
        steps = conflict_steps("merge")
        assert "git commit" in steps[-1]
