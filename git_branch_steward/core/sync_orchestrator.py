"""Workflow sequencing for git-branch-steward.

Each public method runs one user-facing command: it checks preconditions,
classifies branches where needed, wraps mutations in a save-point and reports
the result as a SyncOperation. Conflicts and cancellations are outcomes, not
exceptions.
"""

from typing import Callable, List, Optional

from git_branch_steward.config import Config
from git_branch_steward.constants import MERGE_FROM_ALIASES
from git_branch_steward.core.working_copy import WorkingCopy
from git_branch_steward.exceptions import PreflightError, StashIntegrityError
from git_branch_steward.formatters import format_deletion_confirmation_items
from git_branch_steward.logging_config import get_logger
from git_branch_steward.models.branch import Branch
from git_branch_steward.models.sync import (
    BranchFailure,
    GitResult,
    PruneReport,
    RestoreOutcome,
    SyncKind,
    SyncOperation,
    SyncOutcome,
    SyncPhase,
    UpdateAllReport,
)
from git_branch_steward.services.branch_classifier import BranchClassifier
from git_branch_steward.services.branch_selector import resolve
from git_branch_steward.services.conflict_classifier import (
    ConflictClassifier,
    PatternConflictClassifier,
)
from git_branch_steward.services.display_service import DisplayService
from git_branch_steward.services.prompt_service import DecisionProvider
from git_branch_steward.services.stash_service import GuardScope, StashCoordinator

logger = get_logger(__name__)


def conflict_steps(strategy: str) -> List[str]:
    """Manual steps to finish a merge or rebase that stopped on conflicts."""
    steps = [
        "Resolve the conflicts in the files `git status` lists as unmerged",
        "Stage each resolved file with `git add <file>`",
    ]
    if strategy == "rebase":
        steps.append("Continue with `git rebase --continue` (or give up with `git rebase --abort`)")
    else:
        steps.append("Commit the merge with `git commit` (or give up with `git merge --abort`)")
    return steps


class SyncOrchestrator:
    """Runs the checkout, update, update-all, merge-from, prune and reset workflows."""

    def __init__(
        self,
        wc: WorkingCopy,
        config: Config,
        decisions: DecisionProvider,
        display: Optional[DisplayService] = None,
        stash: Optional[StashCoordinator] = None,
        classifier: Optional[BranchClassifier] = None,
        conflicts: Optional[ConflictClassifier] = None,
    ):
        self.wc = wc
        self.config = config
        self.decisions = decisions
        self.display = display or DisplayService(verbose=config.verbose, debug=config.debug)
        self.conflicts = conflicts or PatternConflictClassifier()
        self.stash = stash or StashCoordinator(config, self.conflicts)
        self.classifier = classifier or BranchClassifier(config)

    # ------------------------------------------------------------------
    # Preflight
    # ------------------------------------------------------------------

    def _require_repository(self) -> None:
        if not self.wc.git.is_repository():
            raise PreflightError(
                f"Not a git repository: {self.wc.repo_path}",
                hint="Run inside a git working copy or pass -C PATH",
            )

    def _require_current_branch(self) -> str:
        branch = self.wc.current_branch()
        if not branch:
            raise PreflightError(
                "Could not determine the current branch (detached HEAD?)",
                hint="Check out a branch first",
            )
        return branch

    def _require_remote(self, remote: str) -> None:
        if self.wc.git.has_remote(remote):
            return
        available = self.wc.git.list_remotes()
        if available:
            hint = f"Available remotes:\n{self.wc.git.remote_urls()}"
        else:
            hint = "Add one with `git remote add <name> <url>`"
        raise PreflightError(f"Remote '{remote}' is not configured", hint=hint)

    def _require_upstream(self, branch: str) -> str:
        upstream = self.wc.git.upstream_of(branch)
        if not upstream:
            raise PreflightError(
                f"Branch '{branch}' has no upstream branch",
                hint=f"Set one with `git branch --set-upstream-to={self.config.remote_name}/{branch}`",
            )
        return upstream

    # ------------------------------------------------------------------
    # Shared steps
    # ------------------------------------------------------------------

    def _mutate(self, description: str, call: Callable[..., GitResult], *args, **kwargs) -> GitResult:
        with self.wc.mutation(description):
            return call(*args, **kwargs)

    def _strategy(self, use_rebase: Optional[bool]) -> str:
        if use_rebase is None:
            use_rebase = self.config.use_rebase
        return "rebase" if use_rebase else "merge"

    def _apply_strategy(self, strategy: str, upstream: str) -> GitResult:
        if strategy == "rebase":
            return self._mutate(f"rebase onto {upstream}", self.wc.git.rebase, upstream)
        return self._mutate(f"merge {upstream}", self.wc.git.merge, upstream)

    def _abort_stopped_operation(self, op: SyncOperation) -> None:
        """Abort a rebase or merge left mid-way so the save-point can be restored."""
        in_progress = self.wc.git.operation_in_progress()
        if not in_progress:
            return
        result = self._mutate(f"{in_progress} --abort", self.wc.git.abort, in_progress)
        if result.success:
            logger.info(f"Aborted {in_progress} in progress")
        else:
            op.warnings.append(f"Could not abort the {in_progress}: {result.error_text}")
            logger.warning(f"Could not abort {in_progress}: {result.error_text}")

    def _fetch(self, remote: str, op: SyncOperation, fatal: bool, **kwargs) -> bool:
        self.display.info(f"Fetching from {remote}...")
        result = self._mutate("fetch", self.wc.git.fetch, remote, **kwargs)
        if result.success:
            return True
        logger.warning(f"Fetch from {remote} failed: {result.error_text}")
        if fatal:
            self.display.error(f"Could not fetch from {remote}: {result.error_text}")
        else:
            op.warnings.append(f"Could not fetch from {remote}: {result.error_text}")
        return False

    def _confirm(self, message: str) -> bool:
        if not self.config.interactive:
            self.display.warning(f"Non-interactive mode, not confirming: {message}")
            return False
        return self.decisions.confirm(message, default=False)

    def _resolve_branch(self, query: str) -> Optional[str]:
        """Exact match, else a choice among fuzzy matches or all branches."""
        local, remote = self.wc.queries.branch_names(self.config.remote_name)
        selection = resolve(query, local, remote, self.config.fuzzy_match_limit)
        if not selection.needs_choice:
            return selection.exact
        if not selection.candidates:
            self.display.warning("No branches found")
            return None

        if selection.fuzzy:
            message = f"Branch '{query}' not found. Did you mean one of these?"
        else:
            message = f"Branch '{query}' not found. Choose from all branches:"

        if not self.config.interactive:
            self.display.warning(f"Branch '{query}' not found")
            return None
        return self.decisions.select(message, selection.candidates)

    def _catch_up(self, branch: str, op: SyncOperation) -> Optional[str]:
        """Bring the checked-out branch up to date with its upstream.

        Returns:
            None on success (or nothing to do), otherwise a failure message.
            A conflicted update is aborted before returning.
        """
        upstream = self.wc.git.upstream_of(branch)
        if not upstream:
            return None
        behind = self.wc.git.behind_count(branch, upstream)
        if behind is None:
            return f"Could not tell how far '{branch}' is behind {upstream}"
        if behind == 0:
            return None

        strategy = self._strategy(None)
        self.display.info(f"Updating '{branch}' from {upstream} ({behind} new commits)")
        result = self._apply_strategy(strategy, upstream)
        if result.success:
            return None

        conflict = self.conflicts.is_conflict(result)
        self._abort_stopped_operation(op)
        if conflict:
            return f"Updating '{branch}' from {upstream} hit conflicts; the {strategy} was aborted"
        return f"Could not update '{branch}' from {upstream}: {result.error_text}"

    def _run_guarded(
        self, op: SyncOperation, description: str, body: Callable[[GuardScope], None]
    ) -> SyncOperation:
        """Guard, run body, restore, then settle the final phase."""
        op.advance(SyncPhase.GUARDING)
        try:
            with self.stash.guarded(self.wc, description) as scope:
                op.save_point = scope.save_point
                if scope.save_point is not None:
                    self.display.info(f"Saved uncommitted changes ({scope.save_point.reference})")
                op.advance(SyncPhase.MUTATING)
                body(scope)
        except StashIntegrityError:
            if op.phase == SyncPhase.GUARDING:
                op.advance(SyncPhase.FAILED)
            raise
        self._settle(op, scope)
        return op

    def _settle(self, op: SyncOperation, scope: GuardScope) -> None:
        save_point = scope.save_point
        if save_point is None:
            if op.phase == SyncPhase.CONFLICTED:
                op.advance(SyncPhase.RECOVERY_REQUIRED)
            else:
                op.advance(SyncPhase.DONE)
            return

        if scope.kept:
            op.advance(SyncPhase.RECOVERY_REQUIRED)
            op.remediation.append(
                f"Then bring back your uncommitted changes with `git stash pop` "
                f"(entry '{save_point.message}' in `git stash list`)"
            )
            self.display.warning(f"Your uncommitted changes are kept in the stash: {save_point.message}")
            return

        result = scope.restore_result
        if result is None:
            op.advance(SyncPhase.DONE)
            return

        op.advance(SyncPhase.RESTORING)
        if not result.index_restored:
            op.warnings.append(
                "Your staged changes could not be restored as staged; stage them again with `git add`"
            )
        if scope.restored:
            self.display.success("Restored your uncommitted changes")
            op.advance(SyncPhase.DONE)
            return

        op.advance(SyncPhase.RECOVERY_REQUIRED)
        op.warnings.append(
            f"Could not restore your uncommitted changes ({result.outcome.value}): "
            f"{result.detail or result.message}"
        )
        if result.outcome == RestoreOutcome.CONFLICT:
            if op.outcome == SyncOutcome.SUCCESS:
                op.outcome = SyncOutcome.CONFLICT
            op.remediation.extend(
                [
                    "Resolve the conflicts between your restored changes and the updated branch",
                    f"Once resolved, drop the save-point with `git stash drop {result.reference}`",
                ]
            )
        elif result.outcome == RestoreOutcome.FAILED:
            op.remediation.append(f"Re-apply your changes with `git stash pop {result.reference}`")
        else:
            op.remediation.append(f"Look for '{result.message}' in `git stash list`")

    # ------------------------------------------------------------------
    # Workflows
    # ------------------------------------------------------------------

    def checkout(self, target: str) -> SyncOperation:
        """Switch to a branch, carrying uncommitted work across."""
        with self.wc.exclusive():
            return self._checkout(target)

    def _checkout(self, target: str) -> SyncOperation:
        op = SyncOperation(kind=SyncKind.CHECKOUT, target_branch=target)
        self._require_repository()
        current = self._require_current_branch()
        op.source_branch = current

        if target == current:
            op.advance(SyncPhase.DONE)
            return op.finish(SyncOutcome.SUCCESS, f"Already on '{current}'")

        resolved = self._resolve_branch(target)
        if resolved is None:
            op.advance(SyncPhase.DONE)
            return op.finish(SyncOutcome.CANCELLED, "No branch selected")
        op.target_branch = resolved
        if resolved == current:
            op.advance(SyncPhase.DONE)
            return op.finish(SyncOutcome.SUCCESS, f"Already on '{current}'")

        remote = self.config.remote_name
        has_remote = self.wc.git.has_remote(remote)

        def body(scope: GuardScope) -> None:
            if has_remote:
                self._fetch(remote, op, fatal=False)

            result = self._mutate(f"checkout {resolved}", self.wc.git.checkout, resolved)
            if not result.success:
                op.advance(SyncPhase.FAILED)
                op.finish(SyncOutcome.FAILURE, f"Could not switch to '{resolved}': {result.error_text}")
                return

            if has_remote and self.wc.git.remote_branch_exists(resolved, remote):
                ff = self._mutate("fast-forward", self.wc.git.fast_forward, resolved, remote)
                if not ff.success:
                    op.warnings.append(
                        f"Could not fast-forward '{resolved}' to {remote}/{resolved}: {ff.error_text}"
                    )

            op.advance(SyncPhase.SUCCEEDED)
            op.finish(SyncOutcome.SUCCESS, f"Switched to '{resolved}'")

        return self._run_guarded(op, f"checkout {current} -> {resolved}", body)

    def update(self, use_rebase: Optional[bool] = None) -> SyncOperation:
        """Bring the current branch up to date with its upstream."""
        with self.wc.exclusive():
            return self._update(use_rebase)

    def _update(self, use_rebase: Optional[bool]) -> SyncOperation:
        op = SyncOperation(kind=SyncKind.UPDATE)
        self._require_repository()
        current = self._require_current_branch()
        self._require_remote(self.config.remote_name)
        upstream = self._require_upstream(current)
        op.target_branch = current
        op.source_branch = upstream

        strategy = self._strategy(use_rebase)
        remote = Branch(current, upstream).upstream_remote or self.config.remote_name

        def body(scope: GuardScope) -> None:
            if not self._fetch(remote, op, fatal=True):
                op.advance(SyncPhase.FAILED)
                op.finish(SyncOutcome.FAILURE, f"Could not fetch from {remote}")
                return

            behind = self.wc.git.behind_count(current, upstream)
            if behind is None:
                op.advance(SyncPhase.FAILED)
                op.finish(SyncOutcome.FAILURE, f"Could not tell how far '{current}' is behind {upstream}")
                return
            if behind == 0:
                op.advance(SyncPhase.SUCCEEDED)
                op.finish(SyncOutcome.SUCCESS, f"'{current}' is already up to date with {upstream}")
                return

            self.display.info(f"'{current}' is {behind} commits behind {upstream}, running {strategy}...")
            result = self._apply_strategy(strategy, upstream)
            if result.success:
                op.advance(SyncPhase.SUCCEEDED)
                op.finish(SyncOutcome.SUCCESS, f"Updated '{current}' with {behind} commits from {upstream}")
            elif self.conflicts.is_conflict(result):
                op.advance(SyncPhase.CONFLICTED)
                scope.keep(f"{strategy} of '{current}' stopped on conflicts")
                op.remediation = conflict_steps(strategy)
                op.finish(SyncOutcome.CONFLICT, f"The {strategy} of '{current}' onto {upstream} stopped on conflicts")
            else:
                self._abort_stopped_operation(op)
                op.advance(SyncPhase.FAILED)
                op.finish(SyncOutcome.FAILURE, f"Could not {strategy} '{current}' onto {upstream}: {result.error_text}")

        return self._run_guarded(op, f"update {current}", body)

    def update_all(self, use_rebase: Optional[bool] = None) -> SyncOperation:
        """Update every local branch that is behind its upstream."""
        with self.wc.exclusive():
            return self._update_all(use_rebase)

    def _update_all(self, use_rebase: Optional[bool]) -> SyncOperation:
        report = UpdateAllReport()
        op = SyncOperation(kind=SyncKind.UPDATE_ALL, report=report)
        self._require_repository()
        original = self._require_current_branch()
        self._require_remote(self.config.remote_name)
        op.source_branch = original
        strategy = self._strategy(use_rebase)

        def body(scope: GuardScope) -> None:
            self.display.info("Fetching from all remotes...")
            fetch = self._mutate("fetch --all", self.wc.git.fetch, all_remotes=True, prune=False)
            if not fetch.success:
                op.advance(SyncPhase.FAILED)
                op.finish(SyncOutcome.FAILURE, f"Could not fetch: {fetch.error_text}")
                return

            branches = sorted(self.wc.git.list_local_branches())
            op.branches = branches
            sweep = self.wc.queries.upstream_sweep(branches)
            checked_out = original

            for name in branches:
                upstream, behind = sweep[name]
                if upstream is None:
                    report.skipped.append(name)
                    continue
                if behind is None:
                    report.failed.append(BranchFailure(name, f"could not count commits behind {upstream}"))
                    continue
                if behind == 0:
                    report.up_to_date.append(name)
                    continue

                self.display.info(f"Updating '{name}' ({behind} commits behind {upstream})")
                if name != checked_out:
                    result = self._mutate(f"checkout {name}", self.wc.git.checkout, name)
                    if not result.success:
                        report.failed.append(BranchFailure(name, f"checkout failed: {result.error_text}"))
                        continue
                    checked_out = name

                result = self._apply_strategy(strategy, upstream)
                if result.success:
                    report.updated.append(name)
                    self.display.success(f"Updated '{name}'")
                    continue

                conflict = self.conflicts.is_conflict(result)
                self._abort_stopped_operation(op)
                reason = f"{strategy} stopped on conflicts and was aborted" if conflict else result.error_text
                report.failed.append(BranchFailure(name, reason, conflict=conflict))
                self.display.error(f"Could not update '{name}'")

            if checked_out != original:
                back = self._mutate(f"checkout {original}", self.wc.git.checkout, original)
                if not back.success:
                    op.advance(SyncPhase.FAILED)
                    scope.keep(f"could not return to '{original}'")
                    op.remediation = [f"Switch back with `git checkout {original}`"]
                    op.finish(SyncOutcome.FAILURE, f"Could not return to '{original}': {back.error_text}")
                    return

            self.display.display_update_all_report(report)
            if report.has_failures:
                op.advance(SyncPhase.FAILED)
                op.finish(SyncOutcome.FAILURE, f"{len(report.failed)} branches could not be updated")
            else:
                op.advance(SyncPhase.SUCCEEDED)
                op.finish(SyncOutcome.SUCCESS, f"Updated {len(report.updated)} branches")

        return self._run_guarded(op, f"update-all from {original}", body)

    def merge_from(
        self, source: str, use_rebase: bool = False, alias: str = "merge-from"
    ) -> SyncOperation:
        """Bring another branch's changes into the current branch."""
        with self.wc.exclusive():
            return self._merge_from(source, use_rebase, alias)

    def _merge_from(self, source: str, use_rebase: bool, alias: str) -> SyncOperation:
        op = SyncOperation(kind=SyncKind.MERGE_FROM, source_branch=source)
        intro, outro = MERGE_FROM_ALIASES.get(alias, MERGE_FROM_ALIASES["merge-from"])
        self._require_repository()
        current = self._require_current_branch()
        op.target_branch = current
        if source == current:
            raise PreflightError(f"Cannot merge '{current}' into itself")

        resolved = self._resolve_branch(source)
        if resolved is None:
            op.advance(SyncPhase.DONE)
            return op.finish(SyncOutcome.CANCELLED, "No branch selected")
        if resolved == current:
            raise PreflightError(f"Cannot merge '{current}' into itself")
        op.source_branch = resolved

        strategy = "rebase" if use_rebase else "merge"
        remote = self.config.remote_name
        has_remote = self.wc.git.has_remote(remote)
        self.display.info(f"{intro} '{resolved}' into '{current}'")

        def body(scope: GuardScope) -> None:
            if has_remote:
                self._fetch(remote, op, fatal=False)

            failure = self._catch_up(current, op)
            if failure:
                op.advance(SyncPhase.FAILED)
                op.finish(SyncOutcome.FAILURE, failure)
                return

            result = self._mutate(f"checkout {resolved}", self.wc.git.checkout, resolved)
            if not result.success:
                op.advance(SyncPhase.FAILED)
                op.finish(SyncOutcome.FAILURE, f"Could not switch to '{resolved}': {result.error_text}")
                return

            failure = self._catch_up(resolved, op)
            back = self._mutate(f"checkout {current}", self.wc.git.checkout, current)
            if not back.success:
                op.advance(SyncPhase.FAILED)
                scope.keep(f"could not return to '{current}'")
                op.remediation = [f"Switch back with `git checkout {current}`"]
                op.finish(SyncOutcome.FAILURE, f"Could not return to '{current}': {back.error_text}")
                return
            if failure:
                op.advance(SyncPhase.FAILED)
                op.finish(SyncOutcome.FAILURE, failure)
                return

            if use_rebase:
                result = self._mutate(f"rebase onto {resolved}", self.wc.git.rebase, resolved)
            else:
                result = self._mutate(
                    f"merge {resolved}",
                    self.wc.git.merge,
                    resolved,
                    message=f"Merge branch '{resolved}' into {current}",
                )

            if result.success:
                op.advance(SyncPhase.SUCCEEDED)
                op.finish(SyncOutcome.SUCCESS, outro)
            elif self.conflicts.is_conflict(result):
                op.advance(SyncPhase.CONFLICTED)
                scope.keep(f"{strategy} of '{resolved}' stopped on conflicts")
                op.remediation = conflict_steps(strategy)
                op.finish(SyncOutcome.CONFLICT, f"Conflicts while bringing '{resolved}' into '{current}'")
            else:
                self._abort_stopped_operation(op)
                op.advance(SyncPhase.FAILED)
                op.finish(SyncOutcome.FAILURE, f"Could not {strategy} '{resolved}': {result.error_text}")

        return self._run_guarded(op, f"merge-from {resolved} into {current}", body)

    def prune(
        self,
        force: Optional[bool] = None,
        remote: Optional[str] = None,
        include_orphaned: Optional[bool] = None,
    ) -> SyncOperation:
        """Delete local branches whose upstream no longer exists."""
        with self.wc.exclusive():
            return self._prune(force, remote, include_orphaned)

    def _prune(
        self, force: Optional[bool], remote: Optional[str], include_orphaned: Optional[bool]
    ) -> SyncOperation:
        report = PruneReport()
        op = SyncOperation(kind=SyncKind.PRUNE, report=report)
        force = self.config.force if force is None else force
        include_orphaned = self.config.include_orphaned if include_orphaned is None else include_orphaned
        remote = remote or self.config.remote_name

        self._require_repository()
        current = self._require_current_branch()
        op.source_branch = current
        self._require_remote(remote)

        if not self._fetch(remote, op, fatal=True, prune=True):
            op.advance(SyncPhase.DONE)
            return op.finish(SyncOutcome.FAILURE, f"Could not fetch from {remote}")

        classification = self.classifier.run(self.wc, remote)
        self.display.display_classification(classification, include_orphaned, force)
        if classification.outdated_remote_cache:
            self.display.info(
                f"{len(classification.outdated_remote_cache)} cached remote branches no longer exist "
                f"on {remote}; `git fetch --prune` clears them"
            )

        allow_stale = force or not classification.degraded
        candidates = classification.deletion_candidates(include_orphaned, include_stale=allow_stale)
        if not allow_stale:
            everything = classification.deletion_candidates(include_orphaned, include_stale=True)
            report.withheld = [name for name in everything if name not in candidates]
            if report.withheld:
                op.warnings.append(
                    f"Withheld {len(report.withheld)} stale branches because {remote} could not be "
                    "reached; use --force to delete them anyway"
                )
        op.branches = candidates

        if not candidates:
            op.advance(SyncPhase.DONE)
            return op.finish(SyncOutcome.SUCCESS, "No branches to prune")

        self.display.print("\nThe following branches will be deleted:")
        self.display.print(format_deletion_confirmation_items(candidates, classification))
        if not self._confirm("Proceed with deletion?"):
            op.declined = True
            op.advance(SyncPhase.DONE)
            return op.finish(SyncOutcome.CANCELLED, "Nothing deleted")

        op.advance(SyncPhase.MUTATING)
        for name in candidates:
            result = self._mutate(f"delete {name}", self.wc.git.delete_branch, name, force=force)
            if result.success:
                report.deleted.append(name)
                self.display.success(f"Deleted {name}")
                continue
            reason = result.error_text
            if not force and "not fully merged" in reason:
                reason += " (use --force to delete anyway)"
            report.failed.append(BranchFailure(name, reason))

        self.display.display_prune_report(report)
        if report.failed:
            op.advance(SyncPhase.FAILED)
            op.advance(SyncPhase.DONE)
            return op.finish(SyncOutcome.FAILURE, f"{len(report.failed)} branches could not be deleted")
        op.advance(SyncPhase.SUCCEEDED)
        op.advance(SyncPhase.DONE)
        return op.finish(SyncOutcome.SUCCESS, f"Deleted {len(report.deleted)} branches")

    def reset(self, force: Optional[bool] = None, clear_stashes: bool = False) -> SyncOperation:
        """Discard every local change and return the branch to its upstream."""
        with self.wc.exclusive():
            return self._reset(force, clear_stashes)

    def _reset(self, force: Optional[bool], clear_stashes: bool) -> SyncOperation:
        op = SyncOperation(kind=SyncKind.RESET)
        force = self.config.force if force is None else force
        self._require_repository()
        current = self._require_current_branch()
        op.target_branch = current

        protected = self.config.is_protected(current)
        if protected and not force:
            raise PreflightError(
                f"'{current}' is a protected branch",
                hint="Use --force to reset it anyway",
            )

        self.display.warning(
            f"This discards ALL uncommitted changes and untracked files on '{current}'."
        )
        if not self._confirm(f"Reset '{current}' and discard all local changes?"):
            op.declined = True
            op.advance(SyncPhase.DONE)
            return op.finish(SyncOutcome.CANCELLED, "Nothing was reset")
        if protected and not self._confirm(f"'{current}' is protected. Are you absolutely sure?"):
            op.declined = True
            op.advance(SyncPhase.DONE)
            return op.finish(SyncOutcome.CANCELLED, "Nothing was reset")

        op.advance(SyncPhase.MUTATING)
        self._abort_stopped_operation(op)

        if clear_stashes:
            dropped = self.stash.drop_matching(self.wc, current)
            if dropped:
                self.display.info(f"Dropped {len(dropped)} stash entries mentioning '{current}'")

        result = self._mutate("reset --hard HEAD", self.wc.git.reset_hard, "HEAD")
        if not result.success:
            op.advance(SyncPhase.FAILED)
            op.advance(SyncPhase.DONE)
            return op.finish(SyncOutcome.FAILURE, f"Could not reset '{current}': {result.error_text}")

        clean = self._mutate("clean", self.wc.git.clean_untracked)
        if not clean.success:
            op.warnings.append(f"Could not remove untracked files: {clean.error_text}")

        target = "HEAD"
        upstream = self.wc.git.upstream_of(current)
        if upstream:
            remote = Branch(current, upstream).upstream_remote or self.config.remote_name
            if self._fetch(remote, op, fatal=False):
                to_upstream = self._mutate(f"reset --hard {upstream}", self.wc.git.reset_hard, upstream)
                if to_upstream.success:
                    target = upstream
                else:
                    op.warnings.append(f"Could not reset to {upstream}: {to_upstream.error_text}")

        if self.wc.status().has_changes:
            op.warnings.append("The working tree still has changes after the reset")

        op.advance(SyncPhase.SUCCEEDED)
        op.advance(SyncPhase.DONE)
        return op.finish(SyncOutcome.SUCCESS, f"'{current}' was reset to {target}")
