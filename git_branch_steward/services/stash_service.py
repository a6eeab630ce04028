"""Save-point (stash) coordination around risky git operations."""

import os
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, List, Optional, Union, TYPE_CHECKING

from git_branch_steward.constants import DEFAULT_STASH_PREFIX, INDEX_RESTORE_MARKERS
from git_branch_steward.exceptions import SavePointConsumedError, StashIntegrityError
from git_branch_steward.logging_config import get_logger
from git_branch_steward.models.sync import (
    GitResult,
    RestoreOutcome,
    RestoreResult,
    SavePoint,
    SavePointEntry,
)
from git_branch_steward.services.conflict_classifier import (
    ConflictClassifier,
    PatternConflictClassifier,
)

if TYPE_CHECKING:
    from git_branch_steward.config import Config
    from git_branch_steward.core.working_copy import WorkingCopy

logger = get_logger(__name__)


class GuardScope:
    """What the body of a guarded block sees.

    Call `keep()` to leave the save-point in place (for example when the
    repository stopped on conflicts and the user must resolve them first).
    After the block exits, `restore_result` holds the outcome of the restore.
    """

    def __init__(self, save_point: Optional[SavePoint]):
        self.save_point = save_point
        self.kept = False
        self.keep_reason: Optional[str] = None
        self.restore_result: Optional[RestoreResult] = None

    def keep(self, reason: str) -> None:
        self.kept = True
        self.keep_reason = reason
        if self.save_point is not None:
            logger.info(f"Keeping save-point '{self.save_point.message}': {reason}")

    @property
    def restored(self) -> bool:
        return self.restore_result is not None and self.restore_result.ok


class StashCoordinator:
    """Creates verified save-points and restores them exactly once."""

    def __init__(
        self,
        config: Optional[Union["Config", dict]] = None,
        conflict_classifier: Optional[ConflictClassifier] = None,
    ):
        config = config if config is not None else {}
        self.prefix = config.get("stash_prefix", DEFAULT_STASH_PREFIX)
        self.conflicts = conflict_classifier or PatternConflictClassifier()

    def build_message(self, description: str) -> str:
        """Unique save-point label: prefix, description, timestamp and pid."""
        timestamp = datetime.now(timezone.utc).isoformat(timespec="microseconds")
        return f"{self.prefix}: {description} at {timestamp} pid {os.getpid()}"

    def guard(self, wc: "WorkingCopy", description: str) -> Optional[SavePoint]:
        """Stash uncommitted work before a risky operation.

        Args:
            wc: Working copy handle
            description: What is about to happen, e.g. "main -> feature-a"

        Returns:
            The verified SavePoint, or None when there was nothing to save

        Raises:
            StashIntegrityError: The save-point could not be created or verified
        """
        status = wc.status()
        if not status.has_changes:
            logger.debug(f"Working tree clean, no save-point needed for {description}")
            return None

        message = self.build_message(description)
        before = len(wc.git.list_save_points())
        include_untracked = True

        with wc.mutation("stash push"):
            result = wc.git.create_save_point(message, include_untracked=True)
            if not result.success:
                logger.warning(
                    f"Stash with untracked files failed, retrying without them: {result.error_text}"
                )
                include_untracked = False
                result = wc.git.create_save_point(message, include_untracked=False)

        if not result.success:
            raise StashIntegrityError(f"Could not save uncommitted changes: {result.error_text}")

        entries = wc.git.list_save_points()
        if len(entries) != before + 1 or message not in entries[0].message:
            raise StashIntegrityError(
                "Could not verify the save-point after stashing. "
                "Check `git stash list` before continuing."
            )

        newest = entries[0]
        logger.info(f"Created save-point {newest.reference}: {message}")
        return SavePoint(
            reference=newest.reference,
            message=message,
            created_at=newest.created_at or datetime.now(timezone.utc),
            includes_untracked=include_untracked,
        )

    def find(self, wc: "WorkingCopy", message: str) -> Optional[SavePointEntry]:
        """Locate a save-point by its label, wherever it now sits in the stack."""
        for entry in wc.git.list_save_points():
            if message in entry.message:
                return entry
        return None

    def restore(self, wc: "WorkingCopy", save_point: SavePoint) -> RestoreResult:
        """Re-apply a save-point and drop it from the stash on success.

        The handle is consumed whatever the outcome. On conflict or failure
        git leaves the stash entry in place for manual recovery.

        Raises:
            SavePointConsumedError: The handle was already restored
        """
        if save_point.consumed:
            raise SavePointConsumedError(save_point.message)
        save_point.consumed = True

        entry = self.find(wc, save_point.message)
        if entry is None:
            logger.warning(f"Save-point '{save_point.message}' is no longer in the stash")
            return RestoreResult(
                outcome=RestoreOutcome.NOT_FOUND,
                message=save_point.message,
                detail="The save-point was not found in `git stash list`",
            )

        index_restored = True
        with wc.mutation("stash pop"):
            result = wc.git.restore_save_point(entry.reference, restore_index=True)
            if not result.success and self._index_not_restorable(result):
                logger.warning(
                    f"Could not restore the staged state of {entry.reference}, "
                    f"restoring it unstaged: {result.error_text}"
                )
                index_restored = False
                result = wc.git.restore_save_point(entry.reference, restore_index=False)

        if result.success:
            logger.info(f"Restored save-point {entry.reference}")
            return RestoreResult(
                RestoreOutcome.RESTORED,
                save_point.message,
                entry.reference,
                index_restored=index_restored,
            )

        outcome = RestoreOutcome.CONFLICT if self.conflicts.is_conflict(result) else RestoreOutcome.FAILED
        logger.warning(f"Restoring {entry.reference} ended with {outcome.value}: {result.error_text}")
        return RestoreResult(
            outcome, save_point.message, entry.reference, result.error_text, index_restored
        )

    @staticmethod
    def _index_not_restorable(result: GitResult) -> bool:
        text = result.output.lower()
        return any(marker in text for marker in INDEX_RESTORE_MARKERS)

    @contextmanager
    def guarded(self, wc: "WorkingCopy", description: str) -> Iterator[GuardScope]:
        """Guard, run the block, then restore.

        The restore runs whether the block finishes, reports a failure or
        raises, unless the block called `scope.keep()`.
        """
        save_point = self.guard(wc, description)
        scope = GuardScope(save_point)
        try:
            yield scope
        finally:
            if save_point is not None and not scope.kept and not save_point.consumed:
                scope.restore_result = self.restore(wc, save_point)
                if not scope.restore_result.ok:
                    logger.warning(
                        f"Save-point {scope.restore_result.reference or save_point.message} "
                        f"was not restored ({scope.restore_result.outcome.value})"
                    )

    def drop_matching(self, wc: "WorkingCopy", text: str) -> List[str]:
        """Drop every save-point whose label mentions `text`.

        Returns:
            Labels of the dropped entries
        """
        dropped = []
        # Drop from the bottom of the stack so earlier references stay valid
        for entry in reversed(wc.git.list_save_points()):
            if text not in entry.message:
                continue
            with wc.mutation("stash drop"):
                result = wc.git.drop_save_point(entry.reference)
            if result.success:
                dropped.append(entry.message)
            else:
                logger.warning(f"Could not drop {entry.reference}: {result.error_text}")
        return dropped
