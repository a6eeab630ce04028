"""Deciding whether a failed git command stopped on conflicts."""

from typing import Iterable, Protocol

from git_branch_steward.constants import CONFLICT_MARKERS
from git_branch_steward.models.sync import GitResult


class ConflictClassifier(Protocol):
    def is_conflict(self, result: GitResult) -> bool:
        ...


class PatternConflictClassifier:
    """Treat a failed result as a conflict when its output mentions one.

    git reports merge and rebase conflicts on stdout ("CONFLICT (content): ...")
    and stash pop conflicts on stderr, so both streams are searched.
    """

    def __init__(self, markers: Iterable[str] = CONFLICT_MARKERS):
        self.markers = tuple(marker.lower() for marker in markers)

    def is_conflict(self, result: GitResult) -> bool:
        if result.success:
            return False
        text = result.output.lower()
        return any(marker in text for marker in self.markers)
