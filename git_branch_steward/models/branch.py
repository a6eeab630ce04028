"""Branch model and related enums"""
from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional


class UpstreamStatus(Enum):
    """Relationship of a local branch to its configured upstream."""
    GONE = "gone"
    BEHIND = "behind"
    AHEAD = "ahead"
    CURRENT = "current"
    UNKNOWN = "unknown"

    @classmethod
    def from_track(cls, track: str, has_upstream: bool) -> "UpstreamStatus":
        """Map git's %(upstream:track) text to a status.

        A diverged branch ("[ahead 1, behind 2]") needs updating, so it counts
        as behind.
        """
        if not has_upstream:
            return cls.UNKNOWN
        track = track.strip()
        if track == "[gone]":
            return cls.GONE
        if "behind" in track:
            return cls.BEHIND
        if "ahead" in track:
            return cls.AHEAD
        if not track:
            return cls.CURRENT
        return cls.UNKNOWN


class BranchCategory(Enum):
    """Classification of a branch for pruning and bulk updates."""
    UP_TO_DATE = "up-to-date"
    STALE_TRACKING = "stale-tracking"
    UPSTREAM_GONE = "upstream-gone"
    ORPHANED = "orphaned"
    OUTDATED_REMOTE_CACHE = "outdated-remote-cache"


@dataclass(frozen=True)
class Branch:
    """A local branch and its upstream tracking state."""
    name: str
    upstream: Optional[str] = None  # short form, e.g. "origin/feature-a"
    upstream_status: UpstreamStatus = UpstreamStatus.UNKNOWN

    @property
    def has_remote_tracking(self) -> bool:
        return self.upstream is not None

    @property
    def upstream_remote(self) -> Optional[str]:
        """Remote part of the upstream ("origin"), None for local upstreams."""
        if not self.upstream or "/" not in self.upstream:
            return None
        return self.upstream.split("/", 1)[0]

    @property
    def upstream_branch(self) -> Optional[str]:
        """Branch part of the upstream ("feature-a")."""
        if not self.upstream:
            return None
        if "/" not in self.upstream:
            return self.upstream
        return self.upstream.split("/", 1)[1]


@dataclass(frozen=True)
class ClassificationSnapshot:
    """Everything the branch classifier needs, gathered read-only."""
    remote: str
    local_branches: List[Branch]
    cached_remote_branches: List[str]
    live_remote_branches: List[str]
    remote_configured: bool
    current_branch: Optional[str]
    protected_branches: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class BranchClassification:
    """Result of one classification run.

    Every classified name maps to exactly one category. Outdated remote cache
    entries are keyed by their remote-qualified name ("origin/x").
    """
    remote: str
    categories: Dict[str, BranchCategory]
    excluded: FrozenSet[str] = frozenset()
    degraded: bool = False
    upstreams: Dict[str, str] = field(default_factory=dict)
    current_branch: Optional[str] = None
    protected_branches: FrozenSet[str] = frozenset()

    def in_category(self, category: BranchCategory) -> List[str]:
        """Sorted names in one category."""
        return sorted(name for name, cat in self.categories.items() if cat == category)

    @property
    def up_to_date(self) -> List[str]:
        return self.in_category(BranchCategory.UP_TO_DATE)

    @property
    def stale_tracking(self) -> List[str]:
        return self.in_category(BranchCategory.STALE_TRACKING)

    @property
    def upstream_gone(self) -> List[str]:
        return self.in_category(BranchCategory.UPSTREAM_GONE)

    @property
    def orphaned(self) -> List[str]:
        return self.in_category(BranchCategory.ORPHANED)

    @property
    def outdated_remote_cache(self) -> List[str]:
        return self.in_category(BranchCategory.OUTDATED_REMOTE_CACHE)

    def category_of(self, name: str) -> Optional[BranchCategory]:
        return self.categories.get(name)

    def deletion_candidates(
        self, include_orphaned: bool = False, include_stale: bool = True
    ) -> List[str]:
        """Local branches that are safe to offer for deletion.

        The current branch and protected names are never candidates.

        Args:
            include_orphaned: Also offer branches without any upstream
            include_stale: Offer stale-tracking branches (withheld on degraded runs)
        """
        wanted = {BranchCategory.UPSTREAM_GONE}
        if include_stale:
            wanted.add(BranchCategory.STALE_TRACKING)
        if include_orphaned:
            wanted.add(BranchCategory.ORPHANED)

        return sorted(
            name
            for name, category in self.categories.items()
            if category in wanted
            and name != self.current_branch
            and name not in self.protected_branches
        )
