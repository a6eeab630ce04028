"""Branch classification service.

Works out how every local branch relates to its upstream and to the live
remote. Classification is read-only: it gathers a snapshot, then applies a
pure function to it.
"""

from typing import Dict, Optional, Set, Union, TYPE_CHECKING

from git_branch_steward.models.branch import (
    BranchCategory,
    BranchClassification,
    ClassificationSnapshot,
    UpstreamStatus,
)
from git_branch_steward.logging_config import get_logger

if TYPE_CHECKING:
    from git_branch_steward.config import Config
    from git_branch_steward.core.working_copy import WorkingCopy

logger = get_logger(__name__)


def classify(snapshot: ClassificationSnapshot) -> BranchClassification:
    """Partition local branches (and stale cache entries) into categories.

    When the live listing is empty but the remote is configured, the cached
    remote-tracking names stand in for it and the result is marked degraded.
    """
    remote = snapshot.remote
    live = set(snapshot.live_remote_branches)
    cached = set(snapshot.cached_remote_branches)

    degraded = not live and snapshot.remote_configured
    authoritative = cached if degraded else live

    categories: Dict[str, BranchCategory] = {}
    excluded: Set[str] = set()
    upstreams: Dict[str, str] = {}

    if not degraded:
        for name in sorted(cached - live):
            categories[f"{remote}/{name}"] = BranchCategory.OUTDATED_REMOTE_CACHE

    for branch in sorted(snapshot.local_branches, key=lambda b: b.name):
        if branch.upstream:
            upstreams[branch.name] = branch.upstream

        if branch.upstream_status == UpstreamStatus.GONE:
            categories[branch.name] = BranchCategory.UPSTREAM_GONE
        elif branch.has_remote_tracking:
            if branch.upstream_remote == remote and branch.upstream_branch not in authoritative:
                categories[branch.name] = BranchCategory.STALE_TRACKING
            else:
                categories[branch.name] = BranchCategory.UP_TO_DATE
        elif branch.name == snapshot.current_branch or branch.name in snapshot.protected_branches:
            excluded.add(branch.name)
        else:
            categories[branch.name] = BranchCategory.ORPHANED

    return BranchClassification(
        remote=remote,
        categories=categories,
        excluded=frozenset(excluded),
        degraded=degraded,
        upstreams=upstreams,
        current_branch=snapshot.current_branch,
        protected_branches=snapshot.protected_branches,
    )


class BranchClassifier:
    """Service that snapshots a working copy and classifies its branches."""

    def __init__(self, config: Union["Config", dict]):
        self.config = config

    def run(self, wc: "WorkingCopy", remote: Optional[str] = None) -> BranchClassification:
        """Classify the branches of a working copy against one remote.

        Args:
            wc: Working copy handle
            remote: Remote to classify against (configured remote when None)
        """
        remote = remote or self.config.get("remote_name", "origin")
        snapshot = wc.queries.snapshot(
            remote,
            current_branch=wc.current_branch(),
            protected=self.config.get("protected_branches", []),
        )
        classification = classify(snapshot)

        if classification.degraded:
            logger.warning(f"Could not list live branches on {remote}; using cached remote data")
        logger.info(
            f"Classified against {remote}: "
            f"{len(classification.upstream_gone)} gone, "
            f"{len(classification.stale_tracking)} stale, "
            f"{len(classification.orphaned)} orphaned, "
            f"{len(classification.up_to_date)} up to date"
        )
        return classification
