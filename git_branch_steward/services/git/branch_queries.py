"""Branch query service for git-branch-steward."""

from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union, TYPE_CHECKING

from git_branch_steward.models.branch import Branch, ClassificationSnapshot, UpstreamStatus
from git_branch_steward.logging_config import get_logger
from git_branch_steward.utils.threading import run_concurrently

if TYPE_CHECKING:
    from git_branch_steward.config import Config
    from git_branch_steward.services.git.operations import GitOperations

logger = get_logger(__name__)


class BranchQueries:
    """Composite read-only queries over the git facade.

    Nothing here mutates the repository, so independent queries run on a
    thread pool and are joined before returning.
    """

    def __init__(self, git_ops: "GitOperations", config: Union["Config", dict]):
        """Initialize the branch queries service.

        Args:
            git_ops: GitOperations facade for the working copy
            config: Configuration dictionary or Config object
        """
        self.git_ops = git_ops
        self.config = config

        logger.debug("Branch queries service initialized")

    def _run(self, tasks: Dict[str, Callable[[], Any]]) -> Dict[str, Any]:
        return run_concurrently(
            tasks,
            max_workers=self.config.get("workers"),
            sequential=self.config.get("sequential", False),
        )

    @staticmethod
    def _build_branches(
        names: Iterable[str],
        upstreams: Dict[str, Optional[str]],
        tracking: Dict[str, str],
    ) -> List[Branch]:
        branches = []
        for name in sorted(set(names)):
            upstream = upstreams.get(name)
            branches.append(
                Branch(
                    name=name,
                    upstream=upstream,
                    upstream_status=UpstreamStatus.from_track(
                        tracking.get(name, ""), has_upstream=upstream is not None
                    ),
                )
            )
        return branches

    def local_branches(self) -> List[Branch]:
        """Local branches with their upstream names and tracking status."""
        results = self._run(
            {
                "names": self.git_ops.list_local_branches,
                "upstreams": self.git_ops.upstream_refs,
                "tracking": self.git_ops.tracking_status,
            }
        )
        return self._build_branches(results["names"], results["upstreams"], results["tracking"])

    def branch_names(self, remote: Optional[str] = None) -> Tuple[List[str], List[str]]:
        """Local branch names and cached remote branch names.

        Args:
            remote: Remote to list (all remotes when None)

        Returns:
            Tuple of (local names, remote names)
        """
        results = self._run(
            {
                "local": self.git_ops.list_local_branches,
                "remote": lambda: self.git_ops.list_remote_tracking_branches(remote),
            }
        )
        return results["local"], results["remote"]

    def snapshot(
        self,
        remote: str,
        current_branch: Optional[str],
        protected: Iterable[str] = (),
    ) -> ClassificationSnapshot:
        """Gather every input of a classification run.

        The live remote listing returns an empty list when the remote is
        unreachable; the classifier treats that as a degraded run.
        """
        results = self._run(
            {
                "names": self.git_ops.list_local_branches,
                "upstreams": self.git_ops.upstream_refs,
                "tracking": self.git_ops.tracking_status,
                "cached": lambda: self.git_ops.list_remote_tracking_branches(remote),
                "live": lambda: self.git_ops.list_live_remote_branches(remote),
                "remotes": self.git_ops.list_remotes,
            }
        )
        local = self._build_branches(results["names"], results["upstreams"], results["tracking"])
        logger.debug(
            f"Snapshot for {remote}: {len(local)} local, {len(results['cached'])} cached, "
            f"{len(results['live'])} live"
        )
        return ClassificationSnapshot(
            remote=remote,
            local_branches=local,
            cached_remote_branches=sorted(results["cached"]),
            live_remote_branches=sorted(results["live"]),
            remote_configured=remote in results["remotes"],
            current_branch=current_branch,
            protected_branches=frozenset(protected),
        )

    def _upstream_and_behind(self, branch: str) -> Tuple[Optional[str], Optional[int]]:
        upstream = self.git_ops.upstream_of(branch)
        if upstream is None:
            return None, 0
        return upstream, self.git_ops.behind_count(branch, upstream)

    def upstream_sweep(self, branches: Iterable[str]) -> Dict[str, Tuple[Optional[str], Optional[int]]]:
        """Upstream name and behind-count for each branch, queried concurrently.

        Returns:
            Mapping of branch name to (upstream or None, commits behind or None
            when the count failed)
        """
        tasks = {}
        for name in branches:
            tasks[name] = lambda name=name: self._upstream_and_behind(name)
        return self._run(tasks)
