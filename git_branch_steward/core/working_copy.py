"""Exclusive handle on one git working copy."""

import os
from contextlib import contextmanager
from threading import Lock
from typing import Iterator, Optional, Union

from git_branch_steward.config import Config
from git_branch_steward.exceptions import WorkingCopyBusyError
from git_branch_steward.logging_config import get_logger
from git_branch_steward.models.sync import WorkingTreeStatus
from git_branch_steward.services.git import BranchQueries, GitOperations

logger = get_logger(__name__)


class WorkingCopy:
    """The single path through which a workflow reaches the repository.

    Read-only queries may fan out concurrently, but mutations are serialized:
    a workflow takes the handle with `exclusive()` and every mutating git call
    runs inside `mutation()`, which records what is in flight so an interrupt
    handler can report it.
    """

    def __init__(
        self,
        repo_path: str,
        config: Union[Config, dict],
        git_ops: Optional[GitOperations] = None,
        queries: Optional[BranchQueries] = None,
    ):
        self.repo_path = os.path.abspath(repo_path)
        self.config = config
        self.git = git_ops or GitOperations(self.repo_path, config)
        self.queries = queries or BranchQueries(self.git, config)
        self.in_git_operation = False
        self.current_mutation: Optional[str] = None
        self._lock = Lock()

    @contextmanager
    def exclusive(self) -> Iterator["WorkingCopy"]:
        """Take the working copy for one workflow. Not reentrant."""
        if not self._lock.acquire(blocking=False):
            raise WorkingCopyBusyError(self.repo_path)
        try:
            yield self
        finally:
            self._lock.release()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    @contextmanager
    def mutation(self, description: str) -> Iterator[None]:
        """Context manager to track a mutating git operation."""
        self.in_git_operation = True
        self.current_mutation = description
        logger.debug(f"Mutation started: {description}")
        try:
            yield
        finally:
            self.in_git_operation = False
            self.current_mutation = None

    def status(self) -> WorkingTreeStatus:
        """Fresh working tree status; never cached across mutations."""
        return self.git.working_tree_status()

    def current_branch(self) -> Optional[str]:
        return self.git.current_branch()
