"""Git-related services for git-branch-steward."""

from .operations import GitOperations
from .branch_queries import BranchQueries

__all__ = [
    "GitOperations",
    "BranchQueries",
]
