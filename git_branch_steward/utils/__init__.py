"""Utility functions for git-branch-steward.

This package provides utility modules:
- threading: Worker sizing and concurrent read-only query helpers
"""

from .threading import (
    is_free_threading_enabled,
    get_python_threading_mode,
    get_optimal_worker_count,
    get_threading_info,
    run_concurrently,
)

__all__ = [
    "is_free_threading_enabled",
    "get_python_threading_mode",
    "get_optimal_worker_count",
    "get_threading_info",
    "run_concurrently",
]
