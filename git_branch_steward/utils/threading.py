"""Threading utilities for concurrent read-only git queries."""

import os
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional, TypeVar

T = TypeVar("T")


def is_free_threading_enabled() -> bool:
    """Detect if Python is running with free-threading enabled.

    Returns:
        True if running on Python 3.13+ with GIL disabled (free-threading mode)
        False if running with GIL enabled or Python < 3.13
    """
    try:
        # sys._is_gil_enabled() returns False when GIL is disabled
        # Available in Python 3.13+
        return hasattr(sys, "_is_gil_enabled") and not sys._is_gil_enabled()
    except Exception:
        return False


def get_python_threading_mode() -> str:
    """Get a description of the current threading mode."""
    if not hasattr(sys, "_is_gil_enabled"):
        return "GIL-enabled (Python < 3.13)"
    return "free-threading" if is_free_threading_enabled() else "GIL-enabled"


def get_optimal_worker_count(user_specified: Optional[int] = None) -> int:
    """Calculate worker count for I/O-bound git subprocess queries.

    Args:
        user_specified: User-specified worker count, if provided

    Returns:
        Number of workers for parallel processing
    """
    if user_specified is not None and user_specified > 0:
        return user_specified

    cpu_count = os.cpu_count() or 1

    if is_free_threading_enabled():
        # Cap at 64 to avoid excessive overhead
        return min(64, cpu_count * 2)

    # CPU_count + 4 is a good heuristic for I/O-bound work
    return min(32, cpu_count + 4)


def get_threading_info() -> Dict[str, Any]:
    """Get information about Python threading configuration."""
    return {
        "mode": get_python_threading_mode(),
        "free_threading": is_free_threading_enabled(),
        "cpu_count": os.cpu_count() or 1,
        "optimal_workers": get_optimal_worker_count(),
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
    }


def run_concurrently(
    tasks: Dict[str, Callable[[], T]],
    max_workers: Optional[int] = None,
    sequential: bool = False,
) -> Dict[str, T]:
    """Run independent read-only callables and join their results.

    Exceptions from any task propagate to the caller once all tasks are
    submitted; ordering between tasks is irrelevant.

    Args:
        tasks: Mapping of result key to zero-argument callable
        max_workers: Worker count (auto-detected when None)
        sequential: Run in the calling thread, one after another

    Returns:
        Mapping of the same keys to each callable's result
    """
    if sequential or len(tasks) <= 1:
        return {key: task() for key, task in tasks.items()}

    workers = min(len(tasks), get_optimal_worker_count(max_workers))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {key: executor.submit(task) for key, task in tasks.items()}
        return {key: future.result() for key, future in futures.items()}
