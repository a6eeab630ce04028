"""
git-branch-steward - Safe branch switching, syncing and cleanup for git
"""

from .__version__ import __version__
from .core.sync_orchestrator import SyncOrchestrator
from .cli.main import main

__all__ = ["SyncOrchestrator", "main", "__version__"]
