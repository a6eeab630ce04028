"""Shared constants for git-branch-steward."""

from dataclasses import dataclass
from typing import List


DEFAULT_REMOTE = "origin"
DEFAULT_PROTECTED_BRANCHES = ("main", "master", "develop", "development")
DEFAULT_STASH_PREFIX = "git-branch-steward"

USER_CONFIG_FILENAME = "config.json"
REPO_CONFIG_FILENAME = ".git-branch-steward.json"

# Substrings git prints when a merge, rebase or stash pop stops on conflicts
CONFLICT_MARKERS = ("conflict",)

# Text git prints when `stash pop --index` cannot reapply the staged state
INDEX_RESTORE_MARKERS = ("try without --index", "conflicts in index")

# Field delimiter for caller-controlled --format strings
FIELD_DELIMITER = "|"

# Aliases accepted for merge-from, with the intro and outro they print
MERGE_FROM_ALIASES = {
    "merge-from": ("Merging changes from", "Merge completed successfully!"),
    "slurp": ("Slurping changes from", "Changes successfully slurped!"),
    "absorb": ("Absorbing changes from", "Changes successfully absorbed!"),
    "yoink": ("Yoinking changes from", "Changes successfully yoinked!"),
    "assimilate": (
        "Resistance is futile. Assimilating",
        "Assimilation complete. You are now one with the changes.",
    ),
}


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


CLASSIFICATION_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("branch", "Branch", 30),
    ColumnDefinition("category", "Category", 22),
    ColumnDefinition("upstream", "Upstream", 30),
    ColumnDefinition("action", "Prune Action", 16),
]


# Symbol constants
SYMBOL_CURRENT_BRANCH = " *"
SYMBOL_BULLET = "•"
SYMBOL_OK = "✓"
SYMBOL_FAILED = "✗"


# Category display names and Rich colors
CATEGORY_DISPLAY = {
    "up-to-date": "up to date",
    "stale-tracking": "stale (remote deleted)",
    "upstream-gone": "gone",
    "orphaned": "local only",
    "outdated-remote-cache": "outdated cache",
}

CATEGORY_COLORS = {
    "up-to-date": None,
    "stale-tracking": "red",
    "upstream-gone": "red",
    "orphaned": "yellow",
    "outdated-remote-cache": "dim",
}
