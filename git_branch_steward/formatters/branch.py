"""Branch name and category formatting utilities."""

from typing import Optional

from git_branch_steward.models.branch import BranchCategory, BranchClassification
from git_branch_steward.constants import CATEGORY_DISPLAY, SYMBOL_CURRENT_BRANCH


def format_branch_name(name: str, is_current: bool = False) -> str:
    """
    Format branch name with optional current branch indicator.

    Args:
        name: Branch name
        is_current: Whether this is the current branch

    Returns:
        Formatted branch name
    """
    return name + (SYMBOL_CURRENT_BRANCH if is_current else "")


def format_category(category: Optional[BranchCategory]) -> str:
    """Display text for a category ("excluded" when the branch has none)."""
    if category is None:
        return "excluded"
    return CATEGORY_DISPLAY.get(category.value, category.value)


def format_upstream(upstream: Optional[str]) -> str:
    return upstream if upstream else "-"


def format_prune_action(
    name: str,
    classification: BranchClassification,
    include_orphaned: bool = False,
    force: bool = False,
) -> str:
    """
    Describe what a prune run would do with a branch.

    Args:
        name: Branch name (or "remote/name" for cache entries)
        classification: Classification the prune run is based on
        include_orphaned: Whether orphaned branches are offered
        force: Whether --force was given

    Returns:
        "delete", "withheld", "keep" or "info"
    """
    category = classification.category_of(name)
    if category == BranchCategory.OUTDATED_REMOTE_CACHE:
        return "info"
    if category is None or name == classification.current_branch or name in classification.protected_branches:
        return "keep"
    if category == BranchCategory.UPSTREAM_GONE:
        return "delete"
    if category == BranchCategory.STALE_TRACKING:
        return "withheld" if classification.degraded and not force else "delete"
    if category == BranchCategory.ORPHANED and include_orphaned:
        return "delete"
    return "keep"
