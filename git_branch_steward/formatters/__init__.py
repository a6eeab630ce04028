"""Formatting utilities for git-branch-steward.

This package provides the formatting functions used for console output,
organized into logical modules:
- branch: Branch name, category and prune action formatting
- status: Outcome, remediation and deletion formatting
"""

# Branch formatters
from .branch import (
    format_branch_name,
    format_category,
    format_upstream,
    format_prune_action,
)

# Status formatters
from .status import (
    format_deletion_reason,
    format_deletion_confirmation_items,
    format_failure,
    format_remediation,
    format_outcome,
    format_warnings,
)

__all__ = [
    # Branch
    "format_branch_name",
    "format_category",
    "format_upstream",
    "format_prune_action",
    # Status
    "format_deletion_reason",
    "format_deletion_confirmation_items",
    "format_failure",
    "format_remediation",
    "format_outcome",
    "format_warnings",
]
