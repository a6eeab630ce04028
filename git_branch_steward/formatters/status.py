"""Outcome, remediation and deletion formatting utilities."""

from typing import List, Sequence

from git_branch_steward.models.branch import BranchClassification
from git_branch_steward.models.sync import BranchFailure, SyncOperation, SyncOutcome
from git_branch_steward.constants import SYMBOL_BULLET
from git_branch_steward.formatters.branch import format_category


def format_deletion_reason(name: str, classification: BranchClassification) -> str:
    """Short reason a branch is offered for deletion, e.g. "gone, was origin/x"."""
    reason = format_category(classification.category_of(name))
    upstream = classification.upstreams.get(name)
    return f"{reason}, was {upstream}" if upstream else reason


def format_deletion_confirmation_items(
    branches: Sequence[str], classification: BranchClassification
) -> str:
    """
    Format a list of branches for the deletion confirmation message.

    Returns:
        One bulleted line per branch, e.g. "  • feature/old (gone, was origin/feature/old)"
    """
    lines = []
    for name in branches:
        lines.append(f"  {SYMBOL_BULLET} {name} ({format_deletion_reason(name, classification)})")
    return "\n".join(lines)


def format_failure(failure: BranchFailure) -> str:
    return f"{failure}: {failure.reason}"


def format_remediation(steps: Sequence[str]) -> str:
    """Numbered manual steps, one per line."""
    return "\n".join(f"  {number}. {step}" for number, step in enumerate(steps, start=1))


def format_outcome(operation: SyncOperation) -> str:
    """Headline for the end of a command, with Rich markup."""
    label = operation.kind.value
    if operation.outcome == SyncOutcome.SUCCESS:
        color = "yellow" if operation.requires_manual_resolution else "green"
        return f"[{color}]{operation.message or label + ' completed'}[/{color}]"
    if operation.outcome == SyncOutcome.CONFLICT:
        return f"[yellow]{operation.message or label + ' stopped on conflicts'}[/yellow]"
    if operation.outcome == SyncOutcome.CANCELLED:
        return f"[yellow]{operation.message or label + ' cancelled'}[/yellow]"
    return f"[red]{operation.message or label + ' failed'}[/red]"


def format_warnings(warnings: List[str]) -> str:
    return "\n".join(f"  {SYMBOL_BULLET} {warning}" for warning in warnings)
