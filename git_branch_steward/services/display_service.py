"""Display service for classifications, reports and outcomes"""
from typing import Optional

from rich.console import Console
from rich.table import Table

from git_branch_steward.models.branch import BranchClassification
from git_branch_steward.models.sync import PruneReport, SyncOperation, UpdateAllReport
from git_branch_steward.logging_config import get_logger
from git_branch_steward.constants import (
    CATEGORY_COLORS,
    CLASSIFICATION_COLUMNS,
    SYMBOL_FAILED,
    SYMBOL_OK,
)
from git_branch_steward.formatters import (
    format_branch_name,
    format_category,
    format_failure,
    format_outcome,
    format_prune_action,
    format_remediation,
    format_upstream,
    format_warnings,
)

logger = get_logger(__name__)


class DisplayService:
    def __init__(self, console: Optional[Console] = None, verbose: bool = False, debug: bool = False):
        self.console = console or Console()
        self.verbose = verbose
        self.debug_mode = debug

    def print(self, message: str = "") -> None:
        self.console.print(message)

    def info(self, message: str) -> None:
        self.console.print(f"[cyan]{message}[/cyan]")

    def success(self, message: str) -> None:
        self.console.print(f"[green]{SYMBOL_OK} {message}[/green]")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]{message}[/yellow]")

    def error(self, message: str) -> None:
        self.console.print(f"[red]{SYMBOL_FAILED} {message}[/red]")

    def display_classification(
        self,
        classification: BranchClassification,
        include_orphaned: bool = False,
        force: bool = False,
    ) -> None:
        """Display a table of every classified branch."""
        table = Table(title=f"Branches against {classification.remote}")
        for col in CLASSIFICATION_COLUMNS:
            table.add_column(col.label, min_width=col.width or None)

        names = sorted(set(classification.categories) | set(classification.excluded))
        for name in names:
            category = classification.category_of(name)
            row_style = CATEGORY_COLORS.get(category.value) if category else "cyan"
            table.add_row(
                format_branch_name(name, name == classification.current_branch),
                format_category(category),
                format_upstream(classification.upstreams.get(name)),
                format_prune_action(name, classification, include_orphaned, force),
                style=row_style,
            )

        self.console.print(table)

        if classification.degraded:
            self.warning(
                f"Could not reach {classification.remote}; results use cached remote data "
                "and may be out of date."
            )

    def display_update_all_report(self, report: UpdateAllReport) -> None:
        self.console.print("\nSummary:")
        if report.updated:
            self.console.print(f"[green]Updated ({len(report.updated)}): {', '.join(report.updated)}[/green]")
        if report.up_to_date:
            self.console.print(f"Already up to date ({len(report.up_to_date)}): {', '.join(report.up_to_date)}")
        if report.skipped:
            self.console.print(f"[dim]Skipped, no upstream ({len(report.skipped)}): {', '.join(report.skipped)}[/dim]")
        if report.failed:
            self.console.print(f"[red]Failed to update {len(report.failed)} branches:[/red]")
            for failure in report.failed:
                self.console.print(f"[red]  • {format_failure(failure)}[/red]")

    def display_prune_report(self, report: PruneReport) -> None:
        if report.deleted:
            self.console.print(f"\n[green]Deleted {len(report.deleted)} branches[/green]")
        if report.withheld:
            self.console.print(
                f"[yellow]Withheld {len(report.withheld)} stale branches (remote unreachable, "
                f"use --force to delete): {', '.join(report.withheld)}[/yellow]"
            )
        if report.failed:
            self.console.print(f"\n[red]Failed to delete {len(report.failed)} branches:[/red]")
            for failure in report.failed:
                self.console.print(f"[red]  • {format_failure(failure)}[/red]")

    def display_operation(self, operation: SyncOperation) -> None:
        """Final summary of a command: headline, warnings and manual steps."""
        self.console.print()
        self.console.print(format_outcome(operation))

        if operation.warnings:
            self.console.print("[yellow]Warnings:[/yellow]")
            self.console.print(format_warnings(operation.warnings))

        if operation.remediation:
            self.console.print("\n[bold]To finish manually:[/bold]")
            self.console.print(format_remediation(operation.remediation))

        if self.debug_mode:
            phases = " -> ".join(phase.value for phase in operation.history)
            self.console.print(f"[dim]Phases: {phases}[/dim]")
