"""Command-line interface for git-branch-steward"""

import argparse
import os
import sys
from typing import List, Optional

from rich.console import Console

from git_branch_steward.cli.args import build_parser, parse_args
from git_branch_steward.config import Config, load_config
from git_branch_steward.constants import MERGE_FROM_ALIASES
from git_branch_steward.core.sync_orchestrator import SyncOrchestrator
from git_branch_steward.core.working_copy import WorkingCopy
from git_branch_steward.exceptions import GitBranchStewardError, PreflightError
from git_branch_steward.logging_config import get_log_dir, setup_logging
from git_branch_steward.models.sync import SyncOperation
from git_branch_steward.services.display_service import DisplayService
from git_branch_steward.services.prompt_service import ConsoleDecisionProvider
from git_branch_steward.utils.threading import get_threading_info

console = Console()


def _overrides(parsed_args: argparse.Namespace) -> dict:
    """Config values set on the command line; None means "not given"."""
    return {
        "verbose": True if parsed_args.verbose else None,
        "debug": True if parsed_args.debug else None,
        "interactive": False if parsed_args.no_interactive else None,
        "sequential": True if parsed_args.sequential else None,
        "workers": parsed_args.workers,
    }


def _print_debug_info(config: Config) -> None:
    console.print("[yellow]Debug mode enabled[/yellow]")
    console.print(f"[dim]Debug log: {get_log_dir()}[/dim]")

    threading_info = get_threading_info()
    console.print("[yellow]Threading Information:[/yellow]")
    console.print(f"  Python version: {threading_info['python_version']}")
    console.print(f"  Threading mode: {threading_info['mode']}")
    console.print(f"  CPU count: {threading_info['cpu_count']}")
    console.print(f"  Optimal workers: {threading_info['optimal_workers']}")

    console.print("[yellow]Configuration:[/yellow]")
    for key, value in config.to_dict().items():
        console.print(f"  {key}: {value}")


def run_command(orchestrator: SyncOrchestrator, parsed_args: argparse.Namespace) -> SyncOperation:
    """Dispatch a parsed command to its workflow."""
    command = parsed_args.command
    if command == "checkout":
        return orchestrator.checkout(parsed_args.branch)
    if command == "update":
        return orchestrator.update(use_rebase=False if parsed_args.no_rebase else None)
    if command == "update-all":
        return orchestrator.update_all(use_rebase=False if parsed_args.no_rebase else None)
    if command == "prune":
        return orchestrator.prune(
            force=parsed_args.force,
            remote=parsed_args.remote,
            include_orphaned=parsed_args.include_orphaned,
        )
    if command in MERGE_FROM_ALIASES:
        return orchestrator.merge_from(parsed_args.branch, use_rebase=parsed_args.rebase, alias=command)
    if command == "reset":
        return orchestrator.reset(force=parsed_args.force, clear_stashes=parsed_args.clear_stashes)
    raise ValueError(f"Unknown command: {command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = None
    wc = None
    try:
        parsed_args = parse_args(argv)

        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

        if parsed_args.command in (None, "help"):
            build_parser().print_help()
            return 0

        repo_path = os.path.abspath(parsed_args.repo_path)
        config = load_config(repo_path, parsed_args.config, _overrides(parsed_args))
        if config.debug:
            _print_debug_info(config)

        display = DisplayService(console=console, verbose=config.verbose, debug=config.debug)
        wc = WorkingCopy(repo_path, config)
        orchestrator = SyncOrchestrator(
            wc,
            config,
            decisions=ConsoleDecisionProvider(console, page_size=config.page_size),
            display=display,
        )

        operation = run_command(orchestrator, parsed_args)
        display.display_operation(operation)
        return operation.exit_code
    except PreflightError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        if e.hint:
            console.print(f"[dim]{e.hint}[/dim]")
        return 1
    except GitBranchStewardError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1
    except KeyboardInterrupt:
        if wc is not None and wc.in_git_operation:
            console.print(
                f"\n[yellow]Interrupted during '{wc.current_mutation}'. "
                "Check `git status` and `git stash list` before continuing.[/yellow]"
            )
        else:
            console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if parsed_args is not None and parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
