"""Command-line argument parsing for git-branch-steward."""

import argparse
from typing import List, Optional

from git_branch_steward.__version__ import __version__
from git_branch_steward.constants import MERGE_FROM_ALIASES


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level parser with one subcommand per workflow."""
    parser = argparse.ArgumentParser(
        prog="git-branch-steward",
        description="Safe branch switching, syncing and cleanup for git working copies",
        epilog="Uncommitted changes are stashed before risky operations and restored afterwards.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information and write a debug log file"
    )
    parser.add_argument("--version", action="version", version=f"git-branch-steward {__version__}")
    parser.add_argument("--config", metavar="PATH", help="Read configuration from this JSON file")
    parser.add_argument(
        "-C",
        dest="repo_path",
        metavar="PATH",
        default=".",
        help="Run as if started in PATH (default: current directory)",
    )
    parser.add_argument(
        "--no-interactive",
        action="store_true",
        help="Never prompt; declines confirmations and branch choices",
    )
    parser.add_argument(
        "--workers",
        type=int,
        metavar="N",
        help="Number of parallel workers for read-only queries (default: auto-detect)",
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Run read-only queries sequentially (disable parallelism)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    checkout = subparsers.add_parser("checkout", help="Switch branches, carrying uncommitted changes")
    checkout.add_argument("branch", help="Branch to switch to (fuzzy matched if not found)")

    update = subparsers.add_parser("update", help="Update the current branch from its upstream")
    update.add_argument("--no-rebase", action="store_true", help="Merge instead of rebasing")

    update_all = subparsers.add_parser(
        "update-all", help="Update every local branch that is behind its upstream"
    )
    update_all.add_argument("--no-rebase", action="store_true", help="Merge instead of rebasing")

    prune = subparsers.add_parser("prune", help="Delete branches whose upstream is gone")
    prune.add_argument(
        "--force",
        action="store_true",
        default=None,
        help="Delete unmerged branches and act even when the remote is unreachable",
    )
    prune.add_argument("--remote", metavar="NAME", help="Remote to check against (default: origin)")
    prune.add_argument(
        "--include-orphaned",
        action="store_true",
        default=None,
        help="Also offer branches that never had an upstream",
    )

    aliases = [name for name in MERGE_FROM_ALIASES if name != "merge-from"]
    merge_from = subparsers.add_parser(
        "merge-from", aliases=aliases, help="Bring another branch's changes into this one"
    )
    merge_from.add_argument("branch", help="Branch to take changes from")
    merge_from.add_argument("--rebase", action="store_true", help="Rebase onto the branch instead of merging")

    reset = subparsers.add_parser("reset", help="Discard all local changes on the current branch")
    reset.add_argument(
        "--force", action="store_true", default=None, help="Allow resetting a protected branch"
    )
    reset.add_argument(
        "--clear-stashes",
        action="store_true",
        help="Also drop stash entries that mention the current branch",
    )

    subparsers.add_parser("help", help="Show this help message")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
