"""Git operations service.

Every method maps to a single git invocation run through GitPython's command
wrapper. A non-zero exit is an ordinary result, never an exception: callers
inspect the returned GitResult and decide what it means.
"""

import os
import re
from datetime import datetime, timezone
from typing import Dict, List, Optional, Union, TYPE_CHECKING

import git

from git_branch_steward.constants import DEFAULT_REMOTE, FIELD_DELIMITER
from git_branch_steward.models.sync import GitResult, SavePointEntry, WorkingTreeStatus
from git_branch_steward.logging_config import get_logger
from git_branch_steward.utils.threading import run_concurrently

if TYPE_CHECKING:
    from git_branch_steward.config import Config

logger = get_logger(__name__)

_LIVE_HEAD_RE = re.compile(r"refs/heads/(\S+)")


def _parse_branch_lines(output: str) -> List[str]:
    """Parse one-name-per-line branch output, dropping current-branch markers."""
    branches = []
    for line in output.split("\n"):
        name = line.strip()
        if name.startswith("* ") or name.startswith("+ "):
            name = name[2:].strip()
        # "(HEAD detached at abc123)" and empty lines are not branches
        if not name or name.startswith("("):
            continue
        branches.append(name)
    return branches


class GitOperations:
    """Service for Git operations."""

    def __init__(self, repo_path: str, config: Optional[Union["Config", dict]] = None):
        """Initialize the service.

        Args:
            repo_path: Path to the git working copy
            config: Configuration dictionary or Config object
        """
        self.repo_path = repo_path
        self.config = config if config is not None else {}
        self.remote_name = self.config.get("remote_name", DEFAULT_REMOTE)

        logger.debug(f"Git operations initialized for {repo_path}")

    def _get_git(self) -> git.Git:
        """Get a git command wrapper bound to the working copy.

        A new wrapper per call keeps concurrent read-only queries independent.
        """
        return git.Git(self.repo_path)

    def execute(self, *args: str) -> GitResult:
        """Run `git <args>` and capture the outcome.

        Returns:
            GitResult; exit code -1 when git could not be started at all
        """
        command = ["git", *args]
        try:
            status, stdout, stderr = self._get_git().execute(
                command, with_extended_output=True, with_exceptions=False
            )
        except git.exc.GitCommandNotFound as e:
            logger.debug(f"Could not run {' '.join(command)}: {e}")
            return GitResult(success=False, stderr=str(e), exit_code=-1)
        except OSError as e:
            logger.debug(f"Could not run {' '.join(command)}: {e}")
            return GitResult(success=False, stderr=str(e), exit_code=-1)

        status = status if status is not None else -1
        result = GitResult(
            success=status == 0,
            stdout=(stdout or "").strip(),
            stderr=(stderr or "").strip(),
            exit_code=status,
        )
        logger.debug(f"git {' '.join(args)} -> exit {status}")
        return result

    # ------------------------------------------------------------------
    # Read-only queries
    # ------------------------------------------------------------------

    def is_repository(self) -> bool:
        return self.execute("rev-parse", "--git-dir").success

    def current_branch(self) -> Optional[str]:
        """Get the checked-out branch, None when detached or unknown."""
        result = self.execute("rev-parse", "--abbrev-ref", "HEAD")
        if not result.success or not result.stdout or result.stdout == "HEAD":
            return None
        return result.stdout

    def has_unstaged_changes(self) -> bool:
        return not self.execute("diff", "--quiet").success

    def has_staged_changes(self) -> bool:
        return not self.execute("diff", "--cached", "--quiet").success

    def has_untracked_files(self) -> bool:
        result = self.execute("ls-files", "--others", "--exclude-standard")
        return result.success and bool(result.stdout.strip())

    def working_tree_status(self) -> WorkingTreeStatus:
        """Check unstaged, staged and untracked state concurrently."""
        checks = run_concurrently(
            {
                "uncommitted": self.has_unstaged_changes,
                "staged": self.has_staged_changes,
                "untracked": self.has_untracked_files,
            },
            max_workers=self.config.get("workers"),
            sequential=self.config.get("sequential", False),
        )
        return WorkingTreeStatus(
            has_uncommitted_changes=checks["uncommitted"],
            has_staged_changes=checks["staged"],
            has_untracked_files=checks["untracked"],
        )

    def list_local_branches(self) -> List[str]:
        result = self.execute("branch", "--format=%(refname:short)")
        if not result.success:
            return []
        return _parse_branch_lines(result.stdout)

    def list_remote_tracking_branches(self, remote: Optional[str] = None) -> List[str]:
        """Cached remote-tracking branch names without the remote prefix.

        Args:
            remote: Only list this remote's branches (all remotes when None)
        """
        pattern = f"refs/remotes/{remote}/" if remote else "refs/remotes/"
        result = self.execute("for-each-ref", "--format=%(refname)", pattern)
        if not result.success:
            return []

        names: List[str] = []
        for line in result.stdout.split("\n"):
            ref = line.strip()
            if not ref.startswith("refs/remotes/"):
                continue
            remainder = ref[len("refs/remotes/"):]
            if "/" not in remainder:
                continue
            name = remainder.split("/", 1)[1]
            if name == "HEAD" or name in names:
                continue
            names.append(name)
        return names

    def list_live_remote_branches(self, remote: Optional[str] = None) -> List[str]:
        """Branches that exist on the remote right now.

        Returns an empty list when the remote cannot be reached.
        """
        remote = remote or self.remote_name
        result = self.execute("ls-remote", "--heads", remote)
        if not result.success:
            logger.debug(f"ls-remote {remote} failed: {result.error_text}")
            return []

        branches = []
        for line in result.stdout.split("\n"):
            match = _LIVE_HEAD_RE.search(line)
            if match:
                branches.append(match.group(1))
        return branches

    def branch_exists(self, name: str) -> bool:
        return self.execute("show-ref", "--verify", "--quiet", f"refs/heads/{name}").success

    def remote_branch_exists(self, name: str, remote: Optional[str] = None) -> bool:
        remote = remote or self.remote_name
        return self.execute(
            "show-ref", "--verify", "--quiet", f"refs/remotes/{remote}/{name}"
        ).success

    def upstream_of(self, branch: str) -> Optional[str]:
        """Short upstream name ("origin/feature-a") or None if not configured."""
        result = self.execute("rev-parse", "--abbrev-ref", f"{branch}@{{upstream}}")
        if not result.success or not result.stdout:
            return None
        return result.stdout.strip()

    def behind_count(self, local: str, upstream: str) -> Optional[int]:
        """Number of upstream commits missing from the local branch.

        Returns:
            The count, or None when git could not compute it
        """
        result = self.execute("rev-list", "--count", f"{local}..{upstream}")
        if not result.success:
            logger.warning(f"Could not count commits between {local} and {upstream}: {result.error_text}")
            return None
        try:
            return int(result.stdout.strip())
        except ValueError:
            logger.warning(f"Unexpected rev-list output for {local}..{upstream}: {result.stdout!r}")
            return None

    def tracking_status(self) -> Dict[str, str]:
        """Map each local branch to its upstream tracking text ("[gone]", "[behind 2]", "")."""
        result = self.execute(
            "for-each-ref", "--format=%(refname:short) %(upstream:track)", "refs/heads"
        )
        if not result.success:
            return {}

        status: Dict[str, str] = {}
        for line in result.stdout.split("\n"):
            if not line.strip():
                continue
            name, _, track = line.strip().partition(" ")
            status[name] = track.strip()
        return status

    def upstream_refs(self) -> Dict[str, Optional[str]]:
        """Map each local branch to its short upstream name, or None."""
        result = self.execute(
            "for-each-ref", "--format=%(refname:short) %(upstream:short)", "refs/heads"
        )
        if not result.success:
            return {}

        upstreams: Dict[str, Optional[str]] = {}
        for line in result.stdout.split("\n"):
            if not line.strip():
                continue
            name, _, upstream = line.strip().partition(" ")
            upstreams[name] = upstream.strip() or None
        return upstreams

    def list_remotes(self) -> List[str]:
        result = self.execute("remote")
        if not result.success:
            return []
        return [line.strip() for line in result.stdout.split("\n") if line.strip()]

    def has_remote(self, name: Optional[str] = None) -> bool:
        """Check a remote is configured (any remote when name is None)."""
        remotes = self.list_remotes()
        if name is None:
            return bool(remotes)
        return name in remotes

    def remote_urls(self) -> str:
        """`git remote -v` output, for error messages."""
        return self.execute("remote", "-v").stdout

    def list_save_points(self) -> List[SavePointEntry]:
        """Stash entries, newest first."""
        result = self.execute(
            "stash", "list", f"--format=%gd{FIELD_DELIMITER}%ct{FIELD_DELIMITER}%gs"
        )
        if not result.success:
            return []

        entries = []
        for line in result.stdout.split("\n"):
            if not line.strip():
                continue
            parts = line.split(FIELD_DELIMITER, 2)
            if len(parts) != 3:
                continue
            reference, timestamp, message = parts
            try:
                created_at = datetime.fromtimestamp(int(timestamp), tz=timezone.utc)
            except ValueError:
                created_at = None
            entries.append(SavePointEntry(reference=reference, message=message, created_at=created_at))
        return entries

    def operation_in_progress(self) -> Optional[str]:
        """Return "rebase" or "merge" when one is stopped mid-way, else None."""
        checks = (
            ("rebase", "rebase-merge"),
            ("rebase", "rebase-apply"),
            ("merge", "MERGE_HEAD"),
        )
        for operation, marker in checks:
            result = self.execute("rev-parse", "--git-path", marker)
            if result.success and os.path.exists(os.path.join(self.repo_path, result.stdout)):
                return operation
        return None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def fetch(
        self, remote: Optional[str] = None, prune: bool = True, all_remotes: bool = False
    ) -> GitResult:
        args = ["fetch"]
        if all_remotes:
            args.append("--all")
        else:
            args.append(remote or self.remote_name)
        if prune:
            args.append("--prune")
        return self.execute(*args)

    def checkout(self, branch: str) -> GitResult:
        return self.execute("checkout", branch)

    def fast_forward(self, branch: str, remote: Optional[str] = None) -> GitResult:
        remote = remote or self.remote_name
        return self.execute("merge", "--ff-only", f"{remote}/{branch}")

    def rebase(self, upstream: str) -> GitResult:
        return self.execute("rebase", upstream)

    def merge(self, upstream: str, message: Optional[str] = None) -> GitResult:
        args = ["merge", "--no-ff", "--no-edit"]
        if message:
            args.extend(["-m", message])
        args.append(upstream)
        return self.execute(*args)

    def abort(self, strategy: str) -> GitResult:
        """Abort a stopped rebase or merge ("rebase" / "merge")."""
        return self.execute(strategy, "--abort")

    def create_save_point(self, message: str, include_untracked: bool = True) -> GitResult:
        args = ["stash", "push", "-m", message]
        if include_untracked:
            args.append("--include-untracked")
        return self.execute(*args)

    def restore_save_point(self, reference: str, restore_index: bool = True) -> GitResult:
        args = ["stash", "pop"]
        if restore_index:
            args.append("--index")
        args.append(reference)
        return self.execute(*args)

    def drop_save_point(self, reference: str) -> GitResult:
        return self.execute("stash", "drop", reference)

    def delete_branch(self, name: str, force: bool = False) -> GitResult:
        return self.execute("branch", "-D" if force else "-d", name)

    def reset_hard(self, ref: str = "HEAD") -> GitResult:
        return self.execute("reset", "--hard", ref)

    def clean_untracked(self) -> GitResult:
        return self.execute("clean", "-fd")
