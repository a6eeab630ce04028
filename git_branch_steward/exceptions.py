"""Custom exceptions for git-branch-steward"""

from typing import Optional


class GitBranchStewardError(Exception):
    """Base exception for all git-branch-steward errors."""
    pass


class ConfigError(GitBranchStewardError):
    """Exception raised when a configuration file cannot be used."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Invalid configuration in {path}: {message}")


class PreflightError(GitBranchStewardError):
    """Exception raised when a command cannot start.

    Raised before any mutation is attempted: not inside a repository, no
    current branch, missing remote or upstream.
    """

    def __init__(self, message: str, hint: Optional[str] = None):
        self.message = message
        self.hint = hint
        super().__init__(message)


class GitOperationError(GitBranchStewardError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, branch: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.branch = branch
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if branch:
            error_msg += f" for branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class StashIntegrityError(GitOperationError):
    """Exception raised when a save-point cannot be created or verified."""

    def __init__(self, message: str):
        super().__init__("stash", message=message)


class SavePointConsumedError(StashIntegrityError):
    """Exception raised when a save-point handle is restored a second time."""

    def __init__(self, save_point_message: str):
        self.save_point_message = save_point_message
        super().__init__(f"Save-point '{save_point_message}' was already restored")


class WorkingCopyBusyError(GitBranchStewardError):
    """Exception raised when a second workflow tries to take the working copy."""

    def __init__(self, repo_path: str):
        self.repo_path = repo_path
        super().__init__(f"Working copy at {repo_path} is already in use by another operation")
