"""Configuration handling for git-branch-steward"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional, List

from git_branch_steward.constants import (
    DEFAULT_PROTECTED_BRANCHES,
    DEFAULT_REMOTE,
    DEFAULT_STASH_PREFIX,
    REPO_CONFIG_FILENAME,
    USER_CONFIG_FILENAME,
)
from git_branch_steward.exceptions import ConfigError
from git_branch_steward.logging_config import get_log_dir, get_logger

logger = get_logger(__name__)


@dataclass
class Config:
    """Configuration for git-branch-steward with validation."""

    # Remote and branch protection
    remote_name: str = DEFAULT_REMOTE
    protected_branches: List[str] = field(default_factory=lambda: list(DEFAULT_PROTECTED_BRANCHES))

    # Update behaviour
    update_strategy: str = "rebase"  # rebase, merge
    stash_prefix: str = DEFAULT_STASH_PREFIX

    # Branch selection
    fuzzy_match_limit: int = 10
    page_size: int = 10

    # Prune behaviour
    include_orphaned: bool = False
    force: bool = False

    # Execution modes
    interactive: bool = True
    verbose: bool = False
    debug: bool = False
    sequential: bool = False  # Force sequential read-only queries
    workers: Optional[int] = None  # Number of query workers (None = auto-detect)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_remote_name()
        self._validate_protected_branches()
        self._validate_update_strategy()
        self._validate_stash_prefix()
        self._validate_limits()
        self._validate_workers()

    def _validate_remote_name(self):
        """Validate remote_name is not empty."""
        if not self.remote_name or not self.remote_name.strip():
            raise ValueError("remote_name cannot be empty")
        self.remote_name = self.remote_name.strip()

    def _validate_protected_branches(self):
        """Validate protected_branches list."""
        if not isinstance(self.protected_branches, list):
            raise ValueError("protected_branches must be a list")
        self.protected_branches = [name.strip() for name in self.protected_branches if name.strip()]

    def _validate_update_strategy(self):
        """Validate update_strategy is one of allowed values."""
        allowed = ["rebase", "merge"]
        if self.update_strategy not in allowed:
            raise ValueError(
                f"update_strategy must be one of {allowed}, got '{self.update_strategy}'"
            )

    def _validate_stash_prefix(self):
        """Validate stash_prefix is usable inside a stash message."""
        if not self.stash_prefix or not self.stash_prefix.strip():
            raise ValueError("stash_prefix cannot be empty")
        if "\n" in self.stash_prefix:
            raise ValueError("stash_prefix must be a single line")

    def _validate_limits(self):
        """Validate selection limits are positive."""
        if self.fuzzy_match_limit <= 0:
            raise ValueError(f"fuzzy_match_limit must be positive, got {self.fuzzy_match_limit}")
        if self.page_size <= 0:
            raise ValueError(f"page_size must be positive, got {self.page_size}")

    def _validate_workers(self):
        """Validate workers is positive when given."""
        if self.workers is not None and self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")

    @property
    def use_rebase(self) -> bool:
        return self.update_strategy == "rebase"

    def is_protected(self, branch_name: str) -> bool:
        """Check if a branch is protected."""
        return branch_name in self.protected_branches

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        # Extract only known fields
        known_fields = {f.name for f in fields(cls)}

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        unknown = sorted(set(config_dict) - known_fields)
        if unknown:
            logger.debug(f"Ignoring unknown config keys: {', '.join(unknown)}")
        return cls(**filtered)


def _read_config_file(path: Path) -> dict:
    """Read one JSON config file, returning an empty dict if it does not exist."""
    if not path.is_file():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(str(path), f"not valid JSON ({e})") from e
    except OSError as e:
        raise ConfigError(str(path), str(e)) from e

    if not isinstance(data, dict):
        raise ConfigError(str(path), "top level must be a JSON object")

    logger.debug(f"Loaded config from {path}")
    return data


def load_config(
    repo_path: str, config_path: Optional[str] = None, overrides: Optional[dict] = None
) -> Config:
    """Build the effective configuration for a repository.

    Files are merged in order: the user file, the repository file, then an
    explicit config path. Overrides (typically from command-line flags) win
    over every file; None values in overrides are ignored.

    Args:
        repo_path: Path to the working copy
        config_path: Optional explicit config file
        overrides: Optional values that take precedence over files

    Returns:
        Validated Config
    """
    merged: dict = {}
    candidates = [
        get_log_dir() / USER_CONFIG_FILENAME,
        Path(repo_path) / REPO_CONFIG_FILENAME,
    ]
    for candidate in candidates:
        merged.update(_read_config_file(candidate))

    if config_path:
        explicit = Path(config_path)
        if not explicit.is_file():
            raise ConfigError(str(explicit), "file not found")
        merged.update(_read_config_file(explicit))

    if overrides:
        merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return Config.from_dict(merged)
    except (TypeError, ValueError) as e:
        raise ConfigError(str(config_path or repo_path), str(e)) from e
