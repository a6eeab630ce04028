"""Models for git results, save-points and sync operations."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Union


@dataclass(frozen=True)
class GitResult:
    """Outcome of one git invocation."""
    success: bool
    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0

    @property
    def output(self) -> str:
        """stdout and stderr joined, for pattern matching."""
        return "\n".join(part for part in (self.stdout, self.stderr) if part)

    @property
    def error_text(self) -> str:
        """Best available description of a failure."""
        return self.stderr or self.stdout or f"exit code {self.exit_code}"


@dataclass(frozen=True)
class WorkingTreeStatus:
    """Uncommitted state of the working copy at one instant."""
    has_uncommitted_changes: bool = False
    has_staged_changes: bool = False
    has_untracked_files: bool = False

    @property
    def has_changes(self) -> bool:
        return self.has_uncommitted_changes or self.has_staged_changes or self.has_untracked_files


@dataclass(frozen=True)
class SavePointEntry:
    """One row of `git stash list`."""
    reference: str  # stash@{N}
    message: str
    created_at: Optional[datetime] = None


@dataclass
class SavePoint:
    """Handle to a verified save-point created by the stash coordinator."""
    reference: str
    message: str
    created_at: datetime
    includes_untracked: bool = True
    consumed: bool = False


class RestoreOutcome(Enum):
    RESTORED = "restored"
    CONFLICT = "conflict"
    FAILED = "failed"
    NOT_FOUND = "not-found"


@dataclass(frozen=True)
class RestoreResult:
    """Result of restoring one save-point."""
    outcome: RestoreOutcome
    message: str
    reference: Optional[str] = None
    detail: str = ""
    index_restored: bool = True  # False when staged changes came back unstaged

    @property
    def ok(self) -> bool:
        return self.outcome == RestoreOutcome.RESTORED


class SyncKind(Enum):
    CHECKOUT = "checkout"
    UPDATE = "update"
    UPDATE_ALL = "update-all"
    MERGE_FROM = "merge-from"
    PRUNE = "prune"
    RESET = "reset"


class SyncOutcome(Enum):
    SUCCESS = "success"
    CONFLICT = "conflict"
    FAILURE = "failure"
    CANCELLED = "cancelled"


class SyncPhase(Enum):
    IDLE = "idle"
    GUARDING = "guarding"
    MUTATING = "mutating"
    SUCCEEDED = "succeeded"
    CONFLICTED = "conflicted"
    FAILED = "failed"
    RESTORING = "restoring"
    DONE = "done"
    RECOVERY_REQUIRED = "recovery-required"


ALLOWED_TRANSITIONS = {
    SyncPhase.IDLE: {SyncPhase.GUARDING, SyncPhase.MUTATING, SyncPhase.DONE},
    SyncPhase.GUARDING: {SyncPhase.MUTATING, SyncPhase.FAILED},
    SyncPhase.MUTATING: {SyncPhase.SUCCEEDED, SyncPhase.CONFLICTED, SyncPhase.FAILED},
    SyncPhase.SUCCEEDED: {SyncPhase.RESTORING, SyncPhase.DONE},
    SyncPhase.CONFLICTED: {SyncPhase.RESTORING, SyncPhase.RECOVERY_REQUIRED},
    SyncPhase.FAILED: {SyncPhase.RESTORING, SyncPhase.DONE, SyncPhase.RECOVERY_REQUIRED},
    SyncPhase.RESTORING: {SyncPhase.DONE, SyncPhase.RECOVERY_REQUIRED},
    SyncPhase.DONE: set(),
    SyncPhase.RECOVERY_REQUIRED: set(),
}


@dataclass(frozen=True)
class BranchFailure:
    branch: str
    reason: str
    conflict: bool = False

    def __str__(self) -> str:
        return f"{self.branch} (conflicts)" if self.conflict else self.branch


@dataclass
class UpdateAllReport:
    """Per-branch results of a fleet-wide update."""
    updated: List[str] = field(default_factory=list)
    up_to_date: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[BranchFailure] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)


@dataclass
class PruneReport:
    """Branches deleted, failed or withheld by a prune run."""
    deleted: List[str] = field(default_factory=list)
    failed: List[BranchFailure] = field(default_factory=list)
    withheld: List[str] = field(default_factory=list)


@dataclass
class SyncOperation:
    """State of one command invocation. Never persisted."""
    kind: SyncKind
    source_branch: Optional[str] = None
    target_branch: Optional[str] = None
    branches: List[str] = field(default_factory=list)
    save_point: Optional[SavePoint] = None
    outcome: Optional[SyncOutcome] = None
    phase: SyncPhase = SyncPhase.IDLE
    message: str = ""
    remediation: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    report: Optional[Union[UpdateAllReport, PruneReport]] = None
    declined: bool = False  # user said no to a confirmation
    history: List[SyncPhase] = field(default_factory=lambda: [SyncPhase.IDLE])

    def advance(self, phase: SyncPhase) -> None:
        """Move to the next phase of the guarded-mutation state machine."""
        if phase not in ALLOWED_TRANSITIONS[self.phase]:
            raise ValueError(f"Illegal transition {self.phase.value} -> {phase.value}")
        self.phase = phase
        self.history.append(phase)

    def finish(self, outcome: SyncOutcome, message: str = "") -> "SyncOperation":
        self.outcome = outcome
        if message:
            self.message = message
        return self

    @property
    def succeeded(self) -> bool:
        return self.outcome == SyncOutcome.SUCCESS

    @property
    def requires_manual_resolution(self) -> bool:
        return self.outcome == SyncOutcome.CONFLICT or self.phase == SyncPhase.RECOVERY_REQUIRED

    @property
    def exit_code(self) -> int:
        if self.phase == SyncPhase.RECOVERY_REQUIRED:
            return 1
        if self.outcome == SyncOutcome.SUCCESS:
            return 0
        if self.outcome == SyncOutcome.CANCELLED and self.declined:
            return 0
        return 1
