"""Worktree data models."""

from dataclasses import dataclass, field
from typing import List, Optional

from git_phantom.constants import DETACHED_HEAD


@dataclass
class GitWorktree:
    """One record of `git worktree list --porcelain`."""

    path: str
    branch: Optional[str] = None
    head: Optional[str] = None
    is_locked: bool = False
    is_prunable: bool = False

    @property
    def is_detached(self) -> bool:
        return self.branch is None or self.branch == DETACHED_HEAD

    def __str__(self) -> str:
        """String representation of worktree."""
        flags = []
        if self.is_locked:
            flags.append("locked")
        if self.is_prunable:
            flags.append("prunable")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        return f"{self.branch or DETACHED_HEAD} @ {self.path}{suffix}"


@dataclass
class WorktreeInfo:
    """A managed worktree as shown to the user."""

    name: str
    path: str
    branch: str
    is_clean: bool


@dataclass
class WorktreeStatus:
    """Uncommitted-change summary of a worktree."""

    has_uncommitted_changes: bool = False
    changed_files: int = 0


@dataclass
class ListResult:
    worktrees: List[WorktreeInfo]
    message: Optional[str] = None


@dataclass
class CreateResult:
    success: bool
    message: str
    path: Optional[str] = None
    copied_files: List[str] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)
    rejected_files: List[str] = field(default_factory=list)
    copy_error: Optional[str] = None


@dataclass
class DeleteResult:
    success: bool
    message: str
    has_uncommitted_changes: bool = False
    changed_files: Optional[int] = None


@dataclass
class SpawnResult:
    """How a child process ended: a normal exit code or a terminating signal."""

    exit_code: int
    signal: Optional[int] = None

    @property
    def success(self) -> bool:
        return self.signal is None and self.exit_code == 0
