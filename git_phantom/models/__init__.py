"""Data models for git-phantom."""

from .worktree import (
    CreateResult,
    DeleteResult,
    GitWorktree,
    ListResult,
    SpawnResult,
    WorktreeInfo,
    WorktreeStatus,
)

__all__ = [
    "CreateResult",
    "DeleteResult",
    "GitWorktree",
    "ListResult",
    "SpawnResult",
    "WorktreeInfo",
    "WorktreeStatus",
]
