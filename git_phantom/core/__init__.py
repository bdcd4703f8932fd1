"""Core worktree lifecycle for git-phantom."""

from .worktree_manager import WorktreeManager

__all__ = ["WorktreeManager"]
