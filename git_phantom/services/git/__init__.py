"""Git-related services for git-phantom."""

from .executor import GitExecutor, GitResult
from .worktrees import GitWorktreeService, get_git_root, parse_worktree_porcelain

__all__ = [
    "GitExecutor",
    "GitResult",
    "GitWorktreeService",
    "get_git_root",
    "parse_worktree_porcelain",
]
