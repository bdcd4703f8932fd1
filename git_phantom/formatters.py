"""Text formatting for worktree listings."""

from typing import List

from git_phantom.models.worktree import WorktreeInfo

DIRTY_MARKER = " [dirty]"


def format_worktree_line(worktree: WorktreeInfo, name_width: int = 0) -> str:
    """
    Format one worktree for display or fzf selection.

    Args:
        worktree: Worktree to format
        name_width: Pad the name to this many characters (0 = no padding)

    Returns:
        Line such as "feature-x (feature-x) [dirty]"; the name always comes
        first so a selected line can be mapped back to its worktree
    """
    name = worktree.name.ljust(name_width) if name_width else worktree.name
    branch_info = f"({worktree.branch})" if worktree.branch else ""
    status = DIRTY_MARKER if not worktree.is_clean else ""
    return f"{name} {branch_info}{status}"


def format_worktree_table(worktrees: List[WorktreeInfo]) -> List[str]:
    """Format worktrees as aligned lines, names padded to a common column."""
    if not worktrees:
        return []
    width = max(len(wt.name) for wt in worktrees) + 2
    return [format_worktree_line(wt, width) for wt in worktrees]
