"""Interactive worktree selection through fzf."""

import subprocess
from typing import TYPE_CHECKING, List, Optional, Sequence

from git_phantom.exceptions import FzfError
from git_phantom.formatters import format_worktree_line
from git_phantom.models.worktree import WorktreeInfo
from git_phantom.utils.logging import get_logger

if TYPE_CHECKING:
    from git_phantom.core.worktree_manager import WorktreeManager

logger = get_logger(__name__)

# fzf exit codes meaning "nothing chosen"
FZF_NO_MATCH = 1
FZF_INTERRUPTED = 130


def select_with_fzf(
    items: Sequence[str],
    prompt: Optional[str] = None,
    header: Optional[str] = None,
    preview_command: Optional[str] = None,
) -> Optional[str]:
    """Let the user pick one line with fzf.

    Returns:
        The chosen line, or None when the user aborted or nothing matched

    Raises:
        FzfError: fzf is not installed or failed
    """
    args: List[str] = ["fzf"]
    if prompt:
        args.extend(["--prompt", prompt])
    if header:
        args.extend(["--header", header])
    if preview_command:
        args.extend(["--preview", preview_command])

    try:
        completed = subprocess.run(
            args,
            input="\n".join(items),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
    except FileNotFoundError as e:
        raise FzfError("fzf command not found. Please install fzf first.") from e

    if completed.returncode == 0:
        return completed.stdout.strip() or None
    if completed.returncode in (FZF_NO_MATCH, FZF_INTERRUPTED):
        logger.debug(f"fzf returned {completed.returncode}, no selection")
        return None
    raise FzfError(f"fzf exited with code {completed.returncode}: {completed.stderr.strip()}")


def select_worktree(manager: "WorktreeManager") -> Optional[WorktreeInfo]:
    """Pick one of the manager's worktrees interactively.

    Returns:
        The chosen worktree, or None when there is nothing to choose or the
        user made no choice
    """
    worktrees = manager.list().worktrees
    if not worktrees:
        return None

    selected = select_with_fzf(
        [format_worktree_line(wt) for wt in worktrees],
        prompt=f"Select {manager.namespace.label}> ",
        header="Git Worktrees",
    )
    if not selected:
        return None

    selected_name = selected.split(" ")[0]
    for wt in worktrees:
        if wt.name == selected_name:
            return wt
    raise FzfError("Selected worktree not found")
