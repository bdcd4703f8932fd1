"""Worktree operations service for git-phantom."""

import os
from typing import List, Optional

from git_phantom.constants import BRANCH_REF_PREFIX, DETACHED_HEAD, UNKNOWN_BRANCH
from git_phantom.exceptions import GitCommandFailed
from git_phantom.models.worktree import GitWorktree, WorktreeStatus
from git_phantom.services.git.executor import GitExecutor
from git_phantom.utils.logging import get_logger

logger = get_logger(__name__)


def parse_worktree_porcelain(output: str) -> List[GitWorktree]:
    """Parse `git worktree list --porcelain` output.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name   (or "detached")
        locked [reason]                 (optional)
        prunable [reason]               (optional)
        (blank line between worktrees)

    Blank lines are dropped before grouping; only a `worktree` line starts a
    new record.
    """
    worktrees: List[GitWorktree] = []
    current: Optional[GitWorktree] = None

    for line in (line for line in output.split("\n") if line.strip()):
        if line.startswith("worktree "):
            if current is not None:
                worktrees.append(current)
            current = GitWorktree(path=line[len("worktree "):])
        elif current is None:
            # Attribute lines before the first record have nothing to attach to
            continue
        elif line.startswith("HEAD "):
            current.head = line[len("HEAD "):]
        elif line.startswith("branch "):
            branch_ref = line[len("branch "):]
            if branch_ref.startswith(BRANCH_REF_PREFIX):
                branch_ref = branch_ref[len(BRANCH_REF_PREFIX):]
            current.branch = branch_ref
        elif line == "detached":
            current.branch = DETACHED_HEAD
        elif line == "locked" or line.startswith("locked "):
            current.is_locked = True
        elif line == "prunable" or line.startswith("prunable "):
            current.is_prunable = True

    if current is not None:
        worktrees.append(current)

    return worktrees


def _same_path(a: str, b: str) -> bool:
    return os.path.realpath(a) == os.path.realpath(b)


def get_git_root(executor: Optional[GitExecutor] = None) -> str:
    """Get the main repository root, even when invoked from inside a worktree.

    `--git-common-dir` points at the main repository's `.git` from every
    worktree, so its parent is the root. Bare or unusual layouts fall back to
    `--show-toplevel`.

    Raises:
        GitCommandFailed: not inside a git repository
    """
    executor = executor or GitExecutor()

    common_dir = executor.execute(["rev-parse", "--git-common-dir"]).stdout.strip()
    logger.debug(f"Git common dir: {common_dir}")

    if common_dir == ".git" or common_dir.endswith("/.git"):
        parent = os.path.dirname(common_dir)
        base = executor.cwd or os.getcwd()
        return os.path.realpath(os.path.join(base, parent))

    toplevel = executor.execute(["rev-parse", "--show-toplevel"]).stdout.strip()
    return os.path.realpath(toplevel)


class GitWorktreeService:
    """Service wrapping the git subcommands that manage worktrees."""

    def __init__(self, repo_path: str, executor: Optional[GitExecutor] = None):
        """Initialize the worktree service.

        Args:
            repo_path: Main repository root
            executor: Command executor, a fresh GitExecutor by default
        """
        self.repo_path = repo_path
        self.executor = executor or GitExecutor()

    def list_worktrees(self) -> List[GitWorktree]:
        """List every worktree registered with the repository.

        Always queries git; nothing is cached between calls.
        """
        output = self.executor.execute(["worktree", "list", "--porcelain"], cwd=self.repo_path).stdout
        worktrees = parse_worktree_porcelain(output)

        logger.debug(f"Found {len(worktrees)} worktrees")
        for wt in worktrees:
            logger.debug(f"  {wt}")
        return worktrees

    def get_current_worktree(self) -> Optional[str]:
        """Branch of the worktree containing the process directory.

        Returns None outside any worktree, in the main working tree, in a
        worktree with a detached HEAD, and when git cannot answer. These cases
        are deliberately indistinguishable to callers.
        """
        try:
            current_path = self.executor.execute(["rev-parse", "--show-toplevel"]).stdout.strip()
            worktrees = self.list_worktrees()
        except GitCommandFailed as e:
            logger.debug(f"Could not determine current worktree: {e}")
            return None

        match = next((wt for wt in worktrees if _same_path(wt.path, current_path)), None)
        if match is None or _same_path(match.path, self.repo_path):
            return None
        if match.is_detached:
            return None
        return match.branch

    def add_worktree(self, path: str, branch: str, commitish: str = "HEAD") -> None:
        """Create a worktree on a new branch started at commitish."""
        self.executor.execute(["worktree", "add", path, "-b", branch, commitish], cwd=self.repo_path)
        logger.info(f"Added worktree at {path} on new branch {branch}")

    def attach_worktree(self, path: str, branch: str) -> None:
        """Create a worktree checking out an existing branch."""
        self.executor.execute(["worktree", "add", path, branch], cwd=self.repo_path)
        logger.info(f"Attached worktree at {path} to branch {branch}")

    def branch_exists(self, branch: str) -> bool:
        """Check for a local branch.

        `git branch --list <name>` prints the branch when it exists and
        nothing otherwise, always exiting 0.
        """
        stdout = self.executor.execute(["branch", "--list", branch], cwd=self.repo_path).stdout
        return any(line[2:].strip() == branch for line in stdout.split("\n") if line.strip())

    def remove_worktree(self, path: str, force: bool = False) -> None:
        """Run `git worktree remove`, with --force when asked."""
        args = ["worktree", "remove"]
        if force:
            args.append("--force")
        args.append(path)
        self.executor.execute(args, cwd=self.repo_path)
        logger.info(f"Removed worktree at {path}{' (forced)' if force else ''}")

    def delete_branch(self, branch: str) -> bool:
        """Delete a branch, best effort.

        A missing branch or one checked out elsewhere is not an error for the
        caller: the failure is logged and False is returned.
        """
        try:
            self.executor.execute(["branch", "-D", branch], cwd=self.repo_path)
            logger.info(f"Deleted branch {branch}")
            return True
        except GitCommandFailed as e:
            logger.debug(f"Could not delete branch {branch}: {e}")
            return False

    def get_worktree_status(self, worktree_path: str) -> WorktreeStatus:
        """Count uncommitted changes in a worktree.

        A failing status query is treated as clean so that it never blocks
        deletion.
        """
        try:
            stdout = self.executor.execute_in_directory(worktree_path, ["status", "--porcelain"]).stdout
        except GitCommandFailed as e:
            logger.debug(f"Could not check status of {worktree_path}: {e}")
            return WorktreeStatus()

        if stdout.strip():
            return WorktreeStatus(has_uncommitted_changes=True, changed_files=len(stdout.split("\n")))
        return WorktreeStatus()

    def get_current_branch(self, worktree_path: str) -> str:
        """Branch checked out in a worktree, the detached sentinel, or 'unknown'."""
        try:
            stdout = self.executor.execute_in_directory(worktree_path, ["branch", "--show-current"]).stdout
        except GitCommandFailed as e:
            logger.debug(f"Could not read branch of {worktree_path}: {e}")
            return UNKNOWN_BRANCH
        return stdout.strip() or DETACHED_HEAD
