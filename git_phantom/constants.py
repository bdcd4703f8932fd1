"""Shared constants for git-phantom."""

from dataclasses import dataclass


# Process exit codes
class ExitCode:
    """Exit codes reported by the command-line tools."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    NOT_FOUND = 2
    VALIDATION_ERROR = 3


# Directory under the git metadata dir that holds every managed namespace
PHANTOM_DIR = "phantom"
GIT_DIR = ".git"

# Branch refs are listed with this prefix in porcelain output
BRANCH_REF_PREFIX = "refs/heads/"
DETACHED_HEAD = "(detached HEAD)"
UNKNOWN_BRANCH = "unknown"

# Environment injected into shells and commands run inside a worktree
ENV_WORKTREE_NAME = "PHANTOM_NAME"
ENV_WORKTREE_PATH = "PHANTOM_PATH"

DEFAULT_SHELL = "/bin/sh"

PROJECT_CONFIG_FILE = "phantom.config.json"


@dataclass(frozen=True)
class Namespace:
    """A family of managed worktrees sharing a directory and branch convention."""

    name: str  # Directory under .git/phantom
    branch_prefix: str  # Prepended to the worktree name to form its branch
    label: str  # User-facing noun

    def branch_for(self, worktree_name: str) -> str:
        """Branch name a worktree of this namespace is created on."""
        return f"{self.branch_prefix}{worktree_name}"

    def name_for_branch(self, branch: str) -> str:
        """Inverse of branch_for; branches outside the prefix are returned unchanged."""
        if self.branch_prefix and branch.startswith(self.branch_prefix):
            return branch[len(self.branch_prefix):]
        return branch


WORKTREES = Namespace("worktrees", "", "worktree")
GARDENS = Namespace("gardens", "phantom/gardens/", "garden")
RUINS = Namespace("ruins", "phantom/ruins/", "ruin")
