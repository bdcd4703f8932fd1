"""Filesystem locations of managed worktrees."""

import os
import re

from git_phantom.constants import GIT_DIR, PHANTOM_DIR, WORKTREES, Namespace
from git_phantom.exceptions import InvalidWorktreeNameError, ValidationError

# Letters, digits, hyphen, underscore, dot and slash
VALID_NAME_PATTERN = re.compile(r"^[A-Za-z0-9\-_./]+$")


def get_phantom_directory(git_root: str, namespace: Namespace = WORKTREES) -> str:
    """Directory holding every worktree of a namespace."""
    return os.path.join(git_root, GIT_DIR, PHANTOM_DIR, namespace.name)


def get_worktree_path(git_root: str, name: str, namespace: Namespace = WORKTREES) -> str:
    """Canonical path of a named worktree. Pure, touches nothing on disk."""
    return os.path.join(get_phantom_directory(git_root, namespace), name)


def worktree_exists(path: str) -> bool:
    """Check whether a worktree directory exists; any missing path is False."""
    return os.path.exists(path)


def validate_worktree_name(name: str) -> None:
    """Reject names that are empty or would escape the namespace directory.

    Raises:
        ValidationError: name is empty
        InvalidWorktreeNameError: name contains unsafe characters or `..`
    """
    if not name or not name.strip():
        raise ValidationError("Worktree name cannot be empty")

    if not VALID_NAME_PATTERN.match(name):
        raise InvalidWorktreeNameError(
            name,
            "only letters, numbers, hyphens, underscores, dots, and slashes are allowed",
        )

    if ".." in name:
        raise InvalidWorktreeNameError(name, "consecutive dots are not allowed")

    if name.startswith("/"):
        raise InvalidWorktreeNameError(name, "name cannot be an absolute path")

    if any(part in ("", ".") for part in name.split("/")):
        raise InvalidWorktreeNameError(name, "path segments cannot be empty or '.'")
