"""Worktree lifecycle management for git-phantom"""

import os
from typing import Iterable, List, Optional

from git_phantom.constants import WORKTREES, Namespace
from git_phantom.exceptions import (
    BranchNotFoundError,
    DirtyWorktreeError,
    GitCommandFailed,
    GitOperationError,
    ValidationError,
    WorktreeAlreadyExistsError,
    WorktreeNotFoundError,
)
from git_phantom.models.worktree import (
    CreateResult,
    DeleteResult,
    ListResult,
    WorktreeInfo,
    WorktreeStatus,
)
from git_phantom.services.file_copier import FileCopyError, copy_files as copy_into_worktree
from git_phantom.services.git import GitExecutor, GitWorktreeService
from git_phantom.services.paths import (
    get_phantom_directory,
    get_worktree_path,
    validate_worktree_name,
    worktree_exists,
)
from git_phantom.utils.logging import get_logger

logger = get_logger(__name__)


class WorktreeManager:
    """Creates, lists, locates and deletes the worktrees of one namespace.

    All state lives in git and on disk; every call re-queries it.
    """

    def __init__(
        self,
        git_root: str,
        namespace: Namespace = WORKTREES,
        executor: Optional[GitExecutor] = None,
    ):
        """Initialize the manager.

        Args:
            git_root: Main repository root
            namespace: Which family of worktrees to manage
            executor: Git command executor shared by the services
        """
        self.git_root = git_root
        self.namespace = namespace
        self.executor = executor or GitExecutor()
        self.git_service = GitWorktreeService(git_root, self.executor)

    @property
    def phantom_directory(self) -> str:
        return get_phantom_directory(self.git_root, self.namespace)

    def path_for(self, name: str) -> str:
        return get_worktree_path(self.git_root, name, self.namespace)

    def branch_for(self, name: str) -> str:
        return self.namespace.branch_for(name)

    def _label(self) -> str:
        return self.namespace.label.capitalize()

    def _require_name(self, name: str) -> None:
        if not name:
            raise ValidationError(f"{self._label()} name required")

    def where(self, name: str) -> str:
        """Path of an existing worktree.

        Raises:
            InvalidWorktreeNameError: name points outside the namespace directory
            WorktreeNotFoundError: no worktree with that name
        """
        self._require_name(name)
        validate_worktree_name(name)
        path = self.path_for(name)
        if not worktree_exists(path):
            raise WorktreeNotFoundError(name, self.namespace.label)
        return path

    def create(
        self,
        name: str,
        branch: Optional[str] = None,
        commitish: str = "HEAD",
        copy_files: Optional[Iterable[str]] = None,
    ) -> CreateResult:
        """Create a worktree on a new branch.

        Args:
            name: Worktree name, unique within the namespace
            branch: Branch to create, the namespace's branch for name by default
            commitish: Start point of the new branch
            copy_files: Files to copy from the repository root afterwards

        Raises:
            ValidationError: empty or unsafe name
            WorktreeAlreadyExistsError: the worktree path is taken
            GitOperationError: git refused to add the worktree
        """
        self._require_name(name)
        validate_worktree_name(name)

        branch = branch or self.branch_for(name)
        worktree_path = self.path_for(name)

        if not os.path.exists(self.phantom_directory):
            logger.debug(f"Creating {self.phantom_directory}")
            os.makedirs(self.phantom_directory, exist_ok=True)

        if worktree_exists(worktree_path):
            raise WorktreeAlreadyExistsError(name, self.namespace.label)

        try:
            self.git_service.add_worktree(worktree_path, branch, commitish)
        except GitCommandFailed as e:
            raise GitOperationError("worktree add", str(e)) from e

        result = CreateResult(
            success=True,
            message=f"Created {self.namespace.label} '{name}' at {worktree_path}",
            path=worktree_path,
        )

        files = list(copy_files or [])
        if files:
            try:
                copied = copy_into_worktree(self.git_root, worktree_path, files)
                result.copied_files = copied.copied_files
                result.skipped_files = copied.skipped_files
                result.rejected_files = copied.rejected_files
            except FileCopyError as e:
                logger.warning(str(e))
                result.copy_error = str(e)

        return result

    def attach(self, branch_name: str) -> str:
        """Create a worktree named after an existing branch and check it out.

        Returns:
            Path of the new worktree

        Raises:
            ValidationError: empty or unsafe name
            WorktreeAlreadyExistsError: the worktree path is taken
            BranchNotFoundError: no local branch with that name
            GitOperationError: git refused to add the worktree
        """
        self._require_name(branch_name)
        validate_worktree_name(branch_name)

        worktree_path = self.path_for(branch_name)
        if worktree_exists(worktree_path):
            raise WorktreeAlreadyExistsError(branch_name, self.namespace.label)

        try:
            if not self.git_service.branch_exists(branch_name):
                raise BranchNotFoundError(branch_name)
            self.git_service.attach_worktree(worktree_path, branch_name)
        except GitCommandFailed as e:
            raise GitOperationError("worktree add", str(e)) from e

        return worktree_path

    def get_status(self, name: str) -> WorktreeStatus:
        """Uncommitted-change summary of a worktree (clean when git cannot tell)."""
        return self.git_service.get_worktree_status(self.path_for(name))

    def _remove_with_fallback(self, name: str, worktree_path: str) -> None:
        """Remove a worktree, escalating to --force only if the plain removal fails."""
        try:
            self.git_service.remove_worktree(worktree_path)
            return
        except GitCommandFailed as e:
            logger.info(f"Plain removal of {worktree_path} failed ({e}), retrying with --force")

        try:
            self.git_service.remove_worktree(worktree_path, force=True)
        except GitCommandFailed as e:
            raise GitOperationError(
                "worktree remove", f"Failed to remove {self.namespace.label} '{name}': {e}"
            ) from e

    def delete(self, name: str, force: bool = False) -> DeleteResult:
        """Delete a worktree and, best effort, its branch.

        Args:
            name: Worktree name
            force: Delete even when there are uncommitted changes

        Raises:
            ValidationError: empty or unsafe name
            WorktreeNotFoundError: the worktree does not exist
            DirtyWorktreeError: uncommitted changes and force not set
            GitOperationError: both plain and forced removal failed
        """
        self._require_name(name)
        validate_worktree_name(name)
        worktree_path = self.path_for(name)
        if not worktree_exists(worktree_path):
            raise WorktreeNotFoundError(name, self.namespace.label)

        status = self.get_status(name)
        if status.has_uncommitted_changes and not force:
            raise DirtyWorktreeError(name, status.changed_files, self.namespace.label)

        self._remove_with_fallback(name, worktree_path)

        branch = self.branch_for(name)
        self.git_service.delete_branch(branch)

        # The message names the branch whether or not it still existed
        message = f"Deleted {self.namespace.label} '{name}' and its branch '{branch}'"
        if status.has_uncommitted_changes:
            message = (
                f"Warning: {self._label()} '{name}' had uncommitted changes "
                f"({status.changed_files} files)\n{message}"
            )

        return DeleteResult(
            success=True,
            message=message,
            has_uncommitted_changes=status.has_uncommitted_changes,
            changed_files=status.changed_files if status.has_uncommitted_changes else None,
        )

    def names(self) -> List[str]:
        """Names of the registered worktrees that live in this namespace."""
        base = os.path.realpath(self.phantom_directory)
        names = []
        for wt in self.git_service.list_worktrees():
            path = os.path.realpath(wt.path)
            if not path.startswith(base + os.sep):
                continue
            names.append(os.path.relpath(path, base))
        return sorted(names)

    def list(self) -> ListResult:
        """Managed worktrees with their branch and cleanliness."""
        if not os.path.exists(self.phantom_directory):
            return ListResult(
                worktrees=[],
                message=f"No {self.namespace.label}s found ({self.namespace.name} directory doesn't exist)",
            )

        names = self.names()
        if not names:
            return ListResult(worktrees=[], message=f"No {self.namespace.label}s found")

        worktrees = []
        for name in names:
            path = self.path_for(name)
            status = self.get_status(name)
            worktrees.append(
                WorktreeInfo(
                    name=name,
                    path=path,
                    branch=self.git_service.get_current_branch(path),
                    is_clean=not status.has_uncommitted_changes,
                )
            )
        return ListResult(worktrees=worktrees)

    def current_worktree_name(self) -> Optional[str]:
        """Name of the managed worktree containing the process directory, if any."""
        branch = self.git_service.get_current_worktree()
        if branch is None:
            return None
        name = self.namespace.name_for_branch(branch)
        if not worktree_exists(self.path_for(name)):
            return None
        return name
