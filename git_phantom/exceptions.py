"""Custom exceptions for git-phantom"""

import signal
from typing import Optional, Sequence

from git_phantom.constants import ExitCode


class PhantomError(Exception):
    """Base exception for all git-phantom errors."""

    exit_code = ExitCode.GENERAL_ERROR


class ValidationError(PhantomError):
    """Missing, malformed or contradictory input."""

    exit_code = ExitCode.VALIDATION_ERROR


class InvalidWorktreeNameError(ValidationError):
    """Exception raised when a worktree name is not path-safe."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid worktree name '{name}': {reason}")


class WorktreeNotFoundError(PhantomError):
    """Exception raised when a named worktree does not exist."""

    exit_code = ExitCode.NOT_FOUND

    def __init__(self, name: str, label: str = "worktree"):
        self.name = name
        super().__init__(f"{label.capitalize()} '{name}' not found")


class WorktreeAlreadyExistsError(PhantomError):
    """Exception raised when creating a worktree whose name is taken."""

    exit_code = ExitCode.VALIDATION_ERROR

    def __init__(self, name: str, label: str = "worktree"):
        self.name = name
        super().__init__(f"{label.capitalize()} '{name}' already exists")


class DirtyWorktreeError(ValidationError):
    """Exception raised when deleting a worktree with uncommitted changes."""

    def __init__(self, name: str, changed_files: int, label: str = "worktree"):
        self.name = name
        self.changed_files = changed_files
        super().__init__(
            f"{label.capitalize()} '{name}' has uncommitted changes "
            f"({changed_files} files). Use --force to delete anyway."
        )


class BranchNotFoundError(PhantomError):
    """Exception raised when a branch is not found."""

    exit_code = ExitCode.NOT_FOUND

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(f"Branch '{branch}' not found")


class GitCommandFailed(PhantomError):
    """A git invocation reported a real error on stderr."""

    def __init__(self, args: Sequence[str], stderr: str, status: Optional[int] = None):
        self.args_list = list(args)
        self.stderr = stderr
        self.status = status
        super().__init__(stderr)


class GitOperationError(PhantomError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        self.message = message

        error_msg = f"Git {operation} failed"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class ProcessError(PhantomError):
    """Base exception for child processes that did not succeed."""

    def __init__(self, message: str, exit_code: int = ExitCode.GENERAL_ERROR):
        self.exit_code = exit_code
        super().__init__(message)


class ProcessExecutionError(ProcessError):
    """A child process exited with a non-zero code."""

    def __init__(self, command: str, exit_code: int):
        self.command = command
        super().__init__(f"Command '{command}' failed with exit code {exit_code}", exit_code)


class ProcessSignalError(ProcessError):
    """A child process was terminated by a signal."""

    def __init__(self, signum: int):
        self.signum = signum
        try:
            self.signal_name = signal.Signals(signum).name
        except ValueError:
            self.signal_name = str(signum)
        super().__init__(f"Command terminated by signal: {self.signal_name}", 128 + signum)


class ProcessSpawnError(ProcessError):
    """A child process could not be started at all."""

    def __init__(self, command: str, details: str):
        self.command = command
        super().__init__(f"Error executing command '{command}': {details}")


class FzfError(PhantomError):
    """Exception raised when fzf is unavailable or fails."""


class ConfigError(PhantomError):
    """Base exception for phantom.config.json problems."""


class ConfigParseError(ConfigError):
    """The project configuration file is not valid JSON."""

    def __init__(self, message: str):
        super().__init__(f"Failed to parse phantom.config.json: {message}")


class ConfigValidationError(ConfigError):
    """The project configuration file has the wrong shape."""

    exit_code = ExitCode.VALIDATION_ERROR

    def __init__(self, message: str):
        super().__init__(f"Invalid phantom.config.json: {message}")
