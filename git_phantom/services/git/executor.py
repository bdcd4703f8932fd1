"""Git command execution with consistent error handling"""

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

import git

from git_phantom.exceptions import GitCommandFailed
from git_phantom.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class GitResult:
    """Captured output of a git invocation, trailing whitespace removed."""

    stdout: str
    stderr: str


class GitExecutor:
    """Runs the git binary with an argument vector and classifies failures."""

    def __init__(self, cwd: Optional[str] = None):
        """Initialize the executor.

        Args:
            cwd: Default working directory; None means the process directory
        """
        self.cwd = cwd

    def _get_git(self, cwd: Optional[str]) -> git.Git:
        """Get a git command wrapper bound to a working directory."""
        return git.Git(cwd)

    def execute(
        self,
        args: Sequence[str],
        cwd: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> GitResult:
        """Run `git <args>`.

        Many git commands exit non-zero for ordinary outcomes (a diff with
        differences, a missing ref for show-ref). A non-zero exit is therefore
        only an error when git also wrote to stderr.

        Args:
            args: Arguments after `git`, never a shell string
            cwd: Working directory, defaults to the executor's
            env: Variables merged over the inherited environment

        Returns:
            GitResult with stdout and stderr trimmed

        Raises:
            GitCommandFailed: git exited non-zero with stderr output, or could
                not be started
        """
        workdir = cwd if cwd is not None else self.cwd
        command = ["git", *args]
        logger.debug(f"Running {' '.join(command)} (cwd={workdir or '.'})")

        try:
            status, stdout, stderr = self._get_git(workdir).execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
                env=dict(env) if env else None,
            )
        except git.exc.GitCommandNotFound as e:
            raise GitCommandFailed(args, f"git executable not found: {e}") from e

        stdout = (stdout or "").rstrip()
        stderr = (stderr or "").rstrip()

        if status != 0:
            if stderr.strip():
                logger.debug(f"git {args[0] if args else ''} failed (exit {status}): {stderr}")
                raise GitCommandFailed(args, stderr.strip(), status)
            logger.debug(f"git {args[0] if args else ''} exited {status} without stderr")

        return GitResult(stdout=stdout, stderr=stderr)

    def execute_in_directory(self, directory: str, args: Sequence[str]) -> GitResult:
        """Run a git command against another working tree with `git -C`."""
        return self.execute(["-C", directory, *args])
