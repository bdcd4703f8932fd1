"""Child process spawning for shells and commands run inside a worktree."""

import subprocess
from typing import Mapping, Optional, Sequence

from git_phantom.constants import ENV_WORKTREE_NAME, ENV_WORKTREE_PATH, WORKTREES, Namespace
from git_phantom.exceptions import (
    ProcessExecutionError,
    ProcessSignalError,
    ProcessSpawnError,
    WorktreeNotFoundError,
)
from git_phantom.models.worktree import SpawnResult
from git_phantom.services.paths import get_worktree_path, validate_worktree_name, worktree_exists
from git_phantom.utils.logging import get_logger

logger = get_logger(__name__)


def get_worktree_env(worktree_name: str, worktree_path: str) -> dict:
    """Variables identifying the active worktree."""
    return {
        ENV_WORKTREE_NAME: worktree_name,
        ENV_WORKTREE_PATH: worktree_path,
    }


def build_worktree_env(
    base_env: Mapping[str, str], worktree_name: str, worktree_path: str
) -> dict:
    """Merge the worktree variables over an explicit parent environment."""
    env = dict(base_env)
    env.update(get_worktree_env(worktree_name, worktree_path))
    return env


def spawn_process(
    command: str,
    args: Sequence[str] = (),
    cwd: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> SpawnResult:
    """Start a child process on the inherited terminal and wait for it.

    Returns:
        SpawnResult with the exit code, or the signal number when the child
        was killed (subprocess reports those as negative return codes)

    Raises:
        ProcessSpawnError: the command could not be started
    """
    logger.debug(f"Spawning {command} {' '.join(args)} (cwd={cwd or '.'})")
    try:
        process = subprocess.Popen([command, *args], cwd=cwd, env=dict(env) if env is not None else None)
    except OSError as e:
        raise ProcessSpawnError(command, e.strerror or str(e)) from e

    returncode = process.wait()
    if returncode < 0:
        logger.debug(f"{command} terminated by signal {-returncode}")
        return SpawnResult(exit_code=128 - returncode, signal=-returncode)
    return SpawnResult(exit_code=returncode)


def check_spawn_result(command: str, result: SpawnResult) -> SpawnResult:
    """Raise the matching ProcessError for an unsuccessful SpawnResult."""
    if result.signal is not None:
        raise ProcessSignalError(result.signal)
    if result.exit_code != 0:
        raise ProcessExecutionError(command, result.exit_code)
    return result


def _resolve_existing(git_root: str, worktree_name: str, namespace: Namespace) -> str:
    validate_worktree_name(worktree_name)
    worktree_path = get_worktree_path(git_root, worktree_name, namespace)
    if not worktree_exists(worktree_path):
        raise WorktreeNotFoundError(worktree_name, namespace.label)
    return worktree_path


def exec_in_worktree(
    git_root: str,
    worktree_name: str,
    command: Sequence[str],
    base_env: Mapping[str, str],
    namespace: Namespace = WORKTREES,
) -> SpawnResult:
    """Run a command with the worktree as its working directory.

    Raises:
        WorktreeNotFoundError: the worktree does not exist
        ProcessError: the command failed, was killed or could not start
    """
    worktree_path = _resolve_existing(git_root, worktree_name, namespace)
    cmd, *args = command
    result = spawn_process(
        cmd,
        args,
        cwd=worktree_path,
        env=build_worktree_env(base_env, worktree_name, worktree_path),
    )
    return check_spawn_result(cmd, result)


def shell_in_worktree(
    git_root: str,
    worktree_name: str,
    shell: str,
    base_env: Mapping[str, str],
    namespace: Namespace = WORKTREES,
) -> SpawnResult:
    """Open an interactive shell inside a worktree."""
    worktree_path = _resolve_existing(git_root, worktree_name, namespace)
    result = spawn_process(
        shell,
        [],
        cwd=worktree_path,
        env=build_worktree_env(base_env, worktree_name, worktree_path),
    )
    return check_spawn_result(shell, result)
