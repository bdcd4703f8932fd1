"""Opening worktrees in tmux or kitty windows and panes."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional

from git_phantom.models.worktree import SpawnResult
from git_phantom.services.process import check_spawn_result, spawn_process
from git_phantom.utils.logging import get_logger

logger = get_logger(__name__)


class SplitDirection(Enum):
    """Where the new terminal appears."""
    NEW = "new"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass
class MultiplexerOptions:
    direction: SplitDirection
    command: str
    args: List[str] = field(default_factory=list)
    cwd: Optional[str] = None
    env: Dict[str, str] = field(default_factory=dict)
    title: Optional[str] = None


def is_inside_tmux(env: Mapping[str, str]) -> bool:
    return "TMUX" in env


def is_inside_kitty(env: Mapping[str, str]) -> bool:
    return env.get("TERM") == "xterm-kitty" or "KITTY_WINDOW_ID" in env


def build_tmux_args(options: MultiplexerOptions) -> List[str]:
    """Arguments for `tmux` that open a window or split running the command."""
    args: List[str] = []

    if options.direction is SplitDirection.NEW:
        args.append("new-window")
        if options.title:
            args.extend(["-n", options.title])
    elif options.direction is SplitDirection.VERTICAL:
        args.extend(["split-window", "-v"])
    else:
        args.extend(["split-window", "-h"])

    if options.cwd:
        args.extend(["-c", options.cwd])

    for key, value in options.env.items():
        args.extend(["-e", f"{key}={value}"])

    args.append(options.command)
    args.extend(options.args)
    return args


def build_kitty_args(options: MultiplexerOptions) -> List[str]:
    """Arguments for `kitty @ launch` that open a tab or split running the command."""
    args = ["@", "launch"]

    if options.direction is SplitDirection.NEW:
        args.append("--type=tab")
        if options.title:
            args.append(f"--tab-title={options.title}")
    elif options.direction is SplitDirection.VERTICAL:
        args.append("--location=vsplit")
    else:
        args.append("--location=hsplit")

    if options.cwd:
        args.append(f"--cwd={options.cwd}")

    for key, value in options.env.items():
        args.append(f"--env={key}={value}")

    args.append("--")
    args.append(options.command)
    args.extend(options.args)
    return args


def execute_tmux_command(options: MultiplexerOptions) -> SpawnResult:
    """Ask the surrounding tmux server to open the command.

    Raises:
        ProcessError: tmux failed or could not be started
    """
    logger.debug(f"Opening tmux {options.direction.value} for {options.command}")
    return check_spawn_result("tmux", spawn_process("tmux", build_tmux_args(options)))


def execute_kitty_command(options: MultiplexerOptions) -> SpawnResult:
    """Ask the surrounding kitty instance to open the command.

    Raises:
        ProcessError: kitty failed or could not be started
    """
    logger.debug(f"Opening kitty {options.direction.value} for {options.command}")
    return check_spawn_result("kitty", spawn_process("kitty", build_kitty_args(options)))
