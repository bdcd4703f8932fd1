"""Command handlers for the phantom and garden tools.

Each handler receives the parsed arguments and a CommandContext, prints its
results and returns the process exit code. Failures are raised as
PhantomError subclasses; cli.main turns them into messages and exit codes.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from git_phantom.__version__ import __version__
from git_phantom.cli import output
from git_phantom.cli.completion import SUPPORTED_SHELLS, completion_script
from git_phantom.config import Config, load_project_config
from git_phantom.constants import ExitCode, Namespace
from git_phantom.core.worktree_manager import WorktreeManager
from git_phantom.exceptions import ValidationError
from git_phantom.formatters import format_worktree_table
from git_phantom.services.git import GitExecutor, get_git_root
from git_phantom.services.multiplexer import (
    MultiplexerOptions,
    SplitDirection,
    execute_kitty_command,
    execute_tmux_command,
    is_inside_kitty,
    is_inside_tmux,
)
from git_phantom.services.process import exec_in_worktree, get_worktree_env, shell_in_worktree
from git_phantom.services.selector import select_worktree
from git_phantom.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class CommandContext:
    """Everything a handler needs besides its arguments."""

    namespace: Namespace
    config: Config
    env: Mapping[str, str]
    executor: GitExecutor = field(default_factory=GitExecutor)
    prog: str = "phantom"

    def manager(self) -> WorktreeManager:
        """Resolve the repository root and build a manager for it."""
        git_root = get_git_root(self.executor)
        logger.debug(f"Repository root: {git_root}")
        return WorktreeManager(git_root, self.namespace, self.executor)


def _multiplexer_choice(args) -> Optional[tuple]:
    """(tool, direction) requested on the create command line, if any.

    Raises:
        ValidationError: more than one window or pane option was given
    """
    requested = [
        (tool, direction)
        for tool, direction, flag in (
            ("tmux", SplitDirection.NEW, args.tmux),
            ("tmux", SplitDirection.VERTICAL, args.tmux_vertical),
            ("tmux", SplitDirection.HORIZONTAL, args.tmux_horizontal),
            ("kitty", SplitDirection.NEW, args.kitty),
            ("kitty", SplitDirection.VERTICAL, args.kitty_vertical),
            ("kitty", SplitDirection.HORIZONTAL, args.kitty_horizontal),
        )
        if flag
    ]
    if len(requested) > 1:
        raise ValidationError("Cannot use more than one tmux or kitty option")
    return requested[0] if requested else None


def _open_in_multiplexer(ctx: CommandContext, tool: str, direction: SplitDirection,
                         name: str, path: str) -> int:
    options = MultiplexerOptions(
        direction=direction,
        command=ctx.config.shell,
        cwd=path,
        env=get_worktree_env(name, path),
        title=name,
    )
    if tool == "tmux":
        output.log(f"\nOpening {ctx.namespace.label} '{name}' in tmux...")
        return execute_tmux_command(options).exit_code
    output.log(f"\nOpening {ctx.namespace.label} '{name}' in kitty...")
    return execute_kitty_command(options).exit_code


def _run_in_worktree(ctx: CommandContext, manager: WorktreeManager, name: str, command: str) -> int:
    result = exec_in_worktree(
        manager.git_root, name, [ctx.config.shell, "-c", command], ctx.env, ctx.namespace
    )
    return result.exit_code


def _enter_shell(ctx: CommandContext, manager: WorktreeManager, name: str, path: str) -> int:
    output.log(f"Entering {ctx.namespace.label} '{name}' at {path}")
    output.log("Type 'exit' to return to your original directory\n")
    return shell_in_worktree(manager.git_root, name, ctx.config.shell, ctx.env, ctx.namespace).exit_code


def _dedupe(items: List[str]) -> List[str]:
    seen: Dict[str, None] = {}
    for item in items:
        seen.setdefault(item, None)
    return list(seen)


def create_handler(args, ctx: CommandContext) -> int:
    """Create a worktree, then optionally enter it."""
    label = ctx.namespace.label
    if not args.name:
        raise ValidationError(f"Please provide a name for the new {label}")
    if args.shell and args.exec_command:
        raise ValidationError("Cannot use --shell and --exec together")

    multiplexer = _multiplexer_choice(args)
    if multiplexer and (args.shell or args.exec_command):
        raise ValidationError("Cannot use tmux or kitty options with --shell or --exec")
    if multiplexer and multiplexer[0] == "tmux" and not is_inside_tmux(ctx.env):
        raise ValidationError("The tmux options can only be used inside a tmux session")
    if multiplexer and multiplexer[0] == "kitty" and not is_inside_kitty(ctx.env):
        raise ValidationError("The kitty options can only be used inside kitty")

    manager = ctx.manager()
    project_config = load_project_config(manager.git_root)

    result = manager.create(
        args.name,
        copy_files=_dedupe(list(args.copy_files) + project_config.copy_files),
    )
    output.log(result.message)

    if result.copied_files:
        output.log(f"Copied files: {', '.join(result.copied_files)}")
    if result.skipped_files:
        output.warn(f"Skipped files (not found): {', '.join(result.skipped_files)}")
    if result.rejected_files:
        output.warn(f"Skipped files outside the repository: {', '.join(result.rejected_files)}")
    if result.copy_error:
        output.warn(f"Warning: {result.copy_error}")

    for command in project_config.post_create_commands:
        output.log(f"Running post-create command: {command}")
        _run_in_worktree(ctx, manager, args.name, command)

    if args.exec_command:
        output.log(f"\nExecuting command in {label} '{args.name}': {args.exec_command}")
        return _run_in_worktree(ctx, manager, args.name, args.exec_command)

    if args.shell:
        output.log("")
        return _enter_shell(ctx, manager, args.name, result.path)

    if multiplexer:
        tool, direction = multiplexer
        return _open_in_multiplexer(ctx, tool, direction, args.name, result.path)

    return ExitCode.SUCCESS


def attach_handler(args, ctx: CommandContext) -> int:
    """Create a worktree for an existing branch, then optionally enter it."""
    if not args.branch:
        raise ValidationError("Missing required argument: branch name")
    if args.shell and args.exec_command:
        raise ValidationError("Cannot use --shell and --exec together")

    manager = ctx.manager()
    path = manager.attach(args.branch)
    output.log(f"Attached {ctx.namespace.label} '{args.branch}' at {path}")

    if args.shell:
        return _enter_shell(ctx, manager, args.branch, path)
    if args.exec_command:
        return _run_in_worktree(ctx, manager, args.branch, args.exec_command)
    return ExitCode.SUCCESS


def list_handler(args, ctx: CommandContext) -> int:
    """List managed worktrees."""
    manager = ctx.manager()

    if args.names:
        for name in manager.names():
            output.log(name)
        return ExitCode.SUCCESS

    if args.fzf:
        selected = select_worktree(manager)
        if selected:
            output.log(selected.name)
        return ExitCode.SUCCESS

    result = manager.list()
    if not result.worktrees:
        output.log(result.message or f"No {ctx.namespace.label}s found.")
        return ExitCode.SUCCESS

    for line in format_worktree_table(result.worktrees):
        output.log(line)
    return ExitCode.SUCCESS


def _choose_name(args, manager: WorktreeManager, usage: str) -> Optional[str]:
    """Worktree named on the command line or picked with --fzf.

    Returns None when fzf was used and nothing was picked.
    """
    if args.name and args.fzf:
        raise ValidationError("Cannot specify both a worktree name and --fzf option")
    if args.fzf:
        selected = select_worktree(manager)
        return selected.name if selected else None
    if not args.name:
        raise ValidationError(usage)
    return args.name


def where_handler(args, ctx: CommandContext) -> int:
    """Print the path of a worktree."""
    manager = ctx.manager()
    name = _choose_name(args, manager, f"Usage: {ctx.prog} where <name> or {ctx.prog} where --fzf")
    if name is None:
        return ExitCode.SUCCESS

    output.log(manager.where(name))
    return ExitCode.SUCCESS


def delete_handler(args, ctx: CommandContext) -> int:
    """Delete a worktree and its branch."""
    label = ctx.namespace.label
    if not args.name and not args.current and not args.fzf:
        raise ValidationError(
            f"Please provide a {label} name to delete, use --current to delete the current "
            f"{label}, or use --fzf for interactive selection"
        )
    if args.current and (args.name or args.fzf):
        raise ValidationError(f"Cannot specify --current with a {label} name or --fzf option")

    manager = ctx.manager()

    if args.current:
        name = manager.current_worktree_name()
        if not name:
            raise ValidationError(
                f"Not in a {label} directory. The --current option can only be used from within a {label}."
            )
    else:
        name = _choose_name(args, manager, f"Please provide a {label} name to delete")
        if name is None:
            return ExitCode.SUCCESS

    result = manager.delete(name, force=args.force)
    output.log(result.message)
    return ExitCode.SUCCESS


def exec_handler(args, ctx: CommandContext) -> int:
    """Run a command inside a worktree and pass its exit code through."""
    if not args.name or not args.exec_args:
        raise ValidationError(f"Usage: {ctx.prog} exec <name> <command> [args...]")

    manager = ctx.manager()
    result = exec_in_worktree(manager.git_root, args.name, args.exec_args, ctx.env, ctx.namespace)
    return result.exit_code


def shell_handler(args, ctx: CommandContext) -> int:
    """Open an interactive shell inside a worktree."""
    manager = ctx.manager()
    name = _choose_name(args, manager, f"Usage: {ctx.prog} shell <name> or {ctx.prog} shell --fzf")
    if name is None:
        return ExitCode.SUCCESS

    return _enter_shell(ctx, manager, name, manager.where(name))


def version_handler(args, ctx: CommandContext) -> int:
    output.log(f"Phantom v{__version__}")
    return ExitCode.SUCCESS


def completion_handler(args, ctx: CommandContext) -> int:
    """Print a shell completion script."""
    if not args.shell:
        raise ValidationError(
            f"Usage: {ctx.prog} completion <shell> (supported: {', '.join(SUPPORTED_SHELLS)})"
        )
    output.log(completion_script(args.shell, ctx.prog))
    return ExitCode.SUCCESS
