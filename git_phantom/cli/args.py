"""Command-line argument parsing for git-phantom."""

import argparse
from typing import Sequence

from git_phantom.__version__ import __version__
from git_phantom.constants import WORKTREES, Namespace
from git_phantom.exceptions import ValidationError
from git_phantom.cli import handlers


# Subcommands offered by each tool
PHANTOM_COMMANDS = (
    "create", "attach", "list", "where", "delete", "exec", "shell", "version", "completion",
)
GARDEN_COMMANDS = ("create", "list", "where", "delete", "exec", "shell")
RUINS_COMMANDS = ("create", "list", "where", "delete")


class PhantomArgumentParser(argparse.ArgumentParser):
    """ArgumentParser reporting usage errors as ValidationError.

    argparse would exit with status 2, which this tool reserves for
    "not found".
    """

    def error(self, message):
        raise ValidationError(message)


def _add_create_parser(subparsers, namespace: Namespace) -> None:
    label = namespace.label
    parser = subparsers.add_parser("create", help=f"Create a new {label}")
    parser.add_argument("name", nargs="?", help=f"Name of the new {label}")
    parser.add_argument(
        "-s", "--shell", action="store_true", help=f"Open an interactive shell in the new {label}"
    )
    parser.add_argument(
        "-x", "--exec", dest="exec_command", metavar="COMMAND",
        help=f"Execute a command in the new {label}",
    )
    parser.add_argument(
        "-t", "--tmux", action="store_true", help=f"Open the {label} in a new tmux window"
    )
    parser.add_argument(
        "--tmux-vertical", action="store_true", help=f"Open the {label} in a vertical tmux pane"
    )
    parser.add_argument(
        "--tmux-horizontal", action="store_true", help=f"Open the {label} in a horizontal tmux pane"
    )
    parser.add_argument("--kitty", action="store_true", help=f"Open the {label} in a new kitty tab")
    parser.add_argument(
        "--kitty-vertical", action="store_true", help=f"Open the {label} in a vertical kitty split"
    )
    parser.add_argument(
        "--kitty-horizontal", action="store_true", help=f"Open the {label} in a horizontal kitty split"
    )
    parser.add_argument(
        "--copy-file", dest="copy_files", action="append", default=[], metavar="FILE",
        help="Copy a file from the repository root into the new worktree (repeatable)",
    )
    parser.set_defaults(handler=handlers.create_handler)


def _add_attach_parser(subparsers) -> None:
    parser = subparsers.add_parser("attach", help="Create a worktree for an existing branch")
    parser.add_argument("branch", nargs="?", help="Existing local branch to check out")
    parser.add_argument("-s", "--shell", action="store_true", help="Open an interactive shell afterwards")
    parser.add_argument(
        "-x", "--exec", dest="exec_command", metavar="COMMAND", help="Execute a command afterwards"
    )
    parser.set_defaults(handler=handlers.attach_handler)


def _add_list_parser(subparsers, label: str) -> None:
    parser = subparsers.add_parser("list", help=f"List all {label}s")
    parser.add_argument("--fzf", action="store_true", help="Use fzf for interactive selection")
    parser.add_argument(
        "--names", action="store_true", help=f"Output only {label} names (for scripts and completion)"
    )
    parser.set_defaults(handler=handlers.list_handler)


def _add_where_parser(subparsers, label: str) -> None:
    parser = subparsers.add_parser("where", help=f"Output the path of a {label}")
    parser.add_argument("name", nargs="?", help=f"Name of the {label}")
    parser.add_argument("--fzf", action="store_true", help="Use fzf for interactive selection")
    parser.set_defaults(handler=handlers.where_handler)


def _add_delete_parser(subparsers, label: str) -> None:
    parser = subparsers.add_parser(
        "delete", help=f"Delete a {label} (use --force for uncommitted changes)"
    )
    parser.add_argument("name", nargs="?", help=f"Name of the {label}")
    parser.add_argument(
        "-f", "--force", action="store_true", help="Delete even with uncommitted changes"
    )
    parser.add_argument(
        "--current", action="store_true", help=f"Delete the {label} containing the current directory"
    )
    parser.add_argument("--fzf", action="store_true", help="Use fzf for interactive selection")
    parser.set_defaults(handler=handlers.delete_handler)


def _add_exec_parser(subparsers, label: str) -> None:
    parser = subparsers.add_parser("exec", help=f"Execute a command in a {label} directory")
    parser.add_argument("name", nargs="?", help=f"Name of the {label}")
    parser.add_argument("exec_args", nargs=argparse.REMAINDER, metavar="command", help="Command and arguments")
    parser.set_defaults(handler=handlers.exec_handler)


def _add_shell_parser(subparsers, label: str) -> None:
    parser = subparsers.add_parser("shell", help=f"Open an interactive shell in a {label}")
    parser.add_argument("name", nargs="?", help=f"Name of the {label}")
    parser.add_argument("--fzf", action="store_true", help="Use fzf for interactive selection")
    parser.set_defaults(handler=handlers.shell_handler)


def build_parser(
    prog: str = "phantom",
    namespace: Namespace = WORKTREES,
    commands: Sequence[str] = PHANTOM_COMMANDS,
):
    """Build the parser for one of the command-line tools.

    Args:
        prog: Program name shown in usage
        namespace: Namespace whose worktrees the tool manages
        commands: Subcommands to offer; the other tools expose a subset

    Returns:
        The configured parser
    """
    label = namespace.label
    parser = PhantomArgumentParser(
        prog=prog,
        description=f"Manage Git worktrees ({label}s) under .git/phantom/{namespace.name}",
    )
    parser.add_argument("--version", action="version", version=f"{prog} {__version__}")
    parser.add_argument("--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    if "create" in commands:
        _add_create_parser(subparsers, namespace)
    if "attach" in commands:
        _add_attach_parser(subparsers)

    if "list" in commands:
        _add_list_parser(subparsers, label)
    if "where" in commands:
        _add_where_parser(subparsers, label)
    if "delete" in commands:
        _add_delete_parser(subparsers, label)
    if "exec" in commands:
        _add_exec_parser(subparsers, label)
    if "shell" in commands:
        _add_shell_parser(subparsers, label)

    if "version" in commands:
        version_parser = subparsers.add_parser("version", help="Display the version")
        version_parser.set_defaults(handler=handlers.version_handler)

    if "completion" in commands:
        completion_parser = subparsers.add_parser("completion", help="Generate shell completion scripts")
        completion_parser.add_argument("shell", nargs="?", help="fish, zsh or bash")
        completion_parser.set_defaults(handler=handlers.completion_handler)

    return parser
