"""Console output for the command-line tools.

Messages are printed verbatim: worktree names, paths and git messages may
contain square brackets, so rich markup, highlighting and emoji codes are off.
"""

from rich.console import Console

console = Console(soft_wrap=True, highlight=False, emoji=False)
error_console = Console(stderr=True, soft_wrap=True, highlight=False, emoji=False)


def log(message: str) -> None:
    console.print(message, markup=False)


def warn(message: str) -> None:
    error_console.print(message, style="yellow", markup=False)


def error(message: str) -> None:
    error_console.print(f"Error: {message}", style="red", markup=False)


def print_exception() -> None:
    error_console.print_exception()
