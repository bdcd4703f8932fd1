"""Logging configuration for git-phantom"""
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_DIR = Path.home() / '.git-phantom'
LOG_FILE_NAME = 'git-phantom.log'

# Loggers of libraries that are noisy at DEBUG level
THIRD_PARTY_LOGGERS = ('git', 'urllib3')


def setup_logging(verbose: bool = False, debug: bool = False,
                  log_dir: Optional[Path] = None) -> None:
    """
    Configure logging for the application.

    Log records go to stderr so that stdout stays clean for `where` and
    `list --names`, whose output is consumed by scripts and completion.

    Args:
        verbose: If True, show INFO level messages
        debug: If True, show DEBUG level messages with timestamps and source
            locations, and also write them to a log file
        log_dir: Directory for the debug log file, ~/.git-phantom by default
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = RichHandler(
        console=Console(stderr=True, soft_wrap=True),
        level=level,
        show_time=debug,
        show_path=debug,
        markup=False,
        rich_tracebacks=debug,
    )
    console_handler.setFormatter(logging.Formatter('[%(name)s] %(message)s'))
    root_logger.addHandler(console_handler)

    if debug:
        log_dir = log_dir or LOG_DIR
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / LOG_FILE_NAME, mode='w')  # Overwrite each run
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        root_logger.addHandler(file_handler)

    # GitPython logs every command it runs; ours are already logged
    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        Logger instance, named without the package prefix
    """
    if name.startswith('git_phantom.'):
        name = name[len('git_phantom.'):]

    return logging.getLogger(name)
