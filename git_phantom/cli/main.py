"""Command-line entry points for git-phantom"""

import os
import sys
from typing import List, Optional, Sequence

from git_phantom.cli import output
from git_phantom.cli.args import GARDEN_COMMANDS, PHANTOM_COMMANDS, RUINS_COMMANDS, build_parser
from git_phantom.cli.handlers import CommandContext
from git_phantom.config import Config
from git_phantom.constants import GARDENS, RUINS, WORKTREES, ExitCode, Namespace
from git_phantom.exceptions import PhantomError
from git_phantom.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def main(
    argv: Optional[List[str]] = None,
    namespace: Namespace = WORKTREES,
    prog: str = "phantom",
    commands: Sequence[str] = PHANTOM_COMMANDS,
) -> int:
    """Main entry point for the application.

    Returns:
        Process exit code
    """
    debug = False
    try:
        parser = build_parser(prog=prog, namespace=namespace, commands=commands)
        parsed_args = parser.parse_args(argv)
        debug = parsed_args.debug

        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

        if not parsed_args.command:
            parser.print_help()
            return ExitCode.SUCCESS

        config = Config.from_env(os.environ, verbose=parsed_args.verbose, debug=parsed_args.debug)
        if config.debug:
            for key, value in config.to_dict().items():
                logger.debug(f"config {key}: {value}")

        ctx = CommandContext(namespace=namespace, config=config, env=dict(os.environ), prog=prog)
        return parsed_args.handler(parsed_args, ctx)
    except KeyboardInterrupt:
        output.warn("\nOperation cancelled by user")
        return ExitCode.GENERAL_ERROR
    except PhantomError as e:
        output.error(str(e))
        if debug:
            output.print_exception()
        return e.exit_code
    except Exception as e:
        output.error(str(e))
        if debug:
            output.print_exception()
        return ExitCode.GENERAL_ERROR


def garden_main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the garden tool, which manages the gardens namespace."""
    return main(argv, namespace=GARDENS, prog="garden", commands=GARDEN_COMMANDS)



def ruins_main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ruins tool, which manages the ruins namespace."""
    return main(argv, namespace=RUINS, prog="ruins", commands=RUINS_COMMANDS)

if __name__ == "__main__":
    sys.exit(main())
