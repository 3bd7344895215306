"""regmsg - command line client for the regmsgd display daemon."""

import asyncio
import sys
from collections.abc import Sequence

from .ansi import BOLD, RED, colorize
from .cli import parse_invocation
from .client import run_client
from .config import load_settings
from .logging_setup import get_logger, init_logger
from .models import ExitCode, RegmsgError

__all__ = ["main", "run"]


def report_error(message: str) -> None:
    """Print an error for the operator."""
    print(colorize(f"Error: {message}", RED, BOLD, stream=sys.stderr), file=sys.stderr)


def run(argv: Sequence[str]) -> int:
    """Run the command line `argv`, return the exit code."""
    invocation = parse_invocation(argv)
    try:
        settings = load_settings(invocation.settings_overrides(), invocation.config)
        init_logger(filename=settings.log_file, console=invocation.log, force_debug=invocation.debug)
    except RegmsgError as e:
        report_error(str(e))
        return e.exit_code

    log = get_logger("regmsg")
    try:
        reply = asyncio.run(run_client(invocation.command, invocation.context, settings, log))
    except KeyboardInterrupt:
        return ExitCode.INTERRUPTED
    except RegmsgError as e:
        log.critical("%s failed: %s", invocation.command.kind, e)
        if not invocation.log:  # already on the console otherwise
            report_error(str(e))
        return e.exit_code
    except Exception as e:  # pylint: disable=W0718
        log.critical("Unhandled exception:", exc_info=True)
        report_error(f"unexpected error: {e}")
        return ExitCode.FAILURE

    print(reply)
    return ExitCode.SUCCESS


def main() -> None:
    """Run the command."""
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
