"""Command line parsing."""

import argparse
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import shtab

from .models import PAYLOAD_COMMANDS, Command, CommandKind, InvocationContext, Rotation

__all__ = ["COMMAND_HELP", "Invocation", "get_parser", "parse_invocation"]

COMMAND_HELP: dict[CommandKind, str] = {
    CommandKind.LIST_MODES: "Lists all available display modes.",
    CommandKind.LIST_OUTPUTS: "List all available display outputs.",
    CommandKind.CURRENT_MODE: "Displays the current display mode for the specified screen.",
    CommandKind.CURRENT_OUTPUT: "Displays the current output (e.g., HDMI, VGA).",
    CommandKind.CURRENT_RESOLUTION: "Displays the current resolution for the specified screen.",
    CommandKind.CURRENT_ROTATION: "Displays the current screen rotation for the specified screen.",
    CommandKind.CURRENT_REFRESH: "Displays the current refresh rate for the specified screen.",
    CommandKind.CURRENT_BACKEND: "Displays the current window system.",
    CommandKind.SET_MODE: "Sets the display mode for the specified screen.",
    CommandKind.SET_OUTPUT: "Sets the output resolution and refresh rate (e.g., WxH@R or WxH).",
    CommandKind.SET_ROTATION: "Sets the screen rotation for the specified screen.",
    CommandKind.GET_SCREENSHOT: "Takes a screenshot of the current screen.",
    CommandKind.MAP_TOUCH_SCREEN: "Maps the touchscreen to the correct display.",
    CommandKind.MIN_TO_MAX_RESOLUTION: "Sets the screen resolution to the maximum supported resolution (e.g., 1920x1080).",
}

PAYLOAD_METAVARS: dict[CommandKind, tuple[str, str]] = {
    CommandKind.SET_MODE: ("mode", "display mode, as listed by listModes"),
    CommandKind.SET_OUTPUT: ("output", "WxH@R or WxH"),
    CommandKind.SET_ROTATION: ("rotation", "rotation in degrees"),
}

ARGS_SEPARATOR = "--"


@dataclass(frozen=True)
class Invocation:
    """A parsed command line."""

    command: Command
    context: InvocationContext
    log: bool = False
    debug: bool = False
    address: str | None = None
    timeout: float | None = None
    log_file: str | None = None
    config: str | None = None

    def settings_overrides(self) -> dict[str, Any]:
        """Return the settings given on the command line."""
        return {"address": self.address, "timeout": self.timeout, "log_file": self.log_file}


def token(value: str) -> str:
    """Argument type: a non-empty value without whitespace.

    Values are sent unquoted, the daemon splits the request on spaces.
    """
    if not value or any(c.isspace() for c in value):
        msg = f"invalid value {value!r}: must be a single word"
        raise argparse.ArgumentTypeError(msg)
    return value


def get_parser() -> argparse.ArgumentParser:
    """Return the regmsg argument parser."""
    parser = argparse.ArgumentParser(
        prog="regmsg",
        description="Query and control the regmsgd display daemon.",
        epilog="Arguments after '--' are passed to the daemon as is.",
        allow_abbrev=False,
    )
    parser.add_argument("-s", "--screen", help="Target screen identifier", type=token)
    parser.add_argument("-l", "--log", action="store_true", help="Enable terminal logging")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--address", help="Daemon endpoint (default: ipc:///var/run/regmsgd.sock)")
    parser.add_argument("--timeout", type=float, help="Seconds to wait for the daemon, 0 waits forever", metavar="seconds")
    parser.add_argument("--log-file", help="Log file path", metavar="filename").complete = shtab.FILE
    parser.add_argument("--config", help="Use a different configuration file", metavar="filename").complete = shtab.FILE
    shtab.add_argument_to(parser, ["--print-completion"])

    subparsers = parser.add_subparsers(dest="command", metavar="command", required=True)
    for kind, help_txt in COMMAND_HELP.items():
        sub = subparsers.add_parser(kind.value, help=help_txt, description=help_txt)
        if kind is CommandKind.SET_ROTATION:
            name, arg_help = PAYLOAD_METAVARS[kind]
            sub.add_argument(name, help=arg_help, choices=[r.value for r in Rotation])
        elif kind in PAYLOAD_COMMANDS:
            name, arg_help = PAYLOAD_METAVARS[kind]
            sub.add_argument(name, help=arg_help, type=token)
    return parser


def _split_trailing(argv: Sequence[str]) -> tuple[list[str], tuple[str, ...]]:
    """Split `argv` on the first "--"."""
    argv = list(argv)
    if ARGS_SEPARATOR in argv:
        i = argv.index(ARGS_SEPARATOR)
        return argv[:i], tuple(argv[i + 1 :])
    return argv, ()


def parse_invocation(argv: Sequence[str], parser: argparse.ArgumentParser | None = None) -> Invocation:
    """Parse the command line (without the program name).

    Exits with status 2 on invalid arguments.
    """
    parser = parser or get_parser()
    own_args, trailing = _split_trailing(argv)
    ns = parser.parse_args(own_args)

    kind = CommandKind(ns.command)
    payload = getattr(ns, PAYLOAD_METAVARS[kind][0]) if kind in PAYLOAD_COMMANDS else None

    return Invocation(
        command=Command(kind, payload),
        context=InvocationContext(screen=ns.screen, args=trailing),
        log=ns.log,
        debug=ns.debug,
        address=ns.address,
        timeout=ns.timeout,
        log_file=ns.log_file,
        config=ns.config,
    )
