"""Build the request line sent to the daemon."""

from collections.abc import Iterable

from .models import Command, InvocationContext

__all__ = ["encode_request"]

SCREEN_FLAG = "--screen"


def _format_parts(command: Command, context: InvocationContext) -> Iterable[str]:
    """Yield the request tokens in wire order."""
    yield command.kind.value
    if command.payload is not None:
        yield command.payload
    if context.screen is not None:
        yield SCREEN_FLAG
        yield context.screen
    yield from context.args


def encode_request(command: Command, context: InvocationContext | None = None) -> str:
    """Return the request line for `command`.

    The keyword comes first, then the payload, then `--screen <id>`, then the trailing arguments.
    Values are sent verbatim, no quoting is applied.

    Args:
        command: the command to send
        context: optional screen & trailing arguments
    """
    return " ".join(_format_parts(command, context or InvocationContext()))
