"""Client-side round trip for the regmsg CLI."""

from logging import Logger

from .config import Settings
from .encoder import encode_request
from .ipc import DaemonSession
from .models import Command, InvocationContext

__all__ = ["run_client"]


async def run_client(command: Command, context: InvocationContext, settings: Settings, logger: Logger) -> str:
    """Send `command` to the daemon and return its reply.

    Args:
        command: the command to run
        context: target screen & trailing arguments
        settings: daemon address and timeout
        logger: logger for the exchange
    """
    request = encode_request(command, context)
    logger.info("Sending command: %s", request)
    async with DaemonSession(settings.address, timeout=settings.timeout, logger=logger) as session:
        reply = await session.request(request)
    logger.info("Daemon replied: %s", reply)
    return reply
