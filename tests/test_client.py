from unittest.mock import Mock

import pytest

from regmsg.client import run_client
from regmsg.config import Settings
from regmsg.models import Command, CommandKind, InvocationContext


@pytest.mark.asyncio
async def test_run_client(ipc_address, zmq_socket):
    zmq_socket.recv_multipart.return_value = [b"done"]
    logger = Mock()

    reply = await run_client(
        Command(CommandKind.SET_OUTPUT, "2560x1440@144"),
        InvocationContext(screen="DP-1"),
        Settings(address=ipc_address, timeout=1),
        logger,
    )

    assert reply == "done"
    assert zmq_socket.sent() == [b"setOutput 2560x1440@144 --screen DP-1"]
    logger.info.assert_any_call("Sending command: %s", "setOutput 2560x1440@144 --screen DP-1")
    zmq_socket.close.assert_called_once()
