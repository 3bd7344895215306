"""Talk to the regmsgd daemon over a ZeroMQ request/reply socket."""

__all__ = [
    "DaemonSession",
    "decode_reply",
    "send_request",
]

import asyncio
from collections.abc import Awaitable, Sequence
from logging import Logger
from pathlib import Path
from types import TracebackType
from typing import NoReturn, Self, TypeVar

import zmq
import zmq.asyncio

from .constants import IPC_SCHEME
from .logging_setup import get_logger
from .models import DecodingError, ReplyTimeoutError, SessionState, TransportError

T = TypeVar("T")


def decode_reply(frames: Sequence[bytes]) -> str:
    """Return the first frame of a reply as text.

    An empty envelope gives an empty string.

    Raises:
        DecodingError: the first frame is not valid UTF-8
    """
    if not frames:
        return ""
    try:
        return bytes(frames[0]).decode("utf-8")
    except UnicodeDecodeError as e:
        msg = f"invalid UTF-8 in daemon reply: {e}"
        raise DecodingError(msg) from e


def _ipc_path(address: str) -> Path | None:
    """Return the socket file of an `ipc://` address (None for other transports and abstract sockets)."""
    if not address.startswith(IPC_SCHEME):
        return None
    path = address[len(IPC_SCHEME) :]
    if not path or path.startswith("@"):
        return None
    return Path(path)


class DaemonSession:
    """A single request/reply exchange with the daemon.

    Usage::

        async with DaemonSession(address, timeout=5) as session:
            reply = await session.request("currentMode")

    Every failure closes the session, there is no reconnection.
    """

    def __init__(
        self,
        address: str,
        timeout: float | None = None,
        logger: Logger | None = None,
        context: zmq.asyncio.Context | None = None,
    ) -> None:
        """Prepare the session, nothing is opened yet.

        Args:
            address: ZeroMQ endpoint of the daemon (eg. "ipc:///var/run/regmsgd.sock")
            timeout: seconds to wait on send & receive, None waits forever
            logger: logger to use, defaults to the "ipc" logger
            context: ZeroMQ context to create the socket from
        """
        self.address = address
        self.timeout = timeout
        self.log = logger or get_logger("ipc")
        self._context = context
        self._socket: zmq.asyncio.Socket | None = None
        self.state = SessionState.DISCONNECTED

    def _expect(self, *states: SessionState) -> None:
        if self.state not in states:
            msg = f"session is {self.state.value}, expected {' or '.join(s.value for s in states)}"
            raise TransportError(msg)

    def _fail(self, error: TransportError, cause: BaseException | None = None) -> NoReturn:
        self.log.debug("closing session: %s", error)
        self.close()
        raise error from cause

    async def _bounded(self, operation: Awaitable[T]) -> T:
        return await asyncio.wait_for(operation, timeout=self.timeout)

    def connect(self) -> None:
        """Open the socket and connect it to the daemon.

        Raises:
            TransportError: the endpoint doesn't exist or is invalid
        """
        self._expect(SessionState.DISCONNECTED)
        self.state = SessionState.CONNECTING
        self.log.debug("connecting to %s", self.address)

        socket_path = _ipc_path(self.address)
        if socket_path is not None and not socket_path.exists():
            self._fail(TransportError(f"could not connect to {self.address}: {socket_path} not found, is regmsgd running ?"))

        context = self._context or zmq.asyncio.Context.instance()
        try:
            self._socket = context.socket(zmq.REQ)
            self._socket.setsockopt(zmq.LINGER, 0)
            # queue messages only on completed connections, so an absent daemon blocks the send
            self._socket.setsockopt(zmq.IMMEDIATE, 1)
            self._socket.connect(self.address)
        except zmq.ZMQError as e:
            self._fail(TransportError(f"could not connect to {self.address}: {e}"), e)
        self.state = SessionState.CONNECTED

    async def send(self, request: str) -> None:
        """Send `request` as a single frame.

        Raises:
            TransportError: the daemon can't be reached
        """
        self._expect(SessionState.CONNECTED)
        assert self._socket is not None
        self.log.debug("sending %r", request)
        try:
            await self._bounded(self._socket.send(request.encode("utf-8")))
        except TimeoutError as e:
            self._fail(TransportError(f"daemon not reachable at {self.address} (waited {self.timeout}s)"), e)
        except zmq.ZMQError as e:
            self._fail(TransportError(f"failed to send request: {e}"), e)
        self.state = SessionState.AWAITING_REPLY

    async def receive(self) -> list[bytes]:
        """Wait for the reply envelope.

        Raises:
            ReplyTimeoutError: no reply in time
            TransportError: socket failure
        """
        self._expect(SessionState.AWAITING_REPLY)
        assert self._socket is not None
        try:
            frames = await self._bounded(self._socket.recv_multipart())
        except TimeoutError as e:
            self._fail(ReplyTimeoutError(f"no reply from {self.address} after {self.timeout}s"), e)
        except zmq.ZMQError as e:
            self._fail(TransportError(f"failed to receive reply: {e}"), e)
        self.state = SessionState.REPLIED
        self.log.debug("received %d frame(s)", len(frames))
        return frames

    decode = staticmethod(decode_reply)

    async def request(self, request: str) -> str:
        """Send `request` and return the decoded reply."""
        if self.state is SessionState.DISCONNECTED:
            self.connect()
        await self.send(request)
        frames = await self.receive()
        try:
            reply = self.decode(frames)
        except DecodingError as e:
            self.log.debug("closing session: %s", e)
            self.close()
            raise
        self.log.debug("reply: %r", reply)
        return reply

    def close(self) -> None:
        """Close the socket, can be called several times."""
        if self._socket is not None:
            self._socket.close(linger=0)
            self._socket = None
        self.state = SessionState.CLOSED

    async def __aenter__(self) -> Self:
        self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


async def send_request(request: str, address: str, timeout: float | None = None, logger: Logger | None = None) -> str:
    """Run one request/reply round trip and return the reply text."""
    async with DaemonSession(address, timeout=timeout, logger=logger) as session:
        return await session.request(request)
