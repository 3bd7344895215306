"""Commands, invocation context, exit codes and errors."""

from dataclasses import dataclass
from enum import Enum, IntEnum, StrEnum

__all__ = [
    "PAYLOAD_COMMANDS",
    "Command",
    "CommandKind",
    "ConfigError",
    "DecodingError",
    "ExitCode",
    "InvocationContext",
    "LoggingInitError",
    "RegmsgError",
    "ReplyTimeoutError",
    "Rotation",
    "SessionState",
    "TransportError",
]


class CommandKind(StrEnum):
    """Daemon commands, the value is the keyword sent on the wire."""

    LIST_MODES = "listModes"
    LIST_OUTPUTS = "listOutputs"
    CURRENT_MODE = "currentMode"
    CURRENT_OUTPUT = "currentOutput"
    CURRENT_RESOLUTION = "currentResolution"
    CURRENT_ROTATION = "currentRotation"
    CURRENT_REFRESH = "currentRefresh"
    CURRENT_BACKEND = "currentBackend"
    SET_MODE = "setMode"
    SET_OUTPUT = "setOutput"
    SET_ROTATION = "setRotation"
    GET_SCREENSHOT = "getScreenshot"
    MAP_TOUCH_SCREEN = "mapTouchScreen"
    MIN_TO_MAX_RESOLUTION = "minToMaxResolution"


# Commands carrying exactly one string payload
PAYLOAD_COMMANDS = frozenset({CommandKind.SET_MODE, CommandKind.SET_OUTPUT, CommandKind.SET_ROTATION})


class Rotation(StrEnum):
    """Accepted screen rotations, in degrees."""

    NORMAL = "0"
    RIGHT = "90"
    INVERTED = "180"
    LEFT = "270"


@dataclass(frozen=True)
class Command:
    """A daemon command and its optional payload.

    Payload-carrying kinds (see `PAYLOAD_COMMANDS`) require a payload, the others must not get one.
    """

    kind: CommandKind
    payload: str | None = None

    def __post_init__(self) -> None:
        if self.kind in PAYLOAD_COMMANDS:
            if self.payload is None:
                msg = f"{self.kind} requires a value"
                raise ValueError(msg)
            if self.kind is CommandKind.SET_ROTATION and self.payload not in {r.value for r in Rotation}:
                msg = f"invalid rotation {self.payload!r}, expected one of: {', '.join(Rotation)}"
                raise ValueError(msg)
        elif self.payload is not None:
            msg = f"{self.kind} takes no value"
            raise ValueError(msg)


@dataclass(frozen=True)
class InvocationContext:
    """Per-run modifiers attached to a command."""

    screen: str | None = None
    args: tuple[str, ...] = ()


class SessionState(Enum):
    """Lifecycle of a daemon session."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    AWAITING_REPLY = "awaiting reply"
    REPLIED = "replied"
    CLOSED = "closed"


class ExitCode(IntEnum):
    """Process exit codes for the regmsg client."""

    SUCCESS = 0
    FAILURE = 1  # Unexpected error
    USAGE_ERROR = 2  # Rejected by the argument parser
    TRANSPORT_ERROR = 3  # Cannot reach the daemon
    DECODING_ERROR = 4  # Reply is not valid UTF-8
    TIMEOUT_ERROR = 5  # Daemon did not answer in time
    LOGGING_ERROR = 6  # Log file could not be opened
    CONFIG_ERROR = 7  # Invalid configuration file or value
    INTERRUPTED = 130


class RegmsgError(Exception):
    """Base class for errors reported to the operator."""

    exit_code: ExitCode = ExitCode.FAILURE


class TransportError(RegmsgError):
    """Connect, send or receive failure on the daemon socket."""

    exit_code = ExitCode.TRANSPORT_ERROR


class ReplyTimeoutError(TransportError):
    """The daemon did not reply in time."""

    exit_code = ExitCode.TIMEOUT_ERROR


class DecodingError(RegmsgError):
    """The daemon reply is not valid UTF-8."""

    exit_code = ExitCode.DECODING_ERROR


class LoggingInitError(RegmsgError):
    """The log sinks could not be installed."""

    exit_code = ExitCode.LOGGING_ERROR


class ConfigError(RegmsgError):
    """Unreadable configuration."""

    exit_code = ExitCode.CONFIG_ERROR
