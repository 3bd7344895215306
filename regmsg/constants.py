"""Shared constants for regmsg."""

from pathlib import Path

__all__ = [
    "CONFIG_SECTION",
    "DAEMON_ADDRESS",
    "DEFAULT_TIMEOUT",
    "ENV_ADDRESS",
    "ENV_CONFIG",
    "ENV_LOG_FILE",
    "ENV_TIMEOUT",
    "IPC_SCHEME",
    "LOG_FILE",
    "SYSTEM_CONFIG_FILE",
    "USER_CONFIG_DIR",
]

IPC_SCHEME = "ipc://"

DAEMON_ADDRESS = f"{IPC_SCHEME}/var/run/regmsgd.sock"
LOG_FILE = "/var/log/regmsg.log"

# Seconds to wait for the daemon, on send and on receive
DEFAULT_TIMEOUT = 10.0

USER_CONFIG_DIR = "regmsg"
SYSTEM_CONFIG_FILE = Path("/etc/regmsg.toml")
CONFIG_SECTION = "regmsg"

ENV_CONFIG = "REGMSG_CONFIG"
ENV_ADDRESS = "REGMSG_ADDRESS"
ENV_TIMEOUT = "REGMSG_TIMEOUT"
ENV_LOG_FILE = "REGMSG_LOG_FILE"
