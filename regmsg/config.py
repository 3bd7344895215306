"""Settings resolution.

Values come from, in increasing priority:
- built-in defaults (see `constants`)
- the `[regmsg]` table of a TOML configuration file
- `REGMSG_*` environment variables
- command line flags
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .constants import (
    CONFIG_SECTION,
    DAEMON_ADDRESS,
    DEFAULT_TIMEOUT,
    ENV_ADDRESS,
    ENV_CONFIG,
    ENV_LOG_FILE,
    ENV_TIMEOUT,
    LOG_FILE,
    SYSTEM_CONFIG_FILE,
    USER_CONFIG_DIR,
)
from .models import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = ["Settings", "default_config_files", "load_settings", "parse_timeout"]


@dataclass(frozen=True)
class Settings:
    """Resolved client settings.

    A `timeout` of None waits for the daemon forever.
    """

    address: str = DAEMON_ADDRESS
    timeout: float | None = DEFAULT_TIMEOUT
    log_file: str = LOG_FILE


def parse_timeout(value: Any) -> float | None:  # noqa: ANN401
    """Convert a timeout value, zero or negative disables it."""
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        msg = f"invalid timeout: {value!r}"
        raise ConfigError(msg) from e
    return timeout if timeout > 0 else None


def default_config_files(environ: Mapping[str, str] | None = None) -> list[Path]:
    """Return the configuration files to look for, by priority."""
    environ = os.environ if environ is None else environ
    if environ.get(ENV_CONFIG):
        return [Path(environ[ENV_CONFIG]).expanduser()]
    xdg_config_home = Path(environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
    return [xdg_config_home / USER_CONFIG_DIR / "config.toml", SYSTEM_CONFIG_FILE]


def _load_config_file(fname: Path) -> dict[str, Any]:
    """Return the `[regmsg]` table of a TOML file."""
    try:
        with fname.open("rb") as f:
            config = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"problem reading {fname}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"cannot read {fname}: {e.strerror}"
        raise ConfigError(msg) from e
    section = config.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        msg = f"[{CONFIG_SECTION}] must be a table in {fname}"
        raise ConfigError(msg)
    return section


def _apply(settings: Settings, values: Mapping[str, Any], origin: str) -> Settings:
    """Return `settings` updated with the known keys of `values`."""
    changes: dict[str, Any] = {}
    for key, value in values.items():
        if value is None:
            continue
        if key == "timeout":
            changes["timeout"] = parse_timeout(value)
        elif key in {"address", "log_file"}:
            if not isinstance(value, str) or not value:
                msg = f"{key} must be a non-empty string ({origin})"
                raise ConfigError(msg)
            changes[key] = value
        else:
            msg = f"unknown setting {key!r} ({origin})"
            raise ConfigError(msg)
    return replace(settings, **changes)


def load_settings(
    overrides: Mapping[str, Any] | None = None,
    config_file: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Resolve the client settings.

    Args:
        overrides: values given on the command line, None values are ignored
        config_file: explicit configuration file, must exist
        environ: environment to read `REGMSG_*` variables from (defaults to os.environ)

    Raises:
        ConfigError: unreadable configuration file or invalid value
    """
    environ = os.environ if environ is None else environ
    settings = Settings()

    if config_file:
        settings = _apply(settings, _load_config_file(Path(os.path.expandvars(config_file)).expanduser()), str(config_file))
    else:
        for candidate in default_config_files(environ):
            if candidate.exists():
                settings = _apply(settings, _load_config_file(candidate), str(candidate))
                break

    from_env = {
        "address": environ.get(ENV_ADDRESS) or None,
        "timeout": environ.get(ENV_TIMEOUT) or None,
        "log_file": environ.get(ENV_LOG_FILE) or None,
    }
    settings = _apply(settings, from_env, "environment")
    return _apply(settings, overrides or {}, "command line")
