"""Client configuration for cmsedit (API endpoint, timeout, logging)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping

DEFAULT_API_URL = "http://localhost:3000/api"
DEFAULT_TIMEOUT = 30.0
DEFAULT_LOG_LEVEL = "DEBUG"

ENV_API_URL = "CMSEDIT_API_URL"
ENV_TIMEOUT = "CMSEDIT_TIMEOUT"
ENV_TOKEN = "CMSEDIT_TOKEN"
ENV_LOG_LEVEL = "CMSEDIT_LOG_LEVEL"


class ConfigError(Exception):
    """Raised when the client configuration is invalid."""


@dataclass(frozen=True)
class ClientConfig:
    """Settings needed to reach the admin API."""

    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    token: str | None = None
    log_level: str = DEFAULT_LOG_LEVEL


def _parse_timeout(value: str | float) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid timeout: {value!r} (must be a number of seconds)") from None
    if timeout <= 0:
        raise ConfigError(f"Invalid timeout: {value!r} (must be positive)")
    return timeout


def load_client_config(environ: Mapping[str, str] | None = None, **overrides) -> ClientConfig:
    """Build the client configuration from environment variables.

    Args:
        environ: Environment to read (defaults to os.environ)
        **overrides: Values that win over the environment (None values are ignored)

    Raises:
        ConfigError: A value is malformed
    """
    env = os.environ if environ is None else environ
    config = ClientConfig(
        api_url=env.get(ENV_API_URL) or DEFAULT_API_URL,
        timeout=_parse_timeout(env.get(ENV_TIMEOUT) or DEFAULT_TIMEOUT),
        token=env.get(ENV_TOKEN) or None,
        log_level=(env.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper(),
    )
    changes = {k: v for k, v in overrides.items() if v is not None}
    if "timeout" in changes:
        changes["timeout"] = _parse_timeout(changes["timeout"])
    config = replace(config, **changes)
    if not config.api_url.startswith(("http://", "https://")):
        raise ConfigError(f"Invalid API URL: {config.api_url!r}")
    return config


def get_log_path(environ: Mapping[str, str] | None = None) -> Path:
    """Get the log file path under the XDG state directory."""
    env = os.environ if environ is None else environ
    xdg_state = env.get("XDG_STATE_HOME", str(Path.home() / ".local" / "state"))
    log_dir = Path(xdg_state) / "cmsedit"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / "cmsedit.log"


def setup_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Send logs to the XDG state file; the TUI owns the terminal."""
    logging.basicConfig(
        filename=str(get_log_path()),
        level=getattr(logging, level.upper(), logging.DEBUG),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
