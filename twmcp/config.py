"""Teamwork MCP configuration loaded from environment variables."""
import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import urlparse

DEFAULT_PORT = 8080
DEFAULT_LOG_LEVEL = "info"

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_config_cache = None


class ConfigError(ValueError):
    """One or more environment variables are missing or invalid."""

    def __init__(self, problems):
        self.problems = list(problems)
        super().__init__("\n".join(self.problems))


@dataclass
class Config:
    port: int
    log_level: str
    teamwork_server: str
    teamwork_api_token: str
    agentic_name: str = ""
    agentic_dsn: str = ""

    @property
    def logging_level(self) -> int:
        return LOG_LEVELS[self.log_level]


def parse_config(environ: Optional[Dict[str, str]] = None) -> Config:
    """Build a Config from ``environ``, reporting every problem at once."""
    environ = os.environ if environ is None else environ
    problems = []

    port = DEFAULT_PORT
    port_str = environ.get("PORT", "").strip()
    if port_str:
        try:
            port = int(port_str)
            if not 0 < port < 65536:
                raise ValueError(port_str)
        except ValueError:
            problems.append(f"failed to parse PORT: invalid port {port_str!r}")

    log_level = environ.get("LOG_LEVEL", "").strip().lower() or DEFAULT_LOG_LEVEL
    if log_level not in LOG_LEVELS:
        problems.append(f"failed to parse LOG_LEVEL: unknown level {log_level!r}")

    server = environ.get("TEAMWORK_SERVER", "").strip().rstrip("/")
    if not server:
        problems.append("TEAMWORK_SERVER is required")
    else:
        parsed = urlparse(server)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            problems.append(f"TEAMWORK_SERVER must be an absolute http(s) URL, got {server!r}")

    token = environ.get("TEAMWORK_API_TOKEN", "").strip()
    if not token:
        problems.append("TEAMWORK_API_TOKEN is required")

    if problems:
        raise ConfigError(problems)

    return Config(
        port=port,
        log_level=log_level,
        teamwork_server=server,
        teamwork_api_token=token,
        agentic_name=environ.get("AGENTIC_NAME", ""),
        agentic_dsn=environ.get("AGENTIC_DSN", ""),
    )


def get_config() -> Config:
    """Load config from the environment with caching."""
    global _config_cache
    if _config_cache is None:
        _config_cache = parse_config()
    return _config_cache


def clear_config_cache():
    """Invalidate the cached config, forcing a re-read on next access."""
    global _config_cache
    _config_cache = None
