"""Configuration loading for the checkfor front-ends."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_HTTP_HOST = "127.0.0.1"
DEFAULT_HTTP_PORT = 18170


class ConfigError(RuntimeError):
    """Raised when configuration is present but invalid."""


@dataclass(frozen=True)
class AppConfig:
    log_level: int
    http_host: str
    http_port: int
    service_token: str | None
    update_url: str | None


def _read_dotenv_value(dotenv_path: Path, key: str) -> str | None:
    """Read a single key from a .env file without mutating the environment."""
    if not dotenv_path.is_file():
        return None
    try:
        content = dotenv_path.read_text(encoding="utf-8")
    except OSError:
        return None

    for line in content.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if stripped.startswith("export "):
            stripped = stripped[len("export ") :].strip()
        if "=" not in stripped:
            continue
        name, value = stripped.split("=", 1)
        name = name.strip()
        if name != key:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]
        return value or None
    return None


def _read_setting(dotenv_path: Path, key: str) -> str | None:
    raw_value = os.environ.get(key)
    if raw_value is None:
        raw_value = _read_dotenv_value(dotenv_path, key)
    if raw_value is None:
        return None
    raw_value = raw_value.strip()
    return raw_value or None


def _read_log_level(raw_value: str | None, *, key: str) -> int:
    name = (raw_value or DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ConfigError(f"{key} must be a logging level name.")
    return level


def _read_port(raw_value: str | None, *, key: str) -> int:
    if raw_value is None:
        return DEFAULT_HTTP_PORT
    try:
        port = int(raw_value)
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer.") from exc
    if not 0 < port < 65536:
        raise ConfigError(f"{key} must be between 1 and 65535.")
    return port


def load_config() -> AppConfig:
    """Load configuration from the environment, falling back to ./.env."""
    dotenv_path = Path.cwd() / ".env"

    log_level_key = "CHECKFOR_LOG_LEVEL"
    log_level = _read_log_level(
        _read_setting(dotenv_path, log_level_key), key=log_level_key
    )

    port_key = "CHECKFOR_HTTP_PORT"
    http_port = _read_port(_read_setting(dotenv_path, port_key), key=port_key)

    return AppConfig(
        log_level=log_level,
        http_host=_read_setting(dotenv_path, "CHECKFOR_HTTP_HOST")
        or DEFAULT_HTTP_HOST,
        http_port=http_port,
        service_token=_read_setting(dotenv_path, "CHECKFOR_SERVICE_TOKEN"),
        update_url=_read_setting(dotenv_path, "CHECKFOR_UPDATE_URL"),
    )
