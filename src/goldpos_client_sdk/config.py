from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, TypeVar

from dotenv import load_dotenv

N = TypeVar("N", int, float)

DEFAULT_TELEMETRY_FILE = Path("artifacts") / "telemetry" / "goldpos.jsonl"
_TRUTHY = {"1", "true", "yes", "on"}


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 15.0
    retries: int = 2
    retry_backoff_seconds: float = 0.3
    max_connections: int = 10
    verify_ssl: bool = True
    branch_id: str | None = None
    max_line_quantity: int | None = None
    telemetry_enabled: bool = False
    telemetry_file: Path = DEFAULT_TELEMETRY_FILE

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()


def env_text(name: str) -> str | None:
    """Stripped value of ``name``; blank counts as unset."""
    value = (os.getenv(name) or "").strip()
    return value or None


def env_flag(name: str, default: bool) -> bool:
    value = env_text(name)
    if value is None:
        return default
    return value.lower() in _TRUTHY


def _env_number(
    name: str,
    default: N | None,
    parse: Callable[[str], N],
    *,
    above: N | None = None,
    at_least: N | None = None,
) -> N | None:
    raw = env_text(name)
    if raw is None:
        value = default
    else:
        try:
            value = parse(raw)
        except ValueError as exc:
            kind = "an integer" if parse is int else "a number"
            raise ConfigError(f"Invalid {name}: expected {kind}, got {raw!r}") from exc
    if value is None:
        return None
    if above is not None and not value > above:
        raise ConfigError(f"Invalid {name}: expected > {above}, got {value}")
    if at_least is not None and not value >= at_least:
        raise ConfigError(f"Invalid {name}: expected >= {at_least}, got {value}")
    return value


def _base_url(env_key: str) -> str:
    url = env_text(f"GOLDPOS_API_BASE_URL_{env_key}") or env_text("GOLDPOS_API_BASE_URL")
    if not url:
        raise ConfigError(
            "Missing required config values: GOLDPOS_API_BASE_URL (or GOLDPOS_API_BASE_URL_<ENV>)"
        )
    return url.rstrip("/")


def load_config(env_file: str | None = None) -> ClientConfig:
    """Build the till's client config from ``GOLDPOS_*`` variables.

    An optional ``.env`` file is loaded first; variables already set in the
    process win over it. ``GOLDPOS_API_BASE_URL_<ENV>`` (for the env named by
    ``GOLDPOS_ENV``) takes precedence over ``GOLDPOS_API_BASE_URL``.
    """
    load_dotenv(env_file)
    env_name = env_text("GOLDPOS_ENV") or "dev"

    timeout = _env_number("GOLDPOS_TIMEOUT_SECONDS", 10.0, float, above=0.0)
    connect_timeout = _env_number("GOLDPOS_CONNECT_TIMEOUT_SECONDS", min(timeout, 5.0), float, above=0.0)
    read_timeout = _env_number("GOLDPOS_READ_TIMEOUT_SECONDS", max(timeout, connect_timeout), float, above=0.0)

    return ClientConfig(
        env_name=env_name,
        api_base_url=_base_url(env_name.upper()),
        connect_timeout_seconds=connect_timeout,
        read_timeout_seconds=read_timeout,
        retries=_env_number("GOLDPOS_RETRIES", 2, int, at_least=0),
        retry_backoff_seconds=_env_number("GOLDPOS_RETRY_BACKOFF_SECONDS", 0.3, float, at_least=0.0),
        max_connections=_env_number("GOLDPOS_MAX_CONNECTIONS", 10, int, at_least=1),
        verify_ssl=env_flag("GOLDPOS_VERIFY_SSL", True),
        branch_id=env_text("GOLDPOS_BRANCH_ID"),
        max_line_quantity=_env_number("GOLDPOS_MAX_LINE_QUANTITY", None, int, at_least=1),
        telemetry_enabled=env_flag("GOLDPOS_TELEMETRY_ENABLED", False),
        telemetry_file=Path(env_text("GOLDPOS_TELEMETRY_FILE") or DEFAULT_TELEMETRY_FILE),
    )
