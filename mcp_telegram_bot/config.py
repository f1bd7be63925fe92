"""Configuration loaded from the environment (and an optional ``.env`` file)."""
import os
from dataclasses import dataclass, replace
from typing import Literal, Mapping, get_args

from dotenv import load_dotenv

from .client import DEFAULT_API_BASE, DEFAULT_TIMEOUT
from .errors import ConfigurationError
from .services import DEFAULT_LONG_POLL_GRACE

Transport = Literal["stdio", "sse", "streamable-http"]
TRANSPORTS: tuple[str, ...] = get_args(Transport)
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class AppConfig:
    telegram_token: str
    api_base: str = DEFAULT_API_BASE
    request_timeout: float = DEFAULT_TIMEOUT
    long_poll_grace: float = DEFAULT_LONG_POLL_GRACE
    transport: Transport = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"

    def __repr__(self) -> str:
        # Keep the token out of logs and tracebacks.
        return (
            f"AppConfig(api_base={self.api_base!r}, transport={self.transport!r}, "
            f"host={self.host!r}, port={self.port}, log_level={self.log_level!r})"
        )

    def with_overrides(self, **overrides) -> "AppConfig":
        """Return a copy with every non-None override applied and re-validated."""
        values = {key: value for key, value in overrides.items() if value is not None}
        updated = replace(self, **values)
        _validate_choices(updated.transport, updated.log_level)
        return updated


def _validate_choices(transport: str, log_level: str) -> None:
    if transport not in TRANSPORTS:
        raise ConfigurationError(f"Unsupported transport {transport!r}, expected one of {', '.join(TRANSPORTS)}")
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(f"Unsupported log level {log_level!r}, expected one of {', '.join(LOG_LEVELS)}")


def _number(env: Mapping[str, str], name: str, default: float, kind: type = float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = kind(raw.strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def load_config(env: Mapping[str, str] | None = None, *, dotenv: bool = True) -> AppConfig:
    """Build the configuration from ``env`` (defaults to ``os.environ``).

    When reading the process environment a ``.env`` file in the working
    directory is loaded first; existing variables are not overridden.
    """
    if env is None:
        if dotenv:
            load_dotenv()
        env = os.environ

    token = (env.get("TELEGRAM_BOT_TOKEN") or "").strip()
    if not token:
        raise ConfigurationError("TELEGRAM_BOT_TOKEN environment variable is required")

    transport = (env.get("MCP_TRANSPORT") or "stdio").strip().lower()
    log_level = (env.get("LOG_LEVEL") or "INFO").strip().upper()
    _validate_choices(transport, log_level)

    return AppConfig(
        telegram_token=token,
        api_base=(env.get("TELEGRAM_API_BASE") or DEFAULT_API_BASE).strip().rstrip("/"),
        request_timeout=_number(env, "TELEGRAM_REQUEST_TIMEOUT", DEFAULT_TIMEOUT),
        long_poll_grace=_number(env, "TELEGRAM_LONG_POLL_GRACE", DEFAULT_LONG_POLL_GRACE),
        transport=transport,
        host=(env.get("MCP_HOST") or "127.0.0.1").strip(),
        port=int(_number(env, "MCP_PORT", 8000, int)),
        log_level=log_level,
    )
