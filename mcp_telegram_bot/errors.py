"""
Error taxonomy for the Telegram Bot MCP server.

Request failures all render as "Telegram API request failed: <reason>" so that
tool callers see one message shape whether the failure happened locally
(decoding, transport) or remotely (Telegram rejected the call).
"""
from typing import Any

REQUEST_FAILED_PREFIX = "Telegram API request failed: "


class TelegramMCPError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(TelegramMCPError):
    """Missing or invalid configuration. Fatal at startup."""


class ValidationError(TelegramMCPError):
    """Arguments for an operation or tool are invalid."""


class TelegramRequestError(TelegramMCPError):
    """A Bot API request did not produce a usable result."""

    retryable = False

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"{REQUEST_FAILED_PREFIX}{reason}")


class TransportError(TelegramRequestError):
    """No response was received (connection failure, timeout)."""

    retryable = True


class ProtocolError(TelegramRequestError):
    """The response did not follow the Bot API envelope contract."""


class ApiError(TelegramRequestError):
    """Telegram answered with ``ok: false``."""

    def __init__(
        self,
        description: str,
        error_code: int | None = None,
        parameters: dict[str, Any] | None = None,
    ):
        self.description = description
        self.error_code = error_code
        self.parameters = dict(parameters or {})
        super().__init__(description)

    @property
    def retry_after(self) -> int | None:
        return self.parameters.get("retry_after")

    @property
    def migrate_to_chat_id(self) -> int | None:
        return self.parameters.get("migrate_to_chat_id")


class AuthError(ApiError):
    """The bot token was rejected (401/403)."""


class RateLimited(ApiError):
    """Flood control (429). Safe to retry after ``retry_after`` seconds."""

    retryable = True


class GenericApiError(ApiError):
    """Any other ``ok: false`` response."""
