"""
HTTP client for the Telegram Bot API.

One POST per operation against ``{api_base}/bot<token>/<method>``; the JSON body
is the parameter mapping with absent (``None``) fields removed.
"""
import json
import logging
from typing import Any, Mapping

import httpx

from .envelope import decode_envelope
from .errors import ConfigurationError, ProtocolError, TelegramRequestError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.telegram.org"
DEFAULT_TIMEOUT = 30.0


def compact(value: Any) -> Any:
    """Drop ``None`` entries from mappings, recursing into nested mappings and lists."""
    if isinstance(value, Mapping):
        return {key: compact(item) for key, item in value.items() if item is not None}
    if isinstance(value, (list, tuple)):
        return [compact(item) for item in value]
    return value


class RequestClient:
    """Issues Bot API calls and unwraps their response envelopes."""

    def __init__(
        self,
        token: str | None,
        *,
        api_base: str = DEFAULT_API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ):
        if not token or not token.strip():
            raise ConfigurationError("Telegram bot token is required")

        self._token = token.strip()
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def base_url(self) -> str:
        return f"{self.api_base}/bot{self._token}"

    def _redact(self, text: str) -> str:
        return text.replace(self._token, "<token>")

    async def call(
        self,
        method: str,
        params: Mapping[str, Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Call ``method`` and return the decoded ``result``.

        Args:
            method: Bot API method name, e.g. ``sendMessage``
            params: Request parameters; ``None`` values are not sent
            timeout: Per-call timeout in seconds, defaults to the client timeout
        """
        body = compact(dict(params or {}))
        logger.debug(f"Calling {method} with fields {sorted(body)}")

        try:
            response = await self._http.post(
                f"{self.base_url}/{method}",
                json=body,
                timeout=timeout if timeout is not None else self.timeout,
            )
        except httpx.HTTPError as e:
            reason = self._redact(str(e)) or type(e).__name__
            logger.warning(f"Transport failure calling {method}: {reason}")
            raise TransportError(reason) from e

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ProtocolError(
                f"non-JSON response (HTTP {response.status_code}): {self._redact(response.text[:200])}"
            ) from e

        try:
            return decode_envelope(payload)
        except TelegramRequestError as e:
            logger.info(f"{method} failed: {e.reason}")
            raise

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()

    async def __aenter__(self) -> "RequestClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
