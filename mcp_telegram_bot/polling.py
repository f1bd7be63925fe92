"""
Long-polling helper around ``getUpdates``.

The poller keeps the offset cursor in memory: after each batch it moves to the
highest ``update_id`` seen plus one, which acknowledges the batch to Telegram.
Transport failures are logged and retried after a fixed delay; API errors
(bad token, webhook still set, ...) propagate to the caller.
"""
import asyncio
import logging
from typing import Any, AsyncIterator

from .errors import TransportError
from .params import GetUpdatesParams
from .services import TelegramBotService

logger = logging.getLogger(__name__)


class UpdatePoller:
    def __init__(
        self,
        service: TelegramBotService,
        *,
        timeout: int = 30,
        limit: int = 100,
        allowed_updates: list[str] | None = None,
        idle_delay: float = 1.0,
        error_delay: float = 5.0,
        offset: int | None = None,
    ):
        self.service = service
        self.timeout = timeout
        self.limit = limit
        self.allowed_updates = allowed_updates
        self.idle_delay = idle_delay
        self.error_delay = error_delay
        self.offset = offset

    async def poll_once(self) -> list[dict[str, Any]]:
        """Fetch one batch and advance the offset past it."""
        updates = await self.service.get_updates(
            GetUpdatesParams(
                offset=self.offset,
                limit=self.limit,
                timeout=self.timeout,
                allowed_updates=self.allowed_updates,
            )
        )
        if updates:
            self.offset = max(update["update_id"] for update in updates) + 1
            logger.debug(f"Received {len(updates)} updates, next offset {self.offset}")
        return updates

    async def updates(self) -> AsyncIterator[dict[str, Any]]:
        """Yield updates forever, one at a time."""
        while True:
            try:
                batch = await self.poll_once()
            except TransportError as e:
                logger.warning(f"Polling failed, retrying in {self.error_delay} seconds: {e}")
                await asyncio.sleep(self.error_delay)
                continue

            for update in batch:
                yield update

            if not batch and self.idle_delay:
                await asyncio.sleep(self.idle_delay)
