#!/usr/bin/env python3
"""
Print incoming updates for the configured bot until interrupted.

Useful for finding chat ids to pass to the MCP tools: send the bot a message
and the chat id shows up here.
"""

import asyncio
import json
import sys

from mcp_telegram_bot.config import load_config
from mcp_telegram_bot.polling import UpdatePoller
from mcp_telegram_bot.server import configure_logging
from mcp_telegram_bot.services import TelegramBotService


async def main():
    config = load_config()
    configure_logging(config.log_level)
    service = TelegramBotService.from_token(
        config.telegram_token,
        api_base=config.api_base,
        timeout=config.request_timeout,
        long_poll_grace=config.long_poll_grace,
    )
    poller = UpdatePoller(service, timeout=30)

    try:
        async for update in poller.updates():
            print(json.dumps(update, indent=2, ensure_ascii=False))
            sys.stdout.flush()
    finally:
        await service.aclose()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
