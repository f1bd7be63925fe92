#!/usr/bin/env python3
"""
Helper script to check a Telegram bot token before wiring it into the MCP server.
This script reads TELEGRAM_BOT_TOKEN from .env, calls getMe and prints the bot
identity together with its webhook status.
"""

import asyncio

from dotenv import load_dotenv

from mcp_telegram_bot.config import load_config
from mcp_telegram_bot.errors import TelegramRequestError
from mcp_telegram_bot.services import TelegramBotService

load_dotenv()


async def main():
    config = load_config(dotenv=False)
    service = TelegramBotService.from_token(
        config.telegram_token,
        api_base=config.api_base,
        timeout=config.request_timeout,
    )

    print("\nChecking Telegram bot token...")
    try:
        me = await service.get_bot_info()
        webhook = await service.updates.get_webhook_info()
    except TelegramRequestError as e:
        print(f"\nToken check failed: {e}")
        raise SystemExit(1)
    finally:
        await service.aclose()

    print(f"\nBot: @{me.get('username')} ({me.get('first_name')}), id {me['id']}")
    print(f"Can join groups: {me.get('can_join_groups')}")
    print(f"Can read all group messages: {me.get('can_read_all_group_messages')}")
    if webhook.get("url"):
        print(f"\nA webhook is set ({webhook['url']}); get_updates will fail until it is deleted.")
    else:
        print("\nNo webhook set, get_updates is available.")


if __name__ == "__main__":
    asyncio.run(main())
