#!/usr/bin/env python3
"""
MCP Telegram Bot Server

This module wires the Telegram Bot API tools into an MCP server and runs it
over stdio, SSE or streamable HTTP.
"""
import asyncio
import logging
import sys

import anyio
import httpx
from mcp.server import FastMCP
from mcp.server.stdio import stdio_server

from .client import RequestClient
from .config import AppConfig, Transport
from .errors import TelegramRequestError
from .registry import ToolRegistry
from .services import TelegramBotService

logger = logging.getLogger(__name__)

SERVER_NAME = "telegram-bot"
SERVER_INSTRUCTIONS = (
    "Tools for a Telegram bot: send, forward, copy, edit and delete messages, pin and unpin them, "
    "send polls and contacts, read chat information and fetch pending updates. "
    "Every tool returns JSON; failures carry an 'error' field."
)


def configure_logging(level: str = "INFO") -> None:
    """Log to stderr; stdout is reserved for the stdio transport."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    # basicConfig does nothing on a second call.
    logging.getLogger().setLevel(level)
    # httpx logs full request URLs, which embed the bot token.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("mcp").setLevel(level)


class TelegramBotMCP(FastMCP):
    def __init__(self, config: AppConfig, service: TelegramBotService, registry: ToolRegistry):
        super().__init__(
            SERVER_NAME,
            instructions=SERVER_INSTRUCTIONS,
            host=config.host,
            port=config.port,
            log_level=config.log_level,
        )
        self.config = config
        self.service = service
        self.registry = registry
        self.bot_username: str | None = None
        registry.register_with(self._mcp_server)

    async def _check_bot(self) -> None:
        """Verify the token with getMe without blocking the transport."""
        try:
            me = await self.service.get_bot_info()
        except TelegramRequestError as e:
            logger.error(f"Bot token check failed: {e}")
            # Don't raise - tool calls will report the problem to the client
            return
        self.bot_username = me.get("username")
        logger.info(f"Bot authenticated: @{self.bot_username} ({me.get('first_name')})")

    async def _run_with_transport(self, transport: Transport):
        """Internal method to run with specific transport"""
        check_task = asyncio.create_task(self._check_bot())
        try:
            if transport == "stdio":
                async with stdio_server() as (read_stream, write_stream):
                    await asyncio.gather(
                        check_task,
                        self._mcp_server.run(
                            read_stream,
                            write_stream,
                            self._mcp_server.create_initialization_options(),
                        ),
                    )
            elif transport == "sse":
                await asyncio.gather(check_task, self.run_sse_async())
            else:
                await asyncio.gather(check_task, self.run_streamable_http_async())
        finally:
            if not check_task.done():
                check_task.cancel()
            logger.info("Closing Telegram HTTP client...")
            await self.service.aclose()

    def run(self, transport: Transport | None = None) -> None:
        """Run the server with the given transport, defaulting to the configured one."""
        selected = transport or self.config.transport
        logger.info(f"Starting MCP server ({selected})...")
        anyio.run(lambda: self._run_with_transport(selected))


def build_server(config: AppConfig, *, http_client: httpx.AsyncClient | None = None) -> TelegramBotMCP:
    """Compose client, service, registry and server from one configuration."""
    client = RequestClient(
        config.telegram_token,
        api_base=config.api_base,
        timeout=config.request_timeout,
        http_client=http_client,
    )
    service = TelegramBotService(client, long_poll_grace=config.long_poll_grace)
    registry = ToolRegistry.for_service(service)
    return TelegramBotMCP(config, service, registry)
