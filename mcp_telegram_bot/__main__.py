"""Command line entry point: ``python -m mcp_telegram_bot`` or ``mcp-telegram-bot``."""
import argparse
import logging

from .config import LOG_LEVELS, TRANSPORTS, load_config
from .server import build_server, configure_logging

logger = logging.getLogger("mcp_telegram_bot")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mcp-telegram-bot",
        description="MCP server exposing Telegram Bot API operations as tools",
    )
    parser.add_argument("--transport", choices=TRANSPORTS, help="MCP transport (default: MCP_TRANSPORT or stdio)")
    parser.add_argument("--host", help="Bind address for sse/streamable-http (default: MCP_HOST or 127.0.0.1)")
    parser.add_argument("--port", type=int, help="Port for sse/streamable-http (default: MCP_PORT or 8000)")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (default: LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    # Startup errors, a missing token included, must reach stderr.
    configure_logging(args.log_level or "INFO")

    try:
        config = load_config().with_overrides(
            transport=args.transport,
            host=args.host,
            port=args.port,
            log_level=args.log_level,
        )
        configure_logging(config.log_level)
        logger.info(f"Starting MCP server with {config!r}")
        server = build_server(config)
        server.run()
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
