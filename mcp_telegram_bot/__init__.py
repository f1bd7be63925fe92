"""
MCP Telegram Bot

A Model Context Protocol server that exposes the Telegram Bot HTTP API as tools.
Every tool maps to one Bot API method and returns the result as JSON text.

Features:
- Send, forward, copy, edit and delete messages
- Pin and unpin messages in a chat
- Send polls and contacts
- Get chat information and pending updates
- Typed, validated parameters for every operation
"""

from .client import RequestClient
from .config import AppConfig, load_config
from .errors import (
    ApiError,
    AuthError,
    ConfigurationError,
    ProtocolError,
    RateLimited,
    TelegramMCPError,
    TelegramRequestError,
    TransportError,
    ValidationError,
)
from .polling import UpdatePoller
from .registry import ToolRegistry
from .services import TelegramBotService

__version__ = "0.1.0"
__author__ = "MCP Telegram Contributors"

__all__ = [
    "ApiError",
    "AppConfig",
    "AuthError",
    "ConfigurationError",
    "ProtocolError",
    "RateLimited",
    "RequestClient",
    "TelegramBotService",
    "TelegramMCPError",
    "TelegramRequestError",
    "ToolRegistry",
    "TransportError",
    "UpdatePoller",
    "ValidationError",
    "load_config",
]
