"""
Tool registry: indexes tool descriptors by name, dispatches calls and binds
everything to an MCP server.

A call never raises: unknown tools, invalid arguments and Telegram failures
all come back as a ToolResult whose JSON carries ``error`` and ``timestamp``.
"""
import enum
import logging
from typing import Any, Iterable

import mcp.types as types
import pydantic
from mcp.server.lowlevel import Server

from .errors import ConfigurationError
from .services import TelegramBotService
from .tools import BotTools, ToolDescriptor, ToolResult

logger = logging.getLogger(__name__)


class RegistryState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    POPULATED = "populated"
    REGISTERED = "registered"


def _describe_validation_error(error: pydantic.ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        problems.append(f"{location}: {item['msg']}")
    return "; ".join(problems)


class ToolRegistry:
    def __init__(self, descriptors: Iterable[ToolDescriptor]):
        self.state = RegistryState.UNINITIALIZED
        self._tools: dict[str, ToolDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in self._tools:
                raise ConfigurationError(f"Tool '{descriptor.name}' already registered")
            self._tools[descriptor.name] = descriptor
        self.state = RegistryState.POPULATED
        logger.debug(f"Tool registry populated with {len(self._tools)} tools")

    @classmethod
    def for_service(cls, service: TelegramBotService) -> "ToolRegistry":
        return cls(BotTools(service).descriptors())

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    @property
    def names(self) -> list[str]:
        return list(self._tools)

    def get(self, name: str) -> ToolDescriptor | None:
        return self._tools.get(name)

    def list_tools(self) -> list[types.Tool]:
        return [descriptor.to_mcp_tool() for descriptor in self._tools.values()]

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> ToolResult:
        """Validate ``arguments`` for tool ``name``, run it and format the outcome."""
        descriptor = self._tools.get(name)
        if descriptor is None:
            logger.warning(f"Call to unknown tool: {name}")
            return ToolResult.from_error(f"Unknown tool: {name}")

        try:
            args = descriptor.params_model.model_validate(arguments or {})
        except pydantic.ValidationError as e:
            message = f"Invalid arguments for {name}: {_describe_validation_error(e)}"
            logger.warning(message)
            return ToolResult.from_error(message)

        try:
            data = await descriptor.handler(args)
        except Exception as e:
            logger.error(f"Error executing tool {name}: {e}")
            return ToolResult.from_error(str(e))

        logger.debug(f"Tool {name} completed")
        return ToolResult.from_data(data)

    def register_with(self, server: Server) -> None:
        """Install list_tools/call_tool handlers on a low-level MCP server."""
        if self.state is RegistryState.REGISTERED:
            raise ConfigurationError("Tool registry is already registered with a server")

        async def list_tools() -> list[types.Tool]:
            return self.list_tools()

        async def call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
            # Plain content blocks are wrapped as a non-error result by every 1.x server.
            result = await self.call_tool(name, arguments)
            return list(result.content)

        server.list_tools()(list_tools)
        # Arguments are validated by the tool's pydantic model, not the JSON schema.
        server.call_tool(validate_input=False)(call_tool)
        self.state = RegistryState.REGISTERED
        logger.info(f"Registered {len(self._tools)} tools: {', '.join(self._tools)}")
