"""Shared fixtures: a fake Bot API served through httpx.MockTransport."""
import json
from typing import Any, Callable

import httpx
import pytest
import pytest_asyncio

from mcp_telegram_bot.client import RequestClient
from mcp_telegram_bot.registry import ToolRegistry
from mcp_telegram_bot.services import TelegramBotService

TOKEN = "123456:TEST-token"
API_BASE = "https://api.telegram.test"


class FakeBotApi:
    """Records every request and answers with queued or per-method responses."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.results: dict[str, Any] = {}
        self.responders: dict[str, Callable[[httpx.Request], httpx.Response]] = {}

    def ok(self, method: str, result: Any) -> None:
        self.results[method] = result

    def fail(self, method: str, description: str, error_code: int = 400, **parameters: Any) -> None:
        body: dict[str, Any] = {"ok": False, "error_code": error_code, "description": description}
        if parameters:
            body["parameters"] = parameters
        self.responders[method] = lambda request: httpx.Response(error_code, json=body)

    def respond(self, method: str, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.responders[method] = responder

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method = request.url.path.rsplit("/", 1)[-1]
        if method in self.responders:
            return self.responders[method](request)
        return httpx.Response(200, json={"ok": True, "result": self.results.get(method, True)})

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def body(self, index: int = -1) -> dict[str, Any]:
        return json.loads(self.requests[index].content)

    def methods(self) -> list[str]:
        return [request.url.path.rsplit("/", 1)[-1] for request in self.requests]


@pytest.fixture
def bot_api() -> FakeBotApi:
    return FakeBotApi()


@pytest_asyncio.fixture
async def http_client(bot_api):
    async with httpx.AsyncClient(transport=httpx.MockTransport(bot_api.handler)) as client:
        yield client


@pytest.fixture
def request_client(http_client) -> RequestClient:
    return RequestClient(TOKEN, api_base=API_BASE, timeout=30.0, http_client=http_client)


@pytest.fixture
def service(request_client) -> TelegramBotService:
    return TelegramBotService(request_client, long_poll_grace=10.0)


@pytest.fixture
def registry(service) -> ToolRegistry:
    return ToolRegistry.for_service(service)
