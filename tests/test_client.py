import httpx
import pytest

from mcp_telegram_bot.client import RequestClient, compact
from mcp_telegram_bot.errors import ConfigurationError, GenericApiError, ProtocolError, TransportError

from .conftest import API_BASE, TOKEN


def test_compact_drops_none_recursively():
    value = {"a": 1, "b": None, "c": {"d": None, "e": [{"f": None, "g": 2}]}, "h": False}
    assert compact(value) == {"a": 1, "c": {"e": [{"g": 2}]}, "h": False}


@pytest.mark.parametrize("token", [None, "", "   "])
def test_missing_token_rejected(token):
    with pytest.raises(ConfigurationError, match="Telegram bot token is required"):
        RequestClient(token)


def test_base_url():
    client = RequestClient(TOKEN, api_base=API_BASE + "/")
    assert client.base_url == f"{API_BASE}/bot{TOKEN}"


@pytest.mark.asyncio
async def test_call_posts_json_to_method_url(bot_api, request_client):
    bot_api.ok("sendMessage", {"message_id": 5})

    result = await request_client.call("sendMessage", {"chat_id": 1, "text": "hi", "parse_mode": None})

    assert result == {"message_id": 5}
    assert bot_api.last.method == "POST"
    assert str(bot_api.last.url) == f"{API_BASE}/bot{TOKEN}/sendMessage"
    assert bot_api.body() == {"chat_id": 1, "text": "hi"}


@pytest.mark.asyncio
async def test_call_without_params_sends_empty_object(bot_api, request_client):
    await request_client.call("getMe")
    assert bot_api.body() == {}


@pytest.mark.asyncio
async def test_api_error_propagates(bot_api, request_client):
    bot_api.fail("getChat", "Bad Request: chat not found")

    with pytest.raises(GenericApiError) as exc_info:
        await request_client.call("getChat", {"chat_id": 1})
    assert str(exc_info.value) == "Telegram API request failed: Bad Request: chat not found"


@pytest.mark.asyncio
async def test_non_json_response(bot_api, request_client):
    bot_api.respond("getMe", lambda request: httpx.Response(502, text="<html>Bad Gateway</html>"))

    with pytest.raises(ProtocolError) as exc_info:
        await request_client.call("getMe")
    assert "HTTP 502" in str(exc_info.value)


@pytest.mark.asyncio
async def test_transport_error_is_redacted(bot_api, request_client):
    def broken(request):
        raise httpx.ConnectError(f"cannot reach {request.url}", request=request)

    bot_api.respond("getMe", broken)

    with pytest.raises(TransportError) as exc_info:
        await request_client.call("getMe")
    message = str(exc_info.value)
    assert message.startswith("Telegram API request failed: ")
    assert TOKEN not in message
    assert "<token>" in message
    assert exc_info.value.retryable


@pytest.mark.asyncio
async def test_aclose_leaves_shared_client_open(http_client, request_client):
    await request_client.aclose()
    assert not http_client.is_closed


@pytest.mark.asyncio
async def test_owned_client_closed():
    client = RequestClient(TOKEN)
    async with client:
        pass
    assert client._http.is_closed
