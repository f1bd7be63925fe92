import pytest

from mcp_telegram_bot.errors import ConfigurationError, GenericApiError, ValidationError
from mcp_telegram_bot.params import PinChatMessageOptions, SendMessageOptions
from mcp_telegram_bot.services import TelegramBotService


@pytest.mark.asyncio
async def test_get_bot_info(bot_api, service):
    bot_api.ok("getMe", {"id": 42, "is_bot": True, "username": "test_bot"})

    assert await service.get_bot_info() == {"id": 42, "is_bot": True, "username": "test_bot"}
    assert bot_api.methods() == ["getMe"]


@pytest.mark.asyncio
async def test_send_message_body(bot_api, service):
    bot_api.ok("sendMessage", {"message_id": 7})

    result = await service.send_message(123, "hello", SendMessageOptions(parse_mode="HTML"))

    assert result == {"message_id": 7}
    assert bot_api.body() == {"chat_id": 123, "text": "hello", "parse_mode": "HTML"}


@pytest.mark.asyncio
async def test_send_message_required_fields_win(bot_api, service):
    await service.send_message(1, "hi", {"text": "bye", "chat_id": 2, "disable_notification": True})
    assert bot_api.body() == {"chat_id": 1, "text": "hi", "disable_notification": True}


@pytest.mark.asyncio
async def test_chat_id_type_preserved(bot_api, service):
    await service.send_message("@channel", "hi")
    await service.send_message(-1001234567890, "hi")
    assert bot_api.body(0)["chat_id"] == "@channel"
    assert bot_api.body(1)["chat_id"] == -1001234567890


@pytest.mark.asyncio
async def test_send_message_rejects_blank_text(bot_api, service):
    with pytest.raises(ValidationError):
        await service.send_message(1, "   ")
    assert bot_api.requests == []


@pytest.mark.asyncio
async def test_forward_and_copy(bot_api, service):
    await service.forward_message(1, "@source", 55, {"disable_notification": True})
    await service.copy_message(1, "@source", 55)
    assert bot_api.methods() == ["forwardMessage", "copyMessage"]
    assert bot_api.body(0) == {"chat_id": 1, "from_chat_id": "@source", "message_id": 55, "disable_notification": True}
    assert bot_api.body(1) == {"chat_id": 1, "from_chat_id": "@source", "message_id": 55}


@pytest.mark.asyncio
async def test_edit_and_delete(bot_api, service):
    await service.edit_message_text(1, 9, "edited")
    assert await service.delete_message(1, 9) is True
    assert bot_api.body(0) == {"chat_id": 1, "message_id": 9, "text": "edited"}
    assert bot_api.body(1) == {"chat_id": 1, "message_id": 9}


@pytest.mark.asyncio
async def test_pin_chat_message(bot_api, service):
    assert await service.pin_chat_message(1, 9, PinChatMessageOptions(disable_notification=True)) is True
    assert bot_api.last.url.path.endswith("/pinChatMessage")
    assert bot_api.body() == {"chat_id": 1, "message_id": 9, "disable_notification": True}


@pytest.mark.asyncio
async def test_unpin_without_message_id_omits_field(bot_api, service):
    await service.unpin_chat_message(1)
    assert bot_api.body() == {"chat_id": 1}

    await service.unpin_chat_message(1, 9)
    assert bot_api.body() == {"chat_id": 1, "message_id": 9}


@pytest.mark.asyncio
async def test_unpin_all(bot_api, service):
    await service.unpin_all_chat_messages("@group")
    assert bot_api.methods() == ["unpinAllChatMessages"]
    assert bot_api.body() == {"chat_id": "@group"}


@pytest.mark.asyncio
async def test_send_poll_validated_before_request(bot_api, service):
    with pytest.raises(ValidationError, match="Invalid SendPollParams"):
        await service.send_poll({"chat_id": 1, "question": "Q", "options": [{"text": "only"}]})
    assert bot_api.requests == []


@pytest.mark.asyncio
async def test_send_poll_body(bot_api, service):
    bot_api.ok("sendPoll", {"message_id": 3, "poll": {"question": "Q"}})

    await service.send_poll(
        {"chat_id": 1, "question": "Q", "options": [{"text": "a"}, {"text": "b"}], "is_anonymous": False}
    )

    assert bot_api.body() == {
        "chat_id": 1,
        "question": "Q",
        "options": [{"text": "a"}, {"text": "b"}],
        "is_anonymous": False,
    }


@pytest.mark.asyncio
async def test_send_contact(bot_api, service):
    await service.send_contact(1, "+100", "Ada", {"last_name": "Lovelace"})
    assert bot_api.body() == {"chat_id": 1, "phone_number": "+100", "first_name": "Ada", "last_name": "Lovelace"}


@pytest.mark.asyncio
async def test_get_chat_preserves_id_type(bot_api, service):
    await service.get_chat(123456789)
    await service.get_chat("@testchat")
    assert bot_api.body(0) == {"chat_id": 123456789}
    assert bot_api.body(1) == {"chat_id": "@testchat"}


@pytest.mark.asyncio
async def test_get_chat_error(bot_api, service):
    bot_api.fail("getChat", "Bad Request: chat not found")

    with pytest.raises(GenericApiError, match="chat not found"):
        await service.get_chat(999)


@pytest.mark.asyncio
async def test_get_updates_extends_http_timeout(bot_api, service):
    bot_api.ok("getUpdates", [])

    assert await service.get_updates({"timeout": 50, "limit": 10}) == []

    assert bot_api.body() == {"timeout": 50, "limit": 10}
    assert bot_api.last.extensions["timeout"]["read"] == 60.0


@pytest.mark.asyncio
async def test_get_updates_short_poll_keeps_client_timeout(bot_api, service):
    bot_api.ok("getUpdates", [{"update_id": 1}])

    assert await service.get_updates() == [{"update_id": 1}]

    assert bot_api.body() == {}
    assert bot_api.last.extensions["timeout"]["read"] == 30.0


@pytest.mark.asyncio
async def test_get_updates_rejects_bad_limit(bot_api, service):
    with pytest.raises(ValidationError):
        await service.get_updates({"limit": 500})
    assert bot_api.requests == []


@pytest.mark.asyncio
async def test_webhook_operations(bot_api, service):
    bot_api.ok("getWebhookInfo", {"url": "", "pending_update_count": 0})

    assert (await service.updates.get_webhook_info())["url"] == ""
    assert await service.updates.delete_webhook() is True
    await service.updates.delete_webhook(drop_pending_updates=True)

    assert bot_api.methods() == ["getWebhookInfo", "deleteWebhook", "deleteWebhook"]
    assert bot_api.body(1) == {}
    assert bot_api.body(2) == {"drop_pending_updates": True}


def test_from_token_requires_token():
    with pytest.raises(ConfigurationError):
        TelegramBotService.from_token("")
