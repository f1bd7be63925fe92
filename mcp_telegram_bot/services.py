"""
Capability façade over the Telegram Bot API.

Each capability area wraps the same RequestClient; ``TelegramBotService``
composes them and exposes one method per supported operation. Errors raised by
the client propagate unchanged.
"""
import logging
from typing import Any, Mapping

import pydantic

from .client import RequestClient
from .errors import ValidationError
from .params import (
    BotApiParams,
    ChatId,
    CopyMessageOptions,
    EditMessageTextOptions,
    ForwardMessageOptions,
    GetUpdatesParams,
    PinChatMessageOptions,
    SendContactOptions,
    SendMessageOptions,
    SendPollParams,
    UnpinChatMessageOptions,
)

logger = logging.getLogger(__name__)

DEFAULT_LONG_POLL_GRACE = 10.0

Params = BotApiParams | Mapping[str, Any] | None


def _fields(params: Params) -> dict[str, Any]:
    """Wire fields of an options struct or a plain mapping."""
    if params is None:
        return {}
    if isinstance(params, BotApiParams):
        return params.to_api()
    return dict(params)


def _validated(model: type[BotApiParams], params: BotApiParams | Mapping[str, Any]) -> BotApiParams:
    if isinstance(params, model):
        return params
    if isinstance(params, BotApiParams):
        params = params.to_api()
    try:
        return model.model_validate(dict(params))
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid {model.__name__}: {e}") from e


def _merge(params: Params, **required: Any) -> dict[str, Any]:
    # Required fields are applied last and win over caller-supplied keys.
    fields = _fields(params)
    shadowed = sorted(key for key in fields if key in required)
    if shadowed:
        logger.debug(f"Ignoring caller values for required fields: {shadowed}")
    return {**fields, **required}


class AuthCapabilities:
    def __init__(self, client: RequestClient):
        self._client = client

    async def get_me(self) -> dict[str, Any]:
        """Basic information about the bot; also a cheap token check."""
        return await self._client.call("getMe")


class MessageCapabilities:
    def __init__(self, client: RequestClient):
        self._client = client

    async def send_message(self, chat_id: ChatId, text: str, params: Params = None) -> dict[str, Any]:
        if not text or not text.strip():
            raise ValidationError("Message text must not be empty")
        return await self._client.call("sendMessage", _merge(params, chat_id=chat_id, text=text))

    async def forward_message(
        self,
        chat_id: ChatId,
        from_chat_id: ChatId,
        message_id: int,
        params: ForwardMessageOptions | Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        return await self._client.call(
            "forwardMessage",
            _merge(params, chat_id=chat_id, from_chat_id=from_chat_id, message_id=message_id),
        )

    async def copy_message(
        self,
        chat_id: ChatId,
        from_chat_id: ChatId,
        message_id: int,
        params: CopyMessageOptions | Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        return await self._client.call(
            "copyMessage",
            _merge(params, chat_id=chat_id, from_chat_id=from_chat_id, message_id=message_id),
        )

    async def edit_message_text(
        self,
        chat_id: ChatId,
        message_id: int,
        text: str,
        params: EditMessageTextOptions | Mapping[str, Any] | None = None,
    ) -> dict[str, Any] | bool:
        if not text or not text.strip():
            raise ValidationError("Message text must not be empty")
        return await self._client.call(
            "editMessageText",
            _merge(params, chat_id=chat_id, message_id=message_id, text=text),
        )

    async def delete_message(self, chat_id: ChatId, message_id: int) -> bool:
        return await self._client.call("deleteMessage", {"chat_id": chat_id, "message_id": message_id})

    async def pin_chat_message(
        self,
        chat_id: ChatId,
        message_id: int,
        params: PinChatMessageOptions | Mapping[str, Any] | None = None,
    ) -> bool:
        return await self._client.call("pinChatMessage", _merge(params, chat_id=chat_id, message_id=message_id))

    async def unpin_chat_message(
        self,
        chat_id: ChatId,
        message_id: int | None = None,
        params: UnpinChatMessageOptions | Mapping[str, Any] | None = None,
    ) -> bool:
        """Unpin ``message_id``, or the most recent pinned message when omitted."""
        required: dict[str, Any] = {"chat_id": chat_id}
        if message_id is not None:
            required["message_id"] = message_id
        return await self._client.call("unpinChatMessage", _merge(params, **required))

    async def unpin_all_chat_messages(self, chat_id: ChatId) -> bool:
        return await self._client.call("unpinAllChatMessages", {"chat_id": chat_id})

    async def send_poll(self, params: SendPollParams | Mapping[str, Any]) -> dict[str, Any]:
        poll = _validated(SendPollParams, params)
        return await self._client.call("sendPoll", poll.to_api())

    async def send_contact(
        self,
        chat_id: ChatId,
        phone_number: str,
        first_name: str,
        params: SendContactOptions | Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        return await self._client.call(
            "sendContact",
            _merge(params, chat_id=chat_id, phone_number=phone_number, first_name=first_name),
        )


class ChatCapabilities:
    def __init__(self, client: RequestClient):
        self._client = client

    async def get_chat(self, chat_id: ChatId) -> dict[str, Any]:
        return await self._client.call("getChat", {"chat_id": chat_id})


class UpdateCapabilities:
    def __init__(self, client: RequestClient, long_poll_grace: float = DEFAULT_LONG_POLL_GRACE):
        self._client = client
        self._long_poll_grace = long_poll_grace

    async def get_updates(self, params: GetUpdatesParams | Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        query = _validated(GetUpdatesParams, params or {})
        timeout = None
        if query.timeout:
            # The HTTP request has to outlive Telegram's long poll.
            timeout = max(self._client.timeout, query.timeout + self._long_poll_grace)
        return await self._client.call("getUpdates", query.to_api(), timeout=timeout)

    async def get_webhook_info(self) -> dict[str, Any]:
        """Current webhook status. getUpdates is refused while a webhook is set."""
        return await self._client.call("getWebhookInfo")

    async def delete_webhook(self, drop_pending_updates: bool | None = None) -> bool:
        return await self._client.call("deleteWebhook", {"drop_pending_updates": drop_pending_updates})


class TelegramBotService:
    """Single entry point for every supported Bot API operation."""

    def __init__(self, client: RequestClient, *, long_poll_grace: float = DEFAULT_LONG_POLL_GRACE):
        self.client = client
        self.auth = AuthCapabilities(client)
        self.messages = MessageCapabilities(client)
        self.chats = ChatCapabilities(client)
        self.updates = UpdateCapabilities(client, long_poll_grace)

    @classmethod
    def from_token(cls, token: str | None, **client_options: Any) -> "TelegramBotService":
        long_poll_grace = client_options.pop("long_poll_grace", DEFAULT_LONG_POLL_GRACE)
        return cls(RequestClient(token, **client_options), long_poll_grace=long_poll_grace)

    async def get_bot_info(self) -> dict[str, Any]:
        return await self.auth.get_me()

    async def send_message(self, chat_id: ChatId, text: str, params: Params = None) -> dict[str, Any]:
        return await self.messages.send_message(chat_id, text, params)

    async def forward_message(
        self, chat_id: ChatId, from_chat_id: ChatId, message_id: int, params: Params = None
    ) -> dict[str, Any]:
        return await self.messages.forward_message(chat_id, from_chat_id, message_id, params)

    async def copy_message(
        self, chat_id: ChatId, from_chat_id: ChatId, message_id: int, params: Params = None
    ) -> dict[str, Any]:
        return await self.messages.copy_message(chat_id, from_chat_id, message_id, params)

    async def edit_message_text(
        self, chat_id: ChatId, message_id: int, text: str, params: Params = None
    ) -> dict[str, Any] | bool:
        return await self.messages.edit_message_text(chat_id, message_id, text, params)

    async def delete_message(self, chat_id: ChatId, message_id: int) -> bool:
        return await self.messages.delete_message(chat_id, message_id)

    async def pin_chat_message(self, chat_id: ChatId, message_id: int, params: Params = None) -> bool:
        return await self.messages.pin_chat_message(chat_id, message_id, params)

    async def unpin_chat_message(
        self, chat_id: ChatId, message_id: int | None = None, params: Params = None
    ) -> bool:
        return await self.messages.unpin_chat_message(chat_id, message_id, params)

    async def unpin_all_chat_messages(self, chat_id: ChatId) -> bool:
        return await self.messages.unpin_all_chat_messages(chat_id)

    async def send_poll(self, params: SendPollParams | Mapping[str, Any]) -> dict[str, Any]:
        return await self.messages.send_poll(params)

    async def send_contact(
        self, chat_id: ChatId, phone_number: str, first_name: str, params: Params = None
    ) -> dict[str, Any]:
        return await self.messages.send_contact(chat_id, phone_number, first_name, params)

    async def get_chat(self, chat_id: ChatId) -> dict[str, Any]:
        return await self.chats.get_chat(chat_id)

    async def get_updates(self, params: GetUpdatesParams | Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        return await self.updates.get_updates(params)

    async def aclose(self) -> None:
        await self.client.aclose()
