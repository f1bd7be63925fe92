"""
MCP tool definitions for the Telegram Bot API.

Each tool declares its arguments as a pydantic model (argument names are the
ones MCP clients see) and an async handler that calls the TelegramBotService
and returns a JSON-serializable payload. Formatting into content blocks and
error conversion happen in the registry.
"""
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable

import mcp.types as types
from pydantic import BaseModel, ConfigDict, Field

from .params import (
    ChatId,
    CopyMessageOptions,
    EditMessageTextOptions,
    ForwardMessageOptions,
    GetUpdatesParams,
    PinChatMessageOptions,
    ReplyParameters,
    SendContactOptions,
    SendMessageOptions,
    SendPollParams,
    UnpinChatMessageOptions,
)
from .services import TelegramBotService

CHAT_ID_DESCRIPTION = "Unique identifier for the target chat or username of the target channel (in the format @channelusername)"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class ToolResult:
    """Content returned for one tool call: a single JSON text block."""

    content: list[types.TextContent]

    @classmethod
    def from_data(cls, data: Any) -> "ToolResult":
        text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        return cls([types.TextContent(type="text", text=text)])

    @classmethod
    def from_error(cls, message: str) -> "ToolResult":
        return cls.from_data({"error": message, "timestamp": utc_timestamp()})

    @property
    def text(self) -> str:
        return self.content[0].text

    def payload(self) -> Any:
        return json.loads(self.text)


ToolHandler = Callable[[Any], Awaitable[Any]]


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    params_model: type[BaseModel]
    handler: ToolHandler

    def input_schema(self) -> dict[str, Any]:
        return self.params_model.model_json_schema(by_alias=True)

    def to_mcp_tool(self) -> types.Tool:
        return types.Tool(name=self.name, description=self.description, inputSchema=self.input_schema())


class ToolArguments(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class NoArguments(ToolArguments):
    pass


class SendMessageArguments(ToolArguments):
    chat_id: ChatId = Field(alias="chatId", description=CHAT_ID_DESCRIPTION)
    text: str = Field(min_length=1, max_length=4096, description="Text of the message to be sent")
    params: SendMessageOptions | None = Field(default=None, description="Additional parameters for the message")


class GetUpdatesArguments(ToolArguments):
    params: GetUpdatesParams | None = Field(default=None, description="Optional parameters for the getUpdates method")


class ForwardMessageArguments(ToolArguments):
    chat_id: ChatId = Field(alias="chatId", description=CHAT_ID_DESCRIPTION)
    from_chat_id: ChatId = Field(alias="fromChatId", description="Chat where the original message was sent")
    message_id: int = Field(alias="messageId", description="Message identifier in the chat specified in fromChatId")
    params: ForwardMessageOptions | None = None


class CopyMessageArguments(ToolArguments):
    chat_id: ChatId = Field(alias="chatId", description=CHAT_ID_DESCRIPTION)
    from_chat_id: ChatId = Field(alias="fromChatId", description="Chat where the original message was sent")
    message_id: int = Field(alias="messageId", description="Message identifier in the chat specified in fromChatId")
    params: CopyMessageOptions | None = None


class EditMessageTextArguments(ToolArguments):
    chat_id: ChatId = Field(alias="chatId", description=CHAT_ID_DESCRIPTION)
    message_id: int = Field(alias="messageId", description="Identifier of the message to edit")
    text: str = Field(min_length=1, max_length=4096, description="New text of the message")
    params: EditMessageTextOptions | None = None


class DeleteMessageArguments(ToolArguments):
    chat_id: ChatId = Field(alias="chatId", description=CHAT_ID_DESCRIPTION)
    message_id: int = Field(alias="messageId", description="Identifier of the message to delete")


class PinChatMessageArguments(ToolArguments):
    chat_id: ChatId = Field(alias="chatId", description=CHAT_ID_DESCRIPTION)
    message_id: int = Field(alias="messageId", description="Identifier of a message to pin")
    business_connection_id: str | None = Field(
        default=None,
        alias="businessConnectionId",
        description="Business connection on behalf of which the message will be pinned",
    )
    disable_notification: bool | None = Field(
        default=None,
        alias="disableNotification",
        description="Pass True to pin without notifying all chat members",
    )


class UnpinChatMessageArguments(ToolArguments):
    chat_id: ChatId = Field(alias="chatId", description=CHAT_ID_DESCRIPTION)
    message_id: int | None = Field(
        default=None,
        alias="messageId",
        description="Identifier of the message to unpin. If not specified, the most recent pinned message will be unpinned",
    )
    business_connection_id: str | None = Field(
        default=None,
        alias="businessConnectionId",
        description="Business connection on behalf of which the message will be unpinned",
    )


class UnpinAllChatMessagesArguments(ToolArguments):
    chat_id: ChatId = Field(alias="chatId", description=CHAT_ID_DESCRIPTION)


class GetChatArguments(ToolArguments):
    chat_id: ChatId = Field(description="Unique identifier for the target chat or username of the target supergroup or channel")


class SendContactArguments(ToolArguments):
    chat_id: ChatId = Field(alias="chatId", description=CHAT_ID_DESCRIPTION)
    phone_number: str = Field(alias="phoneNumber", min_length=1, description="Contact's phone number")
    first_name: str = Field(alias="firstName", min_length=1, description="Contact's first name")
    last_name: str | None = Field(default=None, alias="lastName", description="Contact's last name")
    vcard: str | None = Field(default=None, max_length=2048, description="Additional data about the contact as a vCard")
    business_connection_id: str | None = Field(default=None, alias="businessConnectionId")
    message_thread_id: int | None = Field(default=None, alias="messageThreadId")
    direct_messages_topic_id: int | None = Field(default=None, alias="directMessagesTopicId")
    disable_notification: bool | None = Field(default=None, alias="disableNotification")
    protect_content: bool | None = Field(default=None, alias="protectContent")
    allow_paid_broadcast: bool | None = Field(default=None, alias="allowPaidBroadcast")
    message_effect_id: str | None = Field(default=None, alias="messageEffectId")
    reply_parameters: ReplyParameters | None = Field(default=None, alias="replyParameters")
    reply_markup: dict[str, Any] | None = Field(default=None, alias="replyMarkup")

    def options(self) -> SendContactOptions:
        return SendContactOptions(**self.model_dump(exclude={"chat_id", "phone_number", "first_name"}))


class BotTools:
    """Tool handlers bound to one TelegramBotService."""

    def __init__(self, service: TelegramBotService):
        self.service = service

    async def get_bot_info(self, args: NoArguments) -> Any:
        return await self.service.get_bot_info()

    async def send_message(self, args: SendMessageArguments) -> Any:
        return await self.service.send_message(args.chat_id, args.text, args.params)

    async def get_updates(self, args: GetUpdatesArguments) -> Any:
        return await self.service.get_updates(args.params)

    async def forward_message(self, args: ForwardMessageArguments) -> Any:
        return await self.service.forward_message(args.chat_id, args.from_chat_id, args.message_id, args.params)

    async def copy_message(self, args: CopyMessageArguments) -> Any:
        return await self.service.copy_message(args.chat_id, args.from_chat_id, args.message_id, args.params)

    async def edit_message_text(self, args: EditMessageTextArguments) -> Any:
        return await self.service.edit_message_text(args.chat_id, args.message_id, args.text, args.params)

    async def delete_message(self, args: DeleteMessageArguments) -> Any:
        result = await self.service.delete_message(args.chat_id, args.message_id)
        return {
            "success": result,
            "chatId": args.chat_id,
            "messageId": args.message_id,
            "timestamp": utc_timestamp(),
        }

    async def pin_chat_message(self, args: PinChatMessageArguments) -> Any:
        options = PinChatMessageOptions(
            business_connection_id=args.business_connection_id,
            disable_notification=args.disable_notification,
        )
        result = await self.service.pin_chat_message(args.chat_id, args.message_id, options)
        return {
            "success": result,
            "chatId": args.chat_id,
            "messageId": args.message_id,
            "timestamp": utc_timestamp(),
        }

    async def unpin_chat_message(self, args: UnpinChatMessageArguments) -> Any:
        options = UnpinChatMessageOptions(business_connection_id=args.business_connection_id)
        result = await self.service.unpin_chat_message(args.chat_id, args.message_id, options)
        return {
            "success": result,
            "chatId": args.chat_id,
            "messageId": args.message_id if args.message_id is not None else "most recent pinned message",
            "timestamp": utc_timestamp(),
        }

    async def unpin_all_chat_messages(self, args: UnpinAllChatMessagesArguments) -> Any:
        result = await self.service.unpin_all_chat_messages(args.chat_id)
        return {
            "success": result,
            "chatId": args.chat_id,
            "action": "unpinned all messages",
            "timestamp": utc_timestamp(),
        }

    async def get_chat(self, args: GetChatArguments) -> Any:
        result = await self.service.get_chat(args.chat_id)
        return {"success": True, "data": result}

    async def send_poll(self, args: SendPollParams) -> Any:
        result = await self.service.send_poll(args)
        return {
            "success": True,
            "message": result,
            "info": f'Poll "{args.question}" sent successfully to chat {args.chat_id}',
        }

    async def send_contact(self, args: SendContactArguments) -> Any:
        return await self.service.send_contact(args.chat_id, args.phone_number, args.first_name, args.options())

    def descriptors(self) -> list[ToolDescriptor]:
        return [
            ToolDescriptor("get_bot_info", "Get information about the bot", NoArguments, self.get_bot_info),
            ToolDescriptor("send_message", "Send a text message to a chat", SendMessageArguments, self.send_message),
            ToolDescriptor(
                "get_updates",
                "Get pending updates for the bot using long polling",
                GetUpdatesArguments,
                self.get_updates,
            ),
            ToolDescriptor(
                "forward_message",
                "Forward messages of any kind. Service messages and messages with protected content can't be forwarded.",
                ForwardMessageArguments,
                self.forward_message,
            ),
            ToolDescriptor(
                "copy_message",
                "Copy a message without a link to the original. Returns the id of the sent message.",
                CopyMessageArguments,
                self.copy_message,
            ),
            ToolDescriptor(
                "edit_message_text",
                "Edit the text of a message sent by the bot",
                EditMessageTextArguments,
                self.edit_message_text,
            ),
            ToolDescriptor(
                "delete_message",
                "Delete a message, including service messages, with the usual Bot API limitations",
                DeleteMessageArguments,
                self.delete_message,
            ),
            ToolDescriptor(
                "pin_chat_message",
                "Pin a message in a chat. Returns True on success.",
                PinChatMessageArguments,
                self.pin_chat_message,
            ),
            ToolDescriptor(
                "unpin_chat_message",
                "Unpin a message in a chat. If no message ID is specified, unpins the most recent pinned message. Returns True on success.",
                UnpinChatMessageArguments,
                self.unpin_chat_message,
            ),
            ToolDescriptor(
                "unpin_all_chat_messages",
                "Clear the list of pinned messages in a chat. Returns True on success.",
                UnpinAllChatMessagesArguments,
                self.unpin_all_chat_messages,
            ),
            ToolDescriptor(
                "getChat",
                "Get up-to-date information about the chat, including settings, permissions, and metadata.",
                GetChatArguments,
                self.get_chat,
            ),
            ToolDescriptor(
                "sendPoll",
                "Send a native poll to a chat. A poll must have between 2 and 10 answer options. "
                "Returns the sent Message containing the poll on success.",
                SendPollParams,
                self.send_poll,
            ),
            ToolDescriptor("send_contact", "Send phone contacts to a chat", SendContactArguments, self.send_contact),
        ]
