"""
Typed parameter structs for the supported Bot API operations.

Field names are the Bot API wire names. Unknown keys are rejected; option
structs carry a single ``extra`` mapping for fields Telegram adds before this
module learns about them. Typed fields always win over ``extra``.
"""
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

ChatId = int | str
Entities = list[dict[str, Any]]


class BotApiParams(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def to_api(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class OperationOptions(BotApiParams):
    extra: dict[str, Any] | None = Field(
        default=None,
        description="Additional Bot API fields not covered by the typed options",
    )

    def to_api(self) -> dict[str, Any]:
        fields = self.model_dump(exclude_none=True, exclude={"extra"})
        return {**(self.extra or {}), **fields}


class ReplyParameters(BotApiParams):
    message_id: int = Field(description="Identifier of the message that will be replied to")
    chat_id: ChatId | None = Field(default=None, description="Chat of the original message, if different")
    allow_sending_without_reply: bool | None = None
    quote: str | None = Field(default=None, description="Quoted part of the message to be replied to")
    quote_parse_mode: str | None = None
    quote_entities: Entities | None = None
    quote_position: int | None = Field(default=None, ge=0)


class SendMessageOptions(OperationOptions):
    business_connection_id: str | None = None
    message_thread_id: int | None = Field(default=None, description="Target forum topic")
    parse_mode: Literal["HTML", "Markdown", "MarkdownV2"] | None = None
    entities: Entities | None = None
    link_preview_options: dict[str, Any] | None = None
    disable_notification: bool | None = Field(default=None, description="Send silently")
    protect_content: bool | None = None
    allow_paid_broadcast: bool | None = None
    message_effect_id: str | None = None
    reply_parameters: ReplyParameters | None = None
    reply_markup: dict[str, Any] | None = Field(
        default=None, description="Inline keyboard, custom reply keyboard, or similar markup"
    )


class ForwardMessageOptions(OperationOptions):
    message_thread_id: int | None = Field(default=None, description="Target forum topic")
    video_start_timestamp: int | None = Field(default=None, ge=0)
    disable_notification: bool | None = Field(default=None, description="Send silently")
    protect_content: bool | None = Field(default=None, description="Protect from forwarding and saving")


class CopyMessageOptions(OperationOptions):
    message_thread_id: int | None = None
    video_start_timestamp: int | None = Field(default=None, ge=0)
    caption: str | None = Field(default=None, max_length=1024)
    parse_mode: Literal["HTML", "Markdown", "MarkdownV2"] | None = None
    caption_entities: Entities | None = None
    show_caption_above_media: bool | None = None
    disable_notification: bool | None = None
    protect_content: bool | None = None
    allow_paid_broadcast: bool | None = None
    reply_parameters: ReplyParameters | None = None
    reply_markup: dict[str, Any] | None = None


class EditMessageTextOptions(OperationOptions):
    business_connection_id: str | None = None
    parse_mode: Literal["HTML", "Markdown", "MarkdownV2"] | None = None
    entities: Entities | None = None
    link_preview_options: dict[str, Any] | None = None
    reply_markup: dict[str, Any] | None = None


class PinChatMessageOptions(OperationOptions):
    business_connection_id: str | None = None
    disable_notification: bool | None = Field(
        default=None, description="Do not notify chat members about the new pinned message"
    )


class UnpinChatMessageOptions(OperationOptions):
    business_connection_id: str | None = None


class SendContactOptions(OperationOptions):
    last_name: str | None = None
    vcard: str | None = Field(default=None, max_length=2048, description="Additional data in vCard format")
    business_connection_id: str | None = None
    message_thread_id: int | None = None
    direct_messages_topic_id: int | None = None
    disable_notification: bool | None = None
    protect_content: bool | None = None
    allow_paid_broadcast: bool | None = None
    message_effect_id: str | None = None
    reply_parameters: ReplyParameters | None = None
    reply_markup: dict[str, Any] | None = None


class GetUpdatesParams(BotApiParams):
    offset: int | None = Field(default=None, description="Identifier of the first update to be returned")
    limit: int | None = Field(default=None, ge=1, le=100, description="Number of updates to retrieve (1-100)")
    timeout: int | None = Field(default=None, ge=0, description="Long polling timeout in seconds")
    allowed_updates: list[str] | None = Field(default=None, description="Update types to receive")


class InputPollOption(BotApiParams):
    text: str = Field(min_length=1, max_length=100, description="Option text, 1-100 characters")
    text_parse_mode: str | None = None
    text_entities: Entities | None = None


class SendPollParams(BotApiParams):
    business_connection_id: str | None = None
    chat_id: ChatId = Field(description="Target chat id or @channelusername")
    message_thread_id: int | None = None
    question: str = Field(min_length=1, max_length=300, description="Poll question, 1-300 characters")
    question_parse_mode: str | None = None
    question_entities: Entities | None = None
    options: list[InputPollOption] = Field(min_length=2, max_length=10, description="2-10 answer options")
    is_anonymous: bool | None = None
    type: Literal["quiz", "regular"] | None = None
    allows_multiple_answers: bool | None = None
    correct_option_id: int | None = Field(default=None, ge=0)
    explanation: str | None = Field(default=None, max_length=200)
    explanation_parse_mode: str | None = None
    explanation_entities: Entities | None = None
    open_period: int | None = Field(default=None, ge=5, le=600)
    close_date: int | None = None
    is_closed: bool | None = None
    disable_notification: bool | None = None
    protect_content: bool | None = None
    allow_paid_broadcast: bool | None = None
    message_effect_id: str | None = None
    reply_parameters: ReplyParameters | None = None
    reply_markup: dict[str, Any] | None = None

    @model_validator(mode="after")
    def check_poll_rules(self) -> "SendPollParams":
        if self.open_period is not None and self.close_date is not None:
            raise ValueError("open_period and close_date can't be used together")
        if self.type == "quiz" and self.correct_option_id is None:
            raise ValueError("correct_option_id is required for quiz polls")
        if self.correct_option_id is not None and self.correct_option_id >= len(self.options):
            raise ValueError(
                f"correct_option_id {self.correct_option_id} is out of range for {len(self.options)} options"
            )
        return self
