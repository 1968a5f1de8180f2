"""Basic messaging operations."""

from __future__ import annotations

from typing import List, Optional, Union

from botmethods.methods.base import TelegramMethod
from botmethods.models import Message
from botmethods.objects import LinkPreviewOptions, MessageEntity, ReplyMarkup, ReplyParameters, User
from botmethods.validation import Violations


class GetMe(TelegramMethod):
    """Test the bot's auth token. Returns basic information about the bot."""

    endpoint = "getMe"
    result_type = User
    http_method = "GET"


class SendMessage(TelegramMethod):
    """Send a text message. On success, the sent :class:`Message` is returned."""

    endpoint = "sendMessage"
    result_type = Message

    chat_id: Union[int, str]
    text: str
    business_connection_id: Optional[str] = None
    message_thread_id: Optional[int] = None
    parse_mode: Optional[str] = None
    entities: Optional[List[MessageEntity]] = None
    link_preview_options: Optional[LinkPreviewOptions] = None
    disable_notification: Optional[bool] = None
    protect_content: Optional[bool] = None
    allow_paid_broadcast: Optional[bool] = None
    message_effect_id: Optional[str] = None
    reply_parameters: Optional[ReplyParameters] = None
    reply_markup: Optional[ReplyMarkup] = None

    def collect_violations(self, v: Violations) -> None:
        v.chat_id("chat_id", self.chat_id)
        v.length("text", self.text, 1, 4096)
        v.exclusive("parse_mode", self.parse_mode, "entities", self.entities)
        v.nested_items("entities", self.entities)
        v.nested("link_preview_options", self.link_preview_options)
        v.nested("reply_parameters", self.reply_parameters)
        v.nested("reply_markup", self.reply_markup)
