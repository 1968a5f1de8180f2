"""Gift operations."""

from __future__ import annotations

from typing import List, Optional

from botmethods.methods.base import TelegramMethod
from botmethods.models import Gifts
from botmethods.objects import MessageEntity
from botmethods.validation import Violations


class GetAvailableGifts(TelegramMethod):
    """Return the list of gifts that can be sent by the bot to users."""

    endpoint = "getAvailableGifts"
    result_type = Gifts
    http_method = "GET"


class SendGift(TelegramMethod):
    """Send a gift to the given user. The gift can't be converted to Telegram Stars by the user."""

    endpoint = "sendGift"
    result_type = bool

    user_id: int
    gift_id: str
    pay_for_upgrade: Optional[bool] = None
    text: Optional[str] = None
    text_parse_mode: Optional[str] = None
    text_entities: Optional[List[MessageEntity]] = None

    def collect_violations(self, v: Violations) -> None:
        v.positive_id("user_id", self.user_id)
        v.not_blank("gift_id", self.gift_id)
        if self.text is not None:
            v.length("text", self.text, 0, 255)
        v.exclusive("text_parse_mode", self.text_parse_mode, "text_entities", self.text_entities)
        v.nested_items("text_entities", self.text_entities)
