"""Inline mode operations."""

from __future__ import annotations

from typing import List, Optional

from botmethods.methods.base import TelegramMethod
from botmethods.models import PreparedInlineMessage, SentWebAppMessage
from botmethods.objects import InlineQueryResult, InlineQueryResultsButton
from botmethods.validation import Violations

MAX_INLINE_RESULTS = 50


class AnswerInlineQuery(TelegramMethod):
    """Send answers to an inline query. No more than 50 results per query are allowed."""

    endpoint = "answerInlineQuery"
    result_type = bool

    inline_query_id: str
    results: List[InlineQueryResult]
    cache_time: Optional[int] = None
    is_personal: Optional[bool] = None
    next_offset: Optional[str] = None
    button: Optional[InlineQueryResultsButton] = None

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("inline_query_id", self.inline_query_id)
        v.count("results", self.results, maximum=MAX_INLINE_RESULTS)
        v.nested_items("results", self.results)
        v.in_range("cache_time", self.cache_time, minimum=0)
        if self.next_offset is not None:
            v.byte_length("next_offset", self.next_offset, 0, 64)
        v.nested("button", self.button)


class AnswerWebAppQuery(TelegramMethod):
    """Set the result of an interaction with a Web App and send a message on behalf of the user."""

    endpoint = "answerWebAppQuery"
    result_type = SentWebAppMessage

    web_app_query_id: str
    result: InlineQueryResult

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("web_app_query_id", self.web_app_query_id)
        v.nested("result", self.result)


class SavePreparedInlineMessage(TelegramMethod):
    """Store a message that can be sent by a user of a Mini App."""

    endpoint = "savePreparedInlineMessage"
    result_type = PreparedInlineMessage

    user_id: int
    result: InlineQueryResult
    allow_user_chats: Optional[bool] = None
    allow_bot_chats: Optional[bool] = None
    allow_group_chats: Optional[bool] = None
    allow_channel_chats: Optional[bool] = None

    def collect_violations(self, v: Violations) -> None:
        v.positive_id("user_id", self.user_id)
        v.nested("result", self.result)
