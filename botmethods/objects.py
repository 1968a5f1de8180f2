"""Request-side value objects embedded in operations.

Each class mirrors a Telegram Bot API object field-for-field and declares the
documented constraints in ``collect_violations``.  Nested objects are checked
through :meth:`Violations.nested`, so a broken price inside an invoice is
reported as ``prices[1].label``.
"""

from __future__ import annotations

import re
from typing import List, Literal, Optional, Union

from botmethods.files import InputFile
from botmethods.validation import TelegramObject, Violations

STICKER_FORMATS = ("static", "animated", "video")
MASK_POINTS = ("forehead", "eyes", "mouth", "chin")
MESSAGE_ENTITY_TYPES = (
    "mention",
    "hashtag",
    "cashtag",
    "bot_command",
    "url",
    "email",
    "phone_number",
    "bold",
    "italic",
    "underline",
    "strikethrough",
    "spoiler",
    "blockquote",
    "expandable_blockquote",
    "code",
    "pre",
    "text_link",
    "text_mention",
    "custom_emoji",
)

# Telegram's sentinel for a live location that is updated indefinitely.
LIVE_PERIOD_FOREVER = 0x7FFFFFFF

_START_PARAMETER = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


class User(TelegramObject):
    """This object represents a Telegram user or bot."""

    id: int
    is_bot: bool
    first_name: str
    last_name: Optional[str] = None
    username: Optional[str] = None
    language_code: Optional[str] = None
    is_premium: Optional[bool] = None
    can_join_groups: Optional[bool] = None
    can_read_all_group_messages: Optional[bool] = None
    supports_inline_queries: Optional[bool] = None

    def collect_violations(self, v: Violations) -> None:
        v.positive_id("id", self.id)
        v.not_blank("first_name", self.first_name)


# ── Formatting ───────────────────────────────────────────────────────────────


class MessageEntity(TelegramObject):
    """One special entity in a text message, e.g. a hashtag or a bold span."""

    type: str
    offset: int
    length: int
    url: Optional[str] = None
    user: Optional[User] = None
    language: Optional[str] = None
    custom_emoji_id: Optional[str] = None

    def collect_violations(self, v: Violations) -> None:
        v.one_of("type", self.type, MESSAGE_ENTITY_TYPES)
        v.in_range("offset", self.offset, minimum=0)
        v.in_range("length", self.length, minimum=1)
        if self.type == "text_link":
            v.require("url", self.url, 'type is "text_link"')
        elif self.type == "text_mention":
            v.require("user", self.user, 'type is "text_mention"')
            v.nested("user", self.user)
        elif self.type == "custom_emoji":
            v.require("custom_emoji_id", self.custom_emoji_id, 'type is "custom_emoji"')


class LinkPreviewOptions(TelegramObject):
    """Describes the options used for link preview generation."""

    is_disabled: Optional[bool] = None
    url: Optional[str] = None
    prefer_small_media: Optional[bool] = None
    prefer_large_media: Optional[bool] = None
    show_above_text: Optional[bool] = None

    def collect_violations(self, v: Violations) -> None:
        # Both flags default to false, so only two true values conflict.
        if self.prefer_small_media and self.prefer_large_media:
            v.add("prefer_small_media", "can't be used together with prefer_large_media")


class ReplyParameters(TelegramObject):
    """Describes the message being replied to."""

    message_id: int
    chat_id: Optional[Union[int, str]] = None
    allow_sending_without_reply: Optional[bool] = None
    quote: Optional[str] = None
    quote_parse_mode: Optional[str] = None
    quote_entities: Optional[List[MessageEntity]] = None
    quote_position: Optional[int] = None

    def collect_violations(self, v: Violations) -> None:
        v.positive_id("message_id", self.message_id)
        if self.chat_id is not None:
            v.chat_id("chat_id", self.chat_id)
        if self.quote is not None:
            v.length("quote", self.quote, 1, 1024)
        v.exclusive("quote_parse_mode", self.quote_parse_mode, "quote_entities", self.quote_entities)
        v.nested_items("quote_entities", self.quote_entities)
        v.in_range("quote_position", self.quote_position, minimum=0)


# ── Keyboards ────────────────────────────────────────────────────────────────


class WebAppInfo(TelegramObject):
    """Describes a Web App."""

    url: str

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("url", self.url)


class InlineKeyboardButton(TelegramObject):
    """One button of an inline keyboard. Exactly one action field must be set."""

    text: str
    url: Optional[str] = None
    callback_data: Optional[str] = None
    web_app: Optional[WebAppInfo] = None
    switch_inline_query: Optional[str] = None
    switch_inline_query_current_chat: Optional[str] = None
    pay: Optional[bool] = None

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("text", self.text)
        actions = [
            self.url,
            self.callback_data,
            self.web_app,
            self.switch_inline_query,
            self.switch_inline_query_current_chat,
            self.pay or None,
        ]
        if sum(action is not None for action in actions) != 1:
            v.add("text", "button must have exactly one action field set")
        if self.callback_data is not None:
            v.byte_length("callback_data", self.callback_data, 1, 64)
        v.nested("web_app", self.web_app)


class InlineKeyboardMarkup(TelegramObject):
    """An inline keyboard that appears right next to the message it belongs to."""

    inline_keyboard: List[List[InlineKeyboardButton]]

    def collect_violations(self, v: Violations) -> None:
        for row_index, row in enumerate(self.inline_keyboard):
            v.nested_items(f"inline_keyboard[{row_index}]", row)


class KeyboardButton(TelegramObject):
    """One button of the reply keyboard."""

    text: str
    request_contact: Optional[bool] = None
    request_location: Optional[bool] = None
    web_app: Optional[WebAppInfo] = None

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("text", self.text)
        v.nested("web_app", self.web_app)


class ReplyKeyboardMarkup(TelegramObject):
    """A custom keyboard with reply options."""

    keyboard: List[List[KeyboardButton]]
    is_persistent: Optional[bool] = None
    resize_keyboard: Optional[bool] = None
    one_time_keyboard: Optional[bool] = None
    input_field_placeholder: Optional[str] = None
    selective: Optional[bool] = None

    def collect_violations(self, v: Violations) -> None:
        for row_index, row in enumerate(self.keyboard):
            v.nested_items(f"keyboard[{row_index}]", row)
        if self.input_field_placeholder is not None:
            v.length("input_field_placeholder", self.input_field_placeholder, 1, 64)


class ReplyKeyboardRemove(TelegramObject):
    """Asks clients to remove the custom keyboard."""

    remove_keyboard: Literal[True] = True
    selective: Optional[bool] = None


class ForceReply(TelegramObject):
    """Asks clients to display a reply interface to the user."""

    force_reply: Literal[True] = True
    input_field_placeholder: Optional[str] = None
    selective: Optional[bool] = None

    def collect_violations(self, v: Violations) -> None:
        if self.input_field_placeholder is not None:
            v.length("input_field_placeholder", self.input_field_placeholder, 1, 64)


ReplyMarkup = Union[InlineKeyboardMarkup, ReplyKeyboardMarkup, ReplyKeyboardRemove, ForceReply]


# ── Payments ─────────────────────────────────────────────────────────────────


class LabeledPrice(TelegramObject):
    """A portion of the price for goods or services, in the smallest currency units."""

    label: str
    amount: int

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("label", self.label)
        v.in_range("amount", self.amount, minimum=0)


class ShippingOption(TelegramObject):
    """One shipping option."""

    id: str
    title: str
    prices: List[LabeledPrice]

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("id", self.id)
        v.not_blank("title", self.title)
        v.count("prices", self.prices, minimum=1)
        v.nested_items("prices", self.prices)


# ── Stickers ─────────────────────────────────────────────────────────────────


class MaskPosition(TelegramObject):
    """The position on faces where a mask should be placed by default."""

    point: str
    x_shift: float
    y_shift: float
    scale: float

    def collect_violations(self, v: Violations) -> None:
        v.one_of("point", self.point, MASK_POINTS)
        if self.scale <= 0:
            v.add("scale", "must be greater than 0")


class InputSticker(TelegramObject):
    """A sticker to be added to a sticker set."""

    sticker: InputFile
    format: str
    emoji_list: List[str]
    mask_position: Optional[MaskPosition] = None
    keywords: Optional[List[str]] = None

    def collect_violations(self, v: Violations) -> None:
        v.nested("sticker", self.sticker)
        v.one_of("format", self.format, STICKER_FORMATS)
        v.count("emoji_list", self.emoji_list, minimum=1, maximum=20)
        v.keywords("keywords", self.keywords)
        v.nested("mask_position", self.mask_position)


# ── Inline mode ──────────────────────────────────────────────────────────────


class InlineQueryResultsButton(TelegramObject):
    """A button shown above inline query results."""

    text: str
    web_app: Optional[WebAppInfo] = None
    start_parameter: Optional[str] = None

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("text", self.text)
        v.exclusive("web_app", self.web_app, "start_parameter", self.start_parameter)
        v.nested("web_app", self.web_app)
        if self.start_parameter is not None:
            v.matches(
                "start_parameter",
                self.start_parameter,
                _START_PARAMETER,
                "must be 1-64 characters long and contain only A-Z, a-z, 0-9, _ and -",
            )


class InputTextMessageContent(TelegramObject):
    """Text content of a message sent as the result of an inline query."""

    message_text: str
    parse_mode: Optional[str] = None
    entities: Optional[List[MessageEntity]] = None
    link_preview_options: Optional[LinkPreviewOptions] = None

    def collect_violations(self, v: Violations) -> None:
        v.length("message_text", self.message_text, 1, 4096)
        v.exclusive("parse_mode", self.parse_mode, "entities", self.entities)
        v.nested_items("entities", self.entities)
        v.nested("link_preview_options", self.link_preview_options)


class InputLocationMessageContent(TelegramObject):
    """Location content of a message sent as the result of an inline query."""

    latitude: float
    longitude: float
    horizontal_accuracy: Optional[float] = None
    live_period: Optional[int] = None
    heading: Optional[int] = None
    proximity_alert_radius: Optional[int] = None

    def collect_violations(self, v: Violations) -> None:
        v.in_range("latitude", self.latitude, -90, 90)
        v.in_range("longitude", self.longitude, -180, 180)
        v.in_range("horizontal_accuracy", self.horizontal_accuracy, 0, 1500)
        if self.live_period is not None and self.live_period != LIVE_PERIOD_FOREVER:
            v.in_range("live_period", self.live_period, 60, 86400)
        v.in_range("heading", self.heading, 1, 360)
        v.in_range("proximity_alert_radius", self.proximity_alert_radius, 1, 100000)


InputMessageContent = Union[InputTextMessageContent, InputLocationMessageContent]


class _InlineQueryResult(TelegramObject):
    """Fields shared by every inline query result."""

    id: str
    reply_markup: Optional[InlineKeyboardMarkup] = None
    input_message_content: Optional[InputMessageContent] = None

    def collect_violations(self, v: Violations) -> None:
        v.byte_length("id", self.id, 1, 64)
        v.nested("reply_markup", self.reply_markup)
        v.nested("input_message_content", self.input_message_content)


class _CaptionedResult(_InlineQueryResult):
    caption: Optional[str] = None
    parse_mode: Optional[str] = None
    caption_entities: Optional[List[MessageEntity]] = None
    show_caption_above_media: Optional[bool] = None

    def collect_violations(self, v: Violations) -> None:
        super().collect_violations(v)
        if self.caption is not None:
            v.length("caption", self.caption, 0, 1024)
        v.exclusive("parse_mode", self.parse_mode, "caption_entities", self.caption_entities)
        v.nested_items("caption_entities", self.caption_entities)


class InlineQueryResultArticle(_InlineQueryResult):
    """A link to an article or web page."""

    type: Literal["article"] = "article"
    title: str
    input_message_content: InputMessageContent
    url: Optional[str] = None
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    thumbnail_width: Optional[int] = None
    thumbnail_height: Optional[int] = None

    def collect_violations(self, v: Violations) -> None:
        super().collect_violations(v)
        v.not_blank("title", self.title)


class InlineQueryResultPhoto(_CaptionedResult):
    """A link to a photo."""

    type: Literal["photo"] = "photo"
    photo_url: str
    thumbnail_url: str
    photo_width: Optional[int] = None
    photo_height: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None

    def collect_violations(self, v: Violations) -> None:
        super().collect_violations(v)
        v.not_blank("photo_url", self.photo_url)
        v.not_blank("thumbnail_url", self.thumbnail_url)


class InlineQueryResultCachedPhoto(_CaptionedResult):
    """A link to a photo stored on the Telegram servers."""

    type: Literal["photo"] = "photo"
    photo_file_id: str
    title: Optional[str] = None
    description: Optional[str] = None

    def collect_violations(self, v: Violations) -> None:
        super().collect_violations(v)
        v.not_blank("photo_file_id", self.photo_file_id)


class InlineQueryResultCachedSticker(_InlineQueryResult):
    """A link to a sticker stored on the Telegram servers."""

    type: Literal["sticker"] = "sticker"
    sticker_file_id: str

    def collect_violations(self, v: Violations) -> None:
        super().collect_violations(v)
        v.not_blank("sticker_file_id", self.sticker_file_id)


# Photo and cached photo share the "photo" wire type, so the union is not discriminated.
InlineQueryResult = Union[
    InlineQueryResultArticle,
    InlineQueryResultPhoto,
    InlineQueryResultCachedPhoto,
    InlineQueryResultCachedSticker,
]
