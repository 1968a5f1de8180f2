"""Sticker and sticker set operations.

Most of these take a file identifier string for ``sticker``.  The ones that
carry an :data:`~botmethods.files.InputFile` switch to multipart as soon as a
:class:`~botmethods.files.FileUpload` is passed.
"""

from __future__ import annotations

from typing import List, Optional, Union

from botmethods.files import FileUpload, InputFile
from botmethods.methods.base import TelegramMethod
from botmethods.models import File, Message, Sticker, StickerSet
from botmethods.objects import (
    STICKER_FORMATS,
    InputSticker,
    MaskPosition,
    ReplyMarkup,
    ReplyParameters,
)
from botmethods.validation import Violations

STICKER_TYPES = ("regular", "mask", "custom_emoji")


class SendSticker(TelegramMethod):
    """Send a static .WEBP, animated .TGS, or video .WEBM sticker."""

    endpoint = "sendSticker"
    result_type = Message

    chat_id: Union[int, str]
    sticker: InputFile
    business_connection_id: Optional[str] = None
    message_thread_id: Optional[int] = None
    emoji: Optional[str] = None
    disable_notification: Optional[bool] = None
    protect_content: Optional[bool] = None
    allow_paid_broadcast: Optional[bool] = None
    message_effect_id: Optional[str] = None
    reply_parameters: Optional[ReplyParameters] = None
    reply_markup: Optional[ReplyMarkup] = None

    def collect_violations(self, v: Violations) -> None:
        v.chat_id("chat_id", self.chat_id)
        v.nested("sticker", self.sticker)
        v.nested("reply_parameters", self.reply_parameters)
        v.nested("reply_markup", self.reply_markup)


class GetStickerSet(TelegramMethod):
    endpoint = "getStickerSet"
    result_type = StickerSet

    name: str

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("name", self.name)


class GetCustomEmojiStickers(TelegramMethod):
    """Get information about up to 200 custom emoji stickers by their identifiers."""

    endpoint = "getCustomEmojiStickers"
    result_type = List[Sticker]

    custom_emoji_ids: List[str]

    def collect_violations(self, v: Violations) -> None:
        v.count("custom_emoji_ids", self.custom_emoji_ids, 1, 200)
        for index, custom_emoji_id in enumerate(self.custom_emoji_ids):
            v.not_blank(f"custom_emoji_ids[{index}]", custom_emoji_id)


class UploadStickerFile(TelegramMethod):
    """Upload a sticker file for later use in sticker set methods."""

    endpoint = "uploadStickerFile"
    result_type = File

    user_id: int
    sticker: FileUpload
    sticker_format: str

    def collect_violations(self, v: Violations) -> None:
        v.positive_id("user_id", self.user_id)
        v.nested("sticker", self.sticker)
        v.one_of("sticker_format", self.sticker_format, STICKER_FORMATS)


class CreateNewStickerSet(TelegramMethod):
    """Create a new sticker set owned by a user."""

    endpoint = "createNewStickerSet"
    result_type = bool

    user_id: int
    name: str
    title: str
    stickers: List[InputSticker]
    sticker_type: Optional[str] = None
    needs_repainting: Optional[bool] = None

    def collect_violations(self, v: Violations) -> None:
        v.positive_id("user_id", self.user_id)
        v.sticker_set_name("name", self.name)
        v.length("title", self.title, 1, 64)
        v.count("stickers", self.stickers, 1, 50)
        v.nested_items("stickers", self.stickers)
        if self.sticker_type is not None:
            v.one_of("sticker_type", self.sticker_type, STICKER_TYPES)
        if self.needs_repainting is not None and self.sticker_type != "custom_emoji":
            v.add("needs_repainting", 'is only allowed when sticker_type is "custom_emoji"')


class AddStickerToSet(TelegramMethod):
    """Add a new sticker to a set created by the bot."""

    endpoint = "addStickerToSet"
    result_type = bool

    user_id: int
    name: str
    sticker: InputSticker

    def collect_violations(self, v: Violations) -> None:
        v.positive_id("user_id", self.user_id)
        v.not_blank("name", self.name)
        v.nested("sticker", self.sticker)


class SetStickerPositionInSet(TelegramMethod):
    endpoint = "setStickerPositionInSet"
    result_type = bool

    sticker: str
    position: int

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("sticker", self.sticker)
        v.in_range("position", self.position, minimum=0)


class DeleteStickerFromSet(TelegramMethod):
    endpoint = "deleteStickerFromSet"
    result_type = bool

    sticker: str

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("sticker", self.sticker)


class ReplaceStickerInSet(TelegramMethod):
    """Replace an existing sticker in a set with a new one."""

    endpoint = "replaceStickerInSet"
    result_type = bool

    user_id: int
    name: str
    old_sticker: str
    sticker: InputSticker

    def collect_violations(self, v: Violations) -> None:
        v.positive_id("user_id", self.user_id)
        v.not_blank("name", self.name)
        v.not_blank("old_sticker", self.old_sticker)
        v.nested("sticker", self.sticker)


class SetStickerEmojiList(TelegramMethod):
    endpoint = "setStickerEmojiList"
    result_type = bool

    sticker: str
    emoji_list: List[str]

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("sticker", self.sticker)
        v.count("emoji_list", self.emoji_list, 1, 20)


class SetStickerKeywords(TelegramMethod):
    endpoint = "setStickerKeywords"
    result_type = bool

    sticker: str
    keywords: Optional[List[str]] = None

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("sticker", self.sticker)
        v.keywords("keywords", self.keywords)


class SetStickerMaskPosition(TelegramMethod):
    """Change the mask position of a mask sticker. Omit ``mask_position`` to remove it."""

    endpoint = "setStickerMaskPosition"
    result_type = bool

    sticker: str
    mask_position: Optional[MaskPosition] = None

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("sticker", self.sticker)
        v.nested("mask_position", self.mask_position)


class SetStickerSetTitle(TelegramMethod):
    endpoint = "setStickerSetTitle"
    result_type = bool

    name: str
    title: str

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("name", self.name)
        v.length("title", self.title, 1, 64)


class SetStickerSetThumbnail(TelegramMethod):
    """Set the thumbnail of a regular or mask sticker set."""

    endpoint = "setStickerSetThumbnail"
    result_type = bool

    name: str
    user_id: int
    format: str
    thumbnail: Optional[InputFile] = None

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("name", self.name)
        v.positive_id("user_id", self.user_id)
        v.nested("thumbnail", self.thumbnail)
        v.one_of("format", self.format, STICKER_FORMATS)


class SetCustomEmojiStickerSetThumbnail(TelegramMethod):
    endpoint = "setCustomEmojiStickerSetThumbnail"
    result_type = bool

    name: str
    custom_emoji_id: Optional[str] = None

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("name", self.name)
        if self.custom_emoji_id is not None:
            v.not_blank("custom_emoji_id", self.custom_emoji_id)


class DeleteStickerSet(TelegramMethod):
    endpoint = "deleteStickerSet"
    result_type = bool

    name: str

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("name", self.name)
