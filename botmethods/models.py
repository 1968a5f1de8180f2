"""Pydantic models for the objects Telegram returns.

Only the shapes produced by the bundled operations are modelled.  Unknown
keys in a response are ignored, so newer Bot API versions keep decoding.
:class:`User`, :class:`MessageEntity` and :class:`MaskPosition` travel in
both directions and are shared with :mod:`botmethods.objects`.
"""

from __future__ import annotations

from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

from botmethods.objects import MaskPosition, MessageEntity, User

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Envelope wrapping every Bot API response."""

    ok: bool
    result: Optional[T] = None
    error_code: Optional[int] = None
    description: Optional[str] = None
    parameters: Optional["ResponseParameters"] = None

    model_config = {"populate_by_name": True}


class ResponseParameters(BaseModel):
    """Contains information about why a request was unsuccessful."""

    migrate_to_chat_id: Optional[int] = None
    retry_after: Optional[int] = None

    model_config = {"populate_by_name": True}


class Chat(BaseModel):
    """This object represents a chat."""

    id: int
    type: str
    title: Optional[str] = None
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_forum: Optional[bool] = None

    model_config = {"populate_by_name": True}


class PhotoSize(BaseModel):
    """One size of a photo or a file / sticker thumbnail."""

    file_id: str
    file_unique_id: str
    width: int
    height: int
    file_size: Optional[int] = None

    model_config = {"populate_by_name": True}


class File(BaseModel):
    """A file ready to be downloaded via ``https://api.telegram.org/file/bot<token>/<file_path>``."""

    file_id: str
    file_unique_id: str
    file_size: Optional[int] = None
    file_path: Optional[str] = None

    model_config = {"populate_by_name": True}


class Sticker(BaseModel):
    """This object represents a sticker."""

    file_id: str
    file_unique_id: str
    type: str
    width: int
    height: int
    is_animated: bool
    is_video: bool
    thumbnail: Optional[PhotoSize] = None
    emoji: Optional[str] = None
    set_name: Optional[str] = None
    mask_position: Optional[MaskPosition] = None
    custom_emoji_id: Optional[str] = None
    needs_repainting: Optional[bool] = None
    file_size: Optional[int] = None

    model_config = {"populate_by_name": True}


class StickerSet(BaseModel):
    """This object represents a sticker set."""

    name: str
    title: str
    sticker_type: str
    stickers: List[Sticker]
    thumbnail: Optional[PhotoSize] = None

    model_config = {"populate_by_name": True}


class Invoice(BaseModel):
    """Basic information about an invoice."""

    title: str
    description: str
    start_parameter: str
    currency: str
    total_amount: int

    model_config = {"populate_by_name": True}


class Message(BaseModel):
    """This object represents a message."""

    message_id: int
    date: int
    chat: Chat
    from_user: Optional[User] = Field(None, alias="from")
    sender_chat: Optional[Chat] = None
    reply_to_message: Optional["Message"] = None
    text: Optional[str] = None
    entities: Optional[List[MessageEntity]] = None
    caption: Optional[str] = None
    photo: Optional[List[PhotoSize]] = None
    sticker: Optional[Sticker] = None
    invoice: Optional[Invoice] = None

    model_config = {"populate_by_name": True}


class Gift(BaseModel):
    """A gift that can be sent by the bot."""

    id: str
    sticker: Sticker
    star_count: int
    upgrade_star_count: Optional[int] = None
    total_count: Optional[int] = None
    remaining_count: Optional[int] = None

    model_config = {"populate_by_name": True}


class Gifts(BaseModel):
    """A list of gifts."""

    gifts: List[Gift]

    model_config = {"populate_by_name": True}


class StarTransaction(BaseModel):
    """A Telegram Star transaction.

    ``source`` and ``receiver`` are kept as raw dicts; their shape depends on
    the partner type and is not needed by any bundled operation.
    """

    id: str
    amount: int
    date: int
    nanostar_amount: Optional[int] = None
    source: Optional[dict[str, Any]] = None
    receiver: Optional[dict[str, Any]] = None

    model_config = {"populate_by_name": True}


class StarTransactions(BaseModel):
    """A list of Telegram Star transactions."""

    transactions: List[StarTransaction]

    model_config = {"populate_by_name": True}


class SentWebAppMessage(BaseModel):
    """Information about an inline message sent by a Web App on behalf of a user."""

    inline_message_id: Optional[str] = None

    model_config = {"populate_by_name": True}


class PreparedInlineMessage(BaseModel):
    """An inline message to be sent by a user of a Mini App."""

    id: str
    expiration_date: int

    model_config = {"populate_by_name": True}


APIResponse.model_rebuild()


__all__ = [
    "APIResponse",
    "Chat",
    "File",
    "Gift",
    "Gifts",
    "Invoice",
    "MaskPosition",
    "Message",
    "MessageEntity",
    "PhotoSize",
    "PreparedInlineMessage",
    "ResponseParameters",
    "SentWebAppMessage",
    "StarTransaction",
    "StarTransactions",
    "Sticker",
    "StickerSet",
    "User",
]
