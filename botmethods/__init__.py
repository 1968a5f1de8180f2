"""Typed Telegram Bot API requests with local validation and streamed uploads.

Each remote method is a frozen pydantic model.  :class:`BotApiClient`
validates it, encodes it as JSON or multipart form data and decodes the
response into the method's result type.

Usage::

    from botmethods import BotApiClient, FileUpload
    from botmethods.methods import SendSticker

    with BotApiClient(token) as bot:
        bot.execute(SendSticker(chat_id=42, sticker=FileUpload.from_path("cat.webp")))
"""

from botmethods.client import BotApiClient
from botmethods.exceptions import (
    APIException,
    BotApiError,
    EncodingError,
    FieldViolation,
    TransportError,
    ValidationError,
)
from botmethods.files import FileId, FileUpload, FileUrl, InputFile

__all__ = [
    "BotApiClient",
    "APIException",
    "BotApiError",
    "EncodingError",
    "FieldViolation",
    "TransportError",
    "ValidationError",
    "FileId",
    "FileUpload",
    "FileUrl",
    "InputFile",
]
