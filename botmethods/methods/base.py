"""Base class shared by every Bot API operation."""

from __future__ import annotations

from typing import Any, ClassVar, Literal

from botmethods.encoding import TransportPayload, encode, encode_query, has_uploads
from botmethods.validation import TelegramObject


class TelegramMethod(TelegramObject):
    """One remote method call.

    Subclasses declare their wire fields as pydantic fields and set:

    * ``endpoint``: the remote method name, e.g. ``"sendInvoice"``.
    * ``result_type``: the shape ``result`` is decoded into on success.
    * ``http_method``: ``"POST"`` unless the method takes query parameters only.

    Instances are frozen, validated once, encoded once and then discarded.
    """

    endpoint: ClassVar[str]
    result_type: ClassVar[Any] = bool
    http_method: ClassVar[Literal["GET", "POST"]] = "POST"

    def requires_multipart(self) -> bool:
        """``True`` when at least one file upload is reachable from this call."""
        return has_uploads(self)

    def encode(self) -> TransportPayload:
        """Build the request body for this call.

        Raises:
            EncodingError: If a ``GET`` method carries an upload.
        """
        if self.http_method == "GET":
            return encode_query(self)
        return encode(self)

