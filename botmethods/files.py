"""InputFile: the three ways a file-valued field can be filled.

* :class:`FileId` refers to a file already stored on Telegram's servers.
* :class:`FileUrl` asks Telegram to fetch the file over HTTP.
* :class:`FileUpload` carries the raw bytes and forces a multipart request.

The active variant is chosen per call, so the same field (e.g. a sticker set
thumbnail) may travel as a JSON string on one request and as a file part on
the next.
"""

from __future__ import annotations

import io
import mimetypes
import os
from typing import Annotated, Any, BinaryIO, Iterator, Literal, Optional, Union
from urllib.parse import urlparse

from pydantic import Field

from botmethods.validation import TelegramObject, Violations

CHUNK_SIZE = 64 * 1024
_DEFAULT_MIME_TYPE = "application/octet-stream"


class FileId(TelegramObject):
    """Identifier of a file that already exists on the Telegram servers."""

    kind: Literal["id"] = "id"
    file_id: str

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("file_id", self.file_id)

    def to_wire(self) -> str:
        return self.file_id


class FileUrl(TelegramObject):
    """HTTP URL Telegram downloads the file from."""

    kind: Literal["url"] = "url"
    url: str

    def collect_violations(self, v: Violations) -> None:
        parsed = urlparse(self.url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            v.add("url", "must be an http:// or https:// URL")

    def to_wire(self) -> str:
        return self.url


class FileUpload(TelegramObject):
    """Raw file contents uploaded with the request.

    Exactly one source must be given: ``content`` (``bytes`` or a readable
    binary stream) or ``path`` (a local file opened lazily while the request
    body is streamed).  Streams supplied by the caller are read but never
    closed.
    """

    kind: Literal["upload"] = "upload"
    filename: str
    content: Optional[Any] = None
    path: Optional[str] = None
    mime_type: Optional[str] = None

    @classmethod
    def from_path(cls, path: Union[str, "os.PathLike[str]"], filename: Optional[str] = None, mime_type: Optional[str] = None) -> "FileUpload":
        path = os.fspath(path)
        return cls(filename=filename or os.path.basename(path), path=path, mime_type=mime_type)

    @classmethod
    def from_bytes(cls, data: bytes, filename: str, mime_type: Optional[str] = None) -> "FileUpload":
        return cls(filename=filename, content=bytes(data), mime_type=mime_type)

    @classmethod
    def from_stream(cls, stream: BinaryIO, filename: str, mime_type: Optional[str] = None) -> "FileUpload":
        return cls(filename=filename, content=stream, mime_type=mime_type)

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("filename", self.filename)
        if (self.content is None) == (self.path is None):
            v.add("content", "exactly one of content and path must be set")
        elif self.content is not None and not _is_readable(self.content):
            v.add("content", "must be bytes or a readable binary stream")
        elif self.path is not None and not self.path.strip():
            v.add("path", "can't be empty")

    @property
    def content_type(self) -> str:
        """MIME type sent with the file part."""
        if self.mime_type:
            return self.mime_type
        guessed, _ = mimetypes.guess_type(self.filename)
        return guessed or _DEFAULT_MIME_TYPE

    def iter_chunks(self, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
        """Yield the file contents without holding the whole file in memory.

        A file opened from :attr:`path` is closed when the generator finishes
        or is closed early.

        Raises:
            OSError: If the source cannot be opened or read.
        """
        if self.path is not None:
            with open(self.path, "rb") as fh:
                yield from _read_stream(fh, chunk_size)
        elif isinstance(self.content, (bytes, bytearray, memoryview)):
            data = memoryview(self.content)
            for start in range(0, len(data), chunk_size):
                yield bytes(data[start:start + chunk_size])
        else:
            yield from _read_stream(self.content, chunk_size)


InputFile = Annotated[Union[FileId, FileUrl, FileUpload], Field(discriminator="kind")]


def _is_readable(content: Any) -> bool:
    if isinstance(content, (bytes, bytearray, memoryview)):
        return True
    # Text streams yield str, not bytes.
    if isinstance(content, io.TextIOBase):
        return False
    return callable(getattr(content, "read", None))


def _read_stream(stream: Any, chunk_size: int) -> Iterator[bytes]:
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            return
        yield chunk
