"""Request encoder: turns a validated operation into a transport payload.

Three paths exist:

* **JSON** for operations whose fields hold no :class:`FileUpload`.
* **Multipart** as soon as one upload is reachable from the operation.  The
  body is a generator pulled by the HTTP layer, so file bytes are streamed
  in :data:`CHUNK_SIZE` pieces instead of being buffered.
* **Query** for ``GET`` operations; uploads are rejected there.

Unset (``None``) fields are always omitted, never sent as ``null``.
"""

from __future__ import annotations

import binascii
import json
import os
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel

from botmethods.exceptions import EncodingError
from botmethods.files import CHUNK_SIZE, FileId, FileUpload, FileUrl

JSON_CONTENT_TYPE = "application/json"

_ATTACH_PREFIX = "attach://"


# ── Payload ──────────────────────────────────────────────────────────────────


class PayloadStream:
    """Sequential, single-pass byte stream over a chunk generator.

    The first failure raised by the producer is stored and raised again on
    every later read.  Any error from an upload source, such as a failed
    read, a closed stream or non-bytes data, is reported as
    :class:`EncodingError`.  Closing the stream closes the producer, which
    releases any file the encoder opened itself.
    """

    def __init__(self, chunks: Iterator[bytes]) -> None:
        self._chunks = chunks
        self._buffer = b""
        self._error: Optional[EncodingError] = None
        self._exhausted = False

    def __iter__(self) -> Iterator[bytes]:
        if self._buffer:
            pending, self._buffer = self._buffer, b""
            yield pending
        while True:
            chunk = self._next_chunk()
            if chunk is None:
                return
            if chunk:
                yield chunk

    def read(self, size: int = -1) -> bytes:
        """Return up to *size* bytes, or everything that is left when *size* < 0."""
        if size is None or size < 0:
            parts = [self._buffer]
            self._buffer = b""
            parts.extend(iter(self._next_chunk, None))
            return b"".join(parts)

        while len(self._buffer) < size:
            chunk = self._next_chunk()
            if chunk is None:
                break
            self._buffer += chunk
        data, self._buffer = self._buffer[:size], self._buffer[size:]
        return data

    def close(self) -> None:
        self._exhausted = True
        self._buffer = b""
        close = getattr(self._chunks, "close", None)
        if close is not None:
            close()

    @property
    def closed(self) -> bool:
        return self._exhausted

    def __enter__(self) -> "PayloadStream":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _next_chunk(self) -> Optional[bytes]:
        if self._error is not None:
            raise self._error
        if self._exhausted:
            return None
        try:
            chunk = next(self._chunks)
        except StopIteration:
            self._exhausted = True
            return None
        except EncodingError as exc:
            self._error = exc
        except Exception as exc:
            self._error = EncodingError(f"failed to read upload: {exc}")
            self._error.__cause__ = exc
        else:
            if isinstance(chunk, (bytes, bytearray)):
                return bytes(chunk)
            self._error = EncodingError(f"upload produced {type(chunk).__name__}, expected bytes")
        self.close()
        raise self._error


class TransportPayload:
    """Encoded request: content type plus a lazily produced body.

    Attributes:
        content_type: Value for the ``Content-Type`` header, ``None`` for query requests.
        body: Byte stream consumed by the HTTP layer.
        params: Query-string parameters for ``GET`` requests.
    """

    def __init__(
        self,
        content_type: Optional[str],
        body: PayloadStream,
        params: Optional[Dict[str, str]] = None,
    ) -> None:
        self.content_type = content_type
        self.body = body
        self.params = params

    @property
    def is_multipart(self) -> bool:
        return bool(self.content_type) and self.content_type.startswith("multipart/form-data")

    def close(self) -> None:
        self.body.close()

    def __repr__(self) -> str:
        return f"TransportPayload(content_type={self.content_type!r})"


# ── Wire conversion ──────────────────────────────────────────────────────────


class _Attachments:
    """Uploads nested inside JSON-encoded fields, referenced as ``attach://<name>``."""

    def __init__(self) -> None:
        self.items: List[Tuple[str, FileUpload]] = []

    def attach(self, upload: FileUpload) -> str:
        name = f"file{len(self.items)}"
        self.items.append((name, upload))
        return f"{_ATTACH_PREFIX}{name}"


def wire_fields(model: BaseModel) -> Iterator[Tuple[str, Any]]:
    """Yield ``(wire_name, value)`` for every set field of *model*, in declaration order."""
    for name, field in type(model).model_fields.items():
        value = getattr(model, name)
        if value is None:
            continue
        yield field.serialization_alias or field.alias or name, value


def to_wire(value: Any, attachments: Optional[_Attachments] = None) -> Any:
    """Convert *value* into JSON-ready data.

    Raises:
        EncodingError: If an upload is met and no multipart body is being built.
    """
    if isinstance(value, FileUpload):
        if attachments is None:
            raise EncodingError(f"file {value.filename!r} can only be sent in a multipart request")
        return attachments.attach(value)
    if isinstance(value, (FileId, FileUrl)):
        return value.to_wire()
    if isinstance(value, BaseModel):
        return {name: to_wire(item, attachments) for name, item in wire_fields(value)}
    if isinstance(value, (list, tuple)):
        return [to_wire(item, attachments) for item in value]
    if isinstance(value, dict):
        return {key: to_wire(item, attachments) for key, item in value.items() if item is not None}
    return value


def has_uploads(value: Any) -> bool:
    """Return ``True`` if a :class:`FileUpload` is reachable from *value*."""
    if isinstance(value, FileUpload):
        return True
    if isinstance(value, BaseModel):
        return any(has_uploads(item) for _, item in wire_fields(value))
    if isinstance(value, (list, tuple)):
        return any(has_uploads(item) for item in value)
    if isinstance(value, dict):
        return any(has_uploads(item) for item in value.values())
    return False


def format_value(value: Any) -> str:
    """Render a wire value as a form or query field.

    Booleans become ``true``/``false``, numbers are locale-independent and
    objects or lists are embedded as compact JSON.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, str):
        return value
    return _dumps(value)


def _dumps(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


# ── Multipart writer ─────────────────────────────────────────────────────────


def _quote(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\r", "%0D")
        .replace("\n", "%0A")
    )


class MultipartWriter:
    """Produces a ``multipart/form-data`` body part by part.

    The boundary is generated at construction, so :attr:`content_type` is
    available before the first byte is written.
    """

    def __init__(self, boundary: Optional[str] = None) -> None:
        self.boundary = boundary or binascii.hexlify(os.urandom(16)).decode("ascii")

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"

    def field(self, name: str, value: str) -> bytes:
        head = (
            f"--{self.boundary}\r\n"
            f'Content-Disposition: form-data; name="{_quote(name)}"\r\n'
            "\r\n"
        )
        return head.encode("utf-8") + value.encode("utf-8") + b"\r\n"

    def file_header(self, name: str, upload: FileUpload) -> bytes:
        head = (
            f"--{self.boundary}\r\n"
            f'Content-Disposition: form-data; name="{_quote(name)}"; filename="{_quote(upload.filename)}"\r\n'
            f"Content-Type: {upload.content_type}\r\n"
            "\r\n"
        )
        return head.encode("utf-8")

    def closing(self) -> bytes:
        return f"--{self.boundary}--\r\n".encode("ascii")

    def stream(
        self,
        fields: List[Tuple[str, str]],
        files: List[Tuple[str, FileUpload]],
        chunk_size: int = CHUNK_SIZE,
    ) -> Iterator[bytes]:
        """Yield the whole body: plain fields first, then every file part."""
        for name, value in fields:
            yield self.field(name, value)
        for name, upload in files:
            yield self.file_header(name, upload)
            yield from upload.iter_chunks(chunk_size)
            yield b"\r\n"
        yield self.closing()


# ── Encoders ─────────────────────────────────────────────────────────────────


def encode_json(model: BaseModel) -> TransportPayload:
    """Encode *model* as an ``application/json`` body."""

    def produce() -> Iterator[bytes]:
        data = {name: to_wire(value) for name, value in wire_fields(model)}
        yield _dumps(data).encode("utf-8")

    return TransportPayload(JSON_CONTENT_TYPE, PayloadStream(produce()))


def encode_multipart(model: BaseModel, boundary: Optional[str] = None) -> TransportPayload:
    """Encode *model* as a streamed ``multipart/form-data`` body.

    Top-level uploads become file parts under their own field name.  Uploads
    nested in objects or lists are replaced by ``attach://fileN`` and sent as
    separate parts.
    """
    writer = MultipartWriter(boundary)
    attachments = _Attachments()
    fields: List[Tuple[str, str]] = []
    files: List[Tuple[str, FileUpload]] = []

    for name, value in wire_fields(model):
        if isinstance(value, FileUpload):
            files.append((name, value))
        else:
            fields.append((name, format_value(to_wire(value, attachments))))
    files.extend(attachments.items)

    return TransportPayload(writer.content_type, PayloadStream(writer.stream(fields, files)))


def encode_query(model: BaseModel) -> TransportPayload:
    """Encode *model* as query-string parameters with an empty body.

    Raises:
        EncodingError: If the model carries a file upload.
    """
    if has_uploads(model):
        raise EncodingError("file uploads can't be sent in a GET request")
    params = {name: format_value(to_wire(value)) for name, value in wire_fields(model)}
    return TransportPayload(None, PayloadStream(iter(())), params=params)


def encode(model: BaseModel) -> TransportPayload:
    """Pick multipart when an upload is reachable from *model*, JSON otherwise."""
    if has_uploads(model):
        return encode_multipart(model)
    return encode_json(model)
