"""Exception hierarchy for the botmethods Telegram SDK.

Four failure kinds are kept apart so callers can decide what is retryable:

* :class:`ValidationError` — local, detected before any network I/O.
* :class:`EncodingError` — local, raised while producing the request body.
* :class:`TransportError` — the HTTP exchange itself failed.
* :class:`APIException` — Telegram answered with ``ok: false``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional


class BotApiError(Exception):
    """Base class for every error raised by this package."""


@dataclass(frozen=True)
class FieldViolation:
    """One broken rule on one field.

    Attributes:
        field: Wire path of the offending value, e.g. ``prices[1].label``.
        message: What is wrong, phrased to follow the field name.
    """

    field: str
    message: str

    def prefixed(self, prefix: str) -> "FieldViolation":
        """Return a copy whose path is nested under *prefix*."""
        return FieldViolation(f"{prefix}.{self.field}", self.message)

    def __str__(self) -> str:
        return f"{self.field} {self.message}"


class ValidationError(BotApiError):
    """Every rule violation found on a request, in the order they were checked."""

    def __init__(self, violations: Iterable[FieldViolation]) -> None:
        self.violations: List[FieldViolation] = list(violations)
        super().__init__("; ".join(str(v) for v in self.violations) or "invalid request")

    @property
    def fields(self) -> List[str]:
        """Paths of the offending fields, duplicates preserved."""
        return [v.field for v in self.violations]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return self.violations == other.violations

    def __hash__(self) -> int:
        return hash(tuple(self.violations))

    def __len__(self) -> int:
        return len(self.violations)


class EncodingError(BotApiError):
    """The request body could not be produced, e.g. an unreadable upload."""


class TransportError(BotApiError):
    """The HTTP exchange failed before a valid API envelope was received.

    Attributes:
        endpoint: Remote method name the request targeted.
        status_code: HTTP status, when a response arrived at all.
    """

    def __init__(self, message: str, endpoint: str = "", status_code: Optional[int] = None) -> None:
        self.endpoint = endpoint
        self.status_code = status_code
        super().__init__(message)


class APIException(BotApiError):
    """Telegram processed the request and reported ``ok: false``.

    Attributes:
        error_code: Numeric error code from the envelope (mirrors the HTTP status).
        description: Human-readable reason supplied by Telegram.
        parameters: ``ResponseParameters`` payload as a dict, when present.
        response_body: Raw envelope as a dict.
    """

    def __init__(
        self,
        error_code: int,
        description: Optional[str] = None,
        parameters: Optional[Dict[str, Any]] = None,
        response_body: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialise with the error code and optional envelope details."""
        self.error_code = error_code
        self.description = description or "Unknown error"
        self.parameters = parameters or {}
        self.response_body = response_body or {}
        super().__init__(self._render())

    @property
    def retry_after(self) -> Optional[int]:
        """Seconds to wait before repeating a flood-limited request."""
        return self.parameters.get("retry_after")

    @property
    def migrate_to_chat_id(self) -> Optional[int]:
        """New supergroup id when the target group was migrated."""
        return self.parameters.get("migrate_to_chat_id")

    def _render(self) -> str:
        message = f"API error {self.error_code}: {self.description}"
        if self.migrate_to_chat_id is not None:
            message += f", the group has been migrated to supergroup with id={self.migrate_to_chat_id}"
        if self.retry_after is not None:
            message += f", retry after {self.retry_after} seconds"
        return message
