"""Rule helpers shared by every request object.

A :class:`Violations` collector is passed through an object's
``collect_violations`` hook; each helper records a :class:`FieldViolation`
when its rule is broken and never stops the walk, so a single
``validate()`` call reports every problem at once.

All helpers are pure: no I/O, no mutation of the values they inspect.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Iterator, List, Optional, Protocol, Sequence, Union

from pydantic import BaseModel

from botmethods.exceptions import FieldViolation, ValidationError

STICKER_SET_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")
MAX_SUGGESTED_TIPS = 4


class Validable(Protocol):
    def validate(self) -> Optional[ValidationError]: ...


class Violations:
    """Ordered, accumulating list of rule violations."""

    def __init__(self) -> None:
        self._items: List[FieldViolation] = []

    def __iter__(self) -> Iterator[FieldViolation]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def add(self, field: str, message: str) -> None:
        self._items.append(FieldViolation(field, message))

    def to_error(self) -> Optional[ValidationError]:
        """Wrap the collected violations, or return ``None`` when there are none."""
        if not self._items:
            return None
        return ValidationError(self._items)

    # ------------------------------------------------------------------
    #  Presence and identity
    # ------------------------------------------------------------------

    def not_blank(self, field: str, value: Optional[str]) -> None:
        """Identifier-like strings must contain something besides whitespace."""
        if value is None or not value.strip():
            self.add(field, "can't be empty")

    def positive_id(self, field: str, value: Optional[int]) -> None:
        # Channel and supergroup ids are negative; they are rejected here too.
        if value is None or value < 1:
            self.add(field, "must be a positive integer")

    def chat_id(self, field: str, value: Union[int, str, None]) -> None:
        """Validate a chat identifier by the variant that is populated.

        Integers are numeric ids, strings are ``@channelusername`` handles.
        """
        if isinstance(value, bool) or value is None:
            self.add(field, "must be an integer id or a username")
        elif isinstance(value, int):
            self.positive_id(field, value)
        else:
            self.not_blank(field, value)

    def require(self, field: str, value: Any, condition: str) -> None:
        """Record *field* as missing when a cross-field *condition* makes it mandatory."""
        if value is None or (isinstance(value, str) and not value.strip()):
            self.add(field, f"is required when {condition}")

    def exclusive(self, first: str, first_value: Any, second: str, second_value: Any) -> None:
        """Two optionals that cannot be combined."""
        if first_value is not None and second_value is not None:
            self.add(first, f"can't be used together with {second}")

    # ------------------------------------------------------------------
    #  Sizes and ranges
    # ------------------------------------------------------------------

    def length(self, field: str, value: Optional[str], minimum: int, maximum: int) -> None:
        """Character count of *value* must lie in ``[minimum, maximum]``."""
        size = len(value) if value is not None else 0
        if size < minimum or size > maximum:
            self.add(field, _between(minimum, maximum, "characters long"))

    def byte_length(self, field: str, value: Optional[str], minimum: int, maximum: int) -> None:
        """UTF-8 encoded size of *value* must lie in ``[minimum, maximum]``."""
        size = len(value.encode("utf-8")) if value is not None else 0
        if size < minimum or size > maximum:
            self.add(field, _between(minimum, maximum, "bytes long"))

    def in_range(
        self,
        field: str,
        value: Optional[float],
        minimum: Optional[float] = None,
        maximum: Optional[float] = None,
    ) -> None:
        if value is None:
            return
        if minimum is not None and value < minimum:
            self.add(field, f"must be at least {minimum}")
        elif maximum is not None and value > maximum:
            self.add(field, f"must be at most {maximum}")

    def count(
        self,
        field: str,
        items: Optional[Sequence[Any]],
        minimum: int = 0,
        maximum: Optional[int] = None,
    ) -> None:
        size = len(items) if items is not None else 0
        if size < minimum:
            self.add(field, f"must contain at least {minimum} element(s)")
        elif maximum is not None and size > maximum:
            self.add(field, f"must contain at most {maximum} element(s)")

    # ------------------------------------------------------------------
    #  Membership and patterns
    # ------------------------------------------------------------------

    def one_of(self, field: str, value: Optional[str], choices: Sequence[str]) -> None:
        if value not in choices:
            quoted = ", ".join(f'"{choice}"' for choice in choices)
            self.add(field, f"must be one of {quoted}")

    def matches(self, field: str, value: Optional[str], pattern: "re.Pattern[str]", message: str) -> None:
        if value is None or not pattern.match(value):
            self.add(field, message)

    # ------------------------------------------------------------------
    #  Domain rules
    # ------------------------------------------------------------------

    def sticker_set_name(self, field: str, value: Optional[str]) -> None:
        """Short sticker set name used in ``t.me/addstickers/`` URLs."""
        name = value or ""
        if len(name) < 1 or len(name) > 64:
            self.add(field, _between(1, 64, "characters long"))
        if name and not STICKER_SET_NAME_PATTERN.match(name):
            self.add(field, "must begin with a letter and contain only English letters, digits and underscores")
        if "__" in name:
            self.add(field, "can't contain consecutive underscores")

    def keywords(self, field: str, keywords: Optional[Sequence[str]]) -> None:
        """Up to 20 search keywords with a combined length of at most 64 characters."""
        if keywords is None:
            return
        self.count(field, keywords, maximum=20)
        if sum(len(keyword) for keyword in keywords) > 64:
            self.add(field, "must not exceed 64 characters in total")

    def tip_amounts(self, field: str, amounts: Optional[Sequence[int]], max_tip_amount: Optional[int]) -> None:
        """Suggested tips: at most four, non-negative, strictly increasing, capped."""
        if amounts is None:
            return
        if len(amounts) > MAX_SUGGESTED_TIPS:
            self.add(field, f"must contain at most {MAX_SUGGESTED_TIPS} element(s)")
        if any(amount < 0 for amount in amounts):
            self.add(field, "must contain only non-negative amounts")
        if any(earlier >= later for earlier, later in zip(amounts, amounts[1:])):
            self.add(field, "must be passed in a strictly increasing order")
        if max_tip_amount is not None and any(amount > max_tip_amount for amount in amounts):
            self.add(field, "must not exceed max_tip_amount")

    # ------------------------------------------------------------------
    #  Recursive delegation
    # ------------------------------------------------------------------

    def nested(self, field: str, value: Optional[Validable]) -> None:
        """Merge the violations of a nested object under *field*."""
        if value is None:
            return
        error = value.validate()
        if error is not None:
            self._items.extend(v.prefixed(field) for v in error.violations)

    def nested_items(self, field: str, items: Optional[Iterable[Validable]]) -> None:
        """Merge the violations of every element, indexed by position."""
        if items is None:
            return
        for index, item in enumerate(items):
            self.nested(f"{field}[{index}]", item)


def _between(minimum: int, maximum: int, unit: str) -> str:
    return f"must be between {minimum} and {maximum} {unit}"


class TelegramObject(BaseModel):
    """Immutable request value whose rules are declared in :meth:`collect_violations`.

    :meth:`validate` is an instance method checking the rules of an existing
    object.  It replaces pydantic's deprecated ``BaseModel.validate``
    classmethod, so ``Model.validate(data)`` is not available here; build
    instances with ``Model(**data)`` or ``Model.model_validate(data)``.
    """

    model_config = {"populate_by_name": True, "frozen": True, "arbitrary_types_allowed": True}

    def validate(self) -> Optional[ValidationError]:  # type: ignore[override]
        """Run every rule and return all violations, or ``None`` when valid."""
        violations = Violations()
        self.collect_violations(violations)
        return violations.to_error()

    def collect_violations(self, v: Violations) -> None:
        """Record the rules of this object into *v*. Objects without rules keep the default."""
