"""Errors raised by the REST transport helpers."""

from __future__ import annotations

from typing import Any


class InvalidMethodError(ValueError):
    """The request method is not a valid HTTP method token."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f'invalid method "{method}"')


class UnmarshalTypeError(ValueError):
    """A JSON value did not fit the type it was decoded into.

    ``offset`` is the number of body bytes consumed when the value was read,
    ``value`` the JSON kind that was found (``"string"``, ``"object"`` ...),
    ``type`` the destination type and ``field`` the dotted path of the
    offending value inside it (empty for the top-level value).
    """

    def __init__(self, value: str, type: Any, offset: int, field: str = "") -> None:
        self.value = value
        self.type = type
        self.offset = offset
        self.field = field
        super().__init__(str(self))

    def __str__(self) -> str:
        type_name = getattr(self.type, "__name__", repr(self.type))
        if self.field:
            return f"cannot unmarshal {self.value} into field {self.field} of type {type_name}"
        return f"cannot unmarshal {self.value} into value of type {type_name}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnmarshalTypeError):
            return NotImplemented
        return (self.value, self.type, self.offset, self.field) == (
            other.value,
            other.type,
            other.offset,
            other.field,
        )

    __hash__ = None  # type: ignore[assignment]
