"""JSON document scanning used by the response decoder.

Positions returned here index the body text as decoded with
``surrogateescape``, so :func:`byte_offset` maps them back onto the exact
bytes that were read, even when the body is not valid UTF-8.
"""

from __future__ import annotations

import json
import re
from typing import Any, Sequence, Tuple

_JSON_WHITESPACE = " \t\n\r"

# Strings are matched whole so constants inside them are skipped
_CONSTANT_TOKEN = re.compile(r'"(?:[^"\\]|\\.)*"|-?Infinity|NaN')

# pydantic error types reporting a value of the wrong JSON kind
_TYPE_ERROR_EXTRAS = frozenset({"int_from_float", "none_required"})


class _ConstantFound(Exception):
    pass


def _reject_constant(name: str) -> Any:
    raise _ConstantFound(name)


_decoder = json.JSONDecoder(parse_constant=_reject_constant)


def body_text(raw: bytes) -> str:
    return raw.decode("utf-8", errors="surrogateescape")


def byte_offset(text: str, pos: int) -> int:
    """Number of body bytes up to character ``pos`` of ``text``."""
    return len(text[:pos].encode("utf-8", errors="surrogateescape"))


def sanitize(document: str) -> str:
    """Replace bytes that were not valid UTF-8 with U+FFFD."""
    return document.encode("utf-8", errors="surrogateescape").decode("utf-8", errors="replace")


def skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _JSON_WHITESPACE:
        pos += 1
    return pos


def _locate_constant(text: str, start: int) -> int:
    for match in _CONSTANT_TOKEN.finditer(text, start):
        if not match.group().startswith('"'):
            return match.start()
    return start


def raw_decode(text: str, pos: int) -> Tuple[Any, int]:
    """Decode the JSON value starting at ``pos``; return it and its end.

    ``NaN``, ``Infinity`` and ``-Infinity`` are not JSON and fail like any
    other unexpected token.
    """
    try:
        return _decoder.raw_decode(text, pos)
    except _ConstantFound:
        raise json.JSONDecodeError("Expecting value", text, _locate_constant(text, pos)) from None


def value_end(text: str, pos: int, loc: Sequence[Any]) -> int:
    """End position of the value found by following ``loc`` from ``pos``.

    ``pos`` must point at the first character of an already validated JSON
    value. When a ``loc`` step has no counterpart in the document, the end
    of the deepest value reached is returned.
    """
    _, end = _decoder.raw_decode(text, pos)
    if not loc:
        return end
    head, rest = loc[0], loc[1:]
    found = None
    if text[pos] == "{":
        i = skip_whitespace(text, pos + 1)
        while text[i] != "}":
            key, i = _decoder.raw_decode(text, i)
            i = skip_whitespace(text, skip_whitespace(text, i) + 1)
            if key == str(head):
                found = i  # last duplicate wins, as when decoding
            _, i = _decoder.raw_decode(text, i)
            i = skip_whitespace(text, i)
            if text[i] == ",":
                i = skip_whitespace(text, i + 1)
    elif text[pos] == "[" and isinstance(head, int):
        i = skip_whitespace(text, pos + 1)
        index = 0
        while text[i] != "]":
            if index == head:
                found = i
                break
            _, i = _decoder.raw_decode(text, i)
            i = skip_whitespace(text, i)
            if text[i] == ",":
                i = skip_whitespace(text, i + 1)
            index += 1
    if found is None:
        return end
    return value_end(text, found, rest)


def json_kind(value: Any) -> str:
    """Name the JSON kind of a decoded Python value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def is_type_error(error: dict) -> bool:
    kind = error.get("type", "")
    return kind.endswith("_type") or kind in _TYPE_ERROR_EXTRAS
