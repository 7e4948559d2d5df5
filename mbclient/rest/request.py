"""Outbound request values and the header policy applied to them."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import IO, Optional, Union

import requests
from requests.structures import CaseInsensitiveDict

from .context import Context
from .errors import InvalidMethodError

JSON_MEDIA_TYPE = "application/json"

# RFC 7230 token
_METHOD_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")

# Methods that carry a JSON payload and therefore declare its Content-Type
_PAYLOAD_METHODS = frozenset({"POST", "PUT"})

Body = Union[bytes, IO[bytes], None]


def validate_method(method: str) -> str:
    """Return the method to send or raise :class:`InvalidMethodError`.

    An empty method means GET.
    """
    if method == "":
        return "GET"
    if not isinstance(method, str) or not _METHOD_TOKEN.fullmatch(method):
        raise InvalidMethodError(method)
    return method


def headers_for(method: str) -> CaseInsensitiveDict:
    """Return the JSON headers sent with ``method``.

    Every request accepts JSON. Only POST and PUT send a JSON body, so only
    they declare a ``Content-Type``; any other verb gets ``Accept`` alone.
    """
    headers = CaseInsensitiveDict({"Accept": JSON_MEDIA_TYPE})
    if method in _PAYLOAD_METHODS:
        headers["Content-Type"] = JSON_MEDIA_TYPE
    return headers


@dataclass(frozen=True, eq=True, unsafe_hash=False)
class OutboundRequest:
    """A fully built request that has not been sent yet."""

    # headers are mutable, so requests compare by value but do not hash
    __hash__ = None  # type: ignore[assignment]

    method: str
    url: str
    headers: CaseInsensitiveDict
    body: Body = None
    context: Context = field(default_factory=Context.background, compare=False, repr=False)

    @property
    def timeout(self) -> Optional[float]:
        """Time left on the request's context, for ``Session.send(timeout=...)``."""
        return self.context.remaining()

    def to_requests(self) -> requests.Request:
        """Return an equivalent :class:`requests.Request` for a session to prepare."""
        return requests.Request(
            method=self.method,
            url=self.url,
            headers=dict(self.headers),
            data=self.body,
        )


__all__ = [
    "JSON_MEDIA_TYPE",
    "OutboundRequest",
    "headers_for",
    "validate_method",
]
