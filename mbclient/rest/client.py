"""REST client primitives shared by every imposter API operation.

Higher-level operations build a request with :meth:`Client.new_request`,
send it through ``client.session`` and hand the response body to
:meth:`Client.decode_response_body` together with the request it answers.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import IO, TYPE_CHECKING, Any, Optional, Union
from urllib.parse import SplitResult

import requests
from pydantic import TypeAdapter, ValidationError

from mbclient.utils.urls import Query, build_url, parse_root

from . import decoding
from .context import Context
from .errors import UnmarshalTypeError
from .request import Body, OutboundRequest, headers_for, validate_method

if TYPE_CHECKING:
    from mbclient.configs.config import Config

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


@lru_cache(maxsize=128)
def _adapter_for(into: Any) -> TypeAdapter:
    return TypeAdapter(into)


def _read_body(body: IO[bytes], ctx: Context) -> bytes:
    # A read already in progress is bounded by the socket timeout, not ctx
    chunks = []
    while True:
        ctx.raise_if_done()
        chunk = body.read(_CHUNK_SIZE)
        if not chunk:
            break
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        chunks.append(chunk)
    return b"".join(chunks)


class Client:
    """Builds requests against a root endpoint and decodes JSON responses."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        root: Union[str, SplitResult, None] = None,
        *,
        timeout: Optional[float] = None,
    ) -> None:
        self.session = session if session is not None else requests.Session()
        self._root = parse_root(root)
        self.timeout = timeout
        logger.debug("Client initialized with root=%s timeout=%s", self._root.geturl(), timeout)

    @classmethod
    def from_config(cls, config: "Config", session: Optional[requests.Session] = None) -> "Client":
        """Create a client for the endpoint and timeout named in ``config``."""
        return cls(session, config.root_endpoint, timeout=config.request_timeout)

    @property
    def root(self) -> SplitResult:
        return self._root

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------
    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying :class:`requests.Session`."""
        self.session.close()

    def new_request(
        self,
        ctx: Optional[Context],
        method: str,
        path: str,
        body: Body = None,
        query: Optional[Query] = None,
    ) -> OutboundRequest:
        """Build a JSON request for ``path`` relative to the root endpoint.

        An empty ``method`` means GET. Raises
        :class:`~mbclient.rest.errors.InvalidMethodError` when ``method`` is
        not a valid HTTP method token. Nothing is sent.
        """
        method = validate_method(method)
        if ctx is None:
            ctx = Context.with_timeout(self.timeout) if self.timeout is not None else Context.background()
        url = build_url(self._root, path, query)
        request = OutboundRequest(
            method=method,
            url=url,
            headers=headers_for(method),
            body=body,
            context=ctx,
        )
        logger.debug("Built %s request to %s with headers %s", method, url, dict(request.headers))
        return request

    def decode_response_body(
        self,
        body: IO[bytes],
        into: Any = Any,
        *,
        request: Optional[OutboundRequest] = None,
        ctx: Optional[Context] = None,
    ) -> Any:
        """Decode the first JSON value in ``body`` as an instance of ``into``.

        ``into`` is anything pydantic can validate against (a model, a
        dataclass, ``dict[str, int]`` ...); the default returns the plain
        decoded JSON. ``body`` is always closed before returning.

        Reading stops with the context's
        :class:`~mbclient.rest.context.ContextError` once ``ctx`` is done,
        defaulting to the context of ``request``. The context is checked
        before every chunk read; a read that is already blocked is bounded
        by the timeout the request was sent with.

        Malformed JSON (including ``NaN`` and ``Infinity``) raises
        :class:`json.JSONDecodeError` unchanged. A value of the wrong JSON
        kind raises :class:`UnmarshalTypeError`; any other validation
        failure, such as a missing field, raises pydantic's
        :class:`~pydantic.ValidationError` unchanged.
        """
        if ctx is None:
            ctx = request.context if request is not None else Context.background()
        try:
            text = decoding.body_text(_read_body(body, ctx))
            start = decoding.skip_whitespace(text, 0)
            value, end = decoding.raw_decode(text, start)
            document = text[start:end]
            clean = decoding.sanitize(document)
            if into is Any:
                return value if clean == document else decoding.raw_decode(clean, 0)[0]
            try:
                return _adapter_for(into).validate_json(clean, strict=True)
            except ValidationError as exc:
                errors = exc.errors()
                if not all(decoding.is_type_error(error) for error in errors):
                    raise
                error = errors[0]
                loc = tuple(error.get("loc", ()))
                raise UnmarshalTypeError(
                    value=decoding.json_kind(error.get("input")),
                    type=into,
                    offset=decoding.byte_offset(text, decoding.value_end(text, start, loc)),
                    field=".".join(str(part) for part in loc),
                ) from exc
        finally:
            body.close()


__all__ = ["Client"]
