"""Helpers for assembling request URLs against a root endpoint."""

from __future__ import annotations

from typing import Mapping, Optional, Sequence, Union
from urllib.parse import SplitResult, quote, urlencode, urlsplit, urlunsplit
import logging

logger = logging.getLogger(__name__)

QueryValue = Union[str, Sequence[str]]
Query = Mapping[str, QueryValue]

# sub-delims allowed unescaped in a path segment (RFC 3986)
_PATH_SAFE = "/:@!$&'()*+,;="


def parse_root(root: Union[str, SplitResult, None]) -> SplitResult:
    """Return ``root`` as a :class:`SplitResult`, treating ``None`` as empty."""
    if root is None:
        return SplitResult("", "", "", "", "")
    if isinstance(root, SplitResult):
        return root
    return urlsplit(root)


def join_path(base: str, path: str) -> str:
    """Join ``base`` and ``path`` into a single absolute path.

    Empty segments are dropped so the result never contains ``//`` and never
    ends with a slash. Two empty inputs give an empty path.
    """
    parts = [p.strip("/") for p in (base or "", path or "")]
    parts = [p for p in parts if p]
    if not parts:
        return ""
    return "/" + "/".join(parts)


def encode_query(query: Optional[Query]) -> str:
    """URL-encode ``query`` with keys sorted and per-key value order kept."""
    if not query:
        return ""
    pairs = []
    for key in sorted(query):
        value = query[key]
        if isinstance(value, (str, bytes)):
            pairs.append((key, value))
        else:
            pairs.extend((key, v) for v in value)
    return urlencode(pairs)


def build_url(root: Union[str, SplitResult, None], path: str, query: Optional[Query] = None) -> str:
    """Resolve ``path`` and ``query`` against the ``root`` endpoint.

    An empty root produces a relative URL.
    """
    base = parse_root(root)
    full_path = quote(join_path(base.path, path), safe=_PATH_SAFE)
    url = urlunsplit((base.scheme, base.netloc, full_path, encode_query(query), ""))
    logger.debug("Built URL %s from root=%s path=%s", url, base.geturl(), path)
    return url
