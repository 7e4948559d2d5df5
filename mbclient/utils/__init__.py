"""Utility helpers for the mountebank REST client."""

from .urls import build_url, encode_query, join_path, parse_root

__all__ = [
    "build_url",
    "encode_query",
    "join_path",
    "parse_root",
]
