"""
REST transport for the mountebank client.

Request construction and JSON response decoding shared by every imposter
API operation.
"""

from .client import Client
from .context import Cancelled, Context, ContextError, DeadlineExceeded
from .errors import InvalidMethodError, UnmarshalTypeError
from .request import JSON_MEDIA_TYPE, OutboundRequest

__all__ = [
    "Client",
    "Context",
    "ContextError",
    "Cancelled",
    "DeadlineExceeded",
    "InvalidMethodError",
    "UnmarshalTypeError",
    "OutboundRequest",
    "JSON_MEDIA_TYPE",
]
