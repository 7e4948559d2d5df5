"""
mbclient - Python client for mountebank imposter servers

This package contains the REST transport and configuration used to talk to
the mountebank JSON API.
"""

__version__ = "0.1.0"

__all__ = [
    "configs",
    "rest",
    "utils",
]
