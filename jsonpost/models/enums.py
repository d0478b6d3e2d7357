"""Enumerations used across models."""

from enum import Enum


class Backend(str, Enum):
    """Enum naming the HTTP capabilities a post can be issued with.

    ``FETCH`` is the high-level ``httpx`` client that returns a whole
    response, ``REQUEST`` is the low-level ``http.client`` connection
    that is driven header by header and read chunk by chunk.  ``AUTO``
    registers both and ``NONE`` registers neither.
    """

    AUTO = "auto"
    FETCH = "fetch"
    REQUEST = "request"
    NONE = "none"
