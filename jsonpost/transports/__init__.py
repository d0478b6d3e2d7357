"""Transports carrying serialized JSON-RPC requests."""

from .base import Transport  # noqa: F401
from .http_transport import HttpTransport  # noqa: F401
from .mock import MockTransport  # noqa: F401
