"""Expose commonly used model classes at the package level.

Importing these classes here allows consumers to write concise imports like::

    from jsonpost.models import PostPayload, Backend
"""

from .post_payload import PostPayload  # noqa: F401
from .enums import Backend  # noqa: F401
from .jsonrpc import JsonRpcRequest, JsonRpcResponse, JsonRpcErrorObject  # noqa: F401
