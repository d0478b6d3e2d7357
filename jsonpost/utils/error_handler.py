"""Error handling utilities and custom exceptions."""

from __future__ import annotations

from functools import wraps
from typing import Any, Awaitable, Callable, TypeVar

from loguru import logger

T = TypeVar("T")


class PostError(Exception):
    """Base class for errors raised by this package."""

    pass


class UnsupportedRuntimeError(PostError, RuntimeError):
    """Raised when no HTTP client capability is available for a post."""

    def __init__(self, message: str = "unsupported runtime: no HTTP client capability available") -> None:
        super().__init__(message)


class InvalidRequestError(PostError, ValueError):
    """Raised when a post is attempted with an unusable URL or body."""

    pass


class TransportError(PostError):
    """A failure sending or receiving data over a transport.

    The error carries only a message.  The exception it was built from,
    if any, is available as ``__cause__``.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @classmethod
    def unknown(cls) -> "TransportError":
        """Create an error for a failure that carried no description."""
        return cls("unknown error")

    @classmethod
    def from_exception(cls, exc: BaseException) -> "TransportError":
        if isinstance(exc, TransportError):
            return exc
        message = str(exc)
        if not message:
            return cls.unknown()
        return cls(message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransportError):
            return NotImplemented
        return self.message == other.message

    def __hash__(self) -> int:
        return hash(self.message)


class MockTransportError(TransportError):
    """Raised by the mock transport when a call does not match expectations."""

    pass


# ---------------------------------------------------------------------------
# Decorators for asynchronous transport methods


def translate_transport_errors(
    func: Callable[..., Awaitable[T]],
) -> Callable[..., Awaitable[T]]:
    """Decorator converting failures of a transport call into TransportError.

    Configuration errors (no capability available, malformed URL) are
    translated as well, so callers of a transport only ever need to
    handle :class:`TransportError`.  The original exception is chained.
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return await func(*args, **kwargs)
        except TransportError:
            raise
        except Exception as exc:
            logger.error("Transport error in {}: {!r}", func.__name__, exc)
            raise TransportError.from_exception(exc) from exc

    return wrapper
