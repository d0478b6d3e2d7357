"""Request model for a single JSON POST."""

from __future__ import annotations

from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator

JSON_CONTENT_TYPE = "application/json"


class PostPayload(BaseModel):
    """Represents one outbound POST: a target URL and a serialized body.

    The body is treated as an opaque string.  It is expected to hold
    JSON already serialized by the caller but is never parsed here; the
    only JSON-specific behaviour is the ``Content-Type`` header sent
    along with it.  The URL must be absolute with an ``http`` or
    ``https`` scheme.
    """

    url: str = Field(..., description="Absolute http(s) URL the body is posted to.")
    body: str = Field(..., description="Serialized JSON payload, sent verbatim.")

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https"):
            raise ValueError(f"URL scheme must be http or https, got '{value}'")
        if not parts.hostname:
            raise ValueError(f"URL must include a host, got '{value}'")
        # urlsplit only parses the port on access.
        try:
            parts.port
        except ValueError as exc:
            raise ValueError(f"URL has an invalid port, got '{value}'") from exc
        return value

    @property
    def is_secure(self) -> bool:
        return urlsplit(self.url).scheme == "https"

    @property
    def encoded_body(self) -> bytes:
        return self.body.encode("utf-8")

    @property
    def content_length(self) -> int:
        """Length of the body in UTF-8 bytes, as sent on the wire."""

        return len(self.encoded_body)

    @property
    def target(self) -> str:
        """Return the request target (path and query) for the request line."""

        parts = urlsplit(self.url)
        path = parts.path or "/"
        if parts.query:
            path = f"{path}?{parts.query}"
        return path

    def headers(self, *, with_length: bool = False) -> dict[str, str]:
        """Return the headers sent with this payload.

        Only the low-level backend sets ``Content-Length`` explicitly;
        the fetch-style client computes framing itself.
        """

        headers = {"Content-Type": JSON_CONTENT_TYPE}
        if with_length:
            headers["Content-Length"] = str(self.content_length)
        return headers
