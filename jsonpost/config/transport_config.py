"""Settings controlling how outbound JSON POST requests are issued.

Values are read from ``JSONPOST_*`` environment variables or a ``.env``
file.  ``backend`` decides which HTTP capabilities a default
:class:`~jsonpost.services.post_service.PostRequest` is built with:

``auto``
    both capabilities, the fetch-style ``httpx`` client preferred;
``fetch``
    only the ``httpx`` client;
``request``
    only the low-level ``http.client`` connection;
``none``
    no capability at all, every call fails as unsupported.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.enums import Backend

load_dotenv()


BACKEND_ALIASES = {
    "httpx": Backend.FETCH.value,
    "http.client": Backend.REQUEST.value,
    "http_client": Backend.REQUEST.value,
    "socket": Backend.REQUEST.value,
}


class TransportConfig(BaseSettings):
    """Backend selection and low-level tuning for JSON POST requests."""

    backend: Backend = Field(Backend.AUTO)
    request_timeout: Optional[float] = Field(None)
    chunk_size: int = Field(8192)
    follow_redirects: bool = Field(True)

    # Logging, applied by jsonpost.utils.logger.setup_logging
    log_level: str = Field("INFO")
    log_file: Optional[str] = Field(None)
    log_diagnose: bool = Field(False)

    @field_validator("backend", mode="before")
    @classmethod
    def normalise_backend(cls, value: Backend | str | None) -> Backend | str:
        if value is None or value == "":
            return Backend.AUTO
        if isinstance(value, Backend):
            return value
        if isinstance(value, str):
            candidate = value.strip().lower()
            return BACKEND_ALIASES.get(candidate, candidate)
        raise TypeError("JSONPOST_BACKEND must be provided as a string")

    @field_validator("request_timeout")
    @classmethod
    def validate_request_timeout(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError("JSONPOST_REQUEST_TIMEOUT must be positive")
        return value

    @field_validator("chunk_size")
    @classmethod
    def validate_chunk_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("JSONPOST_CHUNK_SIZE must be positive")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError("JSONPOST_LOG_LEVEL must be a valid Loguru level")
        return level

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="JSONPOST_",
        extra="ignore",
    )


@lru_cache()
def get_transport_config() -> TransportConfig:
    """Return a cached transport configuration instance."""

    return TransportConfig()
