"""POST serialized JSON over whichever HTTP capability is available."""

from loguru import logger

from .config.transport_config import TransportConfig, get_transport_config  # noqa: F401
from .services.post_service import PostRequest, post  # noqa: F401
from .services.fetch_client import FetchBackend  # noqa: F401
from .services.request_client import RequestBackend  # noqa: F401
from .transports import HttpTransport, MockTransport, Transport  # noqa: F401
from .utils.error_handler import (  # noqa: F401
    InvalidRequestError,
    PostError,
    TransportError,
    UnsupportedRuntimeError,
)
from .utils.logger import setup_logging  # noqa: F401

# Silent as a library until an application opts in via setup_logging().
logger.disable("jsonpost")
