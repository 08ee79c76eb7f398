"""Engine API client for communication with execution layer."""

from .exceptions import (
    EngineClientError,
    ConfigError,
    SerializationError,
    AuthError,
    TransportError,
    DecodeError,
    RequestTimeoutError,
    CanceledError,
    EngineAPIError,
)
from .types import (
    PayloadStatusEnum,
    PayloadStatus,
    ForkchoiceState,
    PayloadAttributes,
    ForkchoiceUpdateResponse,
)
from .client import EngineAPIClient

__all__ = [
    "EngineAPIClient",
    "EngineClientError",
    "ConfigError",
    "SerializationError",
    "AuthError",
    "TransportError",
    "DecodeError",
    "RequestTimeoutError",
    "CanceledError",
    "EngineAPIError",
    "PayloadStatus",
    "PayloadStatusEnum",
    "ForkchoiceState",
    "PayloadAttributes",
    "ForkchoiceUpdateResponse",
]
