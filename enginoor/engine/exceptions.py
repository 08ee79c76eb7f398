"""Exceptions for the Engine API client."""

import asyncio
from typing import Optional


class EngineClientError(Exception):
    """Base class for all client-side failures."""


class ConfigError(EngineClientError):
    """Client configuration is missing or unusable."""


class SerializationError(EngineClientError):
    """Request could not be encoded as JSON."""


class AuthError(EngineClientError):
    """JWT could not be signed."""


class TransportError(EngineClientError):
    """Connection failed or the server answered with a non-200 status."""

    def __init__(self, status: Optional[int], message: str):
        self.status = status
        self.message = message
        if status is None:
            super().__init__(f"Engine API transport error: {message}")
        else:
            super().__init__(f"Engine API HTTP {status}: {message}")


class DecodeError(EngineClientError):
    """Response body was not a JSON object."""


class RequestTimeoutError(EngineClientError, TimeoutError):
    """Request deadline expired before the server responded."""


CanceledError = asyncio.CancelledError


class EngineAPIError(EngineClientError):
    """Error object returned inside a JSON-RPC response."""

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(f"Engine API error {code}: {message}")
