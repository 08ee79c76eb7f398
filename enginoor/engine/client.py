"""Engine API client for communication with execution layer."""

import asyncio
import json
import logging
import time
from typing import Any, Optional, Union

import aiohttp
import jwt

from .exceptions import (
    AuthError,
    DecodeError,
    RequestTimeoutError,
    SerializationError,
    TransportError,
)
from .types import ForkchoiceState, PayloadAttributes
from .. import metrics

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
DEFAULT_JWT_EXPIRY = 60

# One HTTP exchange per call, so responses are never correlated by id.
REQUEST_ID = 1

FORKCHOICE_UPDATED_V1 = "engine_forkchoiceUpdatedV1"
NEW_PAYLOAD_V1 = "engine_newPayloadV1"


def _as_dict(value: Union[ForkchoiceState, PayloadAttributes, dict]) -> dict:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value


class EngineAPIClient:
    """Client for Ethereum Engine API.

    Every call mints its own JWT and sends exactly one HTTP request. The
    decoded response object is returned as-is; see ``types`` for optional
    typed views of it.
    """

    def __init__(
        self,
        url: str,
        jwt_secret: bytes,
        timeout: float = DEFAULT_TIMEOUT,
        jwt_expiry: int = DEFAULT_JWT_EXPIRY,
    ):
        self.url = url
        self.jwt_secret = jwt_secret
        self.timeout = timeout
        self.jwt_expiry = jwt_expiry
        self._session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    def _create_jwt_token(self) -> str:
        """Create a JWT token for authentication."""
        now = int(time.time())
        payload = {"iat": now, "exp": now + self.jwt_expiry}
        try:
            return jwt.encode(payload, self.jwt_secret, algorithm="HS256")
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            raise AuthError(f"failed to sign JWT: {e}") from e

    @staticmethod
    def _build_request(method: str, params: list) -> bytes:
        request = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": REQUEST_ID,
        }
        try:
            return json.dumps(request, allow_nan=False).encode()
        except (TypeError, ValueError) as e:
            raise SerializationError(f"failed to encode {method} request: {e}") from e

    async def _call(self, method: str, params: list, timeout: Optional[float] = None) -> dict:
        """Make a JSON-RPC call to the Engine API and return the decoded body."""
        body = self._build_request(method, params)
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._create_jwt_token()}",
        }
        deadline = self.timeout if timeout is None else timeout

        logger.debug(f"Engine API call: {method}")

        start_time = time.time()
        error_type = None

        try:
            session = await self._ensure_session()
            async with session.post(
                self.url,
                data=body,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=deadline),
            ) as response:
                if response.status != 200:
                    error_type = f"http_{response.status}"
                    text = await response.text(errors="replace")
                    raise TransportError(response.status, text[:200] or response.reason or "")
                raw = await response.read()
        except asyncio.TimeoutError as e:
            error_type = "timeout"
            logger.error(f"Engine API {method} timed out after {deadline}s")
            raise RequestTimeoutError(f"{method} timed out after {deadline}s") from e
        except asyncio.CancelledError:
            error_type = "canceled"
            logger.debug(f"Engine API {method} canceled")
            raise
        except aiohttp.ClientError as e:
            error_type = "connection_error"
            logger.error(f"Engine API connection error: {e}")
            raise TransportError(None, str(e)) from e
        finally:
            latency = time.time() - start_time
            metrics.record_engine_api_call(method, latency, error_type)

        try:
            result = json.loads(raw)
        except ValueError as e:
            metrics.record_engine_api_error(method, "decode_error")
            raise DecodeError(f"failed to decode {method} response: {e}") from e
        if not isinstance(result, dict):
            metrics.record_engine_api_error(method, "decode_error")
            raise DecodeError(f"{method} response is not a JSON object: {type(result).__name__}")

        logger.debug(f"Engine API response for {method}: {result}")
        return result

    async def forkchoice_updated_v1(
        self,
        forkchoice_state: Union[ForkchoiceState, dict],
        payload_attributes: Optional[Union[PayloadAttributes, dict]] = None,
        timeout: Optional[float] = None,
    ) -> dict:
        """Update the forkchoice state, optionally starting a payload build."""
        params: list[Any] = [_as_dict(forkchoice_state)]
        if payload_attributes is not None:
            params.append(_as_dict(payload_attributes))
        return await self._call(FORKCHOICE_UPDATED_V1, params, timeout=timeout)

    async def new_payload_v1(self, execution_payload: dict, timeout: Optional[float] = None) -> dict:
        """Send a new payload to the execution layer."""
        return await self._call(NEW_PAYLOAD_V1, [execution_payload], timeout=timeout)

    async def close(self) -> None:
        """Close the client session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
