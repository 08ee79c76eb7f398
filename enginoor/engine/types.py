"""Engine API data types."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .exceptions import EngineAPIError

HASH_LENGTH = 32
ADDRESS_LENGTH = 20


def _to_hex(value: bytes, length: int, name: str) -> str:
    if len(value) != length:
        raise ValueError(f"{name} must be {length} bytes, got {len(value)}")
    return "0x" + value.hex()


def _unwrap_result(response: dict) -> Any:
    """Return the result of a JSON-RPC envelope, or the object itself if bare."""
    if "error" in response:
        error = response["error"]
        if isinstance(error, dict):
            raise EngineAPIError(error.get("code", -1), error.get("message", ""))
        raise EngineAPIError(-1, str(error))
    if "jsonrpc" in response and "result" in response:
        result = response["result"]
        if not isinstance(result, dict):
            raise ValueError(f"expected a result object, got {type(result).__name__}")
        return result
    return response


class PayloadStatusEnum(str, Enum):
    VALID = "VALID"
    INVALID = "INVALID"
    SYNCING = "SYNCING"
    ACCEPTED = "ACCEPTED"
    INVALID_BLOCK_HASH = "INVALID_BLOCK_HASH"


@dataclass
class ForkchoiceState:
    """Forkchoice state for forkchoiceUpdated.

    Hashes are kept in their wire form: 0x-prefixed hex strings.
    """

    head_block_hash: str
    safe_block_hash: str
    finalized_block_hash: str

    @classmethod
    def from_bytes(cls, head: bytes, safe: bytes, finalized: bytes) -> "ForkchoiceState":
        return cls(
            head_block_hash=_to_hex(head, HASH_LENGTH, "headBlockHash"),
            safe_block_hash=_to_hex(safe, HASH_LENGTH, "safeBlockHash"),
            finalized_block_hash=_to_hex(finalized, HASH_LENGTH, "finalizedBlockHash"),
        )

    def to_dict(self) -> dict:
        return {
            "headBlockHash": self.head_block_hash,
            "safeBlockHash": self.safe_block_hash,
            "finalizedBlockHash": self.finalized_block_hash,
        }


@dataclass
class PayloadAttributes:
    """Attributes asking the execution client to build a payload on top of head."""

    timestamp: str
    prev_randao: str
    suggested_fee_recipient: str

    @classmethod
    def from_values(
        cls, timestamp: int, prev_randao: bytes, fee_recipient: bytes
    ) -> "PayloadAttributes":
        if timestamp < 0:
            raise ValueError(f"timestamp must be non-negative, got {timestamp}")
        return cls(
            timestamp=hex(timestamp),
            prev_randao=_to_hex(prev_randao, HASH_LENGTH, "prevRandao"),
            suggested_fee_recipient=_to_hex(fee_recipient, ADDRESS_LENGTH, "suggestedFeeRecipient"),
        )

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "prevRandao": self.prev_randao,
            "suggestedFeeRecipient": self.suggested_fee_recipient,
        }


@dataclass
class PayloadStatus:
    """Typed view of a payload status object.

    ``raw`` holds the mapping it was built from, including fields this view
    does not know about.
    """

    status: PayloadStatusEnum
    latest_valid_hash: Optional[bytes] = None
    validation_error: Optional[str] = None
    raw: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict) -> "PayloadStatus":
        return cls(
            status=PayloadStatusEnum(data["status"]),
            latest_valid_hash=(
                bytes.fromhex(data["latestValidHash"][2:])
                if data.get("latestValidHash")
                else None
            ),
            validation_error=data.get("validationError"),
            raw=dict(data),
        )

    @classmethod
    def from_response(cls, response: dict) -> "PayloadStatus":
        """Build from a newPayload response, enveloped or bare."""
        return cls.from_dict(_unwrap_result(response))


@dataclass
class ForkchoiceUpdateResponse:
    """Typed view of a forkchoiceUpdated result."""

    payload_status: PayloadStatus
    payload_id: Optional[bytes] = None
    raw: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict) -> "ForkchoiceUpdateResponse":
        return cls(
            payload_status=PayloadStatus.from_dict(data["payloadStatus"]),
            payload_id=(
                bytes.fromhex(data["payloadId"][2:])
                if data.get("payloadId")
                else None
            ),
            raw=dict(data),
        )

    @classmethod
    def from_response(cls, response: dict) -> "ForkchoiceUpdateResponse":
        """Build from a forkchoiceUpdated response, enveloped or bare."""
        return cls.from_dict(_unwrap_result(response))
