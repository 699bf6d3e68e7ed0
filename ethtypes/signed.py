"""Signed data and transaction parameters for local signing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .raw_bytes import Bytes
from .transaction_request import CallRequest
from .uint import H160, H256, U256

TRANSACTION_DEFAULT_GAS = U256(100_000)


def _required(obj: dict, key: str) -> Any:
    if key not in obj or obj[key] is None:
        raise ValueError(f"missing field `{key}`")
    return obj[key]


def _byte(raw: Any, what: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int) or not 0 <= raw <= 255:
        raise ValueError(f"{what} must be an integer from 0 to 255")
    return raw


@dataclass
class SignedData:
    """The result of signing a message."""

    message: bytes
    message_hash: H256
    v: int
    r: H256
    s: H256
    signature: Bytes

    @classmethod
    def from_json(cls, value: Any) -> SignedData:
        if not isinstance(value, dict):
            raise ValueError(f"expected a JSON object for signed data, got {type(value).__name__}")
        message = _required(value, "message")
        if not isinstance(message, list):
            raise ValueError("field `message` must be an array of bytes")
        return cls(
            message=bytes(_byte(item, "a message byte") for item in message),
            message_hash=H256.from_json(_required(value, "messageHash")),
            v=_byte(_required(value, "v"), "v"),
            r=H256.from_json(_required(value, "r")),
            s=H256.from_json(_required(value, "s")),
            signature=Bytes.from_json(_required(value, "signature")),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "message": list(self.message),
            "messageHash": self.message_hash.to_json(),
            "v": self.v,
            "r": self.r.to_json(),
            "s": self.s.to_json(),
            "signature": self.signature.to_json(),
        }


@dataclass
class TransactionParameters:
    """Transaction fields for signing; unset fields are filled in when signing."""

    nonce: U256 | None = None
    to: H160 | None = None
    gas: U256 = TRANSACTION_DEFAULT_GAS
    gas_price: U256 | None = None
    value: U256 = U256(0)
    data: Bytes = Bytes()
    chain_id: int | None = None

    @classmethod
    def from_call_request(cls, call: CallRequest) -> TransactionParameters:
        """A zero recipient address means contract creation."""
        return cls(
            nonce=None,
            to=None if call.to.is_zero() else call.to,
            gas=TRANSACTION_DEFAULT_GAS if call.gas is None else call.gas,
            gas_price=call.gas_price,
            value=U256(0) if call.value is None else call.value,
            data=Bytes() if call.data is None else call.data,
            chain_id=None,
        )

    def to_call_request(self) -> CallRequest:
        return CallRequest(
            from_=None,
            to=H160.zero() if self.to is None else self.to,
            gas=self.gas,
            gas_price=self.gas_price,
            value=self.value,
            data=self.data,
        )


@dataclass
class SignedTransaction:
    """A transaction signed offline, ready to be sent raw."""

    message_hash: H256
    v: int
    r: H256
    s: H256
    raw_transaction: Bytes
    transaction_hash: H256