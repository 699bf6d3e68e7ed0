"""Transactions, receipts and raw signed transactions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from .log import Log
from .raw_bytes import Bytes
from .uint import H160, H256, H2048, U64, U256


def _object(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"expected a JSON object for {what}, got {type(value).__name__}")
    return value


def _required(obj: dict, key: str, parse: Callable[[Any], Any]) -> Any:
    if key not in obj:
        raise ValueError(f"missing field `{key}`")
    raw = obj[key]
    if raw is None:
        raise ValueError(f"field `{key}` must not be null")
    return parse(raw)


def _with_default(obj: dict, key: str, parse: Callable[[Any], Any], default: Any) -> Any:
    if key not in obj:
        return default
    return _required(obj, key, parse)


def _optional(obj: dict, key: str, parse: Callable[[Any], Any]) -> Any:
    raw = obj.get(key)
    return None if raw is None else parse(raw)


def _logs(raw: Any) -> list[Log]:
    if not isinstance(raw, list):
        raise ValueError(f"expected a JSON array of logs, got {type(raw).__name__}")
    return [Log.from_json(item) for item in raw]


def _json_or_none(value: Any) -> Any:
    return None if value is None else value.to_json()


@dataclass
class Transaction:
    """A transaction, pending or included in a block."""

    hash: H256 = H256()
    nonce: U256 = U256(0)
    block_hash: H256 | None = None
    block_number: U64 | None = None
    transaction_index: U64 | None = None
    from_: H160 = H160()
    to: H160 | None = None
    value: U256 = U256(0)
    gas_price: U256 = U256(0)
    gas: U256 = U256(0)
    input: Bytes = Bytes()

    @classmethod
    def from_json(cls, value: Any) -> Transaction:
        obj = _object(value, "a transaction")
        return cls(
            hash=_required(obj, "hash", H256.from_json),
            nonce=_required(obj, "nonce", U256.from_json),
            block_hash=_optional(obj, "blockHash", H256.from_json),
            block_number=_optional(obj, "blockNumber", U64.from_json),
            transaction_index=_optional(obj, "transactionIndex", U64.from_json),
            from_=_required(obj, "from", H160.from_json),
            to=_optional(obj, "to", H160.from_json),
            value=_with_default(obj, "value", U256.from_json, U256(0)),
            gas_price=_required(obj, "gasPrice", U256.from_json),
            gas=_required(obj, "gas", U256.from_json),
            input=_with_default(obj, "input", Bytes.from_json, Bytes()),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "hash": self.hash.to_json(),
            "nonce": self.nonce.to_json(),
            "blockHash": _json_or_none(self.block_hash),
            "blockNumber": _json_or_none(self.block_number),
            "transactionIndex": _json_or_none(self.transaction_index),
            "from": self.from_.to_json(),
            "to": _json_or_none(self.to),
            "value": self.value.to_json(),
            "gasPrice": self.gas_price.to_json(),
            "gas": self.gas.to_json(),
            "input": self.input.to_json(),
        }


@dataclass
class Receipt:
    """The details of an executed transaction."""

    transaction_hash: H256 = H256()
    transaction_index: U64 = U64(0)
    block_hash: H256 | None = None
    block_number: U64 | None = None
    cumulative_gas_used: U256 = U256(0)
    gas_used: U256 | None = None
    contract_address: H160 | None = None
    logs: list[Log] = field(default_factory=list)
    status: U64 | None = None
    root: H256 | None = None
    logs_bloom: H2048 = H2048()

    @classmethod
    def from_json(cls, value: Any) -> Receipt:
        obj = _object(value, "a receipt")
        return cls(
            transaction_hash=_required(obj, "transactionHash", H256.from_json),
            transaction_index=_required(obj, "transactionIndex", U64.from_json),
            block_hash=_optional(obj, "blockHash", H256.from_json),
            block_number=_optional(obj, "blockNumber", U64.from_json),
            # Read under its snake-case name; a camelCase key is ignored and the value defaults to zero.
            cumulative_gas_used=_with_default(obj, "cumulative_gas_used", U256.from_json, U256(0)),
            gas_used=_optional(obj, "gasUsed", U256.from_json),
            contract_address=_optional(obj, "contractAddress", H160.from_json),
            logs=_required(obj, "logs", _logs),
            status=_optional(obj, "status", U64.from_json),
            root=_optional(obj, "root", H256.from_json),
            logs_bloom=_required(obj, "logsBloom", H2048.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "transactionHash": self.transaction_hash.to_json(),
            "transactionIndex": self.transaction_index.to_json(),
            "blockHash": _json_or_none(self.block_hash),
            "blockNumber": _json_or_none(self.block_number),
            "cumulative_gas_used": self.cumulative_gas_used.to_json(),
            "gasUsed": _json_or_none(self.gas_used),
            "contractAddress": _json_or_none(self.contract_address),
            "logs": [log.to_json() for log in self.logs],
            "status": _json_or_none(self.status),
            "root": _json_or_none(self.root),
            "logsBloom": self.logs_bloom.to_json(),
        }


@dataclass
class RawTransactionDetails:
    """The decoded fields of a signed transaction."""

    hash: H256 = H256()
    nonce: U256 = U256(0)
    block_hash: H256 | None = None
    block_number: U64 | None = None
    transaction_index: U64 | None = None
    from_: H160 | None = None
    to: H160 | None = None
    value: U256 = U256(0)
    gas_price: U256 = U256(0)
    gas: U256 = U256(0)
    input: Bytes = Bytes()
    v: U64 | None = None
    r: U256 | None = None
    s: U256 | None = None

    @classmethod
    def from_json(cls, value: Any) -> RawTransactionDetails:
        obj = _object(value, "raw transaction details")
        return cls(
            hash=_required(obj, "hash", H256.from_json),
            nonce=_required(obj, "nonce", U256.from_json),
            block_hash=_optional(obj, "blockHash", H256.from_json),
            block_number=_optional(obj, "blockNumber", U64.from_json),
            transaction_index=_optional(obj, "transactionIndex", U64.from_json),
            from_=_optional(obj, "from", H160.from_json),
            to=_optional(obj, "to", H160.from_json),
            value=_with_default(obj, "value", U256.from_json, U256(0)),
            gas_price=_required(obj, "gasPrice", U256.from_json),
            gas=_required(obj, "gas", U256.from_json),
            input=_with_default(obj, "input", Bytes.from_json, Bytes()),
            v=_optional(obj, "v", U64.from_json),
            r=_optional(obj, "r", U256.from_json),
            s=_optional(obj, "s", U256.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "hash": self.hash.to_json(),
            "nonce": self.nonce.to_json(),
            "blockHash": _json_or_none(self.block_hash),
            "blockNumber": _json_or_none(self.block_number),
            "transactionIndex": _json_or_none(self.transaction_index),
            "from": _json_or_none(self.from_),
            "to": _json_or_none(self.to),
            "value": self.value.to_json(),
            "gasPrice": self.gas_price.to_json(),
            "gas": self.gas.to_json(),
            "input": self.input.to_json(),
            "v": _json_or_none(self.v),
            "r": _json_or_none(self.r),
            "s": _json_or_none(self.s),
        }


@dataclass
class RawTransaction:
    """A signed transaction not yet sent: its raw bytes and decoded fields."""

    raw: Bytes = Bytes()
    tx: RawTransactionDetails = field(default_factory=RawTransactionDetails)

    @classmethod
    def from_json(cls, value: Any) -> RawTransaction:
        obj = _object(value, "a raw transaction")
        return cls(
            raw=_required(obj, "raw", Bytes.from_json),
            tx=_required(obj, "tx", RawTransactionDetails.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {"raw": self.raw.to_json(), "tx": self.tx.to_json()}