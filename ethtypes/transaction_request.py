"""Requests for calling contracts and sending transactions."""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Any

from .raw_bytes import Bytes
from .uint import H160, U256

_U64_LIMIT = 1 << 64
_CONDITION_KINDS = ("block", "time")


def _json_or_none(value: Any) -> Any:
    return None if value is None else value.to_json()


def _without_none(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    return {key: value for key, value in pairs if value is not None}


@dataclass(frozen=True)
class TransactionCondition:
    """A minimum block number or unix time before which a transaction is held."""

    kind: str
    value: int

    def __post_init__(self) -> None:
        if self.kind not in _CONDITION_KINDS:
            raise ValueError(f"unknown condition {self.kind!r}, expected `block` or `time`")
        if isinstance(self.value, bool):
            raise ValueError("a condition value must be an integer")
        value = operator.index(self.value)
        if not 0 <= value < _U64_LIMIT:
            raise OverflowError(f"{value} does not fit in 64 bits")
        object.__setattr__(self, "value", value)

    @classmethod
    def block(cls, number: int) -> TransactionCondition:
        return cls("block", number)

    @classmethod
    def timestamp(cls, time: int) -> TransactionCondition:
        return cls("time", time)

    def to_json(self) -> dict[str, int]:
        return {self.kind: self.value}

    @classmethod
    def from_json(cls, value: Any) -> TransactionCondition:
        if not isinstance(value, dict) or len(value) != 1:
            raise ValueError("a condition is an object with exactly one of `block` or `time`")
        ((kind, number),) = value.items()
        if kind not in _CONDITION_KINDS:
            raise ValueError(f"unknown field `{kind}`, expected `block` or `time`")
        if not isinstance(number, int) or isinstance(number, bool):
            raise ValueError(f"`{kind}` must be an integer")
        try:
            return cls(kind, number)
        except OverflowError as exc:
            raise ValueError(str(exc)) from exc


@dataclass(frozen=True, kw_only=True)
class CallRequest:
    """Parameters for ``eth_call`` and ``eth_estimateGas``."""

    from_: H160 | None = None
    to: H160
    gas: U256 | None = None
    gas_price: U256 | None = None
    value: U256 | None = None
    data: Bytes | None = None

    def to_json(self) -> dict[str, Any]:
        return _without_none(
            [
                ("from", _json_or_none(self.from_)),
                ("to", self.to.to_json()),
                ("gas", _json_or_none(self.gas)),
                ("gasPrice", _json_or_none(self.gas_price)),
                ("value", _json_or_none(self.value)),
                ("data", _json_or_none(self.data)),
            ]
        )


@dataclass(frozen=True, kw_only=True)
class TransactionRequest:
    """Parameters for sending a transaction."""

    from_: H160
    to: H160 | None = None
    gas: U256 | None = None
    gas_price: U256 | None = None
    value: U256 | None = None
    data: Bytes | None = None
    nonce: U256 | None = None
    condition: TransactionCondition | None = None

    def to_json(self) -> dict[str, Any]:
        return _without_none(
            [
                ("from", self.from_.to_json()),
                ("to", _json_or_none(self.to)),
                ("gas", _json_or_none(self.gas)),
                ("gasPrice", _json_or_none(self.gas_price)),
                ("value", _json_or_none(self.value)),
                ("data", _json_or_none(self.data)),
                ("nonce", _json_or_none(self.nonce)),
                ("condition", _json_or_none(self.condition)),
            ]
        )