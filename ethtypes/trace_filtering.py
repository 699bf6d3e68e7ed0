"""Types for the transaction-trace filtering API."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Iterable, Union

from .block import BlockNumber
from .raw_bytes import Bytes
from .uint import H160, H256, U256


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


def _count(raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
        raise ValueError(f"expected a non-negative integer, got {raw!r}")
    return raw


def _text(raw: Any) -> str:
    if not isinstance(raw, str):
        raise ValueError(f"expected a string, got {type(raw).__name__}")
    return raw


def _count_list(raw: Any) -> list[int]:
    if not isinstance(raw, list):
        raise ValueError(f"expected a JSON array, got {type(raw).__name__}")
    return [_count(item) for item in raw]


def _json_or_none(value: Any) -> Any:
    return None if value is None else value.to_json()


class _JsonEnum(str, Enum):
    @classmethod
    def from_json(cls, value: Any) -> Any:
        if not isinstance(value, str):
            raise ValueError(f"expected a string for {cls.__name__}, got {type(value).__name__}")
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"unknown variant `{value}` for {cls.__name__}") from None

    def to_json(self) -> str:
        return self.value


class ActionType(_JsonEnum):
    """The kind of an external action."""

    CALL = "call"
    CREATE = "create"
    SUICIDE = "suicide"
    REWARD = "reward"


class CallType(_JsonEnum):
    """How a contract was called."""

    NONE = "none"
    CALL = "call"
    CALL_CODE = "callcode"
    DELEGATE_CALL = "delegatecall"
    STATIC_CALL = "staticcall"


class RewardType(_JsonEnum):
    """Why a reward was paid."""

    BLOCK = "block"
    UNCLE = "uncle"
    EMPTY_STEP = "emptyStep"
    EXTERNAL = "external"


@dataclass(frozen=True)
class TraceFilter:
    """A filter for ``trace_filter``."""

    from_block: BlockNumber | None = None
    to_block: BlockNumber | None = None
    from_address: tuple[H160, ...] | None = None
    to_address: tuple[H160, ...] | None = None
    after: int | None = None
    count: int | None = None

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.from_block is not None:
            out["fromBlock"] = self.from_block.to_json()
        if self.to_block is not None:
            out["toBlock"] = self.to_block.to_json()
        if self.from_address is not None:
            out["fromAddress"] = [address.to_json() for address in self.from_address]
        if self.to_address is not None:
            out["toAddress"] = [address.to_json() for address in self.to_address]
        if self.after is not None:
            out["after"] = self.after
        if self.count is not None:
            out["count"] = self.count
        return out


@dataclass(frozen=True)
class TraceFilterBuilder:
    """Builds a :class:`TraceFilter`; every setter returns a new builder."""

    filter: TraceFilter = field(default_factory=TraceFilter)

    def _with(self, **changes: Any) -> TraceFilterBuilder:
        return TraceFilterBuilder(replace(self.filter, **changes))

    def from_block(self, block: BlockNumber) -> TraceFilterBuilder:
        return self._with(from_block=block)

    def to_block(self, block: BlockNumber) -> TraceFilterBuilder:
        return self._with(to_block=block)

    def to_address(self, address: Iterable[H160]) -> TraceFilterBuilder:
        return self._with(to_address=tuple(address))

    def from_address(self, address: Iterable[H160]) -> TraceFilterBuilder:
        return self._with(from_address=tuple(address))

    def after(self, after: int) -> TraceFilterBuilder:
        """Skip this many traces of the output."""
        return self._with(after=_count(after))

    def count(self, count: int) -> TraceFilterBuilder:
        """Return at most this many traces."""
        return self._with(count=_count(count))

    def build(self) -> TraceFilter:
        return self.filter


@dataclass(frozen=True)
class CallResult:
    """The outcome of a call."""

    gas_used: U256 = U256(0)
    output: Bytes = Bytes()

    @classmethod
    def from_json(cls, value: Any) -> CallResult:
        obj = _object(value, "a call result")
        return cls(
            gas_used=_required(obj, "gasUsed", U256.from_json),
            output=_with_default(obj, "output", Bytes.from_json, Bytes()),
        )

    def to_json(self) -> dict[str, Any]:
        return {"gasUsed": self.gas_used.to_json(), "output": self.output.to_json()}


@dataclass(frozen=True)
class CreateResult:
    """The outcome of a contract creation."""

    gas_used: U256 = U256(0)
    code: Bytes = Bytes()
    address: H160 = H160()

    @classmethod
    def from_json(cls, value: Any) -> CreateResult:
        obj = _object(value, "a create result")
        return cls(
            gas_used=_required(obj, "gasUsed", U256.from_json),
            code=_required(obj, "code", Bytes.from_json),
            address=_required(obj, "address", H160.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "gasUsed": self.gas_used.to_json(),
            "code": self.code.to_json(),
            "address": self.address.to_json(),
        }


@dataclass(frozen=True)
class Call:
    """A contract call."""

    from_: H160 = H160()
    to: H160 = H160()
    value: U256 = U256(0)
    gas: U256 = U256(0)
    input: Bytes = Bytes()
    call_type: CallType = CallType.NONE

    @classmethod
    def from_json(cls, value: Any) -> Call:
        obj = _object(value, "a call action")
        return cls(
            from_=_required(obj, "from", H160.from_json),
            to=_required(obj, "to", H160.from_json),
            value=_with_default(obj, "value", U256.from_json, U256(0)),
            gas=_required(obj, "gas", U256.from_json),
            input=_with_default(obj, "input", Bytes.from_json, Bytes()),
            call_type=_required(obj, "callType", CallType.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "from": self.from_.to_json(),
            "to": self.to.to_json(),
            "value": self.value.to_json(),
            "gas": self.gas.to_json(),
            "input": self.input.to_json(),
            "callType": self.call_type.to_json(),
        }


@dataclass(frozen=True)
class Create:
    """A contract creation."""

    from_: H160 = H160()
    value: U256 = U256(0)
    gas: U256 = U256(0)
    init: Bytes = Bytes()

    @classmethod
    def from_json(cls, value: Any) -> Create:
        obj = _object(value, "a create action")
        return cls(
            from_=_required(obj, "from", H160.from_json),
            value=_required(obj, "value", U256.from_json),
            gas=_required(obj, "gas", U256.from_json),
            init=_required(obj, "init", Bytes.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "from": self.from_.to_json(),
            "value": self.value.to_json(),
            "gas": self.gas.to_json(),
            "init": self.init.to_json(),
        }


@dataclass(frozen=True)
class Suicide:
    """A contract self-destruct."""

    address: H160 = H160()
    refund_address: H160 = H160()
    balance: U256 = U256(0)

    @classmethod
    def from_json(cls, value: Any) -> Suicide:
        obj = _object(value, "a suicide action")
        return cls(
            address=_required(obj, "address", H160.from_json),
            refund_address=_required(obj, "refundAddress", H160.from_json),
            balance=_required(obj, "balance", U256.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "address": self.address.to_json(),
            "refundAddress": self.refund_address.to_json(),
            "balance": self.balance.to_json(),
        }


@dataclass(frozen=True)
class Reward:
    """A block or uncle reward."""

    author: H160
    value: U256
    reward_type: RewardType

    @classmethod
    def from_json(cls, value: Any) -> Reward:
        obj = _object(value, "a reward action")
        return cls(
            author=_required(obj, "author", H160.from_json),
            value=_required(obj, "value", U256.from_json),
            reward_type=_required(obj, "rewardType", RewardType.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "author": self.author.to_json(),
            "value": self.value.to_json(),
            "rewardType": self.reward_type.to_json(),
        }


Action = Union[Call, Create, Suicide, Reward]
Res = Union[CallResult, CreateResult, None]


def parse_action(value: Any) -> Action:
    """Parse an action object, trying call, create, suicide and reward in turn."""
    _object(value, "an action")
    for kind in (Call, Create, Suicide, Reward):
        try:
            return kind.from_json(value)
        except ValueError:
            continue
    raise ValueError("data did not match any variant of untagged enum Action")


def parse_result(value: Any) -> Res:
    """Parse a result: a call result, a create result, or None for ``null``."""
    if value is None:
        return None
    _object(value, "a result")
    for kind in (CallResult, CreateResult):
        try:
            return kind.from_json(value)
        except ValueError:
            continue
    raise ValueError("data did not match any variant of untagged enum Res")


def dump_action(action: Action) -> dict[str, Any]:
    return action.to_json()


def dump_result(result: Res) -> Any:
    return None if result is None else result.to_json()


@dataclass
class Trace:
    """A trace located within a block and transaction."""

    action: Action
    result: Res
    trace_address: list[int]
    subtraces: int
    transaction_position: int | None
    transaction_hash: H256 | None
    block_number: int
    block_hash: H256
    action_type: ActionType
    error: str | None = None

    @classmethod
    def from_json(cls, value: Any) -> Trace:
        obj = _object(value, "a trace")
        return cls(
            action=_required(obj, "action", parse_action),
            result=_optional(obj, "result", parse_result),
            trace_address=_required(obj, "traceAddress", _count_list),
            subtraces=_required(obj, "subtraces", _count),
            transaction_position=_optional(obj, "transactionPosition", _count),
            transaction_hash=_optional(obj, "transactionHash", H256.from_json),
            block_number=_required(obj, "blockNumber", _count),
            block_hash=_required(obj, "blockHash", H256.from_json),
            action_type=_required(obj, "type", ActionType.from_json),
            error=_optional(obj, "error", _text),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "action": dump_action(self.action),
            "result": dump_result(self.result),
            "traceAddress": list(self.trace_address),
            "subtraces": self.subtraces,
            "transactionPosition": self.transaction_position,
            "transactionHash": _json_or_none(self.transaction_hash),
            "blockNumber": self.block_number,
            "blockHash": self.block_hash.to_json(),
            "type": self.action_type.to_json(),
            "error": self.error,
        }