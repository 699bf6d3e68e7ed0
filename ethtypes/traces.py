"""Types for the ad-hoc trace API: call traces, VM traces and state diffs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

from .raw_bytes import Bytes
from .trace_filtering import (
    Action,
    ActionType,
    Res,
    dump_action,
    dump_result,
    parse_action,
    parse_result,
)
from .uint import H160, H256, U256

T = TypeVar("T")

_U64_LIMIT = 1 << 64


def _to_json(value: Any) -> Any:
    return value.to_json()


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


def _optional(obj: dict, key: str, parse: Callable[[Any], Any]) -> Any:
    raw = obj.get(key)
    return None if raw is None else parse(raw)


def _list_of(parse_item: Callable[[Any], Any]) -> Callable[[Any], list]:
    def parse(raw: Any) -> list:
        if not isinstance(raw, list):
            raise ValueError(f"expected a JSON array, got {type(raw).__name__}")
        return [parse_item(item) for item in raw]

    return parse


def _unsigned(raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int) or not 0 <= raw < _U64_LIMIT:
        raise ValueError(f"expected an unsigned 64-bit integer, got {raw!r}")
    return raw


def _json_or_none(value: Any) -> Any:
    return None if value is None else value.to_json()


class TraceType(str, Enum):
    """Which kinds of trace to produce."""

    TRACE = "trace"
    VM_TRACE = "vmTrace"
    STATE_DIFF = "stateDiff"

    def to_json(self) -> str:
        return self.value


class DiffKind(str, Enum):
    """How a value changed."""

    SAME = "="
    BORN = "+"
    DIED = "-"
    CHANGED = "*"


@dataclass(frozen=True)
class ChangedType(Generic[T]):
    """The previous and current value of a changed entry."""

    from_: T
    to: T


@dataclass(frozen=True)
class Diff(Generic[T]):
    """A change to a value: unchanged, created, removed or altered."""

    kind: DiffKind = DiffKind.SAME
    value: Any = None

    def __post_init__(self) -> None:
        kind = DiffKind(self.kind)
        object.__setattr__(self, "kind", kind)
        if kind is DiffKind.SAME:
            if self.value is not None:
                raise ValueError("an unchanged diff carries no value")
        elif kind is DiffKind.CHANGED:
            if not isinstance(self.value, ChangedType):
                raise ValueError("a changed diff needs a ChangedType value")
        elif self.value is None:
            raise ValueError(f"a `{kind.value}` diff needs a value")

    @classmethod
    def from_json(cls, value: Any, parse: Callable[[Any], T]) -> Diff[T]:
        """Parse a diff, decoding each carried value with ``parse``."""
        if isinstance(value, str):
            if value != DiffKind.SAME.value:
                raise ValueError(f"unexpected diff {value!r}, expected `=`")
            return cls()
        if not isinstance(value, dict) or len(value) != 1:
            raise ValueError("a diff is `=` or an object with exactly one of `+`, `-` or `*`")
        ((tag, inner),) = value.items()
        try:
            kind = DiffKind(tag)
        except ValueError:
            raise ValueError(f"unknown variant `{tag}`, expected one of `=`, `+`, `-`, `*`") from None
        if kind is DiffKind.SAME:
            if inner is not None:
                raise ValueError("the `=` diff takes no value")
            return cls()
        if kind is DiffKind.CHANGED:
            obj = _object(inner, "a changed value")
            return cls(kind, ChangedType(_required(obj, "from", parse), _required(obj, "to", parse)))
        if inner is None:
            raise ValueError(f"the `{tag}` diff needs a value")
        return cls(kind, parse(inner))

    def to_json(self, dump: Callable[[T], Any]) -> Any:
        if self.kind is DiffKind.SAME:
            return DiffKind.SAME.value
        if self.kind is DiffKind.CHANGED:
            return {"*": {"from": dump(self.value.from_), "to": dump(self.value.to)}}
        return {self.kind.value: dump(self.value)}


@dataclass
class AccountDiff:
    """Changes to one account."""

    balance: Diff[U256]
    nonce: Diff[U256]
    code: Diff[Bytes]
    storage: dict[H256, Diff[H256]] = field(default_factory=dict)

    @classmethod
    def from_json(cls, value: Any) -> AccountDiff:
        obj = _object(value, "an account diff")
        storage = _required(obj, "storage", lambda raw: _object(raw, "account storage"))
        return cls(
            balance=_required(obj, "balance", lambda raw: Diff.from_json(raw, U256.from_json)),
            nonce=_required(obj, "nonce", lambda raw: Diff.from_json(raw, U256.from_json)),
            code=_required(obj, "code", lambda raw: Diff.from_json(raw, Bytes.from_json)),
            storage={
                H256.from_json(key): Diff.from_json(diff, H256.from_json)
                for key, diff in storage.items()
            },
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "balance": self.balance.to_json(_to_json),
            "nonce": self.nonce.to_json(_to_json),
            "code": self.code.to_json(_to_json),
            "storage": {
                key.to_json(): diff.to_json(_to_json) for key, diff in sorted(self.storage.items())
            },
        }


@dataclass
class StateDiff:
    """Changes to every touched account, keyed by address."""

    accounts: dict[H160, AccountDiff] = field(default_factory=dict)

    @classmethod
    def from_json(cls, value: Any) -> StateDiff:
        obj = _object(value, "a state diff")
        return cls({H160.from_json(key): AccountDiff.from_json(diff) for key, diff in obj.items()})

    def to_json(self) -> dict[str, Any]:
        return {address.to_json(): diff.to_json() for address, diff in sorted(self.accounts.items())}


@dataclass
class TransactionTrace:
    """One call or creation within a transaction."""

    trace_address: list[int]
    subtraces: int
    action: Action
    action_type: ActionType
    result: Res = None
    error: str | None = None

    @classmethod
    def from_json(cls, value: Any) -> TransactionTrace:
        obj = _object(value, "a transaction trace")

        def text(raw: Any) -> str:
            if not isinstance(raw, str):
                raise ValueError(f"expected a string, got {type(raw).__name__}")
            return raw

        return cls(
            trace_address=_required(obj, "traceAddress", _list_of(_unsigned)),
            subtraces=_required(obj, "subtraces", _unsigned),
            action=_required(obj, "action", parse_action),
            action_type=_required(obj, "type", ActionType.from_json),
            result=_optional(obj, "result", parse_result),
            error=_optional(obj, "error", text),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "traceAddress": list(self.trace_address),
            "subtraces": self.subtraces,
            "action": dump_action(self.action),
            "type": self.action_type.to_json(),
            "result": dump_result(self.result),
            "error": self.error,
        }


@dataclass
class MemoryDiff:
    """A changed chunk of memory."""

    off: int = 0
    data: Bytes = Bytes()

    @classmethod
    def from_json(cls, value: Any) -> MemoryDiff:
        obj = _object(value, "a memory diff")
        return cls(off=_required(obj, "off", _unsigned), data=_required(obj, "data", Bytes.from_json))

    def to_json(self) -> dict[str, Any]:
        return {"off": self.off, "data": self.data.to_json()}


@dataclass
class StorageDiff:
    """A changed storage slot."""

    key: U256 = U256(0)
    val: U256 = U256(0)

    @classmethod
    def from_json(cls, value: Any) -> StorageDiff:
        obj = _object(value, "a storage diff")
        return cls(key=_required(obj, "key", U256.from_json), val=_required(obj, "val", U256.from_json))

    def to_json(self) -> dict[str, Any]:
        return {"key": self.key.to_json(), "val": self.val.to_json()}


@dataclass
class VMExecutedOperation:
    """The effects of one executed VM operation."""

    used: int = 0
    push: list[U256] = field(default_factory=list)
    mem: MemoryDiff | None = None
    store: StorageDiff | None = None

    @classmethod
    def from_json(cls, value: Any) -> VMExecutedOperation:
        obj = _object(value, "an executed operation")
        return cls(
            used=_required(obj, "used", _unsigned),
            push=_required(obj, "push", _list_of(U256.from_json)),
            mem=_optional(obj, "mem", MemoryDiff.from_json),
            store=_optional(obj, "store", StorageDiff.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "used": self.used,
            "push": [item.to_json() for item in self.push],
            "mem": _json_or_none(self.mem),
            "store": _json_or_none(self.store),
        }


@dataclass
class VMTrace:
    """A full VM trace of a call or creation."""

    code: Bytes = Bytes()
    ops: list[VMOperation] = field(default_factory=list)

    @classmethod
    def from_json(cls, value: Any) -> VMTrace:
        obj = _object(value, "a VM trace")
        return cls(
            code=_required(obj, "code", Bytes.from_json),
            ops=_required(obj, "ops", _list_of(VMOperation.from_json)),
        )

    def to_json(self) -> dict[str, Any]:
        return {"code": self.code.to_json(), "ops": [op.to_json() for op in self.ops]}


@dataclass
class VMOperation:
    """One executed VM instruction, with the sub-trace of a call or creation."""

    pc: int = 0
    cost: int = 0
    ex: VMExecutedOperation | None = None
    sub: VMTrace | None = None

    @classmethod
    def from_json(cls, value: Any) -> VMOperation:
        obj = _object(value, "a VM operation")
        return cls(
            pc=_required(obj, "pc", _unsigned),
            cost=_required(obj, "cost", _unsigned),
            ex=_optional(obj, "ex", VMExecutedOperation.from_json),
            sub=_optional(obj, "sub", VMTrace.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "pc": self.pc,
            "cost": self.cost,
            "ex": _json_or_none(self.ex),
            "sub": _json_or_none(self.sub),
        }


@dataclass
class BlockTrace:
    """The result of an ad-hoc trace of a transaction."""

    output: Bytes
    trace: list[TransactionTrace] | None = None
    vm_trace: VMTrace | None = None
    state_diff: StateDiff | None = None
    transaction_hash: H256 | None = None

    @classmethod
    def from_json(cls, value: Any) -> BlockTrace:
        obj = _object(value, "a block trace")
        return cls(
            output=_required(obj, "output", Bytes.from_json),
            trace=_optional(obj, "trace", _list_of(TransactionTrace.from_json)),
            vm_trace=_optional(obj, "vmTrace", VMTrace.from_json),
            state_diff=_optional(obj, "stateDiff", StateDiff.from_json),
            transaction_hash=_optional(obj, "transactionHash", H256.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "output": self.output.to_json(),
            "trace": None if self.trace is None else [item.to_json() for item in self.trace],
            "vmTrace": _json_or_none(self.vm_trace),
            "stateDiff": _json_or_none(self.state_diff),
            "transactionHash": _json_or_none(self.transaction_hash),
        }