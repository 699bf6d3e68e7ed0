"""Blocks, block headers and ways of naming a block."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Generic, TypeVar

from .raw_bytes import Bytes
from .uint import H64, H160, H256, H2048, U64, U256

TX = TypeVar("TX")


def _to_json(value: Any) -> Any:
    return value.to_json()


def _object(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"expected a JSON object for {what}, got {type(value).__name__}")
    return value


def _list_parser(parse_item: Callable[[Any], Any] | None) -> Callable[[Any], list]:
    """Build a parser for a JSON array; without ``parse_item`` items are kept as they are."""

    def parse(raw: Any) -> list:
        if not isinstance(raw, list):
            raise ValueError(f"expected a JSON array, got {type(raw).__name__}")
        if parse_item is None:
            return list(raw)
        return [parse_item(item) for item in raw]

    return parse


@dataclass(frozen=True)
class _Field:
    attr: str
    key: str
    parse: Callable[[Any], Any]
    dump: Callable[[Any], Any] = _to_json
    optional: bool = False
    default: Callable[[], Any] | None = None

    def load(self, obj: dict) -> Any:
        if self.key not in obj:
            if self.optional:
                return None
            if self.default is not None:
                return self.default()
            raise ValueError(f"missing field `{self.key}`")
        raw = obj[self.key]
        if raw is None:
            if self.optional:
                return None
            raise ValueError(f"field `{self.key}` must not be null")
        return self.parse(raw)

    def save(self, value: Any) -> Any:
        return None if value is None else self.dump(value)


def _typed(attr: str, key: str, kind: Any, **options: Any) -> _Field:
    return _Field(attr, key, kind.from_json, **options)


def _sequence(attr: str, key: str, parse_item, dump_item, **options: Any) -> _Field:
    return _Field(
        attr,
        key,
        _list_parser(parse_item),
        lambda items: [dump_item(item) for item in items],
        **options,
    )


def _load(fields: tuple[_Field, ...], value: Any, what: str) -> dict[str, Any]:
    obj = _object(value, what)
    return {f.attr: f.load(obj) for f in fields}


def _dump(fields: tuple[_Field, ...], instance: Any) -> dict[str, Any]:
    return {f.key: f.save(getattr(instance, f.attr)) for f in fields}


_HEADER_FIELDS = (
    _typed("hash", "hash", H256, optional=True),
    _typed("parent_hash", "parentHash", H256),
    _typed("uncles_hash", "sha3Uncles", H256, default=H256.zero),
    _typed("author", "author", H160, default=H160.zero),
    _typed("state_root", "stateRoot", H256),
    _typed("transactions_root", "transactionsRoot", H256),
    _typed("receipts_root", "receiptsRoot", H256),
    _typed("number", "number", U64, optional=True),
    _typed("gas_used", "gasUsed", U256),
    _typed("gas_limit", "gasLimit", U256, default=U256),
    _typed("base_fee_per_gas", "baseFeePerGas", U256, optional=True),
    _typed("extra_data", "extraData", Bytes),
    _typed("logs_bloom", "logsBloom", H2048),
    _typed("timestamp", "timestamp", U256),
    _typed("difficulty", "difficulty", U256, default=U256),
    _typed("mix_hash", "mixHash", H256, optional=True),
    _typed("nonce", "nonce", H64, optional=True),
)


def _block_fields(
    parse_tx: Callable[[Any], Any] | None, dump_tx: Callable[[Any], Any]
) -> tuple[_Field, ...]:
    return _HEADER_FIELDS[:12] + (
        _typed("logs_bloom", "logsBloom", H2048, optional=True),
        _typed("timestamp", "timestamp", U256),
        _typed("difficulty", "difficulty", U256, default=U256),
        _typed("total_difficulty", "totalDifficulty", U256, optional=True),
        _sequence("seal_fields", "sealFields", Bytes.from_json, _to_json, default=list),
        _sequence("uncles", "uncles", H256.from_json, _to_json, default=list),
        _sequence("transactions", "transactions", parse_tx, dump_tx),
        _typed("size", "size", U256, optional=True),
        _typed("mix_hash", "mixHash", H256, optional=True),
        _typed("nonce", "nonce", H64, optional=True),
    )


def _dump_any(item: Any) -> Any:
    return item.to_json() if hasattr(item, "to_json") else item


@dataclass
class BlockHeader:
    """A block header as returned by the node."""

    hash: H256 | None
    parent_hash: H256
    uncles_hash: H256
    author: H160
    state_root: H256
    transactions_root: H256
    receipts_root: H256
    number: U64 | None
    gas_used: U256
    gas_limit: U256
    base_fee_per_gas: U256 | None
    extra_data: Bytes
    logs_bloom: H2048
    timestamp: U256
    difficulty: U256
    mix_hash: H256 | None
    nonce: H64 | None

    @classmethod
    def from_json(cls, value: Any) -> BlockHeader:
        return cls(**_load(_HEADER_FIELDS, value, "a block header"))

    def to_json(self) -> dict[str, Any]:
        return _dump(_HEADER_FIELDS, self)


@dataclass
class Block(Generic[TX]):
    """A block; its transactions are hashes or full transactions."""

    hash: H256 | None = None
    parent_hash: H256 = H256()
    uncles_hash: H256 = H256()
    author: H160 = H160()
    state_root: H256 = H256()
    transactions_root: H256 = H256()
    receipts_root: H256 = H256()
    number: U64 | None = None
    gas_used: U256 = U256()
    gas_limit: U256 = U256()
    base_fee_per_gas: U256 | None = None
    extra_data: Bytes = Bytes()
    logs_bloom: H2048 | None = None
    timestamp: U256 = U256()
    difficulty: U256 = U256()
    total_difficulty: U256 | None = None
    seal_fields: list[Bytes] = field(default_factory=list)
    uncles: list[H256] = field(default_factory=list)
    transactions: list[TX] = field(default_factory=list)
    size: U256 | None = None
    mix_hash: H256 | None = None
    nonce: H64 | None = None

    @classmethod
    def from_json(cls, value: Any, parse_transaction: Callable[[Any], TX] | None = None) -> Block[TX]:
        """Parse a block; ``parse_transaction`` decodes each transaction entry."""
        fields = _block_fields(parse_transaction, _dump_any)
        return cls(**_load(fields, value, "a block"))

    def to_json(self, dump_transaction: Callable[[TX], Any] | None = None) -> dict[str, Any]:
        fields = _block_fields(None, dump_transaction or _dump_any)
        return _dump(fields, self)


_BLOCK_TAGS = ("latest", "earliest", "pending")


@dataclass(frozen=True)
class BlockNumber:
    """A block named by a tag or by its number on the canonical chain."""

    tag: str
    value: U64 | None = None

    LATEST: ClassVar[BlockNumber]
    EARLIEST: ClassVar[BlockNumber]
    PENDING: ClassVar[BlockNumber]

    def __post_init__(self) -> None:
        if self.tag == "number":
            if self.value is None:
                raise ValueError("a numbered block needs a value")
            object.__setattr__(self, "value", U64(self.value))
        elif self.tag in _BLOCK_TAGS:
            if self.value is not None:
                raise ValueError(f"the `{self.tag}` block takes no value")
        else:
            raise ValueError(f"unknown block tag {self.tag!r}")

    @classmethod
    def number(cls, value: int) -> BlockNumber:
        return cls("number", U64(value))

    def to_json(self) -> str:
        if self.tag == "number":
            return f"{int(self.value):#x}"
        return self.tag


BlockNumber.LATEST = BlockNumber("latest")
BlockNumber.EARLIEST = BlockNumber("earliest")
BlockNumber.PENDING = BlockNumber("pending")


@dataclass(frozen=True)
class BlockId:
    """A block named either by hash or by number."""

    block_hash: H256 | None = None
    number: BlockNumber | None = None

    def __post_init__(self) -> None:
        if (self.block_hash is None) == (self.number is None):
            raise ValueError("a block id needs exactly one of a hash or a number")

    @classmethod
    def from_hash(cls, block_hash: H256) -> BlockId:
        return cls(block_hash=block_hash)

    @classmethod
    def from_number(cls, number: BlockNumber | int) -> BlockId:
        if not isinstance(number, BlockNumber):
            number = BlockNumber.number(number)
        return cls(number=number)

    def to_json(self) -> Any:
        if self.block_hash is not None:
            return {"blockHash": self.block_hash.to_json()}
        return self.number.to_json()