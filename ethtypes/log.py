"""Event logs and the filters used to query them."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Generic, Iterable, TypeVar

from .block import BlockNumber
from .raw_bytes import Bytes
from .uint import H160, H256, U64, U256

T = TypeVar("T")

_TOPIC_KINDS = ("any", "this", "one_of")


def _json_or_none(value: Any) -> Any:
    return None if value is None else value.to_json()


def _optional(obj: dict, key: str, parse: Any) -> Any:
    raw = obj.get(key)
    return None if raw is None else parse(raw)


def _required(obj: dict, key: str) -> Any:
    if key not in obj:
        raise ValueError(f"missing field `{key}`")
    raw = obj[key]
    if raw is None:
        raise ValueError(f"field `{key}` must not be null")
    return raw


def _parse_bool(raw: Any) -> bool:
    if not isinstance(raw, bool):
        raise ValueError(f"expected a boolean, got {type(raw).__name__}")
    return raw


def _parse_str(raw: Any) -> str:
    if not isinstance(raw, str):
        raise ValueError(f"expected a string, got {type(raw).__name__}")
    return raw


@dataclass
class Log:
    """A log produced by a transaction."""

    address: H160
    topics: list[H256]
    data: Bytes
    block_hash: H256 | None = None
    block_number: U64 | None = None
    transaction_hash: H256 | None = None
    transaction_index: U64 | None = None
    log_index: U256 | None = None
    transaction_log_index: U256 | None = None
    log_type: str | None = None
    removed: bool | None = None

    def is_removed(self) -> bool:
        """True if the log was removed by a chain reorganisation."""
        if self.removed is not None:
            return self.removed
        return self.log_type == "removed"

    @classmethod
    def from_json(cls, value: Any) -> Log:
        if not isinstance(value, dict):
            raise ValueError(f"expected a JSON object for a log, got {type(value).__name__}")
        topics = _required(value, "topics")
        if not isinstance(topics, list):
            raise ValueError("field `topics` must be an array")
        return cls(
            address=H160.from_json(_required(value, "address")),
            topics=[H256.from_json(topic) for topic in topics],
            data=Bytes.from_json(_required(value, "data")),
            block_hash=_optional(value, "blockHash", H256.from_json),
            block_number=_optional(value, "blockNumber", U64.from_json),
            transaction_hash=_optional(value, "transactionHash", H256.from_json),
            transaction_index=_optional(value, "transactionIndex", U64.from_json),
            log_index=_optional(value, "logIndex", U256.from_json),
            transaction_log_index=_optional(value, "transactionLogIndex", U256.from_json),
            log_type=_optional(value, "logType", _parse_str),
            removed=_optional(value, "removed", _parse_bool),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "address": self.address.to_json(),
            "topics": [topic.to_json() for topic in self.topics],
            "data": self.data.to_json(),
            "blockHash": _json_or_none(self.block_hash),
            "blockNumber": _json_or_none(self.block_number),
            "transactionHash": _json_or_none(self.transaction_hash),
            "transactionIndex": _json_or_none(self.transaction_index),
            "logIndex": _json_or_none(self.log_index),
            "transactionLogIndex": _json_or_none(self.transaction_log_index),
            "logType": self.log_type,
            "removed": self.removed,
        }


@dataclass(frozen=True)
class Topic(Generic[T]):
    """One position of a topic filter: any value, one value, or one of several."""

    kind: str = "any"
    values: tuple = ()

    def __post_init__(self) -> None:
        if self.kind not in _TOPIC_KINDS:
            raise ValueError(f"unknown topic kind {self.kind!r}")
        object.__setattr__(self, "values", tuple(self.values))
        if self.kind == "any" and self.values:
            raise ValueError("an `any` topic takes no values")
        if self.kind == "this" and len(self.values) != 1:
            raise ValueError("a `this` topic takes exactly one value")

    @classmethod
    def any(cls) -> Topic:
        return cls("any")

    @classmethod
    def this(cls, value: T) -> Topic:
        return cls("this", (value,))

    @classmethod
    def one_of(cls, values: Iterable[T]) -> Topic:
        return cls("one_of", tuple(values))

    def to_option(self) -> list[T] | None:
        """None for `any`, otherwise the list of accepted values."""
        if self.kind == "any":
            return None
        return list(self.values)


@dataclass(frozen=True)
class TopicFilter:
    """Four topic positions, as produced from an event description."""

    topic0: Topic = field(default_factory=Topic.any)
    topic1: Topic = field(default_factory=Topic.any)
    topic2: Topic = field(default_factory=Topic.any)
    topic3: Topic = field(default_factory=Topic.any)


def _value_or_array(items: tuple) -> Any:
    if not items:
        return None
    if len(items) == 1:
        return items[0].to_json()
    return [item.to_json() for item in items]


@dataclass(frozen=True)
class Filter:
    """A log filter for ``eth_getLogs`` and ``eth_newFilter``."""

    from_block: BlockNumber | None = None
    to_block: BlockNumber | None = None
    address: tuple[H160, ...] | None = None
    topics: tuple[tuple[H256, ...] | None, ...] | None = None
    limit: int | None = None

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.from_block is not None:
            out["fromBlock"] = self.from_block.to_json()
        if self.to_block is not None:
            out["toBlock"] = self.to_block.to_json()
        if self.address is not None:
            out["address"] = _value_or_array(self.address)
        if self.topics is not None:
            out["topics"] = [None if topic is None else _value_or_array(topic) for topic in self.topics]
        if self.limit is not None:
            out["limit"] = self.limit
        return out


class FilterBuilder:
    """Builds a :class:`Filter`; every setter returns a new builder."""

    __slots__ = ("_filter",)

    def __init__(self, filter: Filter | None = None) -> None:
        self._filter = filter if filter is not None else Filter()

    def _with(self, **changes: Any) -> FilterBuilder:
        return FilterBuilder(replace(self._filter, **changes))

    def from_block(self, block: BlockNumber) -> FilterBuilder:
        return self._with(from_block=block)

    def to_block(self, block: BlockNumber) -> FilterBuilder:
        return self._with(to_block=block)

    def address(self, address: Iterable[H160]) -> FilterBuilder:
        return self._with(address=tuple(address))

    def topics(
        self,
        topic1: Iterable[H256] | None,
        topic2: Iterable[H256] | None,
        topic3: Iterable[H256] | None,
        topic4: Iterable[H256] | None,
    ) -> FilterBuilder:
        """Set the four topic positions; trailing unset positions are dropped."""
        positions = [None if t is None else tuple(t) for t in (topic1, topic2, topic3, topic4)]
        while positions and positions[-1] is None:
            positions.pop()
        return self._with(topics=tuple(positions))

    def topic_filter(self, topic_filter: TopicFilter) -> FilterBuilder:
        return self.topics(
            topic_filter.topic0.to_option(),
            topic_filter.topic1.to_option(),
            topic_filter.topic2.to_option(),
            topic_filter.topic3.to_option(),
        )

    def limit(self, limit: int) -> FilterBuilder:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            raise ValueError("limit must be a non-negative integer")
        return self._with(limit=limit)

    def build(self) -> Filter:
        return self._filter