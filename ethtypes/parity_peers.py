"""Peer information reported by a Parity node."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from .uint import U256

_U32_LIMIT = 1 << 32


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


def _text(raw: Any) -> str:
    if not isinstance(raw, str):
        raise ValueError(f"expected a string, got {type(raw).__name__}")
    return raw


def _count(raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
        raise ValueError(f"expected a non-negative integer, got {raw!r}")
    return raw


def _u32(raw: Any) -> int:
    value = _count(raw)
    if value >= _U32_LIMIT:
        raise ValueError(f"{value} does not fit in 32 bits")
    return value


def _list_of(parse_item: Callable[[Any], Any]) -> Callable[[Any], list]:
    def parse(raw: Any) -> list:
        if not isinstance(raw, list):
            raise ValueError(f"expected a JSON array, got {type(raw).__name__}")
        return [parse_item(item) for item in raw]

    return parse


def _json_or_none(value: Any) -> Any:
    return None if value is None else value.to_json()


@dataclass
class EthProtocolInfo:
    """The eth protocol version, difficulty and chain head of a peer."""

    version: int
    difficulty: U256 | None
    head: str

    @classmethod
    def from_json(cls, value: Any) -> EthProtocolInfo:
        obj = _object(value, "eth protocol info")
        return cls(
            version=_required(obj, "version", _u32),
            difficulty=_optional(obj, "difficulty", U256.from_json),
            head=_required(obj, "head", _text),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "difficulty": _json_or_none(self.difficulty),
            "head": self.head,
        }


@dataclass
class PipProtocolInfo:
    """The pip protocol version, difficulty and chain head of a peer."""

    version: int
    difficulty: U256
    head: str

    @classmethod
    def from_json(cls, value: Any) -> PipProtocolInfo:
        obj = _object(value, "pip protocol info")
        return cls(
            version=_required(obj, "version", _u32),
            difficulty=_required(obj, "difficulty", U256.from_json),
            head=_required(obj, "head", _text),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "difficulty": self.difficulty.to_json(),
            "head": self.head,
        }


@dataclass
class PeerProtocolsInfo:
    """The chain protocols a peer speaks."""

    eth: EthProtocolInfo | None = None
    pip: PipProtocolInfo | None = None

    @classmethod
    def from_json(cls, value: Any) -> PeerProtocolsInfo:
        obj = _object(value, "peer protocols")
        return cls(
            eth=_optional(obj, "eth", EthProtocolInfo.from_json),
            pip=_optional(obj, "pip", PipProtocolInfo.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {"eth": _json_or_none(self.eth), "pip": _json_or_none(self.pip)}


@dataclass
class PeerNetworkInfo:
    """The remote and local address of a connection."""

    remote_address: str
    local_address: str

    @classmethod
    def from_json(cls, value: Any) -> PeerNetworkInfo:
        obj = _object(value, "peer network info")
        return cls(
            remote_address=_required(obj, "remoteAddress", _text),
            local_address=_required(obj, "localAddress", _text),
        )

    def to_json(self) -> dict[str, Any]:
        return {"remoteAddress": self.remote_address, "localAddress": self.local_address}


@dataclass
class ParityPeerInfo:
    """Details of one peer."""

    id: str | None
    name: str
    caps: list[str]
    network: PeerNetworkInfo
    protocols: PeerProtocolsInfo

    @classmethod
    def from_json(cls, value: Any) -> ParityPeerInfo:
        obj = _object(value, "peer info")
        return cls(
            id=_optional(obj, "id", _text),
            name=_required(obj, "name", _text),
            caps=_required(obj, "caps", _list_of(_text)),
            network=_required(obj, "network", PeerNetworkInfo.from_json),
            protocols=_required(obj, "protocols", PeerProtocolsInfo.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "caps": list(self.caps),
            "network": self.network.to_json(),
            "protocols": self.protocols.to_json(),
        }


@dataclass
class ParityPeerType:
    """Active, connected and maximum peer counts, with every peer's details."""

    active: int
    connected: int
    max: int
    peers: list[ParityPeerInfo] = field(default_factory=list)

    @classmethod
    def from_json(cls, value: Any) -> ParityPeerType:
        obj = _object(value, "peer summary")
        return cls(
            active=_required(obj, "active", _count),
            connected=_required(obj, "connected", _count),
            max=_required(obj, "max", _u32),
            peers=_required(obj, "peers", _list_of(ParityPeerInfo.from_json)),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "active": self.active,
            "connected": self.connected,
            "max": self.max,
            "peers": [peer.to_json() for peer in self.peers],
        }