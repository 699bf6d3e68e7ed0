"""The syncing state reported by ``eth_syncing`` and the syncing subscription."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .uint import U256

_RPC_KEYS = ("startingBlock", "currentBlock", "highestBlock")
_SUBSCRIPTION_KEYS = ("StartingBlock", "CurrentBlock", "HighestBlock")


def _parse_info(value: Any, keys: tuple[str, str, str]) -> SyncInfo:
    if not isinstance(value, dict):
        raise ValueError(f"expected a JSON object for sync info, got {type(value).__name__}")
    for key in keys:
        if key not in value:
            raise ValueError(f"missing field `{key}`")
    starting, current, highest = (U256.from_json(value[key]) for key in keys)
    return SyncInfo(starting, current, highest)


@dataclass(frozen=True)
class SyncInfo:
    """Progress of an ongoing blockchain sync."""

    starting_block: U256
    current_block: U256
    highest_block: U256

    @classmethod
    def from_json(cls, value: Any) -> SyncInfo:
        return _parse_info(value, _RPC_KEYS)

    def to_json(self) -> dict[str, str]:
        return {
            "startingBlock": self.starting_block.to_json(),
            "currentBlock": self.current_block.to_json(),
            "highestBlock": self.highest_block.to_json(),
        }


@dataclass(frozen=True)
class SyncState:
    """Either syncing, with progress information, or not syncing."""

    info: SyncInfo | None = None

    @property
    def is_syncing(self) -> bool:
        return self.info is not None

    @classmethod
    def syncing(cls, info: SyncInfo) -> SyncState:
        return cls(info)

    @classmethod
    def not_syncing(cls) -> SyncState:
        return cls()

    @classmethod
    def from_json(cls, value: Any) -> SyncState:
        """Accept an RPC info object, a subscription object, or ``false``."""
        if isinstance(value, bool):
            if value:
                raise ValueError("expected object or `false`, got `true`")
            return cls.not_syncing()
        if isinstance(value, dict):
            try:
                return cls.syncing(SyncInfo.from_json(value))
            except ValueError:
                pass
            return cls._from_subscription(value)
        raise ValueError("data did not match any variant of untagged enum SyncStateVariants")

    @classmethod
    def _from_subscription(cls, value: dict) -> SyncState:
        syncing = value.get("syncing")
        if not isinstance(syncing, bool):
            raise ValueError("data did not match any variant of untagged enum SyncStateVariants")
        raw_status = value.get("status")
        status = None if raw_status is None else _parse_info(raw_status, _SUBSCRIPTION_KEYS)
        if status is None and not syncing:
            return cls.not_syncing()
        if status is not None and syncing:
            return cls.syncing(status)
        raise ValueError("expected object or `syncing = false`, got `syncing = true`")

    def to_json(self) -> Any:
        if self.info is None:
            return False
        return self.info.to_json()